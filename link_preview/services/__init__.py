from link_preview.services.metadata import (
    BodyReadError,
    FetchError,
    MetadataService,
    NetworkError,
    extract_metadata,
    fetch_link_metadata,
)

__all__ = [
    "BodyReadError",
    "FetchError",
    "MetadataService",
    "NetworkError",
    "extract_metadata",
    "fetch_link_metadata",
]
