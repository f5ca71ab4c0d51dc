from link_preview.schemas.link import LinkMetadata, LinkMetadataRequest

__all__ = [
    "LinkMetadata",
    "LinkMetadataRequest",
]
