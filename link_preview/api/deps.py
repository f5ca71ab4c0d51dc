from fastapi import Depends

from link_preview.config import Settings, get_settings
from link_preview.services.metadata import MetadataService


def get_app_settings() -> Settings:
    return get_settings()


def get_metadata_service(
    settings: Settings = Depends(get_app_settings),
) -> MetadataService:
    return MetadataService(settings=settings)
