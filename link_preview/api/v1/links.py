from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from link_preview.api.deps import get_metadata_service
from link_preview.schemas import LinkMetadata, LinkMetadataRequest
from link_preview.services.metadata import FetchError, MetadataService

router = APIRouter(prefix="/links", tags=["links"])

logger = structlog.get_logger(__name__)


@router.post("/metadata", response_model=LinkMetadata)
async def fetch_link_metadata(
    payload: LinkMetadataRequest,
    service: Annotated[MetadataService, Depends(get_metadata_service)],
) -> LinkMetadata:
    """Fetch a page and return its link preview."""
    try:
        return await service.extract(payload.url)
    except FetchError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc
