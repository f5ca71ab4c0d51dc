from typing import Annotated

from fastapi import APIRouter, Depends

from link_preview.api.deps import get_app_settings
from link_preview.config import Settings

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/is-dev")
async def is_dev(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> dict[str, bool]:
    return {"is_dev": settings.debug}
