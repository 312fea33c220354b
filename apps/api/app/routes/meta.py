"""Service metadata route."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.config import Settings
from app.routes.dependencies import get_app_settings
from app.schemas.movie import ServiceInfo

router = APIRouter(tags=["Meta"])


@router.get("/", response_model=ServiceInfo)
async def service_info(settings: Annotated[Settings, Depends(get_app_settings)]) -> ServiceInfo:
    return ServiceInfo(version=settings.api_version)
