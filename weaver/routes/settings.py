"""
Settings routes: AI and refresh configuration, categories, statistics.
"""

from fastapi import APIRouter

from ..schemas import (
    AITestResponse,
    MessageResponse,
    SettingsResponse,
    SettingsUpdateRequest,
    StatsResponse,
)
from ..services import SettingsServiceDep

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model_exclude_none=True)
async def get_settings(service: SettingsServiceDep) -> SettingsResponse:
    """Get application settings."""
    return SettingsResponse.model_validate(service.get_settings())


@router.patch("")
async def update_settings(
    request: SettingsUpdateRequest,
    service: SettingsServiceDep
) -> MessageResponse:
    """Update any subset of settings."""
    ai = request.ai.model_dump(exclude_unset=True) if request.ai else None
    general = request.model_dump(exclude_unset=True, exclude={"ai"})
    service.update_settings(ai, general)
    return MessageResponse(success=True, message="Settings updated successfully")


@router.post("/test-ai")
async def test_ai(service: SettingsServiceDep) -> AITestResponse:
    """Check the AI provider with a short test summary."""
    return AITestResponse(**await service.test_ai())


@router.get("/categories")
async def get_categories(service: SettingsServiceDep) -> list[str]:
    """Distinct feed categories, alphabetically."""
    return service.get_categories()


@router.get("/stats")
async def get_stats(service: SettingsServiceDep) -> StatsResponse:
    return StatsResponse.model_validate(service.get_stats())


@router.post("/reset")
async def reset_settings(service: SettingsServiceDep) -> MessageResponse:
    service.reset_settings()
    return MessageResponse(success=True, message="Settings reset to defaults successfully")
