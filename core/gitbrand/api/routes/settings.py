"""Settings and profile API routes."""

from fastapi import APIRouter

from gitbrand.api.orchestrator_store import get_orchestrator, get_settings
from gitbrand.api.schemas import ProfileSchema, ScoreResponse, SettingsUpdateRequest
from gitbrand.portfolio.scoring import calculate_profile_score
from gitbrand.utils.logging import logger

router = APIRouter(tags=["settings"])


@router.get("/settings")
async def read_settings():
    """Current settings with secrets masked."""
    store = await get_settings()
    return store.to_dict()


@router.put("/settings")
async def update_settings(request: SettingsUpdateRequest):
    store = await get_settings()
    changes = request.model_dump(exclude_none=True)
    if changes:
        store.update(changes)
        orch = await get_orchestrator()
        orch.update_context(store.to_context())
        logger.info(f"Updated settings: {', '.join(sorted(changes))}")
    return store.to_dict()


@router.delete("/settings")
async def reset_settings():
    store = await get_settings()
    store.reset()
    orch = await get_orchestrator()
    orch.update_context(store.to_context())
    return store.to_dict()


@router.get("/profile")
async def get_profile():
    orch = await get_orchestrator()
    profile = await orch.portfolio.refresh_profile(orch.context)
    return {
        "profile": ProfileSchema(**profile.to_dict()) if profile else None,
        "avatar_url": orch.portfolio.avatar_url,
        "profile_url": orch.context.profile_url,
    }


@router.get("/profile/score", response_model=ScoreResponse)
async def get_profile_score():
    orch = await get_orchestrator()
    profile = await orch.portfolio.refresh_profile(orch.context)
    return calculate_profile_score(profile).to_dict()
