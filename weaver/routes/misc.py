"""
Miscellaneous routes: API info and health check.
"""

from fastapi import APIRouter

from .. import __version__
from ..config import state

router = APIRouter(tags=["misc"])


@router.get("/")
async def root() -> dict:
    return {"name": "Insight Weaver API", "version": __version__, "status": "ok"}


@router.get("/health")
async def health_check() -> dict:
    """API health check."""
    return {
        "status": "ok",
        "version": __version__,
        "summarization_enabled": state.summarizer is not None,
        "search_backend": state.search_index.name if state.search_index else None,
        "scheduler_running": bool(state.scheduler and state.scheduler.running),
    }
