"""
Feed routes: subscription management and refresh.
"""

from fastapi import APIRouter, BackgroundTasks

from ..schemas import (
    CreateFeedRequest,
    FeedResponse,
    FetchResultResponse,
    MessageResponse,
    UpdateFeedRequest,
)
from ..services import FeedServiceDep

router = APIRouter(prefix="/feeds", tags=["feeds"])


# ─────────────────────────────────────────────────────────────
# Feed Management
# ─────────────────────────────────────────────────────────────

@router.get("")
async def list_feeds(service: FeedServiceDep) -> list[FeedResponse]:
    """List all subscribed feeds."""
    return [FeedResponse.from_db(f) for f in service.list_feeds()]


@router.post("", status_code=201)
async def create_feed(
    request: CreateFeedRequest,
    service: FeedServiceDep,
    background_tasks: BackgroundTasks
) -> FeedResponse:
    """Subscribe to a new feed; its first fetch runs in the background."""
    feed = service.create_feed(
        request.name,
        request.url,
        background_tasks,
        category=request.category,
        is_active=request.is_active,
    )
    return FeedResponse.from_db(feed)


# Static paths are registered before /{feed_id}
@router.post("/refresh-all")
async def refresh_all(
    service: FeedServiceDep,
    background_tasks: BackgroundTasks
) -> MessageResponse:
    """Trigger a refresh of every active feed (runs in background)."""
    return MessageResponse(**service.refresh_all(background_tasks))


@router.get("/{feed_id}")
async def get_feed(feed_id: str, service: FeedServiceDep) -> FeedResponse:
    return FeedResponse.from_db(service.get_feed(feed_id))


@router.patch("/{feed_id}")
async def update_feed(
    feed_id: str,
    request: UpdateFeedRequest,
    service: FeedServiceDep
) -> FeedResponse:
    """Update a feed's name, URL, category or active flag."""
    feed = service.update_feed(feed_id, request.model_dump(exclude_unset=True))
    return FeedResponse.from_db(feed)


@router.delete("/{feed_id}")
async def delete_feed(feed_id: str, service: FeedServiceDep) -> dict:
    """Unsubscribe from a feed, removing its articles."""
    service.delete_feed(feed_id)
    return {"success": True}


# ─────────────────────────────────────────────────────────────
# Refresh
# ─────────────────────────────────────────────────────────────

@router.post("/{feed_id}/refresh")
async def refresh_feed(feed_id: str, service: FeedServiceDep) -> FetchResultResponse:
    """Fetch one feed now and report how many articles were added."""
    result = await service.refresh_feed(feed_id)
    return FetchResultResponse(
        success=result.success,
        articles_added=result.articles_added,
        error=result.error,
    )
