"""
Workspace routes: the curated, ordered article list and its export.
"""

from fastapi import APIRouter, Query
from fastapi.responses import Response

from ..schemas import (
    AddWorkspaceItemRequest,
    MessageResponse,
    ReorderWorkspaceRequest,
    UpdateWorkspaceItemRequest,
    WorkspaceItemResponse,
)
from ..services import WorkspaceServiceDep

router = APIRouter(prefix="/workspace", tags=["workspace"])


# ─────────────────────────────────────────────────────────────
# Items
# ─────────────────────────────────────────────────────────────

@router.get("/items")
async def list_items(service: WorkspaceServiceDep) -> list[WorkspaceItemResponse]:
    """Workspace items in order, each with its article."""
    return [WorkspaceItemResponse.from_db(i) for i in service.list_items()]


@router.post("/items", status_code=201)
async def add_item(
    request: AddWorkspaceItemRequest,
    service: WorkspaceServiceDep
) -> WorkspaceItemResponse:
    """Append an article to the end of the workspace."""
    return WorkspaceItemResponse.from_db(service.add_item(request.article_id))


@router.patch("/items/{item_id}")
async def update_item(
    item_id: str,
    request: UpdateWorkspaceItemRequest,
    service: WorkspaceServiceDep
) -> WorkspaceItemResponse:
    """Edit an item's custom content or analysis."""
    item = service.update_item(item_id, request.model_dump(exclude_unset=True))
    return WorkspaceItemResponse.from_db(item)


@router.delete("/items/{item_id}")
async def remove_item(item_id: str, service: WorkspaceServiceDep) -> dict:
    service.remove_item(item_id)
    return {"success": True}


# ─────────────────────────────────────────────────────────────
# Bulk Operations
# ─────────────────────────────────────────────────────────────

@router.post("/reorder")
async def reorder(request: ReorderWorkspaceRequest, service: WorkspaceServiceDep) -> dict:
    """Set each listed item's order to its position in the list."""
    service.reorder(request.item_ids)
    return {"success": True}


@router.get("/export")
async def export_workspace(
    service: WorkspaceServiceDep,
    format: str = Query(default="json")
) -> Response:
    """Export the workspace as json or csv."""
    return service.export(format).to_response()


@router.post("/clear")
async def clear_workspace(service: WorkspaceServiceDep) -> MessageResponse:
    service.clear()
    return MessageResponse(success=True, message="Workspace cleared")
