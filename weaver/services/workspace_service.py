"""
Workspace service: the ordered list of articles a curator is working on.
"""

from ..database import Database
from ..database.models import DBWorkspaceItem
from ..exceptions import APIError, UnsupportedFormatError, require_article, require_workspace_item
from ..export import ExportDocument, export_workspace


class WorkspaceService:
    """Service for workspace business logic."""

    def __init__(self, db: Database):
        self.db = db

    def list_items(self) -> list[DBWorkspaceItem]:
        return self.db.get_workspace_items()

    def add_item(self, article_id: str | None) -> DBWorkspaceItem:
        """
        Append an article to the end of the workspace.

        Raises:
            HTTPException: 400 without an article id, 404 for an unknown
                article, 409 if the article is already in the workspace
        """
        if not article_id:
            raise APIError(400, "Missing article ID", "Article ID is required")
        require_article(self.db.get_article(article_id))

        item = self.db.add_workspace_item(article_id)
        if item is None:
            raise APIError(
                409,
                "Article already in workspace",
                "This article is already added to the workspace",
            )
        return item

    def update_item(self, item_id: str, fields: dict) -> DBWorkspaceItem:
        """Patch custom content/analysis; any provided field marks the item edited."""
        require_workspace_item(self.db.get_workspace_item(item_id))
        return require_workspace_item(self.db.update_workspace_item(item_id, fields))

    def remove_item(self, item_id: str) -> None:
        if not self.db.delete_workspace_item(item_id):
            require_workspace_item(None)

    def reorder(self, item_ids: list[str]) -> None:
        """Each listed id takes its list position as order; unlisted items keep theirs."""
        self.db.reorder_workspace(item_ids)

    def clear(self) -> int:
        return self.db.clear_workspace()

    def export(self, fmt: str) -> ExportDocument:
        try:
            return export_workspace(self.db.get_workspace_items(), fmt)
        except UnsupportedFormatError as e:
            raise APIError(400, "Unsupported format", str(e))
