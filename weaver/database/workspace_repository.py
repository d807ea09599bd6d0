"""
Workspace repository - the curator's ordered selection of articles.
"""

import uuid

from .connection import DatabaseConnection
from .converters import article_select, row_to_workspace_item, to_timestamp, utc_now
from .models import DBWorkspaceItem


class WorkspaceRepository:
    """Repository for workspace items."""

    EDITABLE = ("custom_content", "custom_analysis")

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def _select(self, where: str = "") -> str:
        return f"""
            SELECT w.*, {article_select()}
            FROM workspace_items w
            JOIN articles a ON a.id = w.article_id
            {where}
        """

    def add(self, article_id: str) -> DBWorkspaceItem | None:
        """
        Append an article at the end of the workspace.

        The next order and the uniqueness check happen in one statement, so
        concurrent adds of the same article cannot both succeed. Returns None
        when the article is already in the workspace.
        """
        item_id = str(uuid.uuid4())
        now = to_timestamp(utc_now())
        with self._db.conn() as conn:
            cursor = conn.execute(
                """INSERT INTO workspace_items
                   (id, article_id, order_index, is_edited, created_at, updated_at)
                   SELECT ?, ?, COALESCE(MAX(order_index), -1) + 1, FALSE, ?, ?
                   FROM workspace_items WHERE TRUE
                   ON CONFLICT(article_id) DO NOTHING""",
                (item_id, article_id, now, now)
            )
            if cursor.rowcount == 0:
                return None
        return self.get(item_id)

    def get(self, item_id: str) -> DBWorkspaceItem | None:
        """Get a workspace item with its article."""
        with self._db.conn() as conn:
            row = conn.execute(self._select("WHERE w.id = ?"), (item_id,)).fetchone()
            return row_to_workspace_item(row, with_article=True) if row else None

    def get_all(self) -> list[DBWorkspaceItem]:
        """All workspace items with their articles, in workspace order."""
        with self._db.conn() as conn:
            rows = conn.execute(
                self._select("ORDER BY w.order_index ASC, w.created_at ASC")
            ).fetchall()
            return [row_to_workspace_item(row, with_article=True) for row in rows]

    def update(self, item_id: str, fields: dict) -> DBWorkspaceItem | None:
        """
        Patch custom content/analysis.

        Any provided editable key (including an explicit None) marks the item
        as edited; keys not in ``fields`` are left alone.
        """
        updates = {k: v for k, v in fields.items() if k in self.EDITABLE}
        if updates:
            assignments = ", ".join(f"{column} = ?" for column in updates)
            with self._db.conn() as conn:
                conn.execute(
                    f"UPDATE workspace_items SET {assignments}, is_edited = TRUE WHERE id = ?",
                    (*updates.values(), item_id)
                )
        return self.get(item_id)

    def delete(self, item_id: str) -> bool:
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM workspace_items WHERE id = ?", (item_id,))
            return cursor.rowcount > 0

    def reorder(self, item_ids: list[str]) -> int:
        """Set each listed item's order to its list position. Returns rows touched."""
        with self._db.conn() as conn:
            cursor = conn.executemany(
                "UPDATE workspace_items SET order_index = ? WHERE id = ?",
                [(position, item_id) for position, item_id in enumerate(item_ids)]
            )
            return cursor.rowcount

    def clear(self) -> int:
        with self._db.conn() as conn:
            return conn.execute("DELETE FROM workspace_items").rowcount
