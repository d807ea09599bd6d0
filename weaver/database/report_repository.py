"""
Report repository - reports and their frozen list of workspace items.
"""

import uuid

from .connection import DatabaseConnection
from .converters import article_select, row_to_report, row_to_report_item, to_timestamp, utc_now
from .models import DBReport


class ReportRepository:
    """Repository for reports and report items."""

    UPDATABLE = ("title", "description", "status")

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def create(
        self,
        title: str,
        description: str | None = None,
        status: str = "draft",
        copy_workspace: bool = False,
    ) -> DBReport | None:
        """
        Create a report, optionally linking every current workspace item.

        The report row and the snapshot of workspace membership are written in
        one transaction; linked items get orders 0..n-1 following the
        workspace order at this moment.
        """
        report_id = str(uuid.uuid4())
        now = to_timestamp(utc_now())
        with self._db.conn() as conn:
            conn.execute(
                """INSERT INTO reports (id, title, description, status, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (report_id, title, description, status, now, now)
            )
            if copy_workspace:
                rows = conn.execute(
                    "SELECT id FROM workspace_items ORDER BY order_index ASC, created_at ASC"
                ).fetchall()
                conn.executemany(
                    """INSERT INTO report_items
                       (id, report_id, workspace_item_id, order_index, created_at)
                       VALUES (?, ?, ?, ?, ?)""",
                    [
                        (str(uuid.uuid4()), report_id, row["id"], position, now)
                        for position, row in enumerate(rows)
                    ]
                )
        return self.get(report_id)

    def get(self, report_id: str) -> DBReport | None:
        """Get a report with its items joined to live workspace/article content."""
        with self._db.conn() as conn:
            row = conn.execute("SELECT * FROM reports WHERE id = ?", (report_id,)).fetchone()
            if not row:
                return None
            report = row_to_report(row)
            item_rows = conn.execute(
                f"""SELECT ri.*,
                           w.article_id,
                           w.order_index AS w_order_index,
                           w.custom_content,
                           w.custom_analysis,
                           w.is_edited,
                           w.created_at AS w_created_at,
                           w.updated_at AS w_updated_at,
                           {article_select()}
                    FROM report_items ri
                    JOIN workspace_items w ON w.id = ri.workspace_item_id
                    JOIN articles a ON a.id = w.article_id
                    WHERE ri.report_id = ?
                    ORDER BY ri.order_index ASC""",
                (report_id,)
            ).fetchall()
            report.items = [row_to_report_item(r) for r in item_rows]
            return report

    def get_all(self) -> list[DBReport]:
        """All reports, most recently updated first. Items are not loaded."""
        with self._db.conn() as conn:
            rows = conn.execute("SELECT * FROM reports ORDER BY updated_at DESC").fetchall()
            return [row_to_report(row) for row in rows]

    def update(self, report_id: str, fields: dict) -> DBReport | None:
        updates = {k: v for k, v in fields.items() if k in self.UPDATABLE}
        if updates:
            assignments = ", ".join(f"{column} = ?" for column in updates)
            with self._db.conn() as conn:
                conn.execute(
                    f"UPDATE reports SET {assignments} WHERE id = ?",
                    (*updates.values(), report_id)
                )
        return self.get(report_id)

    def delete(self, report_id: str) -> bool:
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM reports WHERE id = ?", (report_id,))
            return cursor.rowcount > 0
