"""
Report service: composing reports from the workspace and exporting them.
"""

from fastapi import HTTPException

from ..database import Database
from ..database.models import DBReport
from ..exceptions import APIError, UnsupportedFormatError, require_report
from ..export import ExportDocument, export_report


class ReportService:
    """Service for report business logic."""

    def __init__(self, db: Database):
        self.db = db

    def list_reports(self) -> list[DBReport]:
        """Reports by most recent update; items are not loaded."""
        return self.db.get_reports()

    def get_report(self, report_id: str) -> DBReport:
        return require_report(self.db.get_report(report_id))

    def create_report(
        self,
        title: str | None,
        description: str | None = None,
        status: str = "draft",
        copy_workspace: bool = False,
    ) -> DBReport:
        """
        Create a report, optionally snapshotting current workspace membership.

        Raises:
            HTTPException: 400 if the title is missing or blank
        """
        title = (title or "").strip()
        if not title:
            raise APIError(400, "Missing title", "Report title is required")

        report = self.db.create_report(
            title,
            description=description.strip() if description else description,
            status=status or "draft",
            copy_workspace=copy_workspace,
        )
        if not report:
            raise HTTPException(status_code=500, detail="Failed to retrieve report")
        return report

    def update_report(self, report_id: str, fields: dict) -> DBReport:
        """
        Patch title, description or status.

        Raises:
            HTTPException: 400 on an empty patch or blank title, 404 if missing
        """
        if not fields:
            raise APIError(400, "No updates provided", "At least one field must be updated")
        if "title" in fields:
            title = (fields["title"] or "").strip()
            if not title:
                raise APIError(400, "Missing title", "Report title cannot be empty")
            fields["title"] = title
        if "status" in fields and fields["status"] is None:
            raise APIError(400, "Invalid status", "Status must be draft or published")

        require_report(self.db.get_report(report_id))
        return require_report(self.db.update_report(report_id, fields))

    def delete_report(self, report_id: str) -> None:
        if not self.db.delete_report(report_id):
            require_report(None)

    def export(self, report_id: str, fmt: str) -> ExportDocument:
        report = require_report(self.db.get_report(report_id))
        try:
            return export_report(report, fmt)
        except UnsupportedFormatError as e:
            raise APIError(400, "Unsupported format", str(e))
