"""
Report and workspace exporters.

Formats:
- json: structured document (returned as a dict)
- html: self-contained page with inline styles
- csv: one row per item, string fields quoted with embedded quotes doubled
"""

import csv
import html
import io
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from fastapi.responses import JSONResponse, Response

from .database import DBReport, DBWorkspaceItem
from .exceptions import UnsupportedFormatError
from .schemas import WorkspaceItemResponse

SUPPORTED_FORMATS = ("json", "html", "csv")
WORKSPACE_FORMATS = ("json", "csv")

REPORT_CSV_HEADERS = ["Order", "Title", "Category", "Published Date", "URL", "Content", "Analysis"]
WORKSPACE_CSV_HEADERS = [
    "Order", "Title", "Category", "Published Date", "URL", "Content", "Custom Analysis", "Is Edited",
]

_HTML_STYLE = """
        body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
        .header { border-bottom: 2px solid #ccc; padding-bottom: 20px; margin-bottom: 30px; }
        .item { margin-bottom: 30px; border-left: 4px solid #007cba; padding-left: 20px; }
        .title { font-size: 1.2em; font-weight: bold; margin-bottom: 10px; }
        .meta { color: #666; font-size: 0.9em; margin-bottom: 15px; }
        .content { line-height: 1.6; }
        .analysis { background: #f0f8ff; padding: 15px; margin-top: 15px; border-radius: 5px; }
"""


@dataclass
class ExportDocument:
    """A rendered export ready to send."""
    content: str | dict
    media_type: str
    filename: str | None = None

    def to_response(self) -> Response:
        """JSON inline; other formats as a file download."""
        if isinstance(self.content, dict):
            return JSONResponse(self.content)
        headers = {}
        if self.filename:
            headers["Content-Disposition"] = f'attachment; filename="{self.filename}"'
        return Response(content=self.content, media_type=self.media_type, headers=headers)


def safe_filename(title: str, extension: str) -> str:
    """Report title with every non-alphanumeric character replaced by '_'."""
    return f"{re.sub(r'[^a-zA-Z0-9]', '_', title)}.{extension}"


def _date(value: datetime) -> str:
    return value.date().isoformat()


def _write_csv(headers: list[str], rows: list[list]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


# ─────────────────────────────────────────────────────────────
# Reports
# ─────────────────────────────────────────────────────────────

def report_items(report: DBReport) -> list[dict]:
    """
    Flatten a report's items into export records.

    Content is the workspace item's custom content when set, otherwise the
    article's current content. Orders are 1-based positions.
    """
    records = []
    for position, report_item in enumerate(report.items, start=1):
        item = report_item.workspace_item
        article = item.article
        records.append({
            "order": position,
            "title": article.title,
            "category": article.category,
            "publishedDate": article.published_at.isoformat(),
            "url": article.url,
            "summary": article.summary,
            "content": item.custom_content if item.custom_content is not None else article.content,
            "analysis": item.custom_analysis,
            "isEdited": item.is_edited,
            "author": article.author,
            "_published": article.published_at,
        })
    return records


def report_to_json(report: DBReport, exported_at: datetime | None = None) -> dict:
    exported_at = exported_at or datetime.now(timezone.utc)
    items = [{k: v for k, v in r.items() if not k.startswith("_")} for r in report_items(report)]
    return {
        "report": {
            "id": report.id,
            "title": report.title,
            "description": report.description,
            "status": report.status,
            "createdAt": report.created_at.isoformat(),
            "updatedAt": report.updated_at.isoformat(),
            "exportedAt": exported_at.isoformat(),
        },
        "items": items,
        "metadata": {
            "totalItems": len(items),
            "exportFormat": "json",
        },
    }


def report_to_html(report: DBReport, exported_at: datetime | None = None) -> str:
    exported_at = exported_at or datetime.now(timezone.utc)
    sections = []
    for record in report_items(report):
        content = html.escape(record["content"] or "").replace("\n", "<br>")
        analysis = ""
        if record["analysis"]:
            analysis = (
                '\n            <div class="analysis"><strong>Analysis:</strong> '
                f"{html.escape(record['analysis'])}</div>"
            )
        sections.append(f"""
        <div class="item">
            <div class="title">{record['order']}. {html.escape(record['title'])}</div>
            <div class="meta">{html.escape(record['category'] or '')} &bull; {_date(record['_published'])}</div>
            <div class="content">{content}</div>{analysis}
        </div>""")

    title = html.escape(report.title)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>{_HTML_STYLE}    </style>
</head>
<body>
    <div class="header">
        <h1>{title}</h1>
        <p>Generated on {_date(exported_at)}</p>
    </div>
{''.join(sections)}
</body>
</html>
"""


def report_to_csv(report: DBReport) -> str:
    rows = [
        [
            record["order"],
            record["title"],
            record["category"] or "",
            _date(record["_published"]),
            record["url"],
            record["content"] or "",
            record["analysis"] or "",
        ]
        for record in report_items(report)
    ]
    return _write_csv(REPORT_CSV_HEADERS, rows)


def export_report(report: DBReport, fmt: str) -> ExportDocument:
    """
    Render a report in the requested format.

    Raises:
        UnsupportedFormatError: If fmt is not json, html or csv
    """
    fmt = (fmt or "json").lower()
    if fmt == "json":
        return ExportDocument(report_to_json(report), "application/json")
    if fmt == "html":
        return ExportDocument(
            report_to_html(report), "text/html", safe_filename(report.title, "html")
        )
    if fmt == "csv":
        return ExportDocument(
            report_to_csv(report), "text/csv", safe_filename(report.title, "csv")
        )
    raise UnsupportedFormatError(f"Supported formats: {', '.join(SUPPORTED_FORMATS)}")


# ─────────────────────────────────────────────────────────────
# Workspace
# ─────────────────────────────────────────────────────────────

def export_workspace(items: list[DBWorkspaceItem], fmt: str) -> ExportDocument:
    """
    Render the workspace as json or csv.

    Raises:
        UnsupportedFormatError: If fmt is not json or csv
    """
    fmt = (fmt or "json").lower()
    items = [item for item in items if item.article is not None]

    if fmt == "json":
        return ExportDocument(
            {
                "workspace": {
                    "items": [
                        WorkspaceItemResponse.from_db(item).model_dump(by_alias=True)
                        for item in items
                    ],
                    "exportedAt": datetime.now(timezone.utc).isoformat(),
                    "totalItems": len(items),
                }
            },
            "application/json",
        )

    if fmt == "csv":
        rows = [
            [
                item.order_index,
                item.article.title,
                item.article.category or "",
                _date(item.article.published_at),
                item.article.url,
                item.custom_content if item.custom_content is not None else item.article.content,
                item.custom_analysis or "",
                "Yes" if item.is_edited else "No",
            ]
            for item in items
        ]
        return ExportDocument(
            _write_csv(WORKSPACE_CSV_HEADERS, rows), "text/csv", "workspace-export.csv"
        )

    raise UnsupportedFormatError(f"Supported formats: {', '.join(WORKSPACE_FORMATS)}")
