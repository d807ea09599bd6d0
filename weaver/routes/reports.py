"""
Report routes: CRUD over reports built from the workspace, plus export.
"""

from fastapi import APIRouter, Query
from fastapi.responses import Response

from ..schemas import CreateReportRequest, ReportResponse, UpdateReportRequest
from ..services import ReportServiceDep

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("")
async def list_reports(service: ReportServiceDep) -> list[ReportResponse]:
    """All reports, most recently updated first (without items)."""
    return [ReportResponse.from_db(r) for r in service.list_reports()]


@router.post("", status_code=201)
async def create_report(request: CreateReportRequest, service: ReportServiceDep) -> ReportResponse:
    """Create a report; with copyWorkspace the current workspace becomes its items."""
    report = service.create_report(
        request.title,
        description=request.description,
        status=request.status,
        copy_workspace=request.copy_workspace,
    )
    return ReportResponse.from_db(report)


@router.get("/{report_id}")
async def get_report(report_id: str, service: ReportServiceDep) -> ReportResponse:
    return ReportResponse.from_db(service.get_report(report_id))


@router.patch("/{report_id}")
async def update_report(
    report_id: str,
    request: UpdateReportRequest,
    service: ReportServiceDep
) -> ReportResponse:
    report = service.update_report(report_id, request.model_dump(exclude_unset=True))
    return ReportResponse.from_db(report)


@router.delete("/{report_id}")
async def delete_report(report_id: str, service: ReportServiceDep) -> dict:
    service.delete_report(report_id)
    return {"success": True}


@router.get("/{report_id}/export")
async def export_report(
    report_id: str,
    service: ReportServiceDep,
    format: str = Query(default="json")
) -> Response:
    """Export a report as json, html or csv."""
    return service.export(report_id, format).to_response()
