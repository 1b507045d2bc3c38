from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Response

from jobsite.services.canned_reports import CannedReportKind, describe_canned_reports, run_canned_report
from jobsite.services.csv_export import result_table_csv
from jobsite.services.field_catalog import describe_catalog
from jobsite.services.models import CustomReport, Project
from jobsite.services.project_store import project_store
from jobsite.services.report_store import remove_custom_report, upsert_custom_report, validate_report_config
from jobsite.services.reporting import process_report

catalog_router = APIRouter(prefix="/api/reports", tags=["reports"])
router = APIRouter(prefix="/api/projects/{project_id}/reports", tags=["reports"])


@catalog_router.get("/sources")
async def list_sources() -> list[dict[str, Any]]:
    return describe_catalog()


@catalog_router.get("/canned")
async def list_canned_reports() -> list[dict[str, str]]:
    return describe_canned_reports()


async def load_project(project_id: str) -> Project:
    project = await project_store.get(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def find_custom_report(project: Project, report_id: str) -> CustomReport:
    for report in project.custom_reports:
        if report.id == report_id:
            return report
    raise HTTPException(status_code=404, detail="Custom report not found")


def require_valid(config: CustomReport) -> None:
    errors = validate_report_config(config)
    if errors:
        raise HTTPException(status_code=422, detail=errors)


@router.get("")
async def list_reports(project_id: str) -> dict[str, Any]:
    project = await load_project(project_id)
    return {
        "canned": describe_canned_reports(),
        "custom": [report.dump() for report in project.custom_reports],
    }


@router.post("/run")
async def run_report(project_id: str, config: CustomReport) -> dict[str, Any]:
    project = await load_project(project_id)
    require_valid(config)
    return process_report(project, config).dump()


@router.get("/canned/{kind}")
async def run_canned(project_id: str, kind: CannedReportKind) -> dict[str, Any]:
    project = await load_project(project_id)
    return run_canned_report(project, kind).dump()


@router.get("/custom/{report_id}")
async def run_custom(project_id: str, report_id: str) -> dict[str, Any]:
    project = await load_project(project_id)
    report = find_custom_report(project, report_id)
    return process_report(project, report).dump()


@router.get("/custom/{report_id}/csv")
async def export_custom(project_id: str, report_id: str) -> Response:
    project = await load_project(project_id)
    report = find_custom_report(project, report_id)
    return result_table_csv(process_report(project, report), f"{report_id}.csv")


@router.put("/custom/{report_id}")
async def save_custom(project_id: str, report_id: str, body: CustomReport) -> dict[str, Any]:
    project = await load_project(project_id)
    report = body.model_copy(update={"id": report_id})
    require_valid(report)

    updated = await project_store.update(
        project_id, custom_reports=upsert_custom_report(project.custom_reports, report)
    )
    if updated is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return report.dump()


@router.delete("/custom/{report_id}")
async def delete_custom(project_id: str, report_id: str) -> dict[str, str]:
    project = await load_project(project_id)
    find_custom_report(project, report_id)

    await project_store.update(
        project_id, custom_reports=remove_custom_report(project.custom_reports, report_id)
    )
    return {"status": "ok", "deleted": report_id}
