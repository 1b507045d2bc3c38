from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional
from uuid import uuid4

from fastapi import APIRouter, HTTPException

from jobsite.routes.reports import load_project
from jobsite.services.config import get_settings
from jobsite.services.metrics import client_portal, dashboard_metrics, pay_application
from jobsite.services.models import CamelModel, Meeting
from jobsite.services.project_store import project_store
from jobsite.services.risks import (
    AgendaEntry,
    IdentifiedRisk,
    agenda_risks,
    conclude_meeting,
    merge_identified_risks,
    set_risk_status,
)

router = APIRouter(prefix="/api/projects", tags=["projects"])


def utc_now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


class RiskStatusRequest(CamelModel):
    status: Literal["Accepted", "Rejected"]


class AgendaEntryRequest(CamelModel):
    update_text: str = ""
    status: Literal["In Progress", "Closed"] = "In Progress"


class ConcludeMeetingRequest(CamelModel):
    title: Optional[str] = None
    attendees: list[str] = []
    agenda: dict[str, AgendaEntryRequest] = {}


class IdentifiedRiskRequest(CamelModel):
    description: str
    category: str = "Other"
    severity: str = "Medium"
    mitigation_plan: str = ""


@router.get("")
async def list_projects() -> list[dict[str, Any]]:
    projects = await project_store.list_projects()
    return [
        {"id": p.id, "name": p.name, "clientName": p.client_name, "address": p.address}
        for p in projects
    ]


@router.get("/{project_id}")
async def get_project(project_id: str) -> dict[str, Any]:
    project = await load_project(project_id)
    return project.dump()


@router.get("/{project_id}/dashboard")
async def get_dashboard(project_id: str) -> dict[str, Any]:
    project = await load_project(project_id)
    contacts = await project_store.contacts()
    limit = get_settings().recent_activity_limit
    return dashboard_metrics(project, contacts, limit).dump()


@router.get("/{project_id}/client-portal")
async def get_client_portal(project_id: str) -> dict[str, Any]:
    project = await load_project(project_id)
    contacts = await project_store.contacts()
    return client_portal(project, contacts).dump()


@router.get("/{project_id}/pay-application")
async def get_pay_application(project_id: str) -> dict[str, Any]:
    project = await load_project(project_id)
    return pay_application(project.invoicing).dump()


@router.get("/{project_id}/risks/agenda")
async def get_agenda(project_id: str) -> list[dict[str, Any]]:
    project = await load_project(project_id)
    return [risk.dump() for risk in agenda_risks(project.risk_management.risks)]


@router.post("/{project_id}/risks/identified")
async def add_identified_risks(project_id: str, body: list[IdentifiedRiskRequest]) -> list[dict[str, Any]]:
    project = await load_project(project_id)
    candidates = [IdentifiedRisk(**row.model_dump()) for row in body]
    risk_management = project.risk_management.model_copy(
        update={"risks": merge_identified_risks(project.risk_management.risks, candidates, utc_now())}
    )
    await project_store.update(project_id, risk_management=risk_management)
    return [risk.dump() for risk in risk_management.risks]


@router.post("/{project_id}/risks/meetings")
async def post_meeting(project_id: str, body: ConcludeMeetingRequest) -> dict[str, Any]:
    project = await load_project(project_id)
    now = utc_now()
    meeting = Meeting(
        id=f"meeting-{uuid4().hex[:12]}",
        date=now,
        title=body.title or f"Weekly Sync - {now[:10]}",
        attendees=body.attendees or [project.client_name],
    )

    agenda = {risk.id: AgendaEntry() for risk in agenda_risks(project.risk_management.risks)}
    for risk_id, entry in body.agenda.items():
        if risk_id in agenda:
            agenda[risk_id] = AgendaEntry(update_text=entry.update_text, status=entry.status)

    risk_management = conclude_meeting(project.risk_management, meeting, agenda, now)
    await project_store.update(project_id, risk_management=risk_management)
    return risk_management.dump()


@router.post("/{project_id}/risks/{risk_id}/status")
async def post_risk_status(project_id: str, risk_id: str, body: RiskStatusRequest) -> dict[str, Any]:
    project = await load_project(project_id)
    risks = project.risk_management.risks
    if not any(risk.id == risk_id for risk in risks):
        raise HTTPException(status_code=404, detail="Risk not found")

    risk_management = project.risk_management.model_copy(
        update={"risks": set_risk_status(risks, risk_id, body.status)}
    )
    await project_store.update(project_id, risk_management=risk_management)
    return next(risk.dump() for risk in risk_management.risks if risk.id == risk_id)
