from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional
from uuid import uuid4

from jobsite.services.models import AgendaUpdate, Meeting, RiskItem, RiskManagement


@dataclass(frozen=True)
class AgendaEntry:
    update_text: str = ""
    status: Literal["In Progress", "Closed"] = "In Progress"


@dataclass(frozen=True)
class IdentifiedRisk:
    description: str
    category: str = "Other"
    severity: str = "Medium"
    mitigation_plan: str = ""


def latest_update_status(risk: RiskItem) -> Optional[str]:
    return risk.updates[-1].status if risk.updates else None


def agenda_risks(risks: list[RiskItem]) -> list[RiskItem]:
    """Risks carried onto the next meeting agenda."""
    return [r for r in risks if r.status == "Accepted" and latest_update_status(r) != "Closed"]


def set_risk_status(risks: list[RiskItem], risk_id: str, status: Literal["Accepted", "Rejected"]) -> list[RiskItem]:
    return [r.model_copy(update={"status": status}) if r.id == risk_id else r for r in risks]


def merge_identified_risks(risks: list[RiskItem], candidates: list[IdentifiedRisk], now: str) -> list[RiskItem]:
    known = {r.description for r in risks}
    added: list[RiskItem] = []
    for candidate in candidates:
        if candidate.description in known:
            continue
        known.add(candidate.description)
        added.append(
            RiskItem(
                id=f"risk-{uuid4().hex[:12]}",
                description=candidate.description,
                category=candidate.category,
                severity=candidate.severity,
                mitigation_plan=candidate.mitigation_plan,
                status="Pending",
                created_at=now,
            )
        )
    return [*risks, *added]


def conclude_meeting(
    risk_management: RiskManagement,
    meeting: Meeting,
    agenda: dict[str, AgendaEntry],
    now: str,
) -> RiskManagement:
    """Record one agenda update per discussed risk and archive the meeting.

    A risk with no update text is carried over, unless it was already closed.
    """
    risks: list[RiskItem] = []
    for risk in risk_management.risks:
        entry = agenda.get(risk.id)
        if entry is None:
            risks.append(risk)
            continue

        if entry.update_text:
            status = entry.status
        elif latest_update_status(risk) == "Closed":
            status = "Closed"
        else:
            status = "Carried Over"

        update = AgendaUpdate(meeting_id=meeting.id, timestamp=now, update_text=entry.update_text, status=status)
        risks.append(
            risk.model_copy(
                update={
                    "updates": [*risk.updates, update],
                    "status": "Closed" if status == "Closed" else "Accepted",
                }
            )
        )

    return RiskManagement(risks=risks, meetings=[*risk_management.meetings, meeting])
