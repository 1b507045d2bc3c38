"""Derived figures for the project dashboard, client portal and pay application.

All functions are pure reducers over a project snapshot. Amounts are plain
floats; currency formatting is left to the presentation layer.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional, Union

from jobsite.services.models import (
    CamelModel,
    ClientUpdate,
    Contact,
    DriveFile,
    Email,
    Inspection,
    InvoiceState,
    Project,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ContractTotals(CamelModel):
    original_contract_sum: float
    change_order_total: float
    contract_sum_to_date: float
    total_billed: float
    total_completed_and_stored: float
    balance_to_finish: float


class ActivityItem(CamelModel):
    type: Literal["email", "file"]
    item: Union[Email, DriveFile]
    timestamp: datetime


class DashboardMetrics(CamelModel):
    unread_emails: int
    open_rfis: int
    pending_inspections: int
    failed_inspections: list[Inspection]
    change_order_total: float
    original_contract_sum: float
    contract_sum_to_date: float
    balance_to_finish: float
    billed_time_adjustments: float
    project_contacts: list[Contact]
    recent_activity: list[ActivityItem]


class ClientPortal(CamelModel):
    contract_sum_to_date: float
    progress_percentage: float
    project_contacts: list[Contact]
    published_updates: list[ClientUpdate]
    closeout_documents: list[DriveFile]


class PayApplication(CamelModel):
    application_number: int
    period_to: str
    original_contract_sum: float
    net_change_by_change_orders: float
    contract_sum_to_date: float
    total_completed_and_stored: float
    retainage_on_completed_work: float
    retainage_on_stored_material: float
    total_retainage: float
    total_earned_less_retainage: float
    less_previous_certificates: float
    current_payment_due: float
    balance_to_finish_including_retainage: float


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def file_created_at(file: DriveFile) -> Optional[datetime]:
    """Creation time encoded in upload ids of the form ``<prefix>-<millis>``."""
    parts = file.id.split("-")
    if file.type == "folder" or len(parts) < 2 or not parts[1].isdigit():
        return None
    try:
        return datetime.fromtimestamp(int(parts[1]) / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def contract_totals(invoicing: InvoiceState) -> ContractTotals:
    original = sum(item.scheduled_value for item in invoicing.line_items)
    change_orders = sum(co.value for co in invoicing.change_orders)
    billed = sum(item.prev_billed + item.this_period for item in invoicing.line_items)
    stored = sum(item.stored_materials for item in invoicing.line_items)
    contract_sum_to_date = original + change_orders
    return ContractTotals(
        original_contract_sum=original,
        change_order_total=change_orders,
        contract_sum_to_date=contract_sum_to_date,
        total_billed=billed,
        total_completed_and_stored=billed + stored,
        balance_to_finish=contract_sum_to_date - billed,
    )


def billed_time_adjustments(invoicing: InvoiceState) -> float:
    """Net amount billed time was adjusted by before invoicing (negative = discounted)."""
    total = 0.0
    for item in invoicing.line_items:
        if item.source_time_entry_ids and item.original_this_period_amount is not None:
            total += item.this_period - item.original_this_period_amount
    return total


def progress_percentage(invoicing: InvoiceState) -> float:
    totals = contract_totals(invoicing)
    if totals.contract_sum_to_date <= 0:
        return 0.0
    return totals.total_completed_and_stored / totals.contract_sum_to_date * 100


def project_contacts(project: Project, contacts: list[Contact]) -> list[Contact]:
    wanted = set(project.contact_ids)
    return [contact for contact in contacts if contact.id in wanted]


def recent_activity(project: Project, limit: int = 5) -> list[ActivityItem]:
    items: list[ActivityItem] = []
    for email in project.email:
        if email.read:
            continue
        timestamp = parse_timestamp(email.timestamp)
        if timestamp is not None:
            items.append(ActivityItem(type="email", item=email, timestamp=timestamp))
    for file in project.drive:
        created_at = file_created_at(file)
        if created_at is not None:
            items.append(ActivityItem(type="file", item=file, timestamp=created_at))

    items.sort(key=lambda activity: activity.timestamp, reverse=True)
    return items[:limit]


def dashboard_metrics(project: Project, contacts: list[Contact], limit: int = 5) -> DashboardMetrics:
    totals = contract_totals(project.invoicing)
    return DashboardMetrics(
        unread_emails=sum(1 for email in project.email if not email.read),
        open_rfis=sum(1 for rfi in project.rfi_manager.managed_rfis if rfi.status in {"Sent", "Draft"}),
        pending_inspections=sum(1 for insp in project.inspections if insp.status in {"Open", "Scheduled"}),
        failed_inspections=[insp for insp in project.inspections if insp.status == "Failed"],
        change_order_total=totals.change_order_total,
        original_contract_sum=totals.original_contract_sum,
        contract_sum_to_date=totals.contract_sum_to_date,
        balance_to_finish=totals.balance_to_finish,
        billed_time_adjustments=billed_time_adjustments(project.invoicing),
        project_contacts=project_contacts(project, contacts),
        recent_activity=recent_activity(project, limit),
    )


def client_portal(project: Project, contacts: list[Contact]) -> ClientPortal:
    published = [update for update in project.client_updates if update.status == "Published"]
    published.sort(key=lambda update: parse_timestamp(update.publication_date) or EPOCH, reverse=True)
    closeout = [f for f in project.drive if f.folder_path == "/Closeout/" and f.type != "folder"]

    return ClientPortal(
        contract_sum_to_date=contract_totals(project.invoicing).contract_sum_to_date,
        progress_percentage=progress_percentage(project.invoicing),
        project_contacts=project_contacts(project, contacts),
        published_updates=published,
        closeout_documents=closeout,
    )


def pay_application(invoicing: InvoiceState) -> PayApplication:
    """Application and certificate for payment (G702 lines 1-9)."""
    totals = contract_totals(invoicing)
    stored = totals.total_completed_and_stored - totals.total_billed
    retainage_work = totals.total_billed * invoicing.retainage_percentage / 100
    retainage_stored = stored * invoicing.materials_retainage_percentage / 100
    total_retainage = retainage_work + retainage_stored
    earned = totals.total_completed_and_stored - total_retainage

    return PayApplication(
        application_number=invoicing.application_number,
        period_to=invoicing.period_to,
        original_contract_sum=round(totals.original_contract_sum, 2),
        net_change_by_change_orders=round(totals.change_order_total, 2),
        contract_sum_to_date=round(totals.contract_sum_to_date, 2),
        total_completed_and_stored=round(totals.total_completed_and_stored, 2),
        retainage_on_completed_work=round(retainage_work, 2),
        retainage_on_stored_material=round(retainage_stored, 2),
        total_retainage=round(total_retainage, 2),
        total_earned_less_retainage=round(earned, 2),
        less_previous_certificates=round(invoicing.previous_payments, 2),
        current_payment_due=round(earned - invoicing.previous_payments, 2),
        balance_to_finish_including_retainage=round(totals.contract_sum_to_date - earned, 2),
    )
