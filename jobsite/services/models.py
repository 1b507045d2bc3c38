from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# ---------------------------------------------------------------------------
# Project collections
# ---------------------------------------------------------------------------


class Contact(CamelModel):
    id: str
    name: str
    company: str = ""
    role: str = ""
    email: str = ""
    phone: str = ""
    billable_rate: Optional[float] = None


class Expense(CamelModel):
    id: str
    date: str = ""
    vendor: str = ""
    amount: Optional[float] = 0.0
    category: str = "Other"
    description: str = ""
    invoicable: bool = False
    status: str = "Pending"
    source_receipt_id: Optional[str] = None


class DailyLog(CamelModel):
    id: str
    date: str = ""
    notes: str = ""
    status: str = "Draft"
    photo_url: Optional[str] = None
    drive_file_id: Optional[str] = None
    signed_by: Optional[str] = None
    signed_at: Optional[str] = None
    revision_of: Optional[str] = None


class RfiLogEntry(CamelModel):
    timestamp: str
    note: str


class ManagedRfi(CamelModel):
    id: str
    subject: str = ""
    question: str = ""
    status: str = "Draft"
    answer: Optional[str] = None
    analysis: Optional[str] = None
    log: list[RfiLogEntry] = Field(default_factory=list)


class RfiManager(CamelModel):
    managed_rfis: list[ManagedRfi] = Field(default_factory=list)


class AuditLogEntry(CamelModel):
    timestamp: str
    user: str
    action: str


class Inspection(CamelModel):
    id: str
    inspection_number: Optional[int] = None
    type: str = ""
    recipient_name: str = ""
    recipient_email: str = ""
    requested_date: str = ""
    scheduled_date: Optional[str] = None
    status: str = "Open"
    outcome_notes: Optional[str] = None
    related_inspection_id: Optional[str] = None
    is_signed: bool = False
    signed_by: Optional[str] = None
    signed_at: Optional[str] = None
    drive_file_id: Optional[str] = None
    audit_log: list[AuditLogEntry] = Field(default_factory=list)


class Email(CamelModel):
    id: str
    sender: str = Field(default="", alias="from")
    to: Optional[str] = None
    subject: str = ""
    body: str = ""
    timestamp: str = ""
    read: bool = False


class DriveFile(CamelModel):
    id: str
    name: str
    type: str = ""
    size: int = 0
    url: Optional[str] = None
    folder_path: str = "/"
    is_locked: bool = False
    caption: Optional[str] = None
    annotation_method: Optional[str] = None


class ContractLineItem(CamelModel):
    id: str
    item_number: str = ""
    description: str = ""
    scheduled_value: float = 0.0
    prev_billed: float = 0.0
    this_period: float = 0.0
    stored_materials: float = 0.0
    source_expense_id: Optional[str] = None
    source_time_entry_ids: Optional[list[str]] = None
    original_this_period_amount: Optional[float] = None


class ChangeOrderItem(CamelModel):
    id: str
    description: str = ""
    value: float = 0.0


class InvoiceState(CamelModel):
    project_name: str = ""
    application_number: int = 1
    period_to: str = ""
    architects_project_number: str = ""
    line_items: list[ContractLineItem] = Field(default_factory=list)
    change_orders: list[ChangeOrderItem] = Field(default_factory=list)
    retainage_percentage: float = 0.0
    materials_retainage_percentage: float = 0.0
    previous_payments: float = 0.0


class AgendaUpdate(CamelModel):
    meeting_id: str
    timestamp: str
    update_text: str = ""
    status: Literal["Open", "In Progress", "Carried Over", "Closed"] = "Open"


class RiskItem(CamelModel):
    id: str
    description: str
    category: str = "Other"
    severity: str = "Medium"
    mitigation_plan: str = ""
    status: Literal["Pending", "Accepted", "Rejected", "Closed"] = "Pending"
    created_at: str = ""
    updates: list[AgendaUpdate] = Field(default_factory=list)


class Meeting(CamelModel):
    id: str
    date: str
    title: str = ""
    attendees: list[str] = Field(default_factory=list)


class RiskManagement(CamelModel):
    risks: list[RiskItem] = Field(default_factory=list)
    meetings: list[Meeting] = Field(default_factory=list)


class ClientUpdateSection(CamelModel):
    id: str
    heading: str = ""
    content: str = ""
    image_urls: list[str] = Field(default_factory=list)


class ClientUpdate(CamelModel):
    id: str
    title: str = ""
    summary: str = ""
    publication_date: str = ""
    status: Literal["Draft", "Published"] = "Draft"
    sections: list[ClientUpdateSection] = Field(default_factory=list)


class TimeEntry(CamelModel):
    id: str
    employee_id: str
    date: str = ""
    hours: float = 0.0
    cost_code: str = ""
    description: Optional[str] = None
    status: str = "Draft"
    invoice_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Report configuration and results
# ---------------------------------------------------------------------------

DataSourceId = Literal["expenses", "dailyLogs", "rfiManager", "inspections"]
FieldType = Literal["string", "number", "boolean", "date"]
FilterOperator = Literal["equals", "not_equals", "contains", "greater_than", "less_than", "is_between"]
Aggregation = Literal["count", "sum", "avg"]


@dataclass(frozen=True)
class SingleValue:
    text: str

    @property
    def is_empty(self) -> bool:
        return self.text == ""


@dataclass(frozen=True)
class RangeValue:
    start: str
    end: str

    @property
    def is_empty(self) -> bool:
        return self.start == "" and self.end == ""


FilterValue = Union[SingleValue, RangeValue]


def _value_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FilterClause(CamelModel):
    id: str = ""
    field: str
    operator: FilterOperator = "equals"
    # Free-form as authored by the report builder; read through criterion()
    value: Any = ""

    def criterion(self) -> FilterValue:
        if self.operator == "is_between":
            if isinstance(self.value, (list, tuple)):
                bounds = [_value_text(v) for v in list(self.value)[:2]]
                bounds += [""] * (2 - len(bounds))
                return RangeValue(start=bounds[0], end=bounds[1])
            return RangeValue(start=_value_text(self.value), end="")
        if isinstance(self.value, (list, tuple)):
            return SingleValue(text="")
        return SingleValue(text=_value_text(self.value))


class Grouping(CamelModel):
    field: str = ""
    aggregation: Aggregation = "count"
    agg_field: str = ""


class CustomReport(CamelModel):
    id: str
    name: str = ""
    data_source: DataSourceId = "expenses"
    fields: list[str] = Field(default_factory=list)
    filters: list[FilterClause] = Field(default_factory=list)
    grouping: Optional[Grouping] = None


class ResultTable(CamelModel):
    title: str
    columns: list[str]
    rows: list[dict[str, Any]] = Field(default_factory=list)
    is_grouped: bool = False
    grouping: Optional[Grouping] = None


class FinancialSummary(CamelModel):
    original_contract_sum: float
    net_change_by_change_orders: float
    contract_sum_to_date: float
    total_billed_to_date: float
    total_expenses: float


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------


class Project(CamelModel):
    # Tool state this service does not read (estimator, submittals, ...) passes through
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    address: str = ""
    client_name: str = ""
    contact_ids: list[str] = Field(default_factory=list)
    uses_schedule_of_values: bool = False
    rfi_manager: RfiManager = Field(default_factory=RfiManager)
    inspections: list[Inspection] = Field(default_factory=list)
    daily_logs: list[DailyLog] = Field(default_factory=list)
    email: list[Email] = Field(default_factory=list)
    drive: list[DriveFile] = Field(default_factory=list)
    invoicing: InvoiceState = Field(default_factory=InvoiceState)
    risk_management: RiskManagement = Field(default_factory=RiskManagement)
    client_updates: list[ClientUpdate] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    custom_reports: list[CustomReport] = Field(default_factory=list)
    time_entries: list[TimeEntry] = Field(default_factory=list)
