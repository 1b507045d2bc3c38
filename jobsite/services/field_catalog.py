from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from operator import attrgetter
from typing import Any, Callable

from jobsite.services.models import FieldType, Project


class CatalogError(KeyError):
    pass


@dataclass(frozen=True)
class FieldDescriptor:
    id: str
    label: str
    type: FieldType
    attr: str
    filterable: bool = True
    groupable: bool = False
    aggregatable: bool = False


@dataclass(frozen=True)
class DataSource:
    id: str
    label: str
    rows: Callable[[Project], list[Any]]
    fields: tuple[FieldDescriptor, ...] = ()

    @property
    def field_ids(self) -> list[str]:
        return [f.id for f in self.fields]

    def field(self, field_id: str) -> FieldDescriptor:
        for descriptor in self.fields:
            if descriptor.id == field_id:
                return descriptor
        raise CatalogError(f"Unknown field {field_id!r} for data source {self.id!r}")


DATA_SOURCES: list[DataSource] = [
    DataSource(
        "expenses", "Expenses", lambda project: project.expenses,
        fields=(
            FieldDescriptor("date", "Date", "date", "date", groupable=True),
            FieldDescriptor("vendor", "Vendor", "string", "vendor", groupable=True),
            FieldDescriptor("amount", "Amount", "number", "amount", aggregatable=True),
            FieldDescriptor("category", "Category", "string", "category", groupable=True),
            FieldDescriptor("description", "Description", "string", "description"),
            FieldDescriptor("invoicable", "Billable", "boolean", "invoicable", groupable=True),
            FieldDescriptor("status", "Status", "string", "status", groupable=True),
        ),
    ),
    DataSource(
        "dailyLogs", "Daily Logs", lambda project: project.daily_logs,
        fields=(
            FieldDescriptor("date", "Date", "date", "date", groupable=True),
            FieldDescriptor("notes", "Notes", "string", "notes"),
            FieldDescriptor("status", "Status", "string", "status", groupable=True),
            FieldDescriptor("signedBy", "Signed By", "string", "signed_by", groupable=True),
        ),
    ),
    DataSource(
        "rfiManager", "RFIs", lambda project: project.rfi_manager.managed_rfis,
        fields=(
            FieldDescriptor("id", "RFI ID", "string", "id"),
            FieldDescriptor("subject", "Subject", "string", "subject"),
            FieldDescriptor("question", "Question", "string", "question"),
            FieldDescriptor("status", "Status", "string", "status", groupable=True),
            FieldDescriptor("answer", "Answer", "string", "answer"),
        ),
    ),
    DataSource(
        "inspections", "Inspections", lambda project: project.inspections,
        fields=(
            FieldDescriptor("inspectionNumber", "Inspection #", "number", "inspection_number", aggregatable=True),
            FieldDescriptor("type", "Type", "string", "type", groupable=True),
            FieldDescriptor("recipientName", "Inspector", "string", "recipient_name", groupable=True),
            FieldDescriptor("requestedDate", "Requested Date", "date", "requested_date", groupable=True),
            FieldDescriptor("scheduledDate", "Scheduled Date", "date", "scheduled_date"),
            FieldDescriptor("status", "Status", "string", "status", groupable=True),
            FieldDescriptor("isSigned", "Signed", "boolean", "is_signed", groupable=True),
        ),
    ),
]

BY_ID = {source.id: source for source in DATA_SOURCES}


def get_data_source(source_id: str) -> DataSource:
    try:
        return BY_ID[source_id]
    except KeyError:
        raise CatalogError(f"Unknown data source {source_id!r}") from None


@lru_cache(maxsize=None)
def accessors(source_id: str) -> dict[str, Callable[[Any], Any]]:
    """Field id -> getter over a record of the given data source."""
    source = get_data_source(source_id)
    return {f.id: attrgetter(f.attr) for f in source.fields}


def describe_catalog() -> list[dict[str, Any]]:
    return [
        {
            "id": source.id,
            "label": source.label,
            "fields": [
                {
                    "id": f.id,
                    "label": f.label,
                    "type": f.type,
                    "filterable": f.filterable,
                    "groupable": f.groupable,
                    "aggregatable": f.aggregatable,
                }
                for f in source.fields
            ],
        }
        for source in DATA_SOURCES
    ]
