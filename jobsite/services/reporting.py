"""Report engine: filter -> project -> group/aggregate over one project collection.

``process_report`` is a pure function of the project snapshot and a report
configuration. Values are returned raw; formatting (currency, dates, header
casing) belongs to whoever renders the table.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from jobsite.services.field_catalog import DataSource, accessors, get_data_source
from jobsite.services.logger import get_logger
from jobsite.services.models import (
    CustomReport,
    FieldType,
    FilterClause,
    Grouping,
    Project,
    RangeValue,
    ResultTable,
)

logger = get_logger("reporting")


def as_number(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def date_key(value: Any) -> str:
    """YYYY-MM-DD prefix of an ISO date or timestamp."""
    return as_text(value)[:10]


def _parse_flag(text: str) -> Optional[bool]:
    lowered = text.strip().lower()
    if lowered in {"true", "yes", "1"}:
        return True
    if lowered in {"false", "no", "0"}:
        return False
    return None


def _ordering_key(value: Any, field_type: FieldType) -> Any:
    if field_type == "number":
        number = as_number(value)
        return 0.0 if number is None else number
    if field_type == "date":
        return date_key(value)
    return as_text(value)


def _bound_key(text: str, field_type: FieldType) -> Any:
    if field_type == "number":
        return as_number(text)
    if field_type == "date":
        return date_key(text)
    return text


def _equals(value: Any, text: str, field_type: FieldType) -> bool:
    if field_type == "number":
        target = as_number(text)
        return target is not None and _ordering_key(value, field_type) == target
    if field_type == "boolean":
        flag = _parse_flag(text)
        return flag is not None and bool(value) == flag
    if field_type == "date":
        return date_key(value) == date_key(text)
    return as_text(value) == text


def _in_range(value: Any, criterion: RangeValue, field_type: FieldType) -> bool:
    current = _ordering_key(value, field_type)
    if criterion.start:
        start = _bound_key(criterion.start, field_type)
        if start is None or current < start:
            return False
    if criterion.end:
        end = _bound_key(criterion.end, field_type)
        if end is None or current > end:
            return False
    return True


def evaluate_filter(record: Any, clause: FilterClause, source: DataSource) -> bool:
    descriptor = source.field(clause.field)
    criterion = clause.criterion()
    if criterion.is_empty:
        return True

    value = accessors(source.id)[descriptor.id](record)
    if isinstance(criterion, RangeValue):
        return _in_range(value, criterion, descriptor.type)

    text = criterion.text
    operator = clause.operator
    if operator == "equals":
        return _equals(value, text, descriptor.type)
    if operator == "not_equals":
        return not _equals(value, text, descriptor.type)
    if operator == "contains":
        return text.lower() in as_text(value).lower()
    if operator in {"greater_than", "less_than"}:
        target = _bound_key(text, descriptor.type)
        if target is None:
            return False
        current = _ordering_key(value, descriptor.type)
        if descriptor.type == "boolean":
            current = as_text(value)
        return current > target if operator == "greater_than" else current < target
    raise ValueError(f"Unsupported filter operator: {operator}")


def passes_filters(record: Any, filters: list[FilterClause], source: DataSource) -> bool:
    return all(evaluate_filter(record, clause, source) for clause in filters)


def resolve_columns(source: DataSource, fields: list[str]) -> list[str]:
    if not fields:
        return source.field_ids
    columns = list(dict.fromkeys(fields))
    for column in columns:
        source.field(column)
    return columns


def project_record(record: Any, columns: list[str], getters: dict[str, Callable[[Any], Any]]) -> dict[str, Any]:
    return {column: getters[column](record) for column in columns}


def _numeric(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    number = as_number(value)
    return 0.0 if number is None else number


def value_column(grouping: Grouping) -> str:
    # Never shadow the group key column
    if grouping.agg_field and grouping.agg_field != grouping.field:
        return grouping.agg_field
    return grouping.aggregation


def group_records(records: list[Any], source: DataSource, grouping: Grouping) -> tuple[list[str], list[dict[str, Any]]]:
    """One output row per distinct group key, in first-seen order."""
    getters = accessors(source.id)
    key_of = getters[source.field(grouping.field).id]
    value_of: Optional[Callable[[Any], Any]] = None
    if grouping.aggregation != "count" and grouping.agg_field:
        value_of = getters[source.field(grouping.agg_field).id]

    groups: dict[Any, list[Any]] = {}
    for record in records:
        groups.setdefault(key_of(record), []).append(record)

    target = value_column(grouping)
    rows: list[dict[str, Any]] = []
    for key, members in groups.items():
        if grouping.aggregation == "count":
            aggregated: float = len(members)
        else:
            total = sum(_numeric(value_of(m)) for m in members) if value_of else 0.0
            if grouping.aggregation == "sum":
                aggregated = total
            else:
                aggregated = total / len(members) if members else 0.0
        rows.append({grouping.field: key, target: aggregated})

    return [grouping.field, target], rows


def process_report(project: Project, config: CustomReport) -> ResultTable:
    source = get_data_source(config.data_source)
    records = list(source.rows(project) or [])
    retained = [record for record in records if passes_filters(record, config.filters, source)]

    grouping = config.grouping if config.grouping and config.grouping.field else None
    if grouping is not None:
        columns, rows = group_records(retained, source, grouping)
    else:
        columns = resolve_columns(source, config.fields)
        getters = accessors(source.id)
        rows = [project_record(record, columns, getters) for record in retained]

    logger.debug(
        "report %r on %s: %d/%d rows retained, grouped=%s",
        config.id, source.id, len(retained), len(records), grouping is not None,
    )

    return ResultTable(
        title=config.name or f"{source.label} Report",
        columns=columns,
        rows=rows,
        is_grouped=grouping is not None,
        grouping=grouping.model_copy() if grouping is not None else None,
    )

