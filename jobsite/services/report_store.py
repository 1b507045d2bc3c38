from __future__ import annotations

from jobsite.services.field_catalog import BY_ID
from jobsite.services.models import CustomReport, RangeValue


def upsert_custom_report(reports: list[CustomReport], report: CustomReport) -> list[CustomReport]:
    """Replace the report with the same id in place, or append it."""
    if any(existing.id == report.id for existing in reports):
        return [report if existing.id == report.id else existing for existing in reports]
    return [*reports, report]


def remove_custom_report(reports: list[CustomReport], report_id: str) -> list[CustomReport]:
    return [existing for existing in reports if existing.id != report_id]


def validate_report_config(config: CustomReport) -> list[str]:
    """Catalog-level checks for a report authored outside the report builder."""
    source = BY_ID.get(config.data_source)
    if source is None:
        return [f"unknown data source {config.data_source!r}"]

    errors: list[str] = []
    descriptors = {f.id: f for f in source.fields}

    for column in config.fields:
        if column not in descriptors:
            errors.append(f"fields: unknown column {column!r}")

    for idx, clause in enumerate(config.filters):
        descriptor = descriptors.get(clause.field)
        if descriptor is None:
            errors.append(f"filters[{idx}].field unknown: {clause.field!r}")
            continue
        if not descriptor.filterable:
            errors.append(f"filters[{idx}].field {clause.field!r} is not filterable")
        if clause.operator == "is_between" and descriptor.type != "date":
            errors.append(f"filters[{idx}]: is_between requires a date field")
        if clause.operator != "is_between" and isinstance(clause.value, (list, tuple)):
            errors.append(f"filters[{idx}]: range value only allowed with is_between")
        if isinstance(clause.criterion(), RangeValue) and isinstance(clause.value, (list, tuple)) and len(clause.value) > 2:
            errors.append(f"filters[{idx}]: range value takes a start and an end")

    grouping = config.grouping
    if grouping is not None and grouping.field:
        group_field = descriptors.get(grouping.field)
        if group_field is None:
            errors.append(f"grouping.field unknown: {grouping.field!r}")
        elif not group_field.groupable:
            errors.append(f"grouping.field {grouping.field!r} is not groupable")
        if grouping.aggregation != "count":
            agg_field = descriptors.get(grouping.agg_field)
            if agg_field is None:
                errors.append(f"grouping.aggField unknown: {grouping.agg_field!r}")
            elif not agg_field.aggregatable:
                errors.append(f"grouping.aggField {grouping.agg_field!r} is not aggregatable")
    return errors
