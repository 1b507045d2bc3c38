from __future__ import annotations

from jobsite.services.models import CustomReport
from jobsite.services.report_store import remove_custom_report, upsert_custom_report, validate_report_config


def report(report_id: str, **config) -> CustomReport:
    return CustomReport.model_validate({"id": report_id, "dataSource": "expenses", **config})


def test_upsert_replaces_in_place() -> None:
    reports = [report("a", name="A"), report("b", name="B"), report("c", name="C")]

    updated = upsert_custom_report(reports, report("b", name="B2"))

    assert [(r.id, r.name) for r in updated] == [("a", "A"), ("b", "B2"), ("c", "C")]
    assert reports[1].name == "B"


def test_upsert_appends_new_report() -> None:
    updated = upsert_custom_report([report("a")], report("z"))

    assert [r.id for r in updated] == ["a", "z"]


def test_remove_custom_report() -> None:
    assert [r.id for r in remove_custom_report([report("a"), report("b")], "a")] == ["b"]
    assert [r.id for r in remove_custom_report([report("a")], "missing")] == ["a"]


def test_valid_config_has_no_errors(project) -> None:
    config = report(
        "ok",
        fields=["vendor", "amount"],
        filters=[{"field": "date", "operator": "is_between", "value": ["2024-01-01", ""]}],
        grouping={"field": "vendor", "aggregation": "sum", "aggField": "amount"},
    )

    assert validate_report_config(config) == []
    for saved in project.custom_reports:
        assert validate_report_config(saved) == []


def test_unknown_columns_and_fields() -> None:
    config = report("bad", fields=["colour"], filters=[{"field": "size", "value": "XL"}])

    errors = validate_report_config(config)

    assert "fields: unknown column 'colour'" in errors
    assert "filters[0].field unknown: 'size'" in errors


def test_is_between_requires_date_field() -> None:
    config = report("bad", filters=[{"field": "vendor", "operator": "is_between", "value": ["a", "b"]}])

    assert validate_report_config(config) == ["filters[0]: is_between requires a date field"]


def test_range_value_only_with_is_between() -> None:
    config = report("bad", filters=[{"field": "vendor", "operator": "equals", "value": ["a", "b"]}])

    assert validate_report_config(config) == ["filters[0]: range value only allowed with is_between"]


def test_grouping_checks() -> None:
    not_groupable = report("bad", grouping={"field": "amount", "aggregation": "count"})
    not_aggregatable = report("bad", grouping={"field": "vendor", "aggregation": "sum", "aggField": "vendor"})
    missing_agg_field = report("bad", grouping={"field": "vendor", "aggregation": "avg"})

    assert validate_report_config(not_groupable) == ["grouping.field 'amount' is not groupable"]
    assert validate_report_config(not_aggregatable) == ["grouping.aggField 'vendor' is not aggregatable"]
    assert validate_report_config(missing_agg_field) == ["grouping.aggField unknown: ''"]
