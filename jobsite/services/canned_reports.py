from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from jobsite.services.models import (
    CustomReport,
    FilterClause,
    FinancialSummary,
    Grouping,
    Project,
    ResultTable,
)
from jobsite.services.reporting import process_report


class CannedReportKind(str, Enum):
    FINANCIAL_SUMMARY = "financialSummary"
    EXPENSE_BY_CATEGORY = "expenseByCategory"
    RFI_LOG = "rfiLog"
    BILLABLE_EXPENSES = "billableExpenses"


CannedResult = Union[FinancialSummary, ResultTable]


@dataclass(frozen=True)
class CannedReport:
    kind: CannedReportKind
    name: str
    description: str
    run: Callable[[Project], CannedResult]
    # Set when the report is a literal instance of the generic engine contract
    config: Optional[CustomReport] = None


def financial_summary(project: Project) -> FinancialSummary:
    invoicing = project.invoicing
    original_contract_sum = sum(item.scheduled_value for item in invoicing.line_items)
    net_change = sum(co.value for co in invoicing.change_orders)
    total_billed = sum(item.prev_billed + item.this_period for item in invoicing.line_items)
    total_expenses = sum(expense.amount or 0.0 for expense in project.expenses)

    return FinancialSummary(
        original_contract_sum=original_contract_sum,
        net_change_by_change_orders=net_change,
        contract_sum_to_date=original_contract_sum + net_change,
        total_billed_to_date=total_billed,
        total_expenses=total_expenses,
    )


EXPENSE_BY_CATEGORY = CustomReport(
    id=CannedReportKind.EXPENSE_BY_CATEGORY.value,
    name="Expense by Category",
    data_source="expenses",
    fields=["category", "amount"],
    grouping=Grouping(field="category", aggregation="sum", agg_field="amount"),
)

RFI_LOG = CustomReport(
    id=CannedReportKind.RFI_LOG.value,
    name="Full RFI Log",
    data_source="rfiManager",
    fields=["id", "subject", "status", "question", "answer"],
)

BILLABLE_EXPENSES = CustomReport(
    id=CannedReportKind.BILLABLE_EXPENSES.value,
    name="Uninvoiced Billable Expenses",
    data_source="expenses",
    fields=["date", "vendor", "description", "category", "amount"],
    filters=[
        FilterClause(id="billable", field="invoicable", operator="equals", value="true"),
        FilterClause(id="pending", field="status", operator="equals", value="Pending"),
    ],
)


def _engine_report(config: CustomReport) -> Callable[[Project], ResultTable]:
    def run(project: Project) -> ResultTable:
        return process_report(project, config)

    return run


CANNED_REPORTS: list[CannedReport] = [
    CannedReport(
        CannedReportKind.FINANCIAL_SUMMARY, "Project Financial Summary",
        "High-level overview of contract value, change orders, and expenses.",
        run=financial_summary,
    ),
    CannedReport(
        CannedReportKind.EXPENSE_BY_CATEGORY, EXPENSE_BY_CATEGORY.name,
        "Total spending grouped by expense category.",
        run=_engine_report(EXPENSE_BY_CATEGORY),
        config=EXPENSE_BY_CATEGORY,
    ),
    CannedReport(
        CannedReportKind.RFI_LOG, RFI_LOG.name,
        "A complete list of all RFIs and their current status.",
        run=_engine_report(RFI_LOG),
        config=RFI_LOG,
    ),
    CannedReport(
        CannedReportKind.BILLABLE_EXPENSES, BILLABLE_EXPENSES.name,
        "Actionable list of expenses pending client billing.",
        run=_engine_report(BILLABLE_EXPENSES),
        config=BILLABLE_EXPENSES,
    ),
]

BY_KIND = {report.kind: report for report in CANNED_REPORTS}


def run_canned_report(project: Project, kind: CannedReportKind) -> CannedResult:
    return BY_KIND[CannedReportKind(kind)].run(project)


def describe_canned_reports() -> list[dict[str, str]]:
    return [
        {"id": report.kind.value, "name": report.name, "description": report.description}
        for report in CANNED_REPORTS
    ]
