from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from jobsite.main import app

PROJECT = "/api/projects/proj-sample-123"


@pytest.fixture
def client(fresh_store) -> TestClient:
    return TestClient(app)


def test_health(client) -> None:
    assert client.get("/api/health").json() == {"status": "ok"}


def test_list_sources(client) -> None:
    sources = client.get("/api/reports/sources").json()

    assert [s["id"] for s in sources] == ["expenses", "dailyLogs", "rfiManager", "inspections"]
    amount = next(f for f in sources[0]["fields"] if f["id"] == "amount")
    assert amount == {
        "id": "amount",
        "label": "Amount",
        "type": "number",
        "filterable": True,
        "groupable": False,
        "aggregatable": True,
    }


def test_unknown_project_is_404(client) -> None:
    assert client.get("/api/projects/missing").status_code == 404
    assert client.get("/api/projects/missing/reports/canned/rfiLog").status_code == 404


def test_list_projects(client) -> None:
    assert client.get("/api/projects").json() == [
        {
            "id": "proj-sample-123",
            "name": "Midtown Office Renovation",
            "clientName": "Innovate Corp.",
            "address": "456 Commerce St, Suite 300, Metro City",
        }
    ]


def test_canned_reports(client) -> None:
    summary = client.get(f"{PROJECT}/reports/canned/financialSummary").json()
    grouped = client.get(f"{PROJECT}/reports/canned/expenseByCategory").json()

    assert summary["contractSumToDate"] == 175950
    assert grouped["isGrouped"] is True
    assert grouped["columns"] == ["category", "amount"]
    assert grouped["grouping"] == {"field": "category", "aggregation": "sum", "aggField": "amount"}
    assert client.get(f"{PROJECT}/reports/canned/unknown").status_code == 422


def test_run_ad_hoc_report(client) -> None:
    config = {
        "id": "adhoc",
        "name": "Pending expenses",
        "dataSource": "expenses",
        "fields": ["vendor", "amount"],
        "filters": [{"id": "f1", "field": "status", "operator": "equals", "value": "Pending"}],
    }

    result = client.post(f"{PROJECT}/reports/run", json=config).json()

    assert result["title"] == "Pending expenses"
    assert result["rows"] == [
        {"vendor": "Home Depot", "amount": 284.55},
        {"vendor": "Luigi's Pizza", "amount": 75.2},
    ]


def test_run_rejects_invalid_config(client) -> None:
    config = {
        "id": "adhoc",
        "dataSource": "expenses",
        "filters": [{"field": "vendor", "operator": "is_between", "value": ["A", "M"]}],
    }

    resp = client.post(f"{PROJECT}/reports/run", json=config)

    assert resp.status_code == 422
    assert resp.json()["detail"] == ["filters[0]: is_between requires a date field"]


def test_saved_report_lifecycle(client) -> None:
    body = {
        "id": "ignored",
        "name": "Signed logs",
        "dataSource": "dailyLogs",
        "fields": ["date", "status"],
        "filters": [{"field": "status", "operator": "equals", "value": "Signed"}],
    }

    saved = client.put(f"{PROJECT}/reports/custom/signed-logs", json=body).json()
    assert saved["id"] == "signed-logs"

    listing = client.get(f"{PROJECT}/reports").json()
    assert [r["id"] for r in listing["custom"]] == ["custom-inspections-by-status", "signed-logs"]

    result = client.get(f"{PROJECT}/reports/custom/signed-logs").json()
    assert result["rows"] == [{"date": "2024-08-21", "status": "Signed"}]

    deleted = client.delete(f"{PROJECT}/reports/custom/signed-logs").json()
    assert deleted == {"status": "ok", "deleted": "signed-logs"}
    assert client.get(f"{PROJECT}/reports/custom/signed-logs").status_code == 404


def test_export_custom_report_csv(client) -> None:
    resp = client.get(f"{PROJECT}/reports/custom/custom-inspections-by-status/csv")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert 'filename="custom-inspections-by-status.csv"' in resp.headers["content-disposition"]
    assert resp.text == "status,inspectionNumber\r\nOpen,1\r\nFailed,1\r\nPassed,1\r\n"


def test_dashboard_and_pay_application(client) -> None:
    dashboard = client.get(f"{PROJECT}/dashboard").json()
    pay_app = client.get(f"{PROJECT}/pay-application").json()

    assert dashboard["unreadEmails"] == 1
    assert dashboard["billedTimeAdjustments"] == -85
    assert [a["type"] for a in dashboard["recentActivity"]] == ["file", "email", "file"]
    assert pay_app["currentPaymentDue"] == 67352.5


def test_client_portal(client) -> None:
    portal = client.get(f"{PROJECT}/client-portal").json()

    assert [u["id"] for u in portal["publishedUpdates"]] == ["update-1"]
    assert len(portal["closeoutDocuments"]) == 3


def test_risk_status_and_meeting(client) -> None:
    accepted = client.post(f"{PROJECT}/risks/risk-4/status", json={"status": "Accepted"}).json()
    assert accepted["status"] == "Accepted"
    assert client.post(f"{PROJECT}/risks/missing/status", json={"status": "Accepted"}).status_code == 404

    agenda = client.get(f"{PROJECT}/risks/agenda").json()
    assert [r["id"] for r in agenda] == ["risk-1", "risk-2", "risk-4"]

    body = {"agenda": {"risk-1": {"updateText": "Header replaced.", "status": "Closed"}}}
    risk_management = client.post(f"{PROJECT}/risks/meetings", json=body).json()

    by_id = {r["id"]: r for r in risk_management["risks"]}
    assert by_id["risk-1"]["status"] == "Closed"
    assert by_id["risk-2"]["updates"][-1]["status"] == "Carried Over"
    assert by_id["risk-4"]["updates"][-1]["status"] == "Carried Over"
    assert risk_management["meetings"][-1]["attendees"] == ["Innovate Corp."]
    assert risk_management["meetings"][-1]["title"].startswith("Weekly Sync - ")


def test_add_identified_risks(client) -> None:
    body = [{"description": "Drywall delivery delayed by supplier.", "category": "Schedule", "severity": "High"}]

    risks = client.post(f"{PROJECT}/risks/identified", json=body).json()

    assert len(risks) == 5
    assert risks[-1]["status"] == "Pending"
    assert risks[-1]["mitigationPlan"] == ""


def test_demo_reset_restores_seed(client) -> None:
    client.delete(f"{PROJECT}/reports/custom/custom-inspections-by-status")

    assert client.post("/api/demo/reset").json()["status"] == "ok"
    assert [r["id"] for r in client.get(f"{PROJECT}/reports").json()["custom"]] == ["custom-inspections-by-status"]
