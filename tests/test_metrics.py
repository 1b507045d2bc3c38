from __future__ import annotations

from datetime import datetime, timezone

import pytest

from jobsite.services.metrics import (
    billed_time_adjustments,
    client_portal,
    contract_totals,
    dashboard_metrics,
    file_created_at,
    pay_application,
    progress_percentage,
    recent_activity,
)
from jobsite.services.models import DriveFile, InvoiceState


def millis(year: int, month: int, day: int, hour: int = 0) -> int:
    return int(datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp() * 1000)


def test_contract_totals(project) -> None:
    totals = contract_totals(project.invoicing)

    assert totals.original_contract_sum == 175000
    assert totals.change_order_total == 950
    assert totals.contract_sum_to_date == 175950
    assert totals.total_billed == 111725
    assert totals.total_completed_and_stored == 121725
    assert totals.balance_to_finish == 64225


def test_billed_time_adjustments(project) -> None:
    assert billed_time_adjustments(project.invoicing) == -85


def test_progress_percentage(project) -> None:
    assert progress_percentage(project.invoicing) == pytest.approx(121725 / 175950 * 100)
    assert progress_percentage(InvoiceState()) == 0


def test_file_created_at() -> None:
    uploaded = DriveFile(id=f"file-{millis(2024, 8, 1, 12)}", name="photo.jpg", type="image/jpeg")

    assert file_created_at(uploaded) == datetime(2024, 8, 1, 12, tzinfo=timezone.utc)
    assert file_created_at(DriveFile(id="drive-sample-1", name="a.pdf")) is None
    assert file_created_at(DriveFile(id=f"folder-{millis(2024, 8, 1)}", name="Photos", type="folder")) is None


def test_out_of_range_upload_id_is_skipped(make_project) -> None:
    scan = DriveFile(id="scan-20240115123045000000", name="scan.pdf", type="application/pdf")
    project = make_project(drive=[scan.dump(), {"id": f"file-{millis(2024, 8, 1)}", "name": "photo.jpg"}])

    assert file_created_at(scan) is None
    assert [item.item.name for item in recent_activity(project)] == ["photo.jpg"]


def test_dashboard_metrics(project, contacts) -> None:
    metrics = dashboard_metrics(project, contacts)

    assert metrics.unread_emails == 1
    assert metrics.open_rfis == 2
    assert metrics.pending_inspections == 1
    assert [insp.id for insp in metrics.failed_inspections] == ["insp-sample-2"]
    assert metrics.balance_to_finish == 64225
    assert metrics.billed_time_adjustments == -85
    assert [c.id for c in metrics.project_contacts] == [
        "contact-sample-1",
        "contact-sample-2",
        "contact-sample-3",
        "contact-sample-5",
    ]


def test_recent_activity_is_newest_first(project) -> None:
    activity = recent_activity(project)

    assert [(item.type, item.timestamp.date().isoformat()) for item in activity] == [
        ("file", "2024-08-22"),
        ("email", "2024-08-21"),
        ("file", "2024-08-17"),
    ]
    assert activity[1].item.id == "email-sample-1"


def test_recent_activity_respects_limit(make_project) -> None:
    drive = [{"id": f"file-{millis(2024, 8, day)}", "name": f"photo-{day}.jpg"} for day in range(1, 8)]

    activity = recent_activity(make_project(drive=drive), limit=5)

    assert [item.item.name for item in activity] == [f"photo-{day}.jpg" for day in (7, 6, 5, 4, 3)]


def test_client_portal(project, contacts) -> None:
    portal = client_portal(project, contacts)

    assert portal.contract_sum_to_date == 175950
    assert [u.id for u in portal.published_updates] == ["update-1"]
    assert [f.id for f in portal.closeout_documents] == [
        "drive-sample-closeout-1",
        "drive-sample-closeout-2",
        "drive-sample-closeout-3",
    ]


def test_client_portal_orders_updates_newest_first(make_project) -> None:
    project = make_project(
        clientUpdates=[
            {"id": "old", "status": "Published", "publicationDate": "2024-07-01T09:00:00Z"},
            {"id": "undated", "status": "Published"},
            {"id": "new", "status": "Published", "publicationDate": "2024-08-01T09:00:00Z"},
        ]
    )

    assert [u.id for u in client_portal(project, []).published_updates] == ["new", "old", "undated"]


def test_pay_application(project) -> None:
    app = pay_application(project.invoicing)

    assert app.application_number == 2
    assert app.contract_sum_to_date == 175950
    assert app.total_completed_and_stored == 121725
    assert app.retainage_on_completed_work == 11172.5
    assert app.retainage_on_stored_material == 0
    assert app.total_earned_less_retainage == 110552.5
    assert app.less_previous_certificates == 43200
    assert app.current_payment_due == 67352.5
    assert app.balance_to_finish_including_retainage == 65397.5
