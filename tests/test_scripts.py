from __future__ import annotations

import json
import sys

import pytest

from jobsite.services.seed import sample_workspace
from scripts.run_report import main as run_report_main
from scripts.verify_data import run_integrity_checks


def test_seed_workspace_passes_integrity_checks() -> None:
    assert run_integrity_checks(sample_workspace()) == []


def test_integrity_checks_flag_unknown_contacts_and_duplicates() -> None:
    workspace = sample_workspace()
    project = workspace.projects[0]
    workspace.projects[0] = project.model_copy(
        update={
            "contact_ids": [*project.contact_ids, "contact-ghost"],
            "custom_reports": project.custom_reports * 2,
        }
    )

    errors = run_integrity_checks(workspace)

    assert "proj-sample-123: unknown contact contact-ghost" in errors
    assert "proj-sample-123: duplicate custom report id custom-inspections-by-status" in errors


def test_run_report_prints_json(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["run_report.py", "expenseByCategory"])

    run_report_main()

    out = capsys.readouterr().out
    payload = json.loads(out.split("Output:\n", 1)[1])
    assert payload["columns"] == ["category", "amount"]
    assert payload["isGrouped"] is True


def test_run_report_unknown_report_exits(monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["run_report.py", "no-such-report"])

    with pytest.raises(SystemExit, match="Unknown report"):
        run_report_main()
