#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from jobsite.services.canned_reports import CANNED_REPORTS
from jobsite.services.report_store import validate_report_config
from jobsite.services.seed import Workspace, sample_workspace


def run_integrity_checks(workspace: Workspace) -> list[str]:
    errors: list[str] = []
    contact_ids = {contact.id for contact in workspace.contacts}

    for report in CANNED_REPORTS:
        if report.config is not None:
            errors.extend(f"canned {report.kind.value}: {e}" for e in validate_report_config(report.config))

    for project in workspace.projects:
        for contact_id in project.contact_ids:
            if contact_id not in contact_ids:
                errors.append(f"{project.id}: unknown contact {contact_id}")
        seen: set[str] = set()
        for report in project.custom_reports:
            if report.id in seen:
                errors.append(f"{project.id}: duplicate custom report id {report.id}")
            seen.add(report.id)
            errors.extend(f"{project.id}/{report.id}: {e}" for e in validate_report_config(report))
    return errors


def main() -> None:
    errors = run_integrity_checks(sample_workspace())
    if errors:
        raise SystemExit("Integrity checks failed:\n- " + "\n- ".join(errors))

    print("Integrity checks passed.")


if __name__ == "__main__":
    main()
