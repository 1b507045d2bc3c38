#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from jobsite.services.canned_reports import CannedReportKind, run_canned_report
from jobsite.services.config import get_settings
from jobsite.services.field_catalog import CatalogError
from jobsite.services.reporting import process_report
from jobsite.services.seed import sample_workspace


def _run(report_id: str, project_id: str) -> None:
    workspace = sample_workspace()
    project = next((p for p in workspace.projects if p.id == project_id), None)
    if project is None:
        raise SystemExit(f"Unknown project: {project_id}")

    canned = {kind.value: kind for kind in CannedReportKind}
    try:
        if report_id in canned:
            result = run_canned_report(project, canned[report_id])
        else:
            config = next((r for r in project.custom_reports if r.id == report_id), None)
            if config is None:
                raise SystemExit(f"Unknown report: {report_id}")
            result = process_report(project, config)
    except CatalogError as exc:
        print(f"Report failed: {exc}")
        raise SystemExit(1)

    print(f"Project: {project.name}")
    print(f"Report: {report_id}")
    print("Output:")
    print(json.dumps(result.dump(), indent=2))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a canned or saved report against the sample project")
    parser.add_argument("report_id", help="canned report kind (e.g. expenseByCategory) or a saved report id")
    parser.add_argument("--project", default=get_settings().default_project_id)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    _run(args.report_id, args.project)


if __name__ == "__main__":
    main()
