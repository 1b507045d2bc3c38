from __future__ import annotations

import csv
from io import StringIO

from fastapi import Response

from jobsite.services.models import ResultTable
from jobsite.services.reporting import as_text


def result_table_csv(table: ResultTable, filename: str) -> Response:
    sio = StringIO()
    writer = csv.writer(sio)
    writer.writerow(table.columns)
    for row in table.rows:
        writer.writerow([as_text(row.get(column)) for column in table.columns])

    resp = Response(content=sio.getvalue(), media_type="text/csv")
    resp.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return resp
