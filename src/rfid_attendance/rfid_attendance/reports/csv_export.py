from __future__ import annotations

import csv
import io
import re

from .model import Report

_WHITESPACE = re.compile(r"\s+")


def to_csv(report: Report) -> str:
    """Header row as plain names, every data field quoted, rows joined by newlines."""
    header = ",".join(report.columns)
    if not report.rows:
        return header

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in report.rows:
        writer.writerow([row.get(c, "") for c in report.columns])
    body = out.getvalue()
    if body.endswith("\n"):
        body = body[:-1]
    return header + "\n" + body


def csv_filename(report: Report) -> str:
    return _WHITESPACE.sub("_", report.title) + ".csv"
