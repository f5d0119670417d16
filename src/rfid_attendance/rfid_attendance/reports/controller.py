from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import month_key, today_local
from ..common.web import admin_required, date_arg, ok
from ..container import Container
from .csv_export import csv_filename, to_csv


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _build(report_type: str):
        today = today_local()
        return service.generate(
            report_type,
            selected_date=date_arg("date", today),
            month=request.args.get("month") or month_key(today),
            branch_id=request.args.get("branch"),
        )

    @app.route("/api/reports/<report_type>", methods=["GET"], endpoint="report")
    @admin_required
    def report(report_type: str):
        r = _build(report_type)
        return ok(title=r.title, columns=r.columns, rows=r.rows)

    @app.route("/api/reports/<report_type>/csv", methods=["GET"], endpoint="report_csv")
    @admin_required
    def report_csv(report_type: str):
        r = _build(report_type)
        return app.response_class(
            to_csv(r).encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={csv_filename(r)}"},
        )
