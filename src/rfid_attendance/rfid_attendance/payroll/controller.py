from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import month_key, today_local
from ..common.formatting import currency
from ..common.web import admin_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll")
    @admin_required
    def payroll():
        month = request.args.get("month") or month_key(today_local())
        run = service.run_month(month, branch_id=request.args.get("branch"))
        return ok(
            month=run.month,
            totalExpense=currency(run.total_expense),
            rows=[service.to_ui(r) for r in run.results],
        )

    @app.route("/api/payroll/<employee_id>", methods=["GET"], endpoint="payslip")
    @admin_required
    def payslip(employee_id: str):
        month = request.args.get("month") or month_key(today_local())
        return ok(payslip=service.payslip_ui(service.payslip(employee_id, month)))
