from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import today_local
from ..common.formatting import currency, fmt_time
from ..common.web import admin_required, date_arg, json_body, login_required, ok
from ..core.enums import AttendanceView, Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _scan_ui(result) -> dict:
        employee = container.state.find_employee(result.employee_id)
        return {
            "action": result.action.value,
            "accepted": result.accepted,
            "reason": result.reason.value if result.reason else None,
            "note": result.note,
            "uid": result.card_uid,
            "time": fmt_time(result.at),
            "employee": employee.name if employee else None,
            "record": service.to_ui(result.record) if result.record else None,
        }

    @app.route("/api/scan", methods=["POST"], endpoint="scan")
    @admin_required
    async def scan():
        data = json_body()
        result = await service.scan(str(data.get("uid") or ""))
        return ok(scan=_scan_ui(result))

    @app.route("/api/scan/log", methods=["GET"], endpoint="scan_log")
    @admin_required
    def scan_log():
        return ok(
            log=[
                {
                    "action": e.action.value,
                    "time": fmt_time(e.at),
                    "message": e.message,
                    "employeeId": e.employee_id,
                    "late": e.late,
                    "hours": e.hours,
                    "note": e.note,
                }
                for e in service.scan_log
            ]
        )

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="manual_entry")
    @admin_required
    async def manual_entry():
        data = json_body()
        record = await service.add_manual_entry(
            employee_id=str(data.get("employeeId") or ""),
            work_date=str(data.get("date") or ""),
            in_time=str(data.get("inTime") or "09:00"),
            out_time=str(data.get("outTime") or "18:00"),
        )
        return ok(201, record=service.to_ui(record))

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        try:
            view = AttendanceView(request.args.get("view") or AttendanceView.DAILY.value)
        except ValueError:
            raise ValidationError("view must be daily, weekly or monthly")

        own = None
        if session.get("role") == Role.EMPLOYEE.value:
            own = session.get("employee_id") or ""

        records = service.list_records(
            view=view,
            selected_date=date_arg("date", today_local()),
            branch_id=request.args.get("branch"),
            employee_id=request.args.get("employee"),
            own_employee_id=own,
        )
        return ok(records=[service.to_ui(r) for r in records])

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        if session.get("role") == Role.EMPLOYEE.value:
            employee = container.state.find_employee(session.get("employee_id"))
            if employee is None:
                return ok(employee=None)
            s = service.employee_summary(employee)
            return ok(
                employee={
                    "name": employee.name,
                    "month": s.month,
                    "present": s.present,
                    "absent": s.absent,
                    "leavesRemaining": s.leaves_remaining,
                    "salary": currency(s.salary),
                }
            )

        s = service.dashboard()
        return ok(
            today={
                "date": s.day.isoformat(),
                "employees": s.total_employees,
                "present": s.present,
                "absent": s.absent,
                "late": s.late,
                "overtimeHours": s.overtime_hours,
            }
        )
