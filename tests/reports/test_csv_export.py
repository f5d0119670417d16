from datetime import date, datetime

from rfid_attendance.common.formatting import currency, fmt_date, fmt_time, round2
from rfid_attendance.reports.csv_export import csv_filename, to_csv
from rfid_attendance.reports.model import Report


def test_header_is_plain_and_fields_are_quoted():
    report = Report(
        title="Late Report - 2026-01",
        columns=["Name", "Dates"],
        rows=[{"Name": "Asha", "Dates": "07 Jan 2026, 08 Jan 2026"}, {"Name": 'Ravi "R"', "Dates": ""}],
    )

    assert to_csv(report) == 'Name,Dates\n"Asha","07 Jan 2026, 08 Jan 2026"\n"Ravi ""R""",""'


def test_empty_report_is_header_only():
    assert to_csv(Report(title="x", columns=["A", "B"])) == "A,B"


def test_filename_replaces_whitespace():
    report = Report(title="Daily Attendance Report - 06 Jan 2026", columns=[])

    assert csv_filename(report) == "Daily_Attendance_Report_-_06_Jan_2026.csv"


def test_currency_uses_indian_grouping():
    assert currency(27000) == "₹27,000"
    assert currency(123456.5) == "₹1,23,456.5"
    assert currency(999) == "₹999"
    assert currency(-440) == "₹-440"
    assert currency(None) == "₹0"


def test_display_formats():
    assert fmt_date(date(2026, 1, 5)) == "05 Jan 2026"
    assert fmt_time(datetime(2026, 1, 5, 9, 5)) == "09:05 am"
    assert fmt_time(None) == "-"
    assert round2(0.125) == 0.13
    assert round2(-0.125) == -0.13
