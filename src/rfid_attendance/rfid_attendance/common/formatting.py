from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional


def round2(value: float) -> float:
    """Round half away from zero to 2 decimal places."""
    scaled = abs(value) * 100
    rounded = math.floor(scaled + 0.5) / 100
    return math.copysign(rounded, value) if value else 0.0


def fmt_date(value: date) -> str:
    """e.g. 05 Jan 2026"""
    return value.strftime("%d %b %Y")


def fmt_time(value: Optional[datetime]) -> str:
    """e.g. 09:05 am"""
    if not value:
        return "-"
    return value.strftime("%I:%M %p").lower()


def fmt_hours(value: float) -> str:
    return f"{value:.1f}"


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def currency(amount: Optional[float]) -> str:
    """Rupee amount with Indian digit grouping, e.g. ₹1,23,456.5"""
    value = float(amount or 0)
    sign = "-" if value < 0 else ""
    text = f"{abs(value):.2f}".rstrip("0").rstrip(".")
    whole, _, frac = text.partition(".")
    grouped = _group_indian(whole)
    return f"₹{sign}{grouped}" + (f".{frac}" if frac else "")
