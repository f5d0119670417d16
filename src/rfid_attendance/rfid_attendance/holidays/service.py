from __future__ import annotations

from datetime import date

from ..common.datetime_utils import parse_iso_date
from ..common.formatting import fmt_date
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..state import AppState
from .model import Holiday


class HolidayService:
    def __init__(self, state: AppState):
        self._state = state

    def list_holidays(self) -> list[Holiday]:
        return sorted(self._state.holidays, key=lambda h: h.holiday_date)

    async def add(self, *, holiday_date: str | date, name: str) -> Holiday:
        name = require_non_empty(name, "Holiday name")
        if isinstance(holiday_date, str):
            text = require_non_empty(holiday_date, "Date")
            try:
                holiday_date = parse_iso_date(text)
            except ValueError:
                raise ValidationError(f"Invalid date (YYYY-MM-DD): {text!r}")
        if holiday_date is None:
            raise ValidationError("Date is required")

        holiday = Holiday(holiday_id=new_id(), holiday_date=holiday_date, name=name)
        await self._state.save_holidays([*self._state.holidays, holiday])
        return holiday

    async def delete(self, holiday_id: str) -> None:
        if not any(h.holiday_id == holiday_id for h in self._state.holidays):
            raise ValidationError("Holiday not found")
        await self._state.save_holidays([h for h in self._state.holidays if h.holiday_id != holiday_id])

    @staticmethod
    def to_ui(h: Holiday) -> dict:
        return {
            "id": h.holiday_id,
            "date": h.holiday_date.isoformat(),
            "date_label": fmt_date(h.holiday_date),
            "day": h.holiday_date.strftime("%A"),
            "name": h.name,
        }
