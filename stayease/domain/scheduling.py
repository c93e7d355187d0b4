# stayease/domain/scheduling.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

WIRE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def format_wire_datetime(dt: datetime) -> str:
    """Local wall-clock time as the backend's LocalDateTime string (no offset)."""
    return dt.strftime(WIRE_FORMAT)


def combine_date_time(date_str: str, time_str: str) -> str:
    """
    Join the booking form's date (YYYY-MM-DD) and time (HH:MM) fields.

    Returns "" when either is blank, matching what the booking form sends
    when the user skipped a field. Both parts are validated so a bad form
    value fails here instead of at the backend.
    """
    date_str = (date_str or "").strip()
    time_str = (time_str or "").strip()
    if not date_str or not time_str:
        return ""

    d = date.fromisoformat(date_str)
    t = datetime.strptime(time_str, "%H:%M").time()
    return format_wire_datetime(datetime.combine(d, t))


def _parse_hhmm(s: str) -> Optional[time]:
    parts = (s or "").split(":")
    try:
        hours = int(parts[0] or "0")
        minutes = int(parts[1] or "0") if len(parts) > 1 else 0
        return time(hours, minutes)
    except (ValueError, IndexError):
        return None


def _parse_day(s: str) -> Optional[date]:
    try:
        return date.fromisoformat((s or "")[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class VisitTime:
    day: Optional[date]
    at: Optional[time]

    @property
    def known(self) -> bool:
        return self.day is not None


def parse_visit_time(appointment_time: Optional[str], appointment_date: Optional[str] = None) -> VisitTime:
    """
    Order of attempts:
      1) appointment_time as a full ISO timestamp
      2) legacy split fields: appointment_date + appointment_time as HH:MM
      3) appointment_time split on "T" by hand
    """
    if not appointment_time:
        if appointment_date:
            return VisitTime(_parse_day(appointment_date), None)
        return VisitTime(None, None)

    try:
        dt = datetime.fromisoformat(appointment_time.replace("Z", "+00:00"))
        return VisitTime(dt.date(), dt.time().replace(second=0, microsecond=0, tzinfo=None))
    except ValueError:
        pass

    if appointment_date:
        day = _parse_day(appointment_date)
        if day is not None:
            return VisitTime(day, _parse_hhmm(appointment_time))

    parts = appointment_time.split("T")
    if len(parts) == 2:
        return VisitTime(_parse_day(parts[0]), _parse_hhmm(parts[1]))

    return VisitTime(None, None)


def format_day(d: date) -> str:
    # "Sat, Mar 1, 2025"
    return f"{d.strftime('%a')}, {d.strftime('%b')} {d.day}, {d.year}"


def format_clock(t: time) -> str:
    # "2:30 PM"
    hour12 = t.hour % 12 or 12
    return f"{hour12}:{t.minute:02d} {'AM' if t.hour < 12 else 'PM'}"
