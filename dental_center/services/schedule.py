"""Calendar grouping of incidents by appointment day."""

from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import MAXYEAR, MINYEAR, date
from typing import Dict, List, Sequence

from pydantic import Field

from dental_center.models.base import Base
from dental_center.models.incident import Incident


class CalendarDay(Base):
    day: date
    incidents: List[Incident] = Field(default_factory=list)


class CalendarMonth(Base):
    year: int
    month: int
    days: List[CalendarDay] = Field(default_factory=list)


def incidents_on(incidents: Sequence[Incident], day: date) -> List[Incident]:
    """Incidents whose appointment falls on ``day``, earliest first."""

    return sorted(
        (i for i in incidents if i.appointment_date.date() == day),
        key=lambda i: i.appointment_date,
    )


def month_calendar(incidents: Sequence[Incident], year: int, month: int) -> CalendarMonth:
    """Build one entry per day of the month with that day's incidents."""

    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    if not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"year must be in {MINYEAR}..{MAXYEAR}, got {year}")

    by_day: Dict[date, List[Incident]] = defaultdict(list)
    for incident in incidents:
        scheduled = incident.appointment_date
        if scheduled.year == year and scheduled.month == month:
            by_day[scheduled.date()].append(incident)

    _, days_in_month = calendar.monthrange(year, month)
    days = []
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        day_incidents = sorted(by_day.get(day, []), key=lambda i: i.appointment_date)
        days.append(CalendarDay(day=day, incidents=day_incidents))

    return CalendarMonth(year=year, month=month, days=days)
