"""Maintenance windows: scheduled periods that suppress alerts.

Supported strategies are one-time windows, repeats every N days, on given
weekdays or days of the month, cron-based schedules and manual windows.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union


class Strategy(str, Enum):
    """Scheduling pattern of a maintenance window."""

    SINGLE = "single"
    RECURRING_INTERVAL = "recurring-interval"
    RECURRING_WEEKDAY = "recurring-weekday"
    RECURRING_DAY_OF_MONTH = "recurring-day-of-month"
    CRON = "cron"
    MANUAL = "manual"


_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)


def _parse_time(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"invalid time value: {value!r}")
    match = _RFC3339.match(value)
    if match is None:
        raise ValueError(f"invalid RFC 3339 time: {value!r}")
    date, clock, fraction, zone = match.groups()
    micro = (fraction or "")[:6].ljust(6, "0")
    offset = "+00:00" if zone.upper() == "Z" else zone
    return datetime.fromisoformat(f"{date}T{clock}.{micro}{offset}")


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def _strategy(value: Any) -> Union[Strategy, str]:
    text = str(value or "")
    try:
        return Strategy(text)
    except ValueError:
        return text


@dataclass
class TimeOfDay:
    """A time of day: hours 0-23, minutes and seconds 0-59."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TimeOfDay:
        return cls(
            hours=int(data.get("hours") or 0),
            minutes=int(data.get("minutes") or 0),
            seconds=int(data.get("seconds") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"hours": self.hours, "minutes": self.minutes, "seconds": self.seconds}


@dataclass
class Timeslot:
    """A scheduled maintenance period computed by the server."""

    start_date: datetime = _ZERO_TIME
    end_date: datetime = _ZERO_TIME

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Timeslot:
        start = data.get("startDate")
        end = data.get("endDate")
        return cls(
            start_date=_ZERO_TIME if start is None else _parse_time(start),
            end_date=_ZERO_TIME if end is None else _parse_time(end),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "startDate": _format_time(self.start_date),
            "endDate": _format_time(self.end_date),
        }


@dataclass
class Maintenance:
    """A maintenance window as stored by the server.

    ``date_range`` holds start and end; both are ``None`` for recurring
    strategies. ``status``, ``timezone_offset`` and ``timeslot_list`` are
    computed by the server.
    """

    id: int = 0
    title: str = ""
    description: str = ""
    strategy: Union[Strategy, str] = ""
    active: bool = False
    interval_day: int = 0
    date_range: Optional[list[Optional[datetime]]] = None
    time_range: list[TimeOfDay] = field(default_factory=list)
    weekdays: list[int] = field(default_factory=list)
    days_of_month: list[Union[int, str]] = field(default_factory=list)
    cron: str = ""
    duration: int = 0
    duration_minutes: int = 0
    timezone: str = ""
    timezone_option: str = ""
    timezone_offset: str = ""
    status: str = ""
    timeslot_list: list[Timeslot] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Maintenance:
        raw_range = data.get("dateRange")
        date_range = (
            None
            if raw_range is None
            else [None if item is None else _parse_time(item) for item in raw_range]
        )
        return cls(
            id=int(data.get("id") or 0),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            strategy=_strategy(data.get("strategy")),
            active=bool(data.get("active", False)),
            interval_day=int(data.get("intervalDay") or 0),
            date_range=date_range,
            time_range=[TimeOfDay.from_dict(item) for item in data.get("timeRange") or []],
            weekdays=[int(day) for day in data.get("weekdays") or []],
            days_of_month=list(data.get("daysOfMonth") or []),
            cron=str(data.get("cron") or ""),
            duration=int(data.get("duration") or 0),
            duration_minutes=int(data.get("durationMinutes") or 0),
            timezone=str(data.get("timezone") or ""),
            timezone_option=str(data.get("timezoneOption") or ""),
            timezone_offset=str(data.get("timezoneOffset") or ""),
            status=str(data.get("status") or ""),
            timeslot_list=[
                Timeslot.from_dict(item) for item in data.get("timeslotList") or []
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        strategy = (
            self.strategy.value if isinstance(self.strategy, Strategy) else self.strategy
        )
        result: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "strategy": strategy,
            "active": self.active,
        }
        if self.interval_day:
            result["intervalDay"] = self.interval_day
        result["dateRange"] = (
            None
            if self.date_range is None
            else [None if item is None else _format_time(item) for item in self.date_range]
        )
        optional: list[tuple[str, Any]] = [
            ("timeRange", [item.to_dict() for item in self.time_range]),
            ("weekdays", list(self.weekdays)),
            ("daysOfMonth", list(self.days_of_month)),
            ("cron", self.cron),
            ("duration", self.duration),
            ("durationMinutes", self.duration_minutes),
            ("timezone", self.timezone),
            ("timezoneOption", self.timezone_option),
            ("timezoneOffset", self.timezone_offset),
            ("status", self.status),
            ("timeslotList", [item.to_dict() for item in self.timeslot_list]),
        ]
        result.update((key, value) for key, value in optional if value)
        return result


def new_single_maintenance(
    title: str, description: str, start_date: datetime, end_date: datetime, timezone: str
) -> Maintenance:
    """Create a one-time maintenance window."""
    return Maintenance(
        title=title,
        description=description,
        strategy=Strategy.SINGLE,
        active=True,
        date_range=[start_date, end_date],
        timezone_option=timezone,
    )


def new_recurring_interval_maintenance(
    title: str, description: str, interval_day: int, time_range: list[TimeOfDay], timezone: str
) -> Maintenance:
    """Create a maintenance window that repeats every ``interval_day`` days."""
    return Maintenance(
        title=title,
        description=description,
        strategy=Strategy.RECURRING_INTERVAL,
        active=True,
        interval_day=interval_day,
        date_range=[None, None],
        time_range=list(time_range),
        timezone_option=timezone,
    )


def new_recurring_weekday_maintenance(
    title: str, description: str, weekdays: list[int], time_range: list[TimeOfDay], timezone: str
) -> Maintenance:
    """Create a window repeating on weekdays (1=Monday ... 7=Sunday)."""
    return Maintenance(
        title=title,
        description=description,
        strategy=Strategy.RECURRING_WEEKDAY,
        active=True,
        date_range=[None, None],
        time_range=list(time_range),
        weekdays=list(weekdays),
        timezone_option=timezone,
    )


def new_recurring_day_of_month_maintenance(
    title: str,
    description: str,
    days_of_month: list[Union[int, str]],
    time_range: list[TimeOfDay],
    timezone: str,
) -> Maintenance:
    """Create a window repeating on days 1-31 or "lastDay1".."lastDay4"."""
    return Maintenance(
        title=title,
        description=description,
        strategy=Strategy.RECURRING_DAY_OF_MONTH,
        active=True,
        date_range=[None, None],
        time_range=list(time_range),
        days_of_month=list(days_of_month),
        timezone_option=timezone,
    )


def new_cron_maintenance(
    title: str, description: str, cron_expr: str, duration_minutes: int, timezone: str
) -> Maintenance:
    """Create a window scheduled by a cron expression lasting ``duration_minutes``."""
    return Maintenance(
        title=title,
        description=description,
        strategy=Strategy.CRON,
        active=True,
        date_range=[None, None],
        cron=cron_expr,
        duration_minutes=duration_minutes,
        timezone_option=timezone,
    )


def new_manual_maintenance(title: str, description: str) -> Maintenance:
    """Create a manually activated maintenance window without a schedule."""
    return Maintenance(
        title=title,
        description=description,
        strategy=Strategy.MANUAL,
        active=True,
        date_range=[None, None],
    )