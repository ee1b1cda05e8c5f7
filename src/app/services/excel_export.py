"""
Excel export encoding

Column templates, display-name resolution and workbook serialization for the
event export. Everything here is pure: it gets loaded AuthEvents and returns
bytes, so it can be tested without a database.
"""

import re
from collections import Counter, defaultdict
from datetime import date, datetime
from io import BytesIO
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from src.domain.entities import AuthEvent, ExportType, User

UNKNOWN_USER = "Unknown User"

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (header, column width) per template; widths are fixed presentation hints
EXPORT_COLUMNS: Dict[ExportType, List[Tuple[str, int]]] = {
    ExportType.full: [
        ("Event ID", 36),
        ("Event Type", 18),
        ("User ID", 36),
        ("User Name", 30),
        ("Application", 20),
        ("Timestamp", 26),
        ("Date", 12),
        ("Time", 12),
    ],
    ExportType.simple: [
        ("User Name", 30),
        ("Event Type", 18),
        ("Date", 12),
        ("Time", 12),
    ],
    ExportType.user_activity: [
        ("User Name", 30),
        ("Auth User ID", 36),
        ("Date", 12),
        ("Event Count", 12),
        ("Event Types", 40),
    ],
}

SHEET_TITLES = {
    ExportType.full: "Events",
    ExportType.simple: "Events",
    ExportType.user_activity: "User Activity",
}

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")


def resolve_display_name(user: Optional[User]) -> str:
    """
    first + last -> whichever one is set -> provider subject id -> Unknown User
    """
    if user is None:
        return UNKNOWN_USER
    if user.first_name and user.last_name:
        return f"{user.first_name} {user.last_name}"
    if user.first_name or user.last_name:
        return user.first_name or user.last_name
    return user.auth_user_id or UNKNOWN_USER


def _localize(created_at: datetime, tz: ZoneInfo) -> datetime:
    return created_at.replace(tzinfo=ZoneInfo("UTC")).astimezone(tz)


def format_date(created_at: datetime, tz: ZoneInfo) -> str:
    return _localize(created_at, tz).strftime("%m/%d/%Y")


def format_time(created_at: datetime, tz: ZoneInfo) -> str:
    return _localize(created_at, tz).strftime("%I:%M:%S %p")


def format_timestamp(created_at: datetime) -> str:
    return created_at.isoformat(timespec="milliseconds") + "Z"


def _full_rows(events: Iterable[AuthEvent], tz: ZoneInfo) -> List[list]:
    return [
        [
            str(event.id),
            event.event_type,
            str(event.user_id),
            resolve_display_name(event.user),
            event.application.name if event.application else "",
            format_timestamp(event.created_at),
            format_date(event.created_at, tz),
            format_time(event.created_at, tz),
        ]
        for event in events
    ]


def _simple_rows(events: Iterable[AuthEvent], tz: ZoneInfo) -> List[list]:
    return [
        [
            resolve_display_name(event.user),
            event.event_type,
            format_date(event.created_at, tz),
            format_time(event.created_at, tz),
        ]
        for event in events
    ]


def _user_activity_rows(events: Iterable[AuthEvent], tz: ZoneInfo) -> List[list]:
    """One row per user and calendar day, newest day first"""
    buckets: Dict[Tuple[object, date], Counter] = defaultdict(Counter)
    users: Dict[object, Optional[User]] = {}

    for event in events:
        day = _localize(event.created_at, tz).date()
        buckets[(event.user_id, day)][event.event_type] += 1
        users.setdefault(event.user_id, event.user)

    rows = []
    for (user_id, day), type_counts in buckets.items():
        user = users[user_id]
        breakdown = ", ".join(
            f"{event_type}: {count}"
            for event_type, count in sorted(type_counts.items(), key=lambda item: (-item[1], item[0]))
        )
        rows.append(
            (
                day,
                [
                    resolve_display_name(user),
                    user.auth_user_id if user else "",
                    day.strftime("%m/%d/%Y"),
                    sum(type_counts.values()),
                    breakdown,
                ],
            )
        )

    rows.sort(key=lambda item: item[1][0])
    rows.sort(key=lambda item: item[0], reverse=True)
    return [row for _, row in rows]


_ROW_BUILDERS = {
    ExportType.full: _full_rows,
    ExportType.simple: _simple_rows,
    ExportType.user_activity: _user_activity_rows,
}


def build_rows(
    events: Sequence[AuthEvent], export_type: ExportType, timezone: str = "UTC"
) -> List[list]:
    return _ROW_BUILDERS[export_type](events, ZoneInfo(timezone))


def encode_workbook(export_type: ExportType, rows: Sequence[Sequence]) -> bytes:
    columns = EXPORT_COLUMNS[export_type]

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLES[export_type]

    ws.append([header for header, _ in columns])
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row in rows:
        ws.append(list(row))

    for index, (_, width) in enumerate(columns, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def sanitize_filename_part(value: str) -> str:
    return _UNSAFE.sub("", _WHITESPACE.sub("_", value.strip()))


def export_filename(
    application_name: str,
    export_type: ExportType,
    start: Optional[date],
    end: Optional[date],
    today: date,
) -> str:
    """
    auth_events_<app>[_<template>][_<range>]_<YYYY-MM-DD>.xlsx

    The range comes from the parsed filter bounds, so dates the filter
    ignored never reach the name. Same application, template, range and day
    always give the same name.
    """
    parts = ["auth_events", sanitize_filename_part(application_name) or "Unknown"]

    if export_type != ExportType.full:
        parts.append(export_type.value.replace("-", "_"))

    if start and end:
        parts.append(f"{start.isoformat()}_to_{end.isoformat()}")
    elif start:
        parts.append(f"from_{start.isoformat()}")
    elif end:
        parts.append(f"to_{end.isoformat()}")

    parts.append(today.isoformat())
    return "_".join(parts) + ".xlsx"
