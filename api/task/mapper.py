"""
Task row <-> wire conversion.

Nullable columns become omitted JSON fields and back. Timestamps keep their
wall-clock value; the columns are `timestamp without time zone`, so an offset
on input is dropped rather than converted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .schemas import Task, TaskDetails, TaskRow


def _naive(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


def task_row_from_record(record: dict[str, Any]) -> TaskRow:
    return TaskRow(
        id=int(record["id"]),
        title=str(record["title"]),
        description=str(record["description"]),
        priority=_optional_int(record.get("priority")),
        created=record["created"],
        last_updated=record["last_updated"],
        assigned_to=_optional_int(record.get("assigned_to")),
        due_by=record.get("due_by"),
    )


def task_from_row(row: TaskRow) -> Task:
    return Task(
        id=row.id,
        title=row.title,
        description=row.description,
        due_by=row.due_by,
        created=row.created,
        last_updated=row.last_updated,
        assigned_to=row.assigned_to,
        priority=row.priority,
    )


def task_row_from_details(details: TaskDetails, *, task_id: int = 0) -> TaskRow:
    return TaskRow(
        id=task_id,
        title=details.title,
        description=details.description,
        priority=details.priority,
        created=_naive(details.created),
        last_updated=_naive(details.last_updated),
        assigned_to=details.assigned_to,
        due_by=_naive(details.due_by),
    )
