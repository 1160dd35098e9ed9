"""
Task wire and storage shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from core.params import Int32


class TaskDetails(BaseModel):
    """
    Request body for create and update.

    `created` and `last_updated` are only honoured on create; when omitted
    the store stamps the current time.
    """

    title: str
    description: str
    due_by: datetime | None = None
    created: datetime | None = None
    last_updated: datetime | None = None
    assigned_to: Int32 | None = None
    priority: Int32 | None = None


class Task(BaseModel):
    id: int
    title: str
    description: str
    due_by: datetime | None = None
    created: datetime
    last_updated: datetime
    assigned_to: int | None = None
    priority: int | None = None


@dataclass(frozen=True)
class TaskRow:
    """
    One `task` row. Nullable columns are None when unset.

    Before insert, `id` is 0 and `created`/`last_updated` may be None, meaning
    the store stamps them.
    """

    title: str
    description: str
    created: datetime | None
    last_updated: datetime | None
    id: int = 0
    priority: int | None = None
    assigned_to: int | None = None
    due_by: datetime | None = None
