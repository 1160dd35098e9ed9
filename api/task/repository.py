"""
Task persistence (raw SQL).

`created` is written once by the insert; `last_updated` is stamped by the
database on every update, whatever the request body says.
"""

from __future__ import annotations

import logging

import asyncpg

from core import db
from core.errors import NotFoundError, WriteError

from .mapper import task_from_row, task_row_from_details, task_row_from_record
from .schemas import Task, TaskDetails

logger = logging.getLogger(__name__)

TASK_COLUMNS = "id, title, description, priority, created, last_updated, assigned_to, due_by"


async def list_tasks(pool: asyncpg.Pool) -> list[Task]:
    try:
        records = await db.fetch_all(
            pool,
            f"""
            SELECT {TASK_COLUMNS}
            FROM task
            ORDER BY id ASC
            """,
        )
    except db.STORAGE_ERRORS as exc:
        logger.exception("task_list_failed")
        raise NotFoundError("Error finding tasks data") from exc
    return [task_from_row(task_row_from_record(r)) for r in records]


async def get_task(pool: asyncpg.Pool, task_id: int) -> Task:
    try:
        records = await db.fetch_all(
            pool,
            f"""
            SELECT {TASK_COLUMNS}
            FROM task
            WHERE id = $1
            """,
            task_id,
        )
    except db.STORAGE_ERRORS as exc:
        logger.exception("task_get_failed task_id=%s", task_id)
        raise NotFoundError("Error finding task details") from exc

    if len(records) != 1:
        logger.warning("task_get_row_count task_id=%s rows=%s", task_id, len(records))
        raise NotFoundError("Error finding task details")
    return task_from_row(task_row_from_record(records[0]))


async def create_task(pool: asyncpg.Pool, details: TaskDetails) -> Task:
    row = task_row_from_details(details)
    try:
        async with db.transaction(pool) as conn:
            record = await conn.fetchrow(
                f"""
                INSERT INTO task (title, description, priority, created, last_updated, assigned_to, due_by)
                VALUES ($1, $2, $3, COALESCE($4, LOCALTIMESTAMP), COALESCE($5, LOCALTIMESTAMP), $6, $7)
                RETURNING {TASK_COLUMNS}
                """,
                row.title,
                row.description,
                row.priority,
                row.created,
                row.last_updated,
                row.assigned_to,
                row.due_by,
            )
            if record is None:
                logger.error("task_create_no_row assigned_to=%s", row.assigned_to)
                raise WriteError("error adding task")
    except db.STORAGE_ERRORS as exc:
        logger.exception("task_create_failed assigned_to=%s", row.assigned_to)
        raise WriteError("error adding task") from exc

    task = task_from_row(task_row_from_record(dict(record)))
    logger.info("task_created task_id=%s", task.id)
    return task


async def update_task(pool: asyncpg.Pool, task_id: int, details: TaskDetails) -> Task:
    """
    Replace every mutable column of a task.

    `created` and `last_updated` from the body are ignored.
    """
    row = task_row_from_details(details, task_id=task_id)
    try:
        async with db.transaction(pool) as conn:
            record = await conn.fetchrow(
                f"""
                UPDATE task
                SET title = $2,
                    description = $3,
                    priority = $4,
                    last_updated = GREATEST(LOCALTIMESTAMP, last_updated),
                    assigned_to = $5,
                    due_by = $6
                WHERE id = $1
                RETURNING {TASK_COLUMNS}
                """,
                row.id,
                row.title,
                row.description,
                row.priority,
                row.assigned_to,
                row.due_by,
            )
    except db.STORAGE_ERRORS as exc:
        logger.exception("task_update_failed task_id=%s", task_id)
        raise WriteError("error updating task") from exc

    if record is None:
        logger.warning("task_update_missing task_id=%s", task_id)
        raise NotFoundError("Error finding task details")
    return task_from_row(task_row_from_record(dict(record)))


async def delete_task(pool: asyncpg.Pool, task_id: int) -> bool:
    """
    Delete a task by id. Returns False when no row matched.
    """
    try:
        async with db.transaction(pool) as conn:
            status = await conn.execute("DELETE FROM task WHERE id = $1", task_id)
    except db.STORAGE_ERRORS as exc:
        logger.exception("task_delete_failed task_id=%s", task_id)
        raise WriteError("error deleting task") from exc

    deleted = db.affected_rows(status) > 0
    if not deleted:
        logger.info("task_delete_noop task_id=%s", task_id)
    return deleted
