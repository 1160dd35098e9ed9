"""
Person persistence (raw SQL).

Reads go straight to the pool; every write runs in its own transaction.
"""

from __future__ import annotations

import logging

import asyncpg

from core import db
from core.errors import NotFoundError, WriteError

from .mapper import person_from_row, person_row_from_details, person_row_from_record
from .schemas import Person, PersonDetails

logger = logging.getLogger(__name__)


async def list_persons(pool: asyncpg.Pool) -> list[Person]:
    try:
        records = await db.fetch_all(
            pool,
            """
            SELECT id, name, email
            FROM person
            ORDER BY name ASC
            """,
        )
    except db.STORAGE_ERRORS as exc:
        logger.exception("person_list_failed")
        raise NotFoundError("Error finding persons data") from exc
    return [person_from_row(person_row_from_record(r)) for r in records]


async def get_person(pool: asyncpg.Pool, person_id: int) -> Person:
    try:
        records = await db.fetch_all(
            pool,
            """
            SELECT id, name, email
            FROM person
            WHERE id = $1
            """,
            person_id,
        )
    except db.STORAGE_ERRORS as exc:
        logger.exception("person_get_failed person_id=%s", person_id)
        raise NotFoundError("Error finding person details") from exc

    if len(records) != 1:
        logger.warning("person_get_row_count person_id=%s rows=%s", person_id, len(records))
        raise NotFoundError("Error finding person details")
    return person_from_row(person_row_from_record(records[0]))


async def create_person(pool: asyncpg.Pool, details: PersonDetails) -> Person:
    row = person_row_from_details(details)
    try:
        async with db.transaction(pool) as conn:
            record = await conn.fetchrow(
                """
                INSERT INTO person (name, email)
                VALUES ($1, $2)
                RETURNING id
                """,
                row.name,
                row.email,
            )
            if record is None:
                logger.error("person_create_no_row")
                raise WriteError("error adding person")
    except db.STORAGE_ERRORS as exc:
        logger.exception("person_create_failed")
        raise WriteError("error adding person") from exc

    person_id = int(record["id"])
    logger.info("person_created person_id=%s", person_id)
    return person_from_row(person_row_from_details(details, person_id=person_id))


async def update_person(pool: asyncpg.Pool, person_id: int, details: PersonDetails) -> Person:
    """
    Replace name and email of an existing person.

    The identity comes from the caller (the URL), never from the body.
    """
    row = person_row_from_details(details, person_id=person_id)
    try:
        async with db.transaction(pool) as conn:
            record = await conn.fetchrow(
                """
                UPDATE person
                SET name = $2,
                    email = $3
                WHERE id = $1
                RETURNING id, name, email
                """,
                row.id,
                row.name,
                row.email,
            )
    except db.STORAGE_ERRORS as exc:
        logger.exception("person_update_failed person_id=%s", person_id)
        raise WriteError("error updating person") from exc

    if record is None:
        logger.warning("person_update_missing person_id=%s", person_id)
        raise NotFoundError("Error finding person details")
    return person_from_row(person_row_from_record(dict(record)))


async def delete_person(pool: asyncpg.Pool, person_id: int) -> bool:
    """
    Delete a person by id. Returns False when no row matched.

    Fails with WriteError while a task still references the person.
    """
    try:
        async with db.transaction(pool) as conn:
            status = await conn.execute("DELETE FROM person WHERE id = $1", person_id)
    except db.STORAGE_ERRORS as exc:
        logger.exception("person_delete_failed person_id=%s", person_id)
        raise WriteError("error deleting person") from exc

    deleted = db.affected_rows(status) > 0
    if not deleted:
        logger.info("person_delete_noop person_id=%s", person_id)
    return deleted
