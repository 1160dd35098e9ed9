"""
Idempotent schema bootstrap and one-time sample data.
"""

from __future__ import annotations

import logging

import asyncpg

from . import db

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS person (
    id SERIAL PRIMARY KEY,
    name VARCHAR NOT NULL,
    email VARCHAR NOT NULL
);

CREATE TABLE IF NOT EXISTS task (
    id SERIAL PRIMARY KEY,
    title VARCHAR NOT NULL,
    description VARCHAR NOT NULL,
    priority INTEGER NULL,
    created timestamp NOT NULL,
    last_updated timestamp NOT NULL,
    assigned_to INTEGER NULL REFERENCES person (id),
    due_by timestamp without time zone NULL
);

CREATE TABLE IF NOT EXISTS init (init bool);
"""

SAMPLE_PERSONS = [
    ("Greg Sample", "greg.sample@todo.net"),
    ("Jeff Sample", "jeff.sample@todo.net"),
    ("Mike Sample", "mike.sample@todo.net"),
]

# (title, description, priority)
SAMPLE_TASKS = [
    ("Create DB", "Create database to hold to-dos data", 1),
    (
        "Add DB initialization",
        "Add code to check if the DB is initialized, if not add sample data to the DB",
        2,
    ),
    ("Add access methods for Person", "Add access methods to the Person data", 3),
    ("Add access methods for Task", "Add access methods to the Task data", 3),
    (
        "Add NULL handling for tasks",
        "Tasks have field that can be null add code to deal with it",
        None,
    ),
]


async def ensure_schema(pool: asyncpg.Pool) -> None:
    logger.info("Adding table definitions (if need be)")
    await db.execute(pool, SCHEMA_SQL)


async def is_seeded(pool: asyncpg.Pool) -> bool:
    row = await db.fetch_one(pool, "SELECT count(*) AS n FROM init")
    return int((row or {}).get("n", 0)) > 0


async def seed_sample_data(pool: asyncpg.Pool) -> bool:
    """
    Insert the sample persons and tasks once, guarded by the `init` table.

    Returns True when data was inserted.
    """
    if await is_seeded(pool):
        logger.info("DB already initialized")
        return False

    logger.info("Adding sample data to DB")
    async with db.transaction(pool) as conn:
        await conn.executemany(
            "INSERT INTO person (name, email) VALUES ($1, $2)",
            SAMPLE_PERSONS,
        )
        await conn.executemany(
            """
            INSERT INTO task (title, description, priority, created, last_updated)
            VALUES ($1, $2, $3, LOCALTIMESTAMP, LOCALTIMESTAMP)
            """,
            SAMPLE_TASKS,
        )
        await conn.execute("INSERT INTO init (init) VALUES (true)")
    return True
