"""
Person row <-> wire conversion.
"""

from __future__ import annotations

from typing import Any

from .schemas import Person, PersonDetails, PersonRow


def person_row_from_record(record: dict[str, Any]) -> PersonRow:
    return PersonRow(
        id=int(record["id"]),
        name=str(record["name"]),
        email=str(record["email"]),
    )


def person_from_row(row: PersonRow) -> Person:
    return Person(id=row.id, name=row.name, email=row.email)


def person_row_from_details(details: PersonDetails, *, person_id: int = 0) -> PersonRow:
    return PersonRow(id=person_id, name=details.name, email=details.email)
