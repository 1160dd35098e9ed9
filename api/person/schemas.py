"""
Person wire and storage shapes.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


class PersonDetails(BaseModel):
    name: str
    email: str


class Person(BaseModel):
    id: int
    name: str
    email: str


@dataclass(frozen=True)
class PersonRow:
    """
    One `person` row as stored. Every column is NOT NULL.

    `id` is 0 until storage assigns one (SERIAL starts at 1).
    """

    name: str
    email: str
    id: int = 0
