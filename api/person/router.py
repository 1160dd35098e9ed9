"""
Person API endpoints.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from core import db
from core.errors import NotFoundError, WriteError
from core.params import ID_PATTERN, parse_identity

from . import repository
from .schemas import Person, PersonDetails

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/person")


def _person_id(raw: str, *, operation: str) -> int:
    try:
        return parse_identity(raw)
    except ValueError as exc:
        logger.warning("person_id_invalid operation=%s person_id=%s", operation, raw)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"error {operation} person",
        ) from exc


@router.get("/", response_model=list[Person])
async def list_persons(pool: asyncpg.Pool = Depends(db.get_pool)) -> list[Person]:
    try:
        return await repository.list_persons(pool)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/", response_model=Person, status_code=status.HTTP_201_CREATED)
async def add_person(
    details: PersonDetails,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> Person:
    try:
        return await repository.create_person(pool, details)
    except WriteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/{person_id}/", response_model=Person)
async def get_person(
    person_id: str = Path(..., pattern=ID_PATTERN),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> Person:
    pid = _person_id(person_id, operation="finding")
    try:
        return await repository.get_person(pool, pid)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.put("/{person_id}/", response_model=Person)
async def update_person(
    details: PersonDetails,
    person_id: str = Path(..., pattern=ID_PATTERN),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> Person:
    pid = _person_id(person_id, operation="updating")
    try:
        return await repository.update_person(pool, pid, details)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except WriteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/{person_id}/")
async def delete_person(
    person_id: str = Path(..., pattern=ID_PATTERN),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> Response:
    pid = _person_id(person_id, operation="deleting")
    try:
        await repository.delete_person(pool, pid)
    except WriteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_200_OK)
