"""
Task API endpoints.

Optional task fields are left out of responses when unset.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from core import db
from core.errors import NotFoundError, WriteError
from core.params import ID_PATTERN, parse_identity

from . import repository
from .schemas import Task, TaskDetails

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/task")


def _task_id(raw: str, *, operation: str) -> int:
    try:
        return parse_identity(raw)
    except ValueError as exc:
        logger.warning("task_id_invalid operation=%s task_id=%s", operation, raw)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"error {operation} task",
        ) from exc


@router.get("/", response_model=list[Task], response_model_exclude_none=True)
async def list_tasks(pool: asyncpg.Pool = Depends(db.get_pool)) -> list[Task]:
    try:
        return await repository.list_tasks(pool)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post(
    "/",
    response_model=Task,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def add_task(
    details: TaskDetails,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> Task:
    try:
        return await repository.create_task(pool, details)
    except WriteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/{task_id}/", response_model=Task, response_model_exclude_none=True)
async def get_task(
    task_id: str = Path(..., pattern=ID_PATTERN),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> Task:
    tid = _task_id(task_id, operation="finding")
    try:
        return await repository.get_task(pool, tid)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.put("/{task_id}/", response_model=Task, response_model_exclude_none=True)
async def update_task(
    details: TaskDetails,
    task_id: str = Path(..., pattern=ID_PATTERN),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> Task:
    tid = _task_id(task_id, operation="updating")
    try:
        return await repository.update_task(pool, tid, details)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except WriteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/{task_id}/")
async def delete_task(
    task_id: str = Path(..., pattern=ID_PATTERN),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> Response:
    tid = _task_id(task_id, operation="deleting")
    try:
        await repository.delete_task(pool, tid)
    except WriteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_200_OK)
