from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from .. import crud
from ..db import get_session
from ..deps import get_now, get_user_id
from ..nlp.parser import parse_quick_input
from ..schemas import MoveIn, PinIn, QuickTaskIn, TaskCreate, TaskOut, TaskUpdate

router = APIRouter()


async def _require_list(db: AsyncSession, user_id: str, list_id: int | None) -> None:
    if list_id is not None and not await crud.get_list(db, user_id, list_id):
        raise HTTPException(404, "List not found")


def _found(task):
    if not task:
        raise HTTPException(404, "Task not found")
    return task


@router.post("", response_model=TaskOut)
async def create_task(
    payload: TaskCreate, user_id: str = Depends(get_user_id), db: AsyncSession = Depends(get_session)
):
    await _require_list(db, user_id, payload.list_id)
    return await crud.create_task(db, user_id, payload)


@router.post("/quick", response_model=TaskOut)
async def quick_add(
    payload: QuickTaskIn,
    user_id: str = Depends(get_user_id),
    now: datetime = Depends(get_now),
    db: AsyncSession = Depends(get_session),
):
    """Create a task from one quick-add line, e.g. 'Buy milk @ tomorrow 9am @ Pasadena #errands'."""
    await _require_list(db, user_id, payload.list_id)
    parsed = parse_quick_input(payload.text, now=now)
    try:
        task = crud.task_from_parsed(
            parsed, list_id=payload.list_id, category=payload.category, priority=payload.priority
        )
    except ValidationError as exc:
        raise HTTPException(422, f"Cannot create task from {payload.text!r}: {exc.errors()[0]['msg']}") from exc
    return await crud.create_task(db, user_id, task)


@router.get("", response_model=list[TaskOut])
async def list_tasks(
    list_id: int | None = Query(None, description="Only tasks in this list"),
    inbox: bool = Query(False, description="Only tasks without a list; cannot be combined with list_id"),
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_session),
):
    if inbox and list_id is not None:
        raise HTTPException(422, "Use either list_id or inbox, not both")
    return await crud.list_tasks(db, user_id, list_id=list_id, inbox=inbox)


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(task_id: int, user_id: str = Depends(get_user_id), db: AsyncSession = Depends(get_session)):
    return _found(await crud.get_task(db, user_id, task_id))


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_session),
):
    return _found(await crud.update_task(db, user_id, task_id, payload))


@router.post("/{task_id}/toggle", response_model=TaskOut)
async def toggle_task(task_id: int, user_id: str = Depends(get_user_id), db: AsyncSession = Depends(get_session)):
    return _found(await crud.toggle_task_done(db, user_id, task_id))


@router.put("/{task_id}/pin", response_model=TaskOut)
async def pin_task(
    task_id: int, payload: PinIn, user_id: str = Depends(get_user_id), db: AsyncSession = Depends(get_session)
):
    return _found(await crud.set_task_pinned(db, user_id, task_id, payload.is_pinned))


@router.put("/{task_id}/list", response_model=TaskOut)
async def move_task(
    task_id: int, payload: MoveIn, user_id: str = Depends(get_user_id), db: AsyncSession = Depends(get_session)
):
    await _require_list(db, user_id, payload.list_id)
    return _found(await crud.move_task(db, user_id, task_id, payload.list_id))


@router.delete("/{task_id}")
async def delete_task(task_id: int, user_id: str = Depends(get_user_id), db: AsyncSession = Depends(get_session)):
    ok = await crud.delete_task(db, user_id, task_id)
    if not ok:
        raise HTTPException(404, "Task not found")
    return {"deleted": True}
