from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from .. import crud
from ..db import get_session
from ..deps import get_user_id
from ..schemas import ListCreate, ListOut, ListUpdate

router = APIRouter()


@router.get("", response_model=list[ListOut])
async def list_lists(user_id: str = Depends(get_user_id), db: AsyncSession = Depends(get_session)):
    return await crud.list_lists(db, user_id)


@router.post("", response_model=ListOut)
async def create_list(
    payload: ListCreate, user_id: str = Depends(get_user_id), db: AsyncSession = Depends(get_session)
):
    return await crud.create_list(db, user_id, payload)


@router.patch("/{list_id}", response_model=ListOut)
async def update_list(
    list_id: int,
    payload: ListUpdate,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_session),
):
    task_list = await crud.update_list(db, user_id, list_id, payload)
    if not task_list:
        raise HTTPException(404, "List not found")
    return task_list


@router.delete("/{list_id}")
async def delete_list(list_id: int, user_id: str = Depends(get_user_id), db: AsyncSession = Depends(get_session)):
    ok = await crud.delete_list(db, user_id, list_id)
    if not ok:
        raise HTTPException(404, "List not found")
    return {"deleted": True}
