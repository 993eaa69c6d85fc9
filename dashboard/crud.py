import logging
from datetime import UTC

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Task, TaskList, TaskStatus
from .schemas import ListCreate, ListUpdate, ParsedInput, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def _normalize_due(dt):
    if dt is None:
        return None
    # If tz-aware, convert to UTC and drop tzinfo (store naive UTC)
    if getattr(dt, "tzinfo", None) is not None:
        return dt.astimezone(UTC).replace(tzinfo=None)
    return dt


# --- tasks -----------------------------------------------------------------


async def create_task(db: AsyncSession, user_id: str, payload: TaskCreate) -> Task:
    data = payload.model_dump()
    data["due_at"] = _normalize_due(data.get("due_at"))
    task = Task(user_id=user_id, **data)
    db.add(task)
    await db.commit()
    await db.refresh(task)
    logger.info("Created task %s for user %s", task.id, user_id)
    return task


def task_from_parsed(parsed: ParsedInput, **defaults) -> TaskCreate:
    """Map a quick-input parse onto a create payload; raises ValidationError on a blank title."""
    return TaskCreate(
        title=parsed.title,
        description=parsed.description,
        location=parsed.location,
        tags=parsed.tags,
        due_at=parsed.due_at,
        **defaults,
    )


async def get_task(db: AsyncSession, user_id: str, task_id: int) -> Task | None:
    res = await db.execute(select(Task).where(Task.id == task_id, Task.user_id == user_id))
    return res.scalar_one_or_none()


async def list_tasks(db: AsyncSession, user_id: str, list_id: int | None = None, inbox: bool = False) -> list[Task]:
    stmt = select(Task).where(Task.user_id == user_id)
    if inbox:
        stmt = stmt.where(Task.list_id.is_(None))
    elif list_id is not None:
        stmt = stmt.where(Task.list_id == list_id)
    stmt = stmt.order_by(Task.is_pinned.desc(), Task.category, Task.created_at, Task.id)
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def update_task(db: AsyncSession, user_id: str, task_id: int, payload: TaskUpdate):
    task = await get_task(db, user_id, task_id)
    if not task:
        return None
    updates = payload.model_dump(exclude_unset=True)
    if "due_at" in updates:
        updates["due_at"] = _normalize_due(updates["due_at"])
    for k, v in updates.items():
        setattr(task, k, v)
    await db.commit()
    await db.refresh(task)
    logger.info("Updated task %s for user %s: %s", task.id, user_id, sorted(updates))
    return task


async def toggle_task_done(db: AsyncSession, user_id: str, task_id: int):
    task = await get_task(db, user_id, task_id)
    if not task:
        return None
    task.status = TaskStatus.todo if task.status == TaskStatus.done else TaskStatus.done
    await db.commit()
    await db.refresh(task)
    logger.info("Task %s is now %s", task.id, task.status.value)
    return task


async def set_task_pinned(db: AsyncSession, user_id: str, task_id: int, is_pinned: bool):
    task = await get_task(db, user_id, task_id)
    if not task:
        return None
    task.is_pinned = is_pinned
    await db.commit()
    await db.refresh(task)
    logger.info("Task %s pinned=%s", task.id, is_pinned)
    return task


async def move_task(db: AsyncSession, user_id: str, task_id: int, list_id: int | None):
    """Move a task to another list, or to the inbox when list_id is None."""
    task = await get_task(db, user_id, task_id)
    if not task:
        return None
    task.list_id = list_id
    await db.commit()
    await db.refresh(task)
    logger.info("Moved task %s to list %s", task.id, list_id)
    return task


async def delete_task(db: AsyncSession, user_id: str, task_id: int) -> bool:
    task = await get_task(db, user_id, task_id)
    if not task:
        return False
    await db.delete(task)
    await db.commit()
    logger.info("Deleted task %s for user %s", task_id, user_id)
    return True


# --- lists -----------------------------------------------------------------


async def create_list(db: AsyncSession, user_id: str, payload: ListCreate) -> TaskList:
    task_list = TaskList(user_id=user_id, **payload.model_dump())
    db.add(task_list)
    await db.commit()
    await db.refresh(task_list)
    logger.info("Created list %s for user %s", task_list.id, user_id)
    return task_list


async def get_list(db: AsyncSession, user_id: str, list_id: int) -> TaskList | None:
    res = await db.execute(select(TaskList).where(TaskList.id == list_id, TaskList.user_id == user_id))
    return res.scalar_one_or_none()


async def list_lists(db: AsyncSession, user_id: str) -> list[TaskList]:
    stmt = select(TaskList).where(TaskList.user_id == user_id).order_by(TaskList.created_at, TaskList.id)
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def update_list(db: AsyncSession, user_id: str, list_id: int, payload: ListUpdate):
    task_list = await get_list(db, user_id, list_id)
    if not task_list:
        return None
    updates = payload.model_dump(exclude_unset=True)
    for k, v in updates.items():
        setattr(task_list, k, v)
    await db.commit()
    await db.refresh(task_list)
    logger.info("Updated list %s for user %s: %s", task_list.id, user_id, sorted(updates))
    return task_list


async def delete_list(db: AsyncSession, user_id: str, list_id: int) -> bool:
    task_list = await get_list(db, user_id, list_id)
    if not task_list:
        return False
    # Tasks of a deleted list fall back to the inbox
    await db.execute(
        update(Task).where(Task.list_id == list_id, Task.user_id == user_id).values(list_id=None)
    )
    await db.delete(task_list)
    await db.commit()
    logger.info("Deleted list %s for user %s", list_id, user_id)
    return True
