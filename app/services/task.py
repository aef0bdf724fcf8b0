import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import ValidationError, NotFoundError, InternalError
from app.models.task import Task, STATUS_DONE, STATUS_TODO, SYSTEM_UPDATE, SYSTEM_STATUS_UPDATE
from app.schemas.task import TaskPayload, TaskResponse
from app.services import task_store
from app.utils.task_mapper import to_entity, to_wire

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _clean(value: Optional[str]) -> Optional[str]:
    """Trim a search parameter; empty means absent."""
    if value is None:
        return None
    value = value.strip()
    return value or None


async def _rollback_quietly(db: AsyncSession) -> None:
    """Roll back after a failed write without masking the error being raised."""
    try:
        await db.rollback()
    except Exception:
        logger.exception("Rollback failed")


async def _get_or_raise(db: AsyncSession, task_id: int) -> Task:
    task = await task_store.find_by_id(db, task_id)
    if task is None:
        raise NotFoundError(f"Task not found with id: {task_id}")
    return task


async def create_task(db: AsyncSession, payload: TaskPayload) -> TaskResponse:
    if _is_blank(payload.title):
        logger.error("Task creation failed: title is null or empty")
        raise ValidationError("Task title cannot be null or empty", field="title")

    logger.debug("Creating task with title: %s", payload.title)
    try:
        task = to_entity(payload.model_copy(update={"id": None}))
        now = datetime.now()
        task.created_on = now
        task.last_updated_on = now

        saved = await task_store.save(db, task)
        logger.info("Task saved with id %s", saved.id)
        return to_wire(saved)
    except (ValidationError, NotFoundError):
        raise
    except Exception as e:
        logger.error("Failed to create task: %s", e, exc_info=True)
        await _rollback_quietly(db)
        raise InternalError(f"Failed to create task: {e}") from e


async def get_task(db: AsyncSession, task_id: int) -> TaskResponse:
    return to_wire(await _get_or_raise(db, task_id))


async def get_all_tasks(db: AsyncSession) -> List[TaskResponse]:
    return [to_wire(t) for t in await task_store.find_all(db)]


async def update_task(db: AsyncSession, task_id: Optional[int], payload: TaskPayload) -> TaskResponse:
    try:
        if task_id is None:
            raise ValidationError("Task ID cannot be null", field="taskId")
        if _is_blank(payload.title):
            raise ValidationError("Task title cannot be null or empty", field="title")

        task = await _get_or_raise(db, task_id)

        task.title = payload.title
        task.description = payload.description
        task.due_date = payload.due_date
        task.remarks = payload.remarks
        if payload.status:
            task.status = payload.status

        task.last_updated_on = datetime.now()
        task.last_updated_by = payload.last_updated_by or SYSTEM_UPDATE

        return to_wire(await task_store.save(db, task))
    except (ValidationError, NotFoundError) as e:
        logger.error("Error updating task %s: %s", task_id, e)
        raise
    except Exception as e:
        logger.error("Error updating task %s: %s", task_id, e, exc_info=True)
        await _rollback_quietly(db)
        raise InternalError(f"Failed to update task: {e}") from e


async def delete_task(db: AsyncSession, task_id: int) -> None:
    task = await _get_or_raise(db, task_id)
    await task_store.delete(db, task)
    logger.info("Task with id %s deleted", task_id)


async def _set_status(db: AsyncSession, task_id: int, status: str) -> TaskResponse:
    task = await _get_or_raise(db, task_id)
    task.status = status
    task.last_updated_on = datetime.now()
    task.last_updated_by = SYSTEM_STATUS_UPDATE
    return to_wire(await task_store.save(db, task))


async def mark_completed(db: AsyncSession, task_id: int) -> TaskResponse:
    return await _set_status(db, task_id, STATUS_DONE)


async def mark_pending(db: AsyncSession, task_id: int) -> TaskResponse:
    return await _set_status(db, task_id, STATUS_TODO)


async def _find_by_title(db: AsyncSession, title: str) -> List[Task]:
    # Each stage is tried only when the previous one came back empty.
    stages = (
        task_store.find_by_title_containing,
        task_store.search_by_title,
        task_store.find_by_title_native,
    )
    tasks: List[Task] = []
    for stage in stages:
        logger.debug("Searching by title %r using %s", title, stage.__name__)
        tasks = await stage(db, title)
        if tasks:
            break
    return tasks


async def search_tasks(db: AsyncSession, title: Optional[str], status: Optional[str]) -> List[TaskResponse]:
    """
    Search by title substring (case-insensitive) and/or exact status.

    Never raises: a failing query is logged and an empty list is returned.
    If nothing matched and a title was given, every task is loaded and
    filtered in process, so a title match is found whenever one exists.
    """
    logger.debug("Searching tasks with title=%r, status=%r", title, status)
    title = _clean(title)
    status = _clean(status)

    try:
        if title and status:
            tasks = await task_store.find_by_title_containing_and_status(db, title, status)
        elif title:
            tasks = await _find_by_title(db, title)
        elif status:
            tasks = await task_store.find_by_status(db, status)
        else:
            tasks = await task_store.find_all(db)

        if not tasks and title:
            logger.warning("All search queries came back empty; filtering every task by title")
            needle = title.lower()
            tasks = [t for t in await task_store.find_all(db) if needle in (t.title or "").lower()]

        if not tasks:
            logger.warning("No tasks found for title=%r, status=%r", title, status)
        else:
            logger.debug("Search found %d tasks", len(tasks))

        return [to_wire(t) for t in tasks]
    except Exception as e:
        logger.error("Error during task search: %s", e, exc_info=True)
        return []


async def search_by_keyword(db: AsyncSession, keyword: Optional[str]) -> List[TaskResponse]:
    if _is_blank(keyword):
        logger.debug("Empty keyword, returning all tasks")
        return await get_all_tasks(db)
    return await search_tasks(db, keyword, None)
