import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.core.exceptions import ValidationError, NotFoundError
from app.models.task import DEFAULT_CREATED_BY
from app.schemas.task import TaskPayload, TaskResponse, SearchErrorResponse
from app.services import task as task_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _echo_param(value: Optional[str]) -> str:
    value = value.strip() if value is not None else None
    return value or "null"


def _server_error(prefix: str, e: Exception) -> HTTPException:
    return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, f"{prefix}: {e}")


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_in: TaskPayload,
    db: AsyncSession = Depends(get_db)
):
    logger.info("Task creation - createdBy: %r", task_in.created_by or DEFAULT_CREATED_BY)
    try:
        created = await task_service.create_task(db, task_in)
    except ValidationError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Validation error: {e}")
    except NotFoundError as e:
        raise HTTPException(status.HTTP_404_NOT_FOUND, f"Error creating task: {e}")
    except Exception as e:
        logger.exception("Error creating task")
        raise _server_error("Error creating task", e)
    logger.info("Task created with id %s", created.id)
    return created


# Must be registered before /{task_id} so "search" is not parsed as an id.
@router.get("/search", response_model=list[TaskResponse])
async def search_tasks(
    title: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    keyword: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    logger.info("Search called with title=%r, status=%r, keyword=%r", title, status_filter, keyword)
    try:
        if keyword is not None and title is None and status_filter is None:
            tasks = await task_service.search_by_keyword(db, keyword)
        else:
            tasks = await task_service.search_tasks(db, title, status_filter)
    except Exception as e:
        logger.exception("Error searching tasks")
        body = SearchErrorResponse(
            error=f"Error searching tasks: {e}",
            timestamp=datetime.now().isoformat(),
            search_parameters={
                "title": _echo_param(title),
                "status": _echo_param(status_filter),
            },
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())
    logger.info("Search found %d tasks", len(tasks))
    return tasks


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await task_service.get_task(db, task_id)
    except Exception as e:
        logger.error("Error fetching task by id %s: %s", task_id, e)
        raise _server_error("Error fetching task", e)


@router.get("", response_model=list[TaskResponse])
async def get_all_tasks(db: AsyncSession = Depends(get_db)):
    try:
        return await task_service.get_all_tasks(db)
    except Exception as e:
        logger.exception("Error fetching all tasks")
        raise _server_error("Error fetching tasks", e)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task_in: TaskPayload,
    db: AsyncSession = Depends(get_db)
):
    logger.debug("Updating task %s: title=%r, status=%r", task_id, task_in.title, task_in.status)
    try:
        return await task_service.update_task(db, task_id, task_in)
    except NotFoundError as e:
        raise HTTPException(status.HTTP_404_NOT_FOUND, f"Task not found: {e}")
    except ValidationError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Validation error: {e}")
    except Exception as e:
        logger.exception("Error updating task %s", task_id)
        details = str(e)
        if e.__cause__ is not None:
            details += f" - Caused by: {e.__cause__}"
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Error updating task: {details}")


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await task_service.delete_task(db, task_id)
    except Exception as e:
        logger.error("Error deleting task %s: %s", task_id, e)
        raise _server_error("Error deleting task", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{task_id}/complete", response_model=TaskResponse)
async def mark_task_completed(task_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await task_service.mark_completed(db, task_id)
    except Exception as e:
        logger.error("Error marking task %s as complete: %s", task_id, e)
        raise _server_error("Error marking task as complete", e)


@router.put("/{task_id}/pending", response_model=TaskResponse)
async def mark_task_pending(task_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await task_service.mark_pending(db, task_id)
    except Exception as e:
        logger.error("Error marking task %s as pending: %s", task_id, e)
        raise _server_error("Error marking task as pending", e)
