# app/utils/task_mapper.py
from datetime import datetime
from typing import Optional, Union

from app.models.task import Task, STATUS_TODO, DEFAULT_CREATED_BY
from app.schemas.task import TaskPayload, TaskResponse


def _or_default(value: Optional[str], default: str) -> str:
    return value if value else default


def to_wire(task: Optional[Task]) -> Optional[TaskResponse]:
    if task is None:
        return None
    return TaskResponse.model_validate(task)


def to_entity(payload: Optional[Union[TaskPayload, TaskResponse]]) -> Optional[Task]:
    """Build an unsaved Task from a wire object, filling server-side defaults.

    Title is not validated here; a missing title becomes "".
    """
    if payload is None:
        return None

    now = datetime.now()
    created_by = _or_default(payload.created_by, DEFAULT_CREATED_BY)

    task = Task(
        title=payload.title if payload.title is not None else "",
        description=payload.description,
        due_date=payload.due_date,
        status=_or_default(payload.status, STATUS_TODO),
        remarks=payload.remarks,
        created_on=getattr(payload, "created_on", None) or now,
        last_updated_on=getattr(payload, "last_updated_on", None) or now,
        created_by=created_by,
        last_updated_by=_or_default(payload.last_updated_by, created_by),
    )
    if payload.id is not None:
        task.id = payload.id
    return task
