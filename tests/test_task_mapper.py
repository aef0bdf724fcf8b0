# tests/test_task_mapper.py

from __future__ import annotations

from datetime import datetime, timezone

from app.models.task import Task
from app.schemas.task import TaskPayload, TaskResponse
from app.utils.task_mapper import to_entity, to_wire


def test_none_maps_to_none() -> None:
    assert to_wire(None) is None
    assert to_entity(None) is None


def test_to_entity_fills_defaults() -> None:
    task = to_entity(TaskPayload())

    assert task.title == ""
    assert task.status == "TODO"
    assert task.created_by == "Company Admin"
    assert task.last_updated_by == "Company Admin"
    assert task.created_on is not None
    assert task.created_on <= task.last_updated_on
    assert task.id is None


def test_to_entity_last_updated_by_follows_created_by() -> None:
    task = to_entity(TaskPayload(title="t", created_by="alice", last_updated_by=""))
    assert task.created_by == "alice"
    assert task.last_updated_by == "alice"


def test_to_entity_keeps_supplied_values() -> None:
    created = datetime(2024, 1, 2, 3, 4, 5)
    payload = TaskResponse(
        id=7,
        title="Write report",
        status="BLOCKED",
        created_on=created,
        last_updated_on=created,
        created_by="bob",
        last_updated_by="carol",
    )
    task = to_entity(payload)

    assert task.id == 7
    assert task.status == "BLOCKED"
    assert task.created_on == created
    assert task.last_updated_by == "carol"


def test_to_wire_copies_fields_and_formats_dates() -> None:
    when = datetime(2025, 3, 1, 9, 30, 15, 123456)
    task = Task(
        id=3,
        title="Ship it",
        description="d",
        due_date=when,
        status="DONE",
        remarks="r",
        created_on=when,
        last_updated_on=when,
        created_by="a",
        last_updated_by="b",
    )
    body = to_wire(task).model_dump(by_alias=True)

    assert body == {
        "id": 3,
        "title": "Ship it",
        "description": "d",
        "dueDate": "2025-03-01T09:30:15",
        "status": "DONE",
        "remarks": "r",
        "createdBy": "a",
        "lastUpdatedBy": "b",
        "createdOn": "2025-03-01T09:30:15",
        "lastUpdatedOn": "2025-03-01T09:30:15",
    }


def test_payload_ignores_read_only_fields() -> None:
    payload = TaskPayload.model_validate({"title": "x", "createdOn": "2020-01-01T00:00:00"})
    assert not hasattr(payload, "created_on")


def test_payload_normalises_aware_due_date_to_naive() -> None:
    payload = TaskPayload.model_validate({"title": "x", "dueDate": "2025-01-01T12:00:00Z"})

    assert payload.due_date.tzinfo is None
    assert payload.due_date == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)


def test_payload_keeps_naive_due_date() -> None:
    payload = TaskPayload.model_validate({"title": "x", "dueDate": "2025-01-01T12:00:00"})
    assert payload.due_date == datetime(2025, 1, 1, 12, 0)
