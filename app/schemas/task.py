from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

class TaskPayload(BaseModel):
    """Body accepted by create and update. createdOn/lastUpdatedOn are read-only and ignored."""
    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    status: Optional[str] = None
    remarks: Optional[str] = None
    created_by: Optional[str] = None
    last_updated_by: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("due_date")
    @classmethod
    def _naive_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Stored as naive server-local time, like the audit timestamps.
        if value is not None and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @field_serializer("due_date")
    def _format_due_date(self, value: Optional[datetime]) -> Optional[str]:
        return value.strftime(DATE_FORMAT) if value else None

class TaskResponse(TaskPayload):
    created_on: Optional[datetime] = None
    last_updated_on: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_serializer("created_on", "last_updated_on")
    def _format_audit_dates(self, value: Optional[datetime]) -> Optional[str]:
        return value.strftime(DATE_FORMAT) if value else None


class SearchErrorResponse(BaseModel):
    error: str
    timestamp: str
    search_parameters: dict
