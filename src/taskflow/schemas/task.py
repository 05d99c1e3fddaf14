"""Task payloads and projections."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

TASK_READ_EXAMPLE = {
    "id": 7,
    "title": "Write landing page copy",
    "description": "Hero section plus three feature blurbs.",
    "due_date": "2024-02-01",
    "is_completed": False,
    "project_id": 1,
    "created_at": "2024-01-01T12:00:00Z",
    "updated_at": "2024-01-02T08:30:00Z",
}


class TaskCreate(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Write landing page copy",
                "description": "Hero section plus three feature blurbs.",
                "due_date": "2024-02-01",
            }
        }
    )

    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    due_date: date | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title must not be blank.")
        return value


class TaskUpdate(BaseModel):
    """Partial update; only keys present in the request body are applied.

    Whitespace-only titles pass schema validation and are rejected by the
    service, so the error surfaces as ``invalid_argument``.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"description": "Hero section only."}}
    )

    title: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)


class TaskRead(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": TASK_READ_EXAMPLE},
    )

    id: int
    title: str
    description: str | None = None
    due_date: date | None = None
    is_completed: bool
    project_id: int
    created_at: datetime
    updated_at: datetime


__all__ = ["TaskCreate", "TaskRead", "TaskUpdate"]
