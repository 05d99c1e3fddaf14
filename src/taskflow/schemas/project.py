"""Project payloads and projections."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROJECT_READ_EXAMPLE = {
    "id": 1,
    "title": "Website relaunch",
    "description": "Everything needed to ship the new marketing site.",
    "owner_id": 42,
    "created_at": "2024-01-01T12:00:00Z",
    "updated_at": "2024-01-02T08:30:00Z",
}


class _TitledPayload(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title must not be blank.")
        return value


class ProjectCreate(_TitledPayload):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Website relaunch",
                "description": "Everything needed to ship the new marketing site.",
            }
        }
    )


class ProjectUpdate(_TitledPayload):
    """Full replacement of a project's editable fields.

    An omitted ``description`` clears the stored one.
    """


class ProjectRead(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": PROJECT_READ_EXAMPLE},
    )

    id: int
    title: str
    description: str | None = None
    owner_id: int
    created_at: datetime
    updated_at: datetime


class ProjectProgress(BaseModel):
    """Completion summary for one project."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "project_id": 1,
                "project_title": "Website relaunch",
                "total_tasks": 3,
                "completed_tasks": 1,
                "progress_percentage": 33.33,
            }
        }
    )

    project_id: int
    project_title: str
    total_tasks: int = Field(ge=0)
    completed_tasks: int = Field(ge=0)
    progress_percentage: float = Field(ge=0.0, le=100.0)


__all__ = ["ProjectCreate", "ProjectProgress", "ProjectRead", "ProjectUpdate"]
