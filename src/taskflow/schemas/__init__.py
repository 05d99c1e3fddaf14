"""Pydantic request and response models."""

from __future__ import annotations

from .auth import LoginRequest, LoginResponse, TokenPayload
from .project import ProjectCreate, ProjectProgress, ProjectRead, ProjectUpdate
from .system import ErrorResponse, HealthCheckResponse, RootResponse
from .task import TaskCreate, TaskRead, TaskUpdate

__all__ = [
    "ErrorResponse",
    "HealthCheckResponse",
    "LoginRequest",
    "LoginResponse",
    "ProjectCreate",
    "ProjectProgress",
    "ProjectRead",
    "ProjectUpdate",
    "RootResponse",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TokenPayload",
]
