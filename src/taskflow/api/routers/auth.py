"""Login route."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import AuthServiceDependency
from ...schemas import ErrorResponse, LoginRequest, LoginResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Exchange email and password for a bearer token",
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)
async def login(payload: LoginRequest, service: AuthServiceDependency) -> LoginResponse:
    return await service.authenticate(payload.email, payload.password)
