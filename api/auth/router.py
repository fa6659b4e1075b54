"""
User registration and token endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import dependencies, schemas, service

router = APIRouter(prefix="/v1")


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def register(payload: schemas.RegisterRequest) -> schemas.AuthResponse:
    return await service.register(payload)


@router.get("/users/me")
async def me(current_user: dict = Depends(dependencies.get_current_user)) -> schemas.UserResponse:
    return await service.me(current_user)


@router.post("/tokens/authentication", status_code=status.HTTP_201_CREATED)
async def login(payload: schemas.LoginRequest) -> schemas.AuthResponse:
    return await service.login(payload)


@router.post("/tokens/refresh")
async def refresh(payload: schemas.RefreshRequest) -> schemas.TokenPairResponse:
    return await service.refresh_tokens(payload)


@router.post("/tokens/logout")
async def logout(
    payload: schemas.LogoutRequest,
    current_user: dict = Depends(dependencies.get_current_user),
) -> dict:
    return await service.logout(payload, current_user_id=int(current_user["id"]))
