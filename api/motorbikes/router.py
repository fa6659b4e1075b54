"""
Motorbike API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from auth import dependencies as auth_dependencies
from core import request as request_helpers

from . import service
from .schemas import CreateMotorbikeRequest, UpdateMotorbikeRequest

router = APIRouter(prefix="/v1/motorbikes")

can_read = Depends(auth_dependencies.require_permission("motorbikes:read"))
can_write = Depends(auth_dependencies.require_permission("motorbikes:write"))


@router.get("", dependencies=[can_read])
async def list_motorbikes(request: Request) -> dict:
    return await service.list_motorbikes(request.query_params)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[can_write])
async def create_motorbike(request: Request, response: Response) -> dict:
    payload = await request_helpers.read_json(request, CreateMotorbikeRequest)
    motorbike = await service.create_motorbike(payload)
    response.headers["Location"] = f"/v1/motorbikes/{motorbike.id}"
    return {"motorbike": motorbike.model_dump()}


@router.get("/{motorbike_id}", dependencies=[can_read])
async def show_motorbike(motorbike_id: str) -> dict:
    motorbike = await service.get_motorbike(request_helpers.read_id_param(motorbike_id))
    return {"motorbike": motorbike.model_dump()}


@router.patch("/{motorbike_id}", dependencies=[can_write])
async def update_motorbike(motorbike_id: str, request: Request) -> dict:
    motorbike = await service.get_motorbike(request_helpers.read_id_param(motorbike_id))
    payload = await request_helpers.read_json(request, UpdateMotorbikeRequest)
    motorbike = await service.update_motorbike(motorbike, payload)
    return {"motorbike": motorbike.model_dump()}


@router.delete("/{motorbike_id}", dependencies=[can_write])
async def delete_motorbike(motorbike_id: str) -> dict:
    await service.delete_motorbike(request_helpers.read_id_param(motorbike_id))
    return {"message": "motorbike successfully deleted"}
