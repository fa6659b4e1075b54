"""
Car API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from auth import dependencies as auth_dependencies
from core import request as request_helpers

from . import service
from .schemas import CreateCarRequest, UpdateCarRequest

router = APIRouter(prefix="/v1/cars")

can_read = Depends(auth_dependencies.require_permission("cars:read"))
can_write = Depends(auth_dependencies.require_permission("cars:write"))


@router.get("", dependencies=[can_read])
async def list_cars(request: Request) -> dict:
    return await service.list_cars(request.query_params)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[can_write])
async def create_car(request: Request, response: Response) -> dict:
    payload = await request_helpers.read_json(request, CreateCarRequest)
    car = await service.create_car(payload)
    response.headers["Location"] = f"/v1/cars/{car.id}"
    return {"car": car.model_dump()}


@router.get("/{car_id}", dependencies=[can_read])
async def show_car(car_id: str) -> dict:
    car = await service.get_car(request_helpers.read_id_param(car_id))
    return {"car": car.model_dump()}


@router.patch("/{car_id}", dependencies=[can_write])
async def update_car(car_id: str, request: Request) -> dict:
    car = await service.get_car(request_helpers.read_id_param(car_id))
    payload = await request_helpers.read_json(request, UpdateCarRequest)
    car = await service.update_car(car, payload)
    return {"car": car.model_dump()}


@router.delete("/{car_id}", dependencies=[can_write])
async def delete_car(car_id: str) -> dict:
    await service.delete_car(request_helpers.read_id_param(car_id))
    return {"message": "car successfully deleted"}
