"""
Car business logic: validation rules, partial-update merging, listing.
"""

from __future__ import annotations

import logging

from starlette.datastructures import QueryParams

from core import request as request_helpers
from core.errors import EditConflict, FailedValidation
from core.filters import Filters, validate_filters
from core.validator import Validator

from . import repository
from .schemas import SORT_SAFELIST, Car, CreateCarRequest, UpdateCarRequest

logger = logging.getLogger(__name__)


def _byte_len(value: str) -> int:
    return len(value.encode("utf-8"))


def validate_car(v: Validator, car: Car) -> None:
    v.check(car.name != "", "name", "must be provided")
    v.check(_byte_len(car.name) <= 500, "name", "must not be more than 500 bytes long")

    v.check(car.body != "", "body", "must be provided")
    v.check(_byte_len(car.body) <= 50, "body", "must not be more than 50 bytes long")

    v.check(car.brake_system != "", "brake_system", "must be provided")
    v.check(_byte_len(car.brake_system) <= 50, "brake_system", "must not be more than 50 bytes long")

    v.check(car.aspiration != "", "aspiration", "must be provided")
    v.check(_byte_len(car.aspiration) <= 50, "aspiration", "must not be more than 50 bytes long")

    v.check(car.horsepower != 0, "horsepower", "must be provided")
    v.check(car.horsepower > 0, "horsepower", "must be greater than zero")
    v.check(car.horsepower <= 2000, "horsepower", "must be less than 2000")

    v.check(car.mpg != 0, "mpg", "must be provided")

    # 2-cylinder cars are rejected on purpose, unlike motorbikes.
    v.check(car.cylinders != 0, "cylinders", "must be provided")
    v.check(car.cylinders > 2 and car.cylinders % 2 == 0, "cylinders", "must be 4, 6, 8, 12 etc...")

    v.check(car.acceleration != 0, "acceleration", "must be provided")

    v.check(car.displacement != 0, "displacement", "must be provided")

    v.check(car.origin != "", "origin", "must be provided")
    v.check(_byte_len(car.origin) <= 50, "origin", "must not be more than 50 bytes long")


def _ensure_valid(car: Car) -> None:
    v = Validator()
    validate_car(v, car)
    if not v.valid():
        raise FailedValidation(v.errors)


async def create_car(payload: CreateCarRequest) -> Car:
    car = Car(**payload.model_dump())
    _ensure_valid(car)

    car = await repository.insert_car(car)
    logger.info("car_created id=%s", car.id)
    return car


async def get_car(car_id: int) -> Car:
    return await repository.get_car(car_id)


def merge_car(car: Car, payload: UpdateCarRequest) -> Car:
    """
    Return a copy of `car` with every provided field of `payload` applied.
    """
    return car.model_copy(update=payload.model_dump(exclude_none=True))


async def update_car(car: Car, payload: UpdateCarRequest) -> Car:
    merged = merge_car(car, payload)
    _ensure_valid(merged)

    try:
        merged = await repository.update_car(merged)
    except EditConflict:
        logger.warning("car_edit_conflict id=%s version=%s", car.id, car.version)
        raise
    logger.info("car_updated id=%s version=%s", merged.id, merged.version)
    return merged


async def delete_car(car_id: int) -> None:
    await repository.delete_car(car_id)
    logger.info("car_deleted id=%s", car_id)


async def list_cars(qs: QueryParams) -> dict:
    v = Validator()
    name = request_helpers.read_string(qs, "name", "")
    filters = Filters(
        page=request_helpers.read_int(qs, "page", 1, v),
        page_size=request_helpers.read_int(qs, "page_size", 20, v),
        sort=request_helpers.read_string(qs, "sort", "id"),
        sort_safelist=SORT_SAFELIST,
    )
    validate_filters(v, filters)
    if not v.valid():
        raise FailedValidation(v.errors)

    cars, metadata = await repository.list_cars(name, filters)
    return {
        "cars": [car.model_dump() for car in cars],
        "metadata": metadata.model_dump(),
    }
