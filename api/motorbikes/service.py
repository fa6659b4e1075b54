"""
Motorbike business logic.
"""

from __future__ import annotations

import logging

from starlette.datastructures import QueryParams

from core import request as request_helpers
from core.errors import EditConflict, FailedValidation
from core.filters import Filters, validate_filters
from core.validator import Validator

from . import repository
from .schemas import SORT_SAFELIST, CreateMotorbikeRequest, Motorbike, UpdateMotorbikeRequest

logger = logging.getLogger(__name__)


def validate_motorbike(v: Validator, motorbike: Motorbike) -> None:
    v.check(motorbike.name != "", "name", "must be provided")
    v.check(len(motorbike.name.encode("utf-8")) <= 500, "name", "must not be more than 500 bytes long")

    v.check(motorbike.horsepower != 0, "horsepower", "must be provided")
    v.check(motorbike.horsepower > 0, "horsepower", "must be greater than zero")
    v.check(motorbike.horsepower <= 2000, "horsepower", "must be less than 2000")

    v.check(motorbike.type != "", "type", "must be provided")
    v.check(len(motorbike.type.encode("utf-8")) <= 50, "type", "must not be more than 50 bytes long")

    v.check(motorbike.weight != 0, "weight", "must be provided")
    v.check(motorbike.weight <= 1000, "weight", "must be less than 1000kg")

    v.check(motorbike.cylinders != 0, "cylinders", "must be provided")
    v.check(motorbike.cylinders > 0 and motorbike.cylinders % 2 == 0, "cylinders", "must be 2, 4 etc...")

    v.check(motorbike.acceleration != 0, "acceleration", "must be provided")

    v.check(motorbike.displacement != 0, "displacement", "must be provided")

    v.check(motorbike.origin != "", "origin", "must be provided")
    v.check(len(motorbike.origin.encode("utf-8")) <= 50, "origin", "must not be more than 50 bytes long")


def _ensure_valid(motorbike: Motorbike) -> None:
    v = Validator()
    validate_motorbike(v, motorbike)
    if not v.valid():
        raise FailedValidation(v.errors)


async def create_motorbike(payload: CreateMotorbikeRequest) -> Motorbike:
    motorbike = Motorbike(**payload.model_dump())
    _ensure_valid(motorbike)

    motorbike = await repository.insert_motorbike(motorbike)
    logger.info("motorbike_created id=%s", motorbike.id)
    return motorbike


async def get_motorbike(motorbike_id: int) -> Motorbike:
    return await repository.get_motorbike(motorbike_id)


async def update_motorbike(motorbike: Motorbike, payload: UpdateMotorbikeRequest) -> Motorbike:
    merged = motorbike.model_copy(update=payload.model_dump(exclude_none=True))
    _ensure_valid(merged)

    try:
        merged = await repository.update_motorbike(merged)
    except EditConflict:
        logger.warning("motorbike_edit_conflict id=%s version=%s", motorbike.id, motorbike.version)
        raise
    logger.info("motorbike_updated id=%s version=%s", merged.id, merged.version)
    return merged


async def delete_motorbike(motorbike_id: int) -> None:
    await repository.delete_motorbike(motorbike_id)
    logger.info("motorbike_deleted id=%s", motorbike_id)


async def list_motorbikes(qs: QueryParams) -> dict:
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

    motorbikes, metadata = await repository.list_motorbikes(name, filters)
    return {
        "motorbikes": [motorbike.model_dump() for motorbike in motorbikes],
        "metadata": metadata.model_dump(),
    }
