"""
Motorbike record and request bodies.
"""

from __future__ import annotations

from datetime import datetime

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

SORT_SAFELIST = ("id", "name", "type", "-id", "-name", "-type")

# Matches the bigint column; larger values are a decode error.
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class Motorbike(BaseModel):
    id: int = 0
    created_at: datetime | None = Field(default=None, exclude=True)
    name: str = ""
    horsepower: float = 0
    type: str = ""
    weight: float = 0
    third_place: bool = False
    cylinders: int = 0
    acceleration: float = 0
    displacement: float = 0
    origin: str = ""
    version: int = 0


class CreateMotorbikeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True, allow_inf_nan=False)

    name: str = ""
    horsepower: float = 0
    type: str = ""
    weight: float = 0
    third_place: bool = False
    cylinders: Int64 = 0
    acceleration: float = 0
    displacement: float = 0
    origin: str = ""


class UpdateMotorbikeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True, allow_inf_nan=False)

    name: str | None = None
    horsepower: float | None = None
    type: str | None = None
    weight: float | None = None
    third_place: bool | None = None
    cylinders: Int64 | None = None
    acceleration: float | None = None
    displacement: float | None = None
    origin: str | None = None
