"""
Car record and request bodies.
"""

from __future__ import annotations

from datetime import datetime

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

SORT_SAFELIST = ("id", "name", "body", "-id", "-name", "-body")

# Matches the bigint column; larger values are a decode error.
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class Car(BaseModel):
    id: int = 0
    # Stored, but never part of API responses.
    created_at: datetime | None = Field(default=None, exclude=True)
    name: str = ""
    body: str = ""
    brake_system: str = ""
    aspiration: str = ""
    horsepower: float = 0
    mpg: float = 0
    cylinders: int = 0
    acceleration: float = 0
    displacement: float = 0
    origin: str = ""
    version: int = 0


class CreateCarRequest(BaseModel):
    """
    Missing fields decode to their zero value; the validator reports them as
    "must be provided" rather than failing the decode.
    """

    model_config = ConfigDict(extra="forbid", strict=True, allow_inf_nan=False)

    name: str = ""
    body: str = ""
    brake_system: str = ""
    aspiration: str = ""
    horsepower: float = 0
    mpg: float = 0
    cylinders: Int64 = 0
    acceleration: float = 0
    displacement: float = 0
    origin: str = ""


class UpdateCarRequest(BaseModel):
    """
    Partial update: only fields present (and not null) are applied.
    """

    model_config = ConfigDict(extra="forbid", strict=True, allow_inf_nan=False)

    name: str | None = None
    body: str | None = None
    brake_system: str | None = None
    aspiration: str | None = None
    horsepower: float | None = None
    mpg: float | None = None
    cylinders: Int64 | None = None
    acceleration: float | None = None
    displacement: float | None = None
    origin: str | None = None
