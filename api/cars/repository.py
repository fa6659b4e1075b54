"""
Car persistence (raw SQL).
"""

from __future__ import annotations

from core import db, settings
from core.errors import EditConflict, RecordNotFound
from core.filters import Filters, Metadata, calculate_metadata

from .schemas import Car

_COLUMNS = """
    id, created_at, name, body, brake_system, aspiration, horsepower,
    mpg, cylinders, acceleration, displacement, origin, version
"""


async def insert_car(car: Car) -> Car:
    """
    Insert a car. The server-assigned id, created_at and version are written
    back onto `car`.
    """
    row = await db.fetch_one(
        """
        INSERT INTO cars (name, body, brake_system, aspiration, horsepower,
                          mpg, cylinders, acceleration, displacement, origin)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
        RETURNING id, created_at, version
        """,
        car.name,
        car.body,
        car.brake_system,
        car.aspiration,
        car.horsepower,
        car.mpg,
        car.cylinders,
        car.acceleration,
        car.displacement,
        car.origin,
    )
    if row is None:
        raise RuntimeError("Failed to insert car.")

    car.id = int(row["id"])
    car.created_at = row["created_at"]
    car.version = int(row["version"])
    return car


async def get_car(car_id: int) -> Car:
    if car_id < 1:
        raise RecordNotFound()

    row = await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM cars
        WHERE id = $1
        """,
        car_id,
    )
    if row is None:
        raise RecordNotFound()
    return Car.model_validate(row)


async def update_car(car: Car) -> Car:
    """
    Write every mutable field, conditioned on the version we read.

    A concurrent writer that got there first has already bumped the version,
    so this matches zero rows and raises `EditConflict`. The same happens if
    the row was deleted in the meantime.
    """
    row = await db.fetch_one(
        """
        UPDATE cars
        SET name = $1, body = $2, brake_system = $3, aspiration = $4,
            horsepower = $5, mpg = $6, cylinders = $7, acceleration = $8,
            displacement = $9, origin = $10, version = version + 1
        WHERE id = $11
          AND version = $12
        RETURNING version
        """,
        car.name,
        car.body,
        car.brake_system,
        car.aspiration,
        car.horsepower,
        car.mpg,
        car.cylinders,
        car.acceleration,
        car.displacement,
        car.origin,
        car.id,
        car.version,
    )
    if row is None:
        raise EditConflict()

    car.version = int(row["version"])
    return car


async def delete_car(car_id: int) -> None:
    if car_id < 1:
        raise RecordNotFound()

    row = await db.fetch_one(
        """
        DELETE FROM cars
        WHERE id = $1
        RETURNING id
        """,
        car_id,
    )
    if row is None:
        raise RecordNotFound()


async def list_cars(name: str, filters: Filters) -> tuple[list[Car], Metadata]:
    """
    Full-text search on `name` (empty matches everything), sorted and paged.

    The window count gives the total number of matching rows alongside the
    page itself, so one round trip is enough.
    """
    rows = await db.fetch_all(
        f"""
        SELECT count(*) OVER() AS total_records, {_COLUMNS}
        FROM cars
        WHERE (to_tsvector('simple', name) @@ plainto_tsquery('simple', $1) OR $1 = '')
        ORDER BY {filters.sort_column()} {filters.sort_direction()}, id ASC
        LIMIT $2
        OFFSET $3
        """,
        name,
        filters.limit(),
        filters.offset(),
        timeout=settings.list_query_timeout_seconds(),
    )

    total_records = int(rows[0]["total_records"]) if rows else 0
    cars = [Car.model_validate(row) for row in rows]
    return cars, calculate_metadata(total_records, filters.page, filters.page_size)
