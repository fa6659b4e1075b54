"""
Motorbike persistence (raw SQL).
"""

from __future__ import annotations

from core import db, settings
from core.errors import EditConflict, RecordNotFound
from core.filters import Filters, Metadata, calculate_metadata

from .schemas import Motorbike

_COLUMNS = """
    id, created_at, name, horsepower, type, weight, third_place,
    cylinders, acceleration, displacement, origin, version
"""


async def insert_motorbike(motorbike: Motorbike) -> Motorbike:
    row = await db.fetch_one(
        """
        INSERT INTO motorbikes (name, horsepower, type, weight, third_place,
                                cylinders, acceleration, displacement, origin)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
        RETURNING id, created_at, version
        """,
        motorbike.name,
        motorbike.horsepower,
        motorbike.type,
        motorbike.weight,
        motorbike.third_place,
        motorbike.cylinders,
        motorbike.acceleration,
        motorbike.displacement,
        motorbike.origin,
    )
    if row is None:
        raise RuntimeError("Failed to insert motorbike.")

    motorbike.id = int(row["id"])
    motorbike.created_at = row["created_at"]
    motorbike.version = int(row["version"])
    return motorbike


async def get_motorbike(motorbike_id: int) -> Motorbike:
    if motorbike_id < 1:
        raise RecordNotFound()

    row = await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM motorbikes
        WHERE id = $1
        """,
        motorbike_id,
    )
    if row is None:
        raise RecordNotFound()
    return Motorbike.model_validate(row)


async def update_motorbike(motorbike: Motorbike) -> Motorbike:
    """
    Optimistic update: zero matched rows means someone else changed (or
    deleted) the row since we read it.
    """
    row = await db.fetch_one(
        """
        UPDATE motorbikes
        SET name = $1, horsepower = $2, type = $3, weight = $4,
            third_place = $5, cylinders = $6, acceleration = $7,
            displacement = $8, origin = $9, version = version + 1
        WHERE id = $10
          AND version = $11
        RETURNING version
        """,
        motorbike.name,
        motorbike.horsepower,
        motorbike.type,
        motorbike.weight,
        motorbike.third_place,
        motorbike.cylinders,
        motorbike.acceleration,
        motorbike.displacement,
        motorbike.origin,
        motorbike.id,
        motorbike.version,
    )
    if row is None:
        raise EditConflict()

    motorbike.version = int(row["version"])
    return motorbike


async def delete_motorbike(motorbike_id: int) -> None:
    if motorbike_id < 1:
        raise RecordNotFound()

    row = await db.fetch_one(
        """
        DELETE FROM motorbikes
        WHERE id = $1
        RETURNING id
        """,
        motorbike_id,
    )
    if row is None:
        raise RecordNotFound()


async def list_motorbikes(name: str, filters: Filters) -> tuple[list[Motorbike], Metadata]:
    rows = await db.fetch_all(
        f"""
        SELECT count(*) OVER() AS total_records, {_COLUMNS}
        FROM motorbikes
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
    motorbikes = [Motorbike.model_validate(row) for row in rows]
    return motorbikes, calculate_metadata(total_records, filters.page, filters.page_size)
