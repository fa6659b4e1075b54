"""HTTP tests for /v1/motorbikes backed by an in-memory table."""

import pytest

from core.errors import EditConflict
from motorbikes import service
from motorbikes.schemas import Motorbike, UpdateMotorbikeRequest


def create(client, payload):
    response = client.post("/v1/motorbikes", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["motorbike"]


def test_create_echoes_fields(client, motorbike_payload):
    response = client.post("/v1/motorbikes", json=motorbike_payload)

    assert response.status_code == 201
    motorbike = response.json()["motorbike"]
    assert motorbike["version"] == 1
    assert motorbike["id"] > 0
    for field, value in motorbike_payload.items():
        assert motorbike[field] == value
    assert response.headers["Location"] == f"/v1/motorbikes/{motorbike['id']}"


def test_third_place_defaults_to_false(client, motorbike_payload):
    del motorbike_payload["third_place"]

    motorbike = create(client, motorbike_payload)

    assert motorbike["third_place"] is False


def test_two_cylinders_are_fine_but_odd_counts_are_not(client, motorbike_payload):
    motorbike_payload["cylinders"] = 3

    response = client.post("/v1/motorbikes", json=motorbike_payload)

    assert response.status_code == 422
    assert response.json() == {"error": {"cylinders": "must be 2, 4 etc..."}}


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("horsepower", -5, "must be greater than zero"),
        ("cylinders", -4, "must be 2, 4 etc..."),
    ],
)
def test_patch_with_negative_values_is_rejected(client, motorbike_payload, field, value, message):
    motorbike = create(client, motorbike_payload)

    response = client.patch(f"/v1/motorbikes/{motorbike['id']}", json={field: value})

    assert response.status_code == 422
    assert response.json() == {"error": {field: message}}
    assert client.get(f"/v1/motorbikes/{motorbike['id']}").json()["motorbike"]["version"] == 1


def test_non_finite_numbers_are_malformed(client, motorbike_payload):
    motorbike = create(client, motorbike_payload)

    response = client.patch(
        f"/v1/motorbikes/{motorbike['id']}",
        content='{"weight": Infinity}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "body contains invalid JSON value Infinity"}


def test_weight_and_type_limits(client, motorbike_payload):
    motorbike_payload["weight"] = 1200
    motorbike_payload["type"] = "t" * 51

    response = client.post("/v1/motorbikes", json=motorbike_payload)

    assert response.status_code == 422
    assert response.json()["error"] == {
        "weight": "must be less than 1000kg",
        "type": "must not be more than 50 bytes long",
    }


def test_third_place_must_be_boolean(client, motorbike_payload):
    motorbike_payload["third_place"] = "yes"

    response = client.post("/v1/motorbikes", json=motorbike_payload)

    assert response.status_code == 400


def test_show_and_delete(client, motorbike_payload):
    motorbike = create(client, motorbike_payload)

    assert client.get(f"/v1/motorbikes/{motorbike['id']}").json() == {"motorbike": motorbike}

    response = client.delete(f"/v1/motorbikes/{motorbike['id']}")
    assert response.json() == {"message": "motorbike successfully deleted"}
    assert client.get(f"/v1/motorbikes/{motorbike['id']}").status_code == 404


def test_get_zero_is_not_found(client):
    assert client.get("/v1/motorbikes/0").status_code == 404


@pytest.mark.parametrize("raw_id", ["99999999999999999999", "1_000"])
def test_out_of_range_ids_are_not_found(client, raw_id):
    assert client.get(f"/v1/motorbikes/{raw_id}").status_code == 404


def test_patch_toggles_third_place(client, motorbike_payload):
    motorbike = create(client, motorbike_payload)

    response = client.patch(f"/v1/motorbikes/{motorbike['id']}", json={"third_place": True, "name": None})

    assert response.status_code == 200
    updated = response.json()["motorbike"]
    assert updated["third_place"] is True
    assert updated["name"] == motorbike_payload["name"]
    assert updated["version"] == 2


@pytest.mark.asyncio
async def test_stale_update_conflicts(motorbike_table, motorbike_payload):
    motorbike = await motorbike_table.insert(Motorbike(**motorbike_payload))
    stale = await motorbike_table.get(motorbike.id)

    await service.update_motorbike(await motorbike_table.get(motorbike.id), UpdateMotorbikeRequest(weight=190.0))

    with pytest.raises(EditConflict):
        await service.update_motorbike(stale, UpdateMotorbikeRequest(weight=200.0))
    assert motorbike_table.rows[motorbike.id].weight == 190.0


def test_list_sorted_by_type(client, motorbike_payload):
    for name, kind in [("Vespa GTS", "scooter"), ("KTM Duke", "naked"), ("BMW R1250", "adventure")]:
        motorbike_payload.update(name=name, type=kind)
        create(client, motorbike_payload)

    body = client.get("/v1/motorbikes", params={"sort": "-type", "page_size": 2}).json()

    assert [m["type"] for m in body["motorbikes"]] == ["scooter", "naked"]
    assert body["metadata"]["last_page"] == 2
    assert body["metadata"]["total_records"] == 3


def test_list_rejects_car_sort_keys(client):
    response = client.get("/v1/motorbikes", params={"sort": "body"})

    assert response.status_code == 422
    assert response.json() == {"error": {"sort": "invalid sort value"}}


@pytest.mark.parametrize("permissions", [["motorbikes:read"]])
def test_delete_requires_write_permission(client, permissions):
    response = client.delete("/v1/motorbikes/1")

    assert response.status_code == 403
