"""
Location API tests - neighborhood list and nearest-neighborhood lookup.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_neighborhoods_in_table_order(client: AsyncClient):
    response = await client.get("/api/neighborhoods")
    assert response.status_code == 200
    names = response.json()
    assert len(names) == 22
    assert names[:3] == ["Pelourinho", "Barra", "Itapuã"]
    assert names[-1] == "Patamares"


@pytest.mark.asyncio
async def test_get_location_returns_nearest_neighborhood(client: AsyncClient):
    response = await client.post(
        "/api/get-location", json={"latitude": -12.9820, "longitude": -38.4650}
    )
    assert response.status_code == 200
    assert response.json() == {
        "neighborhood": "Barra",
        "latitude": -12.9820,
        "longitude": -38.4650,
        "address": "Barra, Salvador - BA",
    }


@pytest.mark.asyncio
async def test_get_location_requires_coordinates(client: AsyncClient):
    response = await client.post("/api/get-location", json={"latitude": -12.98})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_location_rejects_non_finite_latitude(client: AsyncClient):
    response = await client.post(
        "/api/get-location",
        headers={"Content-Type": "application/json"},
        content='{"latitude": 1e999, "longitude": -38.5}',
    )
    assert response.status_code == 400
    assert "latitude" in response.json()["details"]


@pytest.mark.asyncio
async def test_get_location_rejects_out_of_range_longitude(client: AsyncClient):
    response = await client.post("/api/get-location", json={"latitude": -12.98, "longitude": 200})
    assert response.status_code == 400
