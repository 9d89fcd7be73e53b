"""HTTP tests for /api/genres."""
from __future__ import annotations

from app.config import DEFAULT_GENRES


async def test_list_genres_sorted_by_name(client, genres):
    response = await client.get("/api/genres")

    assert response.status_code == 200
    assert [genre["name"] for genre in response.json()] == sorted(DEFAULT_GENRES)
    assert all(set(genre) == {"id", "name"} for genre in response.json())


async def test_create_genre(client):
    response = await client.post("/api/genres", json={"name": "  Horror "})

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Horror"
    assert isinstance(body["id"], int)


async def test_create_duplicate_genre_conflicts(client):
    await client.post("/api/genres", json={"name": "Horror"})

    response = await client.post("/api/genres", json={"name": "Horror  "})

    assert response.status_code == 409
    assert response.json() == {"error": "Genre already exists"}
    names = [genre["name"] for genre in (await client.get("/api/genres")).json()]
    assert names.count("Horror") == 1


async def test_create_genre_requires_name(client):
    response = await client.post("/api/genres", json={"name": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "Genre name is required"}
