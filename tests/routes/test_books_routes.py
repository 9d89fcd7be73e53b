"""HTTP tests for /api/books."""
from __future__ import annotations


async def test_book_round_trip(client, genres):
    created = await client.post(
        "/api/books",
        json={"title": "Dune", "author": "Herbert", "genre_id": genres["Sci-Fi"], "rating": 4.5},
    )
    assert created.status_code == 201
    body = created.json()
    assert body["message"] == "Book added successfully"
    book_id = body["book_id"]

    listed = await client.get("/api/books")
    assert listed.status_code == 200
    assert listed.json() == [
        {
            "book_id": book_id,
            "title": "Dune",
            "author": "Herbert",
            "genre_id": genres["Sci-Fi"],
            "genre_name": "Sci-Fi",
            "rating": 4.5,
        }
    ]

    deleted = await client.delete(f"/api/books/{book_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Book deleted successfully"}
    assert (await client.get("/api/books")).json() == []

    again = await client.delete(f"/api/books/{book_id}")
    assert again.status_code == 404
    assert again.json() == {"error": "Book not found"}


async def test_create_accepts_form_strings(client, genres):
    response = await client.post(
        "/api/books",
        json={"title": "Emma", "author": "Austen", "genre_id": str(genres["Romance"]), "rating": "3.5"},
    )

    assert response.status_code == 201
    assert (await client.get("/api/books")).json()[0]["rating"] == 3.5


async def test_create_missing_fields(client, genres):
    response = await client.post("/api/books", json={"title": "No author", "genre_id": genres["Fiction"], "rating": 2})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


async def test_create_unknown_genre(client, genres):
    response = await client.post("/api/books", json={"title": "T", "author": "A", "genre_id": 9999, "rating": 2})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid genre ID"}
    assert (await client.get("/api/books")).json() == []


async def test_create_rating_out_of_range(client, genres):
    response = await client.post(
        "/api/books", json={"title": "T", "author": "A", "genre_id": genres["Fiction"], "rating": 5.5}
    )

    assert response.status_code == 400
    assert "error" in response.json()


async def test_list_filters(client, genres):
    for title, genre, rating in [
        ("A", "Fiction", 1.0),
        ("B", "Fiction", 4.0),
        ("C", "Mystery", 4.5),
    ]:
        await client.post(
            "/api/books", json={"title": title, "author": "X", "genre_id": genres[genre], "rating": rating}
        )

    by_genre = await client.get("/api/books", params={"genre": genres["Fiction"]})
    by_range = await client.get("/api/books", params={"minRating": "4", "maxRating": "5"})
    combined = await client.get("/api/books", params={"genre": genres["Fiction"], "minRating": "2"})

    assert [book["title"] for book in by_genre.json()] == ["A", "B"]
    assert [book["title"] for book in by_range.json()] == ["B", "C"]
    assert [book["title"] for book in combined.json()] == ["B"]


async def test_list_invalid_genre_id(client):
    response = await client.get("/api/books", params={"genre": "zzz"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid genre ID"}


async def test_update_book(client, genres):
    created = await client.post(
        "/api/books", json={"title": "Old", "author": "A", "genre_id": genres["Fiction"], "rating": 1}
    )
    book_id = created.json()["book_id"]

    response = await client.put(
        f"/api/books/{book_id}",
        json={"title": "New", "author": "B", "genre_id": genres["History"], "rating": 3},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Book updated successfully"}
    book = (await client.get("/api/books")).json()[0]
    assert (book["title"], book["author"], book["genre_name"], book["rating"]) == ("New", "B", "History", 3)


async def test_update_unknown_book(client, genres):
    response = await client.put(
        "/api/books/4242", json={"title": "T", "author": "A", "genre_id": genres["Fiction"], "rating": 1}
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Book not found"}


async def test_delete_malformed_id_is_not_found(client):
    response = await client.delete("/api/books/not-a-number")

    assert response.status_code == 404


async def test_atomic_add(client, genres):
    response = await client.post(
        "/api/books/atomic-add",
        json={"title": "Foundation", "author": "Asimov", "genre_id": genres["Sci-Fi"], "rating": 5},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Book added atomically inside a transaction"}
    assert [book["title"] for book in (await client.get("/api/books")).json()] == ["Foundation"]


async def test_atomic_add_missing_genre(client, genres):
    response = await client.post(
        "/api/books/atomic-add", json={"title": "T", "author": "A", "genre_id": 9999, "rating": 5}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Genre does not exist"}
    assert (await client.get("/api/books")).json() == []


async def test_cors_preflight_for_allowed_origin(client):
    response = await client.options(
        "/api/books",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


async def test_cors_preflight_rejects_unknown_origin(client):
    response = await client.options(
        "/api/books",
        headers={"Origin": "http://evil.example", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


async def test_healthcheck(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.text == "Backend running OK"


OUT_OF_RANGE_ID = "9" * 30


async def test_list_out_of_range_genre_id(client):
    response = await client.get("/api/books", params={"genre": OUT_OF_RANGE_ID})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid genre ID"}


async def test_create_out_of_range_genre_id(client, genres):
    response = await client.post(
        "/api/books", json={"title": "T", "author": "A", "genre_id": OUT_OF_RANGE_ID, "rating": 2}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid genre ID"}


async def test_update_and_delete_out_of_range_book_id(client, genres):
    updated = await client.put(
        f"/api/books/{OUT_OF_RANGE_ID}",
        json={"title": "T", "author": "A", "genre_id": genres["Fiction"], "rating": 1},
    )
    deleted = await client.delete(f"/api/books/{OUT_OF_RANGE_ID}")

    assert updated.status_code == 404
    assert deleted.status_code == 404
    assert deleted.json() == {"error": "Book not found"}


async def test_create_rejects_boolean_rating(client, genres):
    response = await client.post(
        "/api/books", json={"title": "T", "author": "A", "genre_id": genres["Fiction"], "rating": True}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Rating must be a number"}
    assert (await client.get("/api/books")).json() == []


async def test_create_rejects_boolean_genre_id(client, genres):
    response = await client.post("/api/books", json={"title": "T", "author": "A", "genre_id": True, "rating": 2})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid genre ID"}


async def test_update_unknown_book_with_partial_body(client):
    response = await client.put("/api/books/4242", json={"title": "T"})

    assert response.status_code == 404
    assert response.json() == {"error": "Book not found"}
