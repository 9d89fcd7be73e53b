"""Tests for the book and genre stores."""
from __future__ import annotations

from app.crud.book import book_db_crud
from app.crud.genre import genre_db_crud
from app.schemas.book import BookFilter


async def test_genre_store_lookups(db):
    created = await genre_db_crud.create_many(db, ["Mystery", "Fantasy"])
    await db.commit()

    assert await genre_db_crud.count(db) == 2
    assert [g.name for g in await genre_db_crud.list_all(db)] == ["Fantasy", "Mystery"]
    assert (await genre_db_crud.get_by_name(db, "Mystery")).id == created[0].id
    assert (await genre_db_crud.get(db, created[1].id, for_share=True)).name == "Fantasy"
    assert await genre_db_crud.get(db, 999) is None
    assert await genre_db_crud.get_by_name(db, "mystery") is None


async def test_book_store_joins_genre_name(db):
    genre = await genre_db_crud.create(db, name="Fiction")
    kept = await book_db_crud.create(db, values={"title": "A", "author": "X", "genre_id": genre.id, "rating": 2.0})
    orphan = await book_db_crud.create(db, values={"title": "B", "author": "Y", "genre_id": 555, "rating": 4.0})
    await db.commit()

    rows = await book_db_crud.find_matching(db, BookFilter())

    assert [(book.id, name) for book, name in rows] == [(kept.id, "Fiction"), (orphan.id, None)]


async def test_book_store_update_and_delete_missing(db):
    assert await book_db_crud.update(db, id=404, values={"title": "T"}) is None
    assert await book_db_crud.delete(db, id=404) is None
