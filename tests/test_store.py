"""Test in-memory and SQL catalog stores."""
import pytest
from sqlalchemy.exc import IntegrityError


def _book(title="Clean Code", isbn="978-0132350884", genre="Programming", price=300.0):
    return {
        "title": title,
        "author": "Robert C. Martin",
        "genre": genre,
        "price": price,
        "publicationYear": 2008,
        "ISBN": isbn,
        "description": None,
    }


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_memory_ids_start_at_one(memory_store):
    first = await memory_store.create(_book())
    second = await memory_store.create(_book(title="The Clean Coder"))
    assert first["id"] == 1
    assert second["id"] == 2


@pytest.mark.asyncio
async def test_memory_reuses_highest_id_after_delete(memory_store):
    await memory_store.create(_book())
    second = await memory_store.create(_book(title="The Clean Coder"))
    await memory_store.delete(second["id"])
    third = await memory_store.create(_book(title="Refactoring"))
    assert third["id"] == second["id"]


@pytest.mark.asyncio
async def test_memory_returns_copies(memory_store):
    created = await memory_store.create(_book())
    created["title"] = "Mutated"
    fetched = await memory_store.get_by_id(created["id"])
    assert fetched["title"] == "Clean Code"

    listed = await memory_store.list_all()
    listed[0]["title"] = "Mutated"
    assert (await memory_store.get_by_id(created["id"]))["title"] == "Clean Code"


@pytest.mark.asyncio
async def test_memory_update_merges_fields(memory_store):
    created = await memory_store.create(_book())
    updated = await memory_store.update(created["id"], {"price": 250.0, "id": 42})
    assert updated["id"] == created["id"]
    assert updated["price"] == 250.0
    assert updated["title"] == "Clean Code"
    assert await memory_store.update(99, {"price": 1.0}) is None


@pytest.mark.asyncio
async def test_memory_delete(memory_store):
    created = await memory_store.create(_book())
    assert await memory_store.delete(created["id"]) is True
    assert await memory_store.delete(created["id"]) is False
    assert await memory_store.get_by_id(created["id"]) is None


@pytest.mark.asyncio
async def test_memory_list_order_and_genre(memory_store):
    await memory_store.create(_book(title="B Book", genre="Programming"))
    await memory_store.create(_book(title="A Book", genre="Fantasy"))
    await memory_store.create(_book(title="C Book", genre="programming"))
    assert [b["title"] for b in await memory_store.list_all()] == ["B Book", "A Book", "C Book"]
    assert [b["title"] for b in await memory_store.list_by_genre("PROGRAMMING")] == ["B Book", "C Book"]
    assert await memory_store.list_by_genre("Program") == []


@pytest.mark.asyncio
async def test_memory_clear(memory_store):
    await memory_store.create(_book())
    await memory_store.clear()
    assert len(memory_store) == 0


# ---------------------------------------------------------------------------
# SQL store
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_sql_create_and_get(sql_store):
    created = await sql_store.create(_book())
    assert isinstance(created["id"], int)
    assert created["createdAt"] is not None
    assert created["updatedAt"] is not None

    fetched = await sql_store.get_by_id(created["id"])
    for key, value in _book().items():
        assert fetched[key] == value


@pytest.mark.asyncio
async def test_sql_ids_unique(sql_store):
    first = await sql_store.create(_book())
    second = await sql_store.create(_book(title="The Clean Coder", isbn="978-0137081073"))
    assert first["id"] != second["id"]


@pytest.mark.asyncio
async def test_sql_unique_isbn(sql_store):
    await sql_store.create(_book())
    with pytest.raises(IntegrityError):
        await sql_store.create(_book(title="Another Title"))


@pytest.mark.asyncio
async def test_sql_get_by_isbn(sql_store):
    created = await sql_store.create(_book())
    assert (await sql_store.get_by_isbn("978-0132350884"))["id"] == created["id"]
    assert await sql_store.get_by_isbn("00000") is None


@pytest.mark.asyncio
async def test_sql_update(sql_store):
    created = await sql_store.create(_book())
    updated = await sql_store.update(created["id"], {"price": 150.5, "description": "Updated"})
    assert updated["price"] == 150.5
    assert updated["description"] == "Updated"
    assert updated["title"] == "Clean Code"
    assert await sql_store.update(999, {"price": 1.0}) is None


@pytest.mark.asyncio
async def test_sql_delete(sql_store):
    created = await sql_store.create(_book())
    assert await sql_store.delete(created["id"]) is True
    assert await sql_store.delete(created["id"]) is False
    assert await sql_store.get_by_id(created["id"]) is None


@pytest.mark.asyncio
async def test_sql_list_and_genre(sql_store):
    await sql_store.create(_book(title="B Book", isbn="11111", genre="Programming"))
    await sql_store.create(_book(title="A Book", isbn="22222", genre="Fantasy"))
    await sql_store.create(_book(title="C Book", isbn="33333", genre="programming"))
    assert [b["title"] for b in await sql_store.list_all()] == ["B Book", "A Book", "C Book"]
    assert [b["title"] for b in await sql_store.list_by_genre("PROGRAMMING")] == ["B Book", "C Book"]

    await sql_store.clear()
    assert await sql_store.list_all() == []
