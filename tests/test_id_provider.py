"""Tests for the shared id pool."""
import httpx
import pytest
from rtdb_orm import ORM, DefaultIdProvider, IdProvider

BASE_URL = "https://test-db.example.com"


@pytest.mark.asyncio
async def test_first_allocation_initializes_pool(orm, fake_db):
    """An absent pool is created with uuid 1 and 1 is returned."""
    provider = orm.get_id_provider()

    assert isinstance(provider, DefaultIdProvider)
    assert await provider.next() == 1
    assert fake_db.data["uuid"] == {"uuid": 1}
    assert fake_db.writes("uuid") == [("PATCH", "uuid")]


@pytest.mark.asyncio
async def test_allocation_increments_counter(orm, fake_db):
    """Each call returns the stored value plus one and writes it back."""
    fake_db.data["uuid"] = {"uuid": 41}
    provider = orm.get_id_provider()

    assert await provider.next() == 42
    assert await provider.next() == 43
    assert fake_db.data["uuid"] == {"uuid": 43}
    assert fake_db.writes("uuid") == [("PUT", "uuid"), ("PUT", "uuid")]


@pytest.mark.asyncio
async def test_allocations_strictly_increase(orm):
    """Ids handed out on one connection are strictly increasing."""
    provider = orm.get_id_provider()
    ids = [await provider.next() for _ in range(5)]

    assert ids == sorted(ids)
    assert len(set(ids)) == 5
    assert ids[0] == 1


@pytest.mark.asyncio
async def test_get_id_pool_absent(orm):
    """Reading an empty pool returns None."""
    assert await orm.get_id_provider().get_id_pool() is None


@pytest.mark.asyncio
async def test_read_failure_propagates(orm, fake_db):
    """HTTP errors reading the pool are raised to the caller."""
    fake_db.fail_on.add(("GET", "uuid"))

    with pytest.raises(httpx.HTTPStatusError):
        await orm.get_id_provider().next()


@pytest.mark.asyncio
async def test_write_failure_propagates(orm, fake_db):
    """HTTP errors writing the incremented pool are raised, not retried."""
    fake_db.data["uuid"] = {"uuid": 3}
    fake_db.fail_on.add(("PUT", "uuid"))

    with pytest.raises(httpx.HTTPStatusError):
        await orm.get_id_provider().next()
    assert fake_db.data["uuid"] == {"uuid": 3}
    assert fake_db.writes("uuid") == [("PUT", "uuid")]


@pytest.mark.asyncio
async def test_custom_pool_path(fake_db):
    """The pool document location can be configured per connection."""
    orm = ORM(BASE_URL, id_pool_path="/meta/ids", transport=httpx.MockTransport(fake_db.handler), activate=False)

    assert await orm.get_id_provider().next() == 1
    assert fake_db.data["meta/ids"] == {"uuid": 1}


@pytest.mark.asyncio
async def test_custom_id_provider_factory(fake_db):
    """A connection hands out ids from the provider its factory builds."""

    class FixedIdProvider(IdProvider):
        def __init__(self, orm):
            self.orm = orm

        async def next(self) -> int:
            return 1000

    orm = ORM(
        BASE_URL,
        transport=httpx.MockTransport(fake_db.handler),
        id_provider_factory=FixedIdProvider,
        activate=False,
    )

    assert await orm.get_id_provider().next() == 1000
    assert "uuid" not in fake_db.data


@pytest.mark.asyncio
async def test_base_provider_is_abstract():
    with pytest.raises(NotImplementedError):
        await IdProvider().next()


@pytest.mark.asyncio
async def test_pool_without_counter_is_rejected(orm, fake_db):
    """A pool document missing its counter raises instead of handing out ids."""
    fake_db.data["uuid"] = {"counter": 3}

    with pytest.raises(ValueError):
        await orm.get_id_provider().next()
    assert fake_db.writes("uuid") == []
