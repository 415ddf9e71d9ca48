"""Tests for ProductRepository against a SQLite store"""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from product_api.db.session import Database
from product_api.repositories.outcome import Failure, NotFound, Success
from product_api.repositories.product import ProductRepository


@pytest.fixture
def repository(database):
    return ProductRepository(database)


class TestProductReads:
    """Lookups never mutate and distinguish empty, absent and failed"""

    @pytest.mark.asyncio
    async def test_find_all(self, repository):
        outcome = await repository.find_all()

        assert isinstance(outcome, Success)
        assert [p.id for p in outcome.value] == [1, 2, 42]

    @pytest.mark.asyncio
    async def test_find_by_id(self, repository):
        outcome = await repository.find_by_id(42)

        assert isinstance(outcome, Success)
        assert outcome.value.name == "Hand Grinder"
        assert outcome.value.price == pytest.approx(39.99)

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, repository):
        assert isinstance(await repository.find_by_id(999), NotFound)

    @pytest.mark.asyncio
    async def test_find_by_category(self, repository):
        outcome = await repository.find_by_category(1)

        assert isinstance(outcome, Success)
        assert {p.name for p in outcome.value} == {"Espresso Cup", "Milk Jug"}

    @pytest.mark.asyncio
    async def test_empty_category_is_empty_success(self, repository):
        outcome = await repository.find_by_category(7)
        assert outcome == Success([])


class TestProductWrites:
    """Upsert and delete"""

    @pytest.mark.asyncio
    async def test_upsert_without_id_creates(self, repository):
        outcome = await repository.upsert({"name": "Widget", "price": 9.99})

        assert isinstance(outcome, Success)
        assert outcome.value.id is not None
        assert outcome.value.name == "Widget"

        stored = await repository.find_by_id(outcome.value.id)
        assert stored == outcome

    @pytest.mark.asyncio
    async def test_upsert_with_unknown_id_creates_with_that_id(self, repository):
        outcome = await repository.upsert({"id": 500, "name": "Tamper", "category_id": 2})

        assert isinstance(outcome, Success)
        assert outcome.value.id == 500
        assert isinstance(await repository.find_by_id(500), Success)

    @pytest.mark.asyncio
    async def test_upsert_with_existing_id_updates_supplied_fields(self, repository):
        outcome = await repository.upsert({"id": 1, "price": 7.25})

        assert isinstance(outcome, Success)
        assert outcome.value.price == pytest.approx(7.25)
        assert outcome.value.name == "Espresso Cup"

    @pytest.mark.asyncio
    async def test_upsert_is_idempotent(self, repository):
        payload = {"id": 2, "name": "Milk Jug XL", "price": 16.0, "stock": 10}

        first = await repository.upsert(payload)
        second = await repository.upsert(payload)

        assert first == second
        assert await repository.find_by_id(2) == second
        assert len((await repository.find_all()).value) == 3

    @pytest.mark.asyncio
    async def test_upsert_ignores_unknown_keys(self, repository):
        outcome = await repository.upsert({"name": "Scale", "colour": "black"})

        assert isinstance(outcome, Success)
        assert not hasattr(outcome.value, "colour")

    @pytest.mark.asyncio
    async def test_upsert_rejected_data_is_failure(self, repository):
        outcome = await repository.upsert({"name": "Scale", "price": "cheap"})

        assert isinstance(outcome, Failure)
        assert "price" in outcome.message

    @pytest.mark.asyncio
    async def test_upsert_out_of_range_integers_are_failure(self, repository):
        for field in ("id", "category_id", "stock"):
            outcome = await repository.upsert({"name": "Scale", field: 2**64})

            assert isinstance(outcome, Failure)
            assert field in outcome.message

        assert [p.id for p in (await repository.find_all()).value] == [1, 2, 42]

    @pytest.mark.asyncio
    async def test_delete_by_id(self, repository):
        outcome = await repository.delete_by_id(42)

        assert isinstance(outcome, Success)
        assert outcome.value.id == 42
        assert isinstance(await repository.find_by_id(42), NotFound)

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_found(self, repository):
        assert isinstance(await repository.delete_by_id(999), NotFound)


class TestStoreFailures:
    """Store errors come back as Failure instead of raising"""

    @pytest.mark.asyncio
    async def test_disconnected_database(self, seeded_database_url):
        repository = ProductRepository(Database(seeded_database_url))

        outcome = await repository.find_all()

        assert outcome == Failure("Database is not connected")

    @pytest.mark.asyncio
    async def test_query_error_is_failure(self, database, monkeypatch):
        def failing_session():
            raise OperationalError("SELECT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(database, "session", MagicMock(side_effect=failing_session))
        repository = ProductRepository(database)

        for call in (
            repository.find_all(),
            repository.find_by_id(1),
            repository.find_by_category(1),
            repository.upsert({"name": "x"}),
            repository.delete_by_id(1),
        ):
            outcome = await call
            assert isinstance(outcome, Failure)
            assert "disk I/O error" in outcome.message

    @pytest.mark.asyncio
    async def test_out_of_range_lookup_is_failure(self, repository):
        """The driver rejects integers wider than the column with OverflowError"""
        assert isinstance(await repository.find_by_id(2**64), Failure)
        assert isinstance(await repository.delete_by_id(2**64), Failure)

    @pytest.mark.asyncio
    async def test_overflow_error_is_failure(self, database, monkeypatch):
        def overflowing_session():
            raise OverflowError("Python int too large to convert to SQLite INTEGER")

        monkeypatch.setattr(database, "session", MagicMock(side_effect=overflowing_session))

        outcome = await ProductRepository(database).find_by_category(1)

        assert outcome == Failure("Python int too large to convert to SQLite INTEGER")
