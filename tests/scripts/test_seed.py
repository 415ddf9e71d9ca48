"""Tests for the database seeding script"""
import importlib.util
import json
from pathlib import Path

import pytest

from product_api.repositories.outcome import Success
from product_api.repositories.product import ProductRepository
from product_api.repositories.user import UserRepository

SEED_SCRIPT = Path(__file__).resolve().parents[2] / "database" / "scripts" / "seed.py"


@pytest.fixture(scope="module")
def seed_module():
    spec = importlib.util.spec_from_file_location("seed_script", SEED_SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestLoadSeedData:

    def test_default_file(self, seed_module):
        data = seed_module.load_seed_data()

        assert data["users"]
        assert data["products"]
        assert all("email" in user for user in data["users"])

    def test_missing_sections_are_empty(self, seed_module, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps({"users": [{"email": "a@example.com"}]}))

        data = seed_module.load_seed_data(path)

        assert data == {"users": [{"email": "a@example.com"}], "products": []}


class TestSeed:

    @pytest.mark.asyncio
    async def test_seed_with_clear_replaces_rows(self, seed_module, database):
        data = {
            "users": [{"email": "new@example.com", "role": "user"}],
            "products": [{"name": "Dripper", "category_id": 4, "price": 21.5}],
        }

        counts = await seed_module.seed(database, data, clear=True)

        assert counts == {"users": 1, "products": 1}
        users = await UserRepository(database).list_users()
        products = await ProductRepository(database).find_all()
        assert isinstance(users, Success) and [u.email for u in users.value] == ["new@example.com"]
        assert isinstance(products, Success) and [p.name for p in products.value] == ["Dripper"]

    @pytest.mark.asyncio
    async def test_seed_appends_without_clear(self, seed_module, database):
        await seed_module.seed(database, {"users": [], "products": [{"name": "Filter Papers"}]})

        products = await ProductRepository(database).find_all()
        assert len(products.value) == 4
