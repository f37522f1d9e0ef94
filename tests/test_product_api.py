"""Tests for the product REST API.

These tests verify:
- Status codes for each store outcome
- Request bodies reaching the store unchanged
"""

import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api import create_app
from src.config import ApiConfig, AppConfig, LoggingConfig, StorageConfig
from src.services import ProductStore

PRODUCT = {
    "title": "A",
    "description": "d",
    "price": 10,
    "thumbnail": "t",
    "code": "C1",
    "stock": 5,
}


class TestProductApi:
    """Test the /products endpoints against a temporary products file."""

    @pytest.fixture
    def temp_dir(self):
        path = tempfile.mkdtemp()
        yield Path(path)
        # Cleanup
        shutil.rmtree(path, ignore_errors=True)

    @pytest.fixture
    def app_config(self, temp_dir):
        return AppConfig(
            storage=StorageConfig(
                products_path=str(temp_dir / "products.json"),
                indent=2,
                encoding="utf-8",
                atomic_writes=True,
                serialize_writes=True,
            ),
            logging=LoggingConfig(level="WARNING", format="%(message)s"),
            api=ApiConfig(title="Test API", version="0.0.1"),
        )

    @pytest.fixture
    def client(self, app_config):
        return TestClient(create_app(app_config))

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_app_uses_configured_storage(self, app_config):
        app = create_app(app_config)

        assert str(app.state.product_store.path) == app_config.storage.products_path
        assert app.title == "Test API"

    def test_app_accepts_explicit_store(self, app_config, temp_dir):
        store = ProductStore(temp_dir / "other.json")

        app = create_app(app_config, store=store)

        assert app.state.product_store is store

    def test_list_empty(self, client):
        response = client.get("/products")

        assert response.status_code == 200
        assert response.json() == []

    def test_create_product(self, client):
        response = client.post("/products", json={**PRODUCT, "category": "tools"})

        assert response.status_code == 201
        assert response.json() == {"id": 1, **PRODUCT, "category": "tools"}
        assert client.get("/products").json() == [{"id": 1, **PRODUCT, "category": "tools"}]

    def test_create_product_with_zero_stock(self, client):
        response = client.post("/products", json={**PRODUCT, "stock": 0})

        assert response.status_code == 201
        assert response.json()["stock"] == 0

    def test_create_product_missing_field(self, client):
        body = dict(PRODUCT)
        del body["stock"]

        response = client.post("/products", json=body)

        assert response.status_code == 400
        assert "stock" in response.json()["detail"]
        assert client.get("/products").json() == []

    def test_create_product_duplicate_code(self, client):
        client.post("/products", json=PRODUCT)

        response = client.post("/products", json={**PRODUCT, "title": "B"})

        assert response.status_code == 409
        assert len(client.get("/products").json()) == 1

    def test_get_product(self, client):
        client.post("/products", json=PRODUCT)

        response = client.get("/products/1")

        assert response.status_code == 200
        assert response.json() == {"id": 1, **PRODUCT}

    def test_get_unknown_product(self, client):
        response = client.get("/products/3")

        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found: id=3"

    def test_update_product(self, client):
        client.post("/products", json=PRODUCT)

        response = client.put("/products/1", json={"price": 15, "id": 9})

        assert response.status_code == 200
        assert response.json() == {"id": 1, **PRODUCT, "price": 15}

    def test_update_product_to_null(self, client):
        client.post("/products", json=PRODUCT)

        response = client.put("/products/1", json={"price": None})

        assert response.status_code == 200
        assert response.json() == {"id": 1, **PRODUCT, "price": None}
        assert client.get("/products/1").json()["price"] is None

    def test_update_unknown_product(self, client):
        response = client.put("/products/1", json={"price": 15})

        assert response.status_code == 404

    def test_delete_product(self, client):
        client.post("/products", json=PRODUCT)
        client.post("/products", json={**PRODUCT, "code": "C2"})

        response = client.delete("/products/2")

        assert response.status_code == 204
        assert [p["id"] for p in client.get("/products").json()] == [1]
        assert client.delete("/products/2").status_code == 404

    def test_corrupt_file_is_server_error(self, client, app_config):
        Path(app_config.storage.products_path).write_text("[{oops", encoding="utf-8")

        assert client.get("/products").status_code == 500
        assert client.post("/products", json=PRODUCT).status_code == 500
        assert Path(app_config.storage.products_path).read_text(encoding="utf-8") == "[{oops"
