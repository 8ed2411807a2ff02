"""End-to-end tests for the generated GraphQL API over HTTP."""
import json
import pytest
from fastapi.testclient import TestClient
from grockery.core.loader import load_config
from grockery.db.store import RecordStore
from grockery.main import create_app


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "db.json"
    yield path
    RecordStore.forget(path)


def _config(db_path, reset_on_start=False):
    return load_config(f"""
db:
  filepath: {db_path}
  resetOnStart: {str(reset_on_start).lower()}
entities:
  Category:
    title: String!
  Product:
    name: String
    price: Int
    category: Category
""")


def _post(client, query, variables=None):
    response = client.post("/graphql/", json={"query": query, "variables": variables or {}})
    return response.json()


def test_health(db_path):
    """Test the health endpoint."""
    with TestClient(create_app(_config(db_path))) as client:
        response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_startup_seeds_entity_buckets(db_path):
    """Test that every entity has an empty list after startup."""
    with TestClient(create_app(_config(db_path))):
        pass
    assert json.loads(db_path.read_text(encoding="utf-8")) == {"Category": [], "Product": []}


def test_reset_on_start_clears_data(db_path):
    """Test that resetOnStart wipes records while a false flag keeps them."""
    db_path.write_text(json.dumps({"Category": [{"id": "1", "title": "Old"}]}), encoding="utf-8")

    with TestClient(create_app(_config(db_path))) as client:
        body = _post(client, "{ getCategories { id title } }")
    assert body["data"]["getCategories"] == [{"id": "1", "title": "Old"}]

    with TestClient(create_app(_config(db_path, reset_on_start=True))) as client:
        body = _post(client, "{ getCategories { id } }")
    assert body["data"]["getCategories"] == []


def test_crud_over_http(db_path):
    """Test the full create/read/update/delete cycle."""
    with TestClient(create_app(_config(db_path))) as client:
        body = _post(client, 'mutation { addProduct(name: "Apple", price: 3, category: {title: "Fruit"}) { id name price category { title } } }')
        product = body["data"]["addProduct"]
        assert product["name"] == "Apple"
        assert product["category"] == {"title": "Fruit"}

        body = _post(client, "query ($id: ID!) { getProduct(id: $id) { id name price } }", {"id": product["id"]})
        assert body["data"]["getProduct"] == {"id": product["id"], "name": "Apple", "price": 3}

        body = _post(client, "mutation ($id: ID!) { updateProduct(id: $id, price: 4) { name price } }", {"id": product["id"]})
        assert body["data"]["updateProduct"] == {"name": "Apple", "price": 4}

        body = _post(client, "mutation ($id: ID!) { deleteProduct(id: $id) { id } }", {"id": product["id"]})
        assert body["data"]["deleteProduct"] == {"id": product["id"]}

        body = _post(client, "mutation ($id: ID!) { deleteProduct(id: $id) { id } }", {"id": product["id"]})
        assert body["data"]["deleteProduct"] is None
        assert body["errors"][0]["message"] == f"Cannot find Product item with id {product['id']}."

        body = _post(client, "{ getProducts { id } }")
        assert body["data"]["getProducts"] == []


def test_add_requires_non_null_arguments(db_path):
    """Test that the schema enforces declared non-null arguments."""
    with TestClient(create_app(_config(db_path))) as client:
        body = _post(client, "mutation { addCategory { id } }")
    assert "errors" in body
    assert not body.get("data")
