"""Tests for resolver generation and composition."""
import logging
import pytest
from ariadne import graphql
from grockery.api.graphql import build_schema
from grockery.db.store import RecordNotFoundError, RecordStore
from grockery.generators.compose import compose, merge_keyed
from grockery.generators.resolver_gen.generator import build_entity_resolvers
from grockery.generators.schema_gen.fields import build_entity_spec


@pytest.fixture
def store(tmp_path):
    path = tmp_path / "db.json"
    yield RecordStore.open(path)
    RecordStore.forget(path)


def test_entity_resolver_names(store):
    """Test that five CRUD resolvers are generated per entity."""
    resolvers = build_entity_resolvers(build_entity_spec("Category", {"title": "String"}), store)

    assert set(resolvers.queries) == {"getCategories", "getCategory"}
    assert set(resolvers.mutations) == {"addCategory", "updateCategory", "deleteCategory"}


@pytest.mark.asyncio
async def test_resolvers_call_store(store):
    """Test the CRUD resolvers end to end against the store."""
    resolvers = build_entity_resolvers(build_entity_spec("Person", {"name": "String", "age": "Int"}), store)

    created = await resolvers.mutations["addPerson"](None, None, name="A", age=5)
    assert created["name"] == "A"

    fetched = await resolvers.queries["getPerson"](None, None, id=created["id"])
    assert fetched == created

    updated = await resolvers.mutations["updatePerson"](None, None, id=created["id"], name="B")
    assert updated == {"id": created["id"], "name": "B", "age": 5}

    assert await resolvers.queries["getPeople"](None, None) == [updated]

    removed = await resolvers.mutations["deletePerson"](None, None, id=created["id"])
    assert removed == updated

    with pytest.raises(RecordNotFoundError):
        await resolvers.queries["getPerson"](None, None, id=created["id"])


def test_merge_keyed_later_entity_wins(caplog):
    """Test that a field clash keeps the later entity's value and logs a warning."""
    with caplog.at_level(logging.WARNING):
        merged = merge_keyed([("A", {"x": 1, "y": 2}), ("B", {"y": 3, "z": 4})], "Query")

    assert merged == {"x": 1, "y": 3, "z": 4}
    assert "Query field y from B replaces the one generated for A" in caplog.text


def test_compose_resolver_map_shape(store):
    """Test the merged resolver map has Query and Mutation roots."""
    entities = [
        build_entity_spec("Category", {"title": "String"}),
        build_entity_spec("Box", {"label": "String"}),
    ]
    api = compose(entities, store)

    assert set(api.resolvers) == {"Query", "Mutation"}
    assert set(api.resolvers["Query"]) == {"getCategories", "getCategory", "getBoxes", "getBox"}
    assert len(api.resolvers["Mutation"]) == 6
    assert "type Query {" in api.type_defs


def test_compose_collision_uses_later_resolver(store):
    """Test that the later entity's resolver replaces the earlier one."""
    entities = [
        build_entity_spec("Box", {"label": "String"}),
        build_entity_spec("Boxes", {"size": "Int"}),
    ]
    api = compose(entities, store)
    boxes_resolvers = build_entity_resolvers(entities[1], store)

    assert api.resolvers["Query"]["getBoxes"].__qualname__ == boxes_resolvers.queries["getBoxes"].__qualname__
    assert api.resolvers["Query"]["getBoxes"].__qualname__.endswith("resolve_get_one")


@pytest.mark.asyncio
async def test_executable_schema_round_trip(store):
    """Test queries and mutations through the executable schema."""
    entities = [build_entity_spec("Category", {"title": "String!", "meta": "JSON"})]
    schema = build_schema(compose(entities, store))
    await store.ensure_entities(["Category"])

    success, result = await graphql(schema, {
        "query": 'mutation { addCategory(title: "Fruit", meta: {color: "red"}) { id title meta } }'
    })
    assert success
    created = result["data"]["addCategory"]
    assert created["title"] == "Fruit"
    assert created["meta"] == {"color": "red"}

    success, result = await graphql(schema, {
        "query": "mutation ($id: ID!) { updateCategory(id: $id, title: \"Veg\") { id title meta } }",
        "variables": {"id": created["id"]},
    })
    assert result["data"]["updateCategory"] == {"id": created["id"], "title": "Veg", "meta": {"color": "red"}}

    success, result = await graphql(schema, {"query": "{ getCategories { id title } }"})
    assert result["data"]["getCategories"] == [{"id": created["id"], "title": "Veg"}]


@pytest.mark.asyncio
async def test_not_found_becomes_field_error(store):
    """Test that NotFound surfaces as a GraphQL field error."""
    schema = build_schema(compose([build_entity_spec("Category", {"title": "String"})], store))

    _, result = await graphql(schema, {"query": '{ getCategory(id: "missing") { id } }'})

    assert result["data"] == {"getCategory": None}
    assert result["errors"][0]["message"] == "Cannot find Category item with id missing."
    assert result["errors"][0]["path"] == ["getCategory"]
