"""CRUD resolver generation bound to a record store."""
from typing import Any
from grockery.db.store import RecordStore
from grockery.generators.resolver_gen.types import EntityResolvers
from grockery.generators.schema_gen.render import (
    add_field,
    delete_field,
    get_all_field,
    get_one_field,
    update_field,
)
from grockery.generators.schema_gen.types import EntitySpec


def build_entity_resolvers(entity: EntitySpec, store: RecordStore) -> EntityResolvers:
    """
    Build the five CRUD resolvers for an entity.

    Resolvers use the `(obj, info, **args)` calling convention. Store errors
    (e.g. RecordNotFoundError) propagate to the GraphQL layer unchanged.

    Args:
        entity: Entity descriptor
        store: Record store shared by all entities

    Returns:
        EntityResolvers keyed by generated field name
    """
    name = entity.name

    async def resolve_get_all(_obj: Any, _info: Any, **_args: Any):
        return await store.get_all(name)

    async def resolve_get_one(_obj: Any, _info: Any, id: str, **_args: Any):
        return await store.get(name, id)

    async def resolve_add(_obj: Any, _info: Any, **args: Any):
        return await store.add(name, args)

    async def resolve_update(_obj: Any, _info: Any, id: str, **patch: Any):
        return await store.update(name, id, patch)

    async def resolve_delete(_obj: Any, _info: Any, id: str, **_args: Any):
        return await store.delete(name, id)

    return EntityResolvers(
        entity_name=name,
        queries={
            get_all_field(name): resolve_get_all,
            get_one_field(name): resolve_get_one,
        },
        mutations={
            add_field(name): resolve_add,
            update_field(name): resolve_update,
            delete_field(name): resolve_delete,
        },
    )
