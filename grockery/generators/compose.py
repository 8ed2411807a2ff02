"""Orchestrator that merges per-entity schema fragments and resolvers."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple
from grockery.db.store import RecordStore
from grockery.generators.resolver_gen.generator import build_entity_resolvers
from grockery.generators.schema_gen.render import render_entity_fragment, render_schema
from grockery.generators.schema_gen.types import EntitySpec, SchemaFragment

log = logging.getLogger(__name__)


@dataclass
class MockApi:
    """Schema text plus the resolver map handed to the GraphQL engine."""
    type_defs: str
    resolvers: Dict[str, Dict[str, Any]]


def merge_keyed(named_maps: Iterable[Tuple[str, Dict[str, Any]]], kind: str) -> Dict[str, Any]:
    """
    Merge field maps in order; on a name clash the later entity replaces the earlier one.

    Args:
        named_maps: (entity name, field map) pairs in registration order
        kind: "Query" or "Mutation", used in the collision warning
    """
    merged: Dict[str, Any] = {}
    owners: Dict[str, str] = {}
    for entity_name, field_map in named_maps:
        for field_name, value in field_map.items():
            if field_name in merged:
                log.warning(
                    "%s field %s from %s replaces the one generated for %s",
                    kind, field_name, entity_name, owners[field_name],
                    extra={"entity": entity_name, "op": "compose"},
                )
            merged[field_name] = value
            owners[field_name] = entity_name
    return merged


def generate_fragments(entities: List[EntitySpec]) -> List[SchemaFragment]:
    return [render_entity_fragment(entity) for entity in entities]


def generate_schema(entities: List[EntitySpec]) -> str:
    """Generate the full schema text for a list of entities."""
    fragments = generate_fragments(entities)
    queries = merge_keyed(((f.entity_name, f.queries) for f in fragments), "Query")
    mutations = merge_keyed(((f.entity_name, f.mutations) for f in fragments), "Mutation")
    return render_schema(fragments, queries, mutations)


def generate_resolvers(entities: List[EntitySpec], store: RecordStore) -> Dict[str, Dict[str, Any]]:
    """Build the merged `{"Query": ..., "Mutation": ...}` resolver map."""
    entity_resolvers = [build_entity_resolvers(entity, store) for entity in entities]
    return {
        "Query": merge_keyed(((r.entity_name, r.queries) for r in entity_resolvers), "Query"),
        "Mutation": merge_keyed(((r.entity_name, r.mutations) for r in entity_resolvers), "Mutation"),
    }


def compose(entities: List[EntitySpec], store: RecordStore) -> MockApi:
    """
    Generate the complete mock API for a list of entities.

    Args:
        entities: Entity descriptors, in declaration order
        store: Record store the resolvers are bound to

    Returns:
        MockApi with schema text and resolver map
    """
    return MockApi(
        type_defs=generate_schema(entities),
        resolvers=generate_resolvers(entities, store),
    )
