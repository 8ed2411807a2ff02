"""Schema text templates for entity types, inputs and root operations."""
from typing import Dict, Iterable, List, Tuple
from grockery.generators.schema_gen.fields import (
    INPUT_SUFFIX,
    derive_fields,
    derive_patch_fields,
)
from grockery.generators.schema_gen.types import EntitySpec, SchemaFragment
from grockery.generators.schema_gen.utils import pluralize


INDENT = "  "

JSON_SCALAR = "scalar JSON"


def get_all_field(entity_name: str) -> str:
    return f"get{pluralize(entity_name)}"


def get_one_field(entity_name: str) -> str:
    return f"get{entity_name}"


def add_field(entity_name: str) -> str:
    return f"add{entity_name}"


def update_field(entity_name: str) -> str:
    return f"update{entity_name}"


def delete_field(entity_name: str) -> str:
    return f"delete{entity_name}"


def _render_block(keyword: str, name: str, fields: Iterable[Tuple[str, str]]) -> str:
    lines = [f"{keyword} {name} {{"]
    for field_name, field_type in fields:
        lines.append(f"{INDENT}{field_name}: {field_type}")
    lines.append("}")
    return "\n".join(lines)


def _render_signature(name: str, args: List[Tuple[str, str]], returns: str) -> str:
    if not args:
        return f"{name}: {returns}"
    args_str = ", ".join(f"{arg_name}: {arg_type}" for arg_name, arg_type in args)
    return f"{name}({args_str}): {returns}"


def render_entity_type(entity: EntitySpec) -> str:
    """Generate the output `type` block for an entity."""
    return _render_block("type", entity.name, derive_fields(entity).type_fields)


def render_entity_input(entity: EntitySpec) -> str:
    """Generate the `input` block for an entity (no `id`)."""
    return _render_block("input", f"{entity.name}{INPUT_SUFFIX}", derive_fields(entity).input_fields)


def render_entity_queries(entity: EntitySpec) -> Dict[str, str]:
    name = entity.name
    return {
        get_all_field(name): _render_signature(get_all_field(name), [], f"[{name}]"),
        get_one_field(name): _render_signature(get_one_field(name), [("id", "ID!")], name),
    }


def render_entity_mutations(entity: EntitySpec) -> Dict[str, str]:
    name = entity.name
    input_fields = derive_fields(entity).input_fields
    patch_fields = derive_patch_fields(entity)
    return {
        add_field(name): _render_signature(add_field(name), input_fields, name),
        update_field(name): _render_signature(update_field(name), [("id", "ID!")] + patch_fields, name),
        delete_field(name): _render_signature(delete_field(name), [("id", "ID!")], name),
    }


def render_entity_fragment(entity: EntitySpec) -> SchemaFragment:
    """Generate all schema text for one entity."""
    return SchemaFragment(
        entity_name=entity.name,
        type_def=render_entity_type(entity),
        input_def=render_entity_input(entity),
        queries=render_entity_queries(entity),
        mutations=render_entity_mutations(entity),
    )


def render_schema(
    fragments: List[SchemaFragment],
    queries: Dict[str, str],
    mutations: Dict[str, str],
) -> str:
    """
    Assemble the final schema document.

    Args:
        fragments: Per-entity fragments, in declaration order
        queries: Merged query signatures keyed by field name
        mutations: Merged mutation signatures keyed by field name
    """
    blocks = [JSON_SCALAR]
    for fragment in fragments:
        blocks.append(fragment.type_def)
        blocks.append(fragment.input_def)

    blocks.append(_render_root("Query", queries.values()))
    blocks.append(_render_root("Mutation", mutations.values()))

    return "\n\n".join(blocks) + "\n"


def _render_root(name: str, signatures: Iterable[str]) -> str:
    lines = [f"type {name} {{"]
    for signature in signatures:
        lines.append(f"{INDENT}{signature}")
    lines.append("}")
    return "\n".join(lines)
