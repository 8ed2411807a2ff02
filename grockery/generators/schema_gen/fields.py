"""Property type parsing and output/input field derivation."""
import re
from typing import Iterable, List, Tuple, Union, Mapping
from grockery.generators.schema_gen.types import (
    EntityFields,
    EntitySpec,
    Property,
    PropertyKind,
    PropertyType,
)


ID_FIELD = "id"
INPUT_SUFFIX = "Input"

_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")

_SCALAR_NAMES = {
    "ID": PropertyKind.IDENTIFIER,
    "Int": PropertyKind.INTEGER,
    "Boolean": PropertyKind.BOOLEAN,
    "String": PropertyKind.TEXT,
    "JSON": PropertyKind.JSON,
}


def is_valid_name(name: str) -> bool:
    """Check that a string is a valid GraphQL name."""
    return bool(_NAME_RE.match(name or ""))


def parse_property_type(raw: str) -> PropertyType:
    """
    Parse a declared type string such as "String!", "Category" or "[Tag!]".

    Raises:
        ValueError: if the string is not a (possibly list-wrapped) GraphQL type name
    """
    text = raw.strip()
    list_non_null = False
    is_list = False

    if text.endswith("]!"):
        list_non_null = True
        text = text[:-1]
    if text.startswith("[") and text.endswith("]"):
        is_list = True
        text = text[1:-1].strip()
    elif list_non_null:
        raise ValueError(f"Invalid property type '{raw}'")

    non_null = text.endswith("!")
    if non_null:
        text = text[:-1]

    if not is_valid_name(text):
        raise ValueError(f"Invalid property type '{raw}'")

    kind = _SCALAR_NAMES.get(text, PropertyKind.ENTITY_REFERENCE)
    return PropertyType(
        kind=kind,
        name=text,
        non_null=non_null,
        is_list=is_list,
        list_non_null=list_non_null,
    )


def format_type(prop_type: PropertyType, as_input: bool = False, nullable: bool = False) -> str:
    """
    Render a property type back to schema text.

    References to other entities become `<Type>Input` when rendered for an input.
    `nullable` drops the non-null markers, used for patch arguments.
    """
    name = prop_type.name
    if as_input and prop_type.is_reference:
        name = f"{name}{INPUT_SUFFIX}"
    # inside a list the item marker is kept; only the outer one is relaxed
    keep_inner = prop_type.is_list or not nullable
    if prop_type.non_null and keep_inner:
        name += "!"
    if prop_type.is_list:
        name = f"[{name}]"
        if prop_type.list_non_null and not nullable:
            name += "!"
    return name


def build_entity_spec(
    name: str,
    properties: Union[Mapping[str, str], Iterable[Tuple[str, str]]],
) -> EntitySpec:
    """
    Build an entity descriptor from (propName, propType) pairs.

    Duplicate property names keep the position of the first declaration and the
    type of the last. An `id: ID` property is appended if none is declared.
    """
    if isinstance(properties, Mapping):
        pairs = list(properties.items())
    else:
        pairs = list(properties)

    declared = {}
    for prop_name, raw_type in pairs:
        declared[prop_name] = Property(
            name=prop_name,
            type=parse_property_type(raw_type),
            raw_type=raw_type,
        )

    if ID_FIELD not in declared:
        declared[ID_FIELD] = Property(
            name=ID_FIELD,
            type=parse_property_type("ID"),
            raw_type="ID",
        )

    return EntitySpec(name=name, properties=tuple(declared.values()))


def derive_fields(entity: EntitySpec) -> EntityFields:
    """Compute the output type fields (with `id`) and input type fields (without `id`)."""
    type_fields: List[Tuple[str, str]] = []
    input_fields: List[Tuple[str, str]] = []

    for prop in entity.properties:
        type_fields.append((prop.name, format_type(prop.type)))
        if prop.name == ID_FIELD:
            continue
        input_fields.append((prop.name, format_type(prop.type, as_input=True)))

    return EntityFields(type_fields=type_fields, input_fields=input_fields)


def derive_patch_fields(entity: EntitySpec) -> List[Tuple[str, str]]:
    """Input fields with non-null markers removed, so updates accept partial data."""
    return [
        (prop.name, format_type(prop.type, as_input=True, nullable=True))
        for prop in entity.properties
        if prop.name != ID_FIELD
    ]
