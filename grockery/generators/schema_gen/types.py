"""Dataclasses for schema generation."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class PropertyKind(str, Enum):
    IDENTIFIER = "ID"
    INTEGER = "Int"
    BOOLEAN = "Boolean"
    TEXT = "String"
    JSON = "JSON"
    ENTITY_REFERENCE = "EntityReference"


SCALAR_KINDS = {
    PropertyKind.IDENTIFIER,
    PropertyKind.INTEGER,
    PropertyKind.BOOLEAN,
    PropertyKind.TEXT,
    PropertyKind.JSON,
}


@dataclass(frozen=True)
class PropertyType:
    """A declared property type, parsed once from its raw string form."""
    kind: PropertyKind
    name: str  # GraphQL type name, e.g. "Int" or "Category"
    non_null: bool = False
    is_list: bool = False
    list_non_null: bool = False

    @property
    def is_scalar(self) -> bool:
        return self.kind in SCALAR_KINDS

    @property
    def is_reference(self) -> bool:
        return self.kind is PropertyKind.ENTITY_REFERENCE


@dataclass(frozen=True)
class Property:
    name: str
    type: PropertyType
    raw_type: str


@dataclass(frozen=True)
class EntitySpec:
    """Entity descriptor: a name plus its ordered properties (always including `id`)."""
    name: str
    properties: Tuple[Property, ...]

    def property_names(self) -> List[str]:
        return [p.name for p in self.properties]

    def get_property(self, name: str) -> Optional[Property]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclass(frozen=True)
class EntityFields:
    """Output and input field lists derived for one entity."""
    type_fields: List[Tuple[str, str]]
    input_fields: List[Tuple[str, str]]


@dataclass
class SchemaFragment:
    """Generated schema text for one entity."""
    entity_name: str
    type_def: str
    input_def: str
    queries: Dict[str, str] = field(default_factory=dict)  # field name -> signature
    mutations: Dict[str, str] = field(default_factory=dict)
