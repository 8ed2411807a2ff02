"""Load the YAML entity description into entity descriptors and db config."""
import logging
from typing import Any, Dict
import yaml
from pydantic import ValidationError
from grockery.generators.schema_gen.fields import ID_FIELD, INPUT_SUFFIX, build_entity_spec, is_valid_name
from grockery.generators.schema_gen.types import PropertyKind
from grockery.schemas.config import DatabaseConfig, MockConfig

log = logging.getLogger(__name__)


class ConfigError(ValueError):
    """The entity description cannot be turned into a mock API."""


# type names the generated schema defines on its own
RESERVED_TYPE_NAMES = {"Query", "Mutation", "Subscription", "JSON", "ID", "Int", "Float", "Boolean", "String"}


def _parse_entity(name: Any, props: Any, entity_names):
    if not isinstance(name, str) or not is_valid_name(name):
        raise ConfigError(f"Invalid entity name {name!r}")
    if name in RESERVED_TYPE_NAMES or name.startswith("__"):
        raise ConfigError(f"Entity name '{name}' is reserved by the schema")
    if name.endswith(INPUT_SUFFIX) and name[:-len(INPUT_SUFFIX)] in entity_names:
        raise ConfigError(
            f"Entity name '{name}' clashes with the input type of entity '{name[:-len(INPUT_SUFFIX)]}'"
        )
    if not isinstance(props, dict) or not props:
        raise ConfigError(f"Entity '{name}' must declare at least one property")

    pairs = []
    for prop_name, prop_type in props.items():
        if not isinstance(prop_name, str) or not is_valid_name(prop_name):
            raise ConfigError(f"Invalid property name {prop_name!r} on entity '{name}'")
        # unquoted `[Tag]` in YAML arrives as a one-element list
        if isinstance(prop_type, list) and len(prop_type) == 1 and isinstance(prop_type[0], str):
            prop_type = f"[{prop_type[0]}]"
        if not isinstance(prop_type, str):
            raise ConfigError(f"Property '{name}.{prop_name}' must have a type name, got {prop_type!r}")
        pairs.append((prop_name, prop_type))

    if [p for p, _ in pairs] == ["id"]:
        raise ConfigError(f"Entity '{name}' must declare at least one property besides id")

    try:
        entity = build_entity_spec(name, pairs)
    except ValueError as e:
        raise ConfigError(f"Entity '{name}': {e}") from e

    # records always carry a generated string id
    id_type = entity.get_property(ID_FIELD).type
    if id_type.kind is not PropertyKind.IDENTIFIER or id_type.is_list:
        raise ConfigError(f"Property '{name}.id' must be of type ID, got '{entity.get_property(ID_FIELD).raw_type}'")
    return entity


def parse_config(data: Dict[str, Any]) -> MockConfig:
    """
    Build a MockConfig from an already-loaded YAML mapping.

    Raises:
        ConfigError: if the mapping is not a valid entity description
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping with 'db' and 'entities' keys")

    raw_entities = data.get("entities")
    if not isinstance(raw_entities, dict) or not raw_entities:
        raise ConfigError("Configuration must declare at least one entity under 'entities'")

    try:
        db = DatabaseConfig.model_validate(data.get("db") or {})
    except ValidationError as e:
        raise ConfigError(f"Invalid 'db' section: {e}") from e

    entity_names = set(raw_entities)
    entities = [_parse_entity(name, props, entity_names) for name, props in raw_entities.items()]
    log.info("Loaded %d entities: %s", len(entities), ", ".join(e.name for e in entities))
    return MockConfig(db=db, entities=entities)


def load_config(text: str) -> MockConfig:
    """Parse YAML text into a MockConfig."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}") from e
    return parse_config(data)


def load_config_file(path) -> MockConfig:
    with open(path, "r", encoding="utf-8") as f:
        return load_config(f.read())
