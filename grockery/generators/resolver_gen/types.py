"""Dataclasses for resolver generation."""
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict

Resolver = Callable[..., Awaitable[Any]]


@dataclass
class EntityResolvers:
    """Query and mutation resolvers generated for one entity."""
    entity_name: str
    queries: Dict[str, Resolver] = field(default_factory=dict)
    mutations: Dict[str, Resolver] = field(default_factory=dict)
