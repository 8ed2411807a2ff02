"""Executable schema built from the generated mock API."""
from typing import List
from ariadne import ObjectType, make_executable_schema
from graphql import GraphQLSchema
from grockery.generators.compose import MockApi


def build_schema(api: MockApi) -> GraphQLSchema:
    """Bind the generated resolvers to the generated schema text."""
    bindables: List[ObjectType] = []
    for type_name in ("Query", "Mutation"):
        object_type = ObjectType(type_name)
        for field_name, resolver in api.resolvers.get(type_name, {}).items():
            object_type.set_field(field_name, resolver)
        bindables.append(object_type)
    return make_executable_schema(api.type_defs, *bindables)
