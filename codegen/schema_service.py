import logging
from graphql import (
    GraphQLEnumType,
    GraphQLError,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    build_schema,
)

from codegen.entities import (
    Entity,
    EntityField,
    EntitySchema,
    EnumField,
    IdField,
    ListElement,
    ListField,
    RelationshipField,
    ScalarField,
)
from core.exceptions import InvalidSchemaException, MissingReferenceException


# Declarations every entity schema may use without defining them
BASE_SCHEMA = """
scalar BigInt
scalar BigDecimal
scalar Bytes

directive @entity(immutable: Boolean) on OBJECT
directive @derivedFrom(field: String!) on FIELD_DEFINITION
"""


class SchemaService:
    """
    Service turning an entity schema document (GraphQL SDL) into an
    ``EntitySchema``.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def parse(self, source: str) -> EntitySchema:
        """
        Parse an entity schema document.

        Parameters
        ----------
        source : str
            GraphQL SDL with ``@entity`` object types

        Returns
        -------
        EntitySchema
            Entities in declaration order

        Raises
        ------
        InvalidSchemaException
            If the document is not valid SDL or a field references an
            object type that is not an entity
        """
        try:
            schema = build_schema(BASE_SCHEMA + source)
        except (GraphQLError, TypeError) as e:
            raise InvalidSchemaException(f"Invalid entity schema: {e}") from e

        entity_types = [
            gql_type for gql_type in schema.type_map.values()
            if isinstance(gql_type, GraphQLObjectType) and self._is_entity(gql_type)
        ]
        entity_names = {gql_type.name for gql_type in entity_types}

        entities = tuple(
            Entity(
                name=gql_type.name,
                fields=tuple(
                    self._build_field(gql_type.name, field_name, field.type, entity_names)
                    for field_name, field in gql_type.fields.items()
                )
            )
            for gql_type in entity_types
        )
        self.logger.debug(f"Parsed entity schema: {[e.name for e in entities]}")
        return EntitySchema(entities=entities)

    def read(self, path: str) -> EntitySchema:
        """
        Read and parse an entity schema file.

        Parameters
        ----------
        path : str
            Schema file path

        Returns
        -------
        EntitySchema
            Parsed schema
        """
        try:
            with open(path, encoding="utf-8") as f:
                source = f.read()
        except FileNotFoundError as e:
            raise MissingReferenceException(f"Schema file not found: {path}") from e
        except UnicodeDecodeError as e:
            raise InvalidSchemaException(f"Schema file is not valid UTF-8: {path}") from e
        return self.parse(source)

    @staticmethod
    def _is_entity(gql_type: GraphQLObjectType) -> bool:
        if gql_type.ast_node is None:
            return False
        return any(d.name.value == "entity" for d in gql_type.ast_node.directives or ())

    def _build_field(
        self,
        entity_name: str,
        field_name: str,
        field_type,
        entity_names: set[str]
    ) -> EntityField:
        not_null = isinstance(field_type, GraphQLNonNull)
        inner_type = field_type.of_type if not_null else field_type

        if isinstance(inner_type, GraphQLList):
            dimensions = 0
            element_type = inner_type
            while isinstance(element_type, (GraphQLList, GraphQLNonNull)):
                if isinstance(element_type, GraphQLList):
                    dimensions += 1
                element_type = element_type.of_type
            enum_values = None
            if isinstance(element_type, GraphQLEnumType):
                enum_values = tuple(element_type.values)
            return ListField(
                name=field_name,
                not_null=not_null,
                element=ListElement(name=element_type.name, enum_values=enum_values),
                dimensions=dimensions
            )

        if isinstance(inner_type, GraphQLScalarType):
            if inner_type.name == "ID":
                return IdField(name=field_name)
            return ScalarField(name=field_name, not_null=not_null, scalar=inner_type.name)

        if isinstance(inner_type, GraphQLEnumType):
            return EnumField(
                name=field_name,
                not_null=not_null,
                enum_name=inner_type.name,
                enum_values=tuple(inner_type.values)
            )

        if isinstance(inner_type, GraphQLObjectType) and inner_type.name in entity_names:
            return RelationshipField(name=field_name, entity=inner_type.name)

        raise InvalidSchemaException(
            f"Field {entity_name}.{field_name} has unsupported type: {inner_type}"
        )
