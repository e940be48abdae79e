import logging

from codegen.entities import (
    Entity,
    EntityField,
    EntitySchema,
    EnumField,
    GeneratedFile,
    IdField,
    ListField,
    RelationshipField,
    ScalarField,
)
from codegen.type_maps import SCALAR_TS_TYPES
from core.exceptions import UnmappableTypeException


HEADER = "/* Autogenerated file. Do not edit manually. */\n"

ENTITIES_FILENAME = "entities.ts"


def get_scalar_ts_type(scalar: str) -> str:
    """
    Map an entity schema scalar to its TypeScript type.

    Raises
    ------
    UnmappableTypeException
        If the scalar has no mapping
    """
    ts_type = SCALAR_TS_TYPES.get(scalar)
    if ts_type is None:
        raise UnmappableTypeException(f"TypeScript type not found for scalar: {scalar}")
    return ts_type


def render_enum_union(values: tuple[str, ...]) -> str:
    return " | ".join(f'"{value}"' for value in values)


def render_field(field: EntityField) -> str:
    """
    Render one entity field as a TypeScript property.

    Parameters
    ----------
    field : EntityField
        Field of any kind

    Returns
    -------
    str
        Property declaration, e.g. ``owner?: string;``
    """
    optional = "" if field.not_null else "?"

    if isinstance(field, IdField):
        return f"{field.name}: string;"

    if isinstance(field, RelationshipField):
        return f"{field.name}: string;"

    if isinstance(field, ScalarField):
        return f"{field.name}{optional}: {get_scalar_ts_type(field.scalar)};"

    if isinstance(field, EnumField):
        return f"{field.name}{optional}: {render_enum_union(field.enum_values)};"

    if isinstance(field, ListField):
        element = field.element
        if element.name in SCALAR_TS_TYPES:
            element_type = get_scalar_ts_type(element.name)
        elif element.enum_values is not None:
            element_type = f"({render_enum_union(element.enum_values)})"
        else:
            raise UnmappableTypeException(f"Unable to generate type for field: {field.name}")
        return f"{field.name}{optional}: {element_type}{'[]' * field.dimensions};"

    raise UnmappableTypeException(f"Unable to generate type for field: {field.name}")


def render_entity(entity: Entity) -> str:
    name = entity.name
    fields = "\n".join(f"  {render_field(field)}" for field in entity.fields)
    return (
        f"export type {name}Instance = {{\n"
        f"{fields}\n"
        f"}};\n"
        f"\n"
        f"export type {name}Model = {{\n"
        f"  get: (id: string) => Promise<{name}Instance | null>;\n"
        f"  insert: (obj: {name}Instance) => Promise<{name}Instance>;\n"
        f"  update: (\n"
        f"    obj: {{ id: string }} & Partial<{name}Instance>\n"
        f"  ) => Promise<{name}Instance>;\n"
        f"  delete: (id: string) => Promise<void>;\n"
        f"}};\n"
    )


class EntityTypeGenerator:
    """
    Generates entity instance and model types from an entity schema.

    The whole file is rendered before anything is returned, so an
    unmappable field aborts generation without partial output.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def generate(self, schema: EntitySchema) -> GeneratedFile:
        """
        Render the entities artifact.

        Parameters
        ----------
        schema : EntitySchema
            Entity schema

        Returns
        -------
        GeneratedFile
            ``entities.ts`` with one instance type and one model type
            per entity plus the ``entities`` map

        Raises
        ------
        UnmappableTypeException
            If any field has no TypeScript mapping
        """
        entity_types = "\n".join(render_entity(entity) for entity in schema.entities)
        entity_map = "".join(
            f"  {entity.name}: {entity.name}Model;\n" for entity in schema.entities
        )

        content = (
            f"{HEADER}\n"
            f"{entity_types}\n"
            f"export type entities = {{\n"
            f"{entity_map}"
            f"}};\n"
        )

        self.logger.debug(f"Generated {ENTITIES_FILENAME} for {len(schema.entities)} entities")
        return GeneratedFile(filename=ENTITIES_FILENAME, content=content)
