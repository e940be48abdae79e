import re
from typing import Annotated, Any, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from web3 import Web3


ARRAY_SUFFIX_PATTERN = re.compile(r"((\[[0-9]*\])*)$")


# Entity schema

class IdField(BaseModel):
    """
    Entity key field. Always required.

    Attributes
    ----------
    name : str
        Field name
    """
    kind: Literal["ID"] = "ID"
    name: str
    not_null: bool = True

    model_config = ConfigDict(frozen=True, from_attributes=True)


class ScalarField(BaseModel):
    """
    Field holding a single scalar value.

    Attributes
    ----------
    name : str
        Field name
    not_null : bool
        Whether the field is marked non-null
    scalar : str
        Scalar type name (String, Int, BigInt, ...)
    """
    kind: Literal["SCALAR"] = "SCALAR"
    name: str
    not_null: bool = False
    scalar: str

    model_config = ConfigDict(frozen=True, from_attributes=True)


class EnumField(BaseModel):
    """
    Field holding one of a closed set of string values.

    Attributes
    ----------
    name : str
        Field name
    not_null : bool
        Whether the field is marked non-null
    enum_name : str | None
        Name of the enum type, if any
    enum_values : tuple[str, ...]
        Allowed values in declaration order
    """
    kind: Literal["ENUM"] = "ENUM"
    name: str
    not_null: bool = False
    enum_name: str | None = None
    enum_values: tuple[str, ...]

    model_config = ConfigDict(frozen=True, from_attributes=True)


class ListElement(BaseModel):
    """
    Element type of a list field.

    Attributes
    ----------
    name : str
        Element type name
    enum_values : tuple[str, ...] | None
        Allowed values when the element type is an enum
    """
    name: str
    enum_values: tuple[str, ...] | None = None

    model_config = ConfigDict(frozen=True, from_attributes=True)


class ListField(BaseModel):
    """
    Field holding a list of scalars or enum values.

    Attributes
    ----------
    name : str
        Field name
    not_null : bool
        Whether the field is marked non-null
    element : ListElement
        Element type descriptor
    dimensions : int
        List nesting depth, 2 for ``[[Int]]``
    """
    kind: Literal["LIST"] = "LIST"
    name: str
    not_null: bool = False
    element: ListElement
    dimensions: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True, from_attributes=True)


class RelationshipField(BaseModel):
    """
    Field referencing another entity by its id. Always required.

    Attributes
    ----------
    name : str
        Field name
    entity : str
        Name of the referenced entity
    """
    kind: Literal["RELATIONSHIP"] = "RELATIONSHIP"
    name: str
    not_null: bool = True
    entity: str

    model_config = ConfigDict(frozen=True, from_attributes=True)


EntityField = Annotated[
    Union[IdField, ScalarField, EnumField, ListField, RelationshipField],
    Field(discriminator="kind")
]


class Entity(BaseModel):
    """
    Entity of the application data model.

    Attributes
    ----------
    name : str
        Entity name, used as type identifier
    fields : tuple[EntityField, ...]
        Fields in declaration order
    """
    name: str
    fields: tuple[EntityField, ...]

    model_config = ConfigDict(frozen=True, from_attributes=True)


class EntitySchema(BaseModel):
    """Ordered set of entities."""
    entities: tuple[Entity, ...] = ()

    model_config = ConfigDict(frozen=True, from_attributes=True)


# ABI

class AbiParameter(BaseModel):
    """
    Event parameter. Tuple parameters carry their child parameters.

    Attributes
    ----------
    name : str
        Parameter name (may be empty in the ABI)
    type : str
        Full ABI type, e.g. uint256, tuple, address[]
    components : tuple[AbiParameter, ...] | None
        Child parameters of a tuple
    indexed : bool
        Whether the parameter is an indexed topic
    """
    name: str = ""
    type: str
    components: tuple["AbiParameter", ...] | None = None
    indexed: bool = False

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def array_suffix(self) -> str:
        return ARRAY_SUFFIX_PATTERN.search(self.type).group(1)

    @property
    def base_type(self) -> str:
        """ABI type with array dimensions removed."""
        suffix = self.array_suffix
        return self.type[:len(self.type) - len(suffix)] if suffix else self.type

    @property
    def is_tuple(self) -> bool:
        return self.base_type == "tuple"

    @property
    def canonical_type(self) -> str:
        """Type as written in a canonical event signature."""
        if self.is_tuple:
            inner = ",".join(child.canonical_type for child in self.components or ())
            return f"({inner}){self.array_suffix}"
        return self.type


class AbiEvent(BaseModel):
    """
    Event declared in a contract ABI.

    Attributes
    ----------
    name : str
        Event name
    inputs : tuple[AbiParameter, ...]
        Event parameters in declaration order
    anonymous : bool
        Whether the event is anonymous
    """
    name: str
    inputs: tuple[AbiParameter, ...] = ()
    anonymous: bool = False

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def signature(self) -> str:
        types = ",".join(param.canonical_type for param in self.inputs)
        return f"{self.name}({types})"

    @property
    def base_name(self) -> str:
        return get_event_base_name(self.signature)

    @property
    def topic(self) -> str:
        """Keccak hash of the event signature (topic0)."""
        return Web3.to_hex(Web3.keccak(text=self.signature))


def get_event_base_name(signature: str) -> str:
    """Return the event name of a signature such as Transfer(address,uint256)."""
    return signature.split("(", 1)[0].strip()


# Project configuration

class Network(BaseModel):
    """
    Network descriptor.

    Attributes
    ----------
    name : str
        Network name
    chain_id : int
        Chain id
    rpc_url : str
        RPC URL placeholder referencing an environment variable
    """
    kind: Literal["evm"] = "evm"
    name: str
    chain_id: int = Field(..., gt=0, alias="chainId")
    rpc_url: str = Field(..., alias="rpcUrl")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ContractSource(BaseModel):
    """
    Contract source descriptor.

    Attributes
    ----------
    name : str
        Source name, used as type and module identifier
    network : str
        Network name
    address : str
        Contract address
    abi_path : str
        ABI document path, relative to the project root
    start_block : int | None
        First block to index
    """
    kind: Literal["evm"] = "evm"
    name: str
    network: str
    address: str
    abi_path: str = Field(..., alias="abi")
    start_block: int | None = Field(default=None, ge=0, alias="startBlock")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ProjectConfig(BaseModel):
    """Networks and sources of a project."""
    networks: tuple[Network, ...] = ()
    sources: tuple[ContractSource, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class GeneratedFile(BaseModel):
    """
    Generated artifact.

    Attributes
    ----------
    filename : str
        File name, relative to its output directory
    content : str
        File contents
    """
    filename: str
    content: str

    model_config = ConfigDict(frozen=True)


class ImportResult(BaseModel):
    """
    Outcome of a subgraph import.

    Attributes
    ----------
    networks : tuple[Network, ...]
        Deduplicated network descriptors
    sources : tuple[ContractSource, ...]
        Source descriptors in manifest order
    handler_files : tuple[GeneratedFile, ...]
        Handler stub modules followed by the handler index module
    schema_path : str
        Path of the copied entity schema file
    """
    networks: tuple[Network, ...]
    sources: tuple[ContractSource, ...]
    handler_files: tuple[GeneratedFile, ...]
    schema_path: str

    model_config = ConfigDict(frozen=True)


# Subgraph manifest

class GraphEventHandler(BaseModel):
    event: str
    handler: str | None = None


class GraphAbi(BaseModel):
    name: str
    file: str


class GraphMapping(BaseModel):
    abis: list[GraphAbi]
    event_handlers: list[GraphEventHandler] = Field(default_factory=list, alias="eventHandlers")

    model_config = ConfigDict(populate_by_name=True)


class GraphSource(BaseModel):
    address: str
    abi: str | None = None
    start_block: int | None = Field(default=None, ge=0, alias="startBlock")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('address')
    @classmethod
    def validate_address(cls, v: str) -> str:
        if not Web3.is_address(v):
            raise ValueError('Invalid contract address format')
        return v


class GraphDataSource(BaseModel):
    """
    Data source block of a subgraph manifest.

    Attributes
    ----------
    name : str
        Data source name
    network : str | None
        Network name, default network when omitted
    source : GraphSource
        Address, ABI name and start block
    mapping : GraphMapping
        ABI files and event handlers
    """
    name: str
    network: str | None = None
    source: GraphSource
    mapping: GraphMapping

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError('Source name must be a valid identifier')
        return v

    @property
    def abi_name(self) -> str:
        return self.source.abi or self.name


class GraphSchemaFile(BaseModel):
    file: str = Field(..., min_length=1)


class GraphManifest(BaseModel):
    """
    Top level of a subgraph manifest.

    Data sources are kept raw and validated one by one, so an error
    can name the offending source.

    Attributes
    ----------
    schema_file : GraphSchemaFile
        Entity schema file reference
    data_sources : list[Any]
        Raw data source blocks in manifest order
    """
    schema_file: GraphSchemaFile = Field(..., alias="schema")
    data_sources: list[Any] = Field(..., alias="dataSources")

    model_config = ConfigDict(populate_by_name=True)
