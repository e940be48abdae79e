from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerateEntitiesRequest(BaseModel):
    """
    Request schema for generating entity types.
    
    Attributes
    ----------
    schema : str
        Entity schema document (GraphQL SDL)
    """
    schema_sdl: str = Field(..., alias="schema", min_length=1, description="Entity schema document (GraphQL SDL)")

    model_config = ConfigDict(populate_by_name=True)


class HandlerSourceRequest(BaseModel):
    """
    Contract source with an inline ABI.
    
    Attributes
    ----------
    name : str
        Source name, used as type identifier
    abi : list[dict[str, Any]]
        Contract ABI
    """
    name: str = Field(..., description="Source name")
    abi: list[dict[str, Any]] = Field(..., description="Contract ABI")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError('Source name must be a valid identifier')
        return v


class GenerateHandlersRequest(BaseModel):
    """
    Request schema for generating handler types.
    
    Attributes
    ----------
    sources : list[HandlerSourceRequest]
        Contract sources
    """
    sources: list[HandlerSourceRequest] = Field(..., min_length=1)

    @field_validator('sources')
    @classmethod
    def validate_unique_names(cls, v: list[HandlerSourceRequest]) -> list[HandlerSourceRequest]:
        names = [source.name for source in v]
        if len(names) != len(set(names)):
            raise ValueError('Source names must be unique')
        return v


class GeneratedFileResponse(BaseModel):
    """
    Response schema for a generated file.
    
    Attributes
    ----------
    filename : str
        File name
    content : str
        File contents
    """
    filename: str
    content: str

    model_config = ConfigDict(from_attributes=True)


class GeneratedFilesResponse(BaseModel):
    """
    Response schema for several generated files.
    
    Attributes
    ----------
    files : list[GeneratedFileResponse]
        Generated files
    total_files : int
        Number of files
    """
    files: list[GeneratedFileResponse]
    total_files: int

    model_config = ConfigDict(from_attributes=True)


class ImportResponse(BaseModel):
    """
    Summary of a subgraph import.
    
    Attributes
    ----------
    networks : list[str]
        Imported network names
    sources : list[str]
        Imported source names
    handler_files : list[str]
        Written handler module names
    schema_path : str
        Copied schema path
    """
    networks: list[str]
    sources: list[str]
    handler_files: list[str]
    schema_path: str
