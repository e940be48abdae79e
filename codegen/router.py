from fastapi import APIRouter
from dishka.integrations.fastapi import inject
from dishka import FromComponent
from typing import Annotated
from codegen.schemas import (
    GenerateEntitiesRequest,
    GenerateHandlersRequest,
    GeneratedFileResponse,
    GeneratedFilesResponse
)
from codegen.usecases import GenerateEntityTypesUseCase, GenerateHandlerTypesUseCase

router = APIRouter(
    prefix="/api/codegen",
    tags=["Codegen"]
)


@router.post("/entities", response_model=GeneratedFileResponse)
@inject
async def generate_entity_types(
    request: GenerateEntitiesRequest,
    use_case: Annotated[
        GenerateEntityTypesUseCase, FromComponent("codegen")
    ]
) -> GeneratedFileResponse:
    """
    Generate entity instance and model types.
    
    Parameters
    ----------
    request : GenerateEntitiesRequest
        Request with the entity schema document
    use_case : GenerateEntityTypesUseCase
        Use case for generating entity types
        
    Returns
    -------
    GeneratedFileResponse
        Generated entities artifact
    """
    return await use_case(schema=request.schema_sdl)


@router.post("/handlers", response_model=GeneratedFilesResponse)
@inject
async def generate_handler_types(
    request: GenerateHandlersRequest,
    use_case: Annotated[
        GenerateHandlerTypesUseCase, FromComponent("codegen")
    ]
) -> GeneratedFilesResponse:
    """
    Generate event and handler types per contract source.
    
    Parameters
    ----------
    request : GenerateHandlersRequest
        Request with contract sources and their ABIs
    use_case : GenerateHandlerTypesUseCase
        Use case for generating handler types
        
    Returns
    -------
    GeneratedFilesResponse
        One handler types artifact per source
    """
    return await use_case(sources=request.sources)
