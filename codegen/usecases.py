from codegen.abi_service import ABIService
from codegen.entity_types import EntityTypeGenerator
from codegen.handler_types import HandlerTypeGenerator
from codegen.schema_service import SchemaService
from codegen.schemas import (
    GeneratedFileResponse,
    GeneratedFilesResponse,
    HandlerSourceRequest,
    ImportResponse,
)
from codegen.services import CodegenService
from codegen.subgraph_import import SubgraphImportService


class GenerateEntityTypesUseCase:
    """
    Use case for generating entity types from a schema document.
    
    Parameters
    ----------
    schema_service : SchemaService
        Entity schema parser
    generator : EntityTypeGenerator
        Entity type generator
    """
    
    def __init__(self, schema_service: SchemaService, generator: EntityTypeGenerator):
        self.schema_service = schema_service
        self.generator = generator
    
    async def __call__(self, schema: str) -> GeneratedFileResponse:
        """
        Execute use case.
        
        Parameters
        ----------
        schema : str
            Entity schema document (GraphQL SDL)
            
        Returns
        -------
        GeneratedFileResponse
            Generated entities artifact
        """
        entity_schema = self.schema_service.parse(schema)
        generated = self.generator.generate(entity_schema)
        return GeneratedFileResponse(filename=generated.filename, content=generated.content)


class GenerateHandlerTypesUseCase:
    """
    Use case for generating handler types from inline ABIs.
    
    Parameters
    ----------
    abi_service : ABIService
        ABI parser
    generator : HandlerTypeGenerator
        Handler type generator
    """
    
    def __init__(self, abi_service: ABIService, generator: HandlerTypeGenerator):
        self.abi_service = abi_service
        self.generator = generator
    
    async def __call__(self, sources: list[HandlerSourceRequest]) -> GeneratedFilesResponse:
        """
        Execute use case.
        
        Parameters
        ----------
        sources : list[HandlerSourceRequest]
            Sources with their ABI documents
            
        Returns
        -------
        GeneratedFilesResponse
            One handler types artifact per source
        """
        files = []
        for source in sources:
            events = self.abi_service.parse_events(source.abi, origin=source.name)
            generated = self.generator.generate_source(source.name, events)
            files.append(GeneratedFileResponse(filename=generated.filename, content=generated.content))
        
        return GeneratedFilesResponse(files=files, total_files=len(files))


class RunCodegenUseCase:
    """
    Use case for generating every artifact of a project directory.
    
    Parameters
    ----------
    codegen_service : CodegenService
        Project file service
    schema_service : SchemaService
        Entity schema parser
    entity_generator : EntityTypeGenerator
        Entity type generator
    handler_generator : HandlerTypeGenerator
        Handler type generator
    """
    
    def __init__(
        self,
        codegen_service: CodegenService,
        schema_service: SchemaService,
        entity_generator: EntityTypeGenerator,
        handler_generator: HandlerTypeGenerator
    ):
        self.codegen_service = codegen_service
        self.schema_service = schema_service
        self.entity_generator = entity_generator
        self.handler_generator = handler_generator
    
    async def __call__(self, root_dir: str) -> list[str]:
        """
        Execute use case.
        
        All artifacts are rendered before any is written.
        
        Parameters
        ----------
        root_dir : str
            Project directory
            
        Returns
        -------
        list[str]
            Written paths
        """
        config = self.codegen_service.load_project_config(root_dir)
        entity_schema = self.schema_service.read(self.codegen_service.get_schema_path(root_dir))
        
        files = [self.entity_generator.generate(entity_schema)]
        files.extend(await self.handler_generator.generate(list(config.sources), root_dir))
        files.append(self.handler_generator.generate_context())
        
        return self.codegen_service.write_generated(root_dir, files)


class ImportSubgraphUseCase:
    """
    Use case for importing a subgraph project.
    
    Parameters
    ----------
    import_service : SubgraphImportService
        Subgraph import service
    """
    
    def __init__(self, import_service: SubgraphImportService):
        self.import_service = import_service
    
    async def __call__(self, subgraph_dir: str, root_dir: str) -> ImportResponse:
        """
        Execute use case.
        
        Parameters
        ----------
        subgraph_dir : str
            Subgraph project directory
        root_dir : str
            Target project directory
            
        Returns
        -------
        ImportResponse
            Imported networks and sources
        """
        result = self.import_service.run(subgraph_dir, root_dir)
        return ImportResponse(
            networks=[network.name for network in result.networks],
            sources=[source.name for source in result.sources],
            handler_files=[f.filename for f in result.handler_files],
            schema_path=result.schema_path
        )
