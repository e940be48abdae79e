from dishka import Provider, Scope, provide, FromComponent
from typing import Annotated
import logging

from codegen.abi_service import ABIService
from codegen.entity_types import EntityTypeGenerator
from codegen.handler_types import HandlerTypeGenerator
from codegen.schema_service import SchemaService
from codegen.services import CodegenService
from codegen.subgraph_import import SubgraphImportService
from codegen.usecases import (
    GenerateEntityTypesUseCase,
    GenerateHandlerTypesUseCase,
    ImportSubgraphUseCase,
    RunCodegenUseCase,
)
from core.environment.config import Settings


class CodegenProvider(Provider):
    """
    Provider for code generation dependencies.
    """
    
    component = "codegen"
    
    @provide(scope=Scope.APP)
    def get_abi_service(
        self,
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ABIService:
        """
        Provide ABI service.
        
        Parameters
        ----------
        logger : logging.Logger
            Logger instance
            
        Returns
        -------
        ABIService
            ABI service instance
        """
        return ABIService(logger=logger)
    
    @provide(scope=Scope.APP)
    def get_schema_service(
        self,
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> SchemaService:
        """
        Provide entity schema service.
        
        Parameters
        ----------
        logger : logging.Logger
            Logger instance
            
        Returns
        -------
        SchemaService
            Entity schema service instance
        """
        return SchemaService(logger=logger)
    
    @provide(scope=Scope.APP)
    def get_entity_type_generator(
        self,
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> EntityTypeGenerator:
        """
        Provide entity type generator.
        
        Parameters
        ----------
        logger : logging.Logger
            Logger instance
            
        Returns
        -------
        EntityTypeGenerator
            Entity type generator instance
        """
        return EntityTypeGenerator(logger=logger)
    
    @provide(scope=Scope.APP)
    def get_handler_type_generator(
        self,
        abi_service: Annotated[ABIService, FromComponent("codegen")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> HandlerTypeGenerator:
        """
        Provide handler type generator.
        
        Parameters
        ----------
        abi_service : ABIService
            ABI service instance
        logger : logging.Logger
            Logger instance
            
        Returns
        -------
        HandlerTypeGenerator
            Handler type generator instance
        """
        return HandlerTypeGenerator(abi_service=abi_service, logger=logger)
    
    @provide(scope=Scope.APP)
    def get_codegen_service(
        self,
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> CodegenService:
        """
        Provide codegen project file service.
        
        Parameters
        ----------
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance
            
        Returns
        -------
        CodegenService
            Codegen service instance
        """
        return CodegenService(settings=settings, logger=logger)
    
    @provide(scope=Scope.APP)
    def get_subgraph_import_service(
        self,
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> SubgraphImportService:
        """
        Provide subgraph import service.
        
        Parameters
        ----------
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance
            
        Returns
        -------
        SubgraphImportService
            Subgraph import service instance
        """
        return SubgraphImportService(settings=settings, logger=logger)
    
    @provide(scope=Scope.REQUEST)
    def get_entity_types_use_case(
        self,
        schema_service: Annotated[SchemaService, FromComponent("codegen")],
        generator: Annotated[EntityTypeGenerator, FromComponent("codegen")]
    ) -> GenerateEntityTypesUseCase:
        """
        Provide entity types use case.
        
        Parameters
        ----------
        schema_service : SchemaService
            Entity schema parser
        generator : EntityTypeGenerator
            Entity type generator
            
        Returns
        -------
        GenerateEntityTypesUseCase
            Entity types use case
        """
        return GenerateEntityTypesUseCase(schema_service=schema_service, generator=generator)
    
    @provide(scope=Scope.REQUEST)
    def get_handler_types_use_case(
        self,
        abi_service: Annotated[ABIService, FromComponent("codegen")],
        generator: Annotated[HandlerTypeGenerator, FromComponent("codegen")]
    ) -> GenerateHandlerTypesUseCase:
        """
        Provide handler types use case.
        
        Parameters
        ----------
        abi_service : ABIService
            ABI service instance
        generator : HandlerTypeGenerator
            Handler type generator
            
        Returns
        -------
        GenerateHandlerTypesUseCase
            Handler types use case
        """
        return GenerateHandlerTypesUseCase(abi_service=abi_service, generator=generator)
    
    @provide(scope=Scope.REQUEST)
    def get_run_codegen_use_case(
        self,
        codegen_service: Annotated[CodegenService, FromComponent("codegen")],
        schema_service: Annotated[SchemaService, FromComponent("codegen")],
        entity_generator: Annotated[EntityTypeGenerator, FromComponent("codegen")],
        handler_generator: Annotated[HandlerTypeGenerator, FromComponent("codegen")]
    ) -> RunCodegenUseCase:
        """
        Provide run codegen use case.
        
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
            
        Returns
        -------
        RunCodegenUseCase
            Run codegen use case
        """
        return RunCodegenUseCase(
            codegen_service=codegen_service,
            schema_service=schema_service,
            entity_generator=entity_generator,
            handler_generator=handler_generator
        )
    
    @provide(scope=Scope.REQUEST)
    def get_import_subgraph_use_case(
        self,
        import_service: Annotated[SubgraphImportService, FromComponent("codegen")]
    ) -> ImportSubgraphUseCase:
        """
        Provide import subgraph use case.
        
        Parameters
        ----------
        import_service : SubgraphImportService
            Subgraph import service
            
        Returns
        -------
        ImportSubgraphUseCase
            Import subgraph use case
        """
        return ImportSubgraphUseCase(import_service=import_service)
