import json
import logging
import os
import shutil

import yaml
from pydantic import BaseModel, Field, ValidationError

from codegen.entities import (
    ContractSource,
    GeneratedFile,
    GraphDataSource,
    GraphManifest,
    ImportResult,
    Network,
    ProjectConfig,
    get_event_base_name,
)
from codegen.type_maps import get_chain_id
from core.environment.config import Settings
from core.exceptions import (
    InvalidManifestException,
    ManifestNotFoundException,
    MissingReferenceException,
    UnknownNetworkException,
)


class ImportPlan(BaseModel):
    """Everything an import writes, resolved before the first write."""
    schema_src: str
    networks: list[Network] = Field(default_factory=list)
    sources: list[ContractSource] = Field(default_factory=list)
    abi_copies: list[tuple[str, str]] = Field(default_factory=list)
    handler_files: list[GeneratedFile] = Field(default_factory=list)


def render_handler_stub(source_name: str, event_names: list[str], generated_dir: str = "generated") -> str:
    """
    Render the handler stub module of one source.

    Parameters
    ----------
    source_name : str
        Source name
    event_names : list[str]
        Event base names, without duplicates
    generated_dir : str
        Generated types directory, relative to the project root

    Returns
    -------
    str
        Module with one no-op handler per event and the source export
    """
    handler_types = ", ".join(f"{name}Handler" for name in event_names)
    imports = f'import type {{ {handler_types} }} from "../{generated_dir}/{source_name}";\n\n' if event_names else ""
    handlers = "".join(
        f"const handle{name}: {name}Handler = async (event, context) => {{\n"
        f"  return;\n"
        f"}};\n\n"
        for name in event_names
    )
    exports = "".join(f"  {name}: handle{name},\n" for name in event_names)
    return (
        f"{imports}"
        f"{handlers}"
        f"export const {source_name} = {{\n"
        f"{exports}"
        f"}};\n"
    )


def render_handler_index(source_names: list[str]) -> str:
    """Render the handlers index module exporting every source's handlers."""
    imports = "".join(f'import {{ {name} }} from "./{name}";\n' for name in source_names)
    exports = "".join(f"  {name}: {name},\n" for name in source_names)
    return (
        f"{imports}\n"
        f"export default {{\n"
        f"{exports}"
        f"}};\n"
    )


class SubgraphImportService:
    """
    Imports a subgraph project: copies its schema and ABIs, resolves
    networks and sources, and writes handler stubs plus the project config.

    Every input is validated and resolved before the first file is
    written, so a failing import leaves the target untouched.

    Parameters
    ----------
    settings : Settings
        Application settings
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, settings: Settings, logger: logging.Logger):
        self.settings = settings
        self.logger = logger

    def run(self, subgraph_dir: str, root_dir: str) -> ImportResult:
        """
        Import a subgraph project into a project directory.

        Parameters
        ----------
        subgraph_dir : str
            Subgraph project directory holding the manifest
        root_dir : str
            Target project directory

        Returns
        -------
        ImportResult
            Resolved networks, sources and generated handler modules
        """
        plan = self.plan(subgraph_dir)
        return self.apply(plan, root_dir)

    def find_manifest(self, subgraph_dir: str) -> str:
        """
        Locate the manifest under the configured filename candidates.

        Raises
        ------
        ManifestNotFoundException
            If none of the candidates exists
        """
        for filename in self.settings.manifest_filenames:
            path = os.path.join(subgraph_dir, filename)
            if os.path.isfile(path):
                return path
        raise ManifestNotFoundException(
            f"Subgraph manifest ({', '.join(self.settings.manifest_filenames)}) "
            f"not found in {subgraph_dir}"
        )

    def plan(self, subgraph_dir: str) -> ImportPlan:
        """
        Read the manifest and resolve everything the import writes.

        Parameters
        ----------
        subgraph_dir : str
            Subgraph project directory

        Returns
        -------
        ImportPlan
            Files to copy and write, networks and sources
        """
        manifest_path = self.find_manifest(subgraph_dir)
        manifest = self._load_manifest(manifest_path)

        schema_src = os.path.join(subgraph_dir, manifest.schema_file.file)
        if not os.path.isfile(schema_src):
            raise MissingReferenceException(f"Schema file not found: {schema_src}")

        plan = ImportPlan(schema_src=schema_src)
        for index, raw_source in enumerate(manifest.data_sources):
            data_source = self._validate_source(index, raw_source)
            self._plan_source(plan, subgraph_dir, data_source)

        plan.handler_files.append(GeneratedFile(
            filename="index.ts",
            content=render_handler_index([source.name for source in plan.sources])
        ))
        return plan

    def apply(self, plan: ImportPlan, root_dir: str) -> ImportResult:
        """
        Write a resolved import plan into a project directory.

        Parameters
        ----------
        plan : ImportPlan
            Resolved plan
        root_dir : str
            Target project directory

        Returns
        -------
        ImportResult
            Written networks, sources and handler modules
        """
        abi_dir = os.path.join(root_dir, self.settings.abi_dir)
        handlers_dir = os.path.join(root_dir, self.settings.handlers_dir)
        os.makedirs(abi_dir, exist_ok=True)
        os.makedirs(handlers_dir, exist_ok=True)

        schema_path = os.path.join(root_dir, self.settings.schema_filename)
        shutil.copyfile(plan.schema_src, schema_path)

        for src, filename in plan.abi_copies:
            shutil.copyfile(src, os.path.join(abi_dir, filename))

        for handler_file in plan.handler_files:
            with open(os.path.join(handlers_dir, handler_file.filename), "w", encoding="utf-8") as f:
                f.write(handler_file.content)

        config = ProjectConfig(networks=tuple(plan.networks), sources=tuple(plan.sources))
        with open(os.path.join(root_dir, self.settings.config_filename), "w", encoding="utf-8") as f:
            f.write(render_project_config(config))

        with open(os.path.join(root_dir, ".env.local"), "w", encoding="utf-8") as f:
            f.write(self._render_env(plan.networks))

        self.logger.info(
            f"Imported {len(plan.sources)} sources on {len(plan.networks)} networks into {root_dir}"
        )
        return ImportResult(
            networks=tuple(plan.networks),
            sources=tuple(plan.sources),
            handler_files=tuple(plan.handler_files),
            schema_path=schema_path
        )

    def _load_manifest(self, manifest_path: str) -> GraphManifest:
        try:
            with open(manifest_path, encoding="utf-8") as f:
                raw_manifest = yaml.safe_load(f)
        except UnicodeDecodeError as e:
            raise InvalidManifestException(f"Manifest is not valid UTF-8: {manifest_path}") from e
        except yaml.YAMLError as e:
            raise InvalidManifestException(f"Manifest is not valid YAML: {manifest_path}") from e

        try:
            return GraphManifest.model_validate(raw_manifest)
        except ValidationError as e:
            error = e.errors()[0]
            location = ".".join(str(x) for x in error["loc"]) or "manifest"
            raise InvalidManifestException(
                f"Invalid manifest {manifest_path}: {location}: {error['msg']}"
            ) from e

    def _validate_source(self, index: int, raw_source) -> GraphDataSource:
        try:
            return GraphDataSource.model_validate(raw_source)
        except ValidationError as e:
            name = raw_source.get("name", f"#{index}") if isinstance(raw_source, dict) else f"#{index}"
            error = e.errors()[0]
            location = ".".join(str(x) for x in error["loc"])
            raise InvalidManifestException(
                f"Invalid data source {name}: {location}: {error['msg']}"
            ) from e

    def _plan_source(self, plan: ImportPlan, subgraph_dir: str, data_source: GraphDataSource) -> None:
        abi_file = next(
            (abi.file for abi in data_source.mapping.abis if abi.name == data_source.abi_name),
            None
        )
        if not abi_file:
            raise MissingReferenceException(f"ABI path not found for source: {data_source.name}")

        network = data_source.network or self.settings.default_network
        chain_id = get_chain_id(network)
        if chain_id is None:
            raise UnknownNetworkException(f"Unhandled network name: {network}")

        if network not in [n.name for n in plan.networks]:
            plan.networks.append(Network(
                name=network,
                chain_id=chain_id,
                rpc_url=self.settings.get_rpc_url_placeholder(chain_id)
            ))

        abi_src = os.path.join(subgraph_dir, abi_file)
        if not os.path.isfile(abi_src):
            raise MissingReferenceException(f"ABI file not found for source {data_source.name}: {abi_src}")
        abi_filename = os.path.basename(abi_file)
        plan.abi_copies.append((abi_src, abi_filename))

        event_names = []
        for handler in data_source.mapping.event_handlers:
            name = get_event_base_name(handler.event)
            if name not in event_names:
                event_names.append(name)
        plan.handler_files.append(GeneratedFile(
            filename=f"{data_source.name}.ts",
            content=render_handler_stub(data_source.name, event_names, self.settings.generated_dir)
        ))

        plan.sources.append(ContractSource(
            name=data_source.name,
            network=network,
            address=data_source.source.address,
            abi_path=f"./{self.settings.abi_dir}/{abi_filename}",
            start_block=data_source.source.start_block
        ))
        self.logger.info(f"Planned source {data_source.name} on {network} ({len(event_names)} handlers)")

    def _render_env(self, networks: list[Network]) -> str:
        chain_ids = sorted({network.chain_id for network in networks})
        return "".join(f'{self.settings.get_rpc_env_var(chain_id)}=""\n' for chain_id in chain_ids)


def render_project_config(config: ProjectConfig) -> str:
    """Serialize a project config as the project configuration artifact."""
    data = config.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, indent=2) + "\n"
