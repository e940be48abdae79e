import asyncio
import logging
import os

from codegen.abi_service import ABIService
from codegen.entities import AbiEvent, AbiParameter, ContractSource, GeneratedFile
from codegen.type_maps import ABI_FAMILY_TS_TYPES, UNKNOWN_TS_TYPE


HEADER = "/* Autogenerated file. Do not edit manually. */\n"

IMPORTS = (
    'import type { Block, EventLog, Transaction } from "@ponder/ponder";\n'
    'import type { BigNumber, Bytes } from "ethers";\n'
    "\n"
    'import type { Context } from "./context";\n'
)

CONTEXT_FILENAME = "context.d.ts"


def get_family(base_type: str) -> str:
    """Strip the trailing width from an ABI type (uint256 -> uint, bytes32 -> bytes)."""
    return base_type.rstrip("0123456789")


class HandlerTypeGenerator:
    """
    Generates per-source event and handler types from contract ABIs.

    Unmapped ABI parameter families become ``unknown`` with a warning
    instead of aborting generation.

    Parameters
    ----------
    abi_service : ABIService
        ABI reader
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, abi_service: ABIService, logger: logging.Logger):
        self.abi_service = abi_service
        self.logger = logger

    async def generate(
        self,
        sources: list[ContractSource],
        root_dir: str = "."
    ) -> list[GeneratedFile]:
        """
        Generate one handler types artifact per source.

        Sources are processed concurrently; results keep source order.

        Parameters
        ----------
        sources : list[ContractSource]
            Contract sources
        root_dir : str
            Directory ABI paths are relative to

        Returns
        -------
        list[GeneratedFile]
            ``<Source>.d.ts`` per source
        """
        files = await asyncio.gather(
            *(self._generate_from_path(source, root_dir) for source in sources)
        )
        self.logger.info(f"Generated handler types for {len(files)} sources")
        return list(files)

    async def _generate_from_path(self, source: ContractSource, root_dir: str) -> GeneratedFile:
        abi_path = os.path.join(root_dir, source.abi_path)
        events = await asyncio.to_thread(self.abi_service.load_events, abi_path)
        return self.generate_source(source.name, events)

    def generate_source(self, source_name: str, events: tuple[AbiEvent, ...]) -> GeneratedFile:
        """
        Render the handler types artifact of one source.

        Parameters
        ----------
        source_name : str
            Source name, used for the handler-set type and file name
        events : tuple[AbiEvent, ...]
            Events of the source ABI

        Returns
        -------
        GeneratedFile
            Event, handler and handler-set declarations
        """
        event_names = []
        event_types = []
        for event in events:
            name = event.base_name
            if name in event_names:
                self.logger.warning(
                    f"Skipping overloaded event {event.signature} in {source_name}, "
                    f"{name} is already declared"
                )
                continue
            event_names.append(name)
            event_types.append(self._render_event(source_name, event))

        handler_keys = "".join(f"  {name}?: {name}Handler;\n" for name in event_names)
        content = (
            f"{HEADER}\n"
            f"{IMPORTS}\n"
            + "".join(f"{event_type}\n" for event_type in event_types)
            + f"export type {source_name}Handlers = {{\n"
            f"{handler_keys}"
            f"}};\n"
        )

        self.logger.debug(f"Generated {source_name}.d.ts with {len(event_names)} events")
        return GeneratedFile(filename=f"{source_name}.d.ts", content=content)

    def generate_context(self) -> GeneratedFile:
        """Render the handler context type referenced by handler types."""
        content = (
            f"{HEADER}\n"
            'import type { entities } from "./entities";\n'
            "\n"
            "export type Context = {\n"
            "  entities: entities;\n"
            "};\n"
        )
        return GeneratedFile(filename=CONTEXT_FILENAME, content=content)

    def _render_event(self, source_name: str, event: AbiEvent) -> str:
        name = event.base_name
        params_type = self.render_params(event.inputs, f"{source_name}.{name}")
        return (
            f"/**\n"
            f" * {event.signature}\n"
            f" * topic: {event.topic}\n"
            f" */\n"
            f"export interface {name}Event extends EventLog {{\n"
            f'  name: "{name}";\n'
            f"  params: {params_type};\n"
            f"  block: Block;\n"
            f"  transaction: Transaction;\n"
            f"}}\n"
            f"export type {name}Handler = (event: {name}Event, context: Context) => void;\n"
        )

    def render_params(self, params: tuple[AbiParameter, ...], path: str) -> str:
        """
        Render a parameter list as an inline object type.

        Tuple parameters recurse into their components.

        Parameters
        ----------
        params : tuple[AbiParameter, ...]
            Parameters
        path : str
            Dotted location of the parameters, used in warnings

        Returns
        -------
        str
            Object type, e.g. ``{ from: string; value: BigNumber }``
        """
        if not params:
            return "{}"

        members = []
        for index, param in enumerate(params):
            key = param.name or f"arg{index}"
            members.append(f"{key}: {self._render_param_type(param, f'{path}.{key}')}")
        return "{ " + "; ".join(members) + " }"

    def _render_param_type(self, param: AbiParameter, path: str) -> str:
        array_suffix = "[]" * param.array_suffix.count("[")

        if param.is_tuple:
            return self.render_params(param.components or (), path) + array_suffix

        ts_type = ABI_FAMILY_TS_TYPES.get(get_family(param.base_type))
        if ts_type is None:
            self.logger.warning(f"Unhandled ABI parameter {path} of type {param.type}, using unknown")
            return UNKNOWN_TS_TYPE + array_suffix
        return ts_type + array_suffix
