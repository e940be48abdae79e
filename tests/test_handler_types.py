import json
import logging
import pytest

from codegen.entities import AbiEvent, ContractSource
from core.exceptions import InvalidAbiException, MissingReferenceException
from core.logging.providers import LOGGER_NAME


TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def event(name: str, *inputs: dict) -> dict:
    return {"type": "event", "name": name, "anonymous": False, "inputs": list(inputs)}


def warnings_of(caplog) -> list[logging.LogRecord]:
    return [
        record for record in caplog.records
        if record.name == LOGGER_NAME and record.levelno == logging.WARNING
    ]


class TestHandlerTypeGenerator:
    """
    Tests for event and handler type generation.
    """

    def test_handler_set_has_one_optional_key_per_event(self, abi_service, handler_generator, erc20_abi):
        """
        Test that every event of the ABI is an optional key of the handler-set type.
        """
        events = abi_service.parse_events(erc20_abi)
        content = handler_generator.generate_source("ERC20", events).content

        assert content.endswith(
            "export type ERC20Handlers = {\n"
            "  Transfer?: TransferHandler;\n"
            "  Approval?: ApprovalHandler;\n"
            "};\n"
        )
        assert content.count("Transfer?:") == 1
        assert "balanceOf" not in content

    def test_event_and_handler_types(self, abi_service, handler_generator, erc20_abi):
        """
        Test the event payload interface and handler function type.
        """
        generated = handler_generator.generate_source("ERC20", abi_service.parse_events(erc20_abi))
        content = generated.content

        assert generated.filename == "ERC20.d.ts"
        assert 'import type { Block, EventLog, Transaction } from "@ponder/ponder";' in content
        assert 'import type { Context } from "./context";' in content
        assert (
            "export interface TransferEvent extends EventLog {\n"
            '  name: "Transfer";\n'
            "  params: { from: string; to: string; value: BigNumber };\n"
            "  block: Block;\n"
            "  transaction: Transaction;\n"
            "}\n"
            "export type TransferHandler = (event: TransferEvent, context: Context) => void;\n"
        ) in content

    def test_event_signature_comment(self, abi_service, handler_generator, erc20_abi):
        content = handler_generator.generate_source("ERC20", abi_service.parse_events(erc20_abi)).content

        assert " * Transfer(address,address,uint256)\n" in content
        assert f" * topic: {TRANSFER_TOPIC}\n" in content

    @pytest.mark.parametrize(
        "abi_type, ts_type",
        [
            ("bool", "boolean"),
            ("address", "string"),
            ("string", "string"),
            ("uint8", "BigNumber"),
            ("int256", "BigNumber"),
            ("bytes", "Bytes"),
            ("bytes32", "Bytes"),
            ("uint256[]", "BigNumber[]"),
            ("address[3][]", "string[][]"),
        ]
    )
    def test_parameter_family_mapping(self, abi_service, handler_generator, abi_type, ts_type):
        events = abi_service.parse_events([event("Ping", {"name": "value", "type": abi_type})])
        content = handler_generator.generate_source("Pinger", events).content

        assert f"  params: {{ value: {ts_type} }};\n" in content

    def test_nested_tuples_keep_depth_and_names(self, abi_service, handler_generator):
        """
        Test that tuple parameters nest to any depth with their own key names.
        """
        abi = [event(
            "OrderFilled",
            {
                "name": "order",
                "type": "tuple",
                "components": [
                    {"name": "maker", "type": "address"},
                    {
                        "name": "inner",
                        "type": "tuple",
                        "components": [
                            {"name": "flag", "type": "bool"},
                            {
                                "name": "deep",
                                "type": "tuple",
                                "components": [{"name": "amount", "type": "uint128"}]
                            }
                        ]
                    }
                ]
            },
            {
                "name": "fills",
                "type": "tuple[]",
                "components": [{"name": "price", "type": "uint256"}]
            }
        )]
        events = abi_service.parse_events(abi)
        content = handler_generator.generate_source("Exchange", events).content

        assert (
            "  params: { order: { maker: string; inner: { flag: boolean; "
            "deep: { amount: BigNumber } } }; fills: { price: BigNumber }[] };\n"
        ) in content
        assert events[0].signature == "OrderFilled((address,(bool,(uint128))),(uint256)[])"

    def test_unknown_family_becomes_placeholder(self, abi_service, handler_generator, caplog):
        """
        Test that unmapped families are typed unknown with one warning
        per occurrence, and generation completes.
        """
        abi = [
            event("Priced", {"name": "price", "type": "fixed128x18"}, {"name": "ok", "type": "bool"}),
            event("Called", {"name": "callback", "type": "function"}),
        ]
        events = abi_service.parse_events(abi)

        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            content = handler_generator.generate_source("Oracle", events).content

        assert "  params: { price: unknown; ok: boolean };\n" in content
        assert "  params: { callback: unknown };\n" in content
        assert "Called?: CalledHandler;" in content
        assert len(warnings_of(caplog)) == 2

    def test_unnamed_parameters(self, abi_service, handler_generator):
        events = abi_service.parse_events([event("Anon", {"name": "", "type": "address"}, {"type": "uint256"})])
        content = handler_generator.generate_source("Anon", events).content

        assert "  params: { arg0: string; arg1: BigNumber };\n" in content

    def test_event_without_parameters(self, abi_service, handler_generator):
        events = abi_service.parse_events([event("Paused")])
        content = handler_generator.generate_source("Pausable", events).content

        assert "  params: {};\n" in content

    def test_overloaded_event_keeps_first(self, abi_service, handler_generator, caplog):
        """
        Test that overloaded events produce a single key and a warning.
        """
        abi = [
            event("Transfer", {"name": "to", "type": "address"}),
            event("Transfer", {"name": "to", "type": "address"}, {"name": "id", "type": "uint256"}),
        ]
        events = abi_service.parse_events(abi)

        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            content = handler_generator.generate_source("NFT", events).content

        assert content.count("export interface TransferEvent") == 1
        assert "  params: { to: string };\n" in content
        assert len(warnings_of(caplog)) == 1

    def test_generation_is_idempotent(self, abi_service, handler_generator, erc20_abi):
        first = handler_generator.generate_source("ERC20", abi_service.parse_events(erc20_abi))
        second = handler_generator.generate_source("ERC20", abi_service.parse_events(erc20_abi))

        assert first == second

    def test_context_type(self, handler_generator):
        generated = handler_generator.generate_context()

        assert generated.filename == "context.d.ts"
        assert 'import type { entities } from "./entities";' in generated.content
        assert "  entities: entities;" in generated.content

    @pytest.mark.asyncio
    async def test_generate_from_sources(self, handler_generator, erc20_abi, tmp_path, token_address):
        """
        Test one artifact per source, read from ABI files relative to the root.
        """
        (tmp_path / "abis").mkdir()
        (tmp_path / "abis" / "ERC20.json").write_text(json.dumps(erc20_abi), encoding="utf-8")
        (tmp_path / "abis" / "Pausable.json").write_text(
            json.dumps({"abi": [event("Paused")]}), encoding="utf-8"
        )
        sources = [
            ContractSource(name="Token", network="mainnet", address=token_address, abi_path="./abis/ERC20.json"),
            ContractSource(name="Pausable", network="mainnet", address=token_address, abi_path="./abis/Pausable.json"),
        ]

        files = await handler_generator.generate(sources, str(tmp_path))

        assert [f.filename for f in files] == ["Token.d.ts", "Pausable.d.ts"]
        assert "export type TokenHandlers = {" in files[0].content
        assert "  Paused?: PausedHandler;\n" in files[1].content

    @pytest.mark.asyncio
    async def test_missing_abi_file(self, handler_generator, tmp_path, token_address):
        source = ContractSource(name="Token", network="mainnet", address=token_address, abi_path="./abis/nope.json")

        with pytest.raises(MissingReferenceException):
            await handler_generator.generate([source], str(tmp_path))


class TestABIService:
    """
    Tests for ABI document parsing.
    """

    def test_only_events_are_parsed(self, abi_service, erc20_abi):
        events = abi_service.parse_events(erc20_abi)

        assert [e.name for e in events] == ["Transfer", "Approval"]
        assert all(isinstance(e, AbiEvent) for e in events)
        assert events[0].inputs[0].indexed is True

    def test_artifact_document(self, abi_service, erc20_abi):
        events = abi_service.parse_events({"contractName": "ERC20", "abi": erc20_abi})

        assert len(events) == 2

    def test_non_list_document(self, abi_service):
        with pytest.raises(InvalidAbiException):
            abi_service.parse_events({"events": []})

    def test_invalid_json_file(self, abi_service, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(InvalidAbiException):
            abi_service.load_events(str(path))

    def test_file_not_utf8(self, abi_service, tmp_path):
        """
        Test that an undecodable ABI file is rejected naming the file.
        """
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe[]")

        with pytest.raises(InvalidAbiException) as exc_info:
            abi_service.load_events(str(path))
        assert str(path) in exc_info.value.message

    def test_base_name_and_topic(self, abi_service, erc20_abi):
        transfer = abi_service.parse_events(erc20_abi)[0]

        assert transfer.base_name == "Transfer"
        assert transfer.topic == TRANSFER_TOPIC
