import json
import logging
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from codegen.abi_service import ABIService
from codegen.entity_types import EntityTypeGenerator
from codegen.handler_types import HandlerTypeGenerator
from codegen.schema_service import SchemaService
from codegen.subgraph_import import SubgraphImportService
from core.environment.config import Settings
from core.logging.providers import LOGGER_NAME


ERC20_ABI = [
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False}
        ]
    },
    {
        "type": "event",
        "name": "Approval",
        "anonymous": False,
        "inputs": [
            {"name": "owner", "type": "address", "indexed": True},
            {"name": "spender", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False}
        ]
    },
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}]
    }
]

SCHEMA_SDL = """
type Token @entity {
  id: ID!
  owner: String
  kind: Trait!
}

enum Trait {
  GOOD
  BAD
}
"""

TOKEN_ADDRESS = "0x6b175474e89094c44da98b954eedeac495271d0f"

SUBGRAPH_YAML = f"""
specVersion: 0.0.4
schema:
  file: ./schema.graphql
dataSources:
  - kind: ethereum/contract
    name: ERC20
    network: mainnet
    source:
      address: "{TOKEN_ADDRESS}"
      abi: ERC20
      startBlock: 8928158
    mapping:
      kind: ethereum/events
      apiVersion: 0.0.5
      language: wasm/assemblyscript
      entities:
        - Token
      abis:
        - name: ERC20
          file: ./abis/ERC20.json
      eventHandlers:
        - event: Transfer(indexed address,indexed address,uint256)
          handler: handleTransfer
      file: ./src/mapping.ts
"""


@pytest.fixture
def logger() -> logging.Logger:
    """Logger shared by the services under test."""
    return logging.getLogger(LOGGER_NAME)


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def abi_service(logger):
    return ABIService(logger=logger)


@pytest.fixture
def schema_service(logger):
    return SchemaService(logger=logger)


@pytest.fixture
def entity_generator(logger):
    return EntityTypeGenerator(logger=logger)


@pytest.fixture
def handler_generator(abi_service, logger):
    return HandlerTypeGenerator(abi_service=abi_service, logger=logger)


@pytest.fixture
def import_service(settings, logger):
    return SubgraphImportService(settings=settings, logger=logger)


@pytest.fixture
def subgraph_dir(tmp_path):
    """
    Subgraph project with one ERC20 data source on mainnet.
    
    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary directory
    
    Returns
    -------
    pathlib.Path
        Subgraph directory
    """
    root = tmp_path / "subgraph"
    (root / "abis").mkdir(parents=True)
    (root / "subgraph.yaml").write_text(SUBGRAPH_YAML, encoding="utf-8")
    (root / "schema.graphql").write_text(SCHEMA_SDL, encoding="utf-8")
    (root / "abis" / "ERC20.json").write_text(json.dumps(ERC20_ABI), encoding="utf-8")
    return root


@pytest_asyncio.fixture
async def client():
    """
    Fixture for async test client.
    
    Yields
    ------
    AsyncClient
        Async HTTP client for testing
    """
    from main import app
    
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def erc20_abi() -> list[dict]:
    return json.loads(json.dumps(ERC20_ABI))


@pytest.fixture
def schema_sdl() -> str:
    return SCHEMA_SDL


@pytest.fixture
def token_address() -> str:
    return TOKEN_ADDRESS
