from types import MappingProxyType


# Entity schema scalar -> TypeScript type
SCALAR_TS_TYPES = MappingProxyType({
    "ID": "string",
    "Boolean": "boolean",
    "Int": "number",
    "String": "string",
    # graph-ts scalars, carried as strings
    "BigInt": "string",
    "BigDecimal": "string",
    "Bytes": "string",
})

# ABI type family (width suffix stripped) -> TypeScript type
ABI_FAMILY_TS_TYPES = MappingProxyType({
    "bool": "boolean",
    "address": "string",
    "string": "string",
    "int": "BigNumber",
    "uint": "BigNumber",
    "bytes": "Bytes",
})

UNKNOWN_TS_TYPE = "unknown"

# Graph protocol network name -> chain id
NETWORK_CHAIN_IDS = MappingProxyType({
    "mainnet": 1,
    "ropsten": 3,
    "rinkeby": 4,
    "goerli": 5,
    "optimism": 10,
    "kovan": 42,
    "bsc": 56,
    "optimism-kovan": 69,
    "poa-sokol": 77,
    "chapel": 97,
    "poa-core": 99,
    "xdai": 100,
    "fuse": 122,
    "matic": 137,
    "fantom": 250,
    "clover": 1023,
    "moonbeam": 1284,
    "moonriver": 1285,
    "mbase": 1287,
    "arbitrum-one": 42161,
    "celo": 42220,
    "fuji": 43113,
    "avalanche": 43114,
    "celo-alfajores": 44787,
    "mumbai": 80001,
    "arbitrum-rinkeby": 421611,
    "aurora": 1313161554,
    "aurora-testnet": 1313161555,
})


def get_chain_id(network: str) -> int | None:
    """Return the chain id of a Graph protocol network name, if known."""
    return NETWORK_CHAIN_IDS.get(network)
