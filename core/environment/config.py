import os
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings using Pydantic Settings.
    
    Attributes
    ----------
    generated_dir : str
        Directory for generated type files, relative to the project root
    abi_dir : str
        Directory where imported ABI files are copied
    handlers_dir : str
        Directory where handler stub modules are written
    schema_filename : str
        Entity schema file name in the project root
    config_filename : str
        Project configuration artifact holding networks and sources
    manifest_filenames : list[str]
        Ordered subgraph manifest filename candidates, first existing wins
    default_network : str
        Network assumed when a data source does not declare one
    rpc_url_env_prefix : str
        Prefix of the RPC URL environment variable (chain id is appended)
    log_level : str
        Logging level name
    """
    
    generated_dir: str = "generated"
    abi_dir: str = "abis"
    handlers_dir: str = "handlers"
    schema_filename: str = "schema.graphql"
    config_filename: str = "ponder.config.json"
    
    manifest_filenames: list[str] = ["subgraph.yaml", "subgraph-mainnet.yaml"]
    default_network: str = "mainnet"
    rpc_url_env_prefix: str = "PONDER_RPC_URL_"
    
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False
    )
    
    def get_rpc_env_var(self, chain_id: int) -> str:
        """
        Get name of the RPC URL environment variable for a chain.
        
        Parameters
        ----------
        chain_id : int
            Chain id
            
        Returns
        -------
        str
            Environment variable name, e.g. PONDER_RPC_URL_1
        """
        return f"{self.rpc_url_env_prefix}{chain_id}"
    
    def get_rpc_url_placeholder(self, chain_id: int) -> str:
        """
        Get RPC URL placeholder for a chain.
        
        Parameters
        ----------
        chain_id : int
            Chain id
            
        Returns
        -------
        str
            Placeholder referencing the RPC environment variable
        """
        return "${" + self.get_rpc_env_var(chain_id) + "}"
