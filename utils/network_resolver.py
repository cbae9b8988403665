"""
Network Resolver
Maps a network name to its RPC endpoint and signing credentials
"""

import os
import json
from dataclasses import dataclass, field
from importlib.resources import files
from pathlib import Path
from typing import Dict, List, Mapping, Optional
from web3 import Web3
from loguru import logger

from blockchain.exceptions import UnknownNetworkError

DEFAULT_CONFIG_NAME = "network_config.json"


@dataclass(frozen=True)
class NetworkConfig:
    """Resolved endpoint and credentials for one network"""
    name: str
    url: str
    accounts: List[str] = field(default_factory=list)
    chain_id: Optional[int] = None
    native_symbol: str = "ETH"


class NetworkResolver:
    """
    Resolves network settings from the process environment

    Every network shares the same rules and differs only in the
    environment variable its RPC URL is read from:
    - url: value of the network's RPC variable, or "" when unset
    - accounts: [PRIVATE_KEY] when set and non-empty, otherwise []
    """

    def __init__(self, config_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize Network Resolver

        Args:
            config_path: Network table JSON (defaults to the bundled network_config.json)
            environ: Environment mapping (defaults to os.environ)
        """
        self.environ = environ if environ is not None else os.environ

        if config_path:
            self.config_path = str(config_path)
            with open(config_path, 'r') as f:
                self.config = json.load(f)
        else:
            # Bundled with the package so installed copies find it too
            resource = files(__package__).joinpath(DEFAULT_CONFIG_NAME)
            self.config_path = str(resource)
            self.config = json.loads(resource.read_text())

        self.networks: Dict[str, Dict] = self.config['networks']
        self.credential_env = self.config.get('credential_env', 'PRIVATE_KEY')

        logger.debug(f"Network Resolver loaded {len(self.networks)} networks from {self.config_path}")

    @property
    def default_network(self) -> str:
        return self.environ.get('DEPLOY_NETWORK') or self.config.get('default_network', 'zetatestnet')

    def network_names(self) -> List[str]:
        return sorted(self.networks.keys())

    def resolve(self, network: str) -> NetworkConfig:
        """
        Resolve endpoint and credentials for a network

        Args:
            network: Network name (e.g. 'zetatestnet')

        Returns:
            NetworkConfig with url and accounts
        """
        if network not in self.networks:
            raise UnknownNetworkError(
                f"Unknown network '{network}', expected one of: {', '.join(self.network_names())}"
            )

        network_config = self.networks[network]

        # Missing URL surfaces at connection time, not here
        url = self.environ.get(network_config['rpc_url_env']) or ""

        private_key = self.environ.get(self.credential_env)
        accounts = [private_key] if private_key else []

        return NetworkConfig(
            name=network,
            url=url,
            accounts=accounts,
            chain_id=network_config.get('chain_id'),
            native_symbol=network_config.get('native_symbol', 'ETH')
        )

    def rpc_url_env(self, network: str) -> str:
        """Name of the environment variable holding a network's RPC URL"""
        if network not in self.networks:
            raise UnknownNetworkError(f"Unknown network '{network}'")
        return self.networks[network]['rpc_url_env']

    def get_web3(self, network: str) -> Web3:
        """
        Create a Web3 instance for a network

        Args:
            network: Network name

        Returns:
            Web3 instance (not yet checked for connectivity)
        """
        network_config = self.resolve(network)

        if not network_config.url:
            logger.warning(f"{self.rpc_url_env(network)} not set - connection to {network} will fail")

        w3 = Web3(Web3.HTTPProvider(network_config.url))
        logger.info(f"Using network {network} (chain id {network_config.chain_id})")

        return w3
