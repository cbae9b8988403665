"""
Contract Factory
Builds, signs and broadcasts the arbitrage contract deployment transaction
"""

import os
import json
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from web3 import Web3
from eth_account import Account
from loguru import logger

from .deployment_params import DeploymentParameters
from .exceptions import ArtifactNotFoundError, DeploymentError

CONTRACT_NAME = "PureTrustlessArbitrageBotZetaQuoter"
DEFAULT_ARTIFACT_PATH = f"artifacts/contracts/{CONTRACT_NAME}.sol/{CONTRACT_NAME}.json"

GAS_BUFFER = 1.2  # 20% over the estimate


@dataclass(frozen=True)
class PendingDeployment:
    """A broadcast deployment transaction awaiting confirmation"""
    tx_hash: str
    sender: str


def load_artifact(artifact_path: str) -> Tuple[list, str]:
    """
    Load ABI and bytecode from a compiled contract artifact

    Accepts Hardhat artifacts ("bytecode": "0x...") and Foundry
    artifacts ("bytecode": {"object": "0x..."}).

    Args:
        artifact_path: Path to the artifact JSON

    Returns:
        (abi, bytecode)
    """
    if not os.path.exists(artifact_path):
        raise ArtifactNotFoundError(
            f"Contract artifact not found: {artifact_path} (run 'npx hardhat compile' first)"
        )

    with open(artifact_path, 'r') as f:
        contract_json = json.load(f)

    abi = contract_json.get('abi')
    bytecode = contract_json.get('bytecode')

    if isinstance(bytecode, dict):
        bytecode = bytecode.get('object')

    if not abi or not bytecode or bytecode == '0x':
        raise ArtifactNotFoundError(f"Artifact {artifact_path} has no abi or bytecode")

    return abi, bytecode


class Web3ContractFactory:
    """
    Deploys the arbitrage contract over a web3 provider

    Signs locally when a private key is configured, otherwise sends
    from the node's first unlocked account.
    """

    def __init__(
        self,
        w3: Web3,
        artifact_path: str = DEFAULT_ARTIFACT_PATH,
        private_key: Optional[str] = None,
        chain_id: Optional[int] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance connected to the target network
            artifact_path: Compiled contract artifact JSON
            private_key: Deployer key (None = node-managed account)
            chain_id: Expected chain id (None = ask the node)
            timeout: Receipt wait timeout in seconds (None = provider default)
        """
        self.w3 = w3
        self.artifact_path = str(artifact_path)
        self.private_key = private_key
        self.chain_id = chain_id
        self.timeout = timeout
        self._account = None

    @property
    def account(self):
        """Local signing account, loaded on first use"""
        if self.private_key and self._account is None:
            self._account = Account.from_key(self.private_key)
        return self._account

    @classmethod
    def from_network(cls, w3: Web3, network_config, artifact_path: str = DEFAULT_ARTIFACT_PATH,
                     timeout: Optional[float] = None) -> "Web3ContractFactory":
        """Build a factory from a resolved NetworkConfig"""
        private_key = network_config.accounts[0] if network_config.accounts else None
        return cls(
            w3,
            artifact_path=artifact_path,
            private_key=private_key,
            chain_id=network_config.chain_id,
            timeout=timeout
        )

    def _sender(self) -> str:
        if self.account:
            return self.account.address

        accounts = self.w3.eth.accounts
        if not accounts:
            raise DeploymentError("No deployer account: set PRIVATE_KEY or use a node with unlocked accounts")

        return accounts[0]

    def _constructor(self, params: DeploymentParameters):
        abi, bytecode = load_artifact(self.artifact_path)
        Contract = self.w3.eth.contract(abi=abi, bytecode=bytecode)

        v2_router, v3_router, v3_quoter, wrapped_native, supported_tokens = params.as_constructor_args()

        return Contract.constructor(
            Web3.to_checksum_address(v2_router),
            Web3.to_checksum_address(v3_router),
            Web3.to_checksum_address(v3_quoter),
            Web3.to_checksum_address(wrapped_native),
            [Web3.to_checksum_address(token) for token in supported_tokens]
        )

    def _estimate_gas(self, constructor, sender: str) -> int:
        # A reverting constructor fails here, before anything is broadcast
        gas_estimate = constructor.estimate_gas({'from': sender})
        return int(gas_estimate * GAS_BUFFER)

    def deploy_contract(self, params: DeploymentParameters) -> PendingDeployment:
        """
        Submit the deployment transaction

        Args:
            params: Validated constructor arguments

        Returns:
            PendingDeployment with the transaction hash
        """
        constructor = self._constructor(params)
        sender = self._sender()

        logger.info(f"Deploying {CONTRACT_NAME} from: {sender}")

        gas_limit = self._estimate_gas(constructor, sender)
        gas_price = self.w3.eth.gas_price

        logger.info(f"Gas limit: {gas_limit}")
        logger.info(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")

        tx_params: Dict = {
            'from': sender,
            'gas': gas_limit,
            'gasPrice': gas_price
        }

        if self.account:
            tx_params['nonce'] = self.w3.eth.get_transaction_count(sender)
            tx_params['chainId'] = self.chain_id if self.chain_id is not None else self.w3.eth.chain_id

            transaction = constructor.build_transaction(tx_params)

            logger.info("Signing transaction...")
            signed_tx = self.account.sign_transaction(transaction)

            logger.info("Sending deployment transaction...")
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        else:
            logger.info("Sending deployment transaction from node account...")
            tx_hash = constructor.transact(tx_params)

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash_hex}")

        return PendingDeployment(tx_hash=tx_hash_hex, sender=sender)

    def confirm(self, pending: PendingDeployment) -> str:
        """
        Block until the deployment is mined

        Args:
            pending: Submitted deployment

        Returns:
            Deployed contract address
        """
        logger.info("Waiting for confirmation...")

        if self.timeout is not None:
            receipt = self.w3.eth.wait_for_transaction_receipt(pending.tx_hash, timeout=self.timeout)
        else:
            receipt = self.w3.eth.wait_for_transaction_receipt(pending.tx_hash)

        if receipt['status'] != 1:
            raise DeploymentError(
                f"Deployment transaction {pending.tx_hash} reverted",
                tx_hash=pending.tx_hash
            )

        contract_address = receipt['contractAddress']
        if not contract_address:
            raise DeploymentError(
                f"Receipt for {pending.tx_hash} has no contract address",
                tx_hash=pending.tx_hash
            )

        logger.info(f"Gas used: {receipt['gasUsed']}")

        return contract_address
