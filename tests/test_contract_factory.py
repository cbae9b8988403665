"""
Unit Tests for the web3 Contract Factory
"""

import json
import pytest
from unittest.mock import Mock, patch
from web3 import Web3

from blockchain.contract_factory import (
    PendingDeployment,
    Web3ContractFactory,
    load_artifact
)
from blockchain.deployment_params import collect_parameters
from blockchain.exceptions import ArtifactNotFoundError, DeploymentError
from utils.network_resolver import NetworkConfig

DEPLOYER = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'
CONTRACT_ADDRESS = '0x5FbDB2315678afecb367f032d93F642f64180aa3'
ABI = [{"inputs": [], "stateMutability": "nonpayable", "type": "constructor"}]


@pytest.fixture
def artifact(tmp_path):
    """Hardhat-style artifact"""
    path = tmp_path / "Arb.json"
    path.write_text(json.dumps({"abi": ABI, "bytecode": "0x6080604052"}))
    return str(path)


@pytest.fixture
def params(deploy_env):
    # Lower-case addresses so checksumming is observable
    env = {name: value.lower() for name, value in deploy_env.items()}
    params, _ = collect_parameters(env)
    return params


@pytest.fixture
def w3():
    """Mock Web3 instance"""
    w3 = Mock()
    w3.eth.gas_price = 10 ** 9
    w3.eth.chain_id = 7001
    w3.eth.accounts = [DEPLOYER]
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.send_raw_transaction.return_value = b'\x11' * 32
    w3.from_wei.return_value = 1

    constructor = w3.eth.contract.return_value.constructor.return_value
    constructor.estimate_gas.return_value = 1000000
    constructor.build_transaction.return_value = {'data': '0x6080604052'}
    constructor.transact.return_value = b'\x22' * 32

    return w3


@pytest.fixture
def signer():
    account = Mock()
    account.address = DEPLOYER
    account.sign_transaction.return_value.raw_transaction = b'\xf8'

    with patch('blockchain.contract_factory.Account.from_key', return_value=account) as from_key:
        yield from_key, account


class TestLoadArtifact:
    """Test compiled artifact loading"""

    def test_hardhat_artifact(self, artifact):
        abi, bytecode = load_artifact(artifact)

        assert abi == ABI
        assert bytecode == "0x6080604052"

    def test_foundry_artifact(self, tmp_path):
        path = tmp_path / "Arb.json"
        path.write_text(json.dumps({"abi": ABI, "bytecode": {"object": "0x6080"}}))

        assert load_artifact(str(path)) == (ABI, "0x6080")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArtifactNotFoundError):
            load_artifact(str(tmp_path / "missing.json"))

    def test_empty_bytecode(self, tmp_path):
        path = tmp_path / "Arb.json"
        path.write_text(json.dumps({"abi": ABI, "bytecode": "0x"}))

        with pytest.raises(ArtifactNotFoundError):
            load_artifact(str(path))


class TestDeployContract:
    """Test building and sending the deployment transaction"""

    def test_checksummed_arguments_in_order(self, w3, artifact, params, signer):
        factory = Web3ContractFactory(w3, artifact_path=artifact, private_key='0x01')

        factory.deploy_contract(params)

        w3.eth.contract.assert_called_once_with(abi=ABI, bytecode="0x6080604052")
        w3.eth.contract.return_value.constructor.assert_called_once_with(
            Web3.to_checksum_address(params.v2_router),
            Web3.to_checksum_address(params.v3_router),
            Web3.to_checksum_address(params.v3_quoter),
            Web3.to_checksum_address(params.wrapped_native),
            [Web3.to_checksum_address(token) for token in params.supported_tokens]
        )

    def test_signs_with_private_key(self, w3, artifact, params, signer):
        from_key, account = signer
        factory = Web3ContractFactory(w3, artifact_path=artifact, private_key='0x01', chain_id=7001)

        pending = factory.deploy_contract(params)

        from_key.assert_called_once_with('0x01')
        constructor = w3.eth.contract.return_value.constructor.return_value
        constructor.build_transaction.assert_called_once_with({
            'from': DEPLOYER,
            'gas': 1200000,
            'gasPrice': 10 ** 9,
            'nonce': 7,
            'chainId': 7001
        })
        w3.eth.send_raw_transaction.assert_called_once_with(b'\xf8')
        assert pending == PendingDeployment(tx_hash='0x' + '11' * 32, sender=DEPLOYER)

    def test_chain_id_from_node(self, w3, artifact, params, signer):
        factory = Web3ContractFactory(w3, artifact_path=artifact, private_key='0x01')

        factory.deploy_contract(params)

        tx_params = w3.eth.contract.return_value.constructor.return_value.build_transaction.call_args[0][0]
        assert tx_params['chainId'] == 7001

    def test_node_account_without_private_key(self, w3, artifact, params):
        factory = Web3ContractFactory(w3, artifact_path=artifact)

        pending = factory.deploy_contract(params)

        constructor = w3.eth.contract.return_value.constructor.return_value
        constructor.transact.assert_called_once_with({
            'from': DEPLOYER,
            'gas': 1200000,
            'gasPrice': 10 ** 9
        })
        w3.eth.send_raw_transaction.assert_not_called()
        assert pending.tx_hash == '0x' + '22' * 32

    def test_no_account_available(self, w3, artifact, params):
        w3.eth.accounts = []
        factory = Web3ContractFactory(w3, artifact_path=artifact)

        with pytest.raises(DeploymentError):
            factory.deploy_contract(params)

    def test_reverting_constructor_is_never_sent(self, w3, artifact, params):
        constructor = w3.eth.contract.return_value.constructor.return_value
        constructor.estimate_gas.side_effect = ValueError("execution reverted: bad router")
        factory = Web3ContractFactory(w3, artifact_path=artifact)

        with pytest.raises(ValueError, match="bad router"):
            factory.deploy_contract(params)

        constructor.transact.assert_not_called()
        w3.eth.send_raw_transaction.assert_not_called()

    def test_reverting_constructor_is_never_signed(self, w3, artifact, params, signer):
        _, account = signer
        constructor = w3.eth.contract.return_value.constructor.return_value
        constructor.estimate_gas.side_effect = ValueError("execution reverted")
        factory = Web3ContractFactory(w3, artifact_path=artifact, private_key='0x01')

        with pytest.raises(ValueError):
            factory.deploy_contract(params)

        account.sign_transaction.assert_not_called()
        w3.eth.send_raw_transaction.assert_not_called()

    def test_missing_artifact(self, w3, tmp_path, params):
        factory = Web3ContractFactory(w3, artifact_path=str(tmp_path / "missing.json"))

        with pytest.raises(ArtifactNotFoundError):
            factory.deploy_contract(params)

    def test_send_error_propagates(self, w3, artifact, params):
        w3.eth.contract.return_value.constructor.return_value.transact.side_effect = ConnectionError("down")
        factory = Web3ContractFactory(w3, artifact_path=artifact)

        with pytest.raises(ConnectionError):
            factory.deploy_contract(params)

    def test_private_key_not_loaded_until_deploy(self, w3, artifact):
        with patch('blockchain.contract_factory.Account.from_key') as from_key:
            Web3ContractFactory(w3, artifact_path=artifact, private_key='not a key')

        from_key.assert_not_called()


class TestConfirm:
    """Test waiting for the deployment receipt"""

    def test_returns_contract_address(self, w3):
        w3.eth.wait_for_transaction_receipt.return_value = {
            'status': 1, 'contractAddress': CONTRACT_ADDRESS, 'gasUsed': 900000
        }
        factory = Web3ContractFactory(w3)

        address = factory.confirm(PendingDeployment(tx_hash='0xaa', sender=DEPLOYER))

        assert address == CONTRACT_ADDRESS
        w3.eth.wait_for_transaction_receipt.assert_called_once_with('0xaa')

    def test_passes_timeout(self, w3):
        w3.eth.wait_for_transaction_receipt.return_value = {
            'status': 1, 'contractAddress': CONTRACT_ADDRESS, 'gasUsed': 900000
        }
        factory = Web3ContractFactory(w3, timeout=30)

        factory.confirm(PendingDeployment(tx_hash='0xaa', sender=DEPLOYER))

        w3.eth.wait_for_transaction_receipt.assert_called_once_with('0xaa', timeout=30)

    def test_reverted_deployment(self, w3):
        w3.eth.wait_for_transaction_receipt.return_value = {
            'status': 0, 'contractAddress': None, 'gasUsed': 900000
        }
        factory = Web3ContractFactory(w3)

        with pytest.raises(DeploymentError) as exc_info:
            factory.confirm(PendingDeployment(tx_hash='0xaa', sender=DEPLOYER))

        assert exc_info.value.tx_hash == '0xaa'

    def test_wait_error_propagates(self, w3):
        w3.eth.wait_for_transaction_receipt.side_effect = TimeoutError("not mined")
        factory = Web3ContractFactory(w3)

        with pytest.raises(TimeoutError):
            factory.confirm(PendingDeployment(tx_hash='0xaa', sender=DEPLOYER))


def test_from_network_uses_first_account(w3):
    network_config = NetworkConfig('zetatestnet', 'http://rpc', ['0xabc'], 7001)

    factory = Web3ContractFactory.from_network(w3, network_config, timeout=10)

    assert factory.private_key == '0xabc'
    assert factory.chain_id == 7001
    assert factory.timeout == 10


def test_from_network_without_accounts(w3):
    network_config = NetworkConfig('zetatestnet', 'http://rpc', [], 7001)

    factory = Web3ContractFactory.from_network(w3, network_config)

    assert factory.private_key is None
    assert factory.account is None
