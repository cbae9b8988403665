"""
Shared test fixtures
"""

import pytest
from loguru import logger

from blockchain.contract_factory import PendingDeployment

DEPLOYED_ADDRESS = '0x5FbDB2315678afecb367f032d93F642f64180aa3'
TX_HASH = '0x' + 'ab' * 32


@pytest.fixture
def deploy_env():
    """Complete constructor environment"""
    return {
        'UNI_V2_ROUTER': '0xa5E0829CaCEd8fFDD4De3c43696c57F7D7A678ff',
        'UNI_V3_ROUTER': '0xE592427A0AEce92De3Edee1F18E0157C05861564',
        'UNI_V3_QUOTER_V2': '0x61fFE014bA17989E743c5F6cB21bF9697530B21e',
        'WRAPPED_NATIVE': '0x5F0b1a82749cb4E2278EC87F8BF6B618dC71a8bf',
        'SUPPORTED_TOKENS': '0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270,0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174'
    }


class FakeFactory:
    """Contract factory returning canned results or raising on request"""

    def __init__(self, address=DEPLOYED_ADDRESS, deploy_error=None, confirm_error=None):
        self.address = address
        self.deploy_error = deploy_error
        self.confirm_error = confirm_error
        self.deployed_with = []
        self.confirmed = []

    def deploy_contract(self, params):
        self.deployed_with.append(params)
        if self.deploy_error:
            raise self.deploy_error
        return PendingDeployment(tx_hash=TX_HASH, sender='0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266')

    def confirm(self, pending):
        self.confirmed.append(pending)
        if self.confirm_error:
            raise self.confirm_error
        return self.address


@pytest.fixture
def fake_factory():
    return FakeFactory()


@pytest.fixture
def reset_logger():
    """Drop log sinks bound to captured streams between tests"""
    yield
    logger.remove()
