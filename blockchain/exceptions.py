"""
Deployment Exceptions
Errors raised while resolving networks and deploying the arbitrage contract
"""

from typing import Optional


class DeployerError(Exception):
    """
    Base exception for all deployer errors
    """


class DeploymentError(DeployerError):
    """
    Deployment transaction failed on submission or confirmation
    """

    def __init__(self, msg: str, tx_hash: Optional[str] = None):
        super().__init__(msg)
        self.tx_hash = tx_hash


class ArtifactNotFoundError(DeployerError):
    """
    Compiled contract artifact is missing or incomplete
    """


class UnknownNetworkError(DeployerError, ValueError):
    """
    Network name is not present in the network table
    """
