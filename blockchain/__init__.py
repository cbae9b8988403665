"""
Blockchain Interaction Package
Handles constructor parameters, contract deployment and confirmation
"""

from .contract_factory import Web3ContractFactory, PendingDeployment
from .deployer import DeploymentSucceeded, DeploymentFailed, MissingConfiguration, run_deployment
from .deployment_params import DeploymentParameters, collect_parameters

__all__ = [
    'Web3ContractFactory',
    'PendingDeployment',
    'DeploymentSucceeded',
    'DeploymentFailed',
    'MissingConfiguration',
    'run_deployment',
    'DeploymentParameters',
    'collect_parameters'
]
