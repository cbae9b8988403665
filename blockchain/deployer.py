"""
Deployment Orchestrator
Validates constructor arguments, deploys the arbitrage contract and waits for it
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Protocol, Union
from loguru import logger
from .deployment_params import DeploymentParameters, collect_parameters


class ContractFactory(Protocol):
    """Capability that submits and confirms a contract deployment"""

    def deploy_contract(self, params: DeploymentParameters):
        ...

    def confirm(self, pending) -> str:
        ...


@dataclass(frozen=True)
class DeploymentSucceeded:
    address: str
    tx_hash: Optional[str] = None


@dataclass(frozen=True)
class DeploymentFailed:
    error: Exception


@dataclass(frozen=True)
class MissingConfiguration:
    """Constructor variables were absent or empty; nothing was deployed"""
    missing: List[str] = field(default_factory=list)


DeploymentResult = Union[DeploymentSucceeded, DeploymentFailed, MissingConfiguration]


def deploy(params: DeploymentParameters, factory: ContractFactory) -> DeploymentResult:
    """
    Deploy the contract with validated parameters

    Any error from submission or confirmation is returned as
    DeploymentFailed. Nothing is retried.

    Args:
        params: Constructor arguments
        factory: Contract factory bound to the target network

    Returns:
        DeploymentSucceeded or DeploymentFailed
    """
    try:
        pending = factory.deploy_contract(params)
        address = factory.confirm(pending)
    except Exception as e:
        logger.error(f"Deployment failed: {e}")
        return DeploymentFailed(error=e)

    logger.success(f"Contract deployed at {address}")
    return DeploymentSucceeded(address=address, tx_hash=getattr(pending, 'tx_hash', None))


def run_deployment(
    factory: ContractFactory,
    environ: Optional[Mapping[str, str]] = None
) -> DeploymentResult:
    """
    Collect, validate and deploy

    Args:
        factory: Contract factory bound to the target network
        environ: Environment mapping (defaults to os.environ)

    Returns:
        DeploymentResult
    """
    params, missing = collect_parameters(environ)

    if params is None:
        logger.error(f"Missing constructor env vars: {', '.join(missing)}")
        return MissingConfiguration(missing=missing)

    logger.info(f"Supported tokens: {len(params.supported_tokens)}")

    return deploy(params, factory)
