"""
Arbitrage Contract Deployment
Deploys PureTrustlessArbitrageBotZetaQuoter to a ZetaChain network

Usage:
    python deploy.py --network zetatestnet
"""

import argparse
import os
import sys
from typing import Mapping, Optional
from loguru import logger
from dotenv import load_dotenv

from blockchain.contract_factory import DEFAULT_ARTIFACT_PATH, Web3ContractFactory
from blockchain.deployer import (
    DeploymentResult,
    DeploymentSucceeded,
    MissingConfiguration,
    deploy
)
from blockchain.deployment_params import collect_parameters, format_missing_configuration
from blockchain.exceptions import DeployerError
from utils.network_resolver import NetworkResolver

LOG_FILE = "data/logs/deploy.log"
SUCCESS_MESSAGE = "✅ Arbitrage contract deployed at:"
DEFAULT_LOG_LEVEL = "INFO"


def resolve_log_level(level: Optional[str]) -> str:
    """Return a loguru level name, falling back to INFO for unknown names"""
    if not level:
        return DEFAULT_LOG_LEVEL

    level = level.strip().upper()
    try:
        logger.level(level)
    except ValueError:
        return DEFAULT_LOG_LEVEL

    return level


def setup_logging(level: Optional[str] = DEFAULT_LOG_LEVEL, log_file: Optional[str] = LOG_FILE):
    """Configure console and file logging"""
    console_level = resolve_log_level(level)

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=console_level
    )
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )

    if level and console_level != level.strip().upper():
        logger.warning(f"Unknown LOG_LEVEL '{level}', using {console_level}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Deploy the arbitrage contract")
    parser.add_argument(
        "--network",
        default=None,
        help="Network name from the network table (default: $DEPLOY_NETWORK or zetatestnet)"
    )
    parser.add_argument(
        "--network-config",
        default=None,
        help="Network table JSON (default: bundled utils/network_config.json)"
    )
    parser.add_argument(
        "--artifact",
        default=DEFAULT_ARTIFACT_PATH,
        help="Compiled contract artifact JSON"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the deployment receipt (default: provider default)"
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Only log to the console"
    )
    return parser.parse_args(argv)


def report(result: DeploymentResult) -> int:
    """
    Print the outcome and translate it to an exit status

    Args:
        result: Deployment result

    Returns:
        Process exit status
    """
    if isinstance(result, MissingConfiguration):
        print(format_missing_configuration())
        return 1

    if isinstance(result, DeploymentSucceeded):
        print(f"{SUCCESS_MESSAGE} {result.address}")
        return 0

    logger.opt(exception=result.error).error("Deployment aborted")
    print(result.error, file=sys.stderr)
    return 1


def build_factory(args: argparse.Namespace, environ: Mapping[str, str]) -> Web3ContractFactory:
    """Resolve the network and bind a contract factory to it"""
    resolver = NetworkResolver(config_path=args.network_config, environ=environ)
    network = args.network or resolver.default_network

    network_config = resolver.resolve(network)
    w3 = resolver.get_web3(network)

    return Web3ContractFactory.from_network(
        w3,
        network_config,
        artifact_path=args.artifact,
        timeout=args.timeout
    )


def main(argv=None, environ: Optional[Mapping[str, str]] = None, factory=None) -> int:
    """
    Deploy the arbitrage contract

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        environ: Environment mapping (defaults to os.environ after loading .env)
        factory: Contract factory (defaults to a web3 factory for --network)

    Returns:
        Process exit status
    """
    args = parse_args(argv)

    if environ is None:
        load_dotenv()
        environ = os.environ

    setup_logging(
        level=environ.get('LOG_LEVEL', 'INFO'),
        log_file=None if args.no_log_file else LOG_FILE
    )

    logger.info("=" * 70)
    logger.info("Arbitrage Contract Deployment")
    logger.info("=" * 70)

    params, missing = collect_parameters(environ)

    if params is None:
        logger.error(f"Missing constructor env vars: {', '.join(missing)}")
        return report(MissingConfiguration(missing=missing))

    if factory is None:
        try:
            factory = build_factory(args, environ)
        except (DeployerError, OSError, ValueError) as e:
            logger.error(f"Network setup failed: {e}")
            print(e, file=sys.stderr)
            return 1

    result = deploy(params, factory)

    return report(result)


if __name__ == "__main__":
    sys.exit(main())
