"""
Deployment Preflight Check
Verifies configuration, RPC connectivity and deployer funds before deploying

Usage:
    python -m scripts.check_system --network zetatestnet
"""

import argparse
import os
import sys
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from blockchain.contract_factory import DEFAULT_ARTIFACT_PATH, load_artifact
from blockchain.deployment_params import collect_parameters
from blockchain.exceptions import ArtifactNotFoundError
from utils.network_resolver import NetworkResolver


def check_environment_variables(environ) -> bool:
    """Check that all constructor variables are set"""
    logger.info("Checking constructor environment variables...")

    params, missing = collect_parameters(environ)

    if missing:
        logger.error(f"Missing environment variables: {', '.join(missing)}")
        return False

    logger.success(f"✓ All constructor variables set ({len(params.supported_tokens)} supported tokens)")
    return True


def check_rpc_connection(resolver: NetworkResolver, network: str) -> bool:
    """Check RPC endpoint connection for the network"""
    logger.info(f"Checking RPC connection for {network}...")

    network_config = resolver.resolve(network)

    if not network_config.url:
        logger.error(f"  ✗ {resolver.rpc_url_env(network)} not configured")
        return False

    try:
        w3 = resolver.get_web3(network)
        if not w3.is_connected():
            logger.error(f"  ✗ {network}: Connection failed")
            return False

        block = w3.eth.block_number
        chain_id = w3.eth.chain_id

        if network_config.chain_id is not None and chain_id != network_config.chain_id:
            logger.error(f"  ✗ {network}: Chain id {chain_id}, expected {network_config.chain_id}")
            return False

        logger.success(f"  ✓ {network}: Connected (Block: {block})")
        return True
    except Exception as e:
        logger.error(f"  ✗ {network}: {e}")
        return False


def check_deployer_balance(resolver: NetworkResolver, network: str) -> bool:
    """Check the deployer account has funds for gas"""
    logger.info("Checking deployer balance...")

    network_config = resolver.resolve(network)

    if not network_config.accounts:
        logger.warning("  PRIVATE_KEY not set - deployment will use the node's account")
        return True

    if not network_config.url:
        logger.warning("  No RPC URL - skipping balance check")
        return True

    try:
        account = Account.from_key(network_config.accounts[0])
        w3 = resolver.get_web3(network)

        balance = w3.eth.get_balance(account.address)
        balance_native = w3.from_wei(balance, 'ether')

        logger.info(f"  Deployer {account.address}: {balance_native:.4f} {network_config.native_symbol}")

        if balance == 0:
            logger.error("  ✗ Deployer has no funds for gas")
            return False

        logger.success("  ✓ Deployer funded")
        return True
    except Exception as e:
        logger.error(f"  Error checking deployer balance: {e}")
        return False


def check_contract_artifact(artifact_path: str) -> bool:
    """Check the compiled contract artifact exists"""
    logger.info("Checking contract artifact...")

    try:
        abi, _ = load_artifact(artifact_path)
    except ArtifactNotFoundError as e:
        logger.error(f"  ✗ {e}")
        return False

    has_constructor = any(entry.get('type') == 'constructor' for entry in abi)
    if not has_constructor:
        logger.warning(f"  ABI in {artifact_path} declares no constructor")

    logger.success(f"  ✓ {artifact_path}")
    return True


def main(argv=None, environ=None) -> int:
    """Run all preflight checks"""
    parser = argparse.ArgumentParser(description="Check deployment prerequisites")
    parser.add_argument("--network", default=None)
    parser.add_argument("--network-config", default=None)
    parser.add_argument("--artifact", default=DEFAULT_ARTIFACT_PATH)
    args = parser.parse_args(argv)

    if environ is None:
        load_dotenv()
        environ = os.environ

    resolver = NetworkResolver(config_path=args.network_config, environ=environ)
    network = args.network or resolver.default_network

    logger.info("=" * 70)
    logger.info(f"Deployment Preflight Check ({network})")
    logger.info("=" * 70)

    checks = [
        ("Environment Variables", lambda: check_environment_variables(environ)),
        ("RPC Connection", lambda: check_rpc_connection(resolver, network)),
        ("Deployer Balance", lambda: check_deployer_balance(resolver, network)),
        ("Contract Artifact", lambda: check_contract_artifact(args.artifact))
    ]

    results = []

    for name, check_func in checks:
        logger.info("")
        try:
            result = check_func()
            results.append((name, result))
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            results.append((name, False))

    # Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{total} checks passed")

    if passed == total:
        logger.success("✅ Ready to deploy")
        logger.info(f"Deploy: python deploy.py --network {network}")
        return 0

    logger.error("❌ Not ready - fix issues above")
    return 1


if __name__ == "__main__":
    sys.exit(main())
