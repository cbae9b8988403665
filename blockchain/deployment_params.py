"""
Deployment Parameters
Constructor arguments for the arbitrage contract, collected from the environment
"""

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

REQUIRED_ENV_VARS = [
    'UNI_V2_ROUTER',
    'UNI_V3_ROUTER',
    'UNI_V3_QUOTER_V2',
    'WRAPPED_NATIVE',
    'SUPPORTED_TOKENS'
]

MISSING_CONFIG_HEADER = "❌ Missing constructor env vars:"
MISSING_CONFIG_LISTING = (
    "UNI_V2_ROUTER, UNI_V3_ROUTER, UNI_V3_QUOTER_V2, WRAPPED_NATIVE, "
    "SUPPORTED_TOKENS (comma-separated)"
)


@dataclass(frozen=True)
class DeploymentParameters:
    """
    Ordered constructor arguments for PureTrustlessArbitrageBotZetaQuoter
    """
    v2_router: str
    v3_router: str
    v3_quoter: str
    wrapped_native: str
    supported_tokens: Tuple[str, ...]

    def as_constructor_args(self) -> Tuple:
        """Arguments in constructor order"""
        return (
            self.v2_router,
            self.v3_router,
            self.v3_quoter,
            self.wrapped_native,
            list(self.supported_tokens)
        )


def parse_supported_tokens(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated token list

    Empty segments are dropped and order is preserved, so
    "0xA,,0xB," becomes ["0xA", "0xB"].
    """
    if not value:
        return []

    tokens = []
    for segment in value.split(','):
        segment = segment.strip()
        if segment:
            tokens.append(segment)

    return tokens


def collect_parameters(
    environ: Optional[Mapping[str, str]] = None
) -> Tuple[Optional[DeploymentParameters], List[str]]:
    """
    Collect and validate constructor arguments

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        (parameters, missing) - parameters is None when any variable is missing
    """
    if environ is None:
        environ = os.environ

    v2_router = (environ.get('UNI_V2_ROUTER') or '').strip()
    v3_router = (environ.get('UNI_V3_ROUTER') or '').strip()
    v3_quoter = (environ.get('UNI_V3_QUOTER_V2') or '').strip()
    wrapped_native = (environ.get('WRAPPED_NATIVE') or '').strip()
    supported_tokens = parse_supported_tokens(environ.get('SUPPORTED_TOKENS'))

    values = [v2_router, v3_router, v3_quoter, wrapped_native, supported_tokens]
    missing = [name for name, value in zip(REQUIRED_ENV_VARS, values) if not value]

    if missing:
        return None, missing

    params = DeploymentParameters(
        v2_router=v2_router,
        v3_router=v3_router,
        v3_quoter=v3_quoter,
        wrapped_native=wrapped_native,
        supported_tokens=tuple(supported_tokens)
    )

    return params, []


def format_missing_configuration() -> str:
    """Fixed console listing shown when constructor variables are missing"""
    return f"{MISSING_CONFIG_HEADER}\n{MISSING_CONFIG_LISTING}"
