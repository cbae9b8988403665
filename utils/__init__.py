"""
Utilities Package
Network resolution for deployment targets
"""

from .network_resolver import NetworkResolver, NetworkConfig

__all__ = ['NetworkResolver', 'NetworkConfig']
