"""
Configuration package for cape_build.
"""

from cape_build.config.network import (
    DEFAULT_HD_COUNT,
    DEFAULT_HD_PATH,
    REMOTE_ACCOUNTS,
    HDAccounts,
    NetworkProfile,
    build_networks,
    get_network_profile,
    get_rpc_url,
)

from cape_build.config.settings import (
    DEFAULT_NETWORK,
    DEFAULT_RPC_PORT,
    DEFAULT_SOLC_VERSION,
    GasReporterConfig,
    ProjectConfig,
    ProjectPaths,
    Settings,
    SolidityConfig,
    TypechainConfig,
    load_project_config,
)

__all__ = [
    # Network
    'DEFAULT_HD_COUNT',
    'DEFAULT_HD_PATH',
    'REMOTE_ACCOUNTS',
    'HDAccounts',
    'NetworkProfile',
    'build_networks',
    'get_network_profile',
    'get_rpc_url',

    # Settings
    'DEFAULT_NETWORK',
    'DEFAULT_RPC_PORT',
    'DEFAULT_SOLC_VERSION',
    'GasReporterConfig',
    'ProjectConfig',
    'ProjectPaths',
    'Settings',
    'SolidityConfig',
    'TypechainConfig',
    'load_project_config',
]
