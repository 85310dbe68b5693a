"""
Network profiles for cape_build.

Each profile names an RPC endpoint, a gas policy and where the signing
accounts come from. Profiles are assembled from environment settings once
at configuration-load time and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from cape_build.config.settings import Settings
from cape_build.exceptions import ConfigurationError


# =============================================================================
# ACCOUNT SOURCES
# =============================================================================

DEFAULT_HD_PATH: str = "m/44'/60'/0'/0"
DEFAULT_HD_COUNT: int = 20

# Accounts are managed by the node behind the endpoint (eth_accounts).
REMOTE_ACCOUNTS: str = "remote"


@dataclass(frozen=True)
class HDAccounts:
    """Accounts derived from a BIP-39 mnemonic."""

    mnemonic: str | None
    path: str = DEFAULT_HD_PATH
    count: int = DEFAULT_HD_COUNT
    initial_index: int = 0


AccountSource = Union[HDAccounts, str]


# =============================================================================
# NETWORK PROFILES
# =============================================================================

@dataclass(frozen=True)
class NetworkProfile:
    name: str
    url: str | None = None
    gas_price: int | None = None  # wei
    accounts: AccountSource = REMOTE_ACCOUNTS
    timeout: int | None = None  # milliseconds
    gas: int | None = None
    allow_unlimited_contract_size: bool = False

    @property
    def in_process(self) -> bool:
        return self.url is None


GAS_PRICE_TESTNET: int = 2_000_000_000

# Some deployment transactions need ~31M gas, above the 30M block limit.
IN_PROCESS_GAS_LIMIT: int = 25_000_000

LOCALHOST_TIMEOUT_MS: int = 120_000


def build_networks(settings: Settings | None = None) -> dict[str, NetworkProfile]:
    """Build the named network table from environment settings."""
    if settings is None:
        settings = Settings.from_env()

    return {
        "hardhat": NetworkProfile(
            name="hardhat",
            accounts=HDAccounts(mnemonic=settings.test_mnemonic),
            gas=IN_PROCESS_GAS_LIMIT,
            allow_unlimited_contract_size=True,
        ),
        "rinkeby": NetworkProfile(
            name="rinkeby",
            url=settings.rinkeby_url,
            gas_price=GAS_PRICE_TESTNET,
            accounts=HDAccounts(mnemonic=settings.rinkeby_mnemonic),
        ),
        "goerli": NetworkProfile(
            name="goerli",
            url=settings.goerli_url,
            gas_price=GAS_PRICE_TESTNET,
            accounts=HDAccounts(mnemonic=settings.goerli_mnemonic),
        ),
        "localhost": NetworkProfile(
            name="localhost",
            url=f"http://localhost:{settings.rpc_port}",
            timeout=LOCALHOST_TIMEOUT_MS,
        ),
    }


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_network_profile(name: str, settings: Settings | None = None) -> NetworkProfile:
    """Get the profile for a network.

    Raises:
        ConfigurationError: If the network is not defined.
    """
    networks = build_networks(settings)
    name = name.lower()
    if name not in networks:
        raise ConfigurationError(
            f"Unsupported network: {name}. Supported: {list(networks.keys())}"
        )
    return networks[name]


def get_rpc_url(name: str, settings: Settings | None = None) -> str:
    """Get the RPC endpoint of a network, failing if none is configured."""
    profile = get_network_profile(name, settings)
    if not profile.url:
        raise ConfigurationError(f"Network '{name}' has no RPC URL configured")
    return profile.url
