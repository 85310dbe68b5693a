"""
Environment settings and project configuration for cape_build.

Values come from the process environment (optionally seeded from a .env
file by the CLI) and are read each time ``Settings.from_env`` is called.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cape_build.exceptions import ConfigurationError


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_SOLC_VERSION: str = "0.8.0"
DEFAULT_OPTIMIZER_RUNS: int = 200
DEFAULT_RPC_PORT: int = 8545
DEFAULT_NETWORK: str = "localhost"

# Long-running integration tests pause between blocks; keep this generous.
TEST_TIMEOUT_MS: int = 300_000


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    return value if value else None


# =============================================================================
# ENVIRONMENT SETTINGS
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """Snapshot of the environment variables cape_build understands."""

    solc_version: str | None = None
    solc_path: str | None = None
    optimizer_runs: int = DEFAULT_OPTIMIZER_RUNS
    rpc_port: int = DEFAULT_RPC_PORT
    test_mnemonic: str | None = None
    rinkeby_url: str | None = None
    rinkeby_mnemonic: str | None = None
    goerli_url: str | None = None
    goerli_mnemonic: str | None = None
    report_gas: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            solc_version=_env_str("SOLC_VERSION"),
            solc_path=_env_str("SOLC_PATH"),
            optimizer_runs=_env_int("SOLC_OPTIMIZER_RUNS", DEFAULT_OPTIMIZER_RUNS),
            rpc_port=_env_int("RPC_PORT", DEFAULT_RPC_PORT),
            test_mnemonic=_env_str("TEST_MNEMONIC"),
            rinkeby_url=_env_str("RINKEBY_URL"),
            rinkeby_mnemonic=_env_str("RINKEBY_MNEMONIC"),
            goerli_url=_env_str("GOERLI_URL"),
            goerli_mnemonic=_env_str("GOERLI_MNEMONIC"),
            report_gas=bool(os.getenv("REPORT_GAS")),
            log_level=os.getenv("CAPE_LOG_LEVEL", "INFO").upper(),
        )


# =============================================================================
# PROJECT CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class SolidityConfig:
    version: str = DEFAULT_SOLC_VERSION
    optimizer_enabled: bool = True
    optimizer_runs: int = DEFAULT_OPTIMIZER_RUNS


@dataclass(frozen=True)
class ProjectPaths:
    root: Path = field(default_factory=Path.cwd)
    sources: str = "contracts"
    artifacts: str = "artifacts"

    @property
    def sources_dir(self) -> Path:
        return self.root / self.sources

    @property
    def artifacts_dir(self) -> Path:
        return self.root / self.artifacts


@dataclass(frozen=True)
class GasReporterConfig:
    enabled: bool = False
    show_method_sig: bool = True
    currency: str = "USD"
    gas_price: int = 205
    only_called_methods: bool = True


@dataclass(frozen=True)
class TypechainConfig:
    target: str = "ethers-v5"
    # Generate full-signature overloads like deposit(uint256) even when unambiguous
    always_generate_overloads: bool = False


@dataclass(frozen=True)
class ProjectConfig:
    """Everything a task handler may need to know about the project."""

    networks: dict[str, Any]
    default_network: str = DEFAULT_NETWORK
    named_accounts: dict[str, int] = field(default_factory=lambda: {"deployer": 0})
    solidity: SolidityConfig = field(default_factory=SolidityConfig)
    paths: ProjectPaths = field(default_factory=ProjectPaths)
    gas_reporter: GasReporterConfig = field(default_factory=GasReporterConfig)
    rpc_port: int = DEFAULT_RPC_PORT
    test_timeout_ms: int = TEST_TIMEOUT_MS
    typechain: TypechainConfig = field(default_factory=TypechainConfig)

    def network(self, name: str | None = None):
        """Return the NetworkProfile for ``name`` (default network if None)."""
        name = name or self.default_network
        if name not in self.networks:
            raise ConfigurationError(
                f"Unsupported network: {name}. Supported: {list(self.networks.keys())}"
            )
        return self.networks[name]


def load_project_config(
    settings: Settings | None = None,
    root: Path | None = None,
) -> ProjectConfig:
    """Build the project configuration from environment settings."""
    from cape_build.config.network import build_networks

    if settings is None:
        settings = Settings.from_env()

    return ProjectConfig(
        networks=build_networks(settings),
        solidity=SolidityConfig(
            version=settings.solc_version or DEFAULT_SOLC_VERSION,
            optimizer_runs=settings.optimizer_runs,
        ),
        paths=ProjectPaths(root=root) if root is not None else ProjectPaths(),
        gas_reporter=GasReporterConfig(enabled=settings.report_gas),
        rpc_port=settings.rpc_port,
    )
