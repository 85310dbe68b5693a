"""Tests for settings and network profiles."""

import pytest

from cape_build.config.network import (
    GAS_PRICE_TESTNET,
    REMOTE_ACCOUNTS,
    HDAccounts,
    build_networks,
    get_network_profile,
    get_rpc_url,
)
from cape_build.config.settings import Settings, load_project_config
from cape_build.exceptions import ConfigurationError


def test_settings_defaults():
    settings = Settings.from_env()

    assert settings.solc_version is None
    assert settings.solc_path is None
    assert settings.optimizer_runs == 200
    assert settings.rpc_port == 8545
    assert settings.report_gas is False
    assert settings.log_level == "INFO"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("SOLC_VERSION", "0.8.4")
    monkeypatch.setenv("SOLC_PATH", "/usr/bin/solc")
    monkeypatch.setenv("SOLC_OPTIMIZER_RUNS", "1000")
    monkeypatch.setenv("RPC_PORT", "9545")
    monkeypatch.setenv("REPORT_GAS", "1")
    monkeypatch.setenv("CAPE_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.solc_version == "0.8.4"
    assert settings.solc_path == "/usr/bin/solc"
    assert settings.optimizer_runs == 1000
    assert settings.rpc_port == 9545
    assert settings.report_gas is True
    assert settings.log_level == "DEBUG"


def test_settings_rejects_non_integer_port(monkeypatch):
    monkeypatch.setenv("RPC_PORT", "eighty")

    with pytest.raises(ConfigurationError, match="RPC_PORT"):
        Settings.from_env()


def test_network_table():
    networks = build_networks(Settings(
        rpc_port=9000,
        test_mnemonic="m",
        rinkeby_url="https://rinkeby.example",
        goerli_url="https://goerli.example",
    ))

    assert set(networks) == {"hardhat", "rinkeby", "goerli", "localhost"}

    hardhat = networks["hardhat"]
    assert hardhat.in_process
    assert hardhat.gas == 25_000_000
    assert hardhat.allow_unlimited_contract_size
    assert hardhat.accounts == HDAccounts(mnemonic="m")

    assert networks["rinkeby"].url == "https://rinkeby.example"
    assert networks["rinkeby"].gas_price == GAS_PRICE_TESTNET == 2_000_000_000
    assert networks["goerli"].gas_price == GAS_PRICE_TESTNET

    localhost = networks["localhost"]
    assert localhost.url == "http://localhost:9000"
    assert localhost.timeout == 120_000
    assert localhost.accounts == REMOTE_ACCOUNTS


def test_get_network_profile_unknown():
    with pytest.raises(ConfigurationError, match="Unsupported network"):
        get_network_profile("mainnet", Settings())


def test_get_rpc_url_requires_url():
    assert get_rpc_url("localhost", Settings()) == "http://localhost:8545"
    with pytest.raises(ConfigurationError):
        get_rpc_url("rinkeby", Settings())


def test_project_config(tmp_path):
    config = load_project_config(Settings(solc_version="0.8.4", optimizer_runs=50, report_gas=True), root=tmp_path)

    assert config.default_network == "localhost"
    assert config.named_accounts == {"deployer": 0}
    assert config.solidity.version == "0.8.4"
    assert config.solidity.optimizer_enabled is True
    assert config.solidity.optimizer_runs == 50
    assert config.gas_reporter.enabled is True
    assert config.gas_reporter.currency == "USD"
    assert config.test_timeout_ms == 300_000
    assert config.typechain.target == "ethers-v5"
    assert config.paths.sources_dir == tmp_path / "contracts"
    assert config.network().name == "localhost"


def test_project_config_default_solc_version():
    assert load_project_config(Settings()).solidity.version == "0.8.0"
