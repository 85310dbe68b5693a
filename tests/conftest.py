"""Shared fixtures for cape_build tests."""

import logging
import os

import pytest

from cape_build.config.settings import Settings, load_project_config
from cape_build.runtime.environment import Runtime
from cape_build.runtime.registry import ExtensionRegistry
from cape_build.runtime.tasks import register_defaults

# Hardhat/anvil default development mnemonic
TEST_MNEMONIC = "test test test test test test test test test test test junk"

ENV_VARS = [
    "SOLC_VERSION",
    "SOLC_PATH",
    "SOLC_OPTIMIZER_RUNS",
    "RPC_PORT",
    "TEST_MNEMONIC",
    "RINKEBY_URL",
    "RINKEBY_MNEMONIC",
    "GOERLI_URL",
    "GOERLI_MNEMONIC",
    "REPORT_GAS",
    "CAPE_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test without any cape_build environment variables set."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    # load_dotenv() writes to os.environ behind monkeypatch's back
    for name in ENV_VARS:
        os.environ.pop(name, None)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches so they don't outlive captured stdout."""
    yield
    logger = logging.getLogger("cape_build")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings():
    return Settings(test_mnemonic=TEST_MNEMONIC, solc_version="0.8.0")


@pytest.fixture
def project_config(settings, tmp_path):
    return load_project_config(settings, root=tmp_path)


@pytest.fixture
def registry():
    return register_defaults(ExtensionRegistry())


@pytest.fixture
def runtime(project_config, registry):
    return Runtime(project_config, registry=registry, network="hardhat")
