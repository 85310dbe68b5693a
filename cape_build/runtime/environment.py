"""
Runtime environment handed to every extension handler.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from web3 import Web3

from cape_build.accounts.signers import get_signers
from cape_build.config.network import NetworkProfile
from cape_build.config.settings import ProjectConfig, load_project_config
from cape_build.exceptions import ConfigurationError
from cape_build.runtime.registry import ExtensionRegistry
from cape_build.runtime.tasks import register_defaults

logger = logging.getLogger(__name__)


def _http_web3(profile: NetworkProfile) -> Web3:
    if not profile.url:
        raise ConfigurationError(f"Network '{profile.name}' has no RPC URL configured")
    request_kwargs: dict[str, Any] = {}
    if profile.timeout:
        request_kwargs["timeout"] = profile.timeout / 1000
    return Web3(Web3.HTTPProvider(profile.url, request_kwargs=request_kwargs))


class Runtime:
    """Project configuration, selected network and extension registry."""

    def __init__(
        self,
        config: ProjectConfig,
        registry: ExtensionRegistry | None = None,
        network: str | None = None,
        web3_factory: Callable[[NetworkProfile], Web3] = _http_web3,
    ):
        self.config = config
        self.registry = registry if registry is not None else register_defaults(ExtensionRegistry())
        self.network: NetworkProfile = config.network(network)
        self._web3_factory = web3_factory
        self._w3: Web3 | None = None

    @property
    def w3(self) -> Web3:
        if self._w3 is None:
            self._w3 = self._web3_factory(self.network)
        return self._w3

    def get_signers(self) -> list[str]:
        """Addresses of the accounts configured for the selected network."""
        return get_signers(self.network, web3_factory=lambda _profile: self.w3)

    def run(self, name: str, **args: Any) -> Any:
        logger.debug("Running %s on network %s", name, self.network.name)
        return self.registry.run(name, self, **args)


def create_runtime(network: str | None = None, config: ProjectConfig | None = None) -> Runtime:
    """Build a runtime with the default handlers and the project hooks installed."""
    from cape_build.hooks import register_hooks

    if config is None:
        config = load_project_config()
    registry = register_defaults(ExtensionRegistry())
    register_hooks(registry)
    return Runtime(config, registry=registry, network=network)
