"""
Project hooks installed on top of the built-in handlers.
"""

from cape_build.compiler.resolver import make_solc_build_handler
from cape_build.hooks.accounts import handle_accounts, list_accounts
from cape_build.hooks.server import KEEP_ALIVE_TIMEOUT_MS, handle_server_created, on_server_created
from cape_build.runtime.registry import ExtensionRegistry
from cape_build.runtime.tasks import (
    TASK_ACCOUNTS,
    TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD,
    TASK_NODE_SERVER_CREATED,
)

__all__ = [
    "KEEP_ALIVE_TIMEOUT_MS",
    "list_accounts",
    "on_server_created",
    "register_hooks",
]


def register_hooks(registry: ExtensionRegistry) -> ExtensionRegistry:
    registry.register(TASK_ACCOUNTS, handle_accounts, "Prints the list of accounts")
    registry.register(TASK_NODE_SERVER_CREATED, handle_server_created)
    # Use the native compiler (e.g. from nix) when its version matches
    registry.register(TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD, make_solc_build_handler())
    return registry
