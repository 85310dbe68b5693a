from cape_build.runtime.registry import ExtensionRegistry
from cape_build.runtime.tasks import (
    TASK_ACCOUNTS,
    TASK_COMPILE,
    TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD,
    TASK_NODE_SERVER_CREATED,
    register_defaults,
)

__all__ = [
    "ExtensionRegistry",
    "TASK_ACCOUNTS",
    "TASK_COMPILE",
    "TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD",
    "TASK_NODE_SERVER_CREATED",
    "register_defaults",
]
