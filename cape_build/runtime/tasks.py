"""Extension point names and their built-in default handlers."""

from __future__ import annotations

from cape_build.runtime.registry import ExtensionRegistry

TASK_ACCOUNTS = "accounts"
TASK_COMPILE = "compile"
TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD = "compile:solidity:get-solc-build"
TASK_NODE_SERVER_CREATED = "node:server-created"


def _default_get_solc_build(args, runtime, run_super):
    from cape_build.compiler.solc import get_solc_build

    return get_solc_build(args["version"])


def _default_server_created(args, runtime, run_super):
    return None


def _default_compile(args, runtime, run_super):
    from cape_build.compiler.build import compile_project

    return compile_project(runtime, sources=args.get("sources"))


def register_defaults(registry: ExtensionRegistry) -> ExtensionRegistry:
    """Install the built-in handlers every registry starts with."""
    registry.register(
        TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD,
        _default_get_solc_build,
        "Resolves a solc build, downloading it with py-solc-x if needed",
    )
    registry.register(
        TASK_NODE_SERVER_CREATED,
        _default_server_created,
        "Called once the local JSON-RPC server has been created",
    )
    registry.register(TASK_COMPILE, _default_compile, "Compiles the entire project")
    return registry
