"""
Native solc resolution.

If the requested compiler version is exactly the one named by
``SOLC_VERSION``, the binary at ``SOLC_PATH`` (e.g. one provided by nix) is
used directly. Any other version goes through the default resolution,
which downloads and caches the compiler with py-solc-x.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from cape_build.compiler.models import CompilerRequest, NativeCompilerBuild

logger = logging.getLogger(__name__)

LONG_VERSION_SUFFIX = "-dummy-long-version"


@dataclass(frozen=True)
class SolcOverride:
    """Which solc version the native binary provides, and where it lives."""

    expected_version: str | None = None
    binary_path: str | None = None

    @classmethod
    def from_env(cls) -> "SolcOverride":
        return cls(
            expected_version=os.getenv("SOLC_VERSION") or None,
            binary_path=os.getenv("SOLC_PATH") or None,
        )


def resolve_solc_build(
    request: CompilerRequest,
    run_super: Callable[[], Any],
    override: SolcOverride,
) -> Any:
    """Return a native build for the overridden version, else defer to ``run_super``.

    The native binary is not checked for existence here; a bad ``SOLC_PATH``
    surfaces when the compiler is invoked. Errors raised by ``run_super``
    propagate unchanged.
    """
    if override.expected_version is not None and request.version == override.expected_version:
        return NativeCompilerBuild(
            compiler_path=override.binary_path,
            is_solc_js=False,
            version=request.version,
            # Only recorded in build info, never parsed
            long_version=f"{request.version}{LONG_VERSION_SUFFIX}",
        )

    logger.warning("Using compiler downloaded by py-solc-x for solc %s", request.version)
    return run_super()


def make_solc_build_handler(
    override_factory: Callable[[], SolcOverride] = SolcOverride.from_env,
):
    """Adapt ``resolve_solc_build`` to the extension registry handler signature.

    ``override_factory`` runs on every dispatch so environment changes are
    picked up without restarting.
    """

    def handle_get_solc_build(args: Mapping[str, Any], runtime: Any, run_super: Callable[[], Any]) -> Any:
        return resolve_solc_build(CompilerRequest(version=args["version"]), run_super, override_factory())

    return handle_get_solc_build
