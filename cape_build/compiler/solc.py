"""
Default solc acquisition through py-solc-x.

Compilers are downloaded once into the py-solc-x cache and reused on
later builds.
"""

from __future__ import annotations

import logging
import re
import subprocess

import solcx
from solcx.install import get_executable

from cape_build.compiler.models import SolcBuild

logger = logging.getLogger(__name__)

_VERSION_LINE = re.compile(r"Version:\s*(\S+)")


def installed_versions() -> list[str]:
    return [str(v) for v in solcx.get_installed_solc_versions()]


def read_long_version(solc_binary: str, default: str) -> str:
    """Return the full ``solc --version`` string, e.g. 0.8.19+commit.7dd6d404.Linux.g++."""
    result = subprocess.run(
        [solc_binary, "--version"],
        capture_output=True,
        text=True,
        check=True,
    )
    match = _VERSION_LINE.search(result.stdout)
    if not match:
        logger.debug("Could not parse solc --version output: %r", result.stdout)
        return default
    return match.group(1)


def get_solc_build(version: str, install: bool = True) -> SolcBuild:
    """Return the cached solc build for ``version``, installing it first if needed.

    Raises whatever py-solc-x raises when the download or install fails.
    """
    if version not in installed_versions():
        if not install:
            raise solcx.exceptions.SolcNotInstalled(f"solc {version} is not installed")
        logger.info("Installing solc %s...", version)
        solcx.install_solc(version)

    compiler_path = str(get_executable(version))
    return SolcBuild(
        compiler_path=compiler_path,
        is_solc_js=False,
        version=version,
        long_version=read_long_version(compiler_path, default=version),
    )
