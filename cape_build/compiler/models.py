"""Value types exchanged by the compiler extension points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CompilerRequest:
    """A request for a solc build of exactly ``version``."""

    version: str


@dataclass(frozen=True)
class CompilerBuild:
    compiler_path: str | None
    version: str
    long_version: str
    is_solc_js: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "compilerPath": self.compiler_path,
            "isSolcJs": self.is_solc_js,
            "version": self.version,
            "longVersion": self.long_version,
        }


@dataclass(frozen=True)
class NativeCompilerBuild(CompilerBuild):
    """A pre-installed solc binary, used as-is without any download."""


@dataclass(frozen=True)
class SolcBuild(CompilerBuild):
    """A solc binary managed (downloaded and cached) by py-solc-x."""
