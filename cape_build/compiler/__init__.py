from cape_build.compiler.models import (
    CompilerBuild,
    CompilerRequest,
    NativeCompilerBuild,
    SolcBuild,
)
from cape_build.compiler.resolver import (
    SolcOverride,
    make_solc_build_handler,
    resolve_solc_build,
)

__all__ = [
    "CompilerBuild",
    "CompilerRequest",
    "NativeCompilerBuild",
    "SolcBuild",
    "SolcOverride",
    "make_solc_build_handler",
    "resolve_solc_build",
]
