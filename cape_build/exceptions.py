"""Exception types raised by cape_build."""


class CapeBuildError(Exception):
    """Base class for all cape_build errors."""


class ConfigurationError(CapeBuildError):
    """Raised when the environment or project configuration is invalid."""


class UnknownExtensionError(CapeBuildError):
    """Raised when dispatching an extension point nobody registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown extension point: {name}")


class NoDefaultHandlerError(CapeBuildError):
    """Raised when the bottom handler of an extension point calls run_super()."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No handler below the default for extension point: {name}")


class CompilationError(CapeBuildError):
    """Raised when solc rejects a source file."""
