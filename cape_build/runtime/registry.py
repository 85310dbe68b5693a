"""
Named extension points with continuation-passing overrides.

Handlers registered under the same name form a stack. Dispatch calls the
most recently registered handler, which may delegate to the one below it
through ``run_super``::

    def handler(args, runtime, run_super):
        if args["version"] == "0.8.0":
            return my_build
        return run_super()

    registry.register("compile:solidity:get-solc-build", handler)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from cape_build.exceptions import NoDefaultHandlerError, UnknownExtensionError

logger = logging.getLogger(__name__)

RunSuper = Callable[[], Any]
Handler = Callable[[Mapping[str, Any], Any, RunSuper], Any]


@dataclass(frozen=True)
class _Registration:
    handler: Handler
    description: str | None


class ExtensionRegistry:
    """Registry of named extension points."""

    def __init__(self) -> None:
        self._points: dict[str, list[_Registration]] = {}

    def register(self, name: str, handler: Handler, description: str | None = None) -> Handler:
        """Stack ``handler`` on top of any handler already registered for ``name``."""
        self._points.setdefault(name, []).append(_Registration(handler, description))
        logger.debug("Registered handler %s for %s", getattr(handler, "__name__", handler), name)
        return handler

    def __contains__(self, name: str) -> bool:
        return name in self._points

    def names(self) -> list[str]:
        return sorted(self._points)

    def describe(self, name: str) -> str | None:
        """Return the most recent non-empty description for ``name``."""
        for registration in reversed(self._stack(name)):
            if registration.description:
                return registration.description
        return None

    def run(self, name: str, runtime: Any = None, **args: Any) -> Any:
        """Dispatch ``name`` to its top handler and return the result."""
        stack = self._stack(name)
        call_args = dict(args)

        def call(level: int) -> Any:
            if level < 0:
                raise NoDefaultHandlerError(name)
            return stack[level].handler(call_args, runtime, lambda: call(level - 1))

        return call(len(stack) - 1)

    def _stack(self, name: str) -> list[_Registration]:
        try:
            return self._points[name]
        except KeyError:
            raise UnknownExtensionError(name) from None
