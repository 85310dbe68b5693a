"""The ``accounts`` task: prints the configured signing accounts."""

from __future__ import annotations

from collections.abc import Callable, Iterable


def list_accounts(
    signer_provider: Callable[[], Iterable[str]],
    echo: Callable[[str], None] = print,
) -> list[str]:
    """Print each signer address in the order the provider yields them."""
    addresses = []
    for address in signer_provider():
        echo(address)
        addresses.append(address)
    return addresses


def handle_accounts(args, runtime, run_super):
    return list_accounts(runtime.get_signers, echo=args.get("echo", print))
