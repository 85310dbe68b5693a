"""
Signer provider for network profiles.

HD accounts are derived locally from the profile's mnemonic; remote
accounts are whatever the node behind the endpoint reports.
"""

from __future__ import annotations

from collections.abc import Callable

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from web3 import Web3

from cape_build.config.network import REMOTE_ACCOUNTS, HDAccounts, NetworkProfile
from cape_build.exceptions import ConfigurationError


def derive_account(mnemonic: str, path: str) -> LocalAccount:
    """Derive the account at a BIP-32/44 path from a BIP-39 mnemonic."""
    # eth-account marks HD wallet support as unaudited
    Account.enable_unaudited_hdwallet_features()
    return Account.from_mnemonic(mnemonic, account_path=path)


def derive_hd_accounts(source: HDAccounts) -> list[LocalAccount]:
    if not source.mnemonic:
        raise ConfigurationError("No mnemonic configured for HD account derivation")
    return [
        derive_account(source.mnemonic, f"{source.path}/{i}")
        for i in range(source.initial_index, source.initial_index + source.count)
    ]


def get_signers(
    profile: NetworkProfile,
    web3_factory: Callable[[NetworkProfile], Web3] | None = None,
) -> list[str]:
    """Return the checksum addresses of the profile's accounts, in derivation order."""
    source = profile.accounts
    if isinstance(source, HDAccounts):
        return [to_checksum_address(acct.address) for acct in derive_hd_accounts(source)]

    if source == REMOTE_ACCOUNTS:
        if web3_factory is None:
            if not profile.url:
                raise ConfigurationError(f"Network '{profile.name}' has no RPC URL configured")
            w3 = Web3(Web3.HTTPProvider(profile.url))
        else:
            w3 = web3_factory(profile)
        return [to_checksum_address(addr) for addr in w3.eth.accounts]

    raise ConfigurationError(f"Unsupported account source for network '{profile.name}': {source!r}")
