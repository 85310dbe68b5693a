from cape_build.accounts.signers import derive_account, derive_hd_accounts, get_signers

__all__ = ["derive_account", "derive_hd_accounts", "get_signers"]
