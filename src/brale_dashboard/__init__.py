"""Terminal dashboard for Brale custodial wallets and stablecoin balances."""

__version__ = "0.1.0"
