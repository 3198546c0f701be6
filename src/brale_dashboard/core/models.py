"""Data models for addresses, balances, and dashboard views."""

from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class AddressType(StrEnum):
    """Address types reported by the API."""

    INTERNAL = "internal"
    EXTERNALLY_OWNED = "externally-owned"


PRIMARY_USAGE = "primary"


class Address(BaseModel):
    """
    Blockchain address (wallet) belonging to an account.

    Attributes
    ----------
    id : str
        Address identifier used in API paths
    type : str
        Address type; only ``internal`` addresses are custodial
    usage : str | None
        Designated usage (e.g. ``primary``)
    transfer_types : list[str]
        Networks over which the address can send and receive value
    description : str | None
        Free-text description
    address : str | None
        On-chain address for display

    """

    id: str
    type: str
    usage: str | None = None
    transfer_types: list[str] = Field(default_factory=list)
    description: str | None = None
    address: str | None = None

    @property
    def is_custodial(self) -> bool:
        """Whether the address is controlled by the service."""
        return self.type == AddressType.INTERNAL

    @property
    def is_primary(self) -> bool:
        """Whether the address carries the primary usage designation."""
        return self.usage == PRIMARY_USAGE


class BalanceQuery(BaseModel):
    """A single (transfer type, value type) balance lookup."""

    transfer_type: str
    value_type: str


class Balance(BaseModel):
    """
    Balance amount as returned by the API.

    Attributes
    ----------
    value : Any
        Decimal string as sent upstream; parsed only during aggregation

    """

    value: Any = None
    currency: str | None = None


class BalanceEntry(BaseModel):
    """
    Successful balance lookup for one combination.

    Attributes
    ----------
    transfer_type : str
        Transfer type the balance was requested for
    value_type : str
        Value type the balance was requested for
    balance : Balance | None
        Reported balance

    """

    transfer_type: str
    value_type: str
    balance: Balance | None = None


class UnavailableBalance(BaseModel):
    """
    Balance lookup that failed; its amount is unknown, not zero.

    Attributes
    ----------
    transfer_type : str
        Transfer type that was requested
    value_type : str
        Value type that was requested
    status_code : int | None
        HTTP status, or None for transport and decoding failures
    reason : str
        Short failure description

    """

    transfer_type: str
    value_type: str
    status_code: int | None = None
    reason: str = ""


class WalletBalances(BaseModel):
    """Custodial address together with its fetched balances."""

    address: Address
    balances: list[BalanceEntry] = Field(default_factory=list)
    unavailable: list[UnavailableBalance] = Field(default_factory=list)


class AggregateResult(BaseModel):
    """
    Totals across all wallets.

    Attributes
    ----------
    totals : dict[str, Decimal]
        Summed amount per value type
    primary : WalletBalances | None
        First wallet designated primary, if any

    """

    totals: dict[str, Decimal] = Field(default_factory=dict)
    primary: WalletBalances | None = None


class DashboardView(BaseModel):
    """
    Result of one dashboard activation.

    Attributes
    ----------
    activation : int
        Activation number this view was produced for
    account_id : str | None
        Resolved account identifier (None in fallback mode)
    used_fallback : bool
        Whether wallets came from the unscoped global endpoint
    wallets : list[WalletBalances]
        Custodial wallets in API order
    totals : dict[str, Decimal]
        Summed amount per value type
    primary : WalletBalances | None
        Primary wallet, if any

    """

    activation: int
    account_id: str | None = None
    used_fallback: bool = False
    wallets: list[WalletBalances] = Field(default_factory=list)
    totals: dict[str, Decimal] = Field(default_factory=dict)
    primary: WalletBalances | None = None
