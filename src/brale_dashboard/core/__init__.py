"""Core functionality including models, session, aggregation, and the dashboard pipeline."""

from brale_dashboard.core.aggregator import aggregate, grand_total, parse_amount, ranked_totals
from brale_dashboard.core.dashboard import WalletDashboard
from brale_dashboard.core.models import (
    Address,
    AddressType,
    AggregateResult,
    Balance,
    BalanceEntry,
    BalanceQuery,
    DashboardView,
    UnavailableBalance,
    WalletBalances,
)
from brale_dashboard.core.session import Session
from brale_dashboard.core.token_store import TokenStore

__all__ = [
    "Address",
    "AddressType",
    "AggregateResult",
    "Balance",
    "BalanceEntry",
    "BalanceQuery",
    "DashboardView",
    "Session",
    "TokenStore",
    "UnavailableBalance",
    "WalletBalances",
    "WalletDashboard",
    "aggregate",
    "grand_total",
    "parse_amount",
    "ranked_totals",
]
