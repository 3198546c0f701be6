"""Balance aggregation across custodial wallets."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from brale_dashboard.core.models import AggregateResult, WalletBalances

logger = logging.getLogger(__name__)


def parse_amount(value: Any) -> Decimal | None:
    """
    Parse a balance value as a finite Decimal.

    Parameters
    ----------
    value : Any
        Raw value (usually a decimal string)

    Returns
    -------
    Decimal | None
        Parsed amount, or None if missing or not numeric

    """
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


def aggregate(wallets: list[WalletBalances]) -> AggregateResult:
    """
    Sum balances per value type and find the primary wallet.

    Entries without a parsable value are skipped. Only successfully fetched
    entries count; unavailable combinations never contribute.

    Parameters
    ----------
    wallets : list[WalletBalances]
        Wallets with their fetched balances

    Returns
    -------
    AggregateResult
        Totals per value type and the first primary wallet

    """
    totals: dict[str, Decimal] = {}

    for wallet in wallets:
        for entry in wallet.balances:
            amount = parse_amount(entry.balance.value if entry.balance else None)
            if amount is None:
                continue
            totals[entry.value_type] = totals.get(entry.value_type, Decimal("0")) + amount

    primaries = [wallet for wallet in wallets if wallet.address.is_primary]
    if len(primaries) > 1:
        # First in API order wins
        logger.warning(
            "%d wallets are marked primary; using %s",
            len(primaries),
            primaries[0].address.id,
        )

    return AggregateResult(totals=totals, primary=primaries[0] if primaries else None)


def grand_total(totals: dict[str, Decimal]) -> Decimal:
    """Sum the per-value-type totals into one amount."""
    return sum(totals.values(), Decimal("0"))


def ranked_totals(totals: dict[str, Decimal]) -> list[tuple[str, Decimal]]:
    """
    Order per-value-type totals for display.

    Parameters
    ----------
    totals : dict[str, Decimal]
        Summed amount per value type

    Returns
    -------
    list[tuple[str, Decimal]]
        Positive totals, largest first (ties keep value-type order)

    """
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [(value_type, amount) for value_type, amount in ranked if amount > 0]
