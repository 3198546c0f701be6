"""Dashboard pipeline: account discovery, wallet listing, balances, aggregation."""

import logging
from typing import Any

from brale_dashboard.core.aggregator import aggregate
from brale_dashboard.core.models import DashboardView, WalletBalances
from brale_dashboard.core.session import Session
from brale_dashboard.integrations.errors import AuthenticationError

logger = logging.getLogger(__name__)


class WalletDashboard:
    """
    Orchestrates one dashboard activation.

    Workflow:
    1. Resolve the account ID (``/accounts``, then ``/me``)
    2. List custodial wallets (account-scoped, or the global fallback)
    3. Fetch balances for every wallet (account-scoped mode only)
    4. Aggregate totals and pick the primary wallet

    Parameters
    ----------
    client : Any
        Resource API client (``BraleClient``)

    """

    def __init__(self, client: Any) -> None:
        self.client = client

    def load(
        self,
        session: Session,
        progress: Any | None = None,
        task_id: Any | None = None,
    ) -> DashboardView:
        """
        Run the full pipeline for the session's token.

        The resulting view is published to the session only if no newer
        activation started meanwhile; it is returned either way.

        Parameters
        ----------
        session : Session
            Session carrying the bearer token
        progress : Any | None
            Rich progress bar instance (optional)
        task_id : Any | None
            Task ID for progress updates (optional)

        Returns
        -------
        DashboardView
            Wallets, totals, and primary wallet

        Raises
        ------
        AuthenticationError
            If the session has no token
        FetchError, ResponseFormatError, NoCustodialWalletsError
            Propagated from wallet listing

        """
        if not session.token:
            raise AuthenticationError("not authenticated")

        activation = session.begin_activation()

        self._update(progress, task_id, "Resolving account...", 10)
        account_id = self.client.resolve_account_id(session)

        self._update(progress, task_id, "Listing wallets...", 30)
        addresses, used_fallback = self.client.list_wallets(session, account_id)

        if account_id is None:
            # The balance endpoint is account-scoped; nothing to query without an ID
            logger.info("Fallback mode: skipping balance fetch for %d wallets", len(addresses))
            wallets = [WalletBalances(address=address) for address in addresses]
        else:
            wallets = []
            for i, address in enumerate(addresses):
                percent = 30 + (60 * i // len(addresses))
                self._update(progress, task_id, f"Fetching balances for {address.id}...", percent)
                wallets.append(self.client.fetch_balances(session, account_id, address))

        self._update(progress, task_id, "Aggregating balances...", 95)
        result = aggregate(wallets)

        view = DashboardView(
            activation=activation,
            account_id=account_id,
            used_fallback=used_fallback,
            wallets=wallets,
            totals=result.totals,
            primary=result.primary,
        )

        if not session.publish(view):
            logger.info("Discarding results of superseded activation %d", activation)

        self._update(progress, task_id, "✓ Dashboard loaded", 100)
        return view

    @staticmethod
    def _update(progress: Any | None, task_id: Any | None, description: str, completed: int) -> None:
        if progress is not None and task_id is not None:
            progress.update(task_id, description=description, completed=completed)
