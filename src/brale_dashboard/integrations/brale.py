"""Brale resource API client: account discovery, wallet listing, and balances."""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import httpx
from pydantic import ValidationError

from brale_dashboard.core.models import (
    Address,
    AddressType,
    BalanceEntry,
    BalanceQuery,
    UnavailableBalance,
    WalletBalances,
)
from brale_dashboard.core.session import Session
from brale_dashboard.data import get_value_types
from brale_dashboard.integrations.decoders import (
    address_type,
    decode_account_id,
    decode_address_list,
    decode_me_account_id,
    parse_address,
)
from brale_dashboard.integrations.errors import (
    FetchError,
    NoCustodialWalletsError,
    ResponseFormatError,
)

logger = logging.getLogger(__name__)


class BraleClient:
    """
    Client for the Brale resource API.

    Every call takes an explicit Session carrying the bearer token.

    Parameters
    ----------
    api_url : str
        Base URL of the resource host
    timeout : float
        Request timeout in seconds
    max_workers : int
        Thread pool size for balance lookups
    value_types : list[str] | None
        Value-type catalog (defaults to the bundled catalog)
    transport : httpx.BaseTransport | None
        Custom transport (used by tests)

    """

    def __init__(
        self,
        api_url: str = "https://api.brale.xyz",
        timeout: float = 30.0,
        max_workers: int = 8,
        value_types: list[str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.max_workers = max(1, max_workers)
        self.value_types = list(value_types) if value_types is not None else get_value_types()
        self.client = httpx.Client(timeout=timeout, transport=transport)

    def _get(self, session: Session, path: str, params: dict[str, str] | None = None) -> httpx.Response:
        return self.client.get(f"{self.api_url}{path}", params=params, headers=session.auth_headers())

    def _probe(self, session: Session, path: str) -> Any | None:
        """GET a path and return its JSON body, or None on any failure."""
        try:
            response = self._get(session, path)
        except httpx.HTTPError as e:
            logger.debug("Probe %s failed: %s", path, e)
            return None

        if not response.is_success:
            logger.debug("Probe %s returned %d", path, response.status_code)
            return None

        try:
            return response.json()
        except ValueError:
            logger.debug("Probe %s returned a non-JSON body", path)
            return None

    def resolve_account_id(self, session: Session) -> str | None:
        """
        Discover the account identifier for the session's token.

        Tries ``GET /accounts`` and then ``GET /me``. Probe failures are not
        errors; they just yield nothing.

        Parameters
        ----------
        session : Session
            Session carrying the bearer token

        Returns
        -------
        str | None
            Account identifier, or None if no probe yielded one

        """
        body = self._probe(session, "/accounts")
        if body is not None:
            match = decode_account_id(body)
            if match:
                logger.info("Using account ID %s from /accounts (%s)", match.account_id, match.shape)
                return match.account_id
            logger.debug("No account ID in /accounts response: %r", body)

        body = self._probe(session, "/me")
        if body is not None:
            match = decode_me_account_id(body)
            if match:
                logger.info("Using account ID %s from /me", match.account_id)
                return match.account_id

        logger.info("Could not determine account ID")
        return None

    def list_wallets(self, session: Session, account_id: str | None) -> tuple[list[Address], bool]:
        """
        List the custodial addresses of an account.

        Without an account ID, the unscoped ``GET /addresses`` endpoint is
        used instead.

        Parameters
        ----------
        session : Session
            Session carrying the bearer token
        account_id : str | None
            Account identifier, or None for the global fallback

        Returns
        -------
        tuple[list[Address], bool]
            Internal addresses in API order, and whether the fallback was used

        Raises
        ------
        FetchError
            If the request fails or returns a non-success status
        ResponseFormatError
            If the body has an unexpected shape
        NoCustodialWalletsError
            If no address is of type ``internal``

        """
        used_fallback = account_id is None
        path = "/addresses" if used_fallback else f"/accounts/{account_id}/addresses"

        try:
            response = self._get(session, path)
        except httpx.HTTPError as e:
            msg = f"Failed to fetch addresses: {e}"
            raise FetchError(msg) from e

        if not response.is_success:
            msg = f"Failed to fetch addresses: {response.status_code} {response.reason_phrase}"
            raise FetchError(msg, status_code=response.status_code, reason=response.reason_phrase)

        try:
            body = response.json()
        except ValueError as e:
            msg = "Invalid response format from addresses API"
            raise ResponseFormatError(msg) from e

        items = decode_address_list(body).items
        type_counts = Counter(address_type(item) or "unknown" for item in items)
        logger.debug("Address type counts for %s: %s", path, dict(type_counts))

        custodial = [
            parse_address(item) for item in items if address_type(item) == AddressType.INTERNAL
        ]
        logger.info("Found %d custodial addresses out of %d total", len(custodial), len(items))

        if not custodial:
            raise NoCustodialWalletsError(len(items), list(type_counts), account_id)

        return custodial, used_fallback

    def fetch_balances(self, session: Session, account_id: str, address: Address) -> WalletBalances:
        """
        Fetch balances of an address for every transfer type and value type.

        Each combination is requested exactly once. Failed combinations are
        logged and recorded as unavailable; they never abort the batch.

        Parameters
        ----------
        session : Session
            Session carrying the bearer token
        account_id : str
            Account identifier
        address : Address
            Custodial address

        Returns
        -------
        WalletBalances
            Address with successful entries and unavailable combinations,
            both in transfer-type-major catalog order

        """
        queries = [
            BalanceQuery(transfer_type=transfer_type, value_type=value_type)
            for transfer_type in address.transfer_types
            for value_type in self.value_types
        ]

        result = WalletBalances(address=address)
        if not queries:
            return result

        with ThreadPoolExecutor(max_workers=min(len(queries), self.max_workers)) as executor:
            outcomes = list(
                executor.map(lambda query: self._fetch_balance(session, account_id, address.id, query), queries)
            )

        for outcome in outcomes:
            if isinstance(outcome, BalanceEntry):
                result.balances.append(outcome)
            else:
                result.unavailable.append(outcome)

        logger.info(
            "Fetched %d balances for address %s (%d unavailable)",
            len(result.balances),
            address.id,
            len(result.unavailable),
        )
        return result

    def _fetch_balance(
        self,
        session: Session,
        account_id: str,
        address_id: str,
        query: BalanceQuery,
    ) -> BalanceEntry | UnavailableBalance:
        """
        Fetch one balance combination.

        Parameters
        ----------
        session : Session
            Session carrying the bearer token
        account_id : str
            Account identifier
        address_id : str
            Address identifier
        query : BalanceQuery
            Combination to fetch

        Returns
        -------
        BalanceEntry | UnavailableBalance
            Entry on success, otherwise the failure record

        """
        path = f"/accounts/{account_id}/addresses/{address_id}/balance"
        params = {"transfer_type": query.transfer_type, "value_type": query.value_type}

        try:
            response = self._get(session, path, params=params)
        except httpx.HTTPError as e:
            logger.debug(
                "Balance fetch failed for %s on %s/%s: %s",
                address_id,
                query.transfer_type,
                query.value_type,
                e,
            )
            return UnavailableBalance(**params, reason=str(e) or type(e).__name__)

        if not response.is_success:
            logger.debug(
                "Balance fetch failed for %s on %s/%s: %d",
                address_id,
                query.transfer_type,
                query.value_type,
                response.status_code,
            )
            return UnavailableBalance(**params, status_code=response.status_code, reason=response.reason_phrase)

        try:
            body = response.json()
        except ValueError:
            return UnavailableBalance(**params, status_code=response.status_code, reason="non-JSON body")

        if not isinstance(body, dict):
            return UnavailableBalance(**params, status_code=response.status_code, reason="unexpected body")

        try:
            # The requested pair always wins over whatever the body reports
            return BalanceEntry.model_validate({**body, **params})
        except ValidationError:
            return UnavailableBalance(**params, status_code=response.status_code, reason="malformed balance")

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "BraleClient":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: object | None,
    ) -> None:
        """Context manager exit."""
        self.close()
