"""Exceptions raised by the Brale API clients."""


class BraleError(Exception):
    """Base class for Brale client errors."""


class AuthenticationError(BraleError):
    """
    Raised when a bearer token cannot be obtained.

    Parameters
    ----------
    message : str
        Error description
    status_code : int | None
        HTTP status of the token response, if one was received
    reason : str | None
        HTTP reason phrase of the token response

    """

    def __init__(self, message: str, status_code: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class FetchError(BraleError):
    """Raised when a resource call returns a non-success status or fails in transport."""

    def __init__(self, message: str, status_code: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class ResponseFormatError(BraleError):
    """Raised when a response body has none of the accepted shapes."""


class NoCustodialWalletsError(BraleError):
    """
    Raised when an address list holds no internal (custodial) addresses.

    Parameters
    ----------
    total : int
        Number of addresses returned before filtering
    types : list[str]
        Distinct address types seen, in first-seen order
    account_id : str | None
        Account the list was scoped to, or None for the global list

    """

    def __init__(self, total: int, types: list[str], account_id: str | None = None) -> None:
        self.total = total
        self.types = types
        self.account_id = account_id

        scope = f"account {account_id}" if account_id else "the global address list"
        seen = ", ".join(types) if types else "none"
        msg = (
            f"No custodial wallets found for {scope}. "
            f"Found {total} total addresses; address types found: {seen}"
        )
        super().__init__(msg)
