"""Clients for the Brale auth and resource APIs."""

from brale_dashboard.integrations.auth import TokenProvider
from brale_dashboard.integrations.brale import BraleClient
from brale_dashboard.integrations.errors import (
    AuthenticationError,
    BraleError,
    FetchError,
    NoCustodialWalletsError,
    ResponseFormatError,
)

__all__ = [
    "AuthenticationError",
    "BraleClient",
    "BraleError",
    "FetchError",
    "NoCustodialWalletsError",
    "ResponseFormatError",
    "TokenProvider",
]
