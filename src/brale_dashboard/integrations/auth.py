"""OAuth2 client-credentials token provider for the Brale auth host."""

import logging

import httpx

from brale_dashboard.integrations.errors import AuthenticationError

logger = logging.getLogger(__name__)


class TokenProvider:
    """
    Exchanges client credentials for a bearer token.

    Parameters
    ----------
    auth_url : str
        Base URL of the auth host
    timeout : float
        Request timeout in seconds
    transport : httpx.BaseTransport | None
        Custom transport (used by tests)

    """

    TOKEN_PATH = "/oauth2/token"

    def __init__(
        self,
        auth_url: str = "https://auth.brale.xyz",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.auth_url = auth_url.rstrip("/")
        self.client = httpx.Client(timeout=timeout, transport=transport)

    def authenticate(self, client_id: str, client_secret: str) -> str:
        """
        Obtain a bearer token with the client-credentials grant.

        Parameters
        ----------
        client_id : str
            OAuth2 client ID
        client_secret : str
            OAuth2 client secret

        Returns
        -------
        str
            Access token

        Raises
        ------
        AuthenticationError
            If the request fails, is rejected, or carries no token

        """
        url = f"{self.auth_url}{self.TOKEN_PATH}"

        try:
            response = self.client.post(
                url,
                data={"grant_type": "client_credentials"},
                auth=(client_id, client_secret),
            )
        except httpx.HTTPError as e:
            msg = f"Authentication request failed: {e}"
            raise AuthenticationError(msg) from e

        if not response.is_success:
            msg = f"Authentication failed: {response.status_code} {response.reason_phrase}"
            raise AuthenticationError(msg, status_code=response.status_code, reason=response.reason_phrase)

        try:
            data = response.json()
        except ValueError as e:
            raise AuthenticationError("no token in response", status_code=response.status_code) from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token or not isinstance(token, str):
            raise AuthenticationError("no token in response", status_code=response.status_code)

        logger.info("Obtained bearer token from %s", self.auth_url)
        return token

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "TokenProvider":
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
