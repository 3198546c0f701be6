"""Pytest configuration and fake Brale API for brale-dashboard tests."""

from typing import Any

import httpx
import pytest

from brale_dashboard.core.session import Session
from brale_dashboard.integrations.auth import TokenProvider
from brale_dashboard.integrations.brale import BraleClient

API_URL = "https://api.test"
AUTH_URL = "https://auth.test"
TEST_VALUE_TYPES = ["SBC", "USDS", "USDGLO"]


class FakeBraleAPI:
    """
    In-memory stand-in for the Brale resource API.

    Routes map a path to a (status, body) pair or to an exception raised
    in transport. Balances are keyed by (address_id, transfer_type, value_type);
    unknown combinations answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, Any] | Exception] = {}
        self.balances: dict[tuple[str, str, str], Any] = {}
        self.balance_bodies: dict[tuple[str, str, str], Any] = {}
        self.balance_errors: dict[tuple[str, str, str], int | Exception] = {}
        self.requests: list[httpx.Request] = []

    def route(self, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[path] = (status, body)

    def fail(self, path: str, exc: Exception) -> None:
        self.routes[path] = exc

    def balance_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/balance")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/balance"):
            key = (
                path.split("/")[-2],
                request.url.params["transfer_type"],
                request.url.params["value_type"],
            )
            error = self.balance_errors.get(key)
            if isinstance(error, Exception):
                raise error
            if error is not None:
                return httpx.Response(error)
            if key in self.balance_bodies:
                return httpx.Response(200, json=self.balance_bodies[key])
            if key in self.balances:
                return httpx.Response(200, json={"balance": {"value": self.balances[key], "currency": "USD"}})
            return httpx.Response(404)

        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


def internal_address(address_id: str, transfer_types: list[str] | None = None, **extra: Any) -> dict[str, Any]:
    """Build a raw internal address item."""
    return {
        "id": address_id,
        "type": "internal",
        "transfer_types": transfer_types if transfer_types is not None else ["base"],
        **extra,
    }


@pytest.fixture()
def fake_api() -> FakeBraleAPI:
    return FakeBraleAPI()


@pytest.fixture()
def transport(fake_api: FakeBraleAPI) -> httpx.MockTransport:
    return httpx.MockTransport(fake_api.handler)


@pytest.fixture()
def client(transport: httpx.MockTransport):
    with BraleClient(
        api_url=API_URL,
        max_workers=4,
        value_types=TEST_VALUE_TYPES,
        transport=transport,
    ) as brale_client:
        yield brale_client


@pytest.fixture()
def session() -> Session:
    return Session("test-token")


@pytest.fixture()
def token_provider_factory():
    """Build a TokenProvider answering with a custom handler."""
    providers = []

    def factory(handler) -> TokenProvider:
        provider = TokenProvider(auth_url=AUTH_URL, transport=httpx.MockTransport(handler))
        providers.append(provider)
        return provider

    yield factory

    for provider in providers:
        provider.close()
