"""Shared test fixtures for the transactor test suite.

Provides:
    - A scripted Network Merchants gateway behind httpx.MockTransport
    - Transactors wired to that gateway
    - Factory fixtures for credentials and accounts
"""

from __future__ import annotations

from decimal import Decimal

import httpx
import pytest

from transactor.domain.entities import BankAccount, CardAccount, Credentials, Transaction
from transactor.domain.enums import BankAccountType, NetworkType, TransactionType
from transactor.domain.types import Month, Year
from transactor.transactors.network_merchants import (
    AchTransactor,
    CardTransactor,
    TokenTransactor,
)

# ---------------------------------------------------------------------------
# Gateway simulation
# ---------------------------------------------------------------------------


class GatewayStub:
    """Replays queued replies and records every posted parameter set.

    Queue a dict to answer with that URL-encoded body, or an exception
    instance to fail the request at the transport level.
    """

    def __init__(self) -> None:
        self.replies: list[dict[str, str] | Exception | httpx.Response] = []
        self.requests: list[dict[str, str]] = []
        self.urls: list[str] = []

    def queue(self, reply: dict[str, str] | Exception | httpx.Response) -> None:
        self.replies.append(reply)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.urls.append(str(request.url))
        self.requests.append(dict(httpx.QueryParams(request.content.decode())))
        if not self.replies:
            raise AssertionError("GatewayStub received an unexpected request")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, text=str(httpx.QueryParams(reply)))


@pytest.fixture
def gateway() -> GatewayStub:
    return GatewayStub()


@pytest.fixture
def http_client(gateway: GatewayStub) -> httpx.Client:
    client = httpx.Client(transport=httpx.MockTransport(gateway.handler))
    yield client
    client.close()


@pytest.fixture
def card_transactor(http_client: httpx.Client) -> CardTransactor:
    return CardTransactor(client=http_client)


@pytest.fixture
def ach_transactor(http_client: httpx.Client) -> AchTransactor:
    return AchTransactor(client=http_client)


@pytest.fixture
def token_transactor(http_client: httpx.Client) -> TokenTransactor:
    return TokenTransactor(client=http_client)


# ---------------------------------------------------------------------------
# Domain Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(credentials={"username": "demo", "password": "password"})


@pytest.fixture
def card_account() -> CardAccount:
    return CardAccount(
        name="Ada Lovelace",
        address="12 St James's Square",
        city="London",
        region="LDN",
        postal_code="SW1Y 4JH",
        country="GB",
        account_number="4111111111111111",
        exp_month=Month(10),
        exp_year=Year(2030),
        cvv="999",
    )


@pytest.fixture
def bank_account() -> BankAccount:
    return BankAccount(
        name="Ada Lovelace",
        routing_number="123123123",
        account_number="123456789",
        account_type=BankAccountType.PERSONAL_CHECKING,
    )


@pytest.fixture
def make_sale(credentials: Credentials):
    """Return a builder for Sale transactions with the shared credentials."""

    def _make(
        account=None,
        network: NetworkType = NetworkType.CARD,
        amount: str = "100.00",
        transaction_type: TransactionType = TransactionType.SALE,
    ) -> Transaction:
        return Transaction(
            type=transaction_type,
            network=network,
            amount=Decimal(amount),
            account=account,
            credentials=credentials,
        )

    return _make
