#!/usr/bin/env python3
"""Transactor — End-to-End Simulation.

Runs a customer through five scenarios:

    Scenario 1: Tokenize then charge
        - Keyed card sale of 100.00 -> card stored in the vault -> charged by token
        - Partial refund of the sale, then a void of the refund

    Scenario 2: Declined card
        - Sale of 0.50 -> the gateway declines (test-mode rule)

    Scenario 3: Gateway unreachable
        - Sale posted to an unreachable endpoint -> Error result, no exception

    Scenario 4: Cash at the counter
        - Cash sale recorded by the generic transactor, then voided

    Scenario 5: Validation
        - Void without a parent transaction -> Error result, nothing sent

Usage:
    # Dry-run (a simulated gateway, no network at all):
    python simulation.py --dry-run

    # Against the real gateway (test-mode account):
    NMI_USERNAME=demo NMI_PASSWORD=password python simulation.py

    # Run a specific scenario:
    python simulation.py --dry-run --scenario 1
"""

from __future__ import annotations

import argparse
import itertools
import os
from decimal import Decimal

import httpx

from transactor.config import get_settings
from transactor.domain.entities import CardAccount, Credentials, Result, Transaction
from transactor.domain.enums import NetworkType, TransactionType
from transactor.domain.types import Month, Year
from transactor.logging_config import get_logger, setup_logging
from transactor.transactors import AbstractTransactor, TransactorFactory

setup_logging(json_logs=False)
logger = get_logger("simulation")

UNREACHABLE_URL = "https://127.0.0.1:9/api/transact.php"

# Module-level state
_client: httpx.Client | None = None


# ---------------------------------------------------------------------------
# Simulated gateway
# ---------------------------------------------------------------------------
class SimulatedGateway:
    """Answers like the gateway's test mode: amounts under 1.00 are declined."""

    def __init__(self) -> None:
        self._ids = itertools.count(1000)
        self._host = httpx.URL(get_settings().nmi_post_url).host

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.host != self._host:
            raise httpx.ConnectError("Connection refused", request=request)

        params = dict(httpx.QueryParams(request.content.decode()))
        reply = {"transactionid": str(next(self._ids))}

        amount = params.get("amount")
        if amount is not None and params["type"] != "validate" and Decimal(amount) < 1:
            reply.update(response="2", responsetext="DECLINE")
        else:
            reply.update(response="1", responsetext="SUCCESS")
            if params.get("customer_vault") == "add_customer":
                reply["customer_vault_id"] = f"V{reply['transactionid']}"

        return httpx.Response(200, text=str(httpx.QueryParams(reply)))


def init_client(dry_run: bool) -> None:
    global _client
    if dry_run:
        _client = httpx.Client(transport=httpx.MockTransport(SimulatedGateway()))
    else:
        _client = httpx.Client(timeout=get_settings().http_timeout_seconds)


def shutdown_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


def card_transactor() -> AbstractTransactor:
    return TransactorFactory.create("network_merchants.card", client=_client)


def gateway_credentials() -> Credentials:
    return Credentials(credentials={
        "username": os.environ.get("NMI_USERNAME", "demo"),
        "password": os.environ.get("NMI_PASSWORD", "password"),
    })


def demo_card() -> CardAccount:
    return CardAccount(
        name="Ada Lovelace",
        address="12 St James's Square",
        city="London",
        postal_code="SW1Y 4JH",
        country="GB",
        account_number="4111111111111111",
        exp_month=Month(10),
        exp_year=Year(2030),
        cvv="999",
    )


def card_sale(amount: str) -> Transaction:
    return Transaction(
        type=TransactionType.SALE,
        network=NetworkType.CARD,
        amount=Decimal(amount),
        account=demo_card(),
        credentials=gateway_credentials(),
    )


# ---------------------------------------------------------------------------
# Print helpers
# ---------------------------------------------------------------------------
def banner(text: str) -> None:
    """Print a prominent banner."""
    width = 70
    print("\n" + "=" * width)
    print(f"  {text}")
    print("=" * width + "\n")


def section(text: str) -> None:
    """Print a section header."""
    print(f"\n--- {text} ---\n")


def print_result(result: Result) -> None:
    """Pretty-print a transaction result."""
    icon = "✅" if result.is_approved else "❌"
    print(f"  {icon} Status: {result.status}")
    print(f"  Message: {result.message}")
    if result.external_id:
        print(f"  Gateway ID: {result.external_id}")
    request = result.get_data("request")
    if request:
        shown = {k: v for k, v in request.items() if k != "password"}
        print(f"  Request (redacted): {shown}")
    if result.get_data("error"):
        print(f"  Transport Error: {result.get_data('error')}")


# ===========================================================================
# Scenarios
# ===========================================================================
def scenario_1_tokenize_then_charge() -> None:
    """Untokenized card is vaulted, charged, refunded and the refund voided."""
    banner("SCENARIO 1: Tokenize then Charge")
    transactor = card_transactor()

    section("Step 1: Sale of 100.00 with a keyed card")
    sale = card_sale("100.00")
    print_result(transactor.transact(sale, {"enable_cvv": True, "enable_avs": True}))
    print(f"  Account token: {sale.account.account_token}")

    section("Step 2: Partial refund of 25.00")
    refund = sale.create_child(TransactionType.REFUND, "25.00")
    print_result(transactor.transact(refund))

    section("Step 3: Void the refund")
    print_result(transactor.transact(refund.create_child(TransactionType.VOID)))


def scenario_2_declined() -> None:
    """Gateway declines a sale; the card is vaulted but never charged."""
    banner("SCENARIO 2: Declined Card")
    print_result(card_transactor().transact(card_sale("0.50")))


def scenario_3_unreachable() -> None:
    """Transport failure surfaces as an Error result."""
    banner("SCENARIO 3: Gateway Unreachable")
    result = card_transactor().transact(card_sale("10.00"), {"post_url": UNREACHABLE_URL})
    print_result(result)


def scenario_4_cash() -> None:
    """Cash sale and void, recorded without a network call."""
    banner("SCENARIO 4: Cash at the Counter")
    transactor = TransactorFactory.create("generic")

    section("Step 1: Cash sale of 12.50")
    sale = Transaction(TransactionType.SALE, NetworkType.CASH, amount=Decimal("12.50"))
    print_result(transactor.transact(sale))

    section("Step 2: Void the sale")
    print_result(transactor.transact(sale.create_child(TransactionType.VOID)))


def scenario_5_validation() -> None:
    """A void with no parent is rejected before anything is sent."""
    banner("SCENARIO 5: Void Without Parent")
    void = Transaction(
        type=TransactionType.VOID,
        network=NetworkType.CARD,
        account=demo_card(),
        credentials=gateway_credentials(),
    )
    print_result(card_transactor().transact(void))


# ===========================================================================
# Main
# ===========================================================================
SCENARIOS = {
    1: scenario_1_tokenize_then_charge,
    2: scenario_2_declined,
    3: scenario_3_unreachable,
    4: scenario_4_cash,
    5: scenario_5_validation,
}


def run(scenario: int = 0, dry_run: bool = False) -> None:
    """Run one scenario, or all of them when ``scenario`` is 0."""
    if scenario and scenario not in SCENARIOS:
        print(f"Unknown scenario {scenario}. Available: {', '.join(map(str, SCENARIOS))}")
        return

    init_client(dry_run)
    logger.info("simulation.start", dry_run=dry_run, scenario=scenario or "all")
    try:
        mode = "DRY-RUN (simulated gateway)" if dry_run else f"LIVE ({get_settings().nmi_post_url})"
        print(f"\n  TRANSACTOR — SIMULATION\n  Mode: {mode}\n")

        selected = [SCENARIOS[scenario]] if scenario else list(SCENARIOS.values())
        for run_scenario in selected:
            run_scenario()

        print("\n" + "=" * 70)
        print("  ✅ SCENARIOS COMPLETED")
        print("=" * 70 + "\n")
    finally:
        shutdown_client()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Transactor Simulation")
    parser.add_argument(
        "--scenario",
        type=int,
        default=0,
        help="Run a specific scenario (1-5). Default: run all.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Answer from a simulated gateway instead of the real endpoint (no network).",
    )
    args = parser.parse_args()
    run(scenario=args.scenario, dry_run=args.dry_run)
