"""Network Merchants (NMI) Direct Post gateway.

Shared implementation of the card, ACH and token adapters. The wire protocol
is a single HTTP POST of URL-form-encoded parameters; the reply body is a
URL-encoded key/value string, not JSON.

Reply codes:
    response=1  -> Approved
    response=2  -> Declined
    anything else, missing, or a transport failure -> Error

The HTTP client is an ``httpx.Client``, which is safe to share between
threads. Pass one in to control timeouts, proxies or the transport (tests
use ``httpx.MockTransport``); otherwise one is created on first use, under a lock,
and kept for the lifetime of the adapter.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx

from transactor.config import get_settings
from transactor.domain.entities import TokenGrant
from transactor.domain.enums import (
    PARENT_REQUIRED_TYPES,
    AccountKind,
    ResultStatus,
    TransactionType,
)
from transactor.domain.exceptions import (
    InvalidAccountTypeError,
    MissingAccountError,
    MissingCredentialsError,
    MissingRequiredParameterError,
    ValidationError,
)
from transactor.logging_config import REDACTED, get_logger
from transactor.options import NetworkMerchantsOptions
from transactor.transactors.base import INTERNAL_ERROR_MESSAGE, AbstractTransactor, check_parent

if TYPE_CHECKING:
    from transactor.domain.entities import (
        Account,
        BankAccount,
        CardAccount,
        Credentials,
        Result,
        SwipedCardAccount,
        Transaction,
    )

logger = get_logger(__name__)

GATEWAY_ERROR_MESSAGE = "An error occurred while processing the payment. Please try again."
SENSITIVE_KEYS = ("ccnumber", "cvv", "track_1", "track_2", "track_3")

_NMI_TYPES = {
    TransactionType.SALE: "sale",
    TransactionType.AUTH: "auth",
    TransactionType.CAPTURE: "capture",
    TransactionType.CREDIT: "credit",
    TransactionType.REFUND: "refund",
    TransactionType.VOID: "void",
    TransactionType.VALIDATE: "validate",
}


def map_response_code(code: str | None) -> ResultStatus:
    """Map the gateway ``response`` field to a ResultStatus."""
    if code == "1":
        return ResultStatus.APPROVED
    if code == "2":
        return ResultStatus.DECLINED
    return ResultStatus.ERROR


def format_amount(amount: Any) -> str:
    return f"{amount:.2f}"


class NetworkMerchantsGateway(AbstractTransactor):
    """Base class for the Network Merchants adapters."""

    options_model = NetworkMerchantsOptions

    def __init__(self, client: httpx.Client | None = None) -> None:
        self._client = client
        self._owns_client = False
        self._client_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def get_client(self) -> httpx.Client:
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(timeout=get_settings().http_timeout_seconds)
                self._owns_client = True
            return self._client

    def close(self) -> None:
        """Close the HTTP client if this adapter created it."""
        with self._client_lock:
            if self._owns_client and self._client is not None:
                self._client.close()
                self._client = None
                self._owns_client = False

    def _post(self, url: str, params: dict[str, str]) -> tuple[dict[str, str], str | None]:
        """POST the params and parse the reply.

        Returns:
            (reply, transport_error). On transport failure the reply is a
            synthesized ``response=3`` mapping and transport_error holds the detail.
        """
        try:
            response = self.get_client().post(url, data=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning(
                "network_merchants.transport_error",
                transactor=self.transactor_type,
                error_type=type(exc).__name__,
            )
            return {"response": "3", "message": str(exc)}, str(exc)

        return dict(httpx.QueryParams(response.text)), None

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def do_transact(self, transaction: Transaction, options: NetworkMerchantsOptions) -> Result:
        params = self.build_params(transaction, options)
        result = transaction.result
        result.transactor = self

        reply, transport_error = self._post(options.post_url, params)
        status = map_response_code(reply.get("response"))
        result.status = status

        if status is ResultStatus.APPROVED:
            result.external_id = reply.get("transactionid")
            result.message = reply.get("responsetext", "")
        else:
            if transport_error is not None:
                result.message = INTERNAL_ERROR_MESSAGE
                result.set_data("error", transport_error)
            else:
                result.message = reply.get("responsetext") or GATEWAY_ERROR_MESSAGE
            if reply.get("transactionid"):
                result.external_id = reply["transactionid"]

        result.set_data("request", params)
        result.set_data("response", reply)

        logger.info(
            "network_merchants.reply",
            transactor=self.transactor_type,
            nmi_type=params["type"],
            status=str(status),
            response_code=reply.get("response"),
            external_id=result.external_id,
        )
        return result

    def extract_token(self, result: Result) -> TokenGrant | None:
        token = (result.get_data("response") or {}).get("customer_vault_id")
        if not token:
            return None
        return TokenGrant(token=token, issued_at=datetime.now(UTC))

    def filter_result(self, result: Result) -> Result:
        request = dict(result.get_data("request") or {})
        for key in SENSITIVE_KEYS:
            if key in request:
                request[key] = REDACTED
        result.set_data("request", request)
        return result

    def create_credentials(self) -> Credentials:
        credentials = super().create_credentials()
        credentials.set_credential("username", None)
        credentials.set_credential("password", None)
        return credentials

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_transaction(self, transaction: Transaction) -> ValidationError | None:
        failure = check_parent(transaction)
        if failure is not None:
            return failure
        if transaction.type in PARENT_REQUIRED_TYPES and not transaction.parent.result.external_id:
            return MissingRequiredParameterError("parent transaction id")

        credentials = transaction.credentials
        if credentials is None:
            return MissingCredentialsError()
        if not credentials.is_complete("username", "password"):
            return MissingRequiredParameterError("username or password")

        account = transaction.account
        if account is None:
            return MissingAccountError()
        if not self.capabilities.accepts(account):
            return InvalidAccountTypeError(account)

        return self._validate_account(account)

    @staticmethod
    def _validate_account(account: Account) -> ValidationError | None:
        match account.kind:
            case AccountKind.TOKEN:
                if account.account_token is None:
                    return MissingRequiredParameterError("account token")
            case AccountKind.CARD if not account.is_tokenized:
                if account.account_number is None:
                    return MissingRequiredParameterError("account number")
                if not account.has_expiration:
                    return MissingRequiredParameterError("card expiration")
            case AccountKind.BANK if not account.is_tokenized:
                if account.routing_number is None:
                    return MissingRequiredParameterError("routing number")
                if account.account_number is None:
                    return MissingRequiredParameterError("account number")
        return None

    # ------------------------------------------------------------------
    # Wire params
    # ------------------------------------------------------------------

    def build_params(
        self,
        transaction: Transaction,
        options: NetworkMerchantsOptions,
    ) -> dict[str, str]:
        """Map a transaction onto the gateway's flat parameter set."""
        credentials = transaction.credentials
        account = transaction.account

        params = {
            "type": _NMI_TYPES[transaction.type],
            "username": credentials.get_credential("username"),
            "password": credentials.get_credential("password"),
        }

        if account.is_tokenized:
            params["customer_vault_id"] = account.account_token
        else:
            params.update(self._account_params(account, options))
            if options.tokenize:
                params["customer_vault"] = "add_customer"

        if options.enable_avs:
            params.update(_avs_params(account))

        if transaction.type in PARENT_REQUIRED_TYPES:
            params["transactionid"] = transaction.parent.result.external_id

        if transaction.type is not TransactionType.VOID:
            params["amount"] = format_amount(transaction.amount)

        return params

    @staticmethod
    def _account_params(account: Account, options: NetworkMerchantsOptions) -> dict[str, str]:
        match account.kind:
            case AccountKind.CARD:
                return _card_params(account, options)
            case AccountKind.SWIPED_CARD:
                return _swiped_params(account)
            case AccountKind.BANK:
                return _bank_params(account)
        return {}


def _card_params(account: CardAccount, options: NetworkMerchantsOptions) -> dict[str, str]:
    params = {
        "ccnumber": account.account_number,
        "ccexp": f"{account.exp_month}{account.exp_year.short_year}",
    }
    if options.enable_cvv and account.cvv:
        params["cvv"] = account.cvv
    return params


def _swiped_params(account: SwipedCardAccount) -> dict[str, str]:
    tracks = {
        "track_1": account.track_one,
        "track_2": account.track_two,
        "track_3": account.track_three,
    }
    return {key: value for key, value in tracks.items() if value}


def _bank_params(account: BankAccount) -> dict[str, str]:
    params = {
        "payment": "check",
        "checkname": account.name or "",
        "checkaba": account.routing_number,
        "checkaccount": account.account_number,
    }
    if account.account_type is not None:
        params["account_holder_type"] = "business" if account.account_type.is_business else "personal"
        params["account_type"] = "savings" if account.account_type.is_savings else "checking"
    return params


def _avs_params(account: Account) -> dict[str, str]:
    first, _, last = (account.name or "").partition(" ")
    fields = {
        "firstname": first,
        "lastname": last,
        "address1": account.address,
        "city": account.city,
        "state": account.region,
        "zip": account.postal_code,
        "country": account.country,
    }
    return {key: value for key, value in fields.items() if value}
