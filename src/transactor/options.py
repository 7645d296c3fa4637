"""Per-call transactor options.

Each transactor declares a pydantic model describing the options it accepts.
Resolving a caller's ``options`` dict against that model rejects unknown
keys, coerces values and applies the declared defaults.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from transactor.config import get_settings


class TransactorOptions(BaseModel):
    """Options every transactor understands."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tokenize: bool = Field(
        default=False,
        description="Ask the gateway to store the account and issue a token",
    )


class NetworkMerchantsOptions(TransactorOptions):
    """Options of the Network Merchants gateway adapters."""

    enable_avs: bool = Field(
        default=False,
        description="Send the account holder's address for address verification",
    )
    enable_cvv: bool = Field(
        default=False,
        description="Send the card verification value",
    )
    post_url: str = Field(
        default_factory=lambda: get_settings().nmi_post_url,
        min_length=1,
        description="Gateway endpoint the transaction is posted to",
    )
