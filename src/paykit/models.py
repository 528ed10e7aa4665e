"""Input schemas for the paykit tools.

Every schema forbids unknown fields, so a payload that mixes fields from
another tool (or from the other payee variant) fails validation before any
backend call is made. Field names are snake_case in Python and camelCase on
the wire.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, RootModel
from pydantic.alias_generators import to_camel

Currency = Literal["USD"]


class PaykitInput(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_params(self) -> dict[str, Any]:
        """Dump supplied values using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _check_cents(v: float) -> float:
    if round(v, 2) != v:
        raise ValueError("amount supports at most two decimal places")
    return v


# Positive, finite USD amount with cent precision. Strict: no bools or numeric strings.
AmountDecimal = Annotated[
    float,
    Field(gt=0, strict=True, allow_inf_nan=False),
    AfterValidator(_check_cents),
]


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


class SendPaymentInput(PaykitInput):
    """Input schema for the sendPayment tool."""

    amount_decimal: AmountDecimal = Field(
        description="The amount to send in USD (e.g. 10.00 for $10.00)",
    )
    customer_email: Optional[str] = Field(default=None, description="Email address of the customer")
    customer_id: Optional[str] = Field(default=None, description="ID of the customer")
    customer_name: Optional[str] = Field(default=None, description="Name of the customer")
    memo: Optional[str] = Field(default=None, description="Note or memo for the payment")
    payment_destination_id: Optional[str] = Field(
        default=None,
        description="ID of the pre-created payment destination",
    )


class SearchDestinationsInput(PaykitInput):
    """Input schema for the searchDestinations tool. All filters are optional."""

    name: Optional[str] = Field(default=None, description="Name of the payment destination")
    customer_id: Optional[str] = Field(default=None, description="Customer ID who owns the destination")
    contact_email: Optional[str] = Field(default=None, description="Contact email to search for")


# ---------------------------------------------------------------------------
# Payees
# ---------------------------------------------------------------------------


class AgentContactDetails(PaykitInput):
    """Contact block accepted for Payman agent payees."""

    email: Optional[str] = Field(
        default=None,
        description="The email address of the payment destination contact",
    )
    phone_number: Optional[str] = Field(
        default=None,
        description="The phone number of the payment destination contact",
    )


class AchContactDetails(AgentContactDetails):
    """Contact block accepted for US ACH payees."""

    address: Optional[str] = Field(
        default=None,
        description="The address string of the payment destination contact",
    )
    tax_id: Optional[str] = Field(
        default=None,
        description="The tax identification of the payment destination contact",
    )


class UsAchPayeeInput(PaykitInput):
    """A US bank account reachable over ACH."""

    type: Literal["US_ACH"] = Field(description="Type of payment destination")
    name: str = Field(description="Name for the payment destination")
    customer_id: str = Field(description="Customer ID who owns this destination")
    account_holder_name: str = Field(description="Name of the account holder")
    account_holder_type: Literal["individual", "business"] = Field(
        description="Type of account holder",
    )
    account_number: str = Field(description="Bank account number")
    routing_number: str = Field(description="Bank routing number")
    account_type: Literal["checking", "savings"] = Field(description="Type of bank account")
    contact_details: Optional[AchContactDetails] = Field(
        default=None,
        description="Optional contact details for the payment destination",
    )


class PaymanAgentPayeeInput(PaykitInput):
    """Another Payman agent, addressed by its agent ID."""

    type: Literal["PAYMAN_AGENT"] = Field(description="Type of payment destination")
    name: str = Field(description="Name for the payment destination")
    payman_agent_id: str = Field(description="The unique ID of the receiving agent")
    contact_details: Optional[AgentContactDetails] = Field(
        default=None,
        description="Optional contact details for the payment destination",
    )


PayeeSpec = Annotated[
    Union[UsAchPayeeInput, PaymanAgentPayeeInput],
    Field(discriminator="type"),
]


class CreatePayeeInput(RootModel[PayeeSpec]):
    """Input schema for the createPayee tool, discriminated on ``type``."""

    def to_params(self) -> dict[str, Any]:
        return self.root.to_params()


# ---------------------------------------------------------------------------
# Deposits
# ---------------------------------------------------------------------------


class InitiateCustomerDepositInput(PaykitInput):
    """Input schema for the initiateCustomerDeposit tool."""

    amount_decimal: AmountDecimal = Field(
        description="The amount to deposit in USD (e.g. 10.00 for $10.00)",
    )
    customer_id: str = Field(description="ID of the customer to deposit funds for")
    customer_email: Optional[str] = Field(default=None, description="Email address of the customer")
    customer_name: Optional[str] = Field(default=None, description="Name of the customer")
    fee_mode: Optional[Literal["INCLUDED_IN_AMOUNT", "ADD_TO_AMOUNT"]] = Field(
        default=None,
        description="How to handle processing fees - either include in amount or add to amount",
    )
    memo: Optional[str] = Field(default=None, description="Memo to associate with the transaction")
    wallet_id: Optional[str] = Field(
        default=None,
        description="ID of specific wallet to deposit to (if agent has multiple wallets)",
    )


# ---------------------------------------------------------------------------
# Balances
# ---------------------------------------------------------------------------


class GetCustomerBalanceInput(PaykitInput):
    """Input schema for the getCustomerBalance tool."""

    customer_id: str = Field(description="ID of the customer to check balance for")
    currency: Currency = Field(description="Currency code (always USD)")


class GetSpendableBalanceInput(PaykitInput):
    """Input schema for the getSpendableBalance tool."""

    currency: Currency = Field(description="Currency code (always USD)")


__all__ = [
    "AchContactDetails",
    "AmountDecimal",
    "AgentContactDetails",
    "CreatePayeeInput",
    "GetCustomerBalanceInput",
    "GetSpendableBalanceInput",
    "InitiateCustomerDepositInput",
    "PayeeSpec",
    "PaykitInput",
    "PaymanAgentPayeeInput",
    "SearchDestinationsInput",
    "SendPaymentInput",
    "UsAchPayeeInput",
]
