"""Tool definitions for the paykit toolkit.

Each tool pairs a pydantic input schema with a coroutine that makes exactly
one call on the payments client. Arguments are validated before the client
is touched; whatever the client returns (or raises) reaches the caller
unchanged. The two balance tools are the exception on the success path:
they wrap the raw balance with the currency (and customer) it refers to.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Awaitable, Callable, Mapping, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .client import PaymentsClient
from .errors import ValidationError
from .models import (
    CreatePayeeInput,
    GetCustomerBalanceInput,
    GetSpendableBalanceInput,
    InitiateCustomerDepositInput,
    SearchDestinationsInput,
    SendPaymentInput,
)

logger = logging.getLogger(__name__)

ToolArgs = Union[Mapping[str, Any], BaseModel, None]


@dataclass(frozen=True)
class PaykitTool:
    """A named, schema-described payments operation.

    Attributes:
        name: Unique identifier for this tool
        description: Description shown to the model for tool selection
        args_schema: Pydantic model the arguments must satisfy
        handler: Coroutine receiving the validated arguments
    """

    name: str
    description: str
    args_schema: type[BaseModel]
    handler: Callable[[Any], Awaitable[Any]] = field(repr=False, compare=False)

    def parameters_json_schema(self) -> dict[str, Any]:
        """JSON schema of the tool's arguments, camelCase field names.

        Always a plain ``object`` schema: tagged unions are flattened by
        :func:`_flatten_union`, since hosts reject a top-level ``oneOf``.
        """
        schema = self.args_schema.model_json_schema(by_alias=True)
        schema.pop("title", None)
        if "oneOf" in schema:
            return _flatten_union(schema)
        return schema

    def validate(self, args: ToolArgs = None) -> BaseModel:
        """Validate raw arguments, raising :class:`ValidationError` on mismatch."""
        if isinstance(args, self.args_schema):
            return args
        try:
            return self.args_schema.model_validate({} if args is None else args)
        except PydanticValidationError as exc:
            errors = [
                {
                    "field": ".".join(str(p) for p in err["loc"]),
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in exc.errors()
            ]
            raise ValidationError(
                f"Invalid arguments for tool '{self.name}'",
                tool=self.name,
                errors=errors,
            ) from exc

    async def execute(self, args: ToolArgs = None) -> Any:
        """Validate *args* and run the tool.

        Raises:
            ValidationError: If the arguments do not match ``args_schema``.
                The payments client is not called.
            Exception: Anything raised by the payments client, unchanged.
        """
        params = self.validate(args)
        logger.info("Executing paykit tool: %s", self.name)
        try:
            return await self.handler(params)
        except Exception as exc:
            logger.warning("paykit tool %s failed: %s", self.name, exc)
            raise

    async def __call__(self, args: ToolArgs = None) -> Any:
        return await self.execute(args)


def _flatten_union(schema: dict[str, Any]) -> dict[str, Any]:
    """Merge a tagged union schema into a single object schema.

    Every variant's fields are advertised; only fields required by all
    variants stay required, and the tag lists every variant's value.
    Arguments are still validated against the strict union.
    """
    defs = dict(schema.get("$defs", {}))
    variants = [
        defs.pop(ref["$ref"].rsplit("/", 1)[-1]) if "$ref" in ref else ref
        for ref in schema["oneOf"]
    ]

    properties: dict[str, Any] = {}
    for variant in variants:
        for name, prop in variant.get("properties", {}).items():
            properties.setdefault(name, prop)

    required = [
        name
        for name in variants[0].get("required", [])
        if all(name in variant.get("required", []) for variant in variants)
    ]

    tag = schema.get("discriminator", {}).get("propertyName")
    if tag in properties:
        values: list[Any] = []
        for variant in variants:
            prop = variant["properties"][tag]
            values.extend([prop["const"]] if "const" in prop else prop.get("enum", []))
        tag_schema = {k: v for k, v in properties[tag].items() if k not in ("const", "enum")}
        properties[tag] = {**tag_schema, "enum": values}

    flat: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "required": required,
        "additionalProperties": False,
    }
    if "description" in schema:
        flat["description"] = schema["description"]
    if defs:
        flat["$defs"] = defs
    return flat


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _send_payment(client: PaymentsClient, params: SendPaymentInput) -> Any:
    return await client.payments.send_payment(params.to_params())


async def _search_destinations(client: PaymentsClient, params: SearchDestinationsInput) -> Any:
    return await client.payments.search_destinations(params.to_params())


async def _create_payee(client: PaymentsClient, params: CreatePayeeInput) -> Any:
    return await client.payments.create_payee(params.to_params())


async def _initiate_customer_deposit(
    client: PaymentsClient,
    params: InitiateCustomerDepositInput,
) -> Any:
    return await client.payments.initiate_customer_deposit(params.to_params())


async def _get_customer_balance(client: PaymentsClient, params: GetCustomerBalanceInput) -> dict[str, Any]:
    balance = await client.balances.get_customer_balance(params.customer_id, "USD")
    return {
        "spendableBalance": balance,
        "currency": "USD",
        "customerId": params.customer_id,
    }


async def _get_spendable_balance(client: PaymentsClient, params: GetSpendableBalanceInput) -> dict[str, Any]:
    balance = await client.balances.get_spendable_balance("USD")
    return {
        "spendableBalance": balance,
        "currency": "USD",
    }


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ToolSpec:
    """Unbound tool definition; :func:`build_tools` binds it to a client."""

    name: str
    description: str
    args_schema: type[BaseModel]
    run: Callable[[PaymentsClient, Any], Awaitable[Any]]

    def bind(self, client: PaymentsClient) -> PaykitTool:
        return PaykitTool(
            name=self.name,
            description=self.description,
            args_schema=self.args_schema,
            handler=partial(self.run, client),
        )


SEND_PAYMENT = ToolSpec(
    name="sendPayment",
    description=(
        "Send USD from the agent's wallet to a pre-created payment destination. "
        "Use this when you need to transfer money to a saved bank account or "
        "Payman agent. Requires an existing paymentDestinationId."
    ),
    args_schema=SendPaymentInput,
    run=_send_payment,
)

SEARCH_DESTINATIONS = ToolSpec(
    name="searchDestinations",
    description=(
        "Search for existing payment destinations (saved US bank accounts or "
        "Payman agents) by name, customer, or email. Use this to find saved "
        "payment destinations before sending a payment. Returns a list of "
        "matching payment destinations with their IDs."
    ),
    args_schema=SearchDestinationsInput,
    run=_search_destinations,
)

CREATE_PAYEE = ToolSpec(
    name="createPayee",
    description=(
        "Create a new payment destination for future USD payments. Use this when "
        "you need to save a new US bank account (ACH) or Payman Agent as a payment "
        "destination for the first time. The created destination can then be "
        "used with sendPayment."
    ),
    args_schema=CreatePayeeInput,
    run=_create_payee,
)

INITIATE_CUSTOMER_DEPOSIT = ToolSpec(
    name="initiateCustomerDeposit",
    description=(
        "Generate a checkout link that allows a customer to add USD funds to their "
        "Payman Wallet using a credit card or bank transfer. Use this when a "
        "customer needs to deposit money before making payments. Returns a URL "
        "the customer can visit to complete the deposit."
    ),
    args_schema=InitiateCustomerDepositInput,
    run=_initiate_customer_deposit,
)

GET_CUSTOMER_BALANCE = ToolSpec(
    name="getCustomerBalance",
    description=(
        "Check how much USD a specific customer has available to spend in their "
        "Payman Wallet. Use this before initiating payments to verify sufficient "
        "funds. Only shows confirmed, spendable balance (excludes pending "
        "transactions)."
    ),
    args_schema=GetCustomerBalanceInput,
    run=_get_customer_balance,
)

GET_SPENDABLE_BALANCE = ToolSpec(
    name="getSpendableBalance",
    description=(
        "Check how much USD the agent (your account) has available to spend in "
        "the Payman Wallet. Use this to verify your own available balance before "
        "making payments. Only shows confirmed, spendable balance (excludes "
        "pending transactions and reserved funds)."
    ),
    args_schema=GetSpendableBalanceInput,
    run=_get_spendable_balance,
)

ALL_TOOL_SPECS: tuple[ToolSpec, ...] = (
    SEND_PAYMENT,
    SEARCH_DESTINATIONS,
    CREATE_PAYEE,
    INITIATE_CUSTOMER_DEPOSIT,
    GET_CUSTOMER_BALANCE,
    GET_SPENDABLE_BALANCE,
)

TOOL_NAMES: tuple[str, ...] = tuple(spec.name for spec in ALL_TOOL_SPECS)

# Tools that never move funds or create records.
READ_ONLY_TOOL_NAMES = frozenset({
    "searchDestinations",
    "getCustomerBalance",
    "getSpendableBalance",
})


def build_tools(client: PaymentsClient) -> dict[str, PaykitTool]:
    """Bind every tool to *client*, keyed by tool name in registry order."""
    return {spec.name: spec.bind(client) for spec in ALL_TOOL_SPECS}


__all__ = [
    "ALL_TOOL_SPECS",
    "CREATE_PAYEE",
    "GET_CUSTOMER_BALANCE",
    "GET_SPENDABLE_BALANCE",
    "INITIATE_CUSTOMER_DEPOSIT",
    "PaykitTool",
    "READ_ONLY_TOOL_NAMES",
    "SEARCH_DESTINATIONS",
    "SEND_PAYMENT",
    "TOOL_NAMES",
    "ToolSpec",
    "build_tools",
]
