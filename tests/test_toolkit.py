"""Tests for the PaykitToolkit factory and registry."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from paykit import (
    AuthenticationError,
    BackendError,
    PaykitToolkit,
    UnknownToolError,
    ValidationError,
    paykit,
)

EXPECTED_TOOLS = [
    "sendPayment",
    "searchDestinations",
    "createPayee",
    "initiateCustomerDeposit",
    "getCustomerBalance",
    "getSpendableBalance",
]


class TestRegistry:
    def test_exact_key_set(self, toolkit):
        assert isinstance(toolkit, Mapping)
        assert list(toolkit) == EXPECTED_TOOLS
        assert len(toolkit) == 6

    def test_factory_returns_same_keys(self, payments_client):
        tools = paykit(api_secret="sk_test", client=payments_client)
        assert set(tools.keys()) == set(EXPECTED_TOOLS)

    def test_mapping_is_immutable(self, toolkit):
        with pytest.raises(TypeError):
            toolkit["sendPayment"] = toolkit["getSpendableBalance"]
        with pytest.raises(TypeError):
            del toolkit["sendPayment"]

    def test_tools_share_one_client(self, toolkit, payments_client):
        assert toolkit.client is payments_client

    async def test_accepts_duck_typed_client(self, settings):
        balances = SimpleNamespace(get_spendable_balance=AsyncMock(return_value=5.0))
        client = SimpleNamespace(payments=SimpleNamespace(), balances=balances)
        toolkit = PaykitToolkit(settings, client=client)
        assert await toolkit.execute("getSpendableBalance", {"currency": "USD"}) == {
            "spendableBalance": 5.0,
            "currency": "USD",
        }

    def test_get_tools(self, toolkit):
        assert [t.name for t in toolkit.get_tools()] == EXPECTED_TOOLS

    def test_get_read_only_tools(self, toolkit):
        assert [t.name for t in toolkit.get_tools(read_only=True)] == [
            "searchDestinations",
            "getCustomerBalance",
            "getSpendableBalance",
        ]

    def test_repr(self, toolkit):
        assert "sandbox" in repr(toolkit)
        assert "sk_test_secret" not in repr(toolkit)


class TestExecute:
    async def test_execute_by_name(self, toolkit, payments_client):
        result = await toolkit.execute("getSpendableBalance", {"currency": "USD"})
        assert result == {"spendableBalance": 1000.0, "currency": "USD"}

    async def test_unknown_tool(self, toolkit):
        with pytest.raises(UnknownToolError) as exc_info:
            await toolkit.execute("refundPayment", {})
        assert isinstance(exc_info.value, ValidationError)
        assert "sendPayment" in exc_info.value.message

    async def test_backend_error_propagates_unchanged(self, toolkit, payments_client):
        error = BackendError(
            "Insufficient funds",
            status_code=400,
            code="INSUFFICIENT_FUNDS",
        )
        payments_client.payments.send_payment.side_effect = error
        with pytest.raises(BackendError) as exc_info:
            await toolkit.execute("sendPayment", {"amountDecimal": 50, "paymentDestinationId": "dest_1"})
        assert exc_info.value is error
        assert payments_client.payments.send_payment.await_count == 1

    async def test_foreign_exceptions_propagate(self, toolkit, payments_client):
        payments_client.balances.get_spendable_balance.side_effect = ConnectionError("reset")
        with pytest.raises(ConnectionError):
            await toolkit.execute("getSpendableBalance", {"currency": "USD"})

    async def test_auth_error_propagates(self, toolkit, payments_client):
        payments_client.payments.search_destinations.side_effect = AuthenticationError()
        with pytest.raises(AuthenticationError):
            await toolkit.execute("searchDestinations")

    async def test_business_failure_payload_is_returned(self, toolkit, payments_client):
        rejected = {"status": "REJECTED", "reason": "Destination inactive"}
        payments_client.payments.send_payment.return_value = rejected
        result = await toolkit.execute("sendPayment", {"amountDecimal": 5, "paymentDestinationId": "dest_1"})
        assert result is rejected


class TestConcurrency:
    async def test_concurrent_calls_do_not_mix(self, toolkit, payments_client):
        balances = {"cust_1": 10.0, "cust_2": 20.0}

        async def customer_balance(customer_id, currency):
            # Finish in reverse order of submission.
            await asyncio.sleep(0.02 if customer_id == "cust_1" else 0.0)
            return balances[customer_id]

        async def send_payment(body):
            await asyncio.sleep(0.01)
            return {"reference": f"pay_{body['paymentDestinationId']}"}

        payments_client.balances.get_customer_balance.side_effect = customer_balance
        payments_client.payments.send_payment.side_effect = send_payment

        first, second, payment = await asyncio.gather(
            toolkit.execute("getCustomerBalance", {"customerId": "cust_1", "currency": "USD"}),
            toolkit.execute("getCustomerBalance", {"customerId": "cust_2", "currency": "USD"}),
            toolkit.execute("sendPayment", {"amountDecimal": 1, "paymentDestinationId": "dest_9"}),
        )

        assert first == {"spendableBalance": 10.0, "currency": "USD", "customerId": "cust_1"}
        assert second == {"spendableBalance": 20.0, "currency": "USD", "customerId": "cust_2"}
        assert payment == {"reference": "pay_dest_9"}

    async def test_one_failure_does_not_affect_others(self, toolkit, payments_client):
        payments_client.payments.create_payee.side_effect = BackendError("Duplicate payee", status_code=409)

        results = await asyncio.gather(
            toolkit.execute("createPayee", {"type": "PAYMAN_AGENT", "name": "A", "paymanAgentId": "agt_1"}),
            toolkit.execute("getSpendableBalance", {"currency": "USD"}),
            return_exceptions=True,
        )

        assert isinstance(results[0], BackendError)
        assert results[1] == {"spendableBalance": 1000.0, "currency": "USD"}


class TestLifecycle:
    async def test_context_manager_closes_client(self, settings, httpx_mock):
        httpx_mock.add_response(
            url="https://agent-sandbox.payman.ai/api/balances/currencies/USD",
            method="GET",
            json=42.0,
        )
        async with PaykitToolkit(settings) as toolkit:
            await toolkit.execute("getSpendableBalance", {"currency": "USD"})
            assert toolkit.client.is_connected
        assert not toolkit.client.is_connected

    async def test_aclose_with_sync_close(self, toolkit, payments_client):
        await toolkit.aclose()
        payments_client.close.assert_called_once()
