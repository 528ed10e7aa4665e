"""
Pytest configuration and fixtures for paykit tests.
"""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from paykit import PaykitSettings, PaykitToolkit

SANDBOX_URL = "https://agent-sandbox.payman.ai/api"
PRODUCTION_URL = "https://agent.payman.ai/api"


# Mock response data
MOCK_RESPONSES = {
    "payment": {
        "reference": "pay_abc123",
        "status": "INITIATED",
        "amountDecimal": 50.0,
        "currency": "USD",
        "paymentDestinationId": "dest_1",
    },
    "destinations": [
        {"id": "dest_1", "name": "Jon Doe", "type": "US_ACH", "customerId": "cust_1"},
        {"id": "dest_2", "name": "Jon's agent", "type": "PAYMAN_AGENT"},
    ],
    "ach_payee": {
        "id": "dest_new",
        "name": "Jon Doe",
        "type": "US_ACH",
        "status": "ACTIVE",
    },
    "agent_payee": {
        "id": "dest_agent",
        "name": "Supplier agent",
        "type": "PAYMAN_AGENT",
        "status": "ACTIVE",
    },
    "deposit": {
        "checkoutUrl": "https://app.paymanai.com/checkout/chk_123",
        "expiresAt": "2025-01-21T00:00:00Z",
    },
}

ACH_PAYEE = {
    "type": "US_ACH",
    "name": "Jon Doe",
    "customerId": "cust_1",
    "accountHolderName": "Jon Doe",
    "accountHolderType": "individual",
    "accountNumber": "000123456789",
    "routingNumber": "011000015",
    "accountType": "checking",
}

AGENT_PAYEE = {
    "type": "PAYMAN_AGENT",
    "name": "Supplier agent",
    "paymanAgentId": "agt_supplier",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PAYMAN_* variables from the host out of the tests."""
    for var in (
        "PAYMAN_API_SECRET",
        "PAYMAN_ENVIRONMENT",
        "PAYMAN_BASE_URL",
        "PAYMAN_TIMEOUT",
        "PAYMAN_MAX_RETRIES",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def api_secret() -> str:
    """Test API secret."""
    return "sk_test_secret"


@pytest.fixture
def settings(api_secret: str) -> PaykitSettings:
    return PaykitSettings(api_secret=api_secret)


@pytest.fixture
def mock_responses() -> dict:
    """Return mock response data."""
    return MOCK_RESPONSES


@pytest.fixture
def payments_client() -> MagicMock:
    """Fake payments client with the six collaborator coroutines."""
    client = MagicMock()
    client.payments.send_payment = AsyncMock(return_value=MOCK_RESPONSES["payment"])
    client.payments.search_destinations = AsyncMock(return_value=MOCK_RESPONSES["destinations"])
    client.payments.create_payee = AsyncMock(return_value=MOCK_RESPONSES["ach_payee"])
    client.payments.initiate_customer_deposit = AsyncMock(return_value=MOCK_RESPONSES["deposit"])
    client.balances.get_customer_balance = AsyncMock(return_value=125.5)
    client.balances.get_spendable_balance = AsyncMock(return_value=1000.0)
    return client


@pytest.fixture
def toolkit(settings: PaykitSettings, payments_client: MagicMock) -> PaykitToolkit:
    return PaykitToolkit(settings, client=payments_client)


@pytest.fixture
def ach_payee() -> dict:
    """Valid US ACH createPayee arguments."""
    return dict(ACH_PAYEE)


@pytest.fixture
def agent_payee() -> dict:
    """Valid Payman agent createPayee arguments."""
    return dict(AGENT_PAYEE)
