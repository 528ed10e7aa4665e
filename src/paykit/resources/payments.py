"""
Payments resource for the Payman client.

Request bodies are forwarded as given (camelCase keys, as produced by the
paykit input schemas) and responses are returned as decoded JSON.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .base import BaseResource


class PaymentsResource(BaseResource):
    """Resource for payment operations.

    Example:
        ```python
        async with PaymanClient(api_secret="...") as client:
            payees = await client.payments.search_destinations({"name": "Jon"})
            result = await client.payments.send_payment({
                "amountDecimal": 50.0,
                "paymentDestinationId": payees[0]["id"],
            })
        ```
    """

    async def send_payment(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Send funds from the agent's wallet to a payment destination.

        Args:
            body: Payment request (``amountDecimal``, ``paymentDestinationId``, ...)

        Returns:
            The backend's payment result
        """
        return await self._post("payments/send-payment", body)

    async def search_destinations(
        self,
        params: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """Search saved payment destinations.

        Args:
            params: Optional ``name``, ``customerId`` and ``contactEmail`` filters

        Returns:
            Matching destinations in backend order
        """
        return await self._get("payments/search-destinations", params=params)

    async def create_payee(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Create a US ACH or Payman agent payment destination.

        Args:
            body: Payee definition, discriminated by ``type``

        Returns:
            The created destination, including its ``id``
        """
        return await self._post("payments/payees", body)

    async def initiate_customer_deposit(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Create a checkout link for a customer deposit.

        Args:
            body: Deposit request (``amountDecimal``, ``customerId``, ...)

        Returns:
            Backend response containing the checkout URL
        """
        return await self._post("payments/customer-deposit-link", body)


__all__ = ["PaymentsResource"]
