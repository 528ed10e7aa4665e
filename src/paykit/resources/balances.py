"""
Balances resource for the Payman client.
"""
from __future__ import annotations

from typing import Any
from urllib.parse import quote

from .base import BaseResource


class BalancesResource(BaseResource):
    """Resource for spendable balance lookups."""

    async def get_customer_balance(self, customer_id: str, currency: str) -> Any:
        """Spendable balance of one of the agent's customers."""
        return await self._get(
            f"balances/customers/{quote(customer_id, safe='')}/currencies/{currency}"
        )

    async def get_spendable_balance(self, currency: str) -> Any:
        """Spendable balance of the agent's own wallet."""
        return await self._get(f"balances/currencies/{currency}")


__all__ = ["BalancesResource"]
