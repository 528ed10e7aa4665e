"""
API resources for the Payman client.
"""
from .balances import BalancesResource
from .base import BaseResource
from .payments import PaymentsResource

__all__ = [
    "BaseResource",
    "BalancesResource",
    "PaymentsResource",
]
