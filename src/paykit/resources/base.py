"""
Base resource class for the Payman client.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from ..client import PaymanClient


class BaseResource:
    """Base class for API resources.

    Attributes:
        _client: The client instance
    """

    def __init__(self, client: "PaymanClient") -> None:
        self._client = client

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make a GET request."""
        return await self._client._request("GET", path, params=params)

    async def _post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """Make a POST request."""
        return await self._client._request("POST", path, json=data)


__all__ = ["BaseResource"]
