"""
Payments client used by the paykit toolkit.

The toolkit only depends on :class:`PaymentsClient`, so any object exposing
the same ``payments`` / ``balances`` coroutines can be injected (a test fake,
or a wrapper around another SDK). :class:`PaymanClient` is the default
implementation, talking to the Payman REST API over ``httpx``.

Example usage:
    ```python
    from paykit.client import PaymanClient

    async with PaymanClient(api_secret="...", environment="sandbox") as client:
        balance = await client.balances.get_spendable_balance("USD")
        destinations = await client.payments.search_destinations({"name": "Jon"})
    ```
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol

import httpx

from ._version import __version__
from .config import ENVIRONMENT_URLS, PaykitSettings
from .errors import AuthenticationError, BackendError, RateLimitError
from .resources import BalancesResource, PaymentsResource

logger = logging.getLogger(__name__)

USER_AGENT = f"paykit-python/{__version__}"

# Longest Retry-After honoured before retrying a 429, in seconds.
MAX_RETRY_AFTER = 60

# Raised before the request reached the server, so safe to resend any method.
_PRE_SEND_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout, httpx.PoolTimeout)
_IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class PaymentsAPI(Protocol):
    async def send_payment(self, body: dict[str, Any]) -> Any: ...

    async def search_destinations(self, params: dict[str, Any]) -> Any: ...

    async def create_payee(self, body: dict[str, Any]) -> Any: ...

    async def initiate_customer_deposit(self, body: dict[str, Any]) -> Any: ...


class BalancesAPI(Protocol):
    async def get_customer_balance(self, customer_id: str, currency: str) -> Any: ...

    async def get_spendable_balance(self, currency: str) -> Any: ...


class PaymentsClient(Protocol):
    """The collaborator interface the toolkit calls into."""

    payments: PaymentsAPI
    balances: BalancesAPI


class PaymanClient:
    """
    Payman API client.

    Provides access to the resources the toolkit needs:
    - payments: send payments, search and create destinations, deposit links
    - balances: spendable balances for the agent and its customers

    No connection is opened until the first request.

    Args:
        api_secret: Payman API secret
        environment: ``"production"`` or ``"sandbox"``
        base_url: Override the environment's base URL
        timeout: Request timeout in seconds (default: 30)
        max_retries: Retries for rate limits and transport errors (default: 2).
            A POST is only resent if it never reached the server.
    """

    DEFAULT_TIMEOUT = 30.0
    DEFAULT_MAX_RETRIES = 2

    def __init__(
        self,
        api_secret: str,
        environment: str = "sandbox",
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        if not api_secret:
            raise ValueError("API secret is required")
        if base_url is None:
            if environment not in ENVIRONMENT_URLS:
                raise ValueError(f"Unknown environment: {environment!r}")
            base_url = ENVIRONMENT_URLS[environment]

        self._base_url = base_url.rstrip("/")
        self._api_secret = api_secret
        self._environment = environment
        self._timeout = timeout
        self._max_retries = max_retries
        self._client: Optional[httpx.AsyncClient] = None

        self.payments = PaymentsResource(self)
        self.balances = BalancesResource(self)

    @classmethod
    def from_settings(cls, settings: PaykitSettings) -> "PaymanClient":
        """Build a client from validated toolkit settings."""
        return cls(
            api_secret=settings.api_secret,
            environment=settings.environment,
            base_url=settings.resolved_base_url,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def environment(self) -> str:
        return self._environment

    @property
    def is_connected(self) -> bool:
        """Whether an HTTP connection pool has been opened."""
        return self._client is not None and not self._client.is_closed

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "x-payman-api-secret": self._api_secret,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "User-Agent": USER_AGENT,
                },
                timeout=self._timeout,
            )
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Make an HTTP request with retry logic."""
        client = await self._get_client()
        url = f"{self._base_url}/{path.lstrip('/')}"
        attempts = self._max_retries + 1

        for attempt in range(attempts):
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    params=params or None,
                    json=json,
                )
            except httpx.TransportError as e:
                if attempt < attempts - 1 and _can_retry(method, e):
                    delay = 2 ** attempt
                    logger.warning(
                        "Payman request %s %s failed (%s), retrying in %ss",
                        method, path, type(e).__name__, delay,
                    )
                    await asyncio.sleep(delay)
                    continue
                raise

            if response.status_code == 429:
                retry_after = _retry_after(response)
                if attempt < attempts - 1:
                    logger.warning(
                        "Payman rate limit hit on %s %s, retrying in %ss",
                        method, path, retry_after,
                    )
                    await asyncio.sleep(retry_after)
                    continue
                raise RateLimitError("Rate limit exceeded", retry_after=retry_after)

            if response.status_code in (401, 403):
                raise AuthenticationError(
                    _error_message(response) or "Invalid or missing API secret",
                    status_code=response.status_code,
                )

            if response.status_code >= 400:
                try:
                    body = response.json()
                except ValueError:
                    body = {"error": response.text or response.reason_phrase}
                raise BackendError.from_response(response.status_code, body)

            if not response.content:
                return None
            return response.json()

        raise RuntimeError("Unexpected error in request retry loop")

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "PaymanClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"PaymanClient(environment={self._environment!r}, base_url={self._base_url!r})"


def _can_retry(method: str, exc: httpx.TransportError) -> bool:
    """A POST may already have been processed unless it never left the client."""
    return method.upper() in _IDEMPOTENT_METHODS or isinstance(exc, _PRE_SEND_ERRORS)


def _retry_after(response: httpx.Response) -> int:
    try:
        seconds = int(response.headers.get("Retry-After", "1"))
    except ValueError:
        return 1
    return min(max(seconds, 0), MAX_RETRY_AFTER)


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error", body.get("errorMessage"))
        if isinstance(error, dict):
            return error.get("message")
        if isinstance(error, str):
            return error
    return None


__all__ = [
    "BalancesAPI",
    "PaymanClient",
    "PaymentsAPI",
    "PaymentsClient",
]
