"""
PaykitToolkit -- one-line setup for all payments tools.

Usage::

    from paykit import paykit

    tools = paykit(api_secret=os.environ["PAYMAN_API_SECRET"], environment="sandbox")

    # Inspect or render the tool set for a host framework
    tools["sendPayment"].parameters_json_schema()
    openai_tools = tools.to_openai_tools()

    # Execute a call emitted by the model
    result = await tools.execute("getSpendableBalance", {"currency": "USD"})
"""
from __future__ import annotations

import inspect
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Optional

from .client import PaymanClient, PaymentsClient
from .config import PaykitSettings, load_settings
from .errors import UnknownToolError
from .formats import to_anthropic_tools, to_openai_tools
from .tools import READ_ONLY_TOOL_NAMES, PaykitTool, ToolArgs, build_tools

logger = logging.getLogger(__name__)


class PaykitToolkit(Mapping[str, PaykitTool]):
    """Immutable mapping of tool name to :class:`PaykitTool`.

    The toolkit always holds the same six tools, in this order:

    1. **sendPayment** -- pay a saved destination from the agent's wallet
    2. **searchDestinations** -- look up saved destinations
    3. **createPayee** -- save a US ACH account or Payman agent
    4. **initiateCustomerDeposit** -- checkout link for a customer deposit
    5. **getCustomerBalance** -- a customer's spendable USD balance
    6. **getSpendableBalance** -- the agent's own spendable USD balance

    Args:
        settings: Validated settings. Loaded from ``PAYMAN_*`` environment
            variables when omitted.
        client: Payments client to use instead of building a
            :class:`PaymanClient` from *settings*.

    Raises:
        ConfigurationError: If the settings are missing or invalid.
    """

    def __init__(
        self,
        settings: Optional[PaykitSettings] = None,
        *,
        client: Optional[PaymentsClient] = None,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.client: PaymentsClient = (
            client if client is not None else PaymanClient.from_settings(self.settings)
        )
        self._tools = MappingProxyType(build_tools(self.client))
        logger.debug(
            "paykit toolkit ready (environment=%s, tools=%d)",
            self.settings.environment,
            len(self._tools),
        )

    @classmethod
    def from_env(cls, *, client: Optional[PaymentsClient] = None) -> "PaykitToolkit":
        """Build a toolkit from ``PAYMAN_API_SECRET`` / ``PAYMAN_ENVIRONMENT``."""
        return cls(load_settings(), client=client)

    # -- Mapping --------------------------------------------------------------

    def __getitem__(self, name: str) -> PaykitTool:
        return self._tools[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    # -- Execution ------------------------------------------------------------

    def get_tool(self, name: str) -> PaykitTool:
        """Look up a tool, raising :class:`UnknownToolError` if absent."""
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name, list(self._tools)) from None

    async def execute(self, name: str, args: ToolArgs = None) -> Any:
        """Validate *args* against tool *name* and run it."""
        return await self.get_tool(name).execute(args)

    # -- Tool listings --------------------------------------------------------

    def get_tools(self, *, read_only: bool = False) -> list[PaykitTool]:
        """Return the tools in registry order.

        If *read_only* is ``True``, only tools that neither move funds nor
        create records are included.
        """
        if read_only:
            return [t for t in self._tools.values() if t.name in READ_ONLY_TOOL_NAMES]
        return list(self._tools.values())

    def to_openai_tools(self, *, read_only: bool = False) -> list[dict[str, Any]]:
        """Tool definitions for OpenAI Chat Completions ``tools=``."""
        return to_openai_tools(self.get_tools(read_only=read_only))

    def to_anthropic_tools(self, *, read_only: bool = False) -> list[dict[str, Any]]:
        """Tool definitions for Anthropic ``messages.create(tools=...)``."""
        return to_anthropic_tools(self.get_tools(read_only=read_only))

    # -- Lifecycle ------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the payments client if it holds resources."""
        close = getattr(self.client, "close", None)
        if close is None:
            return
        result = close()
        if inspect.isawaitable(result):
            await result

    async def __aenter__(self) -> "PaykitToolkit":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"PaykitToolkit(environment={self.settings.environment!r}, "
            f"tools={list(self._tools)!r})"
        )


def paykit(
    api_secret: Optional[str] = None,
    environment: Optional[str] = None,
    *,
    client: Optional[PaymentsClient] = None,
    **settings: Any,
) -> PaykitToolkit:
    """Build the payments toolkit.

    Args:
        api_secret: Payman API secret. Falls back to ``PAYMAN_API_SECRET``.
        environment: ``"production"`` or ``"sandbox"`` (default).
        client: Optional pre-built payments client.
        **settings: Extra :class:`PaykitSettings` fields (``base_url``,
            ``timeout``, ``max_retries``).

    Raises:
        ConfigurationError: If the secret is empty or the environment unknown.
    """
    resolved = load_settings(api_secret=api_secret, environment=environment, **settings)
    return PaykitToolkit(resolved, client=client)


__all__ = ["PaykitToolkit", "paykit"]
