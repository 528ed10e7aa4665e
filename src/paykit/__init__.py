"""
paykit: Payman payments as LLM tools.

Exposes sending payments, searching and creating payees, customer deposit
links and balance checks as schema-described tools for LLM tool-calling
hosts.

Quick start::

    from paykit import paykit

    tools = paykit(api_secret="...", environment="sandbox")

    # Pass definitions to the model
    openai_tools = tools.to_openai_tools()

    # Run a call the model made
    result = await tools.execute("sendPayment", {
        "amountDecimal": 50,
        "paymentDestinationId": "dest_123",
    })
"""

from .client import PaymanClient, PaymentsClient
from .config import PaykitSettings, load_settings
from .errors import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    PaykitError,
    RateLimitError,
    UnknownToolError,
    ValidationError,
)
from .formats import to_anthropic_tools, to_openai_tools
from .handlers import PaykitToolHandler
from .tools import READ_ONLY_TOOL_NAMES, TOOL_NAMES, PaykitTool
from .toolkit import PaykitToolkit, paykit

from ._version import __version__

__all__ = [
    # Main entry points
    "paykit",
    "PaykitToolkit",
    "PaykitToolHandler",
    "PaykitTool",
    # Configuration
    "PaykitSettings",
    "load_settings",
    # Client
    "PaymanClient",
    "PaymentsClient",
    # Tool collections
    "TOOL_NAMES",
    "READ_ONLY_TOOL_NAMES",
    "to_openai_tools",
    "to_anthropic_tools",
    # Errors
    "PaykitError",
    "ConfigurationError",
    "ValidationError",
    "UnknownToolError",
    "BackendError",
    "AuthenticationError",
    "RateLimitError",
]
