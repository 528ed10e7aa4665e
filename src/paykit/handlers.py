"""Tool call handlers for LLM hosts.

Takes tool calls as emitted by a model (Anthropic ``tool_use`` blocks or
OpenAI ``tool_calls``), runs them through a :class:`PaykitToolkit`, and
builds the result message to send back in the conversation.

A raised failure (bad arguments, backend error) is always marked as such:
``"is_error": True`` for Anthropic, an ``"error"`` key for OpenAI. A
successful backend response is relayed as a success even when its payload
describes a business-level failure; interpreting it is left to the model.
"""
from __future__ import annotations

import json
import logging
from typing import Any

from .errors import PaykitError
from .toolkit import PaykitToolkit

logger = logging.getLogger(__name__)


class PaykitToolHandler:
    """Processes tool calls and returns tool result messages.

    Args:
        toolkit: The toolkit whose tools the model may call.

    Usage::

        handler = PaykitToolHandler(toolkit)

        for block in response.content:
            if block.type == "tool_use":
                results.append(await handler.process_tool_use_block(block))
    """

    def __init__(self, toolkit: PaykitToolkit) -> None:
        self.toolkit = toolkit

    async def handle(self, tool_name: str, tool_input: Any) -> dict[str, Any]:
        """Run a tool call and report its outcome.

        Returns:
            ``{"status": "success", "result": ...}`` or
            ``{"status": "error", "error": {...}}``.
        """
        try:
            result = await self.toolkit.execute(tool_name, tool_input)
        except PaykitError as exc:
            return {"status": "error", "error": exc.to_dict()["error"]}
        except Exception as exc:
            logger.error("Tool call failed: %s - %s", tool_name, exc)
            return {
                "status": "error",
                "error": {"code": type(exc).__name__, "message": str(exc)},
            }
        return {"status": "success", "result": result}

    async def process_tool_use_block(self, tool_use_block: Any) -> dict[str, Any]:
        """Process an Anthropic ``tool_use`` block.

        Accepts either a dict or an SDK object with ``.id``, ``.name`` and
        ``.input`` attributes. Returns a dict shaped like::

            {"type": "tool_result", "tool_use_id": "toolu_...", "content": "..."}

        with ``"is_error": True`` added when the call failed.
        """
        if isinstance(tool_use_block, dict):
            tool_use_id = tool_use_block.get("id", "")
            tool_name = tool_use_block.get("name", "")
            tool_input = tool_use_block.get("input", {})
        else:
            tool_use_id = tool_use_block.id
            tool_name = tool_use_block.name
            tool_input = tool_use_block.input

        outcome = await self.handle(tool_name, tool_input)

        if outcome["status"] == "success":
            return {
                "type": "tool_result",
                "tool_use_id": tool_use_id,
                "content": _dumps(outcome["result"]),
            }
        return {
            "type": "tool_result",
            "tool_use_id": tool_use_id,
            "content": _dumps({"error": outcome["error"]}),
            "is_error": True,
        }

    async def process_openai_tool_call(self, tool_call: Any) -> dict[str, Any]:
        """Process an OpenAI tool call.

        Accepts either a dict or an SDK object with ``.id`` and
        ``.function.name`` / ``.function.arguments``. Returns a ``tool`` role
        message; on failure its JSON content carries an ``"error"`` key.
        """
        if isinstance(tool_call, dict):
            call_id = tool_call.get("id", "")
            function = tool_call.get("function", {})
            name = function.get("name", "")
            raw_arguments = function.get("arguments") or "{}"
        else:
            call_id = tool_call.id
            name = tool_call.function.name
            raw_arguments = tool_call.function.arguments or "{}"

        try:
            arguments = json.loads(raw_arguments)
        except json.JSONDecodeError as exc:
            outcome: dict[str, Any] = {
                "status": "error",
                "error": {"code": "INVALID_ARGUMENTS", "message": f"Malformed JSON arguments: {exc}"},
            }
        else:
            outcome = await self.handle(name, arguments)

        if outcome["status"] == "success":
            content = _dumps(outcome["result"])
        else:
            content = _dumps({"error": outcome["error"], "tool": name})
        return {"role": "tool", "tool_call_id": call_id, "content": content}


def _dumps(value: Any) -> str:
    return json.dumps(value, default=str)


__all__ = ["PaykitToolHandler"]
