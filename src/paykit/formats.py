"""Render paykit tools in the formats LLM provider APIs expect.

OpenAI function calling::

    response = client.chat.completions.create(
        model="gpt-4o",
        messages=[...],
        tools=to_openai_tools(toolkit.get_tools()),
    )

Anthropic tool use::

    response = client.messages.create(
        model="claude-sonnet-4-5",
        tools=to_anthropic_tools(toolkit.get_tools()),
        messages=[...],
    )
"""
from __future__ import annotations

from typing import Any, Iterable

from .tools import PaykitTool


def to_openai_tool(tool: PaykitTool) -> dict[str, Any]:
    """OpenAI ``{"type": "function", ...}`` definition for one tool."""
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.parameters_json_schema(),
        },
    }


def to_anthropic_tool(tool: PaykitTool) -> dict[str, Any]:
    """Anthropic Messages API tool definition for one tool."""
    return {
        "name": tool.name,
        "description": tool.description,
        "input_schema": tool.parameters_json_schema(),
    }


def to_openai_tools(tools: Iterable[PaykitTool]) -> list[dict[str, Any]]:
    return [to_openai_tool(t) for t in tools]


def to_anthropic_tools(tools: Iterable[PaykitTool]) -> list[dict[str, Any]]:
    return [to_anthropic_tool(t) for t in tools]


__all__ = [
    "to_anthropic_tool",
    "to_anthropic_tools",
    "to_openai_tool",
    "to_openai_tools",
]
