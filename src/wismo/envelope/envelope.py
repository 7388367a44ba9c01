"""Uniform result shape returned by every tool.

A ``ToolEnvelope`` carries human-readable content blocks, optional
structured content for machine consumption, and an error flag. The
protocol layer turns it into an MCP ``CallToolResult`` with
``to_result()`` and never special-cases individual tools.
"""

from __future__ import annotations

from typing import Any

from mcp import types
from pydantic import BaseModel, ConfigDict, Field, computed_field

from wismo.foundation.errors import JsonValue, ToolError

TextContent = types.TextContent

# Only text blocks are produced today; widen to types.ContentBlock when more kinds appear
ContentBlock = TextContent


class ToolEnvelope(BaseModel):
    """Result of one tool invocation.

    Attributes:
        content: Human-readable blocks, in order
        structured_content: Machine-readable payload; always a list when set
        is_error: Whether this invocation failed (as opposed to succeeding
            with nothing structured to report)
        rejection: Set only when the dispatcher refused the call itself
            (unknown tool, bad parameters); never serialized
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: list[ContentBlock] = Field(default_factory=list)
    structured_content: list[Any] | None = Field(default=None, alias="structuredContent")
    is_error: bool = Field(default=False, alias="isError")
    rejection: ToolError | None = Field(default=None, exclude=True)

    @computed_field
    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)

    @property
    def is_rejection(self) -> bool:
        return self.rejection is not None

    def to_result(self) -> types.CallToolResult:
        """Protocol form of this envelope.

        ``CallToolResult`` declares ``structuredContent`` as an object while
        order payloads are lists, so the result is built without revalidation
        and the list is carried through as is.
        """
        return types.CallToolResult.model_construct(
            content=list(self.content),
            structuredContent=self.structured_content,
            isError=self.is_error,
        )


def as_list(payload: JsonValue) -> list[Any]:
    """Normalize a backend payload to a list: a lone object becomes a one-element list."""
    return payload if isinstance(payload, list) else [payload]


def text_block(text: str) -> TextContent:
    return TextContent(type="text", text=text)


def text_envelope(text: str, *, is_error: bool = False) -> ToolEnvelope:
    return ToolEnvelope(content=[text_block(text)], is_error=is_error)


def error_envelope(text: str) -> ToolEnvelope:
    return text_envelope(text, is_error=True)


def structured_envelope(payload: JsonValue) -> ToolEnvelope:
    """Success with structured content and no text blocks."""
    return ToolEnvelope(content=[], structured_content=as_list(payload))


def rejection_envelope(error: ToolError) -> ToolEnvelope:
    """Dispatcher refusal: flagged as an error and tagged with the ToolError that caused it."""
    return ToolEnvelope(content=[text_block(error.message)], is_error=True, rejection=error)
