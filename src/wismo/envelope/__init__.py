"""Result envelope and per-tool failure policy."""

from .envelope import (
    ContentBlock,
    TextContent,
    ToolEnvelope,
    as_list,
    error_envelope,
    rejection_envelope,
    structured_envelope,
    text_block,
    text_envelope,
)
from .policy import FAILURE_POLICIES, FailurePolicy

__all__ = [
    "ContentBlock", "TextContent", "ToolEnvelope",
    "as_list", "error_envelope", "rejection_envelope", "structured_envelope", "text_block", "text_envelope",
    "FAILURE_POLICIES", "FailurePolicy",
]
