"""Core tool abstractions.

- BaseTool: Abstract base class for backend-forwarding tools
- ToolMetadata: Tool metadata shown to callers
- RenderMode: How a successful payload is rendered
"""

from .base import BaseTool, RenderMode, TParams, ToolMetadata, dump_json

__all__ = ["BaseTool", "RenderMode", "TParams", "ToolMetadata", "dump_json"]
