"""Tool registry and dispatcher."""

from .registry import ToolRegistry, create_registry

__all__ = ["ToolRegistry", "create_registry"]
