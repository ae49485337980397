"""Shared cross-layer types and exceptions."""

from routecast.shared.exceptions import ToolError

__all__ = ["ToolError"]
