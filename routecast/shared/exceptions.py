"""Shared (non-domain) exceptions."""


class ToolError(Exception):
    """Tool invocation failed."""

    def __init__(self, tool: str, message: str, *, status_code: int | None = None):
        self.tool = tool
        self.status_code = status_code
        super().__init__(f"[{tool}] {message}")
