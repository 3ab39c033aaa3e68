"""
bubo/tools/errors.py
====================

Exception kinds raised at the tool layer.

Every class carries a short machine-readable ``code`` so the agent can tell
the model *what kind* of failure happened without parsing message text.
Failures raised by the wrapped SDKs themselves (Firebase, Drive, pandas) are
not wrapped; they propagate unmodified.
"""

from typing import Any, List, Optional


class ToolError(RuntimeError):
    """Base class for failures detected by the tool layer itself."""

    code = "tool_error"

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class ToolNotFoundError(ToolError):
    code = "unknown_tool"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.tool_name = name


class ToolInputError(ToolError):
    """Raised when tool arguments do not match the tool's input schema."""

    code = "invalid_input"

    def __init__(self, name: str, errors: List[Any]):
        fields = ", ".join(
            ".".join(str(p) for p in err.get("loc", ())) or "<root>" for err in errors
        )
        super().__init__(f"Invalid input for tool '{name}': {fields}")
        self.tool_name = name
        self.errors = errors


class ServiceUnavailableError(ToolError):
    """Raised when a tool needs an integration that was not configured."""

    code = "service_unavailable"

    def __init__(self, service: str, reason: str):
        super().__init__(f"{service} is not available: {reason}")
        self.service = service
