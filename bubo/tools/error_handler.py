"""
bubo/tools/error_handler.py
===========================

Classifies tool failures into a short ``type`` plus a plain-English message.

When a tool fails during an agent turn, the exception is not shown to the
model verbatim.  ``ErrorHandler.classify`` maps it onto one of a small set of
error types so the model can tell the user something useful ("the Drive
authorisation is missing") instead of echoing a stack trace.

Matching order:

1. Tool-layer errors (``ToolError`` subclasses) - by their ``code``.
2. Known exception types from the wrapped SDKs.
3. Google API ``HttpError`` - by HTTP status.
4. Fallback ``ToolFailure``.
"""

from typing import Dict, Tuple

from firebase_admin import exceptions as firebase_exceptions
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from .errors import ToolError


class ErrorHandler:
    """Translates raw exceptions into ``(error_type, message)`` pairs.

    Attributes
    ----------
    TOOL_ERRORS:
        Map of ``ToolError.code`` → error type.
    HTTP_ERRORS:
        Map of Google API HTTP status → ``{type, message}``.
    """

    TOOL_ERRORS: Dict[str, str] = {
        "unknown_tool": "UnknownTool",
        "invalid_input": "InvalidInput",
        "service_unavailable": "ServiceUnavailable",
    }

    HTTP_ERRORS: Dict[int, dict] = {
        401: {
            "type": "AuthorizationRequired",
            "message": "Google rejected the stored credentials. A new refresh token is needed.",
        },
        403: {
            "type": "PermissionDenied",
            "message": "The authorised Google account cannot access this resource.",
        },
        404: {
            "type": "NotFound",
            "message": "The requested Google resource does not exist.",
        },
    }

    @staticmethod
    def classify(error: Exception) -> Tuple[str, str]:
        """Return ``(error_type, message)`` for ``error``."""
        if isinstance(error, ToolError):
            return ErrorHandler.TOOL_ERRORS.get(error.code, "ToolError"), str(error)

        if isinstance(error, FileNotFoundError):
            return "FileNotFound", f"No such file: {error.filename or error}"

        if isinstance(error, RefreshError):
            return (
                "AuthorizationRequired",
                "Google credentials could not be refreshed. Run the OAuth setup "
                "script and set GOOGLE_REFRESH_TOKEN.",
            )

        if isinstance(error, HttpError):
            status = getattr(error.resp, "status", None)
            info = ErrorHandler.HTTP_ERRORS.get(int(status)) if status else None
            if info:
                return info["type"], info["message"]
            return "GoogleApiError", str(error)

        if isinstance(error, firebase_exceptions.FirebaseError):
            return "RealtimeDatabaseError", str(error)

        return "ToolFailure", str(error) or type(error).__name__

    @staticmethod
    def to_payload(error: Exception) -> dict:
        """Render ``error`` as the function-response payload sent to Gemini."""
        error_type, message = ErrorHandler.classify(error)
        return {"error": {"type": error_type, "message": message}}
