"""
Exceptions raised by kimspect.

Every error carries the operation that failed (``connect``, ``list-pods``,
``list-nodes``, ``render``) so the command line can report it.
"""
from typing import Optional


class KimspectError(Exception):
    """Base class for kimspect failures."""

    label = "Error"

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        text = f"{self.label}: {self.message}"
        if self.operation:
            return f"{self.operation}: {text}"
        return text


class InvalidPattern(KimspectError):
    """Env var filter pattern is not a valid regular expression."""
    label = "Invalid pattern"


class ConfigError(KimspectError):
    """Kubeconfig or in-cluster configuration could not be loaded."""
    label = "Configuration error"


class ConnectivityError(KimspectError):
    """Cluster unreachable, timed out or not accessible."""
    label = "Connection error"


class ApiError(KimspectError):
    """The API server answered with a structured failure."""
    label = "API error"


class RenderError(KimspectError):
    """Table formatting failed; nothing was written."""
    label = "Table display error"
