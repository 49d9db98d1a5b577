"""
Errors raised by the routing core.

The MCP layer translates these into tool errors; anything not listed here
propagates unchanged.
"""

from typing import Optional


class SonarRouterError(Exception):
    """Base class for routing errors."""


class UnknownOperationError(SonarRouterError):
    """Raised when an operation name matches none of the known operations."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class BackendError(SonarRouterError):
    """Raised when the completion backend call fails (transport or API-level)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ConfigError(SonarRouterError):
    """Raised when required configuration (e.g. the API key) is missing."""
