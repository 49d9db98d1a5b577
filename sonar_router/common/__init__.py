"""
Sonar Router Common Module

Shared infrastructure: configuration, errors and the completion client.
"""

from .config import SonarConfig, load_config, require_api_key
from .completion_client import BackendSettings, CompletionClient, CompletionResult
from .errors import BackendError, ConfigError, SonarRouterError, UnknownOperationError

__all__ = [
    "SonarConfig",
    "load_config",
    "require_api_key",
    "BackendSettings",
    "CompletionClient",
    "CompletionResult",
    "BackendError",
    "ConfigError",
    "SonarRouterError",
    "UnknownOperationError",
]
