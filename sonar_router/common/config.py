"""
Configuration Management for Sonar Router

Loads configuration from a directory-scoped sonar.config.json and
environment variables.
"""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigError

logger = logging.getLogger("sonar.common.config")

CONFIG_FILENAME = "sonar.config.json"

DEFAULT_BASE_URL = "https://api.perplexity.ai"
DEFAULT_TIMEOUT = 300.0  # deep research requests routinely take minutes
DEFAULT_SERVER_NAME = "perplexity-server"


@dataclass
class PerplexityConfig:
    """Perplexity API configuration"""
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class ServerConfig:
    """MCP server configuration"""
    name: str = DEFAULT_SERVER_NAME
    log_level: str = "INFO"


@dataclass
class SonarConfig:
    """Main Sonar Router configuration"""
    perplexity: PerplexityConfig = field(default_factory=PerplexityConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    api_key_source: str = ""  # "argument", "environment", "config_file" or ""


def _parse_perplexity_config(data: dict) -> PerplexityConfig:
    """Parse perplexity section from config dict"""
    perplexity_data = data.get("perplexity", {})
    return PerplexityConfig(
        api_key=perplexity_data.get("api_key", ""),
        base_url=perplexity_data.get("base_url", DEFAULT_BASE_URL),
        timeout=float(perplexity_data.get("timeout", DEFAULT_TIMEOUT)),
    )


def _parse_server_config(data: dict) -> ServerConfig:
    """Parse server section from config dict"""
    server_data = data.get("server", {})
    return ServerConfig(
        name=server_data.get("name", DEFAULT_SERVER_NAME),
        log_level=server_data.get("log_level", "INFO"),
    )


def load_config(
    api_key: Optional[str] = None,
    config_dir: Optional[Path] = None,
) -> SonarConfig:
    """
    Load configuration from arguments, environment variables and file.

    Priority (highest to lowest):
    1. Explicit arguments (``api_key``)
    2. Environment variables
    3. Config file (``<config_dir>/sonar.config.json``, default: cwd)
    4. Default values
    """
    config = SonarConfig()
    config_path = Path(config_dir or Path.cwd()) / CONFIG_FILENAME

    if config_path.exists():
        try:
            with open(config_path) as f:
                data = json.load(f)

            config.perplexity = _parse_perplexity_config(data)
            config.server = _parse_server_config(data)
            if config.perplexity.api_key:
                config.api_key_source = "config_file"
            logger.info("Loaded config from %s", config_path)
        except (json.JSONDecodeError, IOError, ValueError) as e:
            logger.warning("Failed to load config file %s: %s", config_path, e)

    # Environment variable overrides
    if os.getenv("PERPLEXITY_API_KEY"):
        config.perplexity.api_key = os.getenv("PERPLEXITY_API_KEY")
        config.api_key_source = "environment"
    if os.getenv("PERPLEXITY_BASE_URL"):
        config.perplexity.base_url = os.getenv("PERPLEXITY_BASE_URL")
    if os.getenv("PERPLEXITY_TIMEOUT"):
        config.perplexity.timeout = float(os.getenv("PERPLEXITY_TIMEOUT"))
    if os.getenv("MCP_SERVER_NAME"):
        config.server.name = os.getenv("MCP_SERVER_NAME")
    if os.getenv("SONAR_LOG_LEVEL"):
        config.server.log_level = os.getenv("SONAR_LOG_LEVEL")

    if api_key:
        config.perplexity.api_key = api_key
        config.api_key_source = "argument"

    return config


def require_api_key(config: SonarConfig) -> str:
    """Return the resolved API key or raise ConfigError if none was found."""
    if not config.perplexity.api_key:
        raise ConfigError(
            "PERPLEXITY_API_KEY is required. Pass --api-key, set the environment "
            f"variable, or add perplexity.api_key to {CONFIG_FILENAME}."
        )
    return config.perplexity.api_key
