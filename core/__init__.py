"""
Core Module - Foundation components for the Tech Support Responder
==================================================================

This module provides the foundational components including:
- Configuration management
- Logging setup
- Exception handling
"""

from .config import Config, ResponderConfig, ConsoleConfig, load_config, save_config
from .exceptions import (
    TechSupportError,
    ConfigError,
    ResourceError,
    ResourceNotFoundError,
    ResourceUnreadableError,
    NoDefaultResponsesError,
)
from .logging import setup_logging, get_logger

__all__ = [
    "Config",
    "ResponderConfig",
    "ConsoleConfig",
    "load_config",
    "save_config",
    "TechSupportError",
    "ConfigError",
    "ResourceError",
    "ResourceNotFoundError",
    "ResourceUnreadableError",
    "NoDefaultResponsesError",
    "setup_logging",
    "get_logger",
]
