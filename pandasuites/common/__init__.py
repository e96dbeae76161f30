"""
================================================================================
Common Utilities
================================================================================

Shared configuration management and logging setup.

Exports:
    - ConfigLoader: Singleton YAML + environment configuration
    - ConfigurationError: Raised for unreadable or invalid configuration
    - get_config: Convenience function to get configuration values
    - init_logger: Initialize loguru with the suite's standard settings

Usage:
    from pandasuites.common import get_config, init_logger

    init_logger()
    base_url = get_config("ui.base_url", "https://automationpanda.com/")

================================================================================
"""

from .global_config import (
    ConfigLoader,
    ConfigurationError,
    get_config,
    init_logger,
)

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "get_config",
    "init_logger",
]
