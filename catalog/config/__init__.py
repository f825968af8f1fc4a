"""
Configuration for the catalog engine.

Defaults, YAML files, environment variables and CLI overrides are merged
by ConfigurationManager into a single EngineConfig.
"""

from catalog.config.schema import EngineConfig, LogLevel
from catalog.config.manager import ConfigurationManager
from catalog.config.environment import EnvironmentVariables

__all__ = [
    "EngineConfig",
    "LogLevel",
    "ConfigurationManager",
    "EnvironmentVariables",
]
