"""
Environment variable integration for the catalog engine.

Centralizes the supported environment variable names and converts their
string values into configuration values.
"""

import os
from typing import Any, Dict


TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


class EnvironmentVariables:
    """Centralized environment variable definitions and utilities."""

    VERSION_PREFIX = "CONTENT_CATALOG_VERSION_PREFIX"
    FALLBACK_LOCALE = "CONTENT_CATALOG_FALLBACK_LOCALE"
    REQUIRE_FALLBACK_LOCALE = "CONTENT_CATALOG_REQUIRE_FALLBACK_LOCALE"
    STRICT = "CONTENT_CATALOG_STRICT"
    LOG_LEVEL = "CONTENT_CATALOG_LOG_LEVEL"
    LOG_FILE = "CONTENT_CATALOG_LOG_FILE"

    # variable name -> (config key, is_boolean)
    MAPPING = {
        VERSION_PREFIX: ("version_prefix", False),
        FALLBACK_LOCALE: ("fallback_locale", False),
        REQUIRE_FALLBACK_LOCALE: ("require_fallback_locale", True),
        STRICT: ("strict", True),
        LOG_LEVEL: ("log_level", False),
        LOG_FILE: ("log_file", False),
    }

    @classmethod
    def get_variable_documentation(cls) -> Dict[str, str]:
        """Get documentation for all environment variables."""
        return {
            cls.VERSION_PREFIX: "Content-version path prefix (default: /v1/)",
            cls.FALLBACK_LOCALE: "Canonical fallback locale for localized maps (default: en)",
            cls.REQUIRE_FALLBACK_LOCALE: "Treat a missing fallback locale as an error (true/false)",
            cls.STRICT: "Fail validation runs on warnings (true/false)",
            cls.LOG_LEVEL: "Default logging level (debug, info, warning, error)",
            cls.LOG_FILE: "Write logs to this file as well (rotated at 10MB)",
        }

    @staticmethod
    def parse_bool(name: str, value: str) -> bool:
        """Parse a boolean environment value.

        Raises:
            ValueError: If the value is not a recognised boolean literal.
        """
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise ValueError(
            f"Invalid boolean for {name}: '{value}'. "
            f"Use one of: {', '.join(sorted(TRUE_VALUES | FALSE_VALUES))}"
        )

    @classmethod
    def load(cls) -> Dict[str, Any]:
        """Read all supported variables that are set into a config dict."""
        env_config: Dict[str, Any] = {}
        for name, (key, is_bool) in cls.MAPPING.items():
            if name not in os.environ:
                continue
            raw = os.environ[name]
            env_config[key] = cls.parse_bool(name, raw) if is_bool else raw
        return env_config
