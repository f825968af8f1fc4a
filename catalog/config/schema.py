"""
Configuration schema for the catalog engine.

Defines the EngineConfig dataclass consumed by the validators and the
bundle resolver.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import List, Optional


class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class EngineConfig:
    """Complete engine configuration.

    Attributes:
        version_prefix: Content-version prefix every cross-document path must start with
        fallback_locale: Canonical locale expected in every localized-string map
        require_fallback_locale: Escalate a missing fallback locale from warning to error
        strict: Treat warnings as failures when computing the run verdict
        short_title_max_length: Max characters per locale for shortTitle-family maps
        title_max_length: Max characters per locale for title-family maps
        description_max_length: Max characters per locale for description-family maps
        group_title_max_length: Max characters for groupTitle and each groupTitle_i18n locale
        log_level: Logging level (debug, info, warning, error)
        log_file: Optional log file path; rotated, written alongside stderr output
    """
    version_prefix: str = "/v1/"
    fallback_locale: str = "en"
    require_fallback_locale: bool = False
    strict: bool = False
    short_title_max_length: int = 28
    title_max_length: int = 80
    description_max_length: int = 500
    group_title_max_length: int = 60
    log_level: str = LogLevel.INFO.value
    log_file: Optional[str] = None

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.version_prefix.startswith("/") or not self.version_prefix.endswith("/"):
            errors.append(
                f"Invalid version_prefix '{self.version_prefix}'. "
                "Must start and end with '/' (e.g. /v1/)"
            )

        if not self.fallback_locale:
            errors.append("fallback_locale must not be empty")

        try:
            LogLevel(self.log_level)
        except ValueError:
            valid_levels = [l.value for l in LogLevel]
            errors.append(f"Invalid log_level '{self.log_level}'. Valid options: {valid_levels}")

        if self.log_file is not None and not isinstance(self.log_file, str):
            errors.append("log_file must be a file path")

        for name in (
            "short_title_max_length",
            "title_max_length",
            "description_max_length",
            "group_title_max_length",
        ):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be positive")

        return errors

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]
