"""
Configuration Manager for the catalog engine.

Loads and merges configuration from multiple sources:
- System defaults
- Project configuration (./.content-catalog/config.yaml)
- Explicit configuration (--config file.yaml)
- Environment variables
- CLI arguments (highest precedence)
"""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from catalog.config.environment import EnvironmentVariables
from catalog.config.schema import EngineConfig
from catalog.errors import ConfigurationError


logger = logging.getLogger(__name__)


class ConfigurationManager:
    """Manages configuration loading, validation, and environment variable integration."""

    def __init__(self, project_dir: Optional[Path] = None):
        base = Path(project_dir) if project_dir else Path.cwd()
        self.project_config_path = base / ".content-catalog" / "config.yaml"

    def load_configuration(
        self,
        config_file: Optional[str] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
    ) -> EngineConfig:
        """
        Load configuration from all sources with proper precedence.

        Precedence order (highest to lowest):
        1. CLI arguments (cli_overrides)
        2. Environment variables
        3. Explicit config file (--config)
        4. Project config (./.content-catalog/config.yaml)
        5. System defaults

        Args:
            config_file: Optional explicit configuration file path
            cli_overrides: Dictionary of CLI argument overrides; None values are ignored

        Returns:
            EngineConfig: Merged configuration

        Raises:
            ConfigurationError: If a file is unreadable, not valid YAML,
                contains unknown keys, or the merged values are invalid
        """
        config_dict = asdict(EngineConfig())

        if self.project_config_path.exists():
            config_dict.update(self._load_yaml_file(self.project_config_path))

        if config_file:
            config_dict.update(self._load_yaml_file(Path(config_file)))

        try:
            config_dict.update(EnvironmentVariables.load())
        except ValueError as e:
            raise ConfigurationError(str(e))

        if cli_overrides:
            config_dict.update({k: v for k, v in cli_overrides.items() if v is not None})

        config = EngineConfig(**config_dict)
        errors = config.validate()
        if errors:
            raise ConfigurationError(
                "Invalid configuration:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        logger.debug(f"Configuration loaded: {config}")
        return config

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load a YAML configuration file and check its keys."""
        if not file_path.exists():
            raise ConfigurationError(f"Configuration file not found: {file_path}", str(file_path))

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}", str(file_path))
        except OSError as e:
            raise ConfigurationError(f"Cannot read {file_path}: {e}", str(file_path))

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration in {file_path} must be a mapping, got {type(data).__name__}",
                str(file_path),
            )

        known = set(EngineConfig.field_names())
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration key(s) in {file_path}: {', '.join(unknown)}. "
                f"Valid keys: {', '.join(sorted(known))}",
                str(file_path),
            )

        logger.debug(f"Loaded configuration file {file_path}")
        return data
