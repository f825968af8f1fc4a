"""
Shared CLI Option Decorators

Reusable Click decorators for the options that several subcommands accept,
plus the configuration bootstrap they share.
"""

import sys
from typing import Any, Dict, Optional

import click

from catalog.config import ConfigurationManager, EngineConfig
from catalog.errors import ConfigurationError
from catalog.utils.logging_config import configure_logging


def content_dir_option(help=None):
    """Decorator for the content version directory option."""
    def decorator(f):
        return click.option(
            '--content-dir', '-c',
            required=True,
            type=click.Path(),
            help=help or 'Content version directory (e.g. content/v1)'
        )(f)
    return decorator

def bundles_dir_option(required=False, help=None):
    """Decorator for the bundle definitions directory option."""
    def decorator(f):
        return click.option(
            '--bundles-dir', '-b',
            required=required,
            default=None,
            type=click.Path(),
            help=help or 'Directory of bundle definition files'
        )(f)
    return decorator

def config_option(help=None):
    """Decorator for configuration file options."""
    def decorator(f):
        return click.option(
            '--config',
            default=None,
            help=help or 'Path to configuration file'
        )(f)
    return decorator

def log_level_option(help=None):
    """Decorator for logging level options."""
    def decorator(f):
        return click.option(
            '--log-level',
            default=None,
            type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
            help=help or 'Logging level (overrides config)'
        )(f)
    return decorator

def log_file_option(help=None):
    """Decorator for the log file option."""
    def decorator(f):
        return click.option(
            '--log-file',
            default=None,
            type=click.Path(),
            help=help or 'Also write logs to this file (overrides config)'
        )(f)
    return decorator


def load_engine_config(
    config_file: Optional[str],
    log_level: Optional[str],
    overrides: Optional[Dict[str, Any]] = None,
    log_file: Optional[str] = None,
) -> EngineConfig:
    """Merge configuration sources and configure logging, exiting 1 on bad config."""
    cli_overrides = dict(overrides or {})
    cli_overrides["log_level"] = log_level.lower() if log_level else None
    cli_overrides["log_file"] = log_file

    try:
        config = ConfigurationManager().load_configuration(config_file, cli_overrides)
    except ConfigurationError as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)

    configure_logging(config.log_level, config.log_file)
    return config
