"""
Validate Subcommand Module

Validates a content version directory (and optionally a directory of bundle
definitions) and prints every issue grouped by document. Exits 1 when the
run has hard errors, or warnings under --strict.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from catalog.validation.engine import ValidationEngine
from .shared_options import (
    bundles_dir_option,
    config_option,
    content_dir_option,
    load_engine_config,
    log_file_option,
    log_level_option,
)


logger = logging.getLogger(__name__)


@click.command(help="Validate a content tree and its bundle definitions")
@content_dir_option()
@bundles_dir_option()
@click.option(
    "--require-fallback-locale",
    is_flag=True,
    help="Treat a localized map without the fallback locale as an error",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on warnings in addition to errors",
)
@click.option(
    "--report", "-r",
    "report_path",
    type=click.Path(),
    help="Output JSON report to this path",
)
@config_option()
@log_level_option()
@log_file_option()
def validate(
    content_dir: str,
    bundles_dir: Optional[str],
    require_fallback_locale: bool,
    strict: bool,
    report_path: Optional[str],
    config: Optional[str],
    log_level: Optional[str],
    log_file: Optional[str],
):
    """Validate a content tree and its bundle definitions.

    Examples:
        # Validate a content version
        content-catalog validate --content-dir content/v1

        # Include bundle definitions
        content-catalog validate --content-dir content/v1 --bundles-dir bundles

        # Strict mode (fail on warnings) with a JSON report
        content-catalog validate -c content/v1 --strict --report report.json
    """
    engine_config = load_engine_config(config, log_level, {
        "strict": True if strict else None,
        "require_fallback_locale": True if require_fallback_locale else None,
    }, log_file=log_file)
    engine = ValidationEngine(engine_config)

    try:
        report = engine.validate_directory(content_dir, bundles_dir)
    except FileNotFoundError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    # Display human-readable output
    click.echo(report.format_human())

    # Write JSON report if requested
    if report_path:
        _write_report(report_path, report.to_dict())
        click.echo(f"\nReport saved: {report_path}")

    if not report.is_valid:
        sys.exit(1)


def _write_report(path: str, data: dict):
    """Write a JSON report to disk."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
