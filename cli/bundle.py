"""
Bundle Subcommand Module

Resolves bundle definitions against a content tree and lists the bundle
definitions of a directory.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from catalog.bundles.loader import BundleLoader
from catalog.bundles.resolver import BundleResolver
from catalog.errors import BundleNotFoundError, BundleResolutionError, SchemaError
from catalog.snapshot import ContentTreeLoader
from .shared_options import (
    bundles_dir_option,
    config_option,
    content_dir_option,
    load_engine_config,
    log_file_option,
    log_level_option,
)


logger = logging.getLogger(__name__)


@click.group(help="Resolve and list bundle definitions")
def bundle():
    """Bundle commands."""
    pass


@bundle.command(help="Resolve one bundle into its ordered item list")
@content_dir_option()
@bundles_dir_option(required=True)
@click.option(
    "--bundle", "bundle_id",
    required=True,
    help="Id of the bundle to resolve",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write the resolved bundle JSON to this path instead of stdout",
)
@config_option()
@log_level_option()
@log_file_option()
def resolve(
    content_dir: str,
    bundles_dir: str,
    bundle_id: str,
    output: Optional[str],
    config: Optional[str],
    log_level: Optional[str],
    log_file: Optional[str],
):
    """Resolve one bundle into its ordered item list.

    Examples:
        content-catalog bundle resolve -c content/v1 -b bundles --bundle doctor-a1
        content-catalog bundle resolve -c content/v1 -b bundles --bundle doctor-a1 -o out.json
    """
    engine_config = load_engine_config(config, log_level, log_file=log_file)

    try:
        snapshot = ContentTreeLoader(content_dir, version_prefix=engine_config.version_prefix).load()
    except FileNotFoundError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    loader = BundleLoader(bundles_dir)
    try:
        definition = loader.load_bundle(bundle_id)
    except BundleNotFoundError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    try:
        resolved = BundleResolver(snapshot, engine_config).resolve(definition)
    except SchemaError as e:
        click.echo(f"❌ {e}", err=True)
        for issue in e.issues:
            click.echo(f"    {issue.field}: {issue.message}", err=True)
        sys.exit(1)
    except BundleResolutionError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    payload = resolved.to_json()
    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        click.echo(
            f"✅ {resolved.bundle_id}: {len(resolved.items)} item(s), "
            f"{resolved.total_minutes} min -> {output}"
        )
    else:
        click.echo(payload)


@bundle.command(name="list", help="List the bundle definitions of a directory")
@bundles_dir_option(required=True)
def list_bundles(bundles_dir: str):
    """List the bundle definitions of a directory."""
    loader = BundleLoader(bundles_dir)

    for issue in loader.issues:
        click.echo(f"⚠ {issue.document}: {issue.message}", err=True)

    if not loader.get_bundle_names():
        click.echo(f"No bundles found in {bundles_dir}")
        return

    click.echo(loader.format_bundle_list())
