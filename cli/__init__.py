"""
CLI Package for the Content Catalog

This package provides the command line interface using Click groups and
subcommands. Each subcommand is implemented in its own module.

The main entry point is the main() function which creates a Click group and
registers all available subcommands. The cli() function serves as the
console script entry point for setup.py.
"""

import os
import click
from dotenv import load_dotenv

from catalog import __version__

# Load environment variables from .env files
# Priority: .env.dev (if exists) overrides .env
if os.path.exists('.env.dev'):
    load_dotenv('.env.dev')
elif os.path.exists('.env'):
    load_dotenv('.env')
from .validate import validate
from .bundle import bundle


@click.group()
@click.version_option(version=__version__, prog_name='content-catalog')
def main():
    """Content Catalog CLI - Validate content trees and resolve bundles.

    Checks a versioned content tree (catalogs, paginated indexes, packs) for
    schema, reference, pagination and localization problems, and resolves
    bundle definitions into ordered lists of content items.
    """
    pass

# Register subcommands
main.add_command(validate)
main.add_command(bundle)

# Entry point for setup.py console script
def cli():
    """Console script entry point.

    This function is called when the content-catalog command is executed
    from the command line after installation via pip.
    """
    main()
