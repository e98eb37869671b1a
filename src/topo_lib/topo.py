# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys

import click
from click_help_colors import HelpColorsGroup

# importing the plugins package registers the built-in plugins
from topo_lib.plugins.cli import plugins
from topo_lib.submit.cli import submit

__version__ = "0.3.0"

# support both --help and -h
_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    cls=HelpColorsGroup,
    help_options_color="bright_blue",
    invoke_without_command=True,
    context_settings=_CONTEXT_SETTINGS,
)
@click.option(
    "--version",
    is_flag=True,
    help="Print the current version of topo and exit.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool):
    """
    Run any topo command.

    topo submits packaged stream-processing jobs to a cluster through pluggable
    state store, uploader and launcher backends.
    """
    if version:
        print(__version__)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(0)


cli.add_command(submit)
cli.add_command(plugins)
