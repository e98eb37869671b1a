# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from typing import NoReturn

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from topo_lib.core.click_format import GNUHelpColorsCommand
from topo_lib.core.config import CFG
from topo_lib.plugins.interface import REGISTRY, Capability

console = Console()


@click.command(
    short_help="List available capability plugins.",
    help=f"""List the state store, uploader and launcher plugins known to topo.

The names can be used in the cluster configuration under the keys
{", ".join(f"'{c.key}'" for c in Capability)}.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
def plugins() -> NoReturn:
    """
    Print the names of all registered capability plugins.
    """
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column(
        header=Text("Capability", style=CFG.dry_run_presenter.headers_style)
    )
    table.add_column(header=Text("Key", style=CFG.dry_run_presenter.headers_style))
    table.add_column(
        header=Text("Plugins", style=CFG.dry_run_presenter.headers_style)
    )

    for capability in Capability:
        table.add_row(
            str(capability),
            Text(str(capability.key), style=CFG.dry_run_presenter.notes_style),
            Text(
                ", ".join(REGISTRY.names(capability)) or "-",
                style=CFG.dry_run_presenter.component_style,
            ),
        )

    console.print(table)
    raise SystemExit(CFG.exit_codes.success)
