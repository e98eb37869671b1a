# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import io
from abc import ABC, abstractmethod

import yaml
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from tabulate import tabulate

from topo_lib.core.common import load_yaml_dumper
from topo_lib.core.config import CFG
from topo_lib.core.logger import get_logger
from topo_lib.properties.dry_run_format import DryRunFormat

from .response import DryRunResponse

logger = get_logger(__name__)

Dumper: type[yaml.Dumper] = load_yaml_dumper()


class DryRunRenderer(ABC):
    """
    Converts a dry-run response to human-readable text.
    """

    @abstractmethod
    def render(self, response: DryRunResponse) -> str:
        """
        Render the dry-run response.

        Args:
            response (DryRunResponse): The response to render.

        Returns:
            str: The rendered text, ending with a newline.
        """
        pass


class RawDryRunRenderer(DryRunRenderer):
    """
    Renders a dry-run response as plain text followed by the complete configuration.
    """

    def render(self, response: DryRunResponse) -> str:
        summary = tabulate(
            [(f"{key}:", _display(value)) for key, value in response.getSummary().items()],
            tablefmt="plain",
        )

        components = tabulate(
            [
                (c.name, c.kind, c.parallelism, ", ".join(c.inputs) or "-")
                for c in response.job.components
            ],
            headers=["Component", "Kind", "Parallelism", "Inputs"],
            tablefmt="plain",
        )

        plan = tabulate(
            [
                (c.id, len(c.instances), ", ".join(c.instances) or "job master")
                for c in response.plan.containers
            ],
            headers=["Container", "Instances", "Placement"],
            tablefmt="plain",
        )

        config = yaml.dump(
            response.toDict()["config"],
            Dumper=Dumper,
            default_flow_style=False,
            sort_keys=True,
            allow_unicode=True,
        )

        return (
            f"Job '{response.job.name}' would be submitted with the following parameters.\n\n"
            f"{summary}\n\n"
            f"{components}\n\n"
            f"{plan}\n\n"
            f"Configuration:\n{config}"
        )


class TableDryRunRenderer(DryRunRenderer):
    """
    Renders a dry-run response as a panel with a summary, the components and the packing plan.
    """

    # whether ANSI colors are emitted
    COLORED = False

    def render(self, response: DryRunResponse) -> str:
        buffer = io.StringIO()
        console = Console(
            file=buffer,
            width=CFG.dry_run_presenter.width,
            force_terminal=self.COLORED,
            color_system="standard" if self.COLORED else None,
            highlight=False,
        )
        console.print(self._createPanel(response))
        return buffer.getvalue()

    def _createPanel(self, response: DryRunResponse) -> Group:
        """
        Create the panel containing all information about the dry-run.
        """
        settings = CFG.dry_run_presenter
        content = Group(
            self._createSummaryTable(response),
            Text(""),
            self._createComponentsTable(response),
            Text(""),
            self._createPlanTable(response),
        )

        panel = Panel(
            content,
            title=Text(
                f"DRY-RUN: {response.job.name}",
                style=settings.title_style,
                justify="center",
            ),
            border_style=settings.border_style,
            padding=(1, 2),
            expand=False,
        )

        return Group(panel)

    def _createSummaryTable(self, response: DryRunResponse) -> Table:
        """
        Create a two-column table with the summary of the submission.
        """
        settings = CFG.dry_run_presenter
        table = Table.grid(padding=(0, 3))
        table.add_column(justify="right", style=settings.key_style, no_wrap=True)
        table.add_column(justify="left", style=settings.value_style)

        for key, value in response.getSummary().items():
            table.add_row(f"{key}:", Text(_display(value)))

        return table

    def _createComponentsTable(self, response: DryRunResponse) -> Table:
        """
        Create a table listing the components of the job.
        """
        settings = CFG.dry_run_presenter
        table = Table(show_header=True, box=None, padding=(0, 2))

        for header, justify in (
            ("Component", "left"),
            ("Kind", "left"),
            ("Parallelism", "right"),
            ("Inputs", "left"),
        ):
            table.add_column(
                header=Text(header, justify="center", style=settings.headers_style),
                justify=justify,
            )

        for component in response.job.components:
            table.add_row(
                Text(component.name, style=settings.component_style),
                component.kind,
                str(component.parallelism),
                Text(", ".join(component.inputs) or "-", style=settings.notes_style),
            )

        if not response.job.components:
            table.add_row(Text("no components", style=settings.notes_style), "", "", "")

        return table

    def _createPlanTable(self, response: DryRunResponse) -> Table:
        """
        Create a table showing the instances placed into each container.
        """
        settings = CFG.dry_run_presenter
        table = Table(show_header=True, box=None, padding=(0, 2))

        for header, justify in (
            ("Container", "right"),
            ("Instances", "right"),
            ("Placement", "left"),
        ):
            table.add_column(
                header=Text(header, justify="center", style=settings.headers_style),
                justify=justify,
            )

        for container in response.plan.containers:
            table.add_row(
                str(container.id),
                str(len(container.instances)),
                Text(
                    ", ".join(container.instances),
                    style=settings.component_style,
                )
                if container.instances
                else Text("job master", style=settings.notes_style),
            )

        return table


class ColoredTableDryRunRenderer(TableDryRunRenderer):
    """
    Renders a dry-run response like `TableDryRunRenderer` but with ANSI colors.
    """

    COLORED = True


_RENDERERS: dict[DryRunFormat, type[DryRunRenderer]] = {
    DryRunFormat.RAW: RawDryRunRenderer,
    DryRunFormat.TABLE: TableDryRunRenderer,
    DryRunFormat.COLORED_TABLE: ColoredTableDryRunRenderer,
}


def get_renderer(format: DryRunFormat | str) -> DryRunRenderer:
    """
    Select the renderer for the requested format.

    Raises:
        UnsupportedFormatError: If the format is not supported.
    """
    if not isinstance(format, DryRunFormat):
        format = DryRunFormat.fromStr(format)

    logger.debug(f"Rendering dry-run response using format '{format}'.")
    return _RENDERERS[format]()


def _display(value: object) -> str:
    """Convert a summary value to a displayable string."""
    return "-" if value is None else str(value)
