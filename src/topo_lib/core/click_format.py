# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import click
from click import HelpFormatter
from click_help_colors import HelpColorsCommand


class GNUHelpFormatter(HelpFormatter):
    """Help formatter printing every option on its own line followed by an indented description."""

    # indentation of option names and of their descriptions
    TERM_INDENT = 2
    DEFINITION_INDENT = 6

    def __init__(self, width=None, headers_color=None, options_color=None):
        super().__init__(width=width)
        self.headers_color = headers_color or "white"
        self.options_color = options_color or "white"

    def write_heading(self, heading):
        self.write(f"{click.style(heading, fg=self.headers_color, bold=True)}\n")

    def write_usage(self, prog, args="", prefix=None):
        styled_prefix = click.style(prefix or "Usage:", fg=self.headers_color, bold=True)
        self.write(f"{styled_prefix} {prog} {args}".rstrip() + "\n")

    def write_dl(self, rows, col_max=30, col_spacing=2):
        for term, definition in rows:
            styled_term = click.style(term, fg=self.options_color, bold=True)
            self.write(f"{' ' * self.TERM_INDENT}{styled_term}\n")

            for line in (definition or "").splitlines():
                if line.strip():
                    self.write(f"{' ' * self.DEFINITION_INDENT}{line}\n")
            self.write("\n")


class GNUHelpColorsCommand(HelpColorsCommand):
    """Colored click command printing its options in GNU style."""

    def get_help(self, ctx):
        formatter = GNUHelpFormatter(
            width=ctx.terminal_width,
            headers_color=getattr(self, "help_headers_color", None),
            options_color=getattr(self, "help_options_color", None),
        )

        self.format_help(ctx, formatter)
        return formatter.getvalue()
