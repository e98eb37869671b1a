# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from typing import NoReturn

import click
from click_option_group import optgroup

from topo_lib.core.click_format import GNUHelpColorsCommand
from topo_lib.core.config import CFG
from topo_lib.core.context import ConfigContext, Key
from topo_lib.core.error import TopoError
from topo_lib.core.logger import enable_debug, get_logger
from topo_lib.dryrun import get_renderer
from topo_lib.submit.factory import OrchestratorFactory
from topo_lib.submit.outcome import DryRun, Failure, SubmissionOutcome, Success

logger = get_logger(__name__)


@click.command(
    short_help="Submit a job to a cluster.",
    help=f"""
Upload the job package and launch the job on the specified cluster.

Exit codes:
  {CFG.exit_codes.success}        the job was submitted
  1-99     submission could not be started (invalid options or configuration)
  100-199  the submission failed; the reason is printed to standard output
  200+     a dry-run response was printed to standard output

With `--dry-run`, nothing is uploaded, launched or registered.
""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@optgroup.group(f"{click.style('Cluster', fg='yellow')}")
@optgroup.option(
    "--cluster",
    "-c",
    type=str,
    required=True,
    help="Name of the cluster to run the job on.",
)
@optgroup.option(
    "--role",
    "-r",
    type=str,
    required=True,
    help="Role under which the job runs.",
)
@optgroup.option(
    "--environment",
    "-e",
    type=str,
    required=True,
    help="Environment under which the job runs.",
)
@optgroup.group(f"{click.style('Configuration', fg='yellow')}")
@optgroup.option(
    "--install-dir",
    "-d",
    type=str,
    required=True,
    help="Directory where topo is installed.",
)
@optgroup.option(
    "--config-path",
    "-p",
    type=str,
    required=True,
    help="Directory containing the configuration files of the cluster.",
)
@optgroup.option(
    "--override-config-file",
    "-o",
    type=str,
    default=None,
    help="YAML file with configuration overriding the cluster configuration.",
)
@optgroup.option(
    "--config-property",
    "-P",
    type=str,
    multiple=True,
    help="Configuration property in the format KEY=VALUE overriding all configuration files. Can be repeated.",
)
@optgroup.option(
    "--release-file",
    "-b",
    type=str,
    default=None,
    help="YAML file with release information.",
)
@optgroup.group(f"{click.style('Job', fg='yellow')}")
@optgroup.option(
    "--job-package",
    "-y",
    type=str,
    required=True,
    help="Archive containing the job binary, definition and configuration.",
)
@optgroup.option(
    "--job-defn",
    "-f",
    type=str,
    required=True,
    help="File containing the job definition (YAML or JSON).",
)
@optgroup.option(
    "--job-bin",
    "-j",
    type=str,
    required=True,
    help="Job binary file (jar, tar or pex).",
)
@optgroup.group(f"{click.style('Dry-run', fg='yellow')}")
@optgroup.option(
    "--dry-run",
    "-u",
    is_flag=True,
    help="Only print what would be submitted without contacting the cluster.",
)
@optgroup.option(
    "--dry-run-format",
    "-t",
    type=str,
    default=None,
    help=f"Format of the dry-run response: raw, table or colored_table. Defaults to '{CFG.dry_run_presenter.default_format}'.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logs.")
def submit(**kwargs) -> NoReturn:
    """
    Submit a job to a cluster from the command line.
    """
    if kwargs.get("verbose"):
        enable_debug()

    try:
        orchestrator = OrchestratorFactory(**kwargs).makeOrchestrator()
    except TopoError as e:
        logger.error(e)
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)

    outcome = orchestrator.submit()
    sys.exit(report_outcome(outcome, orchestrator.getConfig()))


def report_outcome(outcome: SubmissionOutcome, config: ConfigContext) -> int:
    """
    Print the result of a submission and return the exit code of the process.

    Failure messages and dry-run responses are written to standard output,
    which is where a supervising process reads them from.
    """
    match outcome:
        case Success():
            logger.debug(f"Job '{config.get(Key.JOB_NAME)}' submitted successfully.")
            return outcome.exit_code

        case DryRun(response=response):
            logger.debug("Sending out dry-run response.")
            try:
                renderer = get_renderer(
                    config.get(Key.DRY_RUN_FORMAT, CFG.dry_run_presenter.default_format)
                )
                text = renderer.render(response)
            except TopoError as e:
                return report_outcome(Failure.fromException(e), config)

            write_stdout(text)
            return outcome.exit_code

        case Failure():
            logger.debug(f"Submission failed: {outcome.kind}.")
            write_stdout(" ".join(outcome.message.splitlines()) + "\n")
            return outcome.exit_code


def write_stdout(text: str) -> None:
    """
    Write text to standard output using UTF-8 regardless of the locale.
    """
    sys.stdout.flush()
    stream = click.get_binary_stream("stdout")
    stream.write(text.encode("utf-8"))
    stream.flush()
