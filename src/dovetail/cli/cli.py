import logging
import os

import click

from dovetail.cli.commands.config import config_group
from dovetail.cli.commands.doctor import doctor_cmd
from dovetail.cli.commands.fly import fly_group
from dovetail.cli.commands.linear import linear_group
from dovetail.cli.commands.pr import pr_group
from dovetail.cli.commands.supabase import supabase_group
from dovetail.cli.error_boundary import ErrorBoundaryGroup
from dovetail.cli.exit_status import ExitStatus
from dovetail.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_FORMAT = "[DEBUG %(name)s:%(lineno)d] %(message)s"


@click.group(cls=ErrorBoundaryGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="dovetail")
@click.option("--debug", is_flag=True, help="Log every external command (also DOVETAIL_DEBUG=1).")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Drive gh, flyctl, supabase and linearis with consistent error reporting."""
    if debug or os.getenv("DOVETAIL_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format=DEBUG_FORMAT)

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


@cli.result_callback()
@click.pass_context
def exit_with_status(ctx: click.Context, result: object, debug: bool) -> None:
    # Handlers return an ExitStatus (or None for success)
    if isinstance(result, ExitStatus) and result is not ExitStatus.OK:
        ctx.exit(int(result))


# Register all commands
cli.add_command(config_group)
cli.add_command(doctor_cmd)
cli.add_command(fly_group)
cli.add_command(linear_group)
cli.add_command(pr_group)
cli.add_command(supabase_group)


def main() -> None:
    """CLI entry point used by the `dovetail` console script."""
    cli()
