"""Error boundary for the dovetail command tree.

Command handlers raise CommandError (and a few well-known exceptions) instead
of exiting. The root group catches them here, prints the remediation message
and exits with ExitStatus.FAILED. No stack traces for predictable failures;
all other exceptions bubble up normally.
"""

import logging
from typing import Any

import click

from dovetail.cli.exit_status import ExitStatus
from dovetail.cli.json_output import emit_json_error, wants_json
from dovetail.cli.output import error_text, user_output
from dovetail.core.gateway import CommandError

logger = logging.getLogger(__name__)


def report_error(ctx: click.Context, message: str, kind: str) -> None:
    if wants_json(ctx):
        emit_json_error(message, kind, exit_code=int(ExitStatus.FAILED))
        return
    user_output(error_text(message))


class ErrorBoundaryGroup(click.Group):
    """click.Group whose invoke() turns expected failures into exit statuses."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except CommandError as e:
            logger.debug("Command failed: %r", e, exc_info=True)
            report_error(ctx, e.message, e.kind.value)
        except (FileNotFoundError, PermissionError, ValueError) as e:
            logger.debug("Command failed: %s", type(e).__name__, exc_info=True)
            report_error(ctx, str(e), type(e).__name__)
        ctx.exit(int(ExitStatus.FAILED))
