"""Production implementation of CommandRunner using subprocess."""

import logging
import os
import subprocess

from dovetail.core.gateway.abc import CommandRunner
from dovetail.core.gateway.errors import (
    CommandStartError,
    CommandTimeoutError,
    ExecutableNotFoundError,
)
from dovetail.core.gateway.types import CommandResult, CommandSpec

logger = logging.getLogger(__name__)


class RealCommandRunner(CommandRunner):
    """Runs commands with subprocess.run and check=False.

    Output is decoded as UTF-8; undecodable bytes are replaced rather than
    failing the invocation.
    """

    def run(self, spec: CommandSpec) -> CommandResult:
        env = {**os.environ, **spec.env} if spec.env else None

        logger.debug("Running %s (cwd=%s, timeout=%s)", spec.display(), spec.cwd, spec.timeout)
        try:
            completed = subprocess.run(
                spec.argv,
                cwd=spec.cwd,
                input=spec.input,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=spec.timeout,
                env=env,
            )
        except FileNotFoundError as e:
            # A missing cwd also surfaces as FileNotFoundError; that is not a missing tool
            if spec.cwd is not None and str(e.filename) == str(spec.cwd):
                raise CommandStartError(spec, e) from e
            raise ExecutableNotFoundError(spec.executable) from e
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(spec, e.timeout) from e
        except OSError as e:
            raise CommandStartError(spec, e) from e

        logger.debug("%s exited with %d", spec.executable, completed.returncode)
        return CommandResult(
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            exit_code=completed.returncode,
        )
