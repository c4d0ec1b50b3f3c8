"""Run vendor CLIs and translate their failures into classified errors.

Every vendor wrapper goes through run_external(). The runner reports the exit
code instead of raising, so both "the tool ran and reported an error" and
"the tool could not run at all" end up here and leave as exactly one
CommandError.
"""

import errno
import logging
from collections.abc import Sequence
from pathlib import Path

from dovetail.core.credentials import CredentialResolver
from dovetail.core.gateway.abc import CommandRunner
from dovetail.core.gateway.errors import (
    CommandError,
    CommandStartError,
    CommandTimeoutError,
    ExecutableNotFoundError,
)
from dovetail.core.gateway.types import (
    ClassificationRule,
    CommandResult,
    CommandSpec,
    ErrorKind,
    VendorProfile,
)

logger = logging.getLogger(__name__)

# Exit status a POSIX shell reports when it cannot find a command
SHELL_COMMAND_NOT_FOUND = 127

# bash says "command not found"; dash says "sh: 1: foo: not found"
_SHELL_NOT_FOUND_MARKERS = ("command not found", ": not found")


def classify_failure(
    result: CommandResult, rules: Sequence[ClassificationRule]
) -> ClassificationRule | None:
    """Return the first rule whose pattern occurs in stdout+stderr, if any."""
    text = result.combined_output
    for rule in rules:
        if rule.matches(text):
            return rule
    return None


def not_installed_error(spec: CommandSpec, profile: VendorProfile) -> CommandError:
    return CommandError(
        ErrorKind.NOT_INSTALLED,
        f"{profile.name} not installed.\n\n{profile.install_instructions}",
        spec=spec,
    )


def _looks_like_missing_command(result: CommandResult) -> bool:
    if result.exit_code != SHELL_COMMAND_NOT_FOUND:
        return False
    output = result.combined_output.lower()
    return any(marker in output for marker in _SHELL_NOT_FOUND_MARKERS)


def _start_failure_error(
    spec: CommandSpec, profile: VendorProfile, e: CommandStartError
) -> CommandError:
    reason = e.reason.strerror or str(e.reason)
    if e.reason.filename is not None:
        reason = f"{reason}: {e.reason.filename}"
    kind = ErrorKind.PERMISSION_DENIED if e.reason.errno == errno.EACCES else ErrorKind.UNKNOWN
    return CommandError(
        kind,
        f"{profile.name} could not be started:\n  {spec.display()}\n\n{reason}",
        spec=spec,
    )


def _raw_output(result: CommandResult) -> str:
    stderr = result.stderr.strip()
    if stderr:
        return stderr
    return result.stdout.strip()


def run_external(
    spec: CommandSpec, profile: VendorProfile, runner: CommandRunner
) -> CommandResult:
    """Run a vendor command and return its result, or raise a classified error.

    Args:
        spec: Invocation to run
        profile: Vendor configuration providing install text and the rule table
        runner: Process runner (real or fake)

    Returns:
        The CommandResult of a zero-exit invocation, unchanged

    Raises:
        CommandError: For every failure. kind is NOT_INSTALLED when the
            executable is missing (checked before the rule table), TIMEOUT when
            the timeout elapsed, PERMISSION_DENIED or UNKNOWN when the OS
            refused to start the child, the first matching rule's kind on a
            non-zero exit, and UNKNOWN when no rule matches.
    """
    try:
        result = runner.run(spec)
    except ExecutableNotFoundError:
        logger.debug("%s is not on PATH", spec.executable)
        raise not_installed_error(spec, profile) from None
    except CommandTimeoutError as e:
        logger.debug("%s timed out after %ss", spec.display(), e.timeout)
        raise CommandError(
            ErrorKind.TIMEOUT,
            f"{profile.name} command timed out after {e.timeout:g}s:\n"
            f"  {spec.display()}\n\n"
            f"Check your network connection and try again.",
            spec=spec,
        ) from None
    except CommandStartError as e:
        logger.debug("%s could not be started: %s", spec.display(), e.reason)
        raise _start_failure_error(spec, profile, e) from e

    if result.succeeded:
        return result

    if _looks_like_missing_command(result):
        raise not_installed_error(spec, profile)

    rule = classify_failure(result, profile.rules)
    if rule is None:
        logger.debug("No rule matched failure of %s (exit %d)", spec.display(), result.exit_code)
        raise CommandError(
            ErrorKind.UNKNOWN,
            f"{profile.name} command failed:\n{_raw_output(result)}",
            spec=spec,
            result=result,
        )

    logger.debug("Classified failure of %s as %s", spec.display(), rule.kind.value)
    raise CommandError(
        rule.kind,
        rule.message.format(command=spec.display(), executable=spec.executable),
        spec=spec,
        result=result,
    )


class CommandGateway:
    """Binds a vendor profile, a runner and credentials for one vendor CLI.

    Vendor wrappers hold one of these and pass only arguments; the gateway
    fills in the executable and the vendor token environment variable.
    """

    def __init__(
        self,
        profile: VendorProfile,
        runner: CommandRunner,
        credentials: CredentialResolver | None = None,
    ) -> None:
        self._profile = profile
        self._runner = runner
        self._credentials = credentials

    @property
    def profile(self) -> VendorProfile:
        return self._profile

    def build_spec(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        input: str | None = None,
        timeout: float | None = None,
    ) -> CommandSpec:
        env: dict[str, str] = {}
        if self._credentials is not None and self._profile.token_env_var is not None:
            token = self._credentials.token_for(self._profile)
            if token is not None:
                env[self._profile.token_env_var] = token
        return CommandSpec(
            executable=self._profile.executable,
            args=tuple(args),
            cwd=cwd,
            input=input,
            timeout=timeout,
            env=env,
        )

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        input: str | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        spec = self.build_spec(args, cwd=cwd, input=input, timeout=timeout)
        return run_external(spec, self._profile, self._runner)
