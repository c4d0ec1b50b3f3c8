"""Fake CommandRunner for testing.

FakeCommandRunner is an in-memory implementation that accepts pre-configured
results in its constructor. Construct instances directly with keyword arguments.
"""

from collections.abc import Iterable

from dovetail.core.gateway.abc import CommandRunner
from dovetail.core.gateway.errors import (
    CommandStartError,
    CommandTimeoutError,
    ExecutableNotFoundError,
)
from dovetail.core.gateway.types import CommandResult, CommandSpec


class FakeCommandRunner(CommandRunner):
    """In-memory fake implementation of command execution.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults.
    """

    def __init__(
        self,
        *,
        results: dict[tuple[str, ...], CommandResult] | None = None,
        default_result: CommandResult | None = None,
        missing_executables: Iterable[str] = (),
        timeouts: Iterable[tuple[str, ...]] = (),
        start_failures: dict[str, OSError] | None = None,
    ) -> None:
        """Create FakeCommandRunner with pre-configured outcomes.

        Args:
            results: Mapping of full argv (executable first) -> CommandResult
            default_result: Result for argv not in results (defaults to a silent success)
            missing_executables: Executables that behave as if not on the search path
            timeouts: argv tuples that behave as if they exceeded their timeout
            start_failures: Executable -> OSError the OS raises when starting it
        """
        self._results = results or {}
        self._default_result = default_result or CommandResult(stdout="", stderr="", exit_code=0)
        self._missing_executables = frozenset(missing_executables)
        self._timeouts = frozenset(timeouts)
        self._start_failures = start_failures or {}
        self._calls: list[CommandSpec] = []

    def run(self, spec: CommandSpec) -> CommandResult:
        self._calls.append(spec)
        argv = tuple(spec.argv)

        if spec.executable in self._missing_executables:
            raise ExecutableNotFoundError(spec.executable)
        if spec.executable in self._start_failures:
            raise CommandStartError(spec, self._start_failures[spec.executable])
        if argv in self._timeouts:
            raise CommandTimeoutError(spec, spec.timeout if spec.timeout is not None else 0.0)
        return self._results.get(argv, self._default_result)

    @property
    def calls(self) -> list[CommandSpec]:
        """Get the list of specs passed to run().

        This property is for test assertions only.
        """
        return self._calls.copy()

    @property
    def argvs(self) -> list[list[str]]:
        """Get the argv of every run() call, in order.

        This property is for test assertions only.
        """
        return [spec.argv for spec in self._calls]
