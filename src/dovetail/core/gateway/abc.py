"""Abstract base class for spawning external commands."""

from abc import ABC, abstractmethod

from dovetail.core.gateway.types import CommandResult, CommandSpec


class CommandRunner(ABC):
    """Abstract interface for running a child process to completion.

    Implementations never raise because the child exited non-zero; the exit
    code is reported in the returned CommandResult.
    """

    @abstractmethod
    def run(self, spec: CommandSpec) -> CommandResult:
        """Run the command and capture its output.

        Args:
            spec: What to run, where, with which input, env and timeout

        Returns:
            CommandResult with stdout, stderr and exit code

        Raises:
            ExecutableNotFoundError: If spec.executable is not on the search path
            CommandTimeoutError: If spec.timeout elapsed before the child exited
        """
        ...
