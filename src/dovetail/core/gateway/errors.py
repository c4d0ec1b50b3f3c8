"""Exceptions raised while running external commands."""

from dovetail.core.gateway.types import CommandResult, CommandSpec, ErrorKind


class ExecutableNotFoundError(RuntimeError):
    """Raised by a runner when the executable is not on the search path."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Command not found: {executable}")
        self.executable = executable


class CommandStartError(RuntimeError):
    """Raised by a runner when the OS refuses to start the child.

    Covers everything other than a missing executable: a file without execute
    permission, a missing or non-directory cwd.
    """

    def __init__(self, spec: CommandSpec, reason: OSError) -> None:
        super().__init__(f"Could not start {spec.display()}: {reason}")
        self.spec = spec
        self.reason = reason


class CommandTimeoutError(RuntimeError):
    """Raised by a runner when the child outlives its timeout."""

    def __init__(self, spec: CommandSpec, timeout: float) -> None:
        super().__init__(f"Command timed out after {timeout:g}s: {spec.display()}")
        self.spec = spec
        self.timeout = timeout


class CommandError(RuntimeError):
    """A classified failure of an external command.

    Attributes:
        kind: Which ErrorKind the failure was classified as
        message: Multi-line, human-readable remediation text
        spec: The invocation that failed
        result: Captured output, or None when the process never finished
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        spec: CommandSpec,
        result: CommandResult | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.spec = spec
        self.result = result

    def __repr__(self) -> str:
        return f"CommandError(kind={self.kind.value}, command={self.spec.display()!r})"
