"""Type definitions for external command execution."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ErrorKind(Enum):
    """Closed taxonomy of failures reported by the command gateway."""

    NOT_INSTALLED = "NotInstalled"
    NOT_AUTHENTICATED = "NotAuthenticated"
    RESOURCE_NOT_FOUND = "ResourceNotFound"
    PERMISSION_DENIED = "PermissionDenied"
    TIMEOUT = "Timeout"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class CommandSpec:
    """A single invocation of an external executable.

    env holds extra variables layered over the inherited environment; it is
    how vendor tokens reach the child process.
    """

    executable: str
    args: tuple[str, ...] = ()
    cwd: Path | None = None
    input: str | None = None
    timeout: float | None = None
    env: Mapping[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def display(self) -> str:
        """Render the command line for messages and debug logs."""
        return " ".join(self.argv)


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished child process."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def combined_output(self) -> str:
        return f"{self.stdout}\n{self.stderr}"


@dataclass(frozen=True)
class ClassificationRule:
    """Maps a pattern found in command output to an error kind.

    Plain string patterns match as case-insensitive substrings. Compiled
    patterns are searched as-is. The message is a remediation template and may
    reference {command} and {executable}.
    """

    pattern: str | re.Pattern[str]
    kind: ErrorKind
    message: str

    def matches(self, text: str) -> bool:
        if isinstance(self.pattern, re.Pattern):
            return self.pattern.search(text) is not None
        return self.pattern.lower() in text.lower()


@dataclass(frozen=True)
class VendorProfile:
    """Per-vendor configuration consumed by the gateway.

    rules are evaluated top-to-bottom against stdout+stderr of a failed
    invocation; the first match wins.
    """

    name: str
    executable: str
    install_instructions: str
    rules: tuple[ClassificationRule, ...]
    token_config_key: str | None = None
    token_env_var: str | None = None
    version_args: tuple[str, ...] = ("--version",)
