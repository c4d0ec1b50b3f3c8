"""External command execution with classified errors."""

from dovetail.core.gateway.abc import CommandRunner
from dovetail.core.gateway.errors import (
    CommandError,
    CommandStartError,
    CommandTimeoutError,
    ExecutableNotFoundError,
)
from dovetail.core.gateway.gateway import CommandGateway, classify_failure, run_external
from dovetail.core.gateway.types import (
    ClassificationRule,
    CommandResult,
    CommandSpec,
    ErrorKind,
    VendorProfile,
)

__all__ = [
    "ClassificationRule",
    "CommandError",
    "CommandGateway",
    "CommandResult",
    "CommandRunner",
    "CommandSpec",
    "CommandStartError",
    "CommandTimeoutError",
    "ErrorKind",
    "ExecutableNotFoundError",
    "VendorProfile",
    "classify_failure",
    "run_external",
]
