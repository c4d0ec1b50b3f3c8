"""Process exit statuses returned by command handlers."""

from enum import IntEnum


class ExitStatus(IntEnum):
    """Terminal outcome of a command.

    Handlers return one of these (or None for OK); only the root group turns
    it into a process exit.
    """

    OK = 0
    FAILED = 1
    BLOCKED = 2
