"""Authentication probe result shared by all vendor integrations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthStatus:
    """Whether a vendor CLI is logged in.

    detail carries the account name on success, or the classified error
    message on failure.
    """

    authenticated: bool
    detail: str | None = None
