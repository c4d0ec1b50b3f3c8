"""Type definitions for Fly.io operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FlyApp:
    """A Fly.io application."""

    name: str
    organization: str | None = None
    status: str | None = None
    hostname: str | None = None


@dataclass(frozen=True)
class FlyOrg:
    """A Fly.io organization."""

    slug: str
    name: str


@dataclass(frozen=True)
class FlyRelease:
    """One release (deployment) of a Fly.io app."""

    version: int
    status: str | None = None
    description: str | None = None
    user: str | None = None
    created_at: str | None = None
