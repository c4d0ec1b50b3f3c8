"""Abstract base class for Fly.io operations."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.fly.types import FlyApp, FlyOrg, FlyRelease


class Fly(ABC):
    """Abstract interface for Fly.io operations."""

    @abstractmethod
    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        """Report whether flyctl is logged in (detail is the account email)."""
        ...

    @abstractmethod
    def create_app(self, name: str, *, org: str | None = None) -> FlyApp:
        """Create an app, optionally under a specific organization."""
        ...

    @abstractmethod
    def list_apps(self, *, org: str | None = None) -> list[FlyApp]:
        """List apps visible to the authenticated account."""
        ...

    @abstractmethod
    def get_app(self, name: str) -> FlyApp:
        """Get details of one app."""
        ...

    @abstractmethod
    def deploy(
        self,
        cwd: Path,
        *,
        app: str | None = None,
        config: str | None = None,
        remote_only: bool = False,
    ) -> None:
        """Deploy the project at cwd.

        Args:
            cwd: Directory containing fly.toml (or the config given)
            app: App name override
            config: Path to an alternate fly.toml
            remote_only: Build on a Fly remote builder instead of locally
        """
        ...

    @abstractmethod
    def set_secrets(self, app: str, secrets: Mapping[str, str]) -> None:
        """Set runtime secrets on an app."""
        ...

    @abstractmethod
    def get_logs(self, app: str) -> str:
        """Get recent logs for an app as plain text."""
        ...

    @abstractmethod
    def list_orgs(self) -> list[FlyOrg]:
        """List organizations the account belongs to."""
        ...

    @abstractmethod
    def list_releases(self, app: str) -> list[FlyRelease]:
        """List releases of an app, newest first."""
        ...
