"""Fake Fly.io operations for testing."""

from collections.abc import Mapping
from pathlib import Path

from dovetail.core.gateway import CommandError
from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.fly.abc import Fly
from dovetail.integrations.fly.types import FlyApp, FlyOrg, FlyRelease


class FakeFly(Fly):
    """In-memory fake implementation of Fly.io operations.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(
        self,
        *,
        authenticated: bool = True,
        email: str = "dev@example.com",
        apps: list[FlyApp] | None = None,
        orgs: list[FlyOrg] | None = None,
        releases: dict[str, list[FlyRelease]] | None = None,
        logs: dict[str, str] | None = None,
        failure: CommandError | None = None,
    ) -> None:
        """Create FakeFly with pre-configured state.

        Args:
            authenticated: Result of check_auth()
            email: Account reported by check_auth()
            apps: Apps that exist before the test runs
            orgs: Organizations returned by list_orgs()
            releases: Mapping of app name -> releases, newest first
            logs: Mapping of app name -> log text
            failure: If set, every operation other than check_auth raises it
        """
        self._authenticated = authenticated
        self._email = email
        self._apps = list(apps or [])
        self._orgs = list(orgs or [])
        self._releases = releases or {}
        self._logs = logs or {}
        self._failure = failure
        self._deploy_calls: list[tuple[Path, str | None, bool]] = []
        self._secrets: dict[str, dict[str, str]] = {}

    def _maybe_fail(self) -> None:
        if self._failure is not None:
            raise self._failure

    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        if not self._authenticated:
            return AuthStatus(authenticated=False, detail="Fly.io CLI not authenticated.")
        return AuthStatus(authenticated=True, detail=self._email)

    def create_app(self, name: str, *, org: str | None = None) -> FlyApp:
        self._maybe_fail()
        app = FlyApp(name=name, organization=org or "personal", status="pending")
        self._apps.append(app)
        return app

    def list_apps(self, *, org: str | None = None) -> list[FlyApp]:
        self._maybe_fail()
        if org is None:
            return list(self._apps)
        return [app for app in self._apps if app.organization == org]

    def get_app(self, name: str) -> FlyApp:
        self._maybe_fail()
        for app in self._apps:
            if app.name == name:
                return app
        raise KeyError(name)

    def deploy(
        self,
        cwd: Path,
        *,
        app: str | None = None,
        config: str | None = None,
        remote_only: bool = False,
    ) -> None:
        self._maybe_fail()
        self._deploy_calls.append((cwd, app, remote_only))

    def set_secrets(self, app: str, secrets: Mapping[str, str]) -> None:
        self._maybe_fail()
        self._secrets.setdefault(app, {}).update(secrets)

    def get_logs(self, app: str) -> str:
        self._maybe_fail()
        return self._logs.get(app, "")

    def list_orgs(self) -> list[FlyOrg]:
        self._maybe_fail()
        return list(self._orgs)

    def list_releases(self, app: str) -> list[FlyRelease]:
        self._maybe_fail()
        return list(self._releases.get(app, []))

    @property
    def apps(self) -> list[FlyApp]:
        return list(self._apps)

    @property
    def deploy_calls(self) -> list[tuple[Path, str | None, bool]]:
        """Read-only list of (cwd, app, remote_only) passed to deploy()."""
        return list(self._deploy_calls)

    @property
    def secrets(self) -> dict[str, dict[str, str]]:
        """Read-only mapping of app -> secrets passed to set_secrets()."""
        return {app: dict(values) for app, values in self._secrets.items()}
