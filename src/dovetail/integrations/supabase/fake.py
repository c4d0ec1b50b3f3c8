"""Fake Supabase operations for testing."""

from pathlib import Path

from dovetail.core.gateway import CommandError
from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.supabase.abc import Supabase
from dovetail.integrations.supabase.types import (
    DEFAULT_REGION,
    ApiKey,
    SupabaseOrg,
    SupabaseProject,
)


class FakeSupabase(Supabase):
    """In-memory fake implementation of Supabase operations."""

    def __init__(
        self,
        *,
        authenticated: bool = True,
        orgs: list[SupabaseOrg] | None = None,
        projects: list[SupabaseProject] | None = None,
        api_keys: dict[str, list[ApiKey]] | None = None,
        failure: CommandError | None = None,
    ) -> None:
        """Create FakeSupabase with pre-configured state.

        Args:
            authenticated: Result of check_auth()
            orgs: Organizations returned by list_orgs()
            projects: Projects that exist before the test runs
            api_keys: Mapping of project ref -> API keys
            failure: If set, every operation other than check_auth raises it
        """
        self._authenticated = authenticated
        self._orgs = list(orgs or [])
        self._projects = list(projects or [])
        self._api_keys = api_keys or {}
        self._failure = failure
        self._linked: list[tuple[Path, str]] = []

    def _maybe_fail(self) -> None:
        if self._failure is not None:
            raise self._failure

    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        if not self._authenticated:
            return AuthStatus(authenticated=False, detail="Supabase CLI not authenticated.")
        return AuthStatus(authenticated=True)

    def list_orgs(self) -> list[SupabaseOrg]:
        self._maybe_fail()
        return list(self._orgs)

    def list_projects(self) -> list[SupabaseProject]:
        self._maybe_fail()
        return list(self._projects)

    def create_project(
        self,
        name: str,
        *,
        org_id: str,
        db_password: str,
        region: str = DEFAULT_REGION,
    ) -> SupabaseProject:
        self._maybe_fail()
        project = SupabaseProject(
            ref=f"ref{len(self._projects) + 1:04d}",
            name=name,
            organization_id=org_id,
            region=region,
            status="COMING_UP",
        )
        self._projects.append(project)
        return project

    def get_project_keys(self, project_ref: str) -> list[ApiKey]:
        self._maybe_fail()
        return list(self._api_keys.get(project_ref, []))

    def link_project(self, cwd: Path, project_ref: str) -> None:
        self._maybe_fail()
        self._linked.append((cwd, project_ref))

    def get_project(self, project_ref: str) -> SupabaseProject | None:
        for project in self.list_projects():
            if project.ref == project_ref:
                return project
        return None

    @property
    def linked(self) -> list[tuple[Path, str]]:
        """Read-only list of (cwd, project_ref) passed to link_project()."""
        return list(self._linked)
