"""Abstract base class for Supabase operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.supabase.types import (
    DEFAULT_REGION,
    ApiKey,
    SupabaseOrg,
    SupabaseProject,
)


class Supabase(ABC):
    """Abstract interface for Supabase operations."""

    @abstractmethod
    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        """Report whether the supabase CLI holds a valid access token."""
        ...

    @abstractmethod
    def list_orgs(self) -> list[SupabaseOrg]:
        ...

    @abstractmethod
    def list_projects(self) -> list[SupabaseProject]:
        ...

    @abstractmethod
    def create_project(
        self,
        name: str,
        *,
        org_id: str,
        db_password: str,
        region: str = DEFAULT_REGION,
    ) -> SupabaseProject:
        """Create a hosted project."""
        ...

    @abstractmethod
    def get_project_keys(self, project_ref: str) -> list[ApiKey]:
        """Get the API keys (anon, service_role) of a project."""
        ...

    @abstractmethod
    def link_project(self, cwd: Path, project_ref: str) -> None:
        """Link the local supabase/ directory at cwd to a hosted project."""
        ...

    @abstractmethod
    def get_project(self, project_ref: str) -> SupabaseProject | None:
        """Find a project by ref.

        Returns:
            SupabaseProject, or None if no visible project has that ref
        """
        ...
