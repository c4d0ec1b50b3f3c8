"""Production implementation of Supabase operations."""

import json
from pathlib import Path

from dovetail.core.gateway import CommandError, CommandGateway
from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.supabase.abc import Supabase
from dovetail.integrations.supabase.parsing import (
    parse_api_keys,
    parse_orgs,
    parse_project,
    parse_projects,
)
from dovetail.integrations.supabase.types import (
    DEFAULT_REGION,
    ApiKey,
    SupabaseOrg,
    SupabaseProject,
)


class RealSupabase(Supabase):
    """Production implementation using the supabase CLI."""

    def __init__(self, gateway: CommandGateway) -> None:
        self._gateway = gateway

    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        try:
            self._gateway.run(["projects", "list", "--output", "json"], timeout=timeout)
        except CommandError as e:
            return AuthStatus(authenticated=False, detail=e.message)
        return AuthStatus(authenticated=True)

    def list_orgs(self) -> list[SupabaseOrg]:
        result = self._gateway.run(["orgs", "list", "--output", "json"])
        return parse_orgs(result.stdout)

    def list_projects(self) -> list[SupabaseProject]:
        result = self._gateway.run(["projects", "list", "--output", "json"])
        return parse_projects(result.stdout)

    def create_project(
        self,
        name: str,
        *,
        org_id: str,
        db_password: str,
        region: str = DEFAULT_REGION,
    ) -> SupabaseProject:
        result = self._gateway.run(
            [
                "projects",
                "create",
                name,
                "--org-id",
                org_id,
                "--db-password",
                db_password,
                "--region",
                region,
                "--output",
                "json",
            ]
        )
        return parse_project(json.loads(result.stdout))

    def get_project_keys(self, project_ref: str) -> list[ApiKey]:
        result = self._gateway.run(
            ["projects", "api-keys", "--project-ref", project_ref, "--output", "json"]
        )
        return parse_api_keys(result.stdout)

    def link_project(self, cwd: Path, project_ref: str) -> None:
        self._gateway.run(["link", "--project-ref", project_ref], cwd=cwd)

    def get_project(self, project_ref: str) -> SupabaseProject | None:
        for project in self.list_projects():
            if project.ref == project_ref:
                return project
        return None
