"""Production implementation of Fly.io operations."""

import json
from collections.abc import Mapping
from pathlib import Path

from dovetail.core.gateway import CommandError, CommandGateway
from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.fly.abc import Fly
from dovetail.integrations.fly.parsing import parse_app, parse_apps, parse_orgs, parse_releases
from dovetail.integrations.fly.types import FlyApp, FlyOrg, FlyRelease


class RealFly(Fly):
    """Production implementation using flyctl."""

    def __init__(self, gateway: CommandGateway) -> None:
        self._gateway = gateway

    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        try:
            result = self._gateway.run(["auth", "whoami"], timeout=timeout)
        except CommandError as e:
            return AuthStatus(authenticated=False, detail=e.message)
        return AuthStatus(authenticated=True, detail=result.stdout.strip())

    def create_app(self, name: str, *, org: str | None = None) -> FlyApp:
        args = ["apps", "create", name, "--json"]
        if org:
            args.extend(["--org", org])
        result = self._gateway.run(args)
        return parse_app(json.loads(result.stdout))

    def list_apps(self, *, org: str | None = None) -> list[FlyApp]:
        args = ["apps", "list", "--json"]
        if org:
            args.extend(["--org", org])
        result = self._gateway.run(args)
        return parse_apps(result.stdout)

    def get_app(self, name: str) -> FlyApp:
        result = self._gateway.run(["status", "--app", name, "--json"])
        return parse_app(json.loads(result.stdout))

    def deploy(
        self,
        cwd: Path,
        *,
        app: str | None = None,
        config: str | None = None,
        remote_only: bool = False,
    ) -> None:
        args = ["deploy"]
        if config:
            args.extend(["--config", config])
        if app:
            args.extend(["--app", app])
        if remote_only:
            args.append("--remote-only")
        self._gateway.run(args, cwd=cwd)

    def set_secrets(self, app: str, secrets: Mapping[str, str]) -> None:
        # secrets import reads NAME=VALUE lines from stdin, keeping values off argv
        lines = "".join(f"{key}={value}\n" for key, value in secrets.items())
        self._gateway.run(["secrets", "import", "--app", app], input=lines)

    def get_logs(self, app: str) -> str:
        result = self._gateway.run(["logs", "--app", app, "--no-tail"])
        return result.stdout

    def list_orgs(self) -> list[FlyOrg]:
        result = self._gateway.run(["orgs", "list", "--json"])
        return parse_orgs(result.stdout)

    def list_releases(self, app: str) -> list[FlyRelease]:
        result = self._gateway.run(["releases", "--app", app, "--json"])
        return parse_releases(result.stdout)
