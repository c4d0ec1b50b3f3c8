"""Parsing helpers for flyctl JSON output.

flyctl emits Go-style PascalCase keys (Name, Organization, ...). Some
subcommands have switched to lowercase over time, so lookups accept both.
"""

import json
from typing import Any

from dovetail.integrations.fly.types import FlyApp, FlyOrg, FlyRelease


def _field(data: dict[str, Any], name: str) -> Any:
    if name in data:
        return data[name]
    return data.get(name.lower())


def parse_app(data: dict[str, Any]) -> FlyApp:
    organization = _field(data, "Organization")
    if isinstance(organization, dict):
        organization = _field(organization, "Slug")
    return FlyApp(
        name=_field(data, "Name"),
        organization=organization,
        status=_field(data, "Status"),
        hostname=_field(data, "Hostname"),
    )


def parse_apps(stdout: str) -> list[FlyApp]:
    return [parse_app(item) for item in json.loads(stdout)]


def parse_orgs(stdout: str) -> list[FlyOrg]:
    """Parse `flyctl orgs list --json`, which maps slug -> display name."""
    data = json.loads(stdout)
    if isinstance(data, dict):
        return [FlyOrg(slug=slug, name=name) for slug, name in data.items()]
    return [FlyOrg(slug=_field(item, "Slug"), name=_field(item, "Name")) for item in data]


def parse_releases(stdout: str) -> list[FlyRelease]:
    releases = []
    for item in json.loads(stdout):
        user = _field(item, "User")
        if isinstance(user, dict):
            user = _field(user, "Email")
        releases.append(
            FlyRelease(
                version=int(_field(item, "Version")),
                status=_field(item, "Status"),
                description=_field(item, "Description"),
                user=user,
                created_at=_field(item, "CreatedAt"),
            )
        )
    return releases
