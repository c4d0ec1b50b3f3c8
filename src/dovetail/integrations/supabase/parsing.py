"""Parsing helpers for `supabase ... --output json`."""

import json
from typing import Any

from dovetail.integrations.supabase.types import ApiKey, SupabaseOrg, SupabaseProject


def parse_project(data: dict[str, Any]) -> SupabaseProject:
    return SupabaseProject(
        ref=data.get("ref") or data["id"],
        name=data.get("name", ""),
        organization_id=data.get("organization_id"),
        region=data.get("region"),
        status=data.get("status"),
    )


def parse_projects(stdout: str) -> list[SupabaseProject]:
    return [parse_project(item) for item in json.loads(stdout)]


def parse_orgs(stdout: str) -> list[SupabaseOrg]:
    return [SupabaseOrg(id=item["id"], name=item.get("name", "")) for item in json.loads(stdout)]


def parse_api_keys(stdout: str) -> list[ApiKey]:
    return [ApiKey(name=item["name"], api_key=item["api_key"]) for item in json.loads(stdout)]
