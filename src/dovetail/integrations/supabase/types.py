"""Type definitions for Supabase operations."""

from dataclasses import dataclass

DEFAULT_REGION = "us-east-1"


@dataclass(frozen=True)
class SupabaseOrg:
    id: str
    name: str


@dataclass(frozen=True)
class SupabaseProject:
    """A hosted Supabase project; ref is the project reference ID."""

    ref: str
    name: str
    organization_id: str | None = None
    region: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class ApiKey:
    name: str  # "anon", "service_role", ...
    api_key: str
