"""Supabase integration backed by the supabase CLI."""

from dovetail.integrations.supabase.abc import Supabase
from dovetail.integrations.supabase.fake import FakeSupabase
from dovetail.integrations.supabase.profile import SUPABASE_PROFILE
from dovetail.integrations.supabase.real import RealSupabase
from dovetail.integrations.supabase.types import ApiKey, SupabaseOrg, SupabaseProject

__all__ = [
    "SUPABASE_PROFILE",
    "ApiKey",
    "FakeSupabase",
    "RealSupabase",
    "Supabase",
    "SupabaseOrg",
    "SupabaseProject",
]
