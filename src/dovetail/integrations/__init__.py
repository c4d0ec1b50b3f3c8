"""Vendor CLI integrations."""

from dovetail.integrations.fly.profile import FLY_PROFILE
from dovetail.integrations.github.profile import GITHUB_PROFILE
from dovetail.integrations.linear.profile import LINEAR_PROFILE
from dovetail.integrations.supabase.profile import SUPABASE_PROFILE

# Order used by doctor and config validation
VENDOR_PROFILES = (GITHUB_PROFILE, LINEAR_PROFILE, SUPABASE_PROFILE, FLY_PROFILE)

__all__ = ["FLY_PROFILE", "GITHUB_PROFILE", "LINEAR_PROFILE", "SUPABASE_PROFILE", "VENDOR_PROFILES"]
