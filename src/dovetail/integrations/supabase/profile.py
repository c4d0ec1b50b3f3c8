"""Classification table for the Supabase CLI."""

from dovetail.core.gateway.types import ClassificationRule, ErrorKind, VendorProfile

_NOT_AUTHENTICATED = "Supabase CLI not authenticated.\n\nRun: supabase login"
_NOT_FOUND = "Supabase project not found.\n\nList your projects with: supabase projects list"
_PERMISSION_DENIED = (
    "Supabase permission denied.\n\nCheck that you have access to the organization/project."
)

SUPABASE_PROFILE = VendorProfile(
    name="Supabase CLI",
    executable="supabase",
    install_instructions=(
        "Install it from: https://supabase.com/docs/guides/cli\n"
        "  macOS:   brew install supabase/tap/supabase\n"
        "  Windows: scoop install supabase\n"
        "  Linux:   See https://supabase.com/docs/guides/cli"
    ),
    rules=(
        ClassificationRule("not logged in", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("authentication", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("access token", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("not found", ErrorKind.RESOURCE_NOT_FOUND, _NOT_FOUND),
        ClassificationRule("could not find", ErrorKind.RESOURCE_NOT_FOUND, _NOT_FOUND),
        ClassificationRule("permission", ErrorKind.PERMISSION_DENIED, _PERMISSION_DENIED),
        ClassificationRule("unauthorized", ErrorKind.PERMISSION_DENIED, _PERMISSION_DENIED),
    ),
    token_config_key="supabase_token",
    token_env_var="SUPABASE_ACCESS_TOKEN",
)
