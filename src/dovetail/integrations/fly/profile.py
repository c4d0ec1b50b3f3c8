"""Classification table for the Fly.io CLI (flyctl)."""

from dovetail.core.gateway.types import ClassificationRule, ErrorKind, VendorProfile

_NOT_AUTHENTICATED = "Fly.io CLI not authenticated.\n\nRun: flyctl auth login"
_NOT_FOUND = "Fly.io app not found.\n\nList your apps with: flyctl apps list"
_PERMISSION_DENIED = (
    "Fly.io permission denied.\n\nCheck that you have access to the organization/app."
)

FLY_PROFILE = VendorProfile(
    name="Fly.io CLI",
    executable="flyctl",
    install_instructions=(
        "Install it from: https://fly.io/docs/hands-on/install-flyctl/\n"
        "  macOS/Linux: curl -L https://fly.io/install.sh | sh\n"
        '  Windows:     pwsh -Command "iwr https://fly.io/install.ps1 -useb | iex"'
    ),
    rules=(
        ClassificationRule("not logged in", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("authentication", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("not found", ErrorKind.RESOURCE_NOT_FOUND, _NOT_FOUND),
        ClassificationRule("Could not find App", ErrorKind.RESOURCE_NOT_FOUND, _NOT_FOUND),
        ClassificationRule("permission", ErrorKind.PERMISSION_DENIED, _PERMISSION_DENIED),
        ClassificationRule("unauthorized", ErrorKind.PERMISSION_DENIED, _PERMISSION_DENIED),
    ),
    token_config_key="fly_token",
    token_env_var="FLY_API_TOKEN",
    version_args=("version",),
)
