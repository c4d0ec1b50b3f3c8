"""Classification table for the GitHub CLI (gh)."""

from dovetail.core.gateway.types import ClassificationRule, ErrorKind, VendorProfile

_NOT_AUTHENTICATED = "GitHub CLI not authenticated.\n\nRun: gh auth login"
_NOT_FOUND = "Repository not found. Check that you have access to it."
_PERMISSION_DENIED = (
    "GitHub permission denied.\n\n"
    "You may need to grant additional scopes:\n"
    "  gh auth refresh -s repo -s project -s admin:org"
)

GITHUB_PROFILE = VendorProfile(
    name="GitHub CLI",
    executable="gh",
    install_instructions=(
        "Install it from: https://cli.github.com/\n"
        "  macOS:   brew install gh\n"
        "  Windows: winget install --id GitHub.cli"
    ),
    rules=(
        ClassificationRule("not logged in", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("authentication", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("Not Found", ErrorKind.RESOURCE_NOT_FOUND, _NOT_FOUND),
        ClassificationRule(
            "Could not resolve to a Repository", ErrorKind.RESOURCE_NOT_FOUND, _NOT_FOUND
        ),
        ClassificationRule("Could not find", ErrorKind.RESOURCE_NOT_FOUND, _NOT_FOUND),
        ClassificationRule("permission", ErrorKind.PERMISSION_DENIED, _PERMISSION_DENIED),
        ClassificationRule("forbidden", ErrorKind.PERMISSION_DENIED, _PERMISSION_DENIED),
    ),
    token_config_key="github_token",
    token_env_var="GITHUB_TOKEN",
)
