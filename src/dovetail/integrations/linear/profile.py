"""Classification table for linearis, the third-party Linear CLI."""

import re

from dovetail.core.gateway.types import ClassificationRule, ErrorKind, VendorProfile

_NOT_AUTHENTICATED = (
    "Linearis not authenticated.\n\n"
    "Get your Linear API key at: https://linear.app/settings/api\n"
    "Then set LINEAR_API_KEY environment variable:\n"
    "  export LINEAR_API_KEY=<your-key>\n"
    "Or store it in Dovetail's config:\n"
    "  dovetail config set linear_api_key <your-key>"
)
_NOT_FOUND = "Linear resource not found:\n  {command}"
_PERMISSION_DENIED = (
    "Linear permission denied.\n\nCheck that your API key can access this workspace."
)

LINEAR_PROFILE = VendorProfile(
    name="Linearis CLI",
    executable="linearis",
    install_instructions=(
        "Install it with: npm install -g linearis\n"
        "Repository: https://github.com/czottmann/linearis"
    ),
    rules=(
        # linearis reports a bad or missing key as "Unauthorized"
        ClassificationRule("Unauthorized", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("API key", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("authentication", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule("not logged in", ErrorKind.NOT_AUTHENTICATED, _NOT_AUTHENTICATED),
        ClassificationRule(
            re.compile(r"(?=.*not found)(?=.*\bteam\b)", re.IGNORECASE | re.DOTALL),
            ErrorKind.RESOURCE_NOT_FOUND,
            "Linear team not found. Check your team key or name.",
        ),
        ClassificationRule(
            re.compile(r"(?=.*not found)(?=.*\bproject\b)", re.IGNORECASE | re.DOTALL),
            ErrorKind.RESOURCE_NOT_FOUND,
            "Linear project not found. Check your project ID or name.",
        ),
        ClassificationRule("not found", ErrorKind.RESOURCE_NOT_FOUND, _NOT_FOUND),
        ClassificationRule("could not find", ErrorKind.RESOURCE_NOT_FOUND, _NOT_FOUND),
        ClassificationRule("permission", ErrorKind.PERMISSION_DENIED, _PERMISSION_DENIED),
        ClassificationRule("forbidden", ErrorKind.PERMISSION_DENIED, _PERMISSION_DENIED),
    ),
    token_config_key="linear_api_key",
    token_env_var="LINEAR_API_KEY",
)
