"""Minimal git queries needed by the vendor commands."""

from pathlib import Path

from dovetail.core.gateway import (
    ClassificationRule,
    CommandRunner,
    CommandSpec,
    ErrorKind,
    VendorProfile,
    run_external,
)

GIT_PROFILE = VendorProfile(
    name="Git",
    executable="git",
    install_instructions="Install it from: https://git-scm.com/downloads",
    rules=(
        ClassificationRule(
            "not a git repository",
            ErrorKind.RESOURCE_NOT_FOUND,
            "Not in a git repository.\n\nRun this command from inside your project checkout.",
        ),
    ),
)


def current_branch(runner: CommandRunner, cwd: Path) -> str | None:
    """Return the checked-out branch at cwd, or None on a detached HEAD."""
    spec = CommandSpec(executable="git", args=("branch", "--show-current"), cwd=cwd)
    result = run_external(spec, GIT_PROFILE, runner)
    return result.stdout.strip() or None
