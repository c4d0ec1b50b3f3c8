"""Tests for run_external() classification and CommandGateway.

All tests use FakeCommandRunner, so no process is ever started.
"""

import errno
import re
from pathlib import Path

import pytest

from dovetail.core.config_store import DovetailConfig
from dovetail.core.credentials import CredentialResolver
from dovetail.core.gateway import (
    ClassificationRule,
    CommandError,
    CommandGateway,
    CommandResult,
    CommandSpec,
    ErrorKind,
    VendorProfile,
    classify_failure,
    run_external,
)
from dovetail.core.gateway.fake import FakeCommandRunner
from dovetail.integrations import FLY_PROFILE, GITHUB_PROFILE, VENDOR_PROFILES

GHOST_PROFILE = VendorProfile(
    name="Ghost CLI",
    executable="ghost-cli",
    install_instructions="Install it from: https://example.com/ghost",
    rules=(
        ClassificationRule("not logged in", ErrorKind.NOT_AUTHENTICATED, "Run: ghost login"),
    ),
)


def _failing(stderr: str, *, stdout: str = "", exit_code: int = 1) -> FakeCommandRunner:
    return FakeCommandRunner(
        default_result=CommandResult(stdout=stdout, stderr=stderr, exit_code=exit_code)
    )


def _run_failing(profile: VendorProfile, stderr: str, *, stdout: str = "") -> CommandError:
    spec = CommandSpec(executable=profile.executable, args=("do", "thing"))
    with pytest.raises(CommandError) as exc_info:
        run_external(spec, profile, _failing(stderr, stdout=stdout))
    return exc_info.value


# ============================================================================
# NotInstalled
# ============================================================================


def test_missing_executable_is_not_installed_with_install_instructions() -> None:
    runner = FakeCommandRunner(missing_executables=["ghost-cli"])
    spec = CommandSpec(executable="ghost-cli", args=("status",))

    with pytest.raises(CommandError) as exc_info:
        run_external(spec, GHOST_PROFILE, runner)

    assert exc_info.value.kind is ErrorKind.NOT_INSTALLED
    assert "Install it from:" in exc_info.value.message
    assert exc_info.value.result is None


@pytest.mark.parametrize("profile", VENDOR_PROFILES, ids=lambda p: p.executable)
def test_not_installed_precedes_rule_table(profile: VendorProfile) -> None:
    """A rule that would match everything never sees a missing executable."""
    match_all = ClassificationRule(re.compile(""), ErrorKind.PERMISSION_DENIED, "never")
    greedy = VendorProfile(
        name=profile.name,
        executable=profile.executable,
        install_instructions=profile.install_instructions,
        rules=(match_all, *profile.rules),
    )
    runner = FakeCommandRunner(missing_executables=[profile.executable])

    with pytest.raises(CommandError) as exc_info:
        run_external(CommandSpec(executable=profile.executable), greedy, runner)

    assert exc_info.value.kind is ErrorKind.NOT_INSTALLED
    assert profile.install_instructions in exc_info.value.message


def test_shell_command_not_found_exit_is_not_installed() -> None:
    runner = _failing("sh: 1: ghost-cli: command not found", exit_code=127)

    with pytest.raises(CommandError) as exc_info:
        run_external(CommandSpec(executable="ghost-cli"), GHOST_PROFILE, runner)

    assert exc_info.value.kind is ErrorKind.NOT_INSTALLED


def test_exit_127_without_shell_message_uses_rules() -> None:
    runner = _failing("Error: not logged in", exit_code=127)

    with pytest.raises(CommandError) as exc_info:
        run_external(CommandSpec(executable="ghost-cli"), GHOST_PROFILE, runner)

    assert exc_info.value.kind is ErrorKind.NOT_AUTHENTICATED


# ============================================================================
# Rule classification
# ============================================================================


def test_not_logged_in_is_not_authenticated() -> None:
    error = _run_failing(GITHUB_PROFILE, "Error: not logged in")

    assert error.kind is ErrorKind.NOT_AUTHENTICATED
    assert "gh auth login" in error.message


def test_could_not_find_app_is_resource_not_found() -> None:
    error = _run_failing(FLY_PROFILE, "Error: Could not find App")

    assert error.kind is ErrorKind.RESOURCE_NOT_FOUND


def test_insufficient_scope_is_permission_denied() -> None:
    error = _run_failing(GITHUB_PROFILE, "permission denied: insufficient scope")

    assert error.kind is ErrorKind.PERMISSION_DENIED
    assert "gh auth refresh" in error.message


def test_pattern_in_stdout_is_classified() -> None:
    error = _run_failing(GITHUB_PROFILE, "", stdout="HTTP 404: Not Found")

    assert error.kind is ErrorKind.RESOURCE_NOT_FOUND


def test_string_patterns_match_case_insensitively() -> None:
    error = _run_failing(GITHUB_PROFILE, "ERROR: NOT LOGGED IN TO ANY HOSTS")

    assert error.kind is ErrorKind.NOT_AUTHENTICATED


@pytest.mark.parametrize("profile", VENDOR_PROFILES, ids=lambda p: p.executable)
def test_every_rule_pattern_is_classified_never_unknown(profile: VendorProfile) -> None:
    for rule in profile.rules:
        if isinstance(rule.pattern, re.Pattern):
            continue
        error = _run_failing(profile, f"Error: {rule.pattern} (request abc123)")
        assert error.kind is not ErrorKind.UNKNOWN, rule.pattern
        assert error.kind is classify_failure(error.result, profile.rules).kind


@pytest.mark.parametrize("profile", VENDOR_PROFILES, ids=lambda p: p.executable)
@pytest.mark.parametrize(
    ("stderr", "kind"),
    [
        ("Error: not logged in", ErrorKind.NOT_AUTHENTICATED),
        ("Error: Could not find App", ErrorKind.RESOURCE_NOT_FOUND),
        ("permission denied: insufficient scope", ErrorKind.PERMISSION_DENIED),
    ],
)
def test_common_failures_classify_the_same_for_every_vendor(
    profile: VendorProfile, stderr: str, kind: ErrorKind
) -> None:
    error = _run_failing(profile, stderr)

    assert error.kind is kind


@pytest.mark.parametrize("profile", VENDOR_PROFILES, ids=lambda p: p.executable)
def test_exit_zero_is_verbatim_for_every_vendor(profile: VendorProfile) -> None:
    expected = CommandResult(stdout='{"ok":true}', stderr="", exit_code=0)
    spec = CommandSpec(executable=profile.executable, args=("do", "thing"))

    result = run_external(spec, profile, FakeCommandRunner(default_result=expected))

    assert result == expected


def test_first_matching_rule_wins() -> None:
    profile = VendorProfile(
        name="Ordered",
        executable="ordered",
        install_instructions="Install it from: nowhere",
        rules=(
            ClassificationRule("forbidden", ErrorKind.PERMISSION_DENIED, "first"),
            ClassificationRule("not found", ErrorKind.RESOURCE_NOT_FOUND, "second"),
        ),
    )

    error = _run_failing(profile, "forbidden: project not found")

    assert error.kind is ErrorKind.PERMISSION_DENIED
    assert error.message == "first"


def test_rule_message_is_formatted_with_command() -> None:
    profile = VendorProfile(
        name="Templated",
        executable="tool",
        install_instructions="Install it from: nowhere",
        rules=(
            ClassificationRule(
                "not found", ErrorKind.RESOURCE_NOT_FOUND, "Missing:\n  {command} ({executable})"
            ),
        ),
    )

    error = _run_failing(profile, "thing not found")

    assert error.message == "Missing:\n  tool do thing (tool)"


def test_unmatched_failure_is_unknown_with_stderr() -> None:
    error = _run_failing(GITHUB_PROFILE, "something exploded", stdout="partial")

    assert error.kind is ErrorKind.UNKNOWN
    assert "something exploded" in error.message
    assert "partial" not in error.message
    assert error.result is not None
    assert error.result.exit_code == 1


def test_unmatched_failure_falls_back_to_stdout() -> None:
    error = _run_failing(GITHUB_PROFILE, "   ", stdout="only stdout explains it")

    assert error.kind is ErrorKind.UNKNOWN
    assert "only stdout explains it" in error.message


# ============================================================================
# Success and timeouts
# ============================================================================


def test_exit_zero_returns_stdout_verbatim() -> None:
    expected = CommandResult(stdout='{"ok":true}', stderr="", exit_code=0)
    runner = FakeCommandRunner(default_result=expected)

    result = run_external(CommandSpec(executable="gh", args=("api",)), GITHUB_PROFILE, runner)

    assert result.succeeded is True
    assert result.stdout == '{"ok":true}'
    assert result == expected


def test_exit_zero_with_error_text_is_not_classified() -> None:
    runner = FakeCommandRunner(
        default_result=CommandResult(stdout="", stderr="warning: not logged in", exit_code=0)
    )

    result = run_external(CommandSpec(executable="gh"), GITHUB_PROFILE, runner)

    assert result.succeeded is True


def test_identical_probes_are_idempotent() -> None:
    spec = CommandSpec(executable="gh", args=("--version",))
    runner = FakeCommandRunner(
        results={
            ("gh", "--version"): CommandResult(stdout="gh version 2.40.0\n", stderr="", exit_code=0)
        }
    )

    first = run_external(spec, GITHUB_PROFILE, runner)
    second = run_external(spec, GITHUB_PROFILE, runner)

    assert first == second
    assert len(runner.calls) == 2


def test_identical_failures_classify_identically() -> None:
    spec = CommandSpec(executable="gh", args=("repo", "view"))
    runner = _failing("GraphQL: Could not resolve to a Repository")

    kinds = []
    for _ in range(2):
        with pytest.raises(CommandError) as exc_info:
            run_external(spec, GITHUB_PROFILE, runner)
        kinds.append(exc_info.value.kind)

    assert kinds == [ErrorKind.RESOURCE_NOT_FOUND, ErrorKind.RESOURCE_NOT_FOUND]


def test_timeout_is_classified() -> None:
    spec = CommandSpec(executable="flyctl", args=("apps", "list"), timeout=2.5)
    runner = FakeCommandRunner(timeouts=[("flyctl", "apps", "list")])

    with pytest.raises(CommandError) as exc_info:
        run_external(spec, FLY_PROFILE, runner)

    assert exc_info.value.kind is ErrorKind.TIMEOUT
    assert "timed out after 2.5s" in exc_info.value.message
    assert "flyctl apps list" in exc_info.value.message


def test_start_failure_with_eacces_is_permission_denied() -> None:
    denied = PermissionError(errno.EACCES, "Permission denied", "/opt/bin/gh")
    runner = FakeCommandRunner(start_failures={"gh": denied})

    with pytest.raises(CommandError) as exc_info:
        run_external(CommandSpec(executable="gh", args=("pr", "list")), GITHUB_PROFILE, runner)

    assert exc_info.value.kind is ErrorKind.PERMISSION_DENIED
    assert exc_info.value.message == (
        "GitHub CLI could not be started:\n  gh pr list\n\nPermission denied: /opt/bin/gh"
    )


def test_other_start_failure_is_unknown_not_missing_executable() -> None:
    runner = FakeCommandRunner(
        start_failures={"flyctl": NotADirectoryError(errno.ENOTDIR, "Not a directory", "/x")}
    )

    with pytest.raises(CommandError) as exc_info:
        run_external(CommandSpec(executable="flyctl", cwd=Path("/x")), FLY_PROFILE, runner)

    assert exc_info.value.kind is ErrorKind.UNKNOWN
    assert "Not a directory: /x" in exc_info.value.message


# ============================================================================
# CommandGateway
# ============================================================================


def test_gateway_prefixes_executable_and_passes_cwd_and_input() -> None:
    runner = FakeCommandRunner()
    gateway = CommandGateway(GITHUB_PROFILE, runner)

    gateway.run(["secret", "set", "X"], cwd=Path("/repo"), input="value", timeout=3.0)

    (spec,) = runner.calls
    assert spec.argv == ["gh", "secret", "set", "X"]
    assert spec.cwd == Path("/repo")
    assert spec.input == "value"
    assert spec.timeout == 3.0
    assert dict(spec.env) == {}


def test_gateway_injects_token_from_config() -> None:
    runner = FakeCommandRunner()
    credentials = CredentialResolver(
        DovetailConfig(github_token="ghp_config"), {"GITHUB_TOKEN": "ghp_env"}
    )
    gateway = CommandGateway(GITHUB_PROFILE, runner, credentials)

    gateway.run(["auth", "status"])

    assert dict(runner.calls[0].env) == {"GITHUB_TOKEN": "ghp_config"}


def test_gateway_omits_token_when_unresolved() -> None:
    runner = FakeCommandRunner()
    gateway = CommandGateway(FLY_PROFILE, runner, CredentialResolver(DovetailConfig(), {}))

    gateway.run(["apps", "list"])

    assert dict(runner.calls[0].env) == {}


def test_gateway_raises_classified_error() -> None:
    gateway = CommandGateway(FLY_PROFILE, _failing("Error: not logged in"))

    with pytest.raises(CommandError) as exc_info:
        gateway.run(["apps", "list"])

    assert exc_info.value.kind is ErrorKind.NOT_AUTHENTICATED
    assert exc_info.value.spec.argv == ["flyctl", "apps", "list"]
