"""Tests for RealCommandRunner against real processes.

These start short-lived `sh` processes, so they depend only on a POSIX shell.
"""

import subprocess
from pathlib import Path

import pytest
from pytest import MonkeyPatch

from dovetail.core.gateway import (
    CommandError,
    CommandSpec,
    CommandStartError,
    CommandTimeoutError,
    ErrorKind,
    ExecutableNotFoundError,
    run_external,
)
from dovetail.core.gateway.real import RealCommandRunner
from dovetail.core.gateway.types import ClassificationRule, VendorProfile

SH_PROFILE = VendorProfile(
    name="Shell",
    executable="sh",
    install_instructions="Install it from: your operating system",
    rules=(
        ClassificationRule("not logged in", ErrorKind.NOT_AUTHENTICATED, "Run: sh login"),
    ),
)


def _sh(script: str, **kwargs) -> CommandSpec:
    return CommandSpec(executable="sh", args=("-c", script), **kwargs)


def test_captures_stdout_stderr_and_exit_code() -> None:
    result = RealCommandRunner().run(_sh("echo out; echo err >&2; exit 3"))

    assert result.stdout == "out\n"
    assert result.stderr == "err\n"
    assert result.exit_code == 3
    assert result.succeeded is False


def test_passes_stdin_and_cwd(tmp_path: Path) -> None:
    result = RealCommandRunner().run(_sh("pwd; cat", cwd=tmp_path, input="hello"))

    assert result.stdout == f"{tmp_path.resolve()}\nhello"


def test_layers_env_over_inherited_environment(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("DOVETAIL_INHERITED", "kept")

    result = RealCommandRunner().run(
        _sh('echo "$DOVETAIL_INHERITED $GITHUB_TOKEN"', env={"GITHUB_TOKEN": "ghp_x"})
    )

    assert result.stdout == "kept ghp_x\n"


def test_undecodable_output_is_replaced() -> None:
    result = RealCommandRunner().run(_sh(r"printf '\377ok'"))

    assert result.stdout.endswith("ok")
    assert "�" in result.stdout


def test_missing_executable_raises_executable_not_found() -> None:
    with pytest.raises(ExecutableNotFoundError) as exc_info:
        RealCommandRunner().run(CommandSpec(executable="ghost-cli-does-not-exist"))

    assert exc_info.value.executable == "ghost-cli-does-not-exist"


def test_missing_cwd_is_a_start_error(tmp_path: Path) -> None:
    with pytest.raises(CommandStartError) as exc_info:
        RealCommandRunner().run(_sh("true", cwd=tmp_path / "gone"))

    assert isinstance(exc_info.value.reason, FileNotFoundError)


def test_missing_cwd_through_gateway_is_classified_not_missing_executable(
    tmp_path: Path,
) -> None:
    with pytest.raises(CommandError) as exc_info:
        run_external(_sh("true", cwd=tmp_path / "gone"), SH_PROFILE, RealCommandRunner())

    assert exc_info.value.kind is ErrorKind.UNKNOWN
    assert "Shell could not be started:" in exc_info.value.message
    assert str(tmp_path / "gone") in exc_info.value.message


def test_cwd_that_is_a_file_is_classified(tmp_path: Path) -> None:
    not_a_dir = tmp_path / "file.txt"
    not_a_dir.write_text("x", encoding="utf-8")

    with pytest.raises(CommandError) as exc_info:
        run_external(_sh("true", cwd=not_a_dir), SH_PROFILE, RealCommandRunner())

    assert exc_info.value.kind is ErrorKind.UNKNOWN


def test_non_executable_file_is_permission_denied(tmp_path: Path) -> None:
    tool = tmp_path / "tool"
    tool.write_text("#!/bin/sh\necho hi\n", encoding="utf-8")
    tool.chmod(0o600)
    profile = VendorProfile(
        name="Tool", executable=str(tool), install_instructions="Install it from: x", rules=()
    )

    with pytest.raises(CommandError) as exc_info:
        run_external(CommandSpec(executable=str(tool)), profile, RealCommandRunner())

    assert exc_info.value.kind is ErrorKind.PERMISSION_DENIED
    assert "Permission denied" in exc_info.value.message


def test_timeout_raises_command_timeout() -> None:
    with pytest.raises(CommandTimeoutError) as exc_info:
        RealCommandRunner().run(_sh("sleep 5", timeout=0.2))

    assert exc_info.value.timeout == 0.2


def test_ghost_cli_through_gateway_is_not_installed() -> None:
    profile = VendorProfile(
        name="Ghost CLI",
        executable="ghost-cli-does-not-exist",
        install_instructions="Install it from: https://example.com/ghost",
        rules=(),
    )
    spec = CommandSpec(executable=profile.executable, args=("--version",))

    with pytest.raises(CommandError) as exc_info:
        run_external(spec, profile, RealCommandRunner())

    assert exc_info.value.kind is ErrorKind.NOT_INSTALLED
    assert "Install it from:" in exc_info.value.message


def test_shell_exit_127_through_gateway_is_not_installed() -> None:
    spec = _sh("ghost-cli-does-not-exist --version")

    with pytest.raises(CommandError) as exc_info:
        run_external(spec, SH_PROFILE, RealCommandRunner())

    assert exc_info.value.kind is ErrorKind.NOT_INSTALLED


def test_real_failure_is_classified() -> None:
    spec = _sh("echo 'Error: not logged in' >&2; exit 1")

    with pytest.raises(CommandError) as exc_info:
        run_external(spec, SH_PROFILE, RealCommandRunner())

    assert exc_info.value.kind is ErrorKind.NOT_AUTHENTICATED


def test_version_probe_is_idempotent() -> None:
    spec = _sh("echo probe-1.0")
    runner = RealCommandRunner()

    first = run_external(spec, SH_PROFILE, runner)
    second = run_external(spec, SH_PROFILE, runner)

    assert first == second
    assert first.stdout == "probe-1.0\n"


def test_timeout_through_gateway_is_classified() -> None:
    with pytest.raises(CommandError) as exc_info:
        run_external(_sh("sleep 5", timeout=0.2), SH_PROFILE, RealCommandRunner())

    assert exc_info.value.kind is ErrorKind.TIMEOUT


def test_run_uses_check_false_and_text_mode(monkeypatch: MonkeyPatch) -> None:
    captured: dict = {}

    def mock_run(cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        captured["cmd"] = cmd
        captured.update(kwargs)
        return subprocess.CompletedProcess(args=cmd, returncode=1, stdout=None, stderr="boom")

    monkeypatch.setattr(subprocess, "run", mock_run)

    result = RealCommandRunner().run(CommandSpec(executable="gh", args=("pr", "list")))

    assert captured["cmd"] == ["gh", "pr", "list"]
    assert captured["check"] is False
    assert captured["text"] is True
    assert captured["capture_output"] is True
    assert captured["env"] is None
    assert result.stdout == ""
    assert result.stderr == "boom"
    assert result.exit_code == 1
