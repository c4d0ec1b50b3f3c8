"""Tests for RealGitHub argument building and output parsing.

RealGitHub is backed by FakeCommandRunner, so every test sees the exact gh
argv and can hand back canned stdout.
"""

import json
import logging
from pathlib import Path

import pytest

from dovetail.core.gateway import CommandError, CommandGateway, CommandResult, ErrorKind
from dovetail.core.gateway.fake import FakeCommandRunner
from dovetail.integrations.github import GITHUB_PROFILE, PullRequest, RealGitHub

REPO_JSON = json.dumps(
    {
        "name": "dovetail",
        "owner": {"login": "acme"},
        "url": "https://github.com/acme/dovetail",
        "defaultBranchRef": {"name": "main"},
        "isPrivate": True,
    }
)

PR_LIST_JSON = json.dumps(
    [
        {
            "number": 42,
            "title": "Add doctor command",
            "state": "OPEN",
            "url": "https://github.com/acme/dovetail/pull/42",
            "headRefName": "feature/doctor",
            "isDraft": False,
        },
        {
            "number": 41,
            "title": "WIP",
            "state": "OPEN",
            "url": "https://github.com/acme/dovetail/pull/41",
            "headRefName": "wip",
            "isDraft": True,
        },
    ]
)


def _ok(stdout: str) -> CommandResult:
    return CommandResult(stdout=stdout, stderr="", exit_code=0)


def _github(runner: FakeCommandRunner) -> RealGitHub:
    return RealGitHub(CommandGateway(GITHUB_PROFILE, runner))


def test_check_auth_authenticated() -> None:
    runner = FakeCommandRunner(
        results={("gh", "auth", "status"): CommandResult("", "Logged in to github.com", 0)}
    )

    status = _github(runner).check_auth()

    assert status.authenticated is True
    assert status.detail == "Logged in to github.com"


def test_check_auth_not_logged_in() -> None:
    runner = FakeCommandRunner(
        default_result=CommandResult("", "You are not logged into any GitHub hosts.", 1)
    )

    status = _github(runner).check_auth()

    assert status.authenticated is False
    assert status.detail is not None
    assert "gh auth login" in status.detail


def test_view_repo_parses_json() -> None:
    runner = FakeCommandRunner(default_result=_ok(REPO_JSON))

    repo = _github(runner).view_repo("acme/dovetail")

    fields = "name,owner,url,defaultBranchRef,isPrivate"
    assert runner.argvs == [["gh", "repo", "view", "acme/dovetail", "--json", fields]]
    assert repo.full_name == "acme/dovetail"
    assert repo.default_branch == "main"
    assert repo.is_private is True


def test_get_current_repo_outside_repository_is_none() -> None:
    runner = FakeCommandRunner(
        default_result=CommandResult("", "fatal: not a git repository (or any parent)", 1)
    )

    assert _github(runner).get_current_repo(Path("/tmp/nowhere")) is None
    assert runner.calls[0].cwd == Path("/tmp/nowhere")


def test_get_current_repo_logs_why_it_found_nothing(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="dovetail.integrations.github.real")
    runner = FakeCommandRunner(
        default_result=CommandResult("", "error connecting to api.github.com", 1)
    )

    assert _github(runner).get_current_repo(Path("/repo")) is None

    assert any(
        "No GitHub repository for /repo (Unknown)" in record.message
        and "error connecting to api.github.com" in record.message
        for record in caplog.records
    )


def test_get_current_repo_propagates_auth_failure() -> None:
    runner = FakeCommandRunner(default_result=CommandResult("", "error: not logged in", 1))

    with pytest.raises(CommandError) as exc_info:
        _github(runner).get_current_repo(Path("/repo"))

    assert exc_info.value.kind is ErrorKind.NOT_AUTHENTICATED


def test_create_repo_then_views_it() -> None:
    runner = FakeCommandRunner(
        results={
            ("gh", "repo", "create", "acme/dovetail", "--private"): _ok(
                "https://github.com/acme/dovetail\n"
            ),
        },
        default_result=_ok(REPO_JSON),
    )

    repo = _github(runner).create_repo("dovetail", private=True, owner="acme")

    assert runner.argvs[0] == ["gh", "repo", "create", "acme/dovetail", "--private"]
    assert runner.argvs[1][:4] == ["gh", "repo", "view", "acme/dovetail"]
    assert repo.name == "dovetail"


def test_set_secret_sends_value_on_stdin() -> None:
    runner = FakeCommandRunner()

    _github(runner).set_secret("acme/dovetail", "FLY_API_TOKEN", "s3cret")

    (spec,) = runner.calls
    assert spec.argv == ["gh", "secret", "set", "FLY_API_TOKEN", "--repo", "acme/dovetail"]
    assert spec.input == "s3cret"
    assert "s3cret" not in spec.argv


def test_create_pr_parses_url_from_text_output() -> None:
    runner = FakeCommandRunner(
        default_result=_ok(
            "Creating pull request for feature into main\n\n"
            "https://github.com/acme/dovetail/pull/57\n"
        )
    )

    pr = _github(runner).create_pr(
        Path("/repo"), title="Add X", body="Body", base="main", head="feature", draft=True
    )

    assert runner.argvs == [
        [
            "gh",
            "pr",
            "create",
            "--title",
            "Add X",
            "--body",
            "Body",
            "--base",
            "main",
            "--head",
            "feature",
            "--draft",
        ]
    ]
    assert pr == PullRequest(
        number=57,
        title="Add X",
        state="OPEN",
        url="https://github.com/acme/dovetail/pull/57",
        head_ref_name="feature",
        is_draft=True,
    )


def test_create_pr_without_url_raises_value_error() -> None:
    runner = FakeCommandRunner(default_result=_ok("something unexpected\n"))

    with pytest.raises(ValueError, match="Could not find a pull request URL"):
        _github(runner).create_pr(Path("/repo"), title="t", body="b")


def test_merge_pr_builds_flags() -> None:
    runner = FakeCommandRunner()

    _github(runner).merge_pr(Path("/repo"), 42, method="squash", auto=True, delete_branch=True)

    assert runner.argvs == [["gh", "pr", "merge", "42", "--squash", "--auto", "--delete-branch"]]


def test_list_prs_parses_json() -> None:
    runner = FakeCommandRunner(default_result=_ok(PR_LIST_JSON))

    prs = _github(runner).list_prs(Path("/repo"), state="open", limit=10)

    assert runner.argvs[0][-4:] == ["--state", "open", "--limit", "10"]
    assert [pr.number for pr in prs] == [42, 41]
    assert prs[1].is_draft is True


def test_get_pr_for_branch_returns_first_match() -> None:
    runner = FakeCommandRunner(default_result=_ok(PR_LIST_JSON))

    pr = _github(runner).get_pr_for_branch(Path("/repo"), "feature/doctor")

    assert pr is not None
    assert pr.number == 42
    assert runner.argvs[0][:5] == ["gh", "pr", "list", "--head", "feature/doctor"]


def test_get_pr_for_branch_without_pr_is_none() -> None:
    runner = FakeCommandRunner(default_result=_ok("[]"))

    assert _github(runner).get_pr_for_branch(Path("/repo"), "lonely") is None


def test_get_pr_for_branch_not_found_is_none() -> None:
    runner = FakeCommandRunner(default_result=CommandResult("", "HTTP 404: Not Found", 1))

    assert _github(runner).get_pr_for_branch(Path("/repo"), "gone") is None


def test_list_prs_unknown_failure_carries_stderr() -> None:
    runner = FakeCommandRunner(default_result=CommandResult("", "HTTP 502: Bad Gateway", 1))

    with pytest.raises(CommandError) as exc_info:
        _github(runner).list_prs(Path("/repo"))

    assert exc_info.value.kind is ErrorKind.UNKNOWN
    assert "HTTP 502: Bad Gateway" in exc_info.value.message


def test_get_current_user_strips_output() -> None:
    runner = FakeCommandRunner(default_result=_ok("octocat\n"))

    assert _github(runner).get_current_user() == "octocat"
    assert runner.argvs == [["gh", "api", "user", "--jq", ".login"]]
