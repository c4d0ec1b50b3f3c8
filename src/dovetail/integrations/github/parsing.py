"""Parsing helpers for gh CLI JSON and text output."""

import json
import re
from typing import Any

from dovetail.integrations.github.types import PullRequest, RepoInfo

_PR_URL_PATTERN = re.compile(r"https://\S+/pull/(\d+)")


def parse_repo(data: dict[str, Any]) -> RepoInfo:
    """Convert `gh repo view --json` output to RepoInfo.

    owner is an object ({"login": ...}); defaultBranchRef is an object
    ({"name": ...}) or null for empty repositories.
    """
    owner = data.get("owner") or {}
    default_branch_ref = data.get("defaultBranchRef") or {}
    return RepoInfo(
        name=data["name"],
        owner=owner.get("login", "") if isinstance(owner, dict) else str(owner),
        url=data.get("url", ""),
        default_branch=default_branch_ref.get("name") or None,
        is_private=data.get("isPrivate"),
    )


def parse_pr(data: dict[str, Any]) -> PullRequest:
    return PullRequest(
        number=int(data["number"]),
        title=data.get("title"),
        state=data.get("state", "OPEN"),
        url=data.get("url", ""),
        head_ref_name=data.get("headRefName"),
        is_draft=bool(data.get("isDraft", False)),
    )


def parse_pr_list(stdout: str) -> list[PullRequest]:
    return [parse_pr(item) for item in json.loads(stdout)]


def parse_created_pr_url(stdout: str) -> tuple[str, int]:
    """Extract (url, number) from the text `gh pr create` prints.

    Raises:
        ValueError: If no pull request URL is present in the output
    """
    match = _PR_URL_PATTERN.search(stdout)
    if match is None:
        raise ValueError(f"Could not find a pull request URL in gh output:\n{stdout.strip()}")
    return match.group(0), int(match.group(1))
