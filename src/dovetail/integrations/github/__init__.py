"""GitHub integration backed by the gh CLI."""

from dovetail.integrations.github.abc import GitHub
from dovetail.integrations.github.fake import FakeGitHub
from dovetail.integrations.github.profile import GITHUB_PROFILE
from dovetail.integrations.github.real import RealGitHub
from dovetail.integrations.github.types import MergeMethod, PullRequest, RepoInfo

__all__ = [
    "GITHUB_PROFILE",
    "FakeGitHub",
    "GitHub",
    "MergeMethod",
    "PullRequest",
    "RealGitHub",
    "RepoInfo",
]
