"""Type definitions for GitHub operations."""

from dataclasses import dataclass
from typing import Literal

MergeMethod = Literal["merge", "squash", "rebase"]


@dataclass(frozen=True)
class RepoInfo:
    """Information about a GitHub repository."""

    name: str
    owner: str
    url: str
    default_branch: str | None = None
    is_private: bool | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class PullRequest:
    """Information about a GitHub pull request."""

    number: int
    title: str | None
    state: str  # "OPEN", "MERGED", "CLOSED"
    url: str
    head_ref_name: str | None = None
    is_draft: bool = False
