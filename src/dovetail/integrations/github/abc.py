"""Abstract base class for GitHub operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.github.types import MergeMethod, PullRequest, RepoInfo


class GitHub(ABC):
    """Abstract interface for GitHub operations.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        """Report whether gh is logged in.

        Returns AuthStatus(authenticated=False) for classified failures
        instead of raising.
        """
        ...

    @abstractmethod
    def get_current_user(self) -> str:
        """Get the login of the authenticated user."""
        ...

    @abstractmethod
    def create_repo(
        self,
        name: str,
        *,
        private: bool,
        description: str | None = None,
        owner: str | None = None,
    ) -> RepoInfo:
        """Create a repository and return its details.

        Args:
            name: Repository name
            private: Create as private (public otherwise)
            description: Optional repository description
            owner: Organization to create under (authenticated user if None)
        """
        ...

    @abstractmethod
    def view_repo(self, repo: str) -> RepoInfo:
        """Get repository details for an "owner/name" reference."""
        ...

    @abstractmethod
    def get_current_repo(self, cwd: Path) -> RepoInfo | None:
        """Get the repository for the git checkout at cwd.

        Returns:
            RepoInfo, or None if cwd is not a GitHub-backed repository
        """
        ...

    @abstractmethod
    def set_secret(self, repo: str, name: str, value: str) -> None:
        """Set an Actions secret on a repository."""
        ...

    @abstractmethod
    def create_pr(
        self,
        cwd: Path,
        *,
        title: str,
        body: str,
        base: str | None = None,
        head: str | None = None,
        draft: bool = False,
    ) -> PullRequest:
        """Open a pull request from the repository at cwd."""
        ...

    @abstractmethod
    def merge_pr(
        self,
        cwd: Path,
        pr_number: int,
        *,
        method: MergeMethod = "merge",
        auto: bool = False,
        delete_branch: bool = False,
    ) -> None:
        """Merge a pull request."""
        ...

    @abstractmethod
    def list_prs(
        self, cwd: Path, *, state: str | None = None, limit: int | None = None
    ) -> list[PullRequest]:
        """List pull requests of the repository at cwd."""
        ...

    @abstractmethod
    def get_pr_for_branch(self, cwd: Path, branch: str) -> PullRequest | None:
        """Get the most recent pull request whose head is branch.

        Returns:
            PullRequest, or None if no PR exists for the branch
        """
        ...
