"""Fake GitHub operations for testing.

FakeGitHub is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from pathlib import Path

from dovetail.core.gateway import CommandError
from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.github.abc import GitHub
from dovetail.integrations.github.types import MergeMethod, PullRequest, RepoInfo


class FakeGitHub(GitHub):
    """In-memory fake implementation of GitHub operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty collections).
    """

    def __init__(
        self,
        *,
        authenticated: bool = True,
        user: str = "octocat",
        repos: dict[str, RepoInfo] | None = None,
        current_repo: RepoInfo | None = None,
        prs: list[PullRequest] | None = None,
        failure: CommandError | None = None,
    ) -> None:
        """Create FakeGitHub with pre-configured state.

        Args:
            authenticated: Result of check_auth()
            user: Login returned by get_current_user()
            repos: Mapping of "owner/name" -> RepoInfo
            current_repo: Repository reported for any cwd (None = not in a repo)
            prs: Pull requests known to the fake, newest first
            failure: If set, every operation other than check_auth raises it
        """
        self._authenticated = authenticated
        self._user = user
        self._repos = dict(repos or {})
        self._current_repo = current_repo
        self._prs = list(prs or [])
        self._failure = failure
        self._secrets: list[tuple[str, str, str]] = []
        self._merged_prs: list[tuple[int, MergeMethod]] = []

    def _maybe_fail(self) -> None:
        if self._failure is not None:
            raise self._failure

    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        if not self._authenticated:
            return AuthStatus(authenticated=False, detail="GitHub CLI not authenticated.")
        return AuthStatus(authenticated=True, detail=f"Logged in to github.com as {self._user}")

    def get_current_user(self) -> str:
        self._maybe_fail()
        return self._user

    def create_repo(
        self,
        name: str,
        *,
        private: bool,
        description: str | None = None,
        owner: str | None = None,
    ) -> RepoInfo:
        self._maybe_fail()
        resolved_owner = owner or self._user
        repo = RepoInfo(
            name=name,
            owner=resolved_owner,
            url=f"https://github.com/{resolved_owner}/{name}",
            default_branch=None,
            is_private=private,
        )
        self._repos[repo.full_name] = repo
        return repo

    def view_repo(self, repo: str) -> RepoInfo:
        self._maybe_fail()
        return self._repos[repo]

    def get_current_repo(self, cwd: Path) -> RepoInfo | None:
        self._maybe_fail()
        return self._current_repo

    def set_secret(self, repo: str, name: str, value: str) -> None:
        self._maybe_fail()
        self._secrets.append((repo, name, value))

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
        self._maybe_fail()
        number = max((pr.number for pr in self._prs), default=0) + 1
        pr = PullRequest(
            number=number,
            title=title,
            state="OPEN",
            url=f"https://github.com/owner/repo/pull/{number}",
            head_ref_name=head,
            is_draft=draft,
        )
        self._prs.insert(0, pr)
        return pr

    def merge_pr(
        self,
        cwd: Path,
        pr_number: int,
        *,
        method: MergeMethod = "merge",
        auto: bool = False,
        delete_branch: bool = False,
    ) -> None:
        self._maybe_fail()
        self._merged_prs.append((pr_number, method))

    def list_prs(
        self, cwd: Path, *, state: str | None = None, limit: int | None = None
    ) -> list[PullRequest]:
        self._maybe_fail()
        prs = self._prs
        if state and state != "all":
            prs = [pr for pr in prs if pr.state.lower() == state.lower()]
        if limit is not None:
            prs = prs[:limit]
        return list(prs)

    def get_pr_for_branch(self, cwd: Path, branch: str) -> PullRequest | None:
        self._maybe_fail()
        for pr in self._prs:
            if pr.head_ref_name == branch:
                return pr
        return None

    @property
    def prs(self) -> list[PullRequest]:
        """All pull requests known to the fake, including pre-configured ones."""
        return list(self._prs)

    @property
    def secrets(self) -> list[tuple[str, str, str]]:
        """Read-only list of (repo, name, value) passed to set_secret()."""
        return list(self._secrets)

    @property
    def merged_prs(self) -> list[tuple[int, MergeMethod]]:
        """Read-only list of (pr_number, method) passed to merge_pr()."""
        return list(self._merged_prs)
