"""Production implementation of GitHub operations."""

import json
import logging
from pathlib import Path

from dovetail.core.gateway import CommandError, CommandGateway, ErrorKind
from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.github.abc import GitHub
from dovetail.integrations.github.parsing import (
    parse_created_pr_url,
    parse_pr_list,
    parse_repo,
)
from dovetail.integrations.github.types import MergeMethod, PullRequest, RepoInfo

_REPO_FIELDS = "name,owner,url,defaultBranchRef,isPrivate"
_PR_FIELDS = "number,title,state,url,headRefName,isDraft"

logger = logging.getLogger(__name__)


class RealGitHub(GitHub):
    """Production implementation using gh CLI.

    All GitHub operations execute actual gh commands through the gateway.
    """

    def __init__(self, gateway: CommandGateway) -> None:
        self._gateway = gateway

    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        try:
            result = self._gateway.run(["auth", "status"], timeout=timeout)
        except CommandError as e:
            return AuthStatus(authenticated=False, detail=e.message)
        # Older gh versions print the status report to stderr
        return AuthStatus(authenticated=True, detail=(result.stdout or result.stderr).strip())

    def get_current_user(self) -> str:
        result = self._gateway.run(["api", "user", "--jq", ".login"])
        return result.stdout.strip()

    def create_repo(
        self,
        name: str,
        *,
        private: bool,
        description: str | None = None,
        owner: str | None = None,
    ) -> RepoInfo:
        full_name = f"{owner}/{name}" if owner else name
        args = ["repo", "create", full_name, "--private" if private else "--public"]
        if description:
            args.extend(["--description", description])
        self._gateway.run(args)

        # gh repo create does not emit JSON; look the repository up afterwards
        resolved_owner = owner or self.get_current_user()
        return self.view_repo(f"{resolved_owner}/{name}")

    def view_repo(self, repo: str) -> RepoInfo:
        result = self._gateway.run(["repo", "view", repo, "--json", _REPO_FIELDS])
        return parse_repo(json.loads(result.stdout))

    def get_current_repo(self, cwd: Path) -> RepoInfo | None:
        try:
            result = self._gateway.run(["repo", "view", "--json", _REPO_FIELDS], cwd=cwd)
        except CommandError as e:
            # Outside a git checkout, or no GitHub remote
            if e.kind in (ErrorKind.RESOURCE_NOT_FOUND, ErrorKind.UNKNOWN):
                logger.debug("No GitHub repository for %s (%s): %s", cwd, e.kind.value, e.message)
                return None
            raise
        return parse_repo(json.loads(result.stdout))

    def set_secret(self, repo: str, name: str, value: str) -> None:
        # Value goes through stdin so it never appears in the process list
        self._gateway.run(["secret", "set", name, "--repo", repo], input=value)

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
        args = ["pr", "create", "--title", title, "--body", body]
        if base:
            args.extend(["--base", base])
        if head:
            args.extend(["--head", head])
        if draft:
            args.append("--draft")

        result = self._gateway.run(args, cwd=cwd)
        url, number = parse_created_pr_url(result.stdout)
        return PullRequest(
            number=number,
            title=title,
            state="OPEN",
            url=url,
            head_ref_name=head,
            is_draft=draft,
        )

    def merge_pr(
        self,
        cwd: Path,
        pr_number: int,
        *,
        method: MergeMethod = "merge",
        auto: bool = False,
        delete_branch: bool = False,
    ) -> None:
        args = ["pr", "merge", str(pr_number), f"--{method}"]
        if auto:
            args.append("--auto")
        if delete_branch:
            args.append("--delete-branch")
        self._gateway.run(args, cwd=cwd)

    def list_prs(
        self, cwd: Path, *, state: str | None = None, limit: int | None = None
    ) -> list[PullRequest]:
        args = ["pr", "list", "--json", _PR_FIELDS]
        if state:
            args.extend(["--state", state])
        if limit is not None:
            args.extend(["--limit", str(limit)])
        result = self._gateway.run(args, cwd=cwd)
        return parse_pr_list(result.stdout)

    def get_pr_for_branch(self, cwd: Path, branch: str) -> PullRequest | None:
        args = ["pr", "list", "--head", branch, "--state", "all", "--json", _PR_FIELDS]
        try:
            result = self._gateway.run([*args, "--limit", "1"], cwd=cwd)
        except CommandError as e:
            if e.kind is ErrorKind.RESOURCE_NOT_FOUND:
                return None
            raise
        prs = parse_pr_list(result.stdout)
        if not prs:
            return None
        return prs[0]
