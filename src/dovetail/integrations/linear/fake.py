"""Fake Linear operations for testing."""

from dataclasses import replace

from dovetail.core.gateway import CommandError
from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.linear.abc import DEFAULT_ISSUE_LIMIT, Linear
from dovetail.integrations.linear.types import (
    DEFAULT_WORKFLOW_STATES,
    IssueDraft,
    IssueUpdate,
    LinearComment,
    LinearCycle,
    LinearIssue,
    LinearLabel,
    LinearProject,
    LinearTeam,
    WorkflowState,
)


class FakeLinear(Linear):
    """In-memory fake implementation of Linear operations.

    Issues are keyed by identifier. Team and project filters are not modeled;
    list_issues returns every issue up to the limit.
    """

    def __init__(
        self,
        *,
        authenticated: bool = True,
        issues: list[LinearIssue] | None = None,
        teams: list[LinearTeam] | None = None,
        projects: list[LinearProject] | None = None,
        labels: list[LinearLabel] | None = None,
        cycles: list[LinearCycle] | None = None,
        failure: CommandError | None = None,
    ) -> None:
        self._authenticated = authenticated
        self._issues = {issue.identifier: issue for issue in issues or []}
        self._teams = list(teams or [])
        self._projects = list(projects or [])
        self._labels = list(labels or [])
        self._cycles = list(cycles or [])
        self._failure = failure
        self._comments: list[tuple[str, str]] = []

    def _maybe_fail(self) -> None:
        if self._failure is not None:
            raise self._failure

    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        if not self._authenticated:
            return AuthStatus(authenticated=False, detail="Linearis not authenticated.")
        return AuthStatus(authenticated=True)

    def list_issues(
        self,
        *,
        team: str | None = None,
        project: str | None = None,
        limit: int = DEFAULT_ISSUE_LIMIT,
    ) -> list[LinearIssue]:
        self._maybe_fail()
        return list(self._issues.values())[:limit]

    def search_issues(
        self, query: str, *, team: str | None = None, project: str | None = None
    ) -> list[LinearIssue]:
        self._maybe_fail()
        needle = query.lower()
        return [issue for issue in self._issues.values() if needle in issue.title.lower()]

    def show_issue(self, issue_key: str) -> LinearIssue:
        self._maybe_fail()
        return self._issues[issue_key]

    def create_issue(self, team: str, draft: IssueDraft) -> LinearIssue:
        self._maybe_fail()
        identifier = f"{team}-{len(self._issues) + 1}"
        issue = LinearIssue(
            identifier=identifier,
            title=draft.title,
            state="Todo",
            description=draft.description,
            priority=draft.priority,
            assignee=draft.assignee,
        )
        self._issues[identifier] = issue
        return issue

    def update_issue(self, issue_key: str, update: IssueUpdate) -> LinearIssue:
        self._maybe_fail()
        issue = self._issues[issue_key]
        changes = {
            name: value
            for name, value in (
                ("state", update.state),
                ("title", update.title),
                ("description", update.description),
                ("priority", update.priority),
            )
            if value is not None
        }
        updated = replace(issue, **changes)
        self._issues[issue_key] = updated
        return updated

    def comment_on_issue(self, issue_key: str, body: str) -> LinearComment:
        self._maybe_fail()
        self._comments.append((issue_key, body))
        return LinearComment(id=f"comment-{len(self._comments)}", body=body)

    def list_teams(self) -> list[LinearTeam]:
        self._maybe_fail()
        return list(self._teams)

    def list_projects(self, *, team: str | None = None) -> list[LinearProject]:
        self._maybe_fail()
        return list(self._projects)

    def list_labels(self, *, team: str | None = None) -> list[LinearLabel]:
        self._maybe_fail()
        return list(self._labels)

    def list_cycles(
        self,
        *,
        team: str | None = None,
        limit: int | None = None,
        active: bool = False,
        around_active: int | None = None,
    ) -> list[LinearCycle]:
        self._maybe_fail()
        cycles = [cycle for cycle in self._cycles if cycle.is_active or not active]
        if limit is not None:
            cycles = cycles[:limit]
        return cycles

    def read_cycle(self, cycle: str, *, team: str | None = None) -> LinearCycle:
        self._maybe_fail()
        for candidate in self._cycles:
            if cycle in (candidate.name, str(candidate.number), candidate.id):
                return candidate
        raise KeyError(cycle)

    def list_workflow_states(self, team: str) -> list[WorkflowState]:
        return list(DEFAULT_WORKFLOW_STATES)

    @property
    def issues(self) -> list[LinearIssue]:
        return list(self._issues.values())

    @property
    def comments(self) -> list[tuple[str, str]]:
        """Read-only list of (issue_key, body) passed to comment_on_issue()."""
        return list(self._comments)
