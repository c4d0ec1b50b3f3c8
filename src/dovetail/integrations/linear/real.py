"""Production implementation of Linear operations via linearis."""

import json

from dovetail.core.gateway import CommandError, CommandGateway
from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.linear.abc import DEFAULT_ISSUE_LIMIT, Linear
from dovetail.integrations.linear.parsing import (
    parse_comment,
    parse_cycle,
    parse_cycles,
    parse_issue_json,
    parse_issues,
    parse_labels,
    parse_projects,
    parse_teams,
)
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


def _with_filters(args: list[str], **filters: str | None) -> list[str]:
    for flag, value in filters.items():
        if value:
            args.extend([f"--{flag.replace('_', '-')}", value])
    return args


class RealLinear(Linear):
    """Production implementation using the linearis CLI.

    Every linearis subcommand used here prints JSON on success.
    """

    def __init__(self, gateway: CommandGateway) -> None:
        self._gateway = gateway

    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        # linearis has no whoami; any authenticated read proves the key works
        try:
            self._gateway.run(["projects", "list"], timeout=timeout)
        except CommandError as e:
            return AuthStatus(authenticated=False, detail=e.message)
        return AuthStatus(authenticated=True)

    def list_issues(
        self,
        *,
        team: str | None = None,
        project: str | None = None,
        limit: int = DEFAULT_ISSUE_LIMIT,
    ) -> list[LinearIssue]:
        args = _with_filters(["issues", "list", "-l", str(limit)], team=team, project=project)
        return parse_issues(self._gateway.run(args).stdout)

    def search_issues(
        self, query: str, *, team: str | None = None, project: str | None = None
    ) -> list[LinearIssue]:
        args = _with_filters(["issues", "search", query], team=team, project=project)
        return parse_issues(self._gateway.run(args).stdout)

    def show_issue(self, issue_key: str) -> LinearIssue:
        return parse_issue_json(self._gateway.run(["issues", "read", issue_key]).stdout)

    def create_issue(self, team: str, draft: IssueDraft) -> LinearIssue:
        args = _with_filters(
            ["issues", "create", draft.title, "--team", team],
            project=draft.project,
            description=draft.description,
            priority=str(draft.priority) if draft.priority is not None else None,
            assignee=draft.assignee,
            labels=draft.labels,
        )
        return parse_issue_json(self._gateway.run(args).stdout)

    def update_issue(self, issue_key: str, update: IssueUpdate) -> LinearIssue:
        args = _with_filters(
            ["issues", "update", issue_key],
            state=update.state,
            title=update.title,
            description=update.description,
            priority=str(update.priority) if update.priority is not None else None,
            labels=update.labels,
            parent_ticket=update.parent_ticket,
        )
        if update.clear_labels:
            args.append("--clear-labels")
        return parse_issue_json(self._gateway.run(args).stdout)

    def comment_on_issue(self, issue_key: str, body: str) -> LinearComment:
        result = self._gateway.run(["comments", "create", issue_key, "--body", body])
        return parse_comment(result.stdout)

    def list_teams(self) -> list[LinearTeam]:
        return parse_teams(self._gateway.run(["teams", "list"]).stdout)

    def list_projects(self, *, team: str | None = None) -> list[LinearProject]:
        args = _with_filters(["projects", "list"], team=team)
        return parse_projects(self._gateway.run(args).stdout)

    def list_labels(self, *, team: str | None = None) -> list[LinearLabel]:
        args = _with_filters(["labels", "list"], team=team)
        return parse_labels(self._gateway.run(args).stdout)

    def list_cycles(
        self,
        *,
        team: str | None = None,
        limit: int | None = None,
        active: bool = False,
        around_active: int | None = None,
    ) -> list[LinearCycle]:
        args = _with_filters(
            ["cycles", "list"],
            team=team,
            limit=str(limit) if limit is not None else None,
            around_active=str(around_active) if around_active is not None else None,
        )
        if active:
            args.append("--active")
        return parse_cycles(self._gateway.run(args).stdout)

    def read_cycle(self, cycle: str, *, team: str | None = None) -> LinearCycle:
        args = _with_filters(["cycles", "read", cycle], team=team)
        return parse_cycle(json.loads(self._gateway.run(args).stdout))

    def list_workflow_states(self, team: str) -> list[WorkflowState]:
        return list(DEFAULT_WORKFLOW_STATES)
