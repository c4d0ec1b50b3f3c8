"""Abstract base class for Linear operations."""

from abc import ABC, abstractmethod

from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.linear.types import (
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

DEFAULT_ISSUE_LIMIT = 50


class Linear(ABC):
    """Abstract interface for Linear operations.

    team and project arguments accept whatever linearis accepts: keys,
    names or IDs.
    """

    @abstractmethod
    def check_auth(self, *, timeout: float | None = None) -> AuthStatus:
        """Report whether linearis can reach Linear with the configured API key."""
        ...

    @abstractmethod
    def list_issues(
        self,
        *,
        team: str | None = None,
        project: str | None = None,
        limit: int = DEFAULT_ISSUE_LIMIT,
    ) -> list[LinearIssue]:
        """List issues, optionally filtered by team and project."""
        ...

    @abstractmethod
    def search_issues(
        self, query: str, *, team: str | None = None, project: str | None = None
    ) -> list[LinearIssue]:
        """Full-text search over issues."""
        ...

    @abstractmethod
    def show_issue(self, issue_key: str) -> LinearIssue:
        """Get one issue by identifier (e.g. "ENG-123")."""
        ...

    @abstractmethod
    def create_issue(self, team: str, draft: IssueDraft) -> LinearIssue:
        """Create an issue in a team."""
        ...

    @abstractmethod
    def update_issue(self, issue_key: str, update: IssueUpdate) -> LinearIssue:
        """Apply an update to an issue and return the updated issue."""
        ...

    @abstractmethod
    def comment_on_issue(self, issue_key: str, body: str) -> LinearComment:
        """Add a comment to an issue."""
        ...

    @abstractmethod
    def list_teams(self) -> list[LinearTeam]:
        """List teams in the workspace."""
        ...

    @abstractmethod
    def list_projects(self, *, team: str | None = None) -> list[LinearProject]:
        """List projects, optionally for one team."""
        ...

    @abstractmethod
    def list_labels(self, *, team: str | None = None) -> list[LinearLabel]:
        """List labels, optionally for one team."""
        ...

    @abstractmethod
    def list_cycles(
        self,
        *,
        team: str | None = None,
        limit: int | None = None,
        active: bool = False,
        around_active: int | None = None,
    ) -> list[LinearCycle]:
        """List cycles (sprints)."""
        ...

    @abstractmethod
    def read_cycle(self, cycle: str, *, team: str | None = None) -> LinearCycle:
        """Get one cycle by name or number."""
        ...

    @abstractmethod
    def list_workflow_states(self, team: str) -> list[WorkflowState]:
        """List the workflow states issues can move through."""
        ...
