"""Type definitions for Linear operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LinearIssue:
    """A Linear issue as reported by linearis."""

    identifier: str  # e.g. "ENG-123"
    title: str
    id: str | None = None
    state: str | None = None
    description: str | None = None
    priority: int | None = None
    assignee: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class IssueDraft:
    """Fields for creating a Linear issue."""

    title: str
    project: str | None = None
    description: str | None = None
    priority: int | None = None
    assignee: str | None = None
    labels: str | None = None  # comma-separated label names


@dataclass(frozen=True)
class IssueUpdate:
    """Fields to change on an existing issue; None leaves a field untouched.

    state is passed to linearis as given, which accepts a state name.
    """

    state: str | None = None
    title: str | None = None
    description: str | None = None
    priority: int | None = None
    labels: str | None = None
    clear_labels: bool = False
    parent_ticket: str | None = None


@dataclass(frozen=True)
class LinearTeam:
    id: str
    key: str
    name: str


@dataclass(frozen=True)
class LinearProject:
    id: str
    name: str
    state: str | None = None


@dataclass(frozen=True)
class LinearLabel:
    id: str
    name: str


@dataclass(frozen=True)
class LinearCycle:
    id: str
    name: str | None
    number: int | None = None
    starts_at: str | None = None
    ends_at: str | None = None
    is_active: bool = False


@dataclass(frozen=True)
class LinearComment:
    id: str
    body: str


@dataclass(frozen=True)
class WorkflowState:
    id: str
    name: str
    type: str


# linearis has no command for listing workflow states; these are Linear's defaults
DEFAULT_WORKFLOW_STATES: tuple[WorkflowState, ...] = (
    WorkflowState(id="backlog", name="Backlog", type="backlog"),
    WorkflowState(id="unstarted", name="Todo", type="unstarted"),
    WorkflowState(id="started", name="In Progress", type="started"),
    WorkflowState(id="completed", name="Done", type="completed"),
    WorkflowState(id="canceled", name="Canceled", type="canceled"),
)
