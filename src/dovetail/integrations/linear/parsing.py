"""Parsing helpers for linearis JSON output."""

import json
from typing import Any

from dovetail.integrations.linear.types import (
    LinearComment,
    LinearCycle,
    LinearIssue,
    LinearLabel,
    LinearProject,
    LinearTeam,
)


def _items(stdout: str) -> list[dict[str, Any]]:
    """Decode a list payload, which linearis emits bare or wrapped in nodes."""
    data = json.loads(stdout)
    if isinstance(data, dict):
        return data.get("nodes", [])
    return data


def _name(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("name") or value.get("displayName")
    return value


def parse_issue(data: dict[str, Any]) -> LinearIssue:
    priority = data.get("priority")
    return LinearIssue(
        identifier=data["identifier"],
        title=data.get("title", ""),
        id=data.get("id"),
        state=_name(data.get("state")),
        description=data.get("description"),
        priority=int(priority) if priority is not None else None,
        assignee=_name(data.get("assignee")),
        url=data.get("url"),
    )


def parse_issue_json(stdout: str) -> LinearIssue:
    return parse_issue(json.loads(stdout))


def parse_issues(stdout: str) -> list[LinearIssue]:
    return [parse_issue(item) for item in _items(stdout)]


def parse_teams(stdout: str) -> list[LinearTeam]:
    return [
        LinearTeam(id=item["id"], key=item.get("key", ""), name=item.get("name", ""))
        for item in _items(stdout)
    ]


def parse_projects(stdout: str) -> list[LinearProject]:
    return [
        LinearProject(id=item["id"], name=item.get("name", ""), state=_name(item.get("state")))
        for item in _items(stdout)
    ]


def parse_labels(stdout: str) -> list[LinearLabel]:
    return [LinearLabel(id=item["id"], name=item.get("name", "")) for item in _items(stdout)]


def parse_cycle(data: dict[str, Any]) -> LinearCycle:
    number = data.get("number")
    return LinearCycle(
        id=data["id"],
        name=data.get("name"),
        number=int(number) if number is not None else None,
        starts_at=data.get("startsAt"),
        ends_at=data.get("endsAt"),
        is_active=bool(data.get("isActive", False)),
    )


def parse_cycles(stdout: str) -> list[LinearCycle]:
    return [parse_cycle(item) for item in _items(stdout)]


def parse_comment(stdout: str) -> LinearComment:
    data = json.loads(stdout)
    return LinearComment(id=data["id"], body=data.get("body", ""))
