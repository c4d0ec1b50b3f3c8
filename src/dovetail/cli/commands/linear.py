"""Linear commands backed by the linearis CLI."""

import click
from rich.table import Table

from dovetail.cli.json_output import emit_json, format_option
from dovetail.cli.output import stderr_console, user_output
from dovetail.core.context import DovetailContext
from dovetail.integrations.linear import IssueDraft, IssueUpdate, LinearIssue
from dovetail.integrations.linear.abc import DEFAULT_ISSUE_LIMIT


def _issue_table(issues: list[LinearIssue]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("issue", style="cyan", no_wrap=True)
    table.add_column("state", style="yellow", no_wrap=True)
    table.add_column("assignee", no_wrap=True)
    table.add_column("title")
    for issue in issues:
        table.add_row(issue.identifier, issue.state or "-", issue.assignee or "-", issue.title)
    return table


def _print_issues(issues: list[LinearIssue], empty_message: str) -> None:
    if not issues:
        user_output(empty_message)
        return
    stderr_console().print(_issue_table(issues))


@click.group("linear")
def linear_group() -> None:
    """Work with Linear issues."""


@linear_group.command("issues")
@click.option("--team", "-t", help="Team key, name or ID.")
@click.option("--project", "-p", help="Project name or ID.")
@click.option("--limit", "-l", type=int, default=DEFAULT_ISSUE_LIMIT, show_default=True)
@format_option
@click.pass_obj
def linear_issues(
    ctx: DovetailContext,
    team: str | None,
    project: str | None,
    limit: int,
    output_format: str,
) -> None:
    """List issues."""
    issues = ctx.linear.list_issues(team=team, project=project, limit=limit)
    if output_format == "json":
        emit_json(issues)
        return
    _print_issues(issues, "No issues found")


@linear_group.command("search")
@click.argument("query")
@click.option("--team", "-t", help="Team key, name or ID.")
@click.option("--project", "-p", help="Project name or ID.")
@format_option
@click.pass_obj
def linear_search(
    ctx: DovetailContext,
    query: str,
    team: str | None,
    project: str | None,
    output_format: str,
) -> None:
    """Search issues for QUERY."""
    issues = ctx.linear.search_issues(query, team=team, project=project)
    if output_format == "json":
        emit_json(issues)
        return
    _print_issues(issues, f"No issues match {query!r}")


@linear_group.command("show")
@click.argument("issue_key")
@format_option
@click.pass_obj
def linear_show(ctx: DovetailContext, issue_key: str, output_format: str) -> None:
    """Show issue ISSUE_KEY (e.g. ENG-123)."""
    issue = ctx.linear.show_issue(issue_key)
    if output_format == "json":
        emit_json(issue)
        return

    user_output(click.style(f"{issue.identifier}: {issue.title}", bold=True))
    user_output(f"State:    {issue.state or '-'}")
    user_output(f"Assignee: {issue.assignee or '-'}")
    if issue.priority is not None:
        user_output(f"Priority: {issue.priority}")
    if issue.url:
        user_output(f"URL:      {issue.url}")
    if issue.description:
        user_output()
        user_output(issue.description)


@linear_group.command("create")
@click.argument("title")
@click.option("--team", "-t", required=True, help="Team key, name or ID.")
@click.option("--project", "-p", help="Project name or ID.")
@click.option("--description", "-d", help="Issue description (markdown).")
@click.option("--priority", type=click.IntRange(0, 4), help="0 (none) to 4 (low).")
@click.option("--assignee", help="Assignee name or ID.")
@click.option("--labels", help="Comma-separated label names.")
@format_option
@click.pass_obj
def linear_create(
    ctx: DovetailContext,
    title: str,
    team: str,
    project: str | None,
    description: str | None,
    priority: int | None,
    assignee: str | None,
    labels: str | None,
    output_format: str,
) -> None:
    """Create an issue titled TITLE."""
    draft = IssueDraft(
        title=title,
        project=project,
        description=description,
        priority=priority,
        assignee=assignee,
        labels=labels,
    )
    issue = ctx.linear.create_issue(team, draft)
    if output_format == "json":
        emit_json(issue)
        return
    user_output(click.style("✓", fg="green") + f" Created {issue.identifier}: {issue.title}")


@linear_group.command("move")
@click.argument("issue_key")
@click.argument("state")
@click.pass_obj
def linear_move(ctx: DovetailContext, issue_key: str, state: str) -> None:
    """Move ISSUE_KEY to workflow STATE (e.g. "In Progress")."""
    issue = ctx.linear.update_issue(issue_key, IssueUpdate(state=state))
    user_output(
        click.style("✓", fg="green") + f" {issue.identifier} is now {issue.state or state}"
    )


@linear_group.command("comment")
@click.argument("issue_key")
@click.argument("body")
@click.pass_obj
def linear_comment(ctx: DovetailContext, issue_key: str, body: str) -> None:
    """Add comment BODY to ISSUE_KEY."""
    ctx.linear.comment_on_issue(issue_key, body)
    user_output(click.style("✓", fg="green") + f" Commented on {issue_key}")


@linear_group.command("teams")
@format_option
@click.pass_obj
def linear_teams(ctx: DovetailContext, output_format: str) -> None:
    """List teams."""
    teams = ctx.linear.list_teams()
    if output_format == "json":
        emit_json(teams)
        return
    if not teams:
        user_output("No teams found")
        return
    for team in teams:
        user_output(f"{click.style(f'{team.key:<8}', fg='cyan')} {team.name}")


@linear_group.command("projects")
@click.option("--team", "-t", help="Team key, name or ID.")
@format_option
@click.pass_obj
def linear_projects(ctx: DovetailContext, team: str | None, output_format: str) -> None:
    """List projects."""
    projects = ctx.linear.list_projects(team=team)
    if output_format == "json":
        emit_json(projects)
        return
    if not projects:
        user_output("No projects found")
        return
    for project in projects:
        state = f" ({project.state})" if project.state else ""
        user_output(f"{project.name}{state}")
