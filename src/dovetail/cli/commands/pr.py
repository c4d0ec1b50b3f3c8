"""Pull request commands backed by the gh CLI."""

import click
from rich.table import Table

from dovetail.cli.exit_status import ExitStatus
from dovetail.cli.json_output import emit_json, format_option
from dovetail.cli.output import stderr_console, user_output
from dovetail.core.context import DovetailContext
from dovetail.integrations.git import current_branch
from dovetail.integrations.github import MergeMethod, PullRequest

_STATE_COLORS = {"OPEN": "green", "MERGED": "magenta", "CLOSED": "red"}


def _format_state(pr: PullRequest) -> str:
    color = _STATE_COLORS.get(pr.state.upper(), "white")
    label = "draft" if pr.is_draft and pr.state.upper() == "OPEN" else pr.state.lower()
    return f"[{color}]{label}[/{color}]"


@click.group("pr")
def pr_group() -> None:
    """Work with GitHub pull requests."""


@pr_group.command("list")
@click.option(
    "--state",
    type=click.Choice(["open", "closed", "merged", "all"]),
    default="open",
    show_default=True,
)
@click.option("--limit", "-L", type=int, default=30, show_default=True)
@format_option
@click.pass_obj
def pr_list(ctx: DovetailContext, state: str, limit: int, output_format: str) -> None:
    """List pull requests in the current repository."""
    prs = ctx.github.list_prs(ctx.cwd, state=state, limit=limit)

    if output_format == "json":
        emit_json(prs)
        return

    if not prs:
        user_output(f"No {state} pull requests")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("state", no_wrap=True)
    table.add_column("branch", style="yellow", no_wrap=True)
    table.add_column("title")
    for pr in prs:
        table.add_row(str(pr.number), _format_state(pr), pr.head_ref_name or "-", pr.title or "")
    stderr_console().print(table)


@pr_group.command("status")
@click.option("--branch", "-b", help="Branch to look up (default: current branch).")
@format_option
@click.pass_obj
def pr_status(ctx: DovetailContext, branch: str | None, output_format: str) -> ExitStatus:
    """Show the pull request for a branch."""
    if branch is None:
        branch = current_branch(ctx.runner, ctx.cwd)
    if branch is None:
        raise ValueError("HEAD is detached; pass --branch to choose a branch.")

    pr = ctx.github.get_pr_for_branch(ctx.cwd, branch)

    if output_format == "json":
        emit_json({"branch": branch, "pr": pr})
        return ExitStatus.OK if pr is not None else ExitStatus.FAILED

    if pr is None:
        user_output(f"No pull request for branch {click.style(branch, fg='yellow')}")
        return ExitStatus.FAILED

    stderr_console().print(f"#{pr.number} {_format_state(pr)} {pr.title or ''}", highlight=False)
    user_output(pr.url)
    return ExitStatus.OK


@pr_group.command("create")
@click.option("--title", "-t", required=True)
@click.option("--body", default="", show_default=False)
@click.option("--base", "-B", help="Branch to merge into.")
@click.option("--head", "-H", help="Branch containing the changes (default: current branch).")
@click.option("--draft", "-d", is_flag=True, help="Open as a draft.")
@format_option
@click.pass_obj
def pr_create(
    ctx: DovetailContext,
    title: str,
    body: str,
    base: str | None,
    head: str | None,
    draft: bool,
    output_format: str,
) -> None:
    """Open a pull request for the current branch."""
    pr = ctx.github.create_pr(ctx.cwd, title=title, body=body, base=base, head=head, draft=draft)

    if output_format == "json":
        emit_json(pr)
        return

    user_output(click.style("✓", fg="green") + f" Created pull request #{pr.number}")
    user_output(pr.url)


@pr_group.command("merge")
@click.argument("number", type=int)
@click.option("--squash", "method", flag_value="squash", help="Squash commits into one.")
@click.option("--rebase", "method", flag_value="rebase", help="Rebase commits onto base.")
@click.option("--auto", is_flag=True, help="Merge once required checks pass.")
@click.option("--delete-branch", is_flag=True, help="Delete the head branch after merging.")
@click.pass_obj
def pr_merge(
    ctx: DovetailContext,
    number: int,
    method: MergeMethod | None,
    auto: bool,
    delete_branch: bool,
) -> None:
    """Merge pull request NUMBER."""
    resolved: MergeMethod = method or "merge"
    ctx.github.merge_pr(
        ctx.cwd, number, method=resolved, auto=auto, delete_branch=delete_branch
    )
    verb = "Enabled auto-merge for" if auto else "Merged"
    user_output(click.style("✓", fg="green") + f" {verb} pull request #{number} ({resolved})")
