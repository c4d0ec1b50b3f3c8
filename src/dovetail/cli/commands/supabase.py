"""Supabase commands backed by the supabase CLI."""

import click
from rich.table import Table

from dovetail.cli.exit_status import ExitStatus
from dovetail.cli.json_output import emit_json, format_option
from dovetail.cli.output import stderr_console, user_output
from dovetail.core.context import DovetailContext


@click.group("supabase")
def supabase_group() -> None:
    """Work with hosted Supabase projects."""


@supabase_group.command("orgs")
@format_option
@click.pass_obj
def supabase_orgs(ctx: DovetailContext, output_format: str) -> None:
    """List organizations."""
    orgs = ctx.supabase.list_orgs()
    if output_format == "json":
        emit_json(orgs)
        return
    if not orgs:
        user_output("No organizations found")
        return
    for org in orgs:
        user_output(f"{click.style(org.id, fg='cyan')}  {org.name}")


@supabase_group.command("projects")
@format_option
@click.pass_obj
def supabase_projects(ctx: DovetailContext, output_format: str) -> None:
    """List projects."""
    projects = ctx.supabase.list_projects()
    if output_format == "json":
        emit_json(projects)
        return
    if not projects:
        user_output("No projects found")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ref", style="cyan", no_wrap=True)
    table.add_column("name", no_wrap=True)
    table.add_column("region", no_wrap=True)
    table.add_column("status")
    for project in projects:
        table.add_row(project.ref, project.name, project.region or "-", project.status or "-")
    stderr_console().print(table)


@supabase_group.command("keys")
@click.argument("project_ref")
@click.option("--reveal", is_flag=True, help="Print full keys instead of masking them.")
@format_option
@click.pass_obj
def supabase_keys(
    ctx: DovetailContext, project_ref: str, reveal: bool, output_format: str
) -> None:
    """Show the API keys of PROJECT_REF."""
    keys = ctx.supabase.get_project_keys(project_ref)
    if output_format == "json":
        emit_json(keys)
        return
    if not keys:
        user_output(f"No API keys for {project_ref}")
        return
    for key in keys:
        value = key.api_key if reveal else f"{key.api_key[:8]}..."
        user_output(f"{click.style(f'{key.name:<14}', fg='cyan')} {value}")


@supabase_group.command("link")
@click.argument("project_ref")
@click.pass_obj
def supabase_link(ctx: DovetailContext, project_ref: str) -> ExitStatus:
    """Link the current directory to PROJECT_REF."""
    if ctx.supabase.get_project(project_ref) is None:
        user_output(click.style("✗", fg="red") + f" No project with ref {project_ref}")
        user_output("Run 'dovetail supabase projects' to see available projects.")
        return ExitStatus.FAILED

    ctx.supabase.link_project(ctx.cwd, project_ref)
    user_output(click.style("✓", fg="green") + f" Linked {ctx.cwd} to {project_ref}")
    return ExitStatus.OK
