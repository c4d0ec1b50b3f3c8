"""Fly.io commands backed by flyctl."""

import click
from rich.table import Table

from dovetail.cli.json_output import emit_json, format_option
from dovetail.cli.output import machine_output, stderr_console, user_output
from dovetail.core.context import DovetailContext


def parse_secret_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    """Parse KEY=VALUE arguments into a mapping.

    Raises:
        ValueError: If an argument has no '=' or an empty key
    """
    secrets: dict[str, str] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid secret {assignment!r}; expected KEY=VALUE.")
        secrets[key] = value
    return secrets


@click.group("fly")
def fly_group() -> None:
    """Work with Fly.io apps."""


@fly_group.command("apps")
@click.option("--org", "-o", help="Only list apps in this organization.")
@format_option
@click.pass_obj
def fly_apps(ctx: DovetailContext, org: str | None, output_format: str) -> None:
    """List apps."""
    apps = ctx.fly.list_apps(org=org)

    if output_format == "json":
        emit_json(apps)
        return

    if not apps:
        user_output("No apps found")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("org", no_wrap=True)
    table.add_column("status", no_wrap=True)
    table.add_column("hostname")
    for app in apps:
        table.add_row(app.name, app.organization or "-", app.status or "-", app.hostname or "-")
    stderr_console().print(table)


@fly_group.command("create")
@click.argument("name")
@click.option("--org", "-o", help="Organization to create the app in.")
@click.pass_obj
def fly_create(ctx: DovetailContext, name: str, org: str | None) -> None:
    """Create app NAME."""
    app = ctx.fly.create_app(name, org=org)
    user_output(click.style("✓", fg="green") + f" Created app {click.style(app.name, fg='cyan')}")


@fly_group.command("deploy")
@click.option("--app", "-a", help="App name (default: from fly.toml).")
@click.option("--config", "-c", "config_path", help="Path to an alternate fly.toml.")
@click.option("--remote-only", is_flag=True, help="Build on a Fly remote builder.")
@click.pass_obj
def fly_deploy(
    ctx: DovetailContext, app: str | None, config_path: str | None, remote_only: bool
) -> None:
    """Deploy the project in the current directory."""
    user_output(f"Deploying {app or 'app from fly.toml'}...")
    ctx.fly.deploy(ctx.cwd, app=app, config=config_path, remote_only=remote_only)
    user_output(click.style("✓", fg="green") + " Deploy finished")


@fly_group.command("logs")
@click.argument("app")
@click.pass_obj
def fly_logs(ctx: DovetailContext, app: str) -> None:
    """Print recent logs of APP."""
    logs = ctx.fly.get_logs(app)
    if not logs.strip():
        user_output(f"No recent logs for {app}")
        return
    machine_output(logs.rstrip("\n"))


@fly_group.command("releases")
@click.argument("app")
@format_option
@click.pass_obj
def fly_releases(ctx: DovetailContext, app: str, output_format: str) -> None:
    """List releases of APP, newest first."""
    releases = ctx.fly.list_releases(app)

    if output_format == "json":
        emit_json(releases)
        return

    if not releases:
        user_output(f"No releases for {app}")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("version", style="cyan", no_wrap=True)
    table.add_column("status", no_wrap=True)
    table.add_column("user", no_wrap=True)
    table.add_column("created", no_wrap=True)
    table.add_column("description")
    for release in releases:
        table.add_row(
            f"v{release.version}",
            release.status or "-",
            release.user or "-",
            release.created_at or "-",
            release.description or "",
        )
    stderr_console().print(table)


@fly_group.command("orgs")
@format_option
@click.pass_obj
def fly_orgs(ctx: DovetailContext, output_format: str) -> None:
    """List organizations."""
    orgs = ctx.fly.list_orgs()
    if output_format == "json":
        emit_json(orgs)
        return
    for org in orgs:
        user_output(f"{click.style(org.slug, fg='cyan')}  {org.name}")


@fly_group.group("secrets")
def fly_secrets() -> None:
    """Manage app secrets."""


@fly_secrets.command("set")
@click.argument("app")
@click.argument("assignments", nargs=-1, required=True, metavar="KEY=VALUE...")
@click.pass_obj
def fly_secrets_set(ctx: DovetailContext, app: str, assignments: tuple[str, ...]) -> None:
    """Set secrets on APP."""
    secrets = parse_secret_assignments(assignments)
    ctx.fly.set_secrets(app, secrets)
    names = ", ".join(sorted(secrets))
    user_output(click.style("✓", fg="green") + f" Set {len(secrets)} secret(s) on {app}: {names}")
