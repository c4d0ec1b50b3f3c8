"""Diagnose the local toolchain: vendor CLIs, their auth state, and tokens."""

from collections.abc import Callable
from dataclasses import dataclass

import click
from rich.table import Table

from dovetail.cli.exit_status import ExitStatus
from dovetail.cli.output import stderr_console, user_output
from dovetail.core.context import DovetailContext
from dovetail.core.gateway import (
    CommandError,
    CommandRunner,
    CommandSpec,
    ErrorKind,
    VendorProfile,
    run_external,
)
from dovetail.integrations import (
    FLY_PROFILE,
    GITHUB_PROFILE,
    LINEAR_PROFILE,
    SUPABASE_PROFILE,
    VENDOR_PROFILES,
)
from dovetail.integrations.auth import AuthStatus
from dovetail.integrations.git import GIT_PROFILE

DEFAULT_PROBE_TIMEOUT = 5.0


@dataclass(frozen=True)
class ToolProbe:
    """Result of running a tool's version command."""

    profile: VendorProfile
    installed: bool
    working: bool
    detail: str


def probe_tool(runner: CommandRunner, profile: VendorProfile, timeout: float) -> ToolProbe:
    spec = CommandSpec(executable=profile.executable, args=profile.version_args, timeout=timeout)
    try:
        result = run_external(spec, profile, runner)
    except CommandError as e:
        installed = e.kind is not ErrorKind.NOT_INSTALLED
        detail = "Not installed" if not installed else e.message.splitlines()[0]
        return ToolProbe(profile=profile, installed=installed, working=False, detail=detail)

    lines = result.stdout.strip().splitlines()
    version = lines[0] if lines else ""
    return ToolProbe(profile=profile, installed=True, working=True, detail=version)


def _auth_probes(ctx: DovetailContext) -> dict[str, Callable[..., AuthStatus]]:
    return {
        GITHUB_PROFILE.executable: ctx.github.check_auth,
        LINEAR_PROFILE.executable: ctx.linear.check_auth,
        SUPABASE_PROFILE.executable: ctx.supabase.check_auth,
        FLY_PROFILE.executable: ctx.fly.check_auth,
    }


def _status_cell(probe: ToolProbe) -> str:
    if probe.working:
        return "[green]ok[/green]"
    if probe.installed:
        return "[yellow]broken[/yellow]"
    return "[red]missing[/red]"


@click.command("doctor")
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_PROBE_TIMEOUT,
    show_default=True,
    help="Seconds to wait for each version and auth probe.",
)
@click.pass_obj
def doctor_cmd(ctx: DovetailContext, timeout: float) -> ExitStatus:
    """Check that every vendor CLI is installed, working and logged in."""
    tools = (*VENDOR_PROFILES, GIT_PROFILE)
    probes = [probe_tool(ctx.runner, profile, timeout) for profile in tools]

    # Auth probes only make sense for tools that actually run
    working = {probe.profile.executable for probe in probes if probe.working}
    auth = {
        name: check(timeout=timeout)
        for name, check in _auth_probes(ctx).items()
        if name in working
    }

    table = Table(show_header=True, header_style="bold")
    table.add_column("tool", style="cyan", no_wrap=True)
    table.add_column("status", no_wrap=True)
    table.add_column("auth", no_wrap=True)
    table.add_column("detail")

    for probe in probes:
        status = auth.get(probe.profile.executable)
        if status is None:
            auth_cell = "-"
        elif status.authenticated:
            auth_cell = "[green]yes[/green]"
        else:
            auth_cell = "[red]no[/red]"
        table.add_row(probe.profile.name, _status_cell(probe), auth_cell, probe.detail)

    console = stderr_console()
    console.print(table)

    for probe in probes:
        if not probe.installed:
            user_output()
            user_output(click.style(f"{probe.profile.name} not installed.", fg="red"))
            user_output(probe.profile.install_instructions)

    for name, status in auth.items():
        if not status.authenticated and status.detail:
            user_output()
            user_output(click.style(f"{name}: ", fg="yellow") + status.detail)

    check = ctx.credentials.validate(list(VENDOR_PROFILES))
    if not check.valid:
        user_output()
        user_output(
            click.style("Tokens not configured: ", fg="yellow") + ", ".join(check.missing)
        )
        user_output("Set them with: dovetail config set <key> <value>")

    if all(probe.working for probe in probes):
        user_output()
        user_output(click.style("All tools installed and working.", fg="green"))
        return ExitStatus.OK
    return ExitStatus.FAILED
