"""Manage vendor tokens stored in ~/.dovetail/config.toml."""

import click

from dovetail.cli.exit_status import ExitStatus
from dovetail.cli.output import machine_output, user_output
from dovetail.core.config_store import DovetailConfig, mask_token
from dovetail.core.context import DovetailContext
from dovetail.integrations import VENDOR_PROFILES

_KEY_CHOICE = click.Choice(DovetailConfig.keys())


def _env_var_for(key: str) -> str | None:
    for profile in VENDOR_PROFILES:
        if profile.token_config_key == key:
            return profile.token_env_var
    return None


@click.group("config")
def config_group() -> None:
    """Manage API tokens and configuration."""


@config_group.command("show")
@click.pass_obj
def config_show(ctx: DovetailContext) -> None:
    """Show configured tokens (masked) and where each one comes from."""
    user_output(click.style(f"Config file: {ctx.config_store.path()}", bold=True))
    user_output()
    for key in DovetailConfig.keys():
        env_var = _env_var_for(key)
        if ctx.config.get(key):
            source = "config"
        elif ctx.credentials.resolve(key, env_var):
            source = f"env {env_var}"
        else:
            source = click.style("not configured", fg="red")
        value = ctx.credentials.resolve(key, env_var)
        user_output(f"  {key:<16} {mask_token(value):<26} ({source})")


@config_group.command("get")
@click.argument("key", type=_KEY_CHOICE)
@click.pass_obj
def config_get(ctx: DovetailContext, key: str) -> ExitStatus:
    """Print the stored value of KEY."""
    value = ctx.config.get(key)
    if value is None:
        user_output(f"Key not set: {key}")
        return ExitStatus.FAILED
    machine_output(value)
    return ExitStatus.OK


@config_group.command("set")
@click.argument("key", type=_KEY_CHOICE)
@click.argument("value")
@click.pass_obj
def config_set(ctx: DovetailContext, key: str, value: str) -> None:
    """Store VALUE under KEY."""
    ctx.config_store.save(ctx.config.with_value(key, value))
    user_output(click.style("✓", fg="green") + f" Saved {key} to {ctx.config_store.path()}")


@config_group.command("unset")
@click.argument("key", type=_KEY_CHOICE)
@click.pass_obj
def config_unset(ctx: DovetailContext, key: str) -> None:
    """Remove KEY from the config file (the environment variable still applies)."""
    ctx.config_store.save(ctx.config.with_value(key, None))
    user_output(f"Removed {key}")


@config_group.command("validate")
@click.pass_obj
def config_validate(ctx: DovetailContext) -> ExitStatus:
    """Check that a token is available for every vendor."""
    check = ctx.credentials.validate(list(VENDOR_PROFILES))
    if check.valid:
        user_output(click.style("✓", fg="green") + " All vendor tokens configured")
        return ExitStatus.OK

    for name in check.missing:
        user_output(click.style("✗", fg="red") + f" {name} token not configured")
    user_output()
    user_output("Set them with: dovetail config set <key> <value>")
    return ExitStatus.BLOCKED
