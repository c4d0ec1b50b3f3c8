"""Tests for dovetail config commands."""

from click.testing import CliRunner

from dovetail.cli.cli import cli
from dovetail.core.config_store import DovetailConfig, InMemoryConfigStore
from dovetail.core.context import DovetailContext


def test_config_show_masks_tokens_and_reports_sources() -> None:
    runner = CliRunner()
    ctx = DovetailContext.for_test(
        config=DovetailConfig(github_token="ghp_secretvalue"),
        environ={"FLY_API_TOKEN": "fo1_fromenv"},
    )

    result = runner.invoke(cli, ["config", "show"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "ghp_secretvalue" not in result.output
    assert "ghp_" + "*" * 20 in result.output
    assert "(config)" in result.output
    assert "(env FLY_API_TOKEN)" in result.output
    assert "not configured" in result.output
    assert "/fake/dovetail/config.toml" in result.output


def test_config_get_prints_value_to_stdout() -> None:
    runner = CliRunner()
    ctx = DovetailContext.for_test(config=DovetailConfig(linear_api_key="lin_api_123"))

    result = runner.invoke(cli, ["config", "get", "linear_api_key"], obj=ctx)

    assert result.exit_code == 0
    assert result.stdout.strip() == "lin_api_123"


def test_config_get_unset_key_fails() -> None:
    runner = CliRunner()
    ctx = DovetailContext.for_test()

    result = runner.invoke(cli, ["config", "get", "fly_token"], obj=ctx)

    assert result.exit_code == 1
    assert "Key not set: fly_token" in result.output


def test_config_get_unknown_key_is_usage_error() -> None:
    runner = CliRunner()
    ctx = DovetailContext.for_test()

    result = runner.invoke(cli, ["config", "get", "aws_token"], obj=ctx)

    assert result.exit_code == 2
    assert "aws_token" in result.output


def test_config_set_persists_to_store() -> None:
    runner = CliRunner()
    store = InMemoryConfigStore(config=DovetailConfig(github_token="ghp_old"))
    ctx = DovetailContext.for_test(config_store=store)

    result = runner.invoke(cli, ["config", "set", "supabase_token", "sbp_new"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert store.load() == DovetailConfig(github_token="ghp_old", supabase_token="sbp_new")
    assert "Saved supabase_token" in result.output


def test_config_unset_removes_key() -> None:
    runner = CliRunner()
    store = InMemoryConfigStore(config=DovetailConfig(github_token="ghp_old"))
    ctx = DovetailContext.for_test(config_store=store)

    result = runner.invoke(cli, ["config", "unset", "github_token"], obj=ctx)

    assert result.exit_code == 0
    assert store.load().github_token is None


def test_config_validate_all_present() -> None:
    runner = CliRunner()
    ctx = DovetailContext.for_test(
        config=DovetailConfig(github_token="a", linear_api_key="b", supabase_token="c"),
        environ={"FLY_API_TOKEN": "d"},
    )

    result = runner.invoke(cli, ["config", "validate"], obj=ctx)

    assert result.exit_code == 0
    assert "All vendor tokens configured" in result.output


def test_config_validate_missing_tokens_is_blocked() -> None:
    runner = CliRunner()
    ctx = DovetailContext.for_test(config=DovetailConfig(github_token="a"))

    result = runner.invoke(cli, ["config", "validate"], obj=ctx)

    assert result.exit_code == 2
    assert "Linearis CLI token not configured" in result.output
    assert "GitHub CLI token not configured" not in result.output
