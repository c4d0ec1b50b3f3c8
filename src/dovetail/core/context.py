"""Application context with dependency injection."""

import os
from dataclasses import dataclass
from pathlib import Path

from dovetail.core.config_store import (
    ConfigStore,
    DovetailConfig,
    FilesystemConfigStore,
    InMemoryConfigStore,
)
from dovetail.core.credentials import CredentialResolver
from dovetail.core.gateway import CommandGateway, CommandRunner
from dovetail.core.gateway.real import RealCommandRunner
from dovetail.integrations import FLY_PROFILE, GITHUB_PROFILE, LINEAR_PROFILE, SUPABASE_PROFILE
from dovetail.integrations.fly import Fly, RealFly
from dovetail.integrations.github import GitHub, RealGitHub
from dovetail.integrations.linear import Linear, RealLinear
from dovetail.integrations.supabase import RealSupabase, Supabase


@dataclass(frozen=True)
class DovetailContext:
    """Immutable context holding all dependencies for dovetail operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    github: GitHub
    fly: Fly
    linear: Linear
    supabase: Supabase
    runner: CommandRunner
    config_store: ConfigStore
    config: DovetailConfig
    credentials: CredentialResolver
    cwd: Path

    @staticmethod
    def for_test(
        github: GitHub | None = None,
        fly: Fly | None = None,
        linear: Linear | None = None,
        supabase: Supabase | None = None,
        runner: CommandRunner | None = None,
        config_store: ConfigStore | None = None,
        config: DovetailConfig | None = None,
        environ: dict[str, str] | None = None,
        cwd: Path | None = None,
    ) -> "DovetailContext":
        """Create test context with optional pre-configured integration classes.

        Any integration left as None becomes an empty fake. When config is None
        it is loaded from config_store (an empty InMemoryConfigStore by default).
        """
        from dovetail.core.gateway.fake import FakeCommandRunner
        from dovetail.integrations.fly import FakeFly
        from dovetail.integrations.github import FakeGitHub
        from dovetail.integrations.linear import FakeLinear
        from dovetail.integrations.supabase import FakeSupabase

        if config_store is None:
            config_store = InMemoryConfigStore(config=config)
        if config is None:
            config = config_store.load()

        return DovetailContext(
            github=github or FakeGitHub(),
            fly=fly or FakeFly(),
            linear=linear or FakeLinear(),
            supabase=supabase or FakeSupabase(),
            runner=runner or FakeCommandRunner(),
            config_store=config_store,
            config=config,
            credentials=CredentialResolver(config, environ or {}),
            cwd=cwd or Path("/test/default/cwd"),
        )


def create_context() -> DovetailContext:
    """Create production context with real implementations.

    Called once at CLI entry point. This is the only place that reads the
    process environment; everything downstream receives it explicitly.
    """
    config_store = FilesystemConfigStore()
    config = config_store.load()
    credentials = CredentialResolver(config, os.environ)
    runner = RealCommandRunner()

    return DovetailContext(
        github=RealGitHub(CommandGateway(GITHUB_PROFILE, runner, credentials)),
        fly=RealFly(CommandGateway(FLY_PROFILE, runner, credentials)),
        linear=RealLinear(CommandGateway(LINEAR_PROFILE, runner, credentials)),
        supabase=RealSupabase(CommandGateway(SUPABASE_PROFILE, runner, credentials)),
        runner=runner,
        config_store=config_store,
        config=config,
        credentials=credentials,
        cwd=Path.cwd(),
    )
