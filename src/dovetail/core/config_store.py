"""Global configuration data structures and storage.

Provides immutable config data loaded from ~/.dovetail/config.toml. The file
holds vendor API tokens; any of them may be absent, in which case the
credential resolver falls back to the vendor's environment variable.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from pathlib import Path

import tomlkit


@dataclass(frozen=True)
class DovetailConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in DovetailContext.
    """

    github_token: str | None = None
    linear_api_key: str | None = None
    supabase_token: str | None = None
    fly_token: str | None = None

    @staticmethod
    def keys() -> list[str]:
        return [f.name for f in fields(DovetailConfig)]

    def get(self, key: str) -> str | None:
        if key not in DovetailConfig.keys():
            raise ValueError(f"Unknown config key: {key}")
        return getattr(self, key)

    def with_value(self, key: str, value: str | None) -> "DovetailConfig":
        if key not in DovetailConfig.keys():
            raise ValueError(f"Unknown config key: {key}")
        return replace(self, **{key: value or None})


def mask_token(token: str | None) -> str:
    """Show the first four characters of a token, hiding the rest."""
    if not token:
        return "Not configured"
    return token[:4] + "*" * 20


class ConfigStore(ABC):
    """Abstract interface for config storage.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if the config exists."""
        ...

    @abstractmethod
    def load(self) -> DovetailConfig:
        """Load config, returning an empty DovetailConfig when none exists.

        Raises:
            ValueError: If the config file is malformed
        """
        ...

    @abstractmethod
    def save(self, config: DovetailConfig) -> None:
        """Persist config, replacing what was stored before."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for messages)."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.dovetail/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> DovetailConfig:
        config_path = self.path()
        if not config_path.exists():
            return DovetailConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Malformed config at {config_path}: {e}") from e

        values: dict[str, str | None] = {}
        for key in DovetailConfig.keys():
            raw = data.get(key)
            values[key] = str(raw) if raw else None
        return DovetailConfig(**values)

    def save(self, config: DovetailConfig) -> None:
        """Save config, creating ~/.dovetail with owner-only permissions.

        Raises:
            PermissionError: If the directory or file cannot be written
        """
        config_path = self.path()
        parent = config_path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(
                f"Cannot write to directory: {parent}\n"
                f"The directory exists but is not writable.\n\n"
                f"To fix this manually:\n"
                f"  chmod 700 {parent}"
            )

        try:
            parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        except PermissionError:
            raise PermissionError(
                f"Cannot create directory: {parent}\n"
                f"Check permissions on your home directory."
            ) from None

        doc = tomlkit.document()
        doc.add(tomlkit.comment("Dovetail credentials. Unset keys fall back to the environment."))
        for key in DovetailConfig.keys():
            value = config.get(key)
            if value:
                doc[key] = value

        # Tokens are only written once the file is owner-only
        fd = os.open(config_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            os.fchmod(f.fileno(), 0o600)
            f.write(tomlkit.dumps(doc))

    def path(self) -> Path:
        if self._path is not None:
            return self._path
        return Path.home() / ".dovetail" / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: DovetailConfig | None = None) -> None:
        """Initialize in-memory store.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> DovetailConfig:
        if self._config is None:
            return DovetailConfig()
        return self._config

    def save(self, config: DovetailConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/dovetail/config.toml")
