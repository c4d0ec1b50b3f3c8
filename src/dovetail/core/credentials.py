"""Resolve vendor tokens from config with environment fallback."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dovetail.core.config_store import DovetailConfig

if TYPE_CHECKING:
    from dovetail.core.gateway.types import VendorProfile


@dataclass(frozen=True)
class CredentialCheck:
    """Outcome of validating that every vendor has a token."""

    missing: list[str]

    @property
    def valid(self) -> bool:
        return not self.missing


class CredentialResolver:
    """Looks up tokens, preferring explicit config over the environment.

    The environment mapping is captured at construction so that resolution
    never reads process-global state.
    """

    def __init__(self, config: DovetailConfig, environ: Mapping[str, str]) -> None:
        self._config = config
        self._environ = dict(environ)

    def resolve(self, config_key: str, env_var: str | None) -> str | None:
        value = self._config.get(config_key)
        if value:
            return value
        if env_var is None:
            return None
        return self._environ.get(env_var) or None

    def token_for(self, profile: "VendorProfile") -> str | None:
        if profile.token_config_key is None:
            return None
        return self.resolve(profile.token_config_key, profile.token_env_var)

    def validate(self, profiles: list["VendorProfile"]) -> CredentialCheck:
        missing = [
            profile.name
            for profile in profiles
            if profile.token_config_key is not None and self.token_for(profile) is None
        ]
        return CredentialCheck(missing=missing)
