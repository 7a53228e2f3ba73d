"""Environment-driven settings for the dashboard authoring layer.

Settings are read from environment variables so deployments can change the
rendering defaults and logging behaviour without code changes. `SETTINGS` is a
snapshot taken at import; call `load_settings()` to re-read the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_str(name: str, *, default: str | None) -> str | None:
    """Parse a string environment variable, treating blank values as unset."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_csv(name: str, *, default: list[str]) -> list[str]:
    """Parse a comma-separated environment variable into a list of strings.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        A list of non-empty, trimmed values.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved settings snapshot.

    Args:
        default_backend: Rendering backend seeded into every dashboard's base layer.
        default_theme: Optional theme seeded into the base layer.
        strict_paths: Reject grouping paths that reduce to no segments.
        log_level: Logging level name or number.
        log_json: Render log records as JSON instead of console lines.
        log_file: Optional file receiving a copy of the log output.
        quiet_loggers: Logger names raised to WARNING when logging is configured.
    """

    default_backend: str = "highcharter"
    default_theme: str | None = None
    strict_paths: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None
    quiet_loggers: tuple[str, ...] = ()

    def base_defaults(self) -> dict[str, str]:
        """Return the visualization defaults these settings contribute."""

        defaults = {"backend": self.default_backend}
        if self.default_theme is not None:
            defaults["theme"] = self.default_theme
        return defaults


def load_settings() -> Settings:
    """Read settings from the environment."""

    return Settings(
        default_backend=_env_str("CONTENTTREE_DEFAULT_BACKEND", default="highcharter") or "highcharter",
        default_theme=_env_str("CONTENTTREE_DEFAULT_THEME", default=None),
        strict_paths=_env_bool("CONTENTTREE_STRICT_PATHS", default=False),
        log_level=_env_str("CONTENTTREE_LOG_LEVEL", default="INFO") or "INFO",
        log_json=_env_bool("CONTENTTREE_LOG_JSON", default=False),
        log_file=_env_str("CONTENTTREE_LOG_FILE", default=None),
        quiet_loggers=tuple(_env_csv("CONTENTTREE_QUIET_LOGGERS", default=[])),
    )


SETTINGS = load_settings()
