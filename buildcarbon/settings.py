"""Settings — typed buildcarbon settings resolved from layered sources.

Sources, lowest priority first:

1. field defaults of :class:`Settings`
2. the environment profile selected by ``env``
3. ``<project>/.buildcarbon/config.json``
4. ``<project>/.env``
5. ``BUILDCARBON_*`` process environment variables

Keys may be written as field names (``decimals``) or as environment keys
(``BUILDCARBON_DECIMALS``).  Values are coerced by pydantic; a value that
fails validation is logged and replaced by the field default.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from buildcarbon.config import CHART_HEIGHT, ROUND_DECIMALS, UNCATEGORIZED_LABEL

logger = logging.getLogger(__name__)

ENV_PREFIX = "BUILDCARBON_"

# Profile values sit just above the defaults
_PROFILES: dict[str, dict[str, Any]] = {
    "development": {"log_level": "DEBUG"},
    "production": {"log_level": "WARNING"},
    "testing": {"log_level": "DEBUG"},
}


class Settings(BaseModel):
    """Resolved settings consumed by the engine, the taxonomy and logging."""

    model_config = ConfigDict(frozen=True)

    env: str = Field(default="development", description="Environment profile")
    log_level: str = Field(default="INFO", description="Level of the buildcarbon logger")
    decimals: int = Field(default=ROUND_DECIMALS, ge=0, description="Rounding of derived carbon values")
    chart_height: float = Field(default=CHART_HEIGHT, gt=0, description="Contribution chart height")
    uncategorized_label: str = Field(
        default=UNCATEGORIZED_LABEL,
        min_length=1,
        description="Label of the catch-all taxonomy node",
    )

    @field_validator("env")
    @classmethod
    def _normalise_env(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level {value!r}")
        return name

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def env_key(field: str) -> str:
    """``decimals`` -> ``BUILDCARBON_DECIMALS``."""
    return f"{ENV_PREFIX}{field.upper()}"


def field_for_key(key: str) -> str | None:
    """Map a field name or environment key to a :class:`Settings` field."""
    name = key.strip()
    if name.upper().startswith(ENV_PREFIX):
        name = name[len(ENV_PREFIX):]
    name = name.lower()
    return name if name in Settings.model_fields else None


def parse_env_lines(lines: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=value`` lines.

    Blank lines and ``#`` comments are skipped, an ``export`` prefix is
    allowed and matching outer quotes are stripped from the value.
    """
    values: dict[str, str] = {}
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip().removeprefix("export ").strip()
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return values


def _read_json(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        logger.warning("Ignoring unreadable settings file %s", path, exc_info=True)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return {}
    return data


def _read_env_file(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    try:
        return parse_env_lines(path.read_text(encoding="utf-8").splitlines())
    except OSError:
        logger.warning("Ignoring unreadable env file %s", path, exc_info=True)
        return {}


def _fields(source: str, values: Mapping[str, Any]) -> dict[str, Any]:
    resolved: dict[str, Any] = {}
    for key, value in values.items():
        field = field_for_key(key)
        if field is None:
            logger.debug("Ignoring unknown setting %r from %s", key, source)
            continue
        resolved[field] = value
    return resolved


def _validate(values: dict[str, Any]) -> Settings:
    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        invalid = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        for field in sorted(invalid):
            logger.warning("Invalid setting %s=%r, using the default", env_key(field), values.get(field))
        return Settings.model_validate({k: v for k, v in values.items() if k not in invalid})


class SettingsManager:
    """Resolve :class:`Settings` for a project directory.

    Parameters
    ----------
    environ:
        Environment mapping to read ``BUILDCARBON_*`` keys from.  Defaults
        to :data:`os.environ`.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def sources(self, project_path: str | Path) -> list[tuple[str, dict[str, Any]]]:
        """Return ``(source name, field values)`` pairs, lowest priority first.

        The profile is chosen by the highest-priority source that sets
        ``env``.
        """
        root = Path(project_path)
        upper = [
            ("config.json", _fields("config.json", _read_json(root / ".buildcarbon" / "config.json"))),
            (".env", _fields(".env", _read_env_file(root / ".env"))),
            (
                "environment",
                _fields("environment", {k: v for k, v in self._environ.items() if k.startswith(ENV_PREFIX)}),
            ),
        ]

        env_name = Settings.model_fields["env"].default
        for _, values in upper:
            if "env" in values:
                env_name = values["env"]
        env_name = str(env_name).strip().lower()
        profile = _PROFILES.get(env_name)
        if profile is None:
            logger.warning("Unknown environment profile %r", env_name)
            profile = {}

        return [(f"profile:{env_name}", dict(profile)), *upper]

    def load(self, project_path: str | Path) -> Settings:
        """Merge every source and return validated settings."""
        merged: dict[str, Any] = {}
        for source, values in self.sources(project_path):
            if values:
                logger.debug("Settings from %s: %s", source, sorted(values))
            merged.update(values)
        return _validate(merged)

    def generate_env_template(self, project_path: str | Path) -> Path:
        """Write ``.env.example`` listing every setting with its default.

        Returns the path to the generated file.
        """
        lines = ["# buildcarbon settings", "# Copy to .env and adjust", ""]
        for name, info in Settings.model_fields.items():
            lines.append(f"# {info.description}")
            lines.append(f"{env_key(name)}={info.default}")
            lines.append("")

        env_path = Path(project_path) / ".env.example"
        env_path.write_text("\n".join(lines), encoding="utf-8")
        return env_path

    def list_keys(self) -> dict[str, str]:
        """Return every environment key with its description."""
        return {env_key(name): info.description or "" for name, info in Settings.model_fields.items()}


def apply_log_level(settings: Settings) -> int:
    """Set the ``buildcarbon`` logger level from *settings*.

    Returns the numeric level applied.
    """
    level = settings.log_level_number
    logging.getLogger("buildcarbon").setLevel(level)
    return level
