"""Settings management for code-import.

Philosophy: Simple, scope-aware YAML settings. Options live under the
``code_import`` key of each settings file:

```yaml
code_import:
  root_dir: /srv/docs
  allow_importing_from_outside: false
  preserve_trailing_newline: false
  remove_redundant_indentations: true
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

Scope = Literal["local", "project", "global"]

SETTINGS_KEY = "code_import"


class CodeImportOptions(BaseModel):
    """Options consumed by path resolution and line extraction.

    Attributes:
        root_dir: Absolute directory imports must stay inside (None = CWD)
        allow_importing_from_outside: Skip the root containment check
        preserve_trailing_newline: Keep the empty last line of a file that
            ends with a newline
        remove_redundant_indentations: Strip common indentation from
            whole-file imports
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_dir: Path | None = None
    allow_importing_from_outside: bool = False
    preserve_trailing_newline: bool = False
    remove_redundant_indentations: bool = False

    def effective_root_dir(self) -> Path:
        """Root directory to enforce, validated to be absolute.

        Raises:
            ConfigurationError: If root_dir is relative
        """
        if self.root_dir is None:
            return Path.cwd()
        if not self.root_dir.is_absolute():
            raise ConfigurationError(f'"rootDir" has to be an absolute path, got "{self.root_dir}"')
        return self.root_dir


OPTION_KEYS = tuple(CodeImportOptions.model_fields)


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path
    local_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        """Create default paths for the standard .code-import layout."""
        return cls(
            global_settings=Path.home() / ".code-import" / "settings.yaml",
            project_settings=Path.cwd() / ".code-import" / "settings.yaml",
            local_settings=Path.cwd() / ".code-import" / "settings.local.yaml",
        )


class AppSettings:
    """Simple settings manager with scope-aware merging.

    Scope priority (most specific wins):
    1. local (.code-import/settings.local.yaml) - gitignored, machine-specific
    2. project (.code-import/settings.yaml) - committed, team-shared
    3. global (~/.code-import/settings.yaml) - user defaults

    Usage:
        settings = AppSettings()
        options = settings.get_options(preserve_trailing_newline=True)
        settings.set_option("root_dir", "/srv/docs", scope="project")
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_settings(self) -> dict[str, Any]:
        """Load and merge settings from all scopes."""
        result: dict[str, Any] = {}
        for scope in ("global", "project", "local"):
            result = self._deep_merge(result, self._read_scope(scope))
        return result

    # ----- Import options -----

    def get_options(self, **overrides: Any) -> CodeImportOptions:
        """Build effective options from merged settings plus overrides.

        Args:
            **overrides: Option values from the command line; None means
                "not given" and falls back to settings

        Raises:
            ConfigurationError: If the merged options are invalid
        """
        values = dict(self.get_merged_settings().get(SETTINGS_KEY) or {})
        values.update({key: value for key, value in overrides.items() if value is not None})

        unknown = sorted(set(values) - set(OPTION_KEYS))
        if unknown:
            raise ConfigurationError(f"Unknown option(s) in settings: {', '.join(unknown)}")

        try:
            options = CodeImportOptions(**values)
        except ValueError as e:
            raise ConfigurationError(f"Invalid code-import options: {e}") from e

        options.effective_root_dir()
        return options

    def set_option(self, key: str, value: Any, scope: Scope = "project") -> None:
        """Set a single option at specified scope."""
        if key not in OPTION_KEYS:
            raise ConfigurationError(f"Unknown option: {key}")
        settings = self._read_scope(scope)
        section = settings.get(SETTINGS_KEY) or {}
        section[key] = value
        settings[SETTINGS_KEY] = section
        self._write_scope(scope, settings)

    def clear_option(self, key: str, scope: Scope = "project") -> None:
        """Remove a single option from specified scope."""
        settings = self._read_scope(scope)
        section = settings.get(SETTINGS_KEY) or {}
        if key in section:
            del section[key]
            settings[SETTINGS_KEY] = section
            self._write_scope(scope, settings)

    # ----- Scope utilities -----

    def get_scope_path(self, scope: Scope) -> Path:
        """Get settings file path for scope."""
        return {
            "local": self.paths.local_settings,
            "project": self.paths.project_settings,
            "global": self.paths.global_settings,
        }[scope]

    def _read_scope(self, scope: Scope) -> dict[str, Any]:
        """Read settings from a specific scope."""
        path = self.get_scope_path(scope)
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Skipping unreadable settings file {path}: {e}")
            return {}
        if not isinstance(content, dict):
            logger.warning(f"Skipping settings file {path}: expected a mapping")
            return {}
        return content

    def _write_scope(self, scope: Scope, settings: dict[str, Any]) -> None:
        """Write settings to a specific scope."""
        path = self.get_scope_path(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(settings, f, default_flow_style=False)

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dicts, overlay wins."""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


def get_settings() -> AppSettings:
    """Get a settings instance with default paths."""
    return AppSettings()
