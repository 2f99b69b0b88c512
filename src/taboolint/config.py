"""
taboolint configuration.

Runtime settings come from, lowest priority first:
1. built-in defaults
2. a YAML file (--config, else ./taboolint.yaml, else ~/.taboolint/config.yaml)
3. environment variables (TABOOLINT_*)
4. command line flags

None of these settings affect matching: the banned word list alone decides
what gets reported.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .reporting import COLOR_MODES

logger = logging.getLogger(__name__)

# Config file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path("taboolint.yaml"),
    Path.home() / ".taboolint" / "config.yaml",
]

DEFAULT_CONFIG: Dict[str, Any] = {
    "source_dir": "src",  # scanned when no files are given
    "color": "auto",
    "jobs": 1,
}

ENV_MAPPINGS = {
    "TABOOLINT_SOURCE_DIR": "source_dir",
    "TABOOLINT_COLOR": "color",
    "TABOOLINT_JOBS": "jobs",
}


@dataclass
class LintConfig:
    """Runtime configuration for one taboolint run."""

    taboo: Path
    files: tuple[Path, ...] = field(default_factory=tuple)
    source_dir: Path = Path(DEFAULT_CONFIG["source_dir"])
    color: str = DEFAULT_CONFIG["color"]
    jobs: int = DEFAULT_CONFIG["jobs"]
    config_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.color not in COLOR_MODES:
            raise ConfigError(f"color must be one of {', '.join(COLOR_MODES)}, got {self.color!r}")
        if self.jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {self.jobs}")


def find_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Return the config file to use, or None to run on defaults."""
    if explicit_path is not None:
        if not explicit_path.exists():
            raise ConfigError(f"Config file not found: {explicit_path}")
        return explicit_path
    for candidate in CONFIG_SEARCH_PATHS:
        if candidate.is_file():
            return candidate
    return None


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load settings from a YAML config file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    unknown = set(data) - set(DEFAULT_CONFIG)
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", path, ", ".join(sorted(unknown)))
    return {k: v for k, v in data.items() if k in DEFAULT_CONFIG}


def env_overrides(environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Collect TABOOLINT_* environment overrides."""
    environ = os.environ if environ is None else environ
    return {
        config_key: environ[env_var]
        for env_var, config_key in ENV_MAPPINGS.items()
        if environ.get(env_var)
    }


def build_config(
    taboo: Path,
    files: tuple[Path, ...] = (),
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> LintConfig:
    """
    Merge defaults, config file, environment and CLI overrides.

    ``overrides`` holds command line values; None entries are ignored so that
    unset flags fall through to the lower layers.
    """
    settings: Dict[str, Any] = dict(DEFAULT_CONFIG)

    found = find_config_file(config_path)
    if found is not None:
        settings.update(load_config_file(found))
        logger.info("Loaded config from %s", found)

    settings.update(env_overrides(environ))
    settings.update({k: v for k, v in (overrides or {}).items() if v is not None})

    try:
        jobs = int(settings["jobs"])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"jobs must be an integer, got {settings['jobs']!r}") from e

    source_dir = settings["source_dir"]
    if not isinstance(source_dir, (str, os.PathLike)) or not str(source_dir):
        raise ConfigError(f"source_dir must be a directory path, got {source_dir!r}")

    return LintConfig(
        taboo=Path(taboo),
        files=tuple(Path(f) for f in files),
        source_dir=Path(source_dir),
        color=str(settings["color"]),
        jobs=jobs,
        config_path=found,
    )
