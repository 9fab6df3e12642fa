"""Load and merge configuration from .commitrules.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from commitrules.config.schema import (
    OUTPUT_FORMATS,
    PRESETS,
    CommitRulesConfig,
    LintConfig,
    OutputConfig,
    RulesConfig,
)
from commitrules.rules.models import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".commitrules.toml"


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigurationError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigurationError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _build_rules(data: Dict[str, Any]) -> RulesConfig:
    """``[rules]`` holds a ``disable`` list plus one sub-table per rule."""
    raw = data.get("rules", {})
    if not isinstance(raw, dict):
        raise ConfigurationError("[rules] must be a table")

    disable = raw.get("disable", [])
    if not isinstance(disable, list):
        raise ConfigurationError("rules.disable must be a list of rule names")

    overrides: Dict[str, Dict[str, Any]] = {}
    for name, value in raw.items():
        if name == "disable":
            continue
        if not isinstance(value, dict):
            raise ConfigurationError(f"[rules.{name}] must be a table")
        overrides[name] = dict(value)
    return RulesConfig(disable=list(disable), overrides=overrides)


def _validate(cfg: CommitRulesConfig) -> None:
    if cfg.extends not in PRESETS:
        raise ConfigurationError(
            f"Unknown preset {cfg.extends!r}; expected one of {', '.join(PRESETS)}"
        )
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigurationError(f"Invalid output format: {cfg.output.format!r}")


def _merge_env_overrides(cfg: CommitRulesConfig) -> None:
    """Apply COMMITRULES_* environment variable overrides."""
    if val := os.environ.get("COMMITRULES_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
        else:
            logger.debug("Ignoring invalid COMMITRULES_FORMAT=%s", val)
    if val := os.environ.get("COMMITRULES_DISABLE_RULES"):
        cfg.rules.disable.extend(r.strip() for r in val.split(",") if r.strip())
    if os.environ.get("COMMITRULES_FAIL_ON_WARNINGS") == "1":
        cfg.lint.fail_on_warnings = True


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> CommitRulesConfig:
    """Load, validate, and return a CommitRulesConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = CommitRulesConfig()
    else:
        logger.debug("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        cfg = CommitRulesConfig(
            version=str(raw.get("version", "1.0")),
            extends=raw.get("extends", "conventional"),
            output=_build_section(raw, OutputConfig, "output"),
            lint=_build_section(raw, LintConfig, "lint"),
            rules=_build_rules(raw),
        )

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg
