"""Rule registry — loads the preset and custom rules, applies config overrides."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from commitrules.config.schema import CommitRulesConfig
from commitrules.message.models import FIELDS
from commitrules.rules.models import ConfigurationError, RuleSeverity, RuleSpec

logger = logging.getLogger(__name__)

CUSTOM_RULES_DIR = ".commitrules-rules"

# commitlint-style name suffixes -> (kind, default parameters)
_SUFFIX_KINDS: Dict[str, Tuple[str, Dict[str, Any]]] = {
    "enum": ("enum", {}),
    "case": ("case", {}),
    "empty": ("non-empty", {}),
    "full-stop": ("no-trailing-char", {"char": "."}),
    "max-length": ("max-length", {}),
    "max-line-length": ("max-length", {"line_wise": True}),
    "leading-blank": ("leading-blank", {}),
    "charset": ("charset", {}),
}


def infer_kind(name: str) -> Tuple[str, Dict[str, Any]]:
    """Map a ``<field>-<suffix>`` rule name to its kind and default parameters.

    ``body-max-line-length`` -> ``("max-length", {"field": "body", "line_wise": True})``
    """
    field_name, _, suffix = name.partition("-")
    if field_name in FIELDS and suffix in _SUFFIX_KINDS:
        kind, defaults = _SUFFIX_KINDS[suffix]
        return kind, {"field": field_name, **defaults}
    raise ConfigurationError(
        f"Cannot infer the kind of rule {name!r}; set 'kind' explicitly"
    )


def _kind_name(rule_name: str, kind: Any) -> Optional[str]:
    if kind is not None and not isinstance(kind, str):
        raise ConfigurationError(f"Rule {rule_name!r}: 'kind' must be a string, got {kind!r}")
    return kind


def spec_from_declaration(name: str, declaration: Mapping[str, Any]) -> RuleSpec:
    """Build a RuleSpec from a config/YAML table of severity, kind and parameters."""
    if not isinstance(name, str) or not name:
        raise ConfigurationError(f"Rule name must be a non-empty string, got {name!r}")
    params = dict(declaration)
    params.pop("name", None)
    severity = params.pop("severity", RuleSeverity.ERROR)
    kind = _kind_name(name, params.pop("kind", None))
    if kind is None:
        kind, defaults = infer_kind(name)
        params = {**defaults, **params}
    return RuleSpec(name=name, severity=severity, kind=kind, parameters=params)


class RuleRegistry:
    """Ordered store of rule specs, keyed by rule name."""

    def __init__(self) -> None:
        self._rules: Dict[str, RuleSpec] = {}

    # ---- registration ----

    def register(self, spec: RuleSpec) -> None:
        """Add or replace *spec*; a replaced rule keeps its position."""
        self._rules[spec.name] = spec

    def register_many(self, specs: List[RuleSpec]) -> None:
        for s in specs:
            self.register(s)

    # ---- queries ----

    @property
    def all_rules(self) -> List[RuleSpec]:
        return list(self._rules.values())

    def get(self, name: str) -> Optional[RuleSpec]:
        return self._rules.get(name)

    def enabled_rules(self) -> List[RuleSpec]:
        return [s for s in self._rules.values() if s.enabled]

    # ---- config overrides ----

    def apply_config(self, config: CommitRulesConfig) -> None:
        """Merge ``[rules.<name>]`` tables, then switch off disabled rules."""
        for name, declaration in config.rules.overrides.items():
            existing = self._rules.get(name)
            if existing is None:
                self.register(spec_from_declaration(name, declaration))
                continue
            params = dict(declaration)
            severity = params.pop("severity", None)
            kind = _kind_name(name, params.pop("kind", None))
            self._rules[name] = existing.with_overrides(severity, kind, **params)

        for name in config.rules.disable:
            existing = self._rules.get(name)
            if existing is None:
                logger.debug("Cannot disable unknown rule %s", name)
                continue
            self._rules[name] = existing.with_overrides(RuleSeverity.OFF)

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Failed to load rules from {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            if not isinstance(entry, dict) or "name" not in entry:
                raise ConfigurationError(f"{path}: every rule needs a 'name'")
            try:
                spec = spec_from_declaration(entry["name"], entry)
            except ConfigurationError as exc:
                raise ConfigurationError(f"{path}: {exc}") from exc
            self.register(spec)
            count += 1
        logger.debug("Loaded %d custom rules from %s", count, path)
        return count


def build_registry(config: CommitRulesConfig, repo_root: Path) -> RuleRegistry:
    """Create a fully populated, config-merged rule registry."""
    from commitrules.rules.builtin import PRESETS

    registry = RuleRegistry()
    registry.register_many(PRESETS.get(config.extends, []))

    # Custom rules from .commitrules-rules/
    registry.load_custom_rules(repo_root / CUSTOM_RULES_DIR)

    registry.apply_config(config)
    return registry


def build_engine(config: CommitRulesConfig, repo_root: Path):
    """Build a RuleEngine from the preset, custom rules, and config."""
    from commitrules.validator.engine import RuleEngine

    return RuleEngine(build_registry(config, repo_root).all_rules)
