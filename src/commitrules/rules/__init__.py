"""Rules — models, rule kinds, registry, built-in presets."""

from commitrules.rules.kinds import RULE_KINDS, RuleOutcome
from commitrules.rules.models import ConfigurationError, RuleSeverity, RuleSpec
from commitrules.rules.registry import RuleRegistry, build_engine, build_registry

__all__ = [
    "RULE_KINDS",
    "ConfigurationError",
    "RuleOutcome",
    "RuleRegistry",
    "RuleSeverity",
    "RuleSpec",
    "build_engine",
    "build_registry",
]
