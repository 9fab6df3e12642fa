"""Validator — the rule engine."""

from commitrules.validator.engine import RuleEngine

__all__ = ["RuleEngine"]
