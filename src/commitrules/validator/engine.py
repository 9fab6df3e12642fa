"""Core rule engine — evaluates an ordered rule set against one message.

The engine validates every rule's parameters when it is built, so the only
error ``evaluate`` can raise is a ``ConfigurationError`` from a problem that
shows up at run time (for example a custom rule whose callback raises).
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from commitrules.findings.models import Finding, ValidationResult
from commitrules.message.models import ParsedCommitMessage
from commitrules.rules.kinds import RuleKind, get_kind
from commitrules.rules.models import ConfigurationError, RuleSpec

logger = logging.getLogger(__name__)


class RuleEngine:
    """Holds an immutable, ordered rule set and evaluates messages against it."""

    def __init__(self, specs: Iterable[RuleSpec]) -> None:
        bound: List[Tuple[RuleSpec, RuleKind]] = []
        seen: set[str] = set()

        for spec in specs:
            if spec.name in seen:
                raise ConfigurationError(f"Duplicate rule name: {spec.name!r}")
            seen.add(spec.name)

            try:
                kind = get_kind(spec.kind)
                kind.validate_parameters(spec.parameters)
            except ConfigurationError as exc:
                raise ConfigurationError(f"Rule {spec.name!r}: {exc}") from exc
            bound.append((spec, kind))

        self._rules: Tuple[Tuple[RuleSpec, RuleKind], ...] = tuple(bound)
        logger.debug(
            "Rule engine built with %d rules (%d enabled)",
            len(self._rules),
            len(self.enabled_rules),
        )

    @property
    def rules(self) -> Tuple[RuleSpec, ...]:
        return tuple(spec for spec, _ in self._rules)

    @property
    def enabled_rules(self) -> Tuple[RuleSpec, ...]:
        return tuple(spec for spec, _ in self._rules if spec.enabled)

    def evaluate(self, message: ParsedCommitMessage) -> ValidationResult:
        """Run every enabled rule in declaration order. Returns a ValidationResult."""
        findings: List[Finding] = []

        for spec, kind in self._rules:
            if not spec.enabled:
                logger.debug("Skipping rule %s (off)", spec.name)
                continue

            try:
                outcome = kind.check(message, spec.parameters)
            except ConfigurationError as exc:
                raise ConfigurationError(f"Rule {spec.name!r}: {exc}") from exc

            if not outcome.passed:
                logger.debug("Rule %s failed: %s", spec.name, outcome.message)

            findings.append(
                Finding(
                    rule_name=spec.name,
                    severity=spec.severity,
                    passed=outcome.passed,
                    message=None if outcome.passed else outcome.message,
                )
            )

        return ValidationResult(findings=tuple(findings))
