"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from commitrules.rules.models import RuleSeverity


@dataclass(frozen=True)
class Finding:
    """Outcome of one rule evaluated against one message."""

    rule_name: str
    severity: RuleSeverity
    passed: bool
    message: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return not self.passed and self.severity is RuleSeverity.ERROR

    @property
    def is_warning(self) -> bool:
        return not self.passed and self.severity is RuleSeverity.WARNING


@dataclass(frozen=True)
class ValidationResult:
    """Complete result of one ``RuleEngine.evaluate`` call."""

    findings: Tuple[Finding, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "findings", tuple(self.findings))

    @property
    def failures(self) -> Tuple[Finding, ...]:
        return tuple(f for f in self.findings if not f.passed)

    @property
    def errors(self) -> Tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.is_error)

    @property
    def warnings(self) -> Tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.is_warning)

    @property
    def has_errors(self) -> bool:
        return any(f.is_error for f in self.findings)

    @property
    def has_warnings(self) -> bool:
        return any(f.is_warning for f in self.findings)

    @property
    def valid(self) -> bool:
        return not self.has_errors
