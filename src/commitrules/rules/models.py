"""Rule data model — severity, spec, and the configuration error."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union


class ConfigurationError(Exception):
    """Raised when a rule set or config file is unusable."""


class RuleSeverity(str, Enum):
    OFF = "off"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def parse(cls, value: Union[str, int, "RuleSeverity"]) -> "RuleSeverity":
        """Accept enum members, names, or commitlint's numeric levels 0/1/2."""
        if isinstance(value, RuleSeverity):
            return value
        if isinstance(value, bool):
            raise ConfigurationError(f"Invalid severity: {value!r}")
        if isinstance(value, int):
            try:
                return _LEVELS[value]
            except KeyError:
                raise ConfigurationError(f"Invalid severity level: {value}") from None
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                raise ConfigurationError(f"Invalid severity: {value!r}") from None
        raise ConfigurationError(f"Invalid severity: {value!r}")


_LEVELS = {0: RuleSeverity.OFF, 1: RuleSeverity.WARNING, 2: RuleSeverity.ERROR}


def _freeze(value: Any) -> Any:
    """Copy list/tuple and set values into their immutable forms, recursively."""
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(value)
    return value


@dataclass(frozen=True)
class RuleSpec:
    """A single named validation rule.

    ``parameters`` is copied into a read-only mapping, and list or set
    values inside it become tuples or frozensets, so a spec can be shared
    between engines without one caller mutating another's rules.
    """

    name: str
    severity: RuleSeverity
    kind: str
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", RuleSeverity.parse(self.severity))
        frozen = {key: _freeze(value) for key, value in dict(self.parameters).items()}
        object.__setattr__(self, "parameters", MappingProxyType(frozen))

    @property
    def enabled(self) -> bool:
        return self.severity is not RuleSeverity.OFF

    def with_overrides(
        self,
        severity: Union[str, int, RuleSeverity, None] = None,
        kind: str | None = None,
        **parameters: Any,
    ) -> "RuleSpec":
        """Return a copy with *severity*, *kind* and parameters merged in."""
        merged = dict(self.parameters)
        merged.update(parameters)
        return RuleSpec(
            name=self.name,
            severity=self.severity if severity is None else RuleSeverity.parse(severity),
            kind=kind or self.kind,
            parameters=merged,
        )
