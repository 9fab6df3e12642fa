"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

OutputFormat = Literal["terminal", "json"]
OUTPUT_FORMATS = ("terminal", "json")

PRESETS = ("conventional", "none")


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_passed: bool = False


@dataclass
class LintConfig:
    fail_on_warnings: bool = False  # treat failed warning rules as blocking


@dataclass
class RulesConfig:
    disable: List[str] = field(default_factory=list)
    # rule name -> {"severity": ..., "kind": ..., <parameters>}
    overrides: Dict[str, Dict[str, Any]] = field(default_factory=dict)


@dataclass
class CommitRulesConfig:
    version: str = "1.0"
    extends: str = "conventional"
    output: OutputConfig = field(default_factory=OutputConfig)
    lint: LintConfig = field(default_factory=LintConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
