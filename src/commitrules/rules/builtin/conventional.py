"""Conventional-commit structure rules: types, scopes, casing, lengths."""

from commitrules.rules.models import RuleSeverity, RuleSpec

COMMIT_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)

COMMIT_SCOPES = (
    "jmix",
    "vaadin",
    "entity",
    "view",
    "service",
    "security",
    "liquibase",
    "ui",
    "api",
    "db",
    "config",
    "test",
    "ci",
    "deps",
    "docs",
    "scripts",
    "gradle",
    "copyright",
)

MAX_LINE_LENGTH = 72

TYPE_ENUM = RuleSpec(
    name="type-enum",
    severity=RuleSeverity.ERROR,
    kind="enum",
    parameters={"field": "type", "allowed": COMMIT_TYPES},
)

SCOPE_ENUM = RuleSpec(
    name="scope-enum",
    severity=RuleSeverity.ERROR,
    kind="enum",
    parameters={"field": "scope", "allowed": COMMIT_SCOPES, "delimiters": ",/\\"},
)

SCOPE_CASE = RuleSpec(
    name="scope-case",
    severity=RuleSeverity.ERROR,
    kind="case",
    parameters={"field": "scope", "mode": "lower-case"},
)

SUBJECT_CASE = RuleSpec(
    name="subject-case",
    severity=RuleSeverity.ERROR,
    kind="case",
    parameters={"field": "subject", "mode": "lower-case"},
)

SUBJECT_EMPTY = RuleSpec(
    name="subject-empty",
    severity=RuleSeverity.ERROR,
    kind="non-empty",
    parameters={"field": "subject"},
)

SUBJECT_FULL_STOP = RuleSpec(
    name="subject-full-stop",
    severity=RuleSeverity.ERROR,
    kind="no-trailing-char",
    parameters={"field": "subject", "char": "."},
)

TYPE_CASE = RuleSpec(
    name="type-case",
    severity=RuleSeverity.ERROR,
    kind="case",
    parameters={"field": "type", "mode": "lower-case"},
)

TYPE_EMPTY = RuleSpec(
    name="type-empty",
    severity=RuleSeverity.ERROR,
    kind="non-empty",
    parameters={"field": "type"},
)

HEADER_MAX_LENGTH = RuleSpec(
    name="header-max-length",
    severity=RuleSeverity.ERROR,
    kind="max-length",
    parameters={"field": "header", "limit": MAX_LINE_LENGTH},
)

BODY_LEADING_BLANK = RuleSpec(
    name="body-leading-blank",
    severity=RuleSeverity.ERROR,
    kind="leading-blank",
    parameters={"field": "body"},
)

BODY_MAX_LINE_LENGTH = RuleSpec(
    name="body-max-line-length",
    severity=RuleSeverity.ERROR,
    kind="max-length",
    parameters={"field": "body", "limit": MAX_LINE_LENGTH, "line_wise": True},
)

ALL_CONVENTIONAL_RULES = [
    TYPE_ENUM,
    SCOPE_ENUM,
    SCOPE_CASE,
    SUBJECT_CASE,
    SUBJECT_EMPTY,
    SUBJECT_FULL_STOP,
    TYPE_CASE,
    TYPE_EMPTY,
    HEADER_MAX_LENGTH,
    BODY_LEADING_BLANK,
    BODY_MAX_LINE_LENGTH,
]
