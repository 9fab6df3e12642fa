"""ASCII-only rules for the header and body."""

from commitrules.rules.models import RuleSeverity, RuleSpec

HEADER_FORMAT = RuleSpec(
    name="header-format",
    severity=RuleSeverity.ERROR,
    kind="charset",
    parameters={"field": "header", "charset": "ascii", "granularity": "codepoint"},
)

BODY_FORMAT = RuleSpec(
    name="body-format",
    severity=RuleSeverity.ERROR,
    kind="charset",
    parameters={"field": "body", "charset": "ascii", "granularity": "codepoint"},
)

ALL_ASCII_RULES = [HEADER_FORMAT, BODY_FORMAT]
