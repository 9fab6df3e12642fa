"""Starter .commitrules.toml templates."""

DEFAULT_TOML = """\
# commitrules configuration
version = "1.0"
extends = "conventional"  # conventional | none

[output]
format = "terminal"       # terminal | json
show_passed = false

[lint]
fail_on_warnings = false

[rules]
# disable = ["scope-enum"]

# Override a preset rule; unspecified parameters keep their preset values.
# [rules.header-max-length]
# severity = "warning"    # off | warning | error (or 0 | 1 | 2)
# limit = 100
"""

FULL_TOML = DEFAULT_TOML + """
# Add a new rule. "kind" may be omitted when the name follows the
# <field>-<kind> convention (e.g. "subject-max-length").
# [rules.short-subject]
# severity = "warning"
# kind = "max-length"     # enum | case | non-empty | no-trailing-char
#                         # max-length | leading-blank | charset
# field = "subject"
# limit = 50
#
# [rules.body-charset]
# severity = "error"
# charset = "ascii"       # ascii | latin-1 | [[low, high], ...]
# granularity = "codepoint"  # codepoint | byte
"""
