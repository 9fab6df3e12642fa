"""Built-in rules — aggregate all categories into named presets."""

from typing import Dict, List

from commitrules.rules.builtin.ascii import ALL_ASCII_RULES
from commitrules.rules.builtin.conventional import ALL_CONVENTIONAL_RULES
from commitrules.rules.models import RuleSpec

ALL_BUILTIN_RULES: List[RuleSpec] = [
    *ALL_CONVENTIONAL_RULES,
    *ALL_ASCII_RULES,
]

PRESETS: Dict[str, List[RuleSpec]] = {
    "conventional": ALL_BUILTIN_RULES,
    "none": [],
}

__all__ = ["ALL_BUILTIN_RULES", "PRESETS"]
