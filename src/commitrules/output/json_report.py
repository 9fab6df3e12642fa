"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from commitrules.findings.models import ValidationResult


def to_dict(result: ValidationResult, *, show_passed: bool = False) -> Dict[str, Any]:
    """Convert ValidationResult to a JSON-serialisable dict."""
    findings_list: List[Dict[str, Any]] = []
    for f in result.findings:
        if f.passed and not show_passed:
            continue
        findings_list.append({
            "rule": f.rule_name,
            "severity": f.severity.value,
            "passed": f.passed,
            **({"message": f.message} if f.message else {}),
        })

    return {
        "version": "1.0",
        "valid": result.valid,
        "has_errors": result.has_errors,
        "has_warnings": result.has_warnings,
        "errors": len(result.errors),
        "warnings": len(result.warnings),
        "findings": findings_list,
    }


def render(result: ValidationResult, *, show_passed: bool = False) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, show_passed=show_passed), indent=2)
