"""Finding models and value summaries."""

from commitrules.findings.models import Finding, ValidationResult
from commitrules.findings.summary import summarize

__all__ = ["Finding", "ValidationResult", "summarize"]
