"""Parsed commit message model."""

from __future__ import annotations

from dataclasses import dataclass

FIELDS = ("type", "scope", "subject", "body", "header")


def format_header(type: str, scope: str, subject: str) -> str:
    """Build ``type(scope): subject`` from its parts."""
    prefix = type
    if scope:
        prefix = f"{prefix}({scope})"
    if not prefix:
        return subject
    return f"{prefix}: {subject}"


@dataclass(frozen=True)
class ParsedCommitMessage:
    """A commit message already split into conventional-commit fields.

    ``header`` is derived from type, scope and subject when not given.
    ``body`` is everything after the header line, including the blank
    separator line, so ``leading-blank`` rules can inspect it.
    """

    type: str = ""
    scope: str = ""
    subject: str = ""
    body: str = ""
    header: str = ""

    def __post_init__(self) -> None:
        for name in FIELDS:
            if getattr(self, name) is None:
                object.__setattr__(self, name, "")
        if not self.header:
            object.__setattr__(
                self, "header", format_header(self.type, self.scope, self.subject)
            )

    def field(self, name: str) -> str:
        if name not in FIELDS:
            raise KeyError(name)
        return getattr(self, name)
