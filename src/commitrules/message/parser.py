"""Minimal conventional-commit parser.

Splits raw commit message text into the fields the rule engine checks.
The body keeps the blank separator line after the header so that
``leading-blank`` rules can see whether it is there.
"""

from __future__ import annotations

import re
from typing import List

from commitrules.message.models import ParsedCommitMessage

_HEADER_RE = re.compile(
    r"^(?P<type>[^\s():!]+)"
    r"(?:\((?P<scope>[^()]*)\))?"
    r"!?"
    r":[ \t]*(?P<subject>.*)$"
)
_SCISSORS_RE = re.compile(r"^# -+ >8 -+$")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def strip_comments(text: str, comment_char: str = "#") -> str:
    """Drop git comment lines and everything below the scissors line."""
    kept: List[str] = []
    for line in _LINE_BREAK_RE.split(text.lstrip("\ufeff")):
        if _SCISSORS_RE.match(line):
            break
        if line.startswith(comment_char):
            continue
        kept.append(line)
    while kept and not kept[-1].strip():
        kept.pop()
    return "\n".join(kept)


def parse_commit_message(text: str) -> ParsedCommitMessage:
    """Parse *text* into a ParsedCommitMessage.

    A header that does not look like ``type(scope): subject`` yields an
    empty type and scope with the whole header as the subject, so the
    ``type-empty`` rule reports it.
    """
    header, _, body = text.partition("\n")
    header = header.rstrip("\r")
    if not body.strip():
        body = ""

    m = _HEADER_RE.match(header)
    if m is None:
        return ParsedCommitMessage(subject=header.strip(), body=body, header=header)

    return ParsedCommitMessage(
        type=m.group("type"),
        scope=(m.group("scope") or "").strip(),
        subject=m.group("subject"),
        body=body,
        header=header,
    )
