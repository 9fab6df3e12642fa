"""Commit message model and parser."""

from commitrules.message.models import FIELDS, ParsedCommitMessage
from commitrules.message.parser import parse_commit_message, strip_comments

__all__ = ["FIELDS", "ParsedCommitMessage", "parse_commit_message", "strip_comments"]
