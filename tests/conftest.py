"""Shared test fixtures — sample messages, rule specs, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest

from commitrules.message.models import ParsedCommitMessage
from commitrules.rules.models import RuleSeverity, RuleSpec


@pytest.fixture
def valid_message_text() -> str:
    """A message that passes the conventional preset."""
    return textwrap.dedent("""\
        feat(api): add user lookup endpoint

        Expose GET /users/{id} so the admin view can load a single
        user without paging through the whole list.
    """)


@pytest.fixture
def invalid_message_text() -> str:
    """A message breaking several preset rules."""
    return textwrap.dedent("""\
        Feature(Backend): Added stuff.
        no blank line before the body
    """)


@pytest.fixture
def simple_message() -> ParsedCommitMessage:
    return ParsedCommitMessage(type="feat", scope="api", subject="add x", body="")


@pytest.fixture
def end_to_end_specs() -> list:
    """Non-empty subject, lower-case type, scope in {api, ui}."""
    return [
        RuleSpec("subject-empty", RuleSeverity.ERROR, "non-empty", {"field": "subject"}),
        RuleSpec("type-case", RuleSeverity.ERROR, "case", {"field": "type", "mode": "lower"}),
        RuleSpec(
            "scope-enum", RuleSeverity.ERROR, "enum",
            {"field": "scope", "allowed": ["api", "ui"]},
        ),
    ]


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
