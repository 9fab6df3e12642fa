"""Tests for the rule engine — construction, evaluation, and the preset end to end."""

import pytest

from commitrules.config.schema import CommitRulesConfig
from commitrules.message.models import ParsedCommitMessage
from commitrules.message.parser import parse_commit_message, strip_comments
from commitrules.rules.builtin import ALL_BUILTIN_RULES
from commitrules.rules.models import ConfigurationError, RuleSeverity, RuleSpec
from commitrules.rules.registry import build_engine
from commitrules.validator.engine import RuleEngine


def _spec(name, severity=RuleSeverity.ERROR):
    """A non-empty-subject rule under *name*."""
    return RuleSpec(name=name, severity=severity, kind="non-empty", parameters={"field": "subject"})


class TestConstruction:
    def test_valid_rule_set(self):
        engine = RuleEngine(ALL_BUILTIN_RULES)
        assert [s.name for s in engine.rules] == [s.name for s in ALL_BUILTIN_RULES]

    def test_empty_rule_set(self):
        result = RuleEngine([]).evaluate(ParsedCommitMessage())
        assert result.findings == ()
        assert result.has_errors is False

    def test_duplicate_names(self):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            RuleEngine([_spec("subject-empty"), _spec("subject-empty")])

    def test_duplicate_names_even_when_off(self):
        with pytest.raises(ConfigurationError):
            RuleEngine([_spec("a"), _spec("a", severity=RuleSeverity.OFF)])

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError, match="spellcheck"):
            RuleEngine([RuleSpec("x", "error", "spellcheck", {})])

    def test_non_positive_header_limit(self):
        spec = RuleSpec("header-max-length", "error", "max-length", {"field": "header", "limit": 0})
        with pytest.raises(ConfigurationError, match="header-max-length"):
            RuleEngine([spec])

    def test_rules_are_immutable(self):
        specs = [_spec("subject-empty")]
        engine = RuleEngine(specs)
        specs.append(_spec("other"))
        assert len(engine.rules) == 1

    def test_parameter_lists_copied_at_construction(self):
        allowed = ["api", "ui"]
        engine = RuleEngine([
            RuleSpec("scope-enum", "error", "enum", {"field": "scope", "allowed": allowed}),
        ])
        message = ParsedCommitMessage(type="feat", scope="db", subject="x")
        before = engine.evaluate(message)
        allowed.append("db")
        after = engine.evaluate(message)
        assert before.has_errors is True
        assert after == before


class TestEvaluate:
    def test_end_to_end(self, simple_message, end_to_end_specs):
        result = RuleEngine(end_to_end_specs).evaluate(simple_message)
        assert result.has_errors is False
        assert result.failures == ()
        assert [f.rule_name for f in result.findings] == [
            "subject-empty", "type-case", "scope-enum",
        ]
        assert all(f.message is None for f in result.findings)

    def test_failure_recorded(self, end_to_end_specs):
        msg = ParsedCommitMessage(type="feat", scope="db", subject="add x")
        result = RuleEngine(end_to_end_specs).evaluate(msg)
        assert result.has_errors is True
        assert [f.rule_name for f in result.failures] == ["scope-enum"]
        assert "api, ui" in result.failures[0].message

    def test_deterministic(self, end_to_end_specs):
        engine = RuleEngine(end_to_end_specs)
        msg = ParsedCommitMessage(type="FEAT", scope="db", subject="")
        assert engine.evaluate(msg) == engine.evaluate(msg)

    def test_off_rules_skipped(self):
        calls = []

        def spy(message):
            calls.append(message)
            return False

        engine = RuleEngine([
            RuleSpec("spy", RuleSeverity.OFF, "custom", {"fn": spy}),
            _spec("subject-empty"),
        ])
        result = engine.evaluate(ParsedCommitMessage(type="feat", subject="x"))
        assert calls == []
        assert [f.rule_name for f in result.findings] == ["subject-empty"]

    def test_warning_does_not_set_errors(self):
        engine = RuleEngine([_spec("subject-empty", severity=RuleSeverity.WARNING)])
        result = engine.evaluate(ParsedCommitMessage(type="feat", subject=""))
        assert result.has_errors is False
        assert result.has_warnings is True
        assert result.valid is True
        assert len(result.warnings) == 1

    def test_custom_rule_sees_whole_message(self):
        def no_wip(message):
            if "wip" in message.header.lower():
                return False, "work-in-progress commits are not allowed"
            return True, None

        engine = RuleEngine([RuleSpec("no-wip", "error", "custom", {"fn": no_wip})])
        result = engine.evaluate(ParsedCommitMessage(type="feat", subject="WIP login"))
        assert result.errors[0].message == "work-in-progress commits are not allowed"

    def test_custom_rule_error_aborts_evaluation(self):
        def broken(message):
            raise RuntimeError("cannot evaluate")

        engine = RuleEngine([
            _spec("subject-empty"),
            RuleSpec("broken", "error", "custom", {"fn": broken}),
        ])
        with pytest.raises(ConfigurationError, match="broken"):
            engine.evaluate(ParsedCommitMessage(type="feat", subject="x"))


class TestConventionalPreset:
    @pytest.fixture
    def engine(self, tmp_path):
        return build_engine(CommitRulesConfig(), tmp_path)

    def test_valid_message(self, engine, valid_message_text):
        result = engine.evaluate(parse_commit_message(strip_comments(valid_message_text)))
        assert result.failures == ()
        assert len(result.findings) == len(ALL_BUILTIN_RULES)

    def test_invalid_message(self, engine, invalid_message_text):
        result = engine.evaluate(parse_commit_message(strip_comments(invalid_message_text)))
        failed = {f.rule_name for f in result.failures}
        assert failed == {
            "type-enum", "type-case", "scope-enum", "scope-case",
            "subject-case", "subject-full-stop", "body-leading-blank",
        }
        assert result.has_errors is True

    def test_non_ascii_header(self, engine):
        result = engine.evaluate(parse_commit_message("feat(ui): add café menu"))
        assert [f.rule_name for f in result.failures] == ["header-format"]
        assert '"é"' in result.failures[0].message

    def test_long_body_line(self, engine):
        text = "fix(db): close pool\n\n" + "a" * 70 + "\n" + "b" * 73
        result = engine.evaluate(parse_commit_message(text))
        assert [f.rule_name for f in result.failures] == ["body-max-line-length"]
        assert "73 characters" in result.failures[0].message

    def test_multiple_scopes(self, engine):
        result = engine.evaluate(parse_commit_message("feat(api,ui): add login form"))
        assert result.failures == ()
        result = engine.evaluate(parse_commit_message("feat(api/web): add login form"))
        assert [f.rule_name for f in result.failures] == ["scope-enum"]

    def test_missing_type(self, engine):
        result = engine.evaluate(parse_commit_message("just some words"))
        assert "type-empty" in {f.rule_name for f in result.failures}
