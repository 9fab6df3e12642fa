"""Rule kinds — predicate and parameter validator for each built-in kind.

Every kind is registered in ``RULE_KINDS`` under its key; the engine looks
the kind up once per rule and never branches on the kind name itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Mapping, NamedTuple, Optional, Tuple

from commitrules.findings.summary import summarize
from commitrules.message.models import FIELDS, ParsedCommitMessage
from commitrules.rules.models import ConfigurationError

# Line breaks only; a blank separator line still counts as a line.
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class RuleOutcome(NamedTuple):
    passed: bool
    message: Optional[str] = None


PASS = RuleOutcome(True)

Predicate = Callable[[ParsedCommitMessage, Mapping[str, Any]], RuleOutcome]
Validator = Callable[[Mapping[str, Any]], None]


@dataclass(frozen=True)
class RuleKind:
    """A rule kind: what parameters it takes and how it checks a message."""

    name: str
    check: Predicate
    validate: Validator
    parameters: FrozenSet[str]

    def validate_parameters(self, parameters: Mapping[str, Any]) -> None:
        unknown = sorted(set(parameters) - self.parameters)
        if unknown:
            raise ConfigurationError(
                f"unknown parameter(s) for kind '{self.name}': {', '.join(unknown)}"
            )
        self.validate(parameters)


RULE_KINDS: Dict[str, RuleKind] = {}


def rule_kind(name: str, *parameters: str, validate: Validator):
    """Register the decorated predicate as rule kind *name*."""

    def decorator(check: Predicate) -> Predicate:
        RULE_KINDS[name] = RuleKind(
            name=name,
            check=check,
            validate=validate,
            parameters=frozenset(parameters),
        )
        return check

    return decorator


def get_kind(name: str) -> RuleKind:
    try:
        return RULE_KINDS[name]
    except KeyError:
        raise ConfigurationError(f"unknown rule kind: {name!r}") from None


def split_lines(value: str) -> list[str]:
    return _LINE_BREAK_RE.split(value)


# ---- parameter helpers ----


def _require_field(params: Mapping[str, Any]) -> None:
    name = params.get("field")
    if name not in FIELDS:
        raise ConfigurationError(
            f"'field' must be one of {', '.join(FIELDS)}, got {name!r}"
        )


def _require_bool(params: Mapping[str, Any], key: str) -> None:
    if key in params and not isinstance(params[key], bool):
        raise ConfigurationError(f"'{key}' must be a boolean, got {params[key]!r}")


def _value(message: ParsedCommitMessage, params: Mapping[str, Any]) -> str:
    return message.field(params["field"]) or ""


# ---- enum ----


def _validate_enum(params: Mapping[str, Any]) -> None:
    _require_field(params)
    allowed = params.get("allowed")
    if not isinstance(allowed, (list, tuple, set, frozenset)) or not all(
        isinstance(v, str) for v in allowed
    ):
        raise ConfigurationError(f"'allowed' must be a list of strings, got {allowed!r}")
    _require_bool(params, "case_sensitive")
    delimiters = params.get("delimiters", "")
    if not isinstance(delimiters, str):
        raise ConfigurationError(f"'delimiters' must be a string of characters, got {delimiters!r}")


def _enum_items(value: str, delimiters: str) -> list[str]:
    if not delimiters:
        return [value]
    pattern = "[" + re.escape(delimiters) + "]"
    return [item.strip() for item in re.split(pattern, value)]


@rule_kind("enum", "field", "allowed", "case_sensitive", "delimiters", validate=_validate_enum)
def check_enum(message: ParsedCommitMessage, params: Mapping[str, Any]) -> RuleOutcome:
    """Pass when the field (or each delimited part of it) is in ``allowed``."""
    value = _value(message, params)
    if not value:
        return PASS
    allowed = params["allowed"]
    items = _enum_items(value, params.get("delimiters", ""))
    if params.get("case_sensitive", True):
        ok = all(item in allowed for item in items)
    else:
        folded = {a.lower() for a in allowed}
        ok = all(item.lower() in folded for item in items)
    if ok:
        return PASS
    if isinstance(allowed, (set, frozenset)):
        allowed = sorted(allowed)
    return RuleOutcome(
        False,
        f"{params['field']} must be one of [{', '.join(allowed)}], "
        f"got {summarize(value)}",
    )


# ---- case ----


def _is_sentence_case(value: str) -> bool:
    return value[:1] == value[:1].upper() and value[1:] == value[1:].lower()


def _is_start_case(value: str) -> bool:
    return all(word[:1] == word[:1].upper() for word in value.split())


_CASE_CHECKS: Dict[str, Callable[[str], Any]] = {
    "lower": lambda v: v == v.lower(),
    "upper": lambda v: v == v.upper(),
    "camel": re.compile(r"[a-z][a-zA-Z0-9]*").fullmatch,
    "pascal": re.compile(r"[A-Z][a-zA-Z0-9]*").fullmatch,
    "kebab": re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*").fullmatch,
    "snake": re.compile(r"[a-z0-9]+(?:_[a-z0-9]+)*").fullmatch,
    "sentence": _is_sentence_case,
    "start": _is_start_case,
}


def _case_modes(params: Mapping[str, Any]) -> Tuple[str, ...]:
    mode = params.get("mode")
    modes = (mode,) if isinstance(mode, str) else tuple(mode or ())
    return tuple(m[: -len("-case")] if m.endswith("-case") else m for m in modes)


def _validate_case(params: Mapping[str, Any]) -> None:
    _require_field(params)
    mode = params.get("mode")
    if not mode or not (
        isinstance(mode, str)
        or (isinstance(mode, (list, tuple)) and all(isinstance(m, str) for m in mode))
    ):
        raise ConfigurationError(f"'mode' must be a case name or list of names, got {mode!r}")
    unknown = [m for m in _case_modes(params) if m not in _CASE_CHECKS]
    if unknown:
        raise ConfigurationError(
            f"unknown case mode(s) {', '.join(unknown)}; "
            f"expected one of {', '.join(_CASE_CHECKS)}"
        )


@rule_kind("case", "field", "mode", validate=_validate_case)
def check_case(message: ParsedCommitMessage, params: Mapping[str, Any]) -> RuleOutcome:
    value = _value(message, params)
    if not value:
        return PASS
    modes = _case_modes(params)
    try:
        if any(_CASE_CHECKS[m](value) for m in modes):
            return PASS
    except KeyError as exc:
        raise ConfigurationError(f"unknown case mode {exc.args[0]!r}") from None
    wanted = " or ".join(f"{m}-case" for m in modes)
    return RuleOutcome(False, f"{params['field']} must be {wanted}, got {summarize(value)}")


# ---- non-empty ----


@rule_kind("non-empty", "field", validate=_require_field)
def check_non_empty(message: ParsedCommitMessage, params: Mapping[str, Any]) -> RuleOutcome:
    if _value(message, params).strip():
        return PASS
    return RuleOutcome(False, f"{params['field']} may not be empty")


# ---- no-trailing-char ----


def _validate_trailing_char(params: Mapping[str, Any]) -> None:
    _require_field(params)
    char = params.get("char")
    if not isinstance(char, str) or not char:
        raise ConfigurationError(f"'char' must be a non-empty string, got {char!r}")


@rule_kind("no-trailing-char", "field", "char", validate=_validate_trailing_char)
def check_no_trailing_char(
    message: ParsedCommitMessage, params: Mapping[str, Any]
) -> RuleOutcome:
    value = _value(message, params)
    char = params["char"]
    if not value.endswith(char):
        return PASS
    return RuleOutcome(
        False, f'{params["field"]} may not end with "{char}", got {summarize(value)}'
    )


# ---- max-length ----


def _validate_max_length(params: Mapping[str, Any]) -> None:
    _require_field(params)
    limit = params.get("limit")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ConfigurationError(f"'limit' must be a positive integer, got {limit!r}")
    _require_bool(params, "line_wise")


@rule_kind("max-length", "field", "limit", "line_wise", validate=_validate_max_length)
def check_max_length(message: ParsedCommitMessage, params: Mapping[str, Any]) -> RuleOutcome:
    value = _value(message, params)
    field_name = params["field"]
    limit = params["limit"]
    if not params.get("line_wise", False):
        if len(value) <= limit:
            return PASS
        return RuleOutcome(
            False,
            f"{field_name} is {len(value)} characters, exceeds limit of {limit}: "
            f"{summarize(value)}",
        )
    for line_no, line in enumerate(split_lines(value), start=1):
        if len(line) > limit:
            return RuleOutcome(
                False,
                f"{field_name} line {line_no} is {len(line)} characters, "
                f"exceeds limit of {limit}: {summarize(line)}",
            )
    return PASS


# ---- leading-blank ----


@rule_kind("leading-blank", "field", validate=_require_field)
def check_leading_blank(message: ParsedCommitMessage, params: Mapping[str, Any]) -> RuleOutcome:
    value = _value(message, params)
    if not value or not split_lines(value)[0].strip():
        return PASS
    return RuleOutcome(False, f"{params['field']} must have a leading blank line")


# ---- charset ----

CHARSETS: Dict[str, Tuple[str, Tuple[Tuple[int, int], ...]]] = {
    "ascii": ("ASCII", ((0x00, 0x7F),)),
    "latin-1": ("Latin-1", ((0x00, 0xFF),)),
}
CHARSETS["latin1"] = CHARSETS["latin-1"]

GRANULARITIES = ("codepoint", "byte")


def _charset_ranges(params: Mapping[str, Any]) -> Tuple[str, Tuple[Tuple[int, int], ...]]:
    charset = params.get("charset", "ascii")
    if isinstance(charset, str):
        try:
            return CHARSETS[charset.lower()]
        except KeyError:
            raise ConfigurationError(
                f"unknown charset {charset!r}; expected one of {', '.join(CHARSETS)} "
                "or a list of [low, high] code point ranges"
            ) from None
    if not isinstance(charset, (list, tuple)):
        raise ConfigurationError(
            f"'charset' must be a charset name or a list of [low, high] ranges, got {charset!r}"
        )
    ranges = []
    for item in charset:
        if (
            not isinstance(item, (list, tuple))
            or len(item) != 2
            or not all(isinstance(n, int) and not isinstance(n, bool) for n in item)
            or not 0 <= item[0] <= item[1] <= 0x10FFFF
        ):
            raise ConfigurationError(f"invalid charset range {item!r}")
        ranges.append((item[0], item[1]))
    if not ranges:
        raise ConfigurationError("'charset' range list may not be empty")
    return "allowed", tuple(ranges)


def _validate_charset(params: Mapping[str, Any]) -> None:
    _require_field(params)
    _charset_ranges(params)
    granularity = params.get("granularity", "codepoint")
    if granularity not in GRANULARITIES:
        raise ConfigurationError(
            f"'granularity' must be one of {', '.join(GRANULARITIES)}, got {granularity!r}"
        )


def _in_ranges(n: int, ranges: Tuple[Tuple[int, int], ...]) -> bool:
    return any(lo <= n <= hi for lo, hi in ranges)


@rule_kind("charset", "field", "charset", "granularity", validate=_validate_charset)
def check_charset(message: ParsedCommitMessage, params: Mapping[str, Any]) -> RuleOutcome:
    value = _value(message, params)
    label, ranges = _charset_ranges(params)
    by_byte = params.get("granularity", "codepoint") == "byte"
    offset = 0
    for position, char in enumerate(value):
        if by_byte:
            encoded = char.encode("utf-8", errors="surrogatepass")
            bad = next((b for b in encoded if not _in_ranges(b, ranges)), None)
            if bad is not None:
                return RuleOutcome(
                    False,
                    f"{params['field']} must contain only {label} bytes, "
                    f'found "{char}" (byte 0x{bad:02X}) at byte offset {offset}',
                )
            offset += len(encoded)
        elif not _in_ranges(ord(char), ranges):
            return RuleOutcome(
                False,
                f"{params['field']} must contain only {label} characters, "
                f'found "{char}" (U+{ord(char):04X}) at position {position}',
            )
    return PASS


# ---- custom ----


def _validate_custom(params: Mapping[str, Any]) -> None:
    if not callable(params.get("fn")):
        raise ConfigurationError("'fn' must be a callable taking the parsed message")


def _normalise_outcome(result: Any) -> RuleOutcome:
    if isinstance(result, bool):
        return PASS if result else RuleOutcome(False, "custom rule failed")
    if isinstance(result, (tuple, list)) and 1 <= len(result) <= 2:
        passed = result[0]
        text = result[1] if len(result) == 2 else None
        if isinstance(passed, bool) and (text is None or isinstance(text, str)):
            if passed:
                return PASS
            return RuleOutcome(False, text or "custom rule failed")
    raise ConfigurationError(
        f"custom rule must return bool or (bool, message), got {result!r}"
    )


@rule_kind("custom", "fn", validate=_validate_custom)
def check_custom(message: ParsedCommitMessage, params: Mapping[str, Any]) -> RuleOutcome:
    try:
        result = params["fn"](message)
    except Exception as exc:
        raise ConfigurationError(f"custom rule raised {type(exc).__name__}: {exc}") from exc
    return _normalise_outcome(result)
