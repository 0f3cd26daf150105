"""Tests for the matching engines and the ``matches`` front door."""

import itertools

import pytest

from starmatch import MalformedPattern, match_all, matches
from starmatch.engine import matcher
from starmatch.engine.matcher import EngineDisagreement, cross_check, evaluate_cases
from starmatch.engine.models import Engine, MatchCase, MatchOptions
from starmatch.engine import recursive
from starmatch.engine.recursive import match_recursive
from starmatch.engine.tabular import match_tabular
from starmatch.engine.tokens import ensure_tokens
from starmatch.engine.tokens import REPEAT, WILDCARD, literal

ENGINES = [match_recursive, match_tabular]


@pytest.mark.parametrize("engine", ENGINES)
@pytest.mark.parametrize(
    "text,pattern,expected",
    [
        ("", "", True),
        ("a", "", False),
        ("", "a", False),
        ("", "a*b*c*", True),
        ("", "a*b*c", False),
        ("aa", "a", False),
        ("aa", "a*", True),
        ("ab", "a*", False),
        ("ab", ".*", True),
        ("ab", ".*c", False),
        ("abc", ".*c", True),
        ("aab", "c*a*b", True),
        ("mississippi", "mis*is*p*.", False),
        ("mississippi", "mis*is*ip*.", True),
        ("aaa", "a*a", True),
        ("aaa", "ab*a*c*a", True),
        ("ab", ".*..", True),
        ("a", ".*..", False),
    ],
)
def test_known_cases(engine, text: str, pattern: str, expected: bool) -> None:
    assert engine(text, pattern) is expected


@pytest.mark.parametrize("text", ["", "a", "abc", "mississippi", "x" * 50])
def test_wildcard_repeat_absorbs_anything(text: str) -> None:
    assert matches(text, ".*")
    assert match_recursive(text, ".*")
    assert match_tabular(text, ".*")


def _well_formed_patterns(max_atoms: int) -> list[str]:
    atoms = ["a", "b", ".", "a*", "b*", ".*"]
    patterns = [""]
    for size in range(1, max_atoms + 1):
        patterns.extend("".join(combo) for combo in itertools.product(atoms, repeat=size))
    return patterns


def _texts(max_len: int) -> list[str]:
    texts = [""]
    for size in range(1, max_len + 1):
        texts.extend("".join(combo) for combo in itertools.product("ab", repeat=size))
    return texts


def test_engines_agree_exhaustively() -> None:
    disagreements = [
        (text, pattern)
        for pattern in _well_formed_patterns(3)
        for text in _texts(4)
        if match_recursive(text, pattern) != match_tabular(text, pattern)
    ]
    assert disagreements == []


def test_stack_walk_agrees_with_table() -> None:
    disagreements = []
    for pattern in _well_formed_patterns(3):
        tokens = ensure_tokens(pattern)
        for text in _texts(4):
            if recursive._match_with_stack(text, tokens) != match_tabular(text, tokens):
                disagreements.append((text, pattern))
    assert disagreements == []


@pytest.mark.parametrize(
    "text,pattern,expected",
    [
        ("a" * 3000, "a*", True),
        ("ab" * 1500, ".*a", False),
        ("ab" * 1500 + "c", ".*c", True),
        ("a" * 3000, "a*b", False),
    ],
)
def test_recursive_engine_handles_long_inputs(text: str, pattern: str, expected: bool) -> None:
    assert match_recursive(text, pattern) is expected
    assert matches(text, pattern, engine="recursive") is expected
    assert cross_check(text, pattern) is expected


def test_literal_patterns_match_only_themselves() -> None:
    for text in _texts(3):
        for pattern in _texts(3):
            assert matches(text, pattern) is (text == pattern)


@pytest.mark.parametrize("engine", ["recursive", "tabular", "auto", Engine.TABULAR])
@pytest.mark.parametrize("pattern", ["*a", "a**b", "ab**"])
def test_malformed_patterns_raise(engine, pattern: str) -> None:
    with pytest.raises(MalformedPattern):
        matches("ab", pattern, engine=engine)


def test_unknown_engine() -> None:
    with pytest.raises(ValueError, match="unknown engine"):
        matches("a", "a", engine="nfa")


def test_repeated_calls_are_deterministic() -> None:
    verdicts = {matches("aab", "c*a*b") for _ in range(20)}
    assert verdicts == {True}
    verdicts = {matches("mississippi", "mis*is*p*.", engine="recursive") for _ in range(20)}
    assert verdicts == {False}


def test_generic_symbol_sequences() -> None:
    words = ["GET", "api", "v1", "users"]
    assert matches(words, ["GET", ".", "*"])
    assert matches(words, ["GET", "api", ".", "users"])
    assert not matches(words, ["POST", ".", "*"])
    numbers = [1, 1, 1, 2]
    pattern = [literal(1), REPEAT, literal(2)]
    assert matches(numbers, pattern, engine="recursive")
    assert matches(numbers, pattern, engine="tabular")
    assert not matches([1, 3], pattern)


def test_custom_reserved_symbols() -> None:
    assert matches("a.b", "a?+", wildcard="?", repeat="+")
    assert matches("a.", "a.", wildcard="?", repeat="+")
    assert not matches("ab", "a.", wildcard="?", repeat="+")


def test_auto_engine_handles_long_inputs() -> None:
    text = "a" * 5000
    assert matches(text, "a*")
    assert matches(text, ".*a")
    assert not matches(text, ".*b")


def test_auto_engine_selection(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(
        matcher.recursive, "match_tokens", lambda text, tokens: calls.append("recursive") or True
    )
    monkeypatch.setattr(
        matcher.tabular, "match_tokens", lambda text, tokens: calls.append("tabular") or True
    )
    matches("ab", "a.")
    matches("a" * matcher.RECURSION_BUDGET, "a*")
    assert calls == ["recursive", "tabular"]


def test_match_all() -> None:
    assert match_all(["aa", "ab", ""], "a*") == [True, False, True]
    assert match_all(["abc", "xbc"], ".bc", engine="tabular") == [True, True]


def test_cross_check_returns_shared_verdict() -> None:
    assert cross_check("abc", ".*c") is True
    assert cross_check("ab", ".*c") is False
    assert cross_check("", [WILDCARD, REPEAT]) is True


def test_cross_check_detects_disagreement(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(matcher.tabular, "match_tokens", lambda text, tokens: False)
    with pytest.raises(EngineDisagreement):
        cross_check("aa", "a*")


def test_evaluate_cases() -> None:
    cases = [
        MatchCase("aa", "a*", expected=True),
        MatchCase("ab", "a*", expected=True),
        MatchCase("ab", "*a"),
        MatchCase("abc", ".*c"),
    ]
    reports = evaluate_cases(cases, MatchOptions(engine=Engine.TABULAR, cross_check=True))
    assert [report.matched for report in reports] == [True, False, None, True]
    assert [report.passed for report in reports] == [True, False, False, True]
    assert reports[2].error is not None
    assert "repetition" in reports[2].error
    assert reports[0].to_json()["passed"] is True


def test_match_all_and_cross_check_custom_symbols() -> None:
    assert match_all(["a.b", "b"], "a?+", wildcard="?", repeat="+") == [True, False]
    assert cross_check("a.b", "a?+", wildcard="?", repeat="+") is True
    assert cross_check("ab", "a.", wildcard="?", repeat="+") is False
