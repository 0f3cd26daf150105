"""Front door for matching queries and batch evaluation."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from . import recursive, tabular
from .models import Engine, MatchCase, MatchOptions, MatchReport
from .recursive import RECURSION_BUDGET
from .tokens import DEFAULT_REPEAT, DEFAULT_WILDCARD, PatternLike, PatternToken, ensure_tokens

logger = logging.getLogger(__name__)


class EngineDisagreement(AssertionError):
    """The recursive and tabular engines returned different verdicts."""


def _resolve_engine(engine: Engine | str) -> Engine:
    try:
        return Engine(engine.lower() if isinstance(engine, str) else engine)
    except ValueError:
        raise ValueError(f"unknown engine: {engine!r}") from None


def _pick_engine(engine: Engine, text: Sequence[object], tokens: Sequence[PatternToken]) -> Engine:
    if engine is not Engine.AUTO:
        return engine
    if len(text) + len(tokens) < RECURSION_BUDGET:
        return Engine.RECURSIVE
    logger.debug(
        "input size %d exceeds recursion budget, using tabular engine", len(text) + len(tokens)
    )
    return Engine.TABULAR


def _run(engine: Engine, text: Sequence[object], tokens: Sequence[PatternToken]) -> bool:
    chosen = _pick_engine(engine, text, tokens)
    if chosen is Engine.RECURSIVE:
        return recursive.match_tokens(text, tokens)
    return tabular.match_tokens(text, tokens)


def matches(
    text: Sequence[object],
    pattern: PatternLike,
    engine: Engine | str = Engine.AUTO,
    wildcard: object = DEFAULT_WILDCARD,
    repeat: object = DEFAULT_REPEAT,
) -> bool:
    """Return True if ``pattern`` matches the whole of ``text``.

    Args:
        text: any sequence of comparable symbols, usually a ``str``
        pattern: a raw pattern (string or symbol sequence) or a list of
            :class:`~starmatch.engine.tokens.PatternToken`
        engine: ``"recursive"``, ``"tabular"`` or ``"auto"``
        wildcard, repeat: reserved symbols used when parsing a raw pattern

    Raises:
        MalformedPattern: the pattern starts with, or doubles, a repetition symbol
        ValueError: unknown engine or invalid reserved symbols

    Examples:
        >>> matches("aa", "a*")
        True
        >>> matches("mississippi", "mis*is*p*.")
        False
    """
    chosen = _resolve_engine(engine)
    tokens = ensure_tokens(pattern, wildcard=wildcard, repeat=repeat)
    return _run(chosen, text, tokens)


def match_all(
    texts: Iterable[Sequence[object]],
    pattern: PatternLike,
    engine: Engine | str = Engine.AUTO,
    wildcard: object = DEFAULT_WILDCARD,
    repeat: object = DEFAULT_REPEAT,
) -> list[bool]:
    chosen = _resolve_engine(engine)
    tokens = ensure_tokens(pattern, wildcard=wildcard, repeat=repeat)
    return [_run(chosen, text, tokens) for text in texts]


def cross_check(
    text: Sequence[object],
    pattern: PatternLike,
    wildcard: object = DEFAULT_WILDCARD,
    repeat: object = DEFAULT_REPEAT,
) -> bool:
    """Answer the query with both engines and insist they agree."""
    tokens = ensure_tokens(pattern, wildcard=wildcard, repeat=repeat)
    top_down = recursive.match_tokens(text, tokens)
    bottom_up = tabular.match_tokens(text, tokens)
    if top_down != bottom_up:
        raise EngineDisagreement(
            f"engines disagree on text={text!r} pattern={pattern!r}: "
            f"recursive={top_down} tabular={bottom_up}"
        )
    return top_down


def evaluate_cases(cases: Iterable[MatchCase], options: MatchOptions | None = None) -> list[MatchReport]:
    """Evaluate each case, recording malformed patterns as per-case errors."""
    options = options or MatchOptions()
    engine = _resolve_engine(options.engine)
    reports: list[MatchReport] = []
    for case in cases:
        try:
            tokens = ensure_tokens(case.pattern, wildcard=options.wildcard, repeat=options.repeat)
        except ValueError as exc:
            logger.debug("rejecting pattern %r: %s", case.pattern, exc)
            reports.append(MatchReport(case=case, matched=None, error=str(exc)))
            continue
        if options.cross_check:
            verdict = cross_check(case.text, tokens)
        else:
            verdict = _run(engine, case.text, tokens)
        reports.append(MatchReport(case=case, matched=verdict))
    return reports
