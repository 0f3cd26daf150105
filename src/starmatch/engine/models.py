"""Data models shared across the starmatch engine."""
from __future__ import annotations

import enum
from dataclasses import dataclass

from .tokens import DEFAULT_REPEAT, DEFAULT_WILDCARD


class Engine(str, enum.Enum):
    RECURSIVE = "recursive"
    TABULAR = "tabular"
    AUTO = "auto"


@dataclass(frozen=True)
class MatchOptions:
    """Settings for batch evaluation.

    engine: which matcher answers the query; ``AUTO`` picks the recursive
        engine for short inputs and the tabular engine for long ones.
    wildcard, repeat: reserved characters used when parsing raw patterns.
    cross_check: run both engines and fail loudly if they disagree.
    """

    engine: Engine = Engine.AUTO
    wildcard: str = DEFAULT_WILDCARD
    repeat: str = DEFAULT_REPEAT
    cross_check: bool = False


@dataclass(frozen=True)
class MatchCase:
    """One query; ``text`` and ``pattern`` are strings or lists of symbols."""

    text: str | list[object]
    pattern: str | list[object]
    expected: bool | None = None


@dataclass
class MatchReport:
    case: MatchCase
    matched: bool | None
    error: str | None = None

    @property
    def passed(self) -> bool:
        if self.error is not None:
            return False
        if self.case.expected is None:
            return True
        return self.matched is self.case.expected

    def to_json(self) -> dict[str, object]:
        return {
            "text": self.case.text,
            "pattern": self.case.pattern,
            "expected": self.case.expected,
            "matched": self.matched,
            "passed": self.passed,
            "error": self.error,
        }
