"""Pattern tokens, raw-pattern parsing and validation."""
from __future__ import annotations

import enum
from collections.abc import Hashable, Iterator, Sequence
from dataclasses import dataclass
from typing import Union

DEFAULT_WILDCARD = "."
DEFAULT_REPEAT = "*"


class TokenKind(str, enum.Enum):
    LITERAL = "literal"
    WILDCARD = "wildcard"
    REPEAT = "repeat"


class MalformedPattern(ValueError):
    """Raised when a repetition symbol has no atom to repeat."""

    def __init__(self, message: str, index: int) -> None:
        super().__init__(f"{message} (token {index})")
        self.index = index


@dataclass(frozen=True)
class PatternToken:
    kind: TokenKind
    value: Hashable | None = None

    def accepts(self, symbol: object) -> bool:
        """Return True if this token consumes ``symbol`` as a single element."""
        if self.kind is TokenKind.WILDCARD:
            return True
        if self.kind is TokenKind.LITERAL:
            return self.value == symbol
        return False

    def __repr__(self) -> str:  # pragma: no cover - debug convenience
        if self.kind is TokenKind.LITERAL:
            return f"PatternToken({self.value!r})"
        return f"PatternToken({self.kind.name})"


WILDCARD = PatternToken(TokenKind.WILDCARD)
REPEAT = PatternToken(TokenKind.REPEAT)

PatternLike = Union[str, Sequence[object]]


def literal(symbol: Hashable) -> PatternToken:
    return PatternToken(TokenKind.LITERAL, symbol)


@dataclass(frozen=True)
class Atom:
    """A literal or wildcard together with whether a repetition follows it."""

    token: PatternToken
    repeated: bool = False


def _check_reserved(wildcard: object, repeat: object) -> None:
    for name, value in (("wildcard", wildcard), ("repeat", repeat)):
        if isinstance(value, str) and len(value) != 1:
            raise ValueError(f"{name} symbol must be a single character: {value!r}")
    if wildcard == repeat:
        raise ValueError(f"wildcard and repeat symbols must differ: {wildcard!r}")


def parse_pattern(
    raw: PatternLike, wildcard: object = DEFAULT_WILDCARD, repeat: object = DEFAULT_REPEAT
) -> list[PatternToken]:
    """Turn a raw pattern into tokens.

    ``raw`` may be a string (each character is one element) or any sequence of
    symbols. Elements equal to ``wildcard`` or ``repeat`` become operator tokens,
    elements that already are :class:`PatternToken` pass through, and everything
    else becomes a literal. The result is not validated; see :func:`validate_pattern`.
    """
    _check_reserved(wildcard, repeat)
    tokens: list[PatternToken] = []
    for element in raw:
        if isinstance(element, PatternToken):
            tokens.append(element)
        elif element == wildcard:
            tokens.append(WILDCARD)
        elif element == repeat:
            tokens.append(REPEAT)
        else:
            tokens.append(literal(element))
    return tokens


def validate_pattern(tokens: Sequence[PatternToken]) -> None:
    previous: PatternToken | None = None
    for index, token in enumerate(tokens):
        if token.kind is TokenKind.REPEAT:
            if previous is None:
                raise MalformedPattern("pattern starts with a repetition symbol", index)
            if previous.kind is TokenKind.REPEAT:
                raise MalformedPattern("consecutive repetition symbols", index)
        previous = token


def ensure_tokens(
    pattern: PatternLike, wildcard: object = DEFAULT_WILDCARD, repeat: object = DEFAULT_REPEAT
) -> list[PatternToken]:
    """Parse ``pattern`` if needed and validate it, returning a token list."""
    tokens = parse_pattern(pattern, wildcard=wildcard, repeat=repeat)
    validate_pattern(tokens)
    return tokens


def format_pattern(
    tokens: Sequence[PatternToken], wildcard: str = DEFAULT_WILDCARD, repeat: str = DEFAULT_REPEAT
) -> str:
    parts: list[str] = []
    for token in tokens:
        if token.kind is TokenKind.WILDCARD:
            parts.append(wildcard)
        elif token.kind is TokenKind.REPEAT:
            parts.append(repeat)
        else:
            parts.append(str(token.value))
    return "".join(parts)


def iter_atoms(tokens: Sequence[PatternToken]) -> Iterator[Atom]:
    """Group a validated token list into atoms."""
    index = 0
    while index < len(tokens):
        token = tokens[index]
        repeated = index + 1 < len(tokens) and tokens[index + 1].kind is TokenKind.REPEAT
        yield Atom(token, repeated)
        index += 2 if repeated else 1


def describe_atoms(
    tokens: Sequence[PatternToken], wildcard: str = DEFAULT_WILDCARD, repeat: str = DEFAULT_REPEAT
) -> list[str]:
    """Spell each atom of a validated token list, e.g. ``["a*", ".", "b"]``."""
    return [
        format_pattern([atom.token, REPEAT] if atom.repeated else [atom.token], wildcard, repeat)
        for atom in iter_atoms(tokens)
    ]
