"""Top-down matcher memoized over (text cursor, pattern cursor) states."""
from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from .tokens import PatternLike, PatternToken, TokenKind, ensure_tokens

# Combined input length from which states are walked with an explicit stack
# instead of Python recursion.
RECURSION_BUDGET = 200


def _repeated(tokens: Sequence[PatternToken], j: int) -> bool:
    return j + 1 < len(tokens) and tokens[j + 1].kind is TokenKind.REPEAT


def _match_recursive(text: Sequence[object], tokens: Sequence[PatternToken]) -> bool:
    text_len = len(text)
    pattern_len = len(tokens)

    @lru_cache(maxsize=None)
    def accepts(i: int, j: int) -> bool:
        if j == pattern_len:
            return i == text_len
        first_match = i < text_len and tokens[j].accepts(text[i])
        if _repeated(tokens, j):
            # zero occurrences, or consume one symbol and stay on the atom
            return accepts(i, j + 2) or (first_match and accepts(i + 1, j))
        return first_match and accepts(i + 1, j + 1)

    return accepts(0, 0)


def _match_with_stack(text: Sequence[object], tokens: Sequence[PatternToken]) -> bool:
    """Same recurrence as :func:`_match_recursive`, driven by a work stack.

    Every dependency of state (i, j) has a larger i + j, so the stack is a
    single chain no longer than ``len(text) + len(tokens) + 1``.
    """
    text_len = len(text)
    pattern_len = len(tokens)
    memo: dict[tuple[int, int], bool] = {}
    stack = [(0, 0)]
    while stack:
        state = stack[-1]
        if state in memo:
            stack.pop()
            continue
        i, j = state
        if j == pattern_len:
            memo[state] = i == text_len
            stack.pop()
            continue
        first_match = i < text_len and tokens[j].accepts(text[i])
        if _repeated(tokens, j):
            skip = (i, j + 2)
            if skip not in memo:
                stack.append(skip)
                continue
            if memo[skip] or not first_match:
                result = memo[skip]
            else:
                more = (i + 1, j)
                if more not in memo:
                    stack.append(more)
                    continue
                result = memo[more]
        elif first_match:
            advance = (i + 1, j + 1)
            if advance not in memo:
                stack.append(advance)
                continue
            result = memo[advance]
        else:
            result = False
        memo[state] = result
        stack.pop()
    return memo[(0, 0)]


def match_tokens(text: Sequence[object], tokens: Sequence[PatternToken]) -> bool:
    """Match ``text`` against an already validated token list.

    Recursion depth grows with ``len(text) + len(tokens)``; at or above
    :data:`RECURSION_BUDGET` the states are walked with an explicit stack.
    """
    if len(text) + len(tokens) < RECURSION_BUDGET:
        return _match_recursive(text, tokens)
    return _match_with_stack(text, tokens)


def match_recursive(text: Sequence[object], pattern: PatternLike) -> bool:
    return match_tokens(text, ensure_tokens(pattern))
