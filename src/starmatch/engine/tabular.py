"""Bottom-up dynamic programming matcher."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from .tokens import PatternLike, PatternToken, TokenKind, ensure_tokens, format_pattern

logger = logging.getLogger(__name__)


def build_table(text: Sequence[object], tokens: Sequence[PatternToken]) -> list[list[bool]]:
    """Fill the match table for ``text`` against a validated token list.

    Cell ``[i][j]`` is True when the first ``i`` symbols of ``text`` are matched
    by the first ``j`` tokens.
    """
    rows = len(text) + 1
    cols = len(tokens) + 1
    logger.debug("building %dx%d match table", rows, cols)
    table = [[False] * cols for _ in range(rows)]
    table[0][0] = True
    # empty text: only chains of repeated atoms taken zero times
    for j in range(2, cols):
        if tokens[j - 1].kind is TokenKind.REPEAT:
            table[0][j] = table[0][j - 2]
    for i in range(1, rows):
        symbol = text[i - 1]
        row = table[i]
        above = table[i - 1]
        for j in range(1, cols):
            token = tokens[j - 1]
            if token.kind is TokenKind.REPEAT:
                row[j] = row[j - 2] or (tokens[j - 2].accepts(symbol) and above[j])
            else:
                row[j] = token.accepts(symbol) and above[j - 1]
    return table


def match_tokens(text: Sequence[object], tokens: Sequence[PatternToken]) -> bool:
    return build_table(text, tokens)[len(text)][len(tokens)]


def match_tabular(text: Sequence[object], pattern: PatternLike) -> bool:
    return match_tokens(text, ensure_tokens(pattern))


def render_table(
    text: Sequence[object], tokens: Sequence[PatternToken], table: Sequence[Sequence[bool]]
) -> str:
    """Render a filled table as a text grid, ``T`` for true cells and ``.`` otherwise."""
    col_labels = ["", *(format_pattern([token]) for token in tokens)]
    row_labels = ["", *(str(symbol) for symbol in text)]
    width = max(len(label) for label in col_labels + row_labels) + 1
    lines = [" " * width + "".join(label.rjust(width) for label in col_labels)]
    for label, row in zip(row_labels, table):
        cells = "".join(("T" if cell else ".").rjust(width) for cell in row)
        lines.append(label.rjust(width) + cells)
    return "\n".join(lines)
