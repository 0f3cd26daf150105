"""starmatch whole-text pattern matcher with wildcard and repetition."""

from collections.abc import Sequence

__version__ = "0.1.0"

from .engine.matcher import cross_check, match_all, matches
from .engine.tokens import MalformedPattern


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point mirroring :func:`starmatch.cli.main`."""

    from .cli import main as cli_main

    return cli_main(argv)


__all__ = ["main", "matches", "match_all", "cross_check", "MalformedPattern", "__version__"]
