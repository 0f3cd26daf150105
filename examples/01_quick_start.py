#!/usr/bin/env python3
"""
Quick Start Examples: Simplest possible usage of starmatch

Whole-text matching with '.' (any single symbol) and '*' (zero or more of the
preceding atom), on strings and on arbitrary symbol sequences.
"""
import sys
sys.path.insert(0, "../src")

from starmatch import MalformedPattern, cross_check, matches
from starmatch.engine.tabular import build_table, render_table
from starmatch.engine.tokens import ensure_tokens

print("=" * 80)
print("QUICK START EXAMPLES")
print("=" * 80)

# ============================================================================
# EXAMPLE 1: Strings
# ============================================================================
print("\nEXAMPLE 1: Matching strings")
for text, pattern in [("aa", "a*"), ("ab", "a*"), ("abc", ".*c"), ("mississippi", "mis*is*p*.")]:
    verdict = matches(text, pattern)
    print(f"  {'✓' if verdict else '✗'} {text!r:15} ~ {pattern!r}")

# ============================================================================
# EXAMPLE 2: Both engines, checked against each other
# ============================================================================
print("\nEXAMPLE 2: Cross-checking the recursive and tabular engines")
print(f"  cross_check('', 'a*b*c*') -> {cross_check('', 'a*b*c*')}")

# ============================================================================
# EXAMPLE 3: Symbol sequences
# ============================================================================
print("\nEXAMPLE 3: Matching a list of words")
request = ["GET", "api", "v1", "users"]
print(f"  {request} ~ ['GET', 'api', '.', '*'] -> {matches(request, ['GET', 'api', '.', '*'])}")

# ============================================================================
# EXAMPLE 4: Malformed patterns fail fast
# ============================================================================
print("\nEXAMPLE 4: Malformed pattern")
try:
    matches("a", "a**")
except MalformedPattern as exc:
    print(f"  rejected: {exc}")

# ============================================================================
# EXAMPLE 5: The DP table
# ============================================================================
print("\nEXAMPLE 5: Table for 'aab' ~ 'c*a*b'")
tokens = ensure_tokens("c*a*b")
print(render_table("aab", tokens, build_table("aab", tokens)))
