"""Glob escaping and match reduction shared by all resolvers.

Introspection queries take Tcl glob patterns, so a user prefix is escaped
before a trailing `*` is appended. Raw candidate lists coming back from the
interpreter are reduced to a MatchResult: the longest common prefix plus the
sorted matches.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import NamedTuple

# Metacharacters of `string match` that a literal prefix must not trigger.
_GLOB_SPECIAL = re.compile(r"[\\*?]")


def escape_glob(raw: str) -> str:
    """Escape glob metacharacters so `raw` only ever matches itself.

    Substitution is a single pass, so a backslash introduced for `*` or `?`
    is never escaped a second time.
    """
    return _GLOB_SPECIAL.sub(lambda m: "\\" + m.group(0), raw)


def glob_prefix(raw: str) -> str:
    """Pattern matching every name that begins with `raw` as literal text."""
    return escape_glob(raw) + "*"


class MatchResult(NamedTuple):
    """Outcome of a completion lookup.

    Attributes:
        common_prefix: Longest prefix shared by all matches, or the original
            prefix when nothing matched.
        matches: Matching names in ascending codepoint order.
    """

    common_prefix: str
    matches: tuple[str, ...]


def longest_common_prefix(candidates: Iterable[str], prefix: str = "") -> str:
    """Longest string shared by every candidate that begins with `prefix`.

    Candidates not starting with `prefix` are ignored. When none qualify the
    prefix itself is returned. Characters are compared column by column across
    all candidates at once, so input order never affects the result.
    """
    table = [c for c in candidates if c.startswith(prefix)]
    if not table:
        return prefix
    common = []
    for column in zip(*table):
        if len(set(column)) != 1:
            break
        common.append(column[0])
    return "".join(common)


def reduce_matches(prefix: str, candidates: Iterable[str]) -> MatchResult:
    """Build the (common prefix, sorted matches) pair for raw candidates.

    A single candidate is echoed verbatim even when it does not literally start
    with `prefix` (case or qualification may differ). No candidates leaves the
    prefix untouched.
    """
    found = list(candidates)
    if len(found) == 1:
        return MatchResult(found[0], (found[0],))
    if found:
        return MatchResult(longest_common_prefix(found, prefix), tuple(sorted(found)))
    return MatchResult(prefix, ())
