"""Command and variable name resolution.

find_commands() and find_variables() look up every name visible in a
LookupContext that begins with a prefix and reduce the hits to a MatchResult.
Variable prefixes of the form `arr(elem` complete against the elements of
array `arr` instead of variable names.
"""

from __future__ import annotations

import logging
import re

from tclcomplete.context import LookupContext, eval_in
from tclcomplete.matches import MatchResult, glob_prefix, longest_common_prefix, reduce_matches

logger = logging.getLogger(__name__)

# Everything before the first "(" names the array, the rest is the element prefix.
_ARRAY_ELEMENT = re.compile(r"([^(]*)\((.*)", re.DOTALL)


def find_commands(prefix: str, ctx: LookupContext) -> MatchResult:
    """Find all command names in ctx that begin with prefix.

    Returns the longest common prefix of the matching commands and the
    sorted matches. If nothing matched, the prefix comes back unchanged
    with no matches.
    """
    return reduce_matches(prefix, eval_in(ctx, "::info", "commands", glob_prefix(prefix)))


def find_variables(prefix: str, ctx: LookupContext) -> MatchResult:
    """Find all variable names in ctx that begin with prefix.

    A prefix that looks like a partial array element reference, `arr(el`,
    is matched against the element names of `arr`. A unique element comes
    back closed, `arr(elem)`; several elements share an open common prefix,
    `arr(<common>`, since the user may still type more of the element name.
    """
    m = _ARRAY_ELEMENT.match(prefix)
    if m is None:
        return reduce_matches(prefix, eval_in(ctx, "::info", "vars", glob_prefix(prefix)))
    return _find_elements(prefix, m.group(1), m.group(2), ctx)


def _find_elements(prefix: str, array: str, elem_prefix: str, ctx: LookupContext) -> MatchResult:
    elems = eval_in(ctx, "::array", "names", array, glob_prefix(elem_prefix))
    logger.debug("array %s: %d elements match %r", array, len(elems), elem_prefix)
    if len(elems) == 1:
        var = f"{array}({elems[0]})"
        return MatchResult(var, (var,))
    if elems:
        common = longest_common_prefix(elems, elem_prefix)
        return MatchResult(
            f"{array}({common}",
            tuple(sorted(f"{array}({elem})" for elem in elems)),
        )
    return MatchResult(prefix, ())
