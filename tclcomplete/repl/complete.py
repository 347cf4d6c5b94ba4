"""Tcl tab completer for prompt_toolkit.

The word before the cursor decides which resolver answers:

    $na           -> variable names (array elements for $arr(el)
    pu            -> command names, when the word starts a command
    $obj me       -> methods of the object named by the first word
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from tclcomplete.context import LookupContext
from tclcomplete.exceptions import InterpreterError
from tclcomplete.matches import MatchResult
from tclcomplete.methods import DEFAULT_SYSTEMS, ObjectSystem, find_any_method
from tclcomplete.resolver import find_commands, find_variables

logger = logging.getLogger(__name__)

# A word runs back to whitespace or Tcl structural punctuation.
_WORD = re.compile(r'[^\s\[\];{}"]*$')
# Characters after which a new command begins.
_COMMAND_START = "[;{\n"


def split_command(text: str) -> tuple[list[str], str]:
    """Split the command being typed into (previous words, current word)."""
    word = _WORD.search(text).group(0)
    head = text[: len(text) - len(word)]
    start = max(head.rfind(c) for c in _COMMAND_START) + 1
    return head[start:].split(), word


class TclCompleter(Completer):
    """Completion of commands, variables and methods in a live interpreter."""

    def __init__(
        self,
        context: Callable[[], LookupContext],
        object_systems: list[ObjectSystem] | None = None,
    ) -> None:
        self._context = context
        self.object_systems = list(object_systems or DEFAULT_SYSTEMS)

    def resolve(self, text: str) -> tuple[str, MatchResult | None]:
        """Word under the cursor and its matches, or None when nothing applies."""
        words, word = split_command(text)
        ctx = self._context()
        if word.startswith("$"):
            name = word[1:]
            result = find_variables(name, ctx)
            return word, MatchResult(
                "$" + result.common_prefix, tuple("$" + m for m in result.matches)
            )
        if not words:
            if not word:
                return word, None
            return word, find_commands(word, ctx)
        if len(words) == 1:
            return word, find_any_method(words[0], word, ctx, self.object_systems)
        return word, None

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        try:
            word, result = self.resolve(document.text_before_cursor)
        except InterpreterError as e:
            logger.debug("completion failed: %s", e)
            return
        if result is None:
            return
        for match in result.matches:
            yield Completion(match, start_position=-len(word))
