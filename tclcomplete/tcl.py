"""Evaluator backed by the Tcl interpreter embedded in tkinter.

Queries are sent as Tcl lists, never as concatenated strings, so names with
spaces or brackets reach the interpreter as single words. Lookups run under
`namespace inscope`, which fails on a missing namespace instead of creating it
the way `namespace eval` would.
"""

from __future__ import annotations

import logging
import tkinter
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from tclcomplete.exceptions import InterpreterError

logger = logging.getLogger(__name__)


class TclEvaluator:
    """Evaluator over a tkinter Tcl interpreter.

    Pass an existing `tkinter.Tcl()` / `tkinter.Tk()` instance to complete
    against an application's interpreter; otherwise a fresh one is created.
    """

    def __init__(self, tcl: tkinter.Tk | None = None) -> None:
        self.tcl = tcl if tcl is not None else tkinter.Tcl()
        self.tk = self.tcl.tk

    @contextmanager
    def _string_results(self) -> Iterator[None]:
        """Have tkinter return Tcl results as strings for the duration."""
        previous = self.tk.wantobjects()
        self.tk.wantobjects(False)
        try:
            yield
        finally:
            self.tk.wantobjects(previous)

    def _call(self, interp: str, script: tuple, command: Sequence[str]) -> str:
        try:
            with self._string_results():
                return self.tk.call("::interp", "eval", interp, script)
        except tkinter.TclError as e:
            raise InterpreterError(
                f"{' '.join(command)}: {e}", command=command, interp=interp, cause=e
            ) from e

    def _query(self, interp: str, namespace: str, command: Sequence[str]) -> str:
        script = ("::namespace", "inscope", namespace, tuple(command))
        return self._call(interp, script, command)

    def eval_list(self, interp: str, namespace: str, command: Sequence[str]) -> list[str]:
        return [str(item) for item in self.tk.splitlist(self._query(interp, namespace, command))]

    def eval_bool(self, interp: str, namespace: str, command: Sequence[str]) -> bool:
        result = self._query(interp, namespace, command)
        try:
            return bool(self.tk.getboolean(result))
        except tkinter.TclError as e:
            raise InterpreterError(
                f"{' '.join(command)}: expected boolean, got {result!r}",
                command=command,
                interp=interp,
                cause=e,
            ) from e

    def eval_value(self, interp: str, namespace: str, command: Sequence[str]) -> str:
        return str(self._query(interp, namespace, command))

    def evaluate(self, interp: str, namespace: str, script: str) -> str:
        """Run a user script with `namespace eval`, returning its result string."""
        return str(self._call(interp, ("::namespace", "eval", namespace, script), (script,)))

    def is_complete(self, script: str) -> bool:
        """Whether `script` has balanced braces, brackets and quotes."""
        return bool(self.tk.getboolean(self.tk.call("::info", "complete", script)))

    def source(self, path: Path | str, interp: str = "") -> str:
        """Source a script file into the interpreter's global namespace."""
        logger.debug("source %s into %s", path, interp or "{}")
        return self._call(interp, ("::source", str(path)), ("source", str(path)))

    def require(self, package: str, interp: str = "") -> str:
        """`package require` a package, returning its version."""
        return self._call(interp, ("::package", "require", package), ("package", "require", package))
