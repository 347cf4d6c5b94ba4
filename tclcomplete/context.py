"""Lookup context and the bridge into the target interpreter.

LookupContext names where a query runs: an evaluator, a child interpreter
path inside it, and a namespace. eval_in() / eval_bool() / eval_value() are
the only calls that cross into the runtime; everything else in tclcomplete is
pure logic over their results.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

GLOBAL_NAMESPACE = "::"


@runtime_checkable
class Evaluator(Protocol):
    """Introspection facility of a Tcl runtime.

    Each method runs `command` (a list of words, not a script) inside the
    child interpreter `interp` ("" for the evaluator's own interpreter) with
    `namespace` as the current namespace. Failures raise InterpreterError.
    """

    def eval_list(self, interp: str, namespace: str, command: Sequence[str]) -> list[str]:
        """Run the command and split its result as a Tcl list."""
        ...

    def eval_bool(self, interp: str, namespace: str, command: Sequence[str]) -> bool:
        """Run the command and read its result as a Tcl boolean."""
        ...

    def eval_value(self, interp: str, namespace: str, command: Sequence[str]) -> str:
        """Run the command and return its result string unchanged."""
        ...


@dataclass(frozen=True)
class LookupContext:
    """Where a lookup runs.

    Attributes:
        evaluator: Runtime that answers introspection queries.
        interp: Child interpreter path; empty means the evaluator's own.
        namespace: Namespace the query runs in; empty means global.
    """

    evaluator: Evaluator
    interp: str = ""
    namespace: str = GLOBAL_NAMESPACE

    def __post_init__(self) -> None:
        if self.interp is None:
            object.__setattr__(self, "interp", "")
        if not self.namespace:
            object.__setattr__(self, "namespace", GLOBAL_NAMESPACE)

    def at(self, namespace: str) -> LookupContext:
        """Same interpreter, different namespace."""
        return dataclasses.replace(self, namespace=namespace)


def eval_in(ctx: LookupContext, *command: str) -> list[str]:
    """Run an introspection command in ctx, returning a flat list of names."""
    logger.debug("eval_in %s %s: %s", ctx.interp or "{}", ctx.namespace, command)
    return ctx.evaluator.eval_list(ctx.interp, ctx.namespace, command)


def eval_bool(ctx: LookupContext, *command: str) -> bool:
    """Run a membership test in ctx."""
    logger.debug("eval_bool %s %s: %s", ctx.interp or "{}", ctx.namespace, command)
    return ctx.evaluator.eval_bool(ctx.interp, ctx.namespace, command)


def eval_value(ctx: LookupContext, *command: str) -> str:
    """Run a command in ctx and return its raw string result."""
    logger.debug("eval_value %s %s: %s", ctx.interp or "{}", ctx.namespace, command)
    return ctx.evaluator.eval_value(ctx.interp, ctx.namespace, command)
