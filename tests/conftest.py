"""Shared fixtures: an in-memory Evaluator and a real Tcl interpreter."""

from __future__ import annotations

import re
from collections.abc import Sequence

import pytest

from tclcomplete.context import LookupContext
from tclcomplete.exceptions import InterpreterError


def tcl_glob(pattern: str, name: str) -> bool:
    """`string match` for the subset of glob syntax the resolvers emit."""
    regex = []
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "\\" and i + 1 < len(pattern):
            regex.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if c == "*":
            regex.append(".*")
        elif c == "?":
            regex.append(".")
        else:
            regex.append(re.escape(c))
        i += 1
    return re.fullmatch("".join(regex), name, re.DOTALL) is not None


def _qualifiers(name: str) -> str:
    idx = name.rfind("::")
    return name[:idx].rstrip(":") if idx >= 0 else ""


class FakeEvaluator:
    """Answers the introspection queries tclcomplete issues from plain data.

    Every call is recorded in `calls` as (interp, namespace, command).
    """

    def __init__(
        self,
        commands: Sequence[str] = (),
        variables: dict[str, str] | None = None,
        arrays: dict[str, Sequence[str]] | None = None,
        oo: dict[str, Sequence[str]] | None = None,
        nsf: dict[str, Sequence[str]] | None = None,
        xotcl: dict[str, Sequence[str]] | None = None,
        namespaces: Sequence[str] = (),
        interps: Sequence[str] = ("",),
    ) -> None:
        self.commands = list(commands)
        self.variables = dict(variables or {})
        self.arrays = {k: list(v) for k, v in (arrays or {}).items()}
        self.oo = dict(oo or {})
        self.nsf = nsf
        self.xotcl = xotcl
        self.namespaces = ["::", *namespaces]
        self.interps = list(interps)
        self.calls: list[tuple[str, str, tuple[str, ...]]] = []
        if nsf is not None:
            self.commands.append("::nsf::object::exists")

    @property
    def commands_sent(self) -> list[tuple[str, ...]]:
        return [command for _, _, command in self.calls]

    def _qualify(self, namespace: str, name: str) -> str | None:
        """Resolve a namespace name the way Tcl does: current namespace, then global."""
        if name.startswith("::"):
            return name if name in self.namespaces else None
        for candidate in (namespace.rstrip(":") + "::" + name, "::" + name):
            if candidate in self.namespaces:
                return candidate
        return None

    def _answer(self, namespace: str, command: tuple[str, ...]):
        match command:
            case ("::info", "commands", pattern):
                return [c for c in self.commands if tcl_glob(pattern, c)]
            case ("::info", "vars", pattern):
                names = [*self.variables, *self.arrays]
                return [v for v in names if tcl_glob(pattern, v)]
            case ("::array", "names", array, pattern):
                return [e for e in self.arrays.get(array, []) if tcl_glob(pattern, e)]
            case ("::set", var):
                if var not in self.variables:
                    raise InterpreterError(
                        f'can\'t read "{var}": no such variable', command=command
                    )
                return self.variables[var]
            case ("::info", "object", "isa", "object", obj):
                return obj in self.oo
            case ("::info", "object", "methods", obj, "-all"):
                return list(self.oo[obj])
            case ("::info", "exists", "::xotcl::version"):
                return self.xotcl is not None
            case ("::xotcl::Object", "isobject", obj) if self.xotcl is not None:
                return obj in self.xotcl
            case ("::nsf::object::exists", obj) if self.nsf is not None:
                return obj in self.nsf
            case ("::namespace", "children", parent, pattern):
                return [
                    ns for ns in self.namespaces
                    if ns != "::" and _qualifiers(ns) in (parent, parent.rstrip(":"))
                    and tcl_glob(pattern, ns)
                ]
            case ("::namespace", "exists", name):
                return self._qualify(namespace, name) is not None
            case ("::namespace", "inscope", name, "::namespace current"):
                qualified = self._qualify(namespace, name)
                if qualified is None:
                    raise InterpreterError(f'namespace "{name}" not found', command=command)
                return qualified
            case (obj, "::nsf::methods::object::info::lookupmethods", *_, pattern) if (
                self.nsf is not None and obj in self.nsf
            ):
                return [m for m in self.nsf[obj] if tcl_glob(pattern, m)]
            case (obj, "info", "methods", pattern) if self.xotcl is not None and obj in self.xotcl:
                return [m for m in self.xotcl[obj] if tcl_glob(pattern, m)]
        raise InterpreterError(f'invalid command name "{command[0]}"', command=command)

    def _eval(self, interp: str, namespace: str, command: Sequence[str]):
        command = tuple(command)
        self.calls.append((interp, namespace, command))
        if interp not in self.interps:
            raise InterpreterError(f'could not find interpreter "{interp}"', command=command)
        if namespace not in self.namespaces:
            raise InterpreterError(f'namespace "{namespace}" not found', command=command)
        return self._answer(namespace, command)

    def eval_list(self, interp: str, namespace: str, command: Sequence[str]) -> list[str]:
        return list(self._eval(interp, namespace, command))

    def eval_bool(self, interp: str, namespace: str, command: Sequence[str]) -> bool:
        return bool(self._eval(interp, namespace, command))

    def eval_value(self, interp: str, namespace: str, command: Sequence[str]) -> str:
        return str(self._eval(interp, namespace, command))


@pytest.fixture
def fake():
    """Fake interpreter holding a few commands, variables and objects."""
    return FakeEvaluator(
        commands=["puts", "pwd", "proc", "set", "string", "split"],
        variables={"argv": "", "argc": "0", "obj": "::greeter"},
        arrays={"arr": ["elephant", "elk", "zebra"]},
        oo={"::greeter": ["destroy", "hello", "help", "other"]},
        namespaces=["::app", "::app::db"],
    )


@pytest.fixture
def ctx(fake):
    return LookupContext(fake)


@pytest.fixture
def make_ctx():
    """Build a LookupContext over a FakeEvaluator with custom contents."""

    def _make(interp: str = "", namespace: str = "::", **contents) -> LookupContext:
        return LookupContext(FakeEvaluator(**contents), interp, namespace)

    return _make


@pytest.fixture
def tcl():
    """A real Tcl interpreter, skipped when tkinter or Tcl is unavailable."""
    tkinter = pytest.importorskip("tkinter")
    try:
        interp = tkinter.Tcl()
    except tkinter.TclError as e:
        pytest.skip(f"Tcl unavailable: {e}")
    return interp


@pytest.fixture
def tcl_ctx(tcl):
    from tclcomplete.tcl import TclEvaluator

    return LookupContext(TclEvaluator(tcl))
