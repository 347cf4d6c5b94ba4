"""Object method resolution across Tcl object systems.

Each object system answers "which methods does this object have" through its
own introspection commands. A MethodLookup per system hides that behind
candidates(); find_methods() dereferences the object token, dispatches on the
ObjectSystem tag and reduces.

Supported:
    oo     -- TclOO, built into Tcl 8.6
    nsf    -- Next Scripting Framework
    xotcl  -- XOTcl (legacy)

Recognised but not implemented (always no matches): ensemble, snit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from tclcomplete.context import GLOBAL_NAMESPACE, LookupContext, eval_bool, eval_in, eval_value
from tclcomplete.matches import MatchResult, glob_prefix, reduce_matches

logger = logging.getLogger(__name__)


class ObjectSystem(Enum):
    """Object systems a method lookup can target."""

    ENSEMBLE = "ensemble"
    OO = "oo"
    SNIT = "snit"
    NSF = "nsf"
    XOTCL = "xotcl"


# Object systems tried, in order, when the caller cannot tell which one an object uses.
DEFAULT_SYSTEMS = [ObjectSystem.OO, ObjectSystem.NSF, ObjectSystem.XOTCL]


# --- Object references ---


@dataclass(frozen=True)
class Literal:
    """An object named directly."""

    name: str


@dataclass(frozen=True)
class Deref:
    """An object named by the value of a variable (`$var`)."""

    var: str


ObjectRef = Literal | Deref


def parse_object_ref(token: str) -> ObjectRef:
    """Classify an object token; a leading `$` marks a variable reference."""
    if token.startswith("$"):
        return Deref(token[1:])
    return Literal(token)


def resolve_object_ref(ref: ObjectRef, ctx: LookupContext) -> str:
    """Object name for ref. Reading an unset variable raises InterpreterError."""
    if isinstance(ref, Deref):
        return eval_value(ctx, "::set", ref.var)
    return ref.name


def namespace_qualifiers(name: str) -> str:
    """Everything before the last `::` separator, like `namespace qualifiers`."""
    idx = name.rfind("::")
    if idx < 0:
        return ""
    return name[:idx].rstrip(":")


# --- Lookups ---


class MethodLookup:
    """Method introspection for one object system."""

    system: ObjectSystem

    def candidates(self, obj: str, prefix: str, ctx: LookupContext) -> list[str]:
        """Methods of obj beginning with prefix; empty if obj is not recognised."""
        raise NotImplementedError


class BuiltinOOLookup(MethodLookup):
    """TclOO: all methods including inherited ones, filtered by prefix."""

    system = ObjectSystem.OO

    def candidates(self, obj: str, prefix: str, ctx: LookupContext) -> list[str]:
        if not eval_bool(ctx, "::info", "object", "isa", "object", obj):
            return []
        methods = eval_in(ctx, "::info", "object", "methods", obj, "-all")
        return [m for m in methods if m.startswith(prefix)]


class NsfLookup(MethodLookup):
    """Next Scripting Framework.

    NSF dispatches unregistered methods given as absolute command paths, so
    a `::`-prefixed method name completes against commands and namespaces.
    """

    system = ObjectSystem.NSF

    def loaded(self, ctx: LookupContext) -> bool:
        return bool(eval_in(ctx, "::info", "commands", "::nsf::object::exists"))

    def candidates(self, obj: str, prefix: str, ctx: LookupContext) -> list[str]:
        if not self.loaded(ctx) or not eval_bool(ctx, "::nsf::object::exists", obj):
            return []
        pattern = glob_prefix(prefix)
        if prefix.startswith("::"):
            parent = namespace_qualifiers(prefix) or GLOBAL_NAMESPACE
            commands = eval_in(ctx, "::info", "commands", pattern)
            children = eval_in(ctx, "::namespace", "children", parent, pattern)
            return commands + children
        return eval_in(
            ctx,
            obj,
            "::nsf::methods::object::info::lookupmethods",
            "-callprotection",
            "public",
            "-path",
            "--",
            pattern,
        )


class XotclLookup(MethodLookup):
    """XOTcl: `<obj> info methods <pattern>`."""

    system = ObjectSystem.XOTCL

    def candidates(self, obj: str, prefix: str, ctx: LookupContext) -> list[str]:
        if not eval_bool(ctx, "::info", "exists", "::xotcl::version"):
            return []
        if not eval_bool(ctx, "::xotcl::Object", "isobject", obj):
            return []
        return eval_in(ctx, obj, "info", "methods", glob_prefix(prefix))


class UnsupportedLookup(MethodLookup):
    """Placeholder for object systems without introspection support yet."""

    def __init__(self, system: ObjectSystem) -> None:
        self.system = system

    def candidates(self, obj: str, prefix: str, ctx: LookupContext) -> list[str]:
        logger.debug("method lookup not supported for %s", self.system.value)
        return []


METHOD_LOOKUPS: dict[ObjectSystem, MethodLookup] = {
    ObjectSystem.ENSEMBLE: UnsupportedLookup(ObjectSystem.ENSEMBLE),
    ObjectSystem.OO: BuiltinOOLookup(),
    ObjectSystem.SNIT: UnsupportedLookup(ObjectSystem.SNIT),
    ObjectSystem.NSF: NsfLookup(),
    ObjectSystem.XOTCL: XotclLookup(),
}


def find_methods(
    object_system: ObjectSystem | str,
    obj: str,
    prefix: str,
    ctx: LookupContext,
) -> MatchResult:
    """Find the methods of obj that begin with prefix.

    obj is either an object name or a `$var` reference to one. If obj is
    not an object of the given system, or the system is not supported, the
    prefix comes back unchanged with no matches.
    """
    name = resolve_object_ref(parse_object_ref(obj), ctx)
    try:
        system = ObjectSystem(object_system)
    except ValueError:
        logger.debug("unknown object system %r", object_system)
        return reduce_matches(prefix, [])
    return reduce_matches(prefix, METHOD_LOOKUPS[system].candidates(name, prefix, ctx))


def find_any_method(
    obj: str,
    prefix: str,
    ctx: LookupContext,
    systems: list[ObjectSystem] | None = None,
) -> MatchResult:
    """Try each object system in turn; the first one with matches wins."""
    result = reduce_matches(prefix, [])
    for system in systems or DEFAULT_SYSTEMS:
        result = find_methods(system, obj, prefix, ctx)
        if result.matches:
            break
    return result
