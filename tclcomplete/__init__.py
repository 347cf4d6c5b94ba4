"""tclcomplete: prefix completion of Tcl commands, variables and methods."""

from tclcomplete.context import Evaluator, LookupContext, eval_bool, eval_in, eval_value
from tclcomplete.exceptions import ConfigError, InterpreterError, TclCompleteError
from tclcomplete.matches import (
    MatchResult,
    escape_glob,
    glob_prefix,
    longest_common_prefix,
    reduce_matches,
)
from tclcomplete.methods import (
    Deref,
    Literal,
    ObjectSystem,
    find_any_method,
    find_methods,
    parse_object_ref,
    resolve_object_ref,
)
from tclcomplete.resolver import find_commands, find_variables

__all__ = [
    # Context
    "LookupContext",
    "Evaluator",
    "eval_in",
    "eval_bool",
    "eval_value",
    # Matching
    "MatchResult",
    "escape_glob",
    "glob_prefix",
    "longest_common_prefix",
    "reduce_matches",
    # Resolvers
    "find_commands",
    "find_variables",
    "find_methods",
    "find_any_method",
    # Object references
    "ObjectSystem",
    "Literal",
    "Deref",
    "parse_object_ref",
    "resolve_object_ref",
    # Exceptions
    "TclCompleteError",
    "InterpreterError",
    "ConfigError",
]
