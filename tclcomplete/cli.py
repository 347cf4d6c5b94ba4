"""tclcomplete CLI - prefix completion against a Tcl interpreter.

Commands:
    tclcomplete commands <prefix>                 Complete command names
    tclcomplete vars <prefix>                     Complete variable names
    tclcomplete methods <system> <obj> <prefix>   Complete object methods
    tclcomplete repl                              Interactive Tcl shell
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.columns import Columns
from rich.console import Console

from tclcomplete.config import enable_debug_log, load_config
from tclcomplete.context import LookupContext
from tclcomplete.exceptions import ConfigError, InterpreterError
from tclcomplete.matches import MatchResult
from tclcomplete.methods import ObjectSystem, find_methods
from tclcomplete.resolver import find_commands, find_variables

app = typer.Typer(
    name="tclcomplete",
    help="Prefix completion of Tcl commands, variables and methods",
    no_args_is_help=True,
)

InterpOption = Annotated[
    str, typer.Option("--interp", "-i", help="Child interpreter path (default: main)")
]
NamespaceOption = Annotated[
    str, typer.Option("--ns", "-n", help="Namespace to complete in")
]
SourceOption = Annotated[
    Optional[list[Path]],
    typer.Option("--source", "-s", help="Tcl script to source first (repeatable)"),
]
JsonOption = Annotated[
    bool, typer.Option("--json", help="Print the result as JSON")
]


def _context(interp: str, namespace: str, sources: list[Path] | None) -> LookupContext:
    """Fresh interpreter with the given scripts sourced."""
    from tclcomplete.tcl import TclEvaluator

    evaluator = TclEvaluator()
    for path in sources or []:
        if not path.exists():
            raise typer.BadParameter(f"Script not found: {path}")
        _run(evaluator.source, path)
    return LookupContext(evaluator, interp, namespace)


def _run(fn, *args):
    """Call fn, turning interpreter failures into exit status 1."""
    try:
        return fn(*args)
    except InterpreterError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _emit(result: MatchResult, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps({"prefix": result.common_prefix, "matches": list(result.matches)}))
        return
    typer.echo(result.common_prefix)
    if result.matches:
        Console().print(Columns(result.matches))


@app.command("commands")
def complete_commands(
    prefix: Annotated[str, typer.Argument(help="Command name prefix")],
    interp: InterpOption = "",
    namespace: NamespaceOption = "::",
    source: SourceOption = None,
    as_json: JsonOption = False,
):
    """Complete command names.

    Examples:
        tclcomplete commands str
        tclcomplete commands ::oo:: --json
    """
    ctx = _context(interp, namespace, source)
    _emit(_run(find_commands, prefix, ctx), as_json)


@app.command("vars")
def complete_variables(
    prefix: Annotated[str, typer.Argument(help="Variable name prefix, or arr(elem prefix")],
    interp: InterpOption = "",
    namespace: NamespaceOption = "::",
    source: SourceOption = None,
    as_json: JsonOption = False,
):
    """Complete variable names and array elements.

    Examples:
        tclcomplete vars tcl_
        tclcomplete vars 'env(PA'
    """
    ctx = _context(interp, namespace, source)
    _emit(_run(find_variables, prefix, ctx), as_json)


@app.command("methods")
def complete_methods(
    system: Annotated[ObjectSystem, typer.Argument(help="Object system")],
    obj: Annotated[str, typer.Argument(help="Object name or $variable holding it")],
    prefix: Annotated[str, typer.Argument(help="Method name prefix")] = "",
    interp: InterpOption = "",
    namespace: NamespaceOption = "::",
    source: SourceOption = None,
    as_json: JsonOption = False,
):
    """Complete methods of an object.

    Examples:
        tclcomplete methods oo oo::object cre
        tclcomplete methods oo '$obj' -s app.tcl
    """
    ctx = _context(interp, namespace, source)
    _emit(_run(find_methods, system, obj, prefix, ctx), as_json)


@app.command("repl")
def repl(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Config file (default: ~/.config/tclcomplete/config.toml)"),
    ] = None,
    debug_log: Annotated[
        Optional[Path],
        typer.Option("--debug-log", help="Write debug logs to this file"),
    ] = None,
):
    """Interactive Tcl shell with tab completion."""
    from tclcomplete.repl import launch

    try:
        settings = load_config(config)
    except ConfigError as e:
        raise typer.BadParameter(str(e))

    log_path = debug_log or settings.debug_log
    if log_path is not None:
        enable_debug_log(log_path)
    launch(settings)


def main():
    app()


if __name__ == "__main__":
    main()
