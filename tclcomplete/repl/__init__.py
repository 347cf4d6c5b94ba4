"""Interactive Tcl shell with namespace-aware tab completion."""

from __future__ import annotations

import asyncio

from tclcomplete.config import CompleterConfig
from tclcomplete.repl.complete import TclCompleter
from tclcomplete.repl.shell import TclShell


def launch(config: CompleterConfig | None = None) -> None:
    """Start the Tcl REPL."""
    asyncio.run(TclShell(config).run())


__all__ = ["TclCompleter", "TclShell", "launch"]
