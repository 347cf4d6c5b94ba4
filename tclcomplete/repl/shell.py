"""TclShell: interactive Tcl prompt with tab completion."""

from __future__ import annotations

import logging

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.lexers import PygmentsLexer
from prompt_toolkit.patch_stdout import patch_stdout
from prompt_toolkit.styles import Style
from pygments.lexers.tcl import TclLexer

from tclcomplete.config import CompleterConfig
from tclcomplete.context import LookupContext, eval_bool, eval_value
from tclcomplete.exceptions import InterpreterError
from tclcomplete.repl.complete import TclCompleter

logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"exit", "quit"}

STYLE = Style.from_dict(
    {
        "prompt": "#87ff87",
        "prompt.continuation": "#808080",
        "error": "fg:ansired",
    }
)


def _print_error(message: str) -> None:
    print_formatted_text(FormattedText([("class:error", message)]), style=STYLE)


class TclShell:
    """Read-eval-print loop over a Tcl interpreter."""

    def __init__(self, config: CompleterConfig | None = None, evaluator=None) -> None:
        self.config = config or CompleterConfig()
        if evaluator is None:
            from tclcomplete.tcl import TclEvaluator

            evaluator = TclEvaluator()
        self.evaluator = evaluator
        self.ctx = LookupContext(evaluator, self.config.interp, self.config.namespace)
        self.completer = TclCompleter(lambda: self.ctx, self.config.object_systems)
        if self.config.history_file is not None:
            self.config.history_file.parent.mkdir(parents=True, exist_ok=True)
            history = FileHistory(str(self.config.history_file))
        else:
            history = InMemoryHistory()
        self.session = PromptSession(
            message=self._prompt,
            lexer=PygmentsLexer(TclLexer),
            completer=self.completer,
            complete_while_typing=False,
            history=history,
            style=STYLE,
        )
        self._pending: list[str] = []

    def _prompt(self):
        """Namespace prompt, or a continuation marker inside an open script."""
        if self._pending:
            return [("class:prompt.continuation", "> ")]
        return [("class:prompt", f"{self.ctx.namespace} % ")]

    def startup(self) -> None:
        """Require configured packages, then source startup scripts."""
        for package in self.config.packages:
            try:
                self.evaluator.require(package, self.ctx.interp)
            except InterpreterError as e:
                _print_error(f"package require {package}: {e.__cause__ or e}")
        for script in self.config.startup:
            try:
                self.evaluator.source(script, self.ctx.interp)
            except InterpreterError as e:
                _print_error(f"source {script}: {e.__cause__ or e}")

    def change_namespace(self, name: str) -> None:
        """Move completion and evaluation into an existing namespace."""
        if not name:
            print_formatted_text(self.ctx.namespace)
            return
        try:
            if not eval_bool(self.ctx, "::namespace", "exists", name):
                _print_error(f"namespace {name} does not exist")
                return
            # Relative names resolve against the current namespace; queries run from global.
            qualified = eval_value(self.ctx, "::namespace", "inscope", name, "::namespace current")
        except InterpreterError as e:
            logger.debug("namespace switch failed: %s", e)
            _print_error(str(e.__cause__ or e))
            return
        self.ctx = self.ctx.at(qualified)

    def feed(self, line: str) -> str | None:
        """Add a line to the pending script; return it once complete."""
        self._pending.append(line)
        script = "\n".join(self._pending)
        if not self.evaluator.is_complete(script):
            return None
        self._pending = []
        return script

    def execute(self, script: str) -> None:
        """Evaluate a complete script and print its result or error."""
        words = script.split(maxsplit=1)
        if words and words[0] == ":ns":
            self.change_namespace(words[1].strip() if len(words) > 1 else "")
            return
        try:
            result = self.evaluator.evaluate(self.ctx.interp, self.ctx.namespace, script)
        except InterpreterError as e:
            logger.debug("evaluation failed: %s", e)
            _print_error(str(e.__cause__ or e))
            return
        if result:
            print_formatted_text(result)

    async def run(self) -> None:
        """Main REPL loop."""
        self.startup()
        with patch_stdout():
            while True:
                try:
                    line = await self.session.prompt_async()
                except (KeyboardInterrupt, EOFError):
                    return

                if not self._pending and line.strip() in EXIT_COMMANDS:
                    return
                if not self._pending and not line.strip():
                    continue

                script = self.feed(line)
                if script is not None:
                    self.execute(script)
