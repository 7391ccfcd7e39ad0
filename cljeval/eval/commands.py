"""
cljeval.eval.commands - Editor commands bound to the evaluation client

Each command takes the EvalContext captured by the editor at invocation
time. A missing connection is reported as a warning toast; any other
failure propagates to the host's generic error handling.
"""

from dataclasses import dataclass
from typing import Any, Optional

from cljeval.editor.document import EvalContext
from cljeval.editor.output import Notifier
from cljeval.errors import NotConnected
from cljeval.eval.orchestrator import EvalOutcome, Evaluator

CONNECT_TO_EVALUATE_MESSAGE = "You should connect to nREPL first to evaluate code."
CONNECT_TO_RELOAD_MESSAGE = "You should connect to nREPL first to reload namespace."


@dataclass
class EvalCommands:
    """The eval, eval-and-show-result and reload-namespace commands."""

    evaluator: Evaluator
    notifier: Notifier
    config: Any = None

    async def _evaluate(
        self, ctx: EvalContext, show_results: bool
    ) -> Optional[EvalOutcome]:
        try:
            return await self.evaluator.evaluate(ctx, show_results)
        except NotConnected:
            self.notifier.show_warning(CONNECT_TO_EVALUATE_MESSAGE)
            return None

    async def eval(self, ctx: EvalContext) -> Optional[EvalOutcome]:
        """Evaluate silently: results are toasted when alert-on-eval is on."""
        return await self._evaluate(ctx, False)

    async def eval_and_show_result(self, ctx: EvalContext) -> Optional[EvalOutcome]:
        """Evaluate and always render results in the output channel."""
        return await self._evaluate(ctx, True)

    async def reload_namespace(self, ctx: EvalContext) -> Optional[EvalOutcome]:
        try:
            return await self.evaluator.reload_namespace(ctx)
        except NotConnected:
            self.notifier.show_warning(CONNECT_TO_RELOAD_MESSAGE)
            return None

    async def on_did_save(self, ctx: EvalContext) -> Optional[EvalOutcome]:
        """Save hook: reload the namespace when autoReloadNamespaceOnSave is on."""
        if self.config is None or not self.config.auto_reload_namespace_on_save():
            return None
        if not ctx.is_clojure_file:
            return None
        return await self.reload_namespace(ctx)
