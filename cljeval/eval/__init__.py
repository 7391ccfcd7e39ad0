"""
cljeval.eval - Evaluation cycle

Modules:
- orchestrator.py: builds and dispatches evaluation requests
- interpreter.py: renders responses and stacktraces, closes sessions
- commands.py: editor commands on top of the Evaluator
"""

from cljeval.eval.commands import EvalCommands
from cljeval.eval.interpreter import (
    ResponseInterpreter,
    format_stacktrace,
    rebase_position,
    render_responses,
)
from cljeval.eval.orchestrator import (
    EvalOutcome,
    Evaluator,
    build_payload,
    reload_payload,
)

__all__ = [
    # Orchestrator
    "Evaluator",
    "EvalOutcome",
    "build_payload",
    "reload_payload",
    # Interpreter
    "ResponseInterpreter",
    "format_stacktrace",
    "rebase_position",
    "render_responses",
    # Commands
    "EvalCommands",
]
