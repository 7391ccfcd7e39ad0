"""
cljeval - Clojure/ClojureScript evaluation client for editors

Evaluates documents and selections against a running nREPL server and
renders results or stacktraces into an output channel.

Packages:
- nrepl: session and response data model, transport and connection interfaces
- editor: evaluation context, output channel, toasts and settings
- eval: the evaluation cycle and the editor commands

Usage:
    from cljeval import create_commands

    commands = create_commands(connection, transport, output, notifier)
    await commands.eval_and_show_result(ctx)
"""

from typing import Any, Callable, Optional

from cljeval.editor import (
    EditorConfig,
    EvalContext,
    MemoryNotifier,
    MemoryOutputChannel,
    Notifier,
    OutputChannel,
    Selection,
    load_config,
)
from cljeval.errors import (
    CljEvalError,
    NotConnected,
    SessionResolutionFailed,
    StacktraceFetchFailed,
    TransportFault,
)
from cljeval.eval import (
    EvalCommands,
    EvalOutcome,
    Evaluator,
    ResponseInterpreter,
    build_payload,
)
from cljeval.nrepl import (
    ConnectionManager,
    NReplTransport,
    ResponseObject,
    Session,
    SessionKind,
    StacktraceFrame,
    StacktraceInfo,
)
from cljeval.parser import get_namespace

__version__ = "0.1.0"


def create_commands(
    connection: ConnectionManager,
    transport: NReplTransport,
    output: OutputChannel,
    notifier: Notifier,
    config: Optional[EditorConfig] = None,
    namespace_of: Callable[[str], str] = get_namespace,
    log_file: Any = None,
) -> EvalCommands:
    """Wire an Evaluator and its ResponseInterpreter into editor commands."""
    if config is None:
        config = load_config()
    interpreter = ResponseInterpreter(
        transport=transport,
        output=output,
        notifier=notifier,
        config=config,
        log_file=log_file,
    )
    evaluator = Evaluator(
        connection=connection,
        transport=transport,
        interpreter=interpreter,
        namespace_of=namespace_of,
    )
    return EvalCommands(evaluator=evaluator, notifier=notifier, config=config)


__all__ = [
    "create_commands",
    # Evaluation
    "Evaluator",
    "EvalOutcome",
    "EvalCommands",
    "ResponseInterpreter",
    "build_payload",
    "get_namespace",
    # Editor
    "EvalContext",
    "Selection",
    "OutputChannel",
    "MemoryOutputChannel",
    "Notifier",
    "MemoryNotifier",
    "EditorConfig",
    "load_config",
    # nREPL
    "ConnectionManager",
    "NReplTransport",
    "Session",
    "SessionKind",
    "ResponseObject",
    "StacktraceFrame",
    "StacktraceInfo",
    # Errors
    "CljEvalError",
    "NotConnected",
    "SessionResolutionFailed",
    "StacktraceFetchFailed",
    "TransportFault",
]
