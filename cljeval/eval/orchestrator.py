"""
cljeval.eval.orchestrator - Evaluation requests against an nREPL session

An evaluation cycle goes through these steps, each awaiting the previous:

    resolve session -> build payload -> dispatch -> route response
        -> render success or error -> close session

The Evaluator builds and dispatches the request; rendering and session
teardown are delegated to the ResponseInterpreter. Transport failures are
not caught here and propagate to the caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from cljeval.editor.document import EvalContext, Selection
from cljeval.errors import NotConnected, SessionResolutionFailed
from cljeval.eval.interpreter import ResponseInterpreter
from cljeval.nrepl.collaborators import ConnectionManager, NReplTransport
from cljeval.nrepl.messages import Session, decode_responses
from cljeval.parser import get_namespace


class EvalOutcome(Enum):
    """How an evaluation cycle ended."""

    SUCCESS = "success"
    ERROR = "error"


def build_payload(
    ctx: EvalContext, namespace_of: Callable[[str], str] = get_namespace
) -> str:
    """
    Text sent to the server for an evaluation.

    A selection is evaluated in the namespace of its document, so it is
    prefixed with an ns declaration naming that namespace. Without a
    selection the whole document is sent unchanged.
    """
    if not ctx.has_selection:
        return ctx.full_text
    ns = namespace_of(ctx.full_text)
    return f"(ns {ns})\n{ctx.selected_text}"


def reload_payload(namespace: str) -> str:
    return f"(require '{namespace} :reload)"


@dataclass
class Evaluator:
    """
    Builds evaluation requests from editor state and dispatches them.

    Attributes:
        connection: Issues sessions and reports connectivity.
        transport: Sends requests over the connection.
        interpreter: Renders responses and closes sessions.
        namespace_of: Returns the namespace declared by a document.
    """

    connection: ConnectionManager
    transport: NReplTransport
    interpreter: ResponseInterpreter
    namespace_of: Callable[[str], str] = get_namespace

    def _log(self, message: str) -> None:
        self.interpreter.log(message)

    def _require_connection(self) -> None:
        if not self.connection.is_connected():
            raise NotConnected()

    async def resolve_session(self, file_name: str) -> Session:
        """
        Get the session to evaluate a file in.

        Raises:
            SessionResolutionFailed: If the connection manager cannot
                provide a session.
        """
        try:
            session = await self.connection.session_for_file(file_name)
        except SessionResolutionFailed:
            raise
        except Exception as e:
            raise SessionResolutionFailed(file_name, str(e)) from e
        if session is None:
            raise SessionResolutionFailed(file_name, "no session returned")
        return session

    async def dispatch(
        self, ctx: EvalContext, session: Session, payload: str
    ) -> list[Any]:
        """Send a payload with the transport operation suited to the context."""
        if ctx.has_selection and session.is_clojurescript:
            # Piggieback's load-file ignores the code sent with the request
            # and loads the file from disk, which would evaluate the whole
            # file. eval reports a temporary file name in stacktraces instead.
            self._log(f"eval (ClojureScript selection) in session {session.id}")
            return await self.transport.evaluate(payload, session.id)

        self._log(f"load-file {ctx.file_name} in session {session.id}")
        return await self.transport.evaluate_file(payload, ctx.file_name, session.id)

    async def evaluate(
        self, ctx: EvalContext, show_results_always: bool
    ) -> EvalOutcome:
        """
        Evaluate a document or its selection and render the result.

        Args:
            ctx: The editor state to evaluate.
            show_results_always: Render results in the output channel even
                when alert-on-eval toasts are enabled.

        Returns:
            EvalOutcome.ERROR when the server reported an exception, which
            has then been rendered; EvalOutcome.SUCCESS otherwise.

        Raises:
            NotConnected: If there is no nREPL connection. Nothing is sent.
            SessionResolutionFailed: If no session can be obtained.
            StacktraceFetchFailed: If the stacktrace of a failure is unavailable.
        """
        self._require_connection()

        session = await self.resolve_session(ctx.file_name)
        if session.kind != ctx.session_kind:
            self._log(
                f"Session {session.id} is {session.kind.value}, "
                f"editor expected {ctx.session_kind.value}"
            )

        payload = build_payload(ctx, self.namespace_of)
        responses = decode_responses(await self.dispatch(ctx, session, payload))

        if responses and responses[0].is_exception:
            self._log(f"Exception {responses[0].ex} in session {session.id}")
            await self.interpreter.handle_error(
                ctx.selection,
                show_results_always,
                responses[0].session or session.id,
            )
            return EvalOutcome.ERROR

        await self.interpreter.handle_success(
            show_results_always, responses, session_id=session.id
        )
        return EvalOutcome.SUCCESS

    async def evaluate_text(
        self, file_name: str, text: str
    ) -> tuple[Session, list[Any]]:
        """
        Evaluate arbitrary code in the session of a file.

        The caller owns the returned session and must close it.

        Raises:
            NotConnected: If there is no nREPL connection. Nothing is sent.
        """
        self._require_connection()
        session = await self.resolve_session(file_name)
        self._log(f"Evaluating text of {file_name} in session {session.id}")
        responses = await self.transport.evaluate_file(text, file_name, session.id)
        return session, decode_responses(responses)

    async def reload_namespace(self, ctx: EvalContext) -> EvalOutcome:
        """
        Reload the namespace of a document with `(require 'ns :reload)`.

        Failures are rendered like any other evaluation error. A successful
        reload renders nothing; its session is closed directly.
        """
        ns = self.namespace_of(ctx.full_text)
        session, responses = await self.evaluate_text(ctx.file_name, reload_payload(ns))
        self._log(f"Reload of {ns} answered in session {session.id}")

        if responses and responses[0].is_exception:
            await self.interpreter.handle_error(
                Selection.empty(), False, responses[0].session or session.id
            )
            return EvalOutcome.ERROR

        last_session = responses[-1].session if responses else None
        self._log(f"Closing session {last_session or session.id}")
        await self.transport.close(last_session or session.id)
        return EvalOutcome.SUCCESS
