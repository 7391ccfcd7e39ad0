"""
cljeval.eval.interpreter - Rendering of evaluation results

The ResponseInterpreter receives the response sequence of one evaluation
cycle and finishes the cycle:

- success: output, errors and values go to the output channel in arrival
  order (or a toast, for silent evaluations with alerts enabled)
- error: the stacktrace of the session is fetched, its position is mapped
  back to document coordinates and the diagnostic is rendered

Either way the cycle's session is closed exactly once, as the last step.
"""

import sys
from dataclasses import dataclass
from typing import Any, Optional

from cljeval.editor.document import Selection
from cljeval.editor.output import Notifier, OutputChannel
from cljeval.errors import StacktraceFetchFailed
from cljeval.nrepl.collaborators import NReplTransport
from cljeval.nrepl.messages import ResponseObject, StacktraceInfo, decode_responses

COMPILATION_ERROR_MESSAGE = "Compilation error"
COMPILATION_SUCCESS_MESSAGE = "Successfully compiled"


def rebase_position(
    info: StacktraceInfo, selection: Optional[Selection] = None
) -> tuple[int, int]:
    """
    Map the 1-based position of a stacktrace onto 0-based document coordinates.

    A selection is evaluated behind a synthetic `(ns ...)` line, so the
    reported position is shifted by the start of the selection, the earlier
    of its two ends. Only the first line of a multi-line selection has a
    column offset; the column shift is applied regardless.
    """
    line = info.line - 1 if info.line is not None else 0
    column = info.column - 1 if info.column is not None else 0
    if selection is not None and not selection.is_empty:
        begin_line, begin_char = selection.begin
        line += begin_line
        column += begin_char
    return line, column


def format_stacktrace(
    info: StacktraceInfo, selection: Optional[Selection] = None
) -> list[str]:
    """Lines of an exception diagnostic, without line terminators."""
    line, column = rebase_position(info, selection)
    lines = [
        f"{info.class_name} {info.message}",
        f" at {info.file}:{line}:{column}",
    ]
    for frame in info.tooling_frames():
        lines.append(frame.format())
    return lines


def render_responses(responses: list[ResponseObject]) -> list[str]:
    """Chunks for the output channel, in arrival order."""
    chunks = []
    for resp in responses:
        if resp.out:
            chunks.append(resp.out)
        if resp.err:
            chunks.append(resp.err)
        if resp.value is not None:
            chunks.append(f"=> {resp.value}\n")
    return chunks


@dataclass
class ResponseInterpreter:
    """
    Finishes an evaluation cycle from its response sequence.

    `config` is any object with an effective_alert_on_eval() method.
    """

    transport: NReplTransport
    output: OutputChannel
    notifier: Notifier
    config: Any = None

    # Logging
    log_file: Any = None

    def log(self, message: str) -> None:
        """Log a message for debugging."""
        if self.log_file:
            self.log_file.write(f"{message}\n")
            self.log_file.flush()
        print(f"[cljeval] {message}", file=sys.stderr)
        sys.stderr.flush()

    def _alert_on_eval(self) -> bool:
        return bool(self.config is not None and self.config.effective_alert_on_eval())

    async def _close(self, session_id: Optional[str]) -> None:
        if not session_id:
            self.log("No session to close")
            return
        self.log(f"Closing session {session_id}")
        await self.transport.close(session_id)

    async def fetch_stacktrace(self, session_id: str) -> StacktraceInfo:
        """
        Fetch the stacktrace of the last exception in a session.

        Raises:
            StacktraceFetchFailed: If the request fails, returns nothing or
                returns something that is not a stacktrace.
        """
        try:
            results = await self.transport.stacktrace(session_id)
        except Exception as e:
            raise StacktraceFetchFailed(session_id, str(e)) from e
        if not results:
            raise StacktraceFetchFailed(session_id, "empty response")
        first = results[0]
        if isinstance(first, StacktraceInfo):
            return first
        try:
            return StacktraceInfo.from_dict(first)
        except (AttributeError, TypeError) as e:
            raise StacktraceFetchFailed(session_id, f"undecodable result: {e}") from e

    async def handle_error(
        self,
        selection: Optional[Selection],
        show_results_always: bool,
        session_id: str,
    ) -> None:
        """
        Render the diagnostic of a failed evaluation and close its session.

        The session is still needed for the stacktrace request, so it is
        closed only once that request has completed. If the request fails
        the session is left open and StacktraceFetchFailed propagates.
        """
        if not show_results_always and self._alert_on_eval():
            self.notifier.show_error(COMPILATION_ERROR_MESSAGE)

        info = await self.fetch_stacktrace(session_id)
        self.log(f"Evaluation failed: {info.class_name} {info.message}")

        self.output.write_block(
            line + "\n" for line in format_stacktrace(info, selection)
        )
        self.output.show()

        await self._close(session_id)

    async def handle_success(
        self,
        show_results_always: bool,
        responses: list[Any],
        session_id: Optional[str] = None,
    ) -> None:
        """
        Render the responses of a successful evaluation and close its session.

        The session closed is the one named by the last response; session_id
        is used when the sequence carries none.
        """
        responses = decode_responses(responses)

        if not show_results_always and self._alert_on_eval():
            self.notifier.show_info(COMPILATION_SUCCESS_MESSAGE)
        else:
            chunks = render_responses(responses)
            if chunks:
                self.output.write_block(chunks)
            self.output.show()

        last_session = responses[-1].session if responses else None
        await self._close(last_session or session_id)
