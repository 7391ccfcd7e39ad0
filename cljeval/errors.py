"""
cljeval.errors - Exception hierarchy for the evaluation client

Evaluation exceptions reported by the server (the `ex` field of a response)
are expected outcomes and never surface as Python exceptions; they are
rendered as diagnostics. The exceptions below cover the connectivity and
transport failures that propagate to the caller.
"""


class CljEvalError(Exception):
    """Base class for evaluation client errors."""


class NotConnected(CljEvalError):
    """Raised when an evaluation is requested without a live nREPL connection."""

    def __init__(self, message: str = "Not connected to nREPL"):
        super().__init__(message)
        self.message = message


class SessionResolutionFailed(CljEvalError):
    """Raised when no session can be obtained for a file."""

    def __init__(self, file_name: str, reason: str = ""):
        message = f"Could not resolve an nREPL session for {file_name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.file_name = file_name
        self.reason = reason


class StacktraceFetchFailed(CljEvalError):
    """Raised when the stacktrace of a failed evaluation cannot be fetched.

    The session of the failed cycle is left open when this is raised.
    """

    def __init__(self, session_id: str, reason: str = ""):
        message = f"Could not fetch stacktrace for session {session_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.session_id = session_id
        self.reason = reason


class TransportFault(CljEvalError):
    """A transport call failed. Raised by transport adapters, never caught here."""

    def __init__(self, op: str, message: str):
        super().__init__(f"{op}: {message}")
        self.op = op
        self.message = message
