"""
cljeval.nrepl - nREPL data model and collaborator interfaces

Modules:
- messages.py: Session, ResponseObject and stacktrace records
- collaborators.py: abstract transport and connection manager
"""

from cljeval.nrepl.collaborators import ConnectionManager, NReplTransport
from cljeval.nrepl.messages import (
    TOOLING_FLAG,
    ResponseObject,
    Session,
    SessionKind,
    StacktraceFrame,
    StacktraceInfo,
    decode_responses,
)

__all__ = [
    # Messages
    "Session",
    "SessionKind",
    "ResponseObject",
    "StacktraceFrame",
    "StacktraceInfo",
    "TOOLING_FLAG",
    "decode_responses",
    # Collaborators
    "NReplTransport",
    "ConnectionManager",
]
