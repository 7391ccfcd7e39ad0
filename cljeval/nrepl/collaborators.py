"""
cljeval.nrepl.collaborators - Interfaces of the connection and transport layers

The evaluation client does not speak the nREPL wire format and does not
manage connections. It drives these two interfaces, which editor hosts
implement on top of their own nREPL client.
"""

from abc import ABC, abstractmethod
from typing import Any

from cljeval.nrepl.messages import Session


class NReplTransport(ABC):
    """Sends requests over an established nREPL connection.

    Every request coroutine resolves to the full list of messages the server
    sent for it (up to and including the one with a `done` status). Messages
    may be raw dicts or ResponseObject instances.
    """

    @abstractmethod
    async def evaluate(self, text: str, session_id: str) -> list[Any]:
        """Send an `eval` op with raw code."""

    @abstractmethod
    async def evaluate_file(
        self, text: str, file_path: str, session_id: str
    ) -> list[Any]:
        """Send a `load-file` op so stacktraces carry the real file name."""

    @abstractmethod
    async def stacktrace(self, session_id: str) -> list[Any]:
        """Send a `stacktrace` op for the last exception of a session."""

    @abstractmethod
    async def close(self, session_id: str) -> None:
        """Close a session."""


class ConnectionManager(ABC):
    """Owns the nREPL connection and issues sessions."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Return True when a live connection exists."""

    @abstractmethod
    async def session_for_file(self, file_name: str) -> Session:
        """Return the session (Clojure or ClojureScript) matching a file."""
