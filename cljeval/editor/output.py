"""
cljeval.editor.output - Output channel and toast notifications

The output channel is the one piece of state shared by all evaluation
cycles. It is append-only and order sensitive, so implementations take a
lock around each write, and a cycle hands its whole rendering over as a
single block via write_block() so that blocks of concurrent cycles never
interleave.
"""

import sys
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class OutputChannel(ABC):
    """A persistent, append-only text pane."""

    @abstractmethod
    def write_block(self, chunks: Iterable[str]) -> None:
        """Append several chunks atomically, in order."""

    @abstractmethod
    def show(self) -> None:
        """Make the channel visible. Idempotent."""

    def append(self, text: str) -> None:
        self.write_block([text])

    def append_line(self, text: str) -> None:
        self.write_block([text + "\n"])


class StreamOutputChannel(OutputChannel):
    """Output channel writing to a text stream (stdout by default)."""

    def __init__(self, stream=None, name: str = "Clojure"):
        self.stream = stream or sys.stdout
        self.name = name
        self.visible = False
        self._lock = threading.Lock()

    def write_block(self, chunks: Iterable[str]) -> None:
        with self._lock:
            for chunk in chunks:
                self.stream.write(chunk)
            self.stream.flush()

    def show(self) -> None:
        self.visible = True


class MemoryOutputChannel(OutputChannel):
    """Output channel that keeps everything in memory."""

    def __init__(self):
        self._chunks: list[str] = []
        self._lock = threading.Lock()
        self.show_count = 0

    def write_block(self, chunks: Iterable[str]) -> None:
        with self._lock:
            self._chunks.extend(chunks)

    def show(self) -> None:
        self.show_count += 1

    @property
    def text(self) -> str:
        with self._lock:
            return "".join(self._chunks)

    def lines(self) -> list[str]:
        """The channel text split into lines, without a trailing empty line."""
        text = self.text
        if text.endswith("\n"):
            text = text[:-1]
        return text.split("\n") if text else []


class Severity(Enum):
    """Toast severity."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notifier(ABC):
    """Transient toast notifications."""

    @abstractmethod
    def notify(self, severity: Severity, message: str) -> None:
        """Show a toast."""

    def show_info(self, message: str) -> None:
        self.notify(Severity.INFO, message)

    def show_warning(self, message: str) -> None:
        self.notify(Severity.WARNING, message)

    def show_error(self, message: str) -> None:
        self.notify(Severity.ERROR, message)


class ConsoleNotifier(Notifier):
    """Prints toasts to stderr."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stderr

    def notify(self, severity: Severity, message: str) -> None:
        print(f"[{severity.value}] {message}", file=self.stream)
        self.stream.flush()


@dataclass
class MemoryNotifier(Notifier):
    """Records toasts instead of showing them."""

    messages: list[tuple[Severity, str]] = field(default_factory=list)

    def notify(self, severity: Severity, message: str) -> None:
        self.messages.append((severity, message))

    def of(self, severity: Severity) -> list[str]:
        return [msg for sev, msg in self.messages if sev == severity]

    def __len__(self) -> int:
        return len(self.messages)
