"""
cljeval.nrepl.messages - nREPL session and response data model

The transport hands back raw nREPL messages as dicts with hyphenated keys.
This module decodes them into small dataclasses:

- SessionKind / Session: the session a cycle evaluates in
- ResponseObject: one message of an evaluation round-trip
- StacktraceFrame / StacktraceInfo: the result of the `stacktrace` op

Every field of ResponseObject is optional and a single message may carry
several of them at once (e.g. `value` and `session`), so it is a plain
record rather than a family of message classes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

TOOLING_FLAG = "tooling"


class SessionKind(Enum):
    """Runtime a session evaluates in."""

    CLOJURE = "Clojure"
    CLOJURESCRIPT = "ClojureScript"

    @classmethod
    def parse(cls, value: Any) -> "SessionKind":
        if isinstance(value, SessionKind):
            return value
        for kind in cls:
            if kind.value.lower() == str(value).lower():
                return kind
        raise ValueError(f"Unknown session kind: {value!r}")


@dataclass(frozen=True)
class Session:
    """An nREPL session issued by the connection manager for one cycle."""

    id: str
    kind: SessionKind = SessionKind.CLOJURE

    @property
    def is_clojurescript(self) -> bool:
        return self.kind == SessionKind.CLOJURESCRIPT


@dataclass(frozen=True)
class ResponseObject:
    """One message received for an evaluation request."""

    out: Optional[str] = None
    err: Optional[str] = None
    value: Optional[str] = None
    ex: Optional[str] = None
    root_ex: Optional[str] = None
    session: Optional[str] = None
    ns: Optional[str] = None
    id: Optional[str] = None
    status: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResponseObject":
        """Decode a raw nREPL message."""
        status = data.get("status") or ()
        if isinstance(status, str):
            status = (status,)
        return cls(
            out=data.get("out"),
            err=data.get("err"),
            value=data.get("value"),
            ex=data.get("ex"),
            root_ex=data.get("root-ex"),
            session=data.get("session"),
            ns=data.get("ns"),
            id=data.get("id"),
            status=tuple(status),
        )

    @property
    def is_exception(self) -> bool:
        return bool(self.ex)

    @property
    def is_done(self) -> bool:
        return "done" in self.status


def decode_responses(messages: list[Any]) -> list[ResponseObject]:
    """Decode a response sequence, keeping arrival order."""
    return [
        msg if isinstance(msg, ResponseObject) else ResponseObject.from_dict(msg)
        for msg in messages
    ]


@dataclass(frozen=True)
class StacktraceFrame:
    """One call site of a reported exception."""

    class_name: str = ""
    method: str = ""
    file: str = ""
    line: Optional[int] = None
    flags: frozenset[str] = frozenset()

    # Present on Clojure frames only
    name: Optional[str] = None
    ns: Optional[str] = None
    fn: Optional[str] = None
    var: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StacktraceFrame":
        return cls(
            class_name=data.get("class", ""),
            method=data.get("method", ""),
            file=data.get("file", ""),
            line=data.get("line"),
            flags=frozenset(data.get("flags") or ()),
            name=data.get("name"),
            ns=data.get("ns"),
            fn=data.get("fn"),
            var=data.get("var"),
            type=data.get("type"),
        )

    @property
    def is_tooling(self) -> bool:
        return TOOLING_FLAG in self.flags

    def format(self) -> str:
        return f"    {self.class_name}.{self.method} ({self.file}:{self.line})"


@dataclass(frozen=True)
class StacktraceInfo:
    """Result of the `stacktrace` op for the last exception of a session.

    `line` and `column` are 1-based and relative to the top of the
    evaluated payload.
    """

    class_name: str = ""
    message: str = ""
    file: str = ""
    line: Optional[int] = None
    column: Optional[int] = None
    frames: tuple[StacktraceFrame, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StacktraceInfo":
        return cls(
            class_name=data.get("class", ""),
            message=data.get("message", ""),
            file=data.get("file", ""),
            line=data.get("line"),
            column=data.get("column"),
            frames=tuple(
                StacktraceFrame.from_dict(frame)
                for frame in data.get("stacktrace") or ()
            ),
        )

    def tooling_frames(self) -> list[StacktraceFrame]:
        """Frames carrying the tooling flag, in reported order."""
        return [frame for frame in self.frames if frame.is_tooling]
