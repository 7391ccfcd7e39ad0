"""
cljeval.editor.document - Editor state captured for one evaluation

An EvalContext is built fresh by the editor command for every evaluation
and is never mutated afterwards.
"""

from dataclasses import dataclass
from typing import Optional

from cljeval.nrepl.messages import SessionKind

CLOJURE_EXTENSIONS = (".clj", ".cljc", ".cljs", ".cljx")


@dataclass(frozen=True)
class Selection:
    """A 0-based line/character range in a document."""

    start_line: int = 0
    start_char: int = 0
    end_line: int = 0
    end_char: int = 0

    @property
    def is_empty(self) -> bool:
        return self.start_line == self.end_line and self.start_char == self.end_char

    @property
    def begin(self) -> tuple[int, int]:
        """The earlier end as (line, character), whichever way it was made."""
        return min((self.start_line, self.start_char), (self.end_line, self.end_char))

    @property
    def end(self) -> tuple[int, int]:
        return max((self.start_line, self.start_char), (self.end_line, self.end_char))

    @classmethod
    def empty(cls) -> "Selection":
        return cls(0, 0, 0, 0)


def position_to_offset(text: str, line: int, character: int) -> int:
    """Convert a (line, character) position to an offset into text.

    Positions past the end of a line or of the text are clamped.
    """
    offset = 0
    lines = text.split("\n")
    for i, line_text in enumerate(lines):
        if i == line:
            return offset + min(character, len(line_text))
        offset += len(line_text) + 1
    return len(text)


@dataclass(frozen=True)
class EvalContext:
    """Document text, selection and file of an evaluation request."""

    full_text: str
    file_name: str
    selection: Optional[Selection] = None
    session_kind: SessionKind = SessionKind.CLOJURE

    @property
    def has_selection(self) -> bool:
        return self.selection is not None and not self.selection.is_empty

    @property
    def selected_text(self) -> str:
        """The selected substring, or an empty string without a selection."""
        if not self.has_selection:
            return ""
        start = position_to_offset(self.full_text, *self.selection.begin)
        end = position_to_offset(self.full_text, *self.selection.end)
        return self.full_text[start:end]

    @property
    def is_clojure_file(self) -> bool:
        return self.file_name.lower().endswith(CLOJURE_EXTENSIONS)
