"""
cljeval.parser - Namespace extraction from Clojure source

Evaluating a selection sends the selected forms on their own, so the
client prefixes them with an `(ns ...)` line naming the namespace of the
document. This module finds that name without reading the whole file into
forms: a small tokenizer splits the source and a scan over the top-level
forms stops at the first `ns` declaration.

    (ns ^{:doc "Helpers"} my.app.util
      (:require [clojure.string :as str]))   => "my.app.util"
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_NAMESPACE = "user"

OPENERS = {"(": ")", "[": "]", "{": "}", "#{": "}", "#(": ")"}
CLOSERS = set(")]}")
NS_SYMBOLS = {"ns", "clojure.core/ns"}
PREFIXES = ("^", "#^", "#_")


@dataclass
class Token:
    """A token with its source location."""

    value: str
    line: int  # 1-based line number
    col: int  # 0-based column offset
    is_string: bool = False

    def __repr__(self):
        return f"Token({self.value!r}, {self.line}:{self.col})"


def tokenize(src: str) -> list[Token]:
    """
    Split Clojure source into tokens.

    Whitespace, commas and `;` comments are dropped. Strings become a
    single token. Everything that is not a delimiter or a reader prefix is
    returned as an atom (symbols, keywords, numbers, characters).
    """
    tokens = []
    i = 0
    n = len(src)
    line = 1
    line_start = 0

    def current_col():
        return i - line_start

    while i < n:
        c = src[i]
        if c == "\n":
            i += 1
            line += 1
            line_start = i
            continue
        if c in " \t\r,":
            i += 1
            continue
        if c == ";":
            while i < n and src[i] != "\n":
                i += 1
            continue

        tok_line = line
        tok_col = current_col()

        if c in "()[]{}":
            tokens.append(Token(c, tok_line, tok_col))
            i += 1
            continue
        if c == "#" and i + 1 < n and src[i + 1] in "{(_^":
            tokens.append(Token(src[i : i + 2], tok_line, tok_col))
            i += 2
            continue
        if c in "'`^@":
            tokens.append(Token(c, tok_line, tok_col))
            i += 1
            continue
        if c == "~":
            if i + 1 < n and src[i + 1] == "@":
                tokens.append(Token("~@", tok_line, tok_col))
                i += 2
            else:
                tokens.append(Token("~", tok_line, tok_col))
                i += 1
            continue
        if c == '"' or (c == "#" and i + 1 < n and src[i + 1] == '"'):
            # Strings and regex literals; escapes are kept verbatim
            i += 1 if c == '"' else 2
            buf = []
            while i < n and src[i] != '"':
                if src[i] == "\\" and i + 1 < n:
                    buf.append(src[i : i + 2])
                    i += 2
                    continue
                if src[i] == "\n":
                    line += 1
                    line_start = i + 1
                buf.append(src[i])
                i += 1
            i += 1  # closing quote, or past EOF for an unterminated string
            tokens.append(Token("".join(buf), tok_line, tok_col, is_string=True))
            continue
        if c == "\\" and i + 1 < n:
            # Character literal: \( must not open a form
            start = i
            i += 2
            while i < n and src[i].isalnum():
                i += 1
            tokens.append(Token(src[start:i], tok_line, tok_col))
            continue

        start = i
        while i < n and src[i] not in " \t\r\n,;()[]{}\"":
            i += 1
        tokens.append(Token(src[start:i], tok_line, tok_col))

    return tokens


def _is_atom(tok: Token) -> bool:
    return not tok.is_string


def _skip_form(tokens: list[Token], i: int) -> int:
    """Return the index just past the form starting at tokens[i]."""
    n = len(tokens)
    if i >= n:
        return n
    tok = tokens[i]
    if tok.is_string:
        return i + 1
    if tok.value in ("'", "`", "@", "~", "~@", "#_"):
        return _skip_form(tokens, i + 1)
    if tok.value in ("^", "#^"):
        # Metadata applies to the form that follows it
        return _skip_form(tokens, _skip_form(tokens, i + 1))
    if tok.value in OPENERS:
        depth = 1
        i += 1
        while i < n and depth:
            value = tokens[i].value
            if not tokens[i].is_string:
                if value in OPENERS:
                    depth += 1
                elif value in CLOSERS:
                    depth -= 1
            i += 1
        return i
    return i + 1


def find_namespace(src: str) -> Optional[str]:
    """
    Return the name declared by the first top-level ns form, or None.
    """
    tokens = tokenize(src)
    i = 0
    n = len(tokens)
    while i < n:
        tok = tokens[i]
        if tok.value == "(" and _is_atom(tok):
            head = i + 1
            if head < n and _is_atom(tokens[head]) and tokens[head].value in NS_SYMBOLS:
                j = head + 1
                # Metadata and discarded forms may precede the name
                while j < n and _is_atom(tokens[j]) and tokens[j].value in PREFIXES:
                    if tokens[j].value == "#_":
                        j = _skip_form(tokens, j)
                    else:
                        j = _skip_form(tokens, j + 1)
                if j < n and _is_atom(tokens[j]) and tokens[j].value not in OPENERS:
                    name = tokens[j].value
                    if name not in CLOSERS:
                        return name
                return None
        i = _skip_form(tokens, i)
    return None


def get_namespace(src: str) -> str:
    """Namespace of a document, defaulting to `user` like the nREPL server."""
    return find_namespace(src) or DEFAULT_NAMESPACE
