"""
argotree.tokens
~~~~~~~~~~~~~~~

Lexical layer: turn a raw command-line string into classified tokens.

What this module provides
- TokenKind: the closed set of token classes the grammar knows about.
- Token: an immutable (kind, text, start) record covering an exact source span.
- tokenize(text): a lazy, one-shot generator of tokens ending in one END token.

Classification (first match wins at each offset)
- '"'              → QUOTED, up to the closing quote (\\" does not close it).
- '/' + identifier → WINDOWS   e.g. /Switch
- '--' + identifier→ LONG      e.g. --Switch
- '-' + identifier → SHORT     e.g. -sUtZ (opaque; stacked flags are not split)
- ':' / '='        → COLON / EQUALS
- whitespace       → dropped (it only separates words)
- anything else    → BAREWORD, a run up to whitespace, ':', '=' or '"'

Notes
- An identifier is a letter or digit followed by letters, digits, '_' or '-'.
- A prefix character that is not followed by an identifier ('-', '--', '/') starts
  a plain bare word instead, and prefix characters inside a run are ordinary text.
- The tokenizer never fails: an unclosed quote yields an unterminated QUOTED token
  spanning the rest of the input, and the parser decides what to do with it.
"""
import re
from collections import namedtuple
from enum import Enum

from rich.text import Text


class TokenKind(Enum):
    """
    token classes produced by tokenize().

    each member's value is the human label used in fault messages
    ("expected a quoted string or a bare word", ...).
    """
    WHITESPACE = "whitespace"
    QUOTED = "quoted string"
    BAREWORD = "bare word"
    COLON = "':'"
    EQUALS = "'='"
    WINDOWS = "windows switch"
    LONG = "long switch"
    SHORT = "short switch"
    END = "end of input"

    @property
    def label(self):
        return self.value

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


class Token(namedtuple("Token", ("kind", "text", "start"))):
    """
    Immutable token covering source[start:start + length].

    The text is kept verbatim: quoted strings carry their surrounding quotes and
    any backslash escapes, prefixed words carry their prefix.
    """
    __slots__ = ()

    @property
    def length(self):
        return len(self.text)

    @property
    def stop(self):
        return self.start + len(self.text)

    @property
    def terminated(self):
        """
        False only for a quoted string that ran into the end of input unclosed.
        """
        if self.kind is not TokenKind.QUOTED:
            return True
        return _QUOTED.fullmatch(self.text) is not None

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r}, {self.start})"

    def __rich__(self):
        return Text.assemble(
            (self.kind.name, "bold cyan"),
            " ",
            (repr(self.text), "green"),
            (f" @{self.start}", "dim"),
        )


# The backtracking here lets a trailing \" close the string when nothing else would.
_QUOTED = re.compile(r'"(?:\\"|[^"])*"')
_WHITESPACE = re.compile(r"\s+")
_BAREWORD = re.compile(r'[^\s:="]+')

# Order matters: '--' has to be tried before '-'.
_PREFIXED = (
    (TokenKind.WINDOWS, re.compile(r"/[^\W_][\w-]*")),
    (TokenKind.LONG, re.compile(r"--[^\W_][\w-]*")),
    (TokenKind.SHORT, re.compile(r"-[^\W_][\w-]*")),
)

_SEPARATORS = {
    ":": TokenKind.COLON,
    "=": TokenKind.EQUALS,
}


def _scan(text):
    index = 0
    length = len(text)

    while index < length:
        char = text[index]

        if char == '"':
            if match := _QUOTED.match(text, index):
                yield Token(TokenKind.QUOTED, match.group(), index)
                index = match.end()
            else:
                # Unclosed: swallow the rest, the parser reports it.
                yield Token(TokenKind.QUOTED, text[index:], index)
                index = length
            continue

        if match := _WHITESPACE.match(text, index):
            index = match.end()
            continue

        if char in _SEPARATORS:
            yield Token(_SEPARATORS[char], char, index)
            index += 1
            continue

        for kind, pattern in _PREFIXED:
            if match := pattern.match(text, index):
                yield Token(kind, match.group(), index)
                index = match.end()
                break
        else:
            match = _BAREWORD.match(text, index)
            yield Token(TokenKind.BAREWORD, match.group(), index)
            index = match.end()

    yield Token(TokenKind.END, "", length)


def tokenize(text, /):
    """
    Split a raw command line into tokens.

    Parameters
    - text: str
      Everything after the program name, as one undivided string (may be empty).

    Returns
    - Iterator[Token]: lazy and consumable once; always ends with a single END token
      whose start is len(text).

    Raises
    - TypeError: when text is not a string (checked eagerly, before iteration).
    """
    if not isinstance(text, str):
        raise TypeError("tokenize() argument must be a string")
    return _scan(text)


__all__ = (
    "TokenKind",
    "Token",
    "tokenize",
)
