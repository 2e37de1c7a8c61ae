"""
Argotree faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse failure.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- ParseError: base type that carries message + options and knows how to render itself
  in a friendly, lowercased and actionable way (header, message, caret, hint).
- UnterminatedQuoteError / MissingValueError / UnexpectedTokenError: the taxonomy.
- trigger(): central entry point to surface a fault (respecting shell/deferred/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every message names the failing token by its ordinal
  position and the caret points at the exact source offset.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parser raises faults directly (the parse either succeeds whole or fails whole).
- Front-ends catch ParseError and call trigger(fault, shell=True, ...) to render it.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - grammar (1111x)
      • UNEXPECTED_TOKEN, MISSING_VALUE
    - quoting (1115x)
      • UNTERMINATED_QUOTE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- grammar errors (11xxx) ---
    UNEXPECTED_TOKEN            = 11111
    MISSING_VALUE               = 11114

    # --- quoting errors (11xxx) ---
    UNTERMINATED_QUOTE          = 11151

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    base of every parse failure.

    the message is the human sentence; options carry the structured context:
    - position: source offset of the failing token (int).
    - token: the offending argotree.tokens.Token.
    - expected: tuple of TokenKind that would have been accepted.
    - input: the full source text (used for the caret line).
    - title, code, hint: header and guidance copy.
    - rendering switches: shell, fancy, colorful, deferred, ratio.
    """
    __faultcode__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def position(self):
        return self.options.get("position")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def expected(self):
        return tuple(self.options.get("expected", ()))

    @property
    def input(self):
        return self.options.get("input")

    @property
    def code(self):
        return coalesce(self.options.get("code", Unset), type(self).__faultcode__)

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "source": "#E6E6F0",
            "caret": "bold #FF4DA6",
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "#00E5FF dim",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", __package__), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(str(self.options.get("title", "parse error")).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint")))

        renders = [message]
        if self.input is not None and self.position is not None:
            renders.append(text(self.input, styler("source")))
            renders.append(text(" " * self.position + "^", styler("caret")))
        if self.hint:
            renders.append(hint)
        if docs := self.options.get("docs"):
            renders.append(text(docs, styler("docs")))

        if fancy:
            width = console.width - 4
            try:
                width = int(width * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*renders), title=header, title_align="left", width=width)

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnterminatedQuoteError(ParseError):
    __faultcode__ = FaultCode.UNTERMINATED_QUOTE

class MissingValueError(ParseError):
    __faultcode__ = FaultCode.MISSING_VALUE

class UnexpectedTokenError(ParseError):
    __faultcode__ = FaultCode.UNEXPECTED_TOKEN


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich stderr console; otherwise, the
      fault is raised.

    typical options
    - shell, fancy, colorful, deferred, ratio, and any context override
      (title, hint, ...).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParseError",
    "UnterminatedQuoteError",
    "MissingValueError",
    "UnexpectedTokenError",
    "trigger",
    "getdoc",
)
