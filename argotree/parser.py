"""
argotree.parser
~~~~~~~~~~~~~~~

Recursive descent parser for command lines.

Grammar
    commandLine      := (defaultParameter | parameter)* END
    defaultParameter := BAREWORD | QUOTED
    parameter        := windowsParam | longParam | shortFlags
    windowsParam     := WINDOWS (':' value)?
    longParam        := LONG ('=' value)?
    shortFlags       := SHORT
    value            := BAREWORD | QUOTED

The next token's kind alone selects every production (LL(1)); the tokenizer has
already told the three switch prefixes apart. Tokens are materialized into a list
and walked with an integer cursor, all of it local to one Parser instance, so
separate parses never share state.

Failure policy
- No recovery and no partial tree: the first problem raises one ParseError
  subclass carrying the offending token, its source offset and the expected kinds.
"""
from .faults import UnterminatedQuoteError, MissingValueError, UnexpectedTokenError, getdoc
from .nodes import CommandLine, DefaultParameter, Parameter, Value, Terminal
from .tokens import TokenKind, tokenize
from .utils import ordinal

RULE_NAMES = (
    "commandLine",
    "defaultParameter",
    "parameter",
    "value",
)

_SWITCHES = (TokenKind.WINDOWS, TokenKind.LONG, TokenKind.SHORT)
_VALUES = (TokenKind.BAREWORD, TokenKind.QUOTED)

# Separator accepted right after each switch style (short flag groups take none).
_SEPARATORS = {
    TokenKind.WINDOWS: TokenKind.COLON,
    TokenKind.LONG: TokenKind.EQUALS,
}


class Parser:
    """
    One-shot parser over a single input string.

    Usage
        tree = Parser('/Name:123 --flag "a b"').parse()

    Attributes
    - input: the source text.
    - tokens: the materialized token sequence (END included).

    parse() may be called once; build a new Parser for another run (or use parse()).
    """

    def __init__(self, text, /):
        if not isinstance(text, str):
            raise TypeError("Parser() argument must be a string")
        self._input = text
        self._tokens = tuple(tokenize(text))
        self._index = 0
        self._parsed = False

    @property
    def input(self):
        return self._input

    @property
    def tokens(self):
        return self._tokens

    def parse(self):
        """
        Run the commandLine rule over the whole input.

        Returns
        - CommandLine: the root node (possibly without children).

        Raises
        - UnterminatedQuoteError, MissingValueError, UnexpectedTokenError.
        - RuntimeError: when called a second time on the same parser.
        """
        if self._parsed:
            raise RuntimeError("Parser.parse() can only be called once per parser")
        self._parsed = True
        return self._command_line()

    def _peek(self):
        return self._tokens[self._index]

    def _advance(self):
        token = self._tokens[self._index]
        # END is sticky: the cursor never moves past it.
        if token.kind is not TokenKind.END:
            self._index += 1
        return token

    def _where(self, token):
        if token.kind is TokenKind.END:
            return "at the end of input"
        return "at %s position" % ordinal(self._tokens.index(token) + 1)

    def _fail(self, fault, token, expected, message, /, **options):
        raise fault(
            message,
            position=token.start,
            token=token,
            expected=expected,
            input=self._input,
            docs=getdoc(fault.__faultcode__),
            **options,
        )

    def _terminal(self):
        token = self._advance()
        if not token.terminated:
            self._fail(
                UnterminatedQuoteError,
                token,
                (TokenKind.QUOTED,),
                "quoted string %s is never closed" % self._where(token),
                title="unterminated quote",
                hint='close it with a matching " (write \\" for a literal quote inside)',
            )
        return Terminal(token)

    def _command_line(self):
        children = []
        while (token := self._peek()).kind is not TokenKind.END:
            match token.kind:
                case TokenKind.WINDOWS | TokenKind.LONG | TokenKind.SHORT:
                    children.append(self._parameter())
                case TokenKind.BAREWORD | TokenKind.QUOTED:
                    children.append(self._default_parameter())
                case _:
                    self._fail(
                        UnexpectedTokenError,
                        token,
                        _VALUES + _SWITCHES + (TokenKind.END,),
                        "unexpected %s %s" % (token.kind.label, self._where(token)),
                        title="unexpected token",
                        hint="attach values as /name:value or --name=value, or quote a literal %r" % token.text,
                    )
        return CommandLine(children)

    def _default_parameter(self):
        return DefaultParameter(self._terminal())

    def _parameter(self):
        name = self._terminal()
        separator = _SEPARATORS.get(name.token.kind)

        # A missing or foreign separator leaves the switch bare and the token in place.
        if separator is None or self._peek().kind is not separator:
            return Parameter(name)

        separator = Terminal(self._advance())
        return Parameter(name, separator, self._value(name, separator))

    def _value(self, name, separator):
        token = self._peek()
        if token.kind not in _VALUES:
            found = "" if token.kind is TokenKind.END else " (found a %s)" % token.kind.label
            self._fail(
                MissingValueError,
                token,
                _VALUES,
                "missing value for %r after %r %s%s" % (name.text, separator.text, self._where(token), found),
                title="missing value",
                hint="put a bare word or a quoted string right after %r" % (name.text + separator.text),
            )
        return Value(self._terminal())


def parse(text, /):
    """
    Parse a raw command line into a CommandLine tree.

    Parameters
    - text: str
      Everything after the program name, as one undivided string.

    Returns
    - CommandLine

    Raises
    - TypeError: when text is not a string.
    - ParseError subclasses: see Parser.parse().
    """
    return Parser(text).parse()


__all__ = (
    "RULE_NAMES",
    "Parser",
    "parse",
)
