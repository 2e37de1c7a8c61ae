"""
argotree.nodes
~~~~~~~~~~~~~~

Parse tree produced by argotree.parser.

The tree is a closed tagged variant: NodeKind names every case and each case is a
sealed subclass of Node. Consumers can dispatch either on ``node.kind`` or with a
``match`` statement, every case declaring its own ``__match_args__``:

    match node:
        case Parameter(name, None, None):
            ...  # bare switch
        case Parameter(name, separator, Value(terminal)):
            ...  # valued switch
        case DefaultParameter(terminal):
            ...

Shapes (fixed by the grammar rule that produced the node)
- CommandLine       → (DefaultParameter | Parameter)*           rule "commandLine"
- DefaultParameter  → Terminal                                  rule "defaultParameter"
- Parameter         → Terminal [Terminal Value]                 rule "parameter"
- Value             → Terminal                                  rule "value"
- Terminal          → leaf holding one token's text verbatim

Nodes are immutable and validate their shape on construction, so a tree that
exists is a tree that satisfies the grammar.
"""
import functools
import operator
import re
from enum import Enum

from rich.text import Text
from rich.tree import Tree

from .tokens import Token, TokenKind
from .utils import Unset, rename


class NodeKind(Enum):
    """
    tags of the parse tree variant; values are the grammar rule names.
    """
    COMMAND_LINE = "commandLine"
    DEFAULT_PARAMETER = "defaultParameter"
    PARAMETER = "parameter"
    VALUE = "value"
    TERMINAL = "terminal"

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


class NodeType(type):
    """
    Metaclass for parse tree nodes.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens).
    - Provide stable __repr__/__rich_repr__ from the names listed in __introspectable__.
    - Seal concrete cases (final=True) so the variant stays closed.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise representation, e.g. parameter(name=terminal(text='/Switch'), ...).
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("final", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


_VALUE_KINDS = frozenset({TokenKind.BAREWORD, TokenKind.QUOTED})

# Which separator each switch style accepts; None means the style never takes a value.
_SEPARATOR_OF = {
    TokenKind.WINDOWS: TokenKind.COLON,
    TokenKind.LONG: TokenKind.EQUALS,
    TokenKind.SHORT: None,
}

_STYLES = {
    TokenKind.WINDOWS: "windows",
    TokenKind.LONG: "long",
    TokenKind.SHORT: "short",
}


def _terminal(object, kinds, what):
    if not isinstance(object, Terminal):
        raise TypeError(f"{what} must be a terminal node")
    if object.token.kind not in kinds:
        raise ValueError(f"{what} must hold a {" or ".join(sorted(kind.label for kind in kinds))}, "
                         f"not a {object.token.kind.label}")
    return object


class Node(metaclass=NodeType):
    """
    Base of every parse tree node.

    Common surface
    - kind: NodeKind tag of the concrete case.
    - rule: grammar rule name, or None for terminals.
    - children: tuple of child nodes in source order.
    - text: concatenated text of every leaf (no separators), like a parse tree getText().
    - terminals(): leaves left to right.

    Equality is structural: same case, same children (terminals compare their tokens).
    """
    __slots__ = ("_children",)
    __kind__ = Unset

    def __new__(cls, *unused, **options):
        if cls.__kind__ is Unset:
            raise TypeError(f"cannot instantiate abstract node type {cls.__name__!r}")
        return super().__new__(cls)

    def _seal(self, **fields):
        # The only place slots are written; __setattr__ below refuses everything else.
        for name, value in fields.items():
            object.__setattr__(self, name, value)
        return self

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__typename__} node is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__typename__} node is immutable")

    @property
    def kind(self):
        return type(self).__kind__

    @property
    def rule(self):
        return None if self.kind is NodeKind.TERMINAL else self.kind.value

    @property
    def children(self):
        return self._children

    def __iter__(self):
        return iter(self._children)

    def terminals(self):
        for child in self._children:
            yield from child.terminals()

    @property
    def text(self):
        return "".join(terminal.text for terminal in self.terminals())

    def __key__(self):
        return self._children

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return type(self) is type(other) and self.__key__() == other.__key__()

    def __hash__(self):
        return hash((type(self), self.__key__()))

    def __label__(self):
        return Text(self.rule, style="bold magenta")

    def __rich__(self):
        """
        Render the subtree as a rich Tree (rule names for inner nodes, quoted text for leaves).
        """
        def grow(branch, node):
            for child in node.children:
                grow(branch.add(child.__label__()), child)
            return branch
        return grow(Tree(self.__label__()), self)


class Terminal(Node, final=True):
    """
    Leaf holding the literal text of one token, quotes and escapes included.
    """
    __slots__ = ("_token",)
    __kind__ = NodeKind.TERMINAL
    __introspectable__ = ("text",)
    __match_args__ = ("text",)

    def __new__(cls, token, /):
        if not isinstance(token, Token):
            raise TypeError("Terminal() argument must be a token")
        if token.kind in (TokenKind.WHITESPACE, TokenKind.END):
            raise ValueError(f"Terminal() argument cannot be a {token.kind.label} token")
        return super().__new__(cls)._seal(_children=(), _token=token)

    @property
    def token(self):
        return self._token

    @property
    def text(self):
        return self._token.text

    def terminals(self):
        yield self

    def __key__(self):
        return self._token

    def __label__(self):
        return Text(repr(self._token.text), style="green")


class Value(Node, final=True):
    """
    Value attached to a parameter through a separator.
    """
    __slots__ = ()
    __kind__ = NodeKind.VALUE
    __introspectable__ = ("value",)
    __match_args__ = ("value",)

    def __new__(cls, terminal, /):
        terminal = _terminal(terminal, _VALUE_KINDS, "Value() argument")
        return super().__new__(cls)._seal(_children=(terminal,))

    @property
    def value(self):
        return self._children[0]


class DefaultParameter(Node, final=True):
    """
    Positional argument: a bare word or a quoted string with no switch prefix.
    """
    __slots__ = ()
    __kind__ = NodeKind.DEFAULT_PARAMETER
    __introspectable__ = ("value",)
    __match_args__ = ("value",)

    def __new__(cls, terminal, /):
        terminal = _terminal(terminal, _VALUE_KINDS, "DefaultParameter() argument")
        return super().__new__(cls)._seal(_children=(terminal,))

    @property
    def value(self):
        return self._children[0]


class Parameter(Node, final=True):
    """
    One switch occurrence: /Name[:value], --Name[=value] or -flags.

    The separator is present if and only if the value is; short flag groups never
    carry one.
    """
    __slots__ = ()
    __kind__ = NodeKind.PARAMETER
    __introspectable__ = ("name", "separator", "value")
    __match_args__ = ("name", "separator", "value")

    def __new__(cls, name, separator=None, value=None, /):
        name = _terminal(name, _SEPARATOR_OF.keys(), "Parameter() name")

        if (separator is None) != (value is None):
            raise ValueError("Parameter() separator and value must be given together")

        children = (name,)
        if separator is not None:
            expected = _SEPARATOR_OF[name.token.kind]
            if expected is None:
                raise ValueError(f"Parameter() {name.token.kind.label} cannot take a value")
            separator = _terminal(separator, {expected}, "Parameter() separator")
            if not isinstance(value, Value):
                raise TypeError("Parameter() value must be a value node")
            children += (separator, value)

        return super().__new__(cls)._seal(_children=children)

    @property
    def name(self):
        return self._children[0]

    @property
    def separator(self):
        return self._children[1] if len(self._children) == 3 else None

    @property
    def value(self):
        return self._children[2] if len(self._children) == 3 else None

    @property
    def style(self):
        return _STYLES[self.name.token.kind]


class CommandLine(Node, final=True):
    """
    Root of a parse: the top-level arguments in source order (possibly none).
    """
    __slots__ = ()
    __kind__ = NodeKind.COMMAND_LINE
    __introspectable__ = ("children",)
    __match_args__ = ("children",)

    def __new__(cls, children=(), /):
        children = tuple(children)
        for child in children:
            if not isinstance(child, (DefaultParameter, Parameter)):
                raise TypeError("CommandLine() children must be default parameters or parameters")
        return super().__new__(cls)._seal(_children=children)


__all__ = (
    "NodeKind",
    "Node",
    "Terminal",
    "Value",
    "DefaultParameter",
    "Parameter",
    "CommandLine",
)

# Keep the metaclass out of star-imports and docs.
del NodeType
