"""
Parse tree node tests.

Scope
- Validate the closed variant: tags, rule names, sealed cases, abstract base.
- Validate shape checks done at construction (child kinds, separator/value pairing).
- Validate immutability, structural equality and hashing.
- Validate pattern matching through __match_args__ and rich rendering.

Conventions
- Test method names follow CamelCase per project convention.
- Nodes are built by hand from tokens here; parser-built trees live in parser.py.
"""
import unittest
from unittest import TestCase

from rich.console import Console

from argotree import (
    Token,
    TokenKind,
    NodeKind,
    Node,
    Terminal,
    Value,
    DefaultParameter,
    Parameter,
    CommandLine,
)


def terminal(kind, text, start=0):
    return Terminal(Token(kind, text, start))


class TestTerminal(TestCase):
    """Leaves of the tree."""

    def testTextIsVerbatim(self):
        leaf = terminal(TokenKind.QUOTED, '"a \\"b\\""')
        self.assertEqual(leaf.text, '"a \\"b\\""')
        self.assertEqual(leaf.children, ())
        self.assertIsNone(leaf.rule)
        self.assertIs(leaf.kind, NodeKind.TERMINAL)

    def testKeepsToken(self):
        token = Token(TokenKind.WINDOWS, "/Switch", 4)
        self.assertIs(Terminal(token).token, token)

    def testRejectsNonToken(self):
        with self.assertRaises(TypeError):
            Terminal("abc")

    def testRejectsEndAndWhitespace(self):
        with self.assertRaises(ValueError):
            Terminal(Token(TokenKind.END, "", 0))
        with self.assertRaises(ValueError):
            Terminal(Token(TokenKind.WHITESPACE, " ", 0))

    def testTerminalsYieldsItself(self):
        leaf = terminal(TokenKind.BAREWORD, "abc")
        self.assertEqual(list(leaf.terminals()), [leaf])


class TestShapes(TestCase):
    """Construction-time shape validation of inner nodes."""

    def setUp(self):
        self.word = terminal(TokenKind.BAREWORD, "abc")
        self.colon = terminal(TokenKind.COLON, ":")
        self.equals = terminal(TokenKind.EQUALS, "=")
        self.windows = terminal(TokenKind.WINDOWS, "/Name")
        self.long = terminal(TokenKind.LONG, "--Name")
        self.short = terminal(TokenKind.SHORT, "-sUtZ")

    def testValueAcceptsBareWordAndQuoted(self):
        self.assertEqual(Value(self.word).value, self.word)
        quoted = terminal(TokenKind.QUOTED, '"x y"')
        self.assertEqual(Value(quoted).children, (quoted,))

    def testValueRejectsSeparator(self):
        with self.assertRaises(ValueError):
            Value(self.colon)

    def testValueRejectsInnerNode(self):
        with self.assertRaises(TypeError):
            Value(Value(self.word))

    def testDefaultParameterRejectsSwitch(self):
        with self.assertRaises(ValueError):
            DefaultParameter(self.windows)

    def testBareParameter(self):
        parameter = Parameter(self.windows)
        self.assertEqual(parameter.children, (self.windows,))
        self.assertIsNone(parameter.separator)
        self.assertIsNone(parameter.value)
        self.assertEqual(parameter.style, "windows")

    def testValuedParameter(self):
        value = Value(self.word)
        parameter = Parameter(self.long, self.equals, value)
        self.assertEqual(parameter.children, (self.long, self.equals, value))
        self.assertEqual(parameter.separator, self.equals)
        self.assertEqual(parameter.value, value)
        self.assertEqual(parameter.style, "long")

    def testSeparatorRequiresValue(self):
        with self.assertRaises(ValueError):
            Parameter(self.windows, self.colon)

    def testValueRequiresSeparator(self):
        with self.assertRaises(ValueError):
            Parameter(self.windows, None, Value(self.word))

    def testSeparatorMustMatchStyle(self):
        with self.assertRaises(ValueError):
            Parameter(self.windows, self.equals, Value(self.word))
        with self.assertRaises(ValueError):
            Parameter(self.long, self.colon, Value(self.word))

    def testShortFlagsNeverTakeValue(self):
        self.assertEqual(Parameter(self.short).style, "short")
        with self.assertRaises(ValueError):
            Parameter(self.short, self.equals, Value(self.word))

    def testParameterNameMustBeSwitch(self):
        with self.assertRaises(ValueError):
            Parameter(self.word)

    def testParameterValueMustBeValueNode(self):
        with self.assertRaises(TypeError):
            Parameter(self.windows, self.colon, self.word)

    def testCommandLineChildren(self):
        line = CommandLine([DefaultParameter(self.word), Parameter(self.short)])
        self.assertEqual(len(line.children), 2)
        self.assertEqual(CommandLine().children, ())

    def testCommandLineRejectsLooseTerminal(self):
        with self.assertRaises(TypeError):
            CommandLine([self.word])


class TestVariant(TestCase):
    """Closed tagged variant semantics."""

    def testTagsAndRules(self):
        word = terminal(TokenKind.BAREWORD, "abc")
        cases = [
            (CommandLine(), NodeKind.COMMAND_LINE, "commandLine"),
            (DefaultParameter(word), NodeKind.DEFAULT_PARAMETER, "defaultParameter"),
            (Parameter(terminal(TokenKind.SHORT, "-x")), NodeKind.PARAMETER, "parameter"),
            (Value(word), NodeKind.VALUE, "value"),
        ]
        for node, kind, rule in cases:
            with self.subTest(rule=rule):
                self.assertIs(node.kind, kind)
                self.assertEqual(node.rule, rule)

    def testBaseIsAbstract(self):
        with self.assertRaises(TypeError):
            Node()

    def testCasesAreSealed(self):
        with self.assertRaises(TypeError):
            class Custom(Parameter):  # NOQA: F-841
                pass

    def testImmutable(self):
        node = DefaultParameter(terminal(TokenKind.BAREWORD, "abc"))
        with self.assertRaises(AttributeError):
            node._children = ()
        with self.assertRaises(AttributeError):
            node.extra = 1
        with self.assertRaises(AttributeError):
            del node._children

    def testStructuralEquality(self):
        first = Parameter(terminal(TokenKind.WINDOWS, "/a"), terminal(TokenKind.COLON, ":", 2),
                          Value(terminal(TokenKind.BAREWORD, "1", 3)))
        second = Parameter(terminal(TokenKind.WINDOWS, "/a"), terminal(TokenKind.COLON, ":", 2),
                           Value(terminal(TokenKind.BAREWORD, "1", 3)))
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertNotEqual(first, Parameter(terminal(TokenKind.WINDOWS, "/a")))

    def testDifferentCasesNeverEqual(self):
        word = terminal(TokenKind.BAREWORD, "abc")
        self.assertNotEqual(Value(word), DefaultParameter(word))

    def testTextConcatenatesLeaves(self):
        parameter = Parameter(terminal(TokenKind.LONG, "--Name"), terminal(TokenKind.EQUALS, "="),
                              Value(terminal(TokenKind.QUOTED, '"abc XYZ"')))
        self.assertEqual(parameter.text, '--Name="abc XYZ"')
        self.assertEqual([leaf.text for leaf in parameter.terminals()], ["--Name", "=", '"abc XYZ"'])

    def testPatternMatching(self):
        line = CommandLine([
            DefaultParameter(terminal(TokenKind.BAREWORD, "file")),
            Parameter(terminal(TokenKind.SHORT, "-v")),
            Parameter(terminal(TokenKind.WINDOWS, "/o"), terminal(TokenKind.COLON, ":"),
                      Value(terminal(TokenKind.BAREWORD, "out"))),
        ])
        seen = []
        for child in line:
            match child:
                case DefaultParameter(Terminal(text)):
                    seen.append(("positional", text))
                case Parameter(Terminal(name), None, None):
                    seen.append(("switch", name))
                case Parameter(Terminal(name), Terminal(":"), Value(Terminal(text))):
                    seen.append(("valued", name, text))
        self.assertEqual(seen, [("positional", "file"), ("switch", "-v"), ("valued", "/o", "out")])


class TestPresentation(TestCase):
    """repr and rich rendering."""

    def testRepr(self):
        word = terminal(TokenKind.BAREWORD, "abc")
        self.assertEqual(repr(word), "terminal(text='abc')")
        self.assertEqual(repr(Value(word)), "value(value=terminal(text='abc'))")
        self.assertEqual(repr(CommandLine()), "command-line(children=())")

    def testRichTree(self):
        line = CommandLine([
            Parameter(terminal(TokenKind.WINDOWS, "/Name"), terminal(TokenKind.COLON, ":"),
                      Value(terminal(TokenKind.BAREWORD, "123"))),
        ])
        console = Console(color_system=None, force_terminal=False, width=80)
        with console.capture() as capture:
            console.print(line)
        output = capture.get()
        for fragment in ("commandLine", "parameter", "value", "'/Name'", "':'", "'123'"):
            self.assertIn(fragment, output)


if __name__ == '__main__':
    unittest.main()
