"""Token model and low-level parsing primitives for rule specifications."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class ParseError(ValueError):
    """Raised when specification text does not have the expected shape."""


class TokenKind(Enum):
    IDENT = "ident"
    PUNCT = "punct"
    LITERAL = "literal"
    GROUP = "group"


_OPEN = {"(": ")", "[": "]", "{": "}"}
_CLOSE = {close: open_ for open_, close in _OPEN.items()}
_PUNCT_CHARS = frozenset("=<>!~+-*/%^&|@.,;:#$?'")

_SKIP = re.compile(r"\s+|//[^\n]*|/\*.*?\*/", re.S)
_RAW_STRING = re.compile(r'b?r(?P<hashes>#*)"(?P<body>.*?)"(?P=hashes)', re.S)
_STRING = re.compile(r'b?"(?:[^"\\]|\\.)*"', re.S)
_CHAR = re.compile(r"b?'(?:\\(?:u\{[0-9A-Fa-f_]{1,6}\}|x[0-9A-Fa-f]{2}|.)|[^'\\\n])'")
_NUMBER = re.compile(r"\d\w*(?:\.\d\w*)?")
_IDENT = re.compile(r"(?:r#)?[^\W\d]\w*")

_LEXEMES = (
    (TokenKind.LITERAL, _RAW_STRING),
    (TokenKind.LITERAL, _STRING),
    (TokenKind.LITERAL, _CHAR),
    (TokenKind.LITERAL, _NUMBER),
    (TokenKind.IDENT, _IDENT),
)

_PLAIN_STRING = re.compile(r'r(?P<hashes>#*)"(?P<body>.*?)"(?P=hashes)', re.S)
_ESCAPE = re.compile(
    r"\\(?:u\{(?P<unicode>[0-9A-Fa-f_]{1,6})\}|x(?P<hex>[0-7][0-9A-Fa-f])|(?P<cont>\n\s*)|(?P<simple>.))",
    re.S,
)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", "0": "\0", '"': '"', "'": "'"}

_KEYWORDS = frozenset(
    """
    _ as async await break const continue crate dyn else enum extern false fn for if impl in
    let loop match mod move mut pub ref return self Self static struct super trait true try
    type unsafe use where while abstract become box do final macro override priv typeof
    unsized virtual yield
    """.split()
)


def _unescape(body: str) -> str:
    def replace(match: re.Match[str]) -> str:
        if match.group("unicode") is not None:
            return chr(int(match.group("unicode").replace("_", ""), 16))
        if match.group("hex") is not None:
            return chr(int(match.group("hex"), 16))
        if match.group("cont") is not None:
            return ""
        simple = match.group("simple")
        try:
            return _SIMPLE_ESCAPES[simple]
        except KeyError:
            raise ParseError(f"unknown character escape: \\{simple}") from None

    return _ESCAPE.sub(replace, body)


@dataclass(frozen=True)
class Token:
    """A single token; groups carry their delimited contents as children."""

    kind: TokenKind
    text: str
    children: tuple[Token, ...] = field(default=())
    joint: bool = False

    @property
    def string_value(self) -> str:
        """The value of a string literal token."""
        if self.kind is TokenKind.LITERAL:
            raw = _PLAIN_STRING.fullmatch(self.text)
            if raw:
                return raw.group("body")
            if self.text.startswith('"'):
                return _unescape(self.text[1:-1])
        raise ParseError(f"expected string literal, found {self.text!r}")

    def render(self) -> str:
        if self.kind is TokenKind.GROUP:
            inner = _render(self.children)
            return f"{self.text}{inner}{_OPEN[self.text]}"
        return self.text


def _render(tokens) -> str:
    parts = []
    for token in tokens:
        parts.append(token.render())
        parts.append("" if token.kind is TokenKind.PUNCT and token.joint else " ")
    return "".join(parts).rstrip()


def tokenize(text: str) -> list[Token]:
    """Split text into tokens, nesting delimited groups."""
    stack: list[tuple[str, list[Token]]] = [("", [])]
    pos = 0
    while pos < len(text):
        skipped = _SKIP.match(text, pos)
        if skipped:
            pos = skipped.end()
            continue
        char = text[pos]
        if char in _OPEN:
            stack.append((char, []))
            pos += 1
            continue
        if char in _CLOSE:
            if len(stack) == 1:
                raise ParseError(f"unexpected closing delimiter {char!r} at offset {pos}")
            opener, children = stack.pop()
            if opener != _CLOSE[char]:
                raise ParseError(f"mismatched closing delimiter {char!r} at offset {pos}")
            stack[-1][1].append(Token(TokenKind.GROUP, opener, tuple(children)))
            pos += 1
            continue
        for kind, pattern in _LEXEMES:
            match = pattern.match(text, pos)
            if match:
                stack[-1][1].append(Token(kind, match.group()))
                pos = match.end()
                break
        else:
            if char not in _PUNCT_CHARS:
                raise ParseError(f"unexpected character {char!r} at offset {pos}")
            joint = char == "'" or text[pos + 1 : pos + 2] in _PUNCT_CHARS
            stack[-1][1].append(Token(TokenKind.PUNCT, char, joint=joint))
            pos += 1
    if len(stack) > 1:
        raise ParseError(f"unclosed delimiter {stack[-1][0]!r}")
    return stack[0][1]


def _describe(token: Token | None) -> str:
    return "end of input" if token is None else repr(token.render())


class TokenStream:
    """A cursor over a sequence of tokens."""

    def __init__(self, tokens):
        self._tokens = tuple(tokens)
        self._pos = 0

    def __repr__(self) -> str:
        return f"TokenStream({_render(self._tokens[self._pos:])!r})"

    def is_empty(self) -> bool:
        return self._pos >= len(self._tokens)

    def fork(self) -> TokenStream:
        """An independent cursor at the same position."""
        forked = TokenStream(self._tokens)
        forked._pos = self._pos
        return forked

    def _peek(self, offset: int = 0) -> Token | None:
        index = self._pos + offset
        return self._tokens[index] if index < len(self._tokens) else None

    def _peek_is(self, kind: TokenKind, text: str | None = None, offset: int = 0) -> bool:
        token = self._peek(offset)
        return token is not None and token.kind is kind and (text is None or token.text == text)

    def peek_ident(self) -> bool:
        """Whether the next token is any identifier, keywords included."""
        return self._peek_is(TokenKind.IDENT)

    def peek_punct(self, char: str) -> bool:
        return self._peek_is(TokenKind.PUNCT, char)

    def peek_group(self, delimiter: str) -> bool:
        return self._peek_is(TokenKind.GROUP, delimiter)

    def next(self) -> Token:
        token = self._peek()
        if token is None:
            raise ParseError("unexpected end of input")
        self._pos += 1
        return token

    def expect_ident(self) -> str:
        """Consume a non-keyword identifier and return its name."""
        token = self._peek()
        if token is None or token.kind is not TokenKind.IDENT or token.text in _KEYWORDS:
            raise ParseError(f"expected identifier, found {_describe(token)}")
        self._pos += 1
        return token.text

    def expect_punct(self, char: str) -> Token:
        token = self._peek()
        if token is None or token.kind is not TokenKind.PUNCT or token.text != char:
            raise ParseError(f"expected `{char}`, found {_describe(token)}")
        self._pos += 1
        return token

    def expect_literal(self) -> Token:
        token = self._peek()
        if token is None or token.kind is not TokenKind.LITERAL:
            raise ParseError(f"expected literal, found {_describe(token)}")
        self._pos += 1
        return token

    def group(self, delimiter: str) -> TokenStream:
        """Consume a delimited group and return a stream over its contents."""
        token = self._peek()
        if token is None or token.kind is not TokenKind.GROUP or token.text != delimiter:
            raise ParseError(f"expected `{delimiter}`, found {_describe(token)}")
        self._pos += 1
        return TokenStream(token.children)

    def parse_type(self) -> str:
        """Consume a type and return its token-spaced rendering.

        On failure the stream is left where it was.
        """
        start = self._pos
        try:
            self._type()
        except ParseError:
            self._pos = start
            raise
        return _render(self._tokens[start : self._pos])

    def parse_terminated_idents(self) -> list[str]:
        """Parse the rest of the stream as comma separated identifiers."""
        idents = []
        while not self.is_empty():
            idents.append(self.expect_ident())
            if self.is_empty():
                break
            self.expect_punct(",")
        return idents

    def _raw_ident(self) -> str:
        token = self._peek()
        if token is None or token.kind is not TokenKind.IDENT:
            raise ParseError(f"expected identifier, found {_describe(token)}")
        self._pos += 1
        return token.text

    def _lifetime(self) -> None:
        self.expect_punct("'")
        self._raw_ident()

    def _type(self) -> None:
        token = self._peek()
        if token is None:
            raise ParseError("expected type, found end of input")
        if token.kind is TokenKind.GROUP and token.text == "(":
            inner = TokenStream(token.children)
            while not inner.is_empty():
                inner._type()
                if inner.is_empty():
                    break
                inner.expect_punct(",")
            self._pos += 1
        elif token.kind is TokenKind.GROUP and token.text == "[":
            inner = TokenStream(token.children)
            inner._type()
            if not inner.is_empty():
                inner.expect_punct(";")
                if inner.is_empty():
                    raise ParseError("expected array length")
            self._pos += 1
        elif self.peek_punct("&"):
            self._pos += 1
            if self.peek_punct("'"):
                self._lifetime()
            if self._peek_is(TokenKind.IDENT, "mut"):
                self._pos += 1
            self._type()
        elif self.peek_punct("*"):
            self._pos += 1
            if not (self._peek_is(TokenKind.IDENT, "const") or self._peek_is(TokenKind.IDENT, "mut")):
                raise ParseError(f"expected `const` or `mut`, found {_describe(self._peek())}")
            self._pos += 1
            self._type()
        elif self.peek_punct("!"):
            self._pos += 1
        elif self._peek_is(TokenKind.IDENT, "dyn") or self._peek_is(TokenKind.IDENT, "impl"):
            self._pos += 1
            self._bound()
            while self.peek_punct("+"):
                self._pos += 1
                self._bound()
        elif self.peek_punct(":") or token.kind is TokenKind.IDENT:
            self._path()
        else:
            raise ParseError(f"expected type, found {_describe(token)}")

    def _bound(self) -> None:
        if self.peek_punct("'"):
            self._lifetime()
        else:
            self._path()

    def _path_separator_next(self) -> bool:
        return self._peek_is(TokenKind.PUNCT, ":") and self._peek_is(TokenKind.PUNCT, ":", offset=1)

    def _path(self) -> None:
        if self.peek_punct(":"):
            self.expect_punct(":")
            self.expect_punct(":")
        while True:
            self._raw_ident()
            if self.peek_punct("<"):
                self._generics()
            if not self._path_separator_next():
                break
            self._pos += 2

    def _generics(self) -> None:
        self.expect_punct("<")
        while not self.peek_punct(">"):
            if self.peek_punct("'"):
                self._lifetime()
            else:
                if self.peek_ident() and self._peek_is(TokenKind.PUNCT, "=", offset=1):
                    self._pos += 2
                self._type()
            if not self.peek_punct(","):
                break
            self._pos += 1
        self.expect_punct(">")


@dataclass(frozen=True)
class Flag:
    """A command flag: a plain switch, or one that carries a typed value."""

    ident: str
    ty: str | None = None

    @property
    def is_parameterized(self) -> bool:
        return self.ty is not None

    @classmethod
    def parse(cls, stream: TokenStream) -> Flag:
        ident = stream.expect_ident()
        if stream.peek_punct("<"):
            stream.expect_punct("<")
            ty = stream.parse_type()
            stream.expect_punct(">")
            return cls(ident, ty)
        return cls(ident)

    def __str__(self) -> str:
        if self.ty is None:
            return self.ident
        return f"{self.ident}<>{self.ty}"


class AliasScope(Enum):
    """What an alias rule renames: a space, an operation or a flag."""

    S = "s"
    O = "o"
    F = "f"

    @classmethod
    def from_ident(cls, ident: str) -> AliasScope:
        try:
            return cls(ident)
        except ValueError:
            raise ParseError("AliasScope try_from Ident takes 1 of s, o or f idents") from None


@dataclass(frozen=True)
class Scope:
    """Where a command lives: the root, a space, an operation, or both."""

    space: str | None = None
    op: str | None = None

    @property
    def is_root(self) -> bool:
        return self.space is None and self.op is None