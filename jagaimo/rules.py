"""Parsing of alias and command rules."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product

from .syntax import AliasScope, Flag, ParseError, TokenStream

_ALIAS_KINDS = frozenset(scope.value for scope in AliasScope)


def _debug_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class AliasRule:
    """Renames a space, an operation or a flag: `s(token) = alias`."""

    scoped: AliasScope
    token: str
    alias: str

    @classmethod
    def parse(cls, stream: TokenStream) -> AliasRule:
        scoped = AliasScope.from_ident(stream.expect_ident())
        content = stream.group("(")
        token = content.expect_ident()
        if not content.is_empty():
            raise ParseError(f"unexpected token in alias rule: {content!r}")
        stream.expect_punct("=")
        alias = stream.expect_ident()
        return cls(scoped, token, alias)


@dataclass(frozen=True)
class CommandRule:
    """One command: its space, operation, flags and positional parameter type."""

    space: str | None = None
    op: str | None = None
    flags: tuple[Flag, ...] | None = None
    params: str | None = None

    def __str__(self) -> str:
        params = "" if self.params is None else _debug_string(self.params)
        flags = "" if self.flags is None else "".join(f"{flag} " for flag in self.flags)
        return (
            f"SPACE<{self.space or ''}> OPERATION<{self.op or ''}> "
            f"PARAM<{params}> FLAGS<{flags}>\n"
        )


def extract_scope_tokens(stream: TokenStream) -> list[str]:
    """Parse `name(a, b, ...)`, or nothing when the context block comes next."""
    if stream.peek_group("["):
        return []
    stream.expect_ident()
    return stream.group("(").parse_terminated_idents()


def extract_context_tokens(stream: TokenStream) -> tuple[list[Flag], str | None]:
    """Parse flags and an optional `<Type>` parameter until the stream ends."""
    flags: list[Flag] = []
    params = None
    while not stream.is_empty():
        if stream.peek_ident():
            flags.append(Flag.parse(stream))
        else:
            stream.expect_punct("<")
            try:
                params = stream.parse_type()
            except ParseError:
                params = None
            stream.expect_punct(">")
    return flags, params


def expand_command_rule(spaces, ops, flags, params) -> list[CommandRule]:
    """Expand one command rule into a rule per space and operation pair.

    Flags and parameters are attached only when both spaces and operations
    are given.
    """
    spaces = list(spaces)
    ops = list(ops)
    if not spaces and not ops:
        return [CommandRule()]
    if not spaces:
        return [CommandRule(op=op) for op in ops]
    if not ops:
        return [CommandRule(space=space) for space in spaces]
    flags = tuple(flags)
    return [
        CommandRule(space=space, op=op, flags=flags, params=params)
        for space, op in product(spaces, ops)
    ]


def parse_command_rule(stream: TokenStream) -> list[CommandRule]:
    """Parse `c { s(..) o(..) [ ... ] }` into its expanded rules."""
    stream.expect_ident()
    content = stream.group("{")
    spaces = extract_scope_tokens(content)
    ops = extract_scope_tokens(content)
    context = content.group("[")
    flags, params = extract_context_tokens(context)
    if not content.is_empty():
        raise ParseError(f"unexpected token in command rule: {content!r}")
    return expand_command_rule(spaces, ops, flags, params)


@dataclass
class Rules:
    """All alias and command rules of a specification, in order of appearance."""

    aliases: list[AliasRule]
    commands: list[CommandRule]

    @classmethod
    def parse(cls, stream: TokenStream) -> Rules:
        aliases: list[AliasRule] = []
        commands: list[CommandRule] = []
        while not stream.is_empty():
            kind = stream.fork().expect_ident()
            if kind == "c":
                commands.extend(parse_command_rule(stream))
            elif kind == "t":
                raise ParseError("transform rules have not been implemented yet")
            elif kind in _ALIAS_KINDS:
                aliases.append(AliasRule.parse(stream))
            else:
                raise ParseError("expected c, t, s, o or f ident")
        return cls(aliases, commands)