"""Parsing of the leading attribute block of a specification."""

from __future__ import annotations

from dataclasses import dataclass, field

from .manifest import CrateResolver
from .syntax import ParseError, TokenStream

_DEFAULT_DERIVES = ("Debug", "PartialEq", "Clone")

_SWITCHES = {
    "fish_cmp": ("fish_completions", True),
    "nu_cmp": ("nu_completions", True),
    "no_help": ("help", False),
    "no_version": ("version", False),
    "ignore_naming_conventions": ("ignore_naming_conventions", True),
    "no_auto_alias": ("auto_alias", False),
}


def _ascii_upper(char: str) -> str:
    return char.upper() if char.isascii() else char


def enforce_naming_convention(name: str) -> str:
    """Turn a snake_case name into an UpperCamelCase type name."""
    if not name:
        raise ParseError("cannot apply naming convention to an empty name")
    name = _ascii_upper(name[0]) + name[1:]
    while (idx := name.find("_")) != -1:
        if idx + 1 >= len(name):
            raise ParseError(f"name {name!r} cannot end with an underscore")
        name = name[:idx] + _ascii_upper(name[idx + 1]) + name[idx + 2 :]
    return name


@dataclass
class Attrs:
    """Options given in the `#[...]` block at the start of a specification."""

    root_name: str
    help: bool = True
    version: bool = True
    nu_completions: bool = False
    fish_completions: bool = False
    ignore_naming_conventions: bool = False
    auto_alias: bool = True
    derives: list[str] = field(default_factory=lambda: list(_DEFAULT_DERIVES))

    @classmethod
    def parse(cls, stream: TokenStream, default_root_name=None) -> Attrs:
        """Parse an optional attribute block; consumes nothing if there is none.

        Without ``default_root_name`` the crate name is read from the manifest.
        """
        if default_root_name is None:
            default_root_name = CrateResolver().read_manifest().crate_name()
        attrs = cls(root_name=default_root_name)

        if not stream.peek_punct("#"):
            return attrs

        stream.expect_punct("#")
        content = stream.group("[")
        while content.peek_ident():
            name = content.expect_ident()
            if name == "root_name":
                content.expect_punct("=")
                attrs.root_name = content.expect_literal().string_value
            elif name == "derives":
                attrs.derives = content.group("(").parse_terminated_idents()
            elif name in _SWITCHES:
                attribute, value = _SWITCHES[name]
                setattr(attrs, attribute, value)
            else:
                raise ParseError(f"unrecognized mock attribute {name}")

            if not content.is_empty():
                content.expect_punct(",")

        if not content.is_empty():
            raise ParseError(f"unexpected token in attributes: {content!r}")

        if not attrs.ignore_naming_conventions:
            attrs.root_name = enforce_naming_convention(attrs.root_name)
        return attrs