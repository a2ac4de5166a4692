"""Locating and reading the crate manifest and help file."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

_NAME_PREFIX = "name = "
_VERSION_PREFIX = "version = "


class CrateResolver:
    """Works out which crate directory the manifest and help file live in."""

    def __init__(self, base=".", environ=None):
        self.base = Path(base)
        environ = os.environ if environ is None else environ
        manifest = (self.base / "Cargo.toml").read_text()
        if "[workspace]" in manifest:
            try:
                self.who = environ["CARGO_CRATE_NAME"]
            except KeyError:
                raise KeyError("CARGO_CRATE_NAME is not set inside a workspace") from None
        else:
            self.who = "."

    def read_manifest(self) -> Manifest:
        return Manifest((self.base / self.who / "Cargo.toml").read_text())

    def read_help(self) -> HelpFile:
        return HelpFile((self.base / self.who / "help.toml").read_text())


@dataclass(frozen=True)
class HelpFile:
    """The raw text of a help.toml file."""

    text: str

    def to_table(self) -> dict:
        return tomllib.loads(self.text)


@dataclass(frozen=True)
class Manifest:
    """The raw text of a Cargo.toml manifest."""

    text: str

    def _first_line(self, prefix: str) -> str:
        line = next((l for l in self.text.splitlines() if l.startswith(prefix)), None)
        if line is None:
            raise ValueError(f"manifest has no line starting with {prefix!r}")
        return line

    def crate_name_version(self) -> list[str]:
        """The first two name or version lines, whole."""
        lines = [
            l for l in self.text.splitlines()
            if l.startswith(_NAME_PREFIX) or l.startswith(_VERSION_PREFIX)
        ][:2]
        if len(lines) < 2:
            raise ValueError("manifest lacks a name and a version line")
        return lines

    def crate_name(self) -> str:
        return self._first_line(_NAME_PREFIX)[len(_NAME_PREFIX) + 1 : -1]

    def crate_version(self) -> str:
        return self._first_line(_VERSION_PREFIX)[len(_VERSION_PREFIX) + 1 : -1]