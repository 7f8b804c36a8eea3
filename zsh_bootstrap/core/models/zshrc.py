"""
Models for the ``~/.zshrc`` rewriter — the file, its legacy fragments
and the alias hook rendered into the managed block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel

# Undecodable bytes survive a read/write round trip as lone surrogates
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


@dataclass
class ConfigFile:
    """A text config file held as an ordered list of lines.

    Lines carry no terminators and are split on ``\\n`` only, so form
    feeds and other Unicode line breaks stay inside their line. An
    absent file loads as ``exists=False`` with no lines. ``text`` keeps
    the content exactly as read.

    Undecodable bytes are held as lone surrogates, so this is a plain
    dataclass and not a pydantic model.
    """

    path: Path
    exists: bool = False
    text: str = ""
    lines: list[str] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> ConfigFile:
        """Read ``path`` from disk. ``OSError`` propagates to the caller."""
        if not path.is_file():
            return cls(path=path, exists=False)
        with open(path, encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as fh:
            text = fh.read()
        return cls.parse(path, text, exists=True)

    @classmethod
    def parse(cls, path: Path, text: str, exists: bool = False) -> ConfigFile:
        return cls(path=path, exists=exists, text=text, lines=split_lines(text))

    def render(self) -> str:
        return render_lines(self.lines)


def split_lines(text: str) -> list[str]:
    """Split file text on ``\\n``; one trailing newline ends the last line."""
    if not text:
        return []
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def render_lines(lines: list[str]) -> str:
    """Join lines back into file text (trailing newline unless empty)."""
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


class LegacyFragment(BaseModel):
    """An unmarked snippet appended by the pre-marker installer.

    Identified by an exact header line and a regex for its last line.
    """

    name: str
    header: str
    end_pattern: str

    def is_header(self, line: str) -> bool:
        return line.rstrip() == self.header

    def is_end(self, line: str) -> bool:
        return re.match(self.end_pattern, line) is not None


class ToolAliasHook(BaseModel):
    """Shell init for a tool, evaluated only if the tool is on PATH."""

    tool: str
    init: str
    comment: str = ""
