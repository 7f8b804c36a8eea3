"""
``~/.zshrc`` rewriter — keeps one managed block of generated config.

The managed block is demarcated:
    # >>> zsh-bootstrap managed block >>>
    plugins=(...)
    ...
    # <<< zsh-bootstrap managed block <<<

It is regenerated on every run and placed right after the line that
sources Oh My Zsh (or appended when there is none). Anything outside
the markers is preserved, except the unmarked fragments older versions
of the installer appended (see legacy.py).
"""

import re

# Marker constants used by block, insert and rewrite
BLOCK_START = "# >>> zsh-bootstrap managed block >>>"
BLOCK_END = "# <<< zsh-bootstrap managed block <<<"

# The line that sources the framework's main script
ANCHOR_RE = re.compile(r"^\s*(?:source|\.)\s+\S*oh-my-zsh\.sh\b")


def is_anchor(line: str) -> bool:
    return ANCHOR_RE.match(line) is not None


def is_marker(line: str) -> bool:
    stripped = line.strip()
    return stripped == BLOCK_START or stripped == BLOCK_END


class ZshrcError(Exception):
    """Raised when reading, backing up or writing ``~/.zshrc`` fails."""
