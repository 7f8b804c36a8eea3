"""
Managed block placement — pure transformations over lists of lines.

``insert_block`` puts the block after the first anchor line (followed
by one blank separator) or appends it at end of file (preceded by one
blank separator when the file has content). ``remove_block`` undoes
exactly that, separator included, so remove+insert is stable.
"""

from __future__ import annotations

import logging

from zsh_bootstrap.core.models.zshrc import split_lines
from zsh_bootstrap.core.services.zshrc import BLOCK_END, BLOCK_START, is_anchor

logger = logging.getLogger(__name__)


def insert_block(lines: list[str], block: str) -> list[str]:
    """Return ``lines`` with ``block`` inserted exactly once."""
    block_lines = split_lines(block)
    result: list[str] = []
    inserted = False

    for line in lines:
        result.append(line)
        if not inserted and is_anchor(line):
            result.extend(block_lines)
            result.append("")
            inserted = True

    if not inserted:
        logger.debug("No anchor line found, appending block at end of file")
        if lines:
            result.append("")
        result.extend(block_lines)

    return result


def strip_blocks(lines: list[str]) -> tuple[list[str], int]:
    """Remove every managed block and any stray marker line.

    Returns:
        ``(new_lines, blocks_removed)``. Stray markers are dropped but
        not counted.
    """
    result: list[str] = []
    removed = 0
    n = len(lines)
    i = 0

    while i < n:
        stripped = lines[i].strip()

        if stripped == BLOCK_START:
            end = _find_block_end(lines, i)
            if end is None:
                logger.warning("Dropping unterminated block start marker at line %d", i + 1)
                i += 1
                continue

            removed += 1
            nxt = end + 1
            if nxt < n and not lines[nxt].strip():
                # separator emitted after a block placed below the anchor
                nxt += 1
            elif nxt >= n and result and not result[-1].strip():
                # separator emitted before a block appended at end of file
                result.pop()
            i = nxt
            continue

        if stripped == BLOCK_END:
            logger.warning("Dropping stray block end marker at line %d", i + 1)
            i += 1
            continue

        result.append(lines[i])
        i += 1

    return result, removed


def remove_block(lines: list[str]) -> list[str]:
    """Return ``lines`` without any managed block."""
    return strip_blocks(lines)[0]


def _find_block_end(lines: list[str], start: int) -> int | None:
    for j in range(start + 1, len(lines)):
        stripped = lines[j].strip()
        if stripped == BLOCK_END:
            return j
        if stripped == BLOCK_START:
            return None
    return None
