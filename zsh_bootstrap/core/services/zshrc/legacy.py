"""
Legacy fragment cleanup.

Before the managed block existed, the installer appended loose
snippets to ``~/.zshrc``, each introduced by a fixed comment:

    # zsh-completions
    fpath+=${ZSH_CUSTOM:-~/.oh-my-zsh/custom}/plugins/zsh-completions/src
    autoload -Uz compinit && compinit

The managed block supersedes them, so every complete header→end range
is deleted. A header without its end line, or a range that would run
into a block marker or another fragment's header, is left alone.
"""

from __future__ import annotations

import logging

from zsh_bootstrap.core.models.zshrc import LegacyFragment
from zsh_bootstrap.core.services.zshrc import is_marker

logger = logging.getLogger(__name__)

LEGACY_FRAGMENTS: tuple[LegacyFragment, ...] = (
    LegacyFragment(
        name="zsh-completions",
        header="# zsh-completions",
        end_pattern=r"^autoload -Uz compinit && compinit\s*$",
    ),
    LegacyFragment(
        name="thefuck",
        header="# thefuck",
        end_pattern=r'^eval "\$\(thefuck --alias\)"\s*$',
    ),
    LegacyFragment(
        name="local-bin",
        header="# user local bin (uv/pipx)",
        end_pattern=r'^export PATH="\$HOME/\.local/bin:\$PATH"\s*$',
    ),
)


def strip_legacy(
    lines: list[str],
    fragments: tuple[LegacyFragment, ...] = LEGACY_FRAGMENTS,
) -> tuple[list[str], list[str]]:
    """Remove legacy fragments in one pass.

    Returns:
        ``(new_lines, removed)`` where ``removed`` names each fragment
        deleted, in file order.
    """
    result: list[str] = []
    removed: list[str] = []
    i = 0
    while i < len(lines):
        fragment = _fragment_for_header(lines[i], fragments)
        if fragment is not None:
            end = _find_end(lines, i, fragment, fragments)
            if end is not None:
                logger.debug(
                    "Removing legacy fragment %r (lines %d-%d)",
                    fragment.name, i + 1, end + 1,
                )
                removed.append(fragment.name)
                i = end + 1
                continue
            logger.debug("Legacy header %r has no end line, keeping it", fragment.header)
        result.append(lines[i])
        i += 1
    return result, removed


def cleanup_legacy(
    lines: list[str],
    fragments: tuple[LegacyFragment, ...] = LEGACY_FRAGMENTS,
) -> list[str]:
    """Return ``lines`` without any complete legacy fragment."""
    return strip_legacy(lines, fragments)[0]


def _fragment_for_header(
    line: str,
    fragments: tuple[LegacyFragment, ...],
) -> LegacyFragment | None:
    for fragment in fragments:
        if fragment.is_header(line):
            return fragment
    return None


def _find_end(
    lines: list[str],
    start: int,
    fragment: LegacyFragment,
    fragments: tuple[LegacyFragment, ...],
) -> int | None:
    """Index of the fragment's end line, or None if the range is ambiguous."""
    for j in range(start + 1, len(lines)):
        line = lines[j]
        if fragment.is_end(line):
            return j
        if is_marker(line) or _fragment_for_header(line, fragments) is not None:
            return None
    return None
