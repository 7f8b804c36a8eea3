"""
``~/.zshrc`` rewrite — the full pass from file-on-disk to managed block.

The pass walks a fixed sequence of states:

    START → ENSURE_FILE_EXISTS → BACKED_UP → LEGACY_CLEANED
          → OLD_BLOCK_REMOVED → NEW_BLOCK_INSERTED

In dry-run mode it ends in DRY_RUN_REPORTED instead: every transition
is recorded as an announcement and nothing is written.

All edits happen on an in-memory list of lines; the real file is
replaced once, atomically, at the end. Creating a missing file and
taking the one-time backup are the only earlier writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode, Settings
from zsh_bootstrap.core.models.zshrc import ConfigFile, render_lines
from zsh_bootstrap.core.services.zshrc import ZshrcError, is_anchor
from zsh_bootstrap.core.services.zshrc.block import render_default_block
from zsh_bootstrap.core.services.zshrc.insert import insert_block, strip_blocks
from zsh_bootstrap.core.services.zshrc.legacy import strip_legacy
from zsh_bootstrap.core.services.zshrc.writer import atomic_write, copy_file

logger = logging.getLogger(__name__)


class RewriteState(StrEnum):
    START = "start"
    ENSURE_FILE_EXISTS = "ensure_file_exists"
    BACKED_UP = "backed_up"
    LEGACY_CLEANED = "legacy_cleaned"
    OLD_BLOCK_REMOVED = "old_block_removed"
    NEW_BLOCK_INSERTED = "new_block_inserted"
    DRY_RUN_REPORTED = "dry_run_reported"


@dataclass
class RewriteResult:
    """Outcome of one rewrite pass."""

    path: Path
    run_mode: RunMode = RunMode.APPLY
    state: RewriteState = RewriteState.START
    actions: list[str] = field(default_factory=list)
    content: str = ""
    changed: bool = False
    created: bool = False
    backed_up: bool = False
    legacy_removed: list[str] = field(default_factory=list)
    blocks_removed: int = 0

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "run_mode": str(self.run_mode),
            "state": str(self.state),
            "actions": list(self.actions),
            "changed": self.changed,
            "created": self.created,
            "backed_up": self.backed_up,
            "legacy_removed": list(self.legacy_removed),
            "blocks_removed": self.blocks_removed,
        }

    def to_receipt(self) -> Receipt:
        summary = "; ".join(self.actions)
        if self.run_mode.is_dry_run:
            return Receipt.plan("zshrc", summary, metadata=self.to_dict())
        if not self.changed:
            return Receipt.success("zshrc", f"{self.path} already up to date", metadata=self.to_dict())
        return Receipt.success("zshrc", summary, metadata=self.to_dict())


def rewrite_zshrc(
    settings: Settings,
    run_mode: RunMode,
    block: str | None = None,
) -> RewriteResult:
    """Bring ``~/.zshrc`` to exactly one up-to-date managed block.

    Args:
        settings: Installer settings (paths, plugins, PATH entries).
        run_mode: APPLY writes; DRY_RUN only records announcements.
        block: Pre-rendered block text. Defaults to the block rendered
            from ``settings``.

    Returns:
        RewriteResult with the resulting content and the announcements.

    Raises:
        ZshrcError: On any filesystem or encoding error. Nothing partial reaches
            the real path.
    """
    path = settings.zshrc_path
    result = RewriteResult(path=path, run_mode=run_mode)
    dry_run = run_mode.is_dry_run

    try:
        # ── 1. Ensure the file exists ───────────────────────────
        result.state = RewriteState.ENSURE_FILE_EXISTS
        zshrc = ConfigFile.load(path)
        if not zshrc.exists:
            template = ConfigFile.load(settings.template_path)
            if template.exists:
                source = f"template {template.path}"
            else:
                source = "an empty file"
            zshrc = ConfigFile.parse(path, template.text)
            _announce(result, f"create {path} from {source}")
            if not dry_run:
                atomic_write(path, zshrc.text)
            result.created = True

        # ── 2. One-time backup ──────────────────────────────────
        result.state = RewriteState.BACKED_UP
        backup = settings.backup_path
        if backup.exists():
            logger.debug("Backup %s already exists, leaving it untouched", backup)
        else:
            _announce(result, f"back up {path} to {backup}")
            if not dry_run:
                copy_file(path, backup)
            result.backed_up = True

        lines = zshrc.lines

        # ── 3. Legacy fragments ─────────────────────────────────
        result.state = RewriteState.LEGACY_CLEANED
        lines, removed = strip_legacy(lines)
        if removed:
            result.legacy_removed = removed
            _announce(result, f"remove legacy entries: {', '.join(removed)}")

        # ── 4. Previous managed block ───────────────────────────
        result.state = RewriteState.OLD_BLOCK_REMOVED
        lines, count = strip_blocks(lines)
        if count:
            result.blocks_removed = count
            _announce(result, "remove previous managed block")

        # ── 5. New managed block ────────────────────────────────
        if block is None:
            block = render_default_block(settings)
        anchor = _anchor_line_number(lines)
        if anchor is None:
            _announce(result, "append managed block at end of file")
        else:
            _announce(result, f"insert managed block after line {anchor}")
        lines = insert_block(lines, block)

        new_text = render_lines(lines)
        result.content = new_text
        result.changed = new_text != zshrc.text

        if dry_run:
            result.state = RewriteState.DRY_RUN_REPORTED
            return result

        if result.changed:
            atomic_write(path, new_text)
        else:
            logger.info("%s already up to date", path)
        result.state = RewriteState.NEW_BLOCK_INSERTED

    except (OSError, UnicodeError) as e:
        raise ZshrcError(f"Rewrite of {path} failed at {result.state}: {e}") from e

    return result


def _announce(result: RewriteResult, action: str) -> None:
    result.actions.append(action)
    if result.run_mode.is_dry_run:
        logger.info("[dry-run] would %s", action)
    else:
        logger.info("%s", action)


def _anchor_line_number(lines: list[str]) -> int | None:
    """1-based number of the first anchor line, if any."""
    for i, line in enumerate(lines):
        if is_anchor(line):
            return i + 1
    return None
