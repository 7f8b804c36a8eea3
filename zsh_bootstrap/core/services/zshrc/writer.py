"""
File persistence for the rewriter — atomic writes and one-shot copies.

Writes go to a temp file in the target's directory and are renamed
over the target, so an interrupted run leaves either the old file or
the new one, never a half-written one.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from zsh_bootstrap.core.models.zshrc import ENCODING, ENCODING_ERRORS

logger = logging.getLogger(__name__)


def atomic_write(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` atomically (temp file, then rename).

    Keeps the permission bits of an existing target.

    Raises:
        OSError: If the temp file cannot be created, written or renamed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as fh:
            fh.write(content)
        if path.exists():
            shutil.copymode(path, tmp)
        tmp.replace(path)
        logger.debug("Wrote %s (%d bytes)", path, len(content))
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def copy_file(source: Path, dest: Path) -> None:
    """Copy ``source`` to ``dest`` preserving metadata, via a temp file."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=dest.parent,
        prefix=f".{dest.name}_",
        suffix=".tmp",
    )
    os.close(fd)
    tmp = Path(tmp_path)
    try:
        shutil.copy2(source, tmp)
        tmp.replace(dest)
        logger.debug("Copied %s → %s", source, dest)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
