"""
Restore a broken or missing ``~/.zshrc`` (``--restore-zshrc``).

Source precedence: the one-time backup if it has content, then the
framework template, then an empty file. A healthy file is a no-op.
Must run before any install step, since the later steps assume a file
worth editing.
"""

from __future__ import annotations

import logging

from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode, Settings
from zsh_bootstrap.core.services.zshrc import ZshrcError
from zsh_bootstrap.core.services.zshrc.health import is_broken_or_missing
from zsh_bootstrap.core.services.zshrc.writer import atomic_write, copy_file

logger = logging.getLogger(__name__)


def restore_zshrc(settings: Settings, run_mode: RunMode) -> Receipt:
    """Restore ``~/.zshrc`` if it is broken or missing.

    Raises:
        ZshrcError: If reading or writing fails.
    """
    path = settings.zshrc_path
    backup = settings.backup_path
    template = settings.template_path

    try:
        if not is_broken_or_missing(path):
            return Receipt.skip("restore-zshrc", f"{path} looks healthy, nothing to restore")

        if backup.is_file() and backup.stat().st_size > 0:
            source, description = backup, f"restore {path} from backup {backup}"
        elif template.is_file():
            source, description = template, f"restore {path} from template {template}"
        else:
            source, description = None, f"create an empty {path}"

        if run_mode.is_dry_run:
            logger.info("[dry-run] would %s", description)
            return Receipt.plan("restore-zshrc", description)

        if source is None:
            atomic_write(path, "")
        else:
            copy_file(source, path)
        logger.info("%s", description)

    except (OSError, UnicodeError) as e:
        raise ZshrcError(f"Restore of {path} failed: {e}") from e

    return Receipt.success(
        "restore-zshrc",
        description,
        metadata={"source": str(source) if source else None},
    )
