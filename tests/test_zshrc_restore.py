"""
Tests for --restore-zshrc: backup first, then template, then empty.
"""

from pathlib import Path

from zsh_bootstrap.core.models.settings import RunMode, Settings
from zsh_bootstrap.core.services.zshrc.restore import restore_zshrc

HEALTHY = "export ZSH=~/.oh-my-zsh\nsource $ZSH/oh-my-zsh.sh\n"


class TestRestore:
    def test_healthy_is_noop(self, settings: Settings):
        settings.zshrc_path.write_text(HEALTHY)
        receipt = restore_zshrc(settings, RunMode.APPLY)
        assert receipt.status == "skipped"
        assert settings.zshrc_path.read_text() == HEALTHY

    def test_from_backup(self, settings: Settings, framework: Path):
        settings.backup_path.write_text(HEALTHY)
        receipt = restore_zshrc(settings, RunMode.APPLY)
        assert receipt.ok
        assert receipt.metadata["source"] == str(settings.backup_path)
        assert settings.zshrc_path.read_text() == HEALTHY

    def test_empty_backup_falls_back_to_template(self, settings: Settings, framework: Path):
        settings.backup_path.write_text("")
        settings.zshrc_path.write_text("\n")
        receipt = restore_zshrc(settings, RunMode.APPLY)
        assert receipt.ok
        assert settings.zshrc_path.read_text() == settings.template_path.read_text()

    def test_without_sources_creates_empty(self, settings: Settings):
        settings.zshrc_path.write_text("alias ll='ls -l'\n")
        receipt = restore_zshrc(settings, RunMode.APPLY)
        assert receipt.ok
        assert receipt.metadata["source"] is None
        assert settings.zshrc_path.read_text() == ""

    def test_backup_left_untouched(self, settings: Settings):
        settings.backup_path.write_text(HEALTHY)
        restore_zshrc(settings, RunMode.APPLY)
        assert settings.backup_path.read_text() == HEALTHY

    def test_dry_run(self, settings: Settings, framework: Path):
        receipt = restore_zshrc(settings, RunMode.DRY_RUN)
        assert receipt.planned
        assert "template" in receipt.output
        assert not settings.zshrc_path.exists()
