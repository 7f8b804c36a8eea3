"""
Tests for the models — Receipt, RunMode, Settings and the zshrc models.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from zsh_bootstrap.core.models import (
    ConfigFile,
    LegacyFragment,
    Receipt,
    RunMode,
    Settings,
)
from zsh_bootstrap.core.models.zshrc import render_lines, split_lines


class TestReceipt:
    def test_success(self):
        r = Receipt.success("uv", "uv installed")
        assert r.ok
        assert not r.failed
        assert r.output == "uv installed"

    def test_failure(self):
        r = Receipt.failure("apt", "boom", exit_code=100)
        assert r.failed
        assert r.error == "boom"
        assert r.exit_code == 100

    def test_skip(self):
        r = Receipt.skip("npm", "npm not found")
        assert r.status == "skipped"
        assert not r.ok
        assert not r.failed

    def test_plan(self):
        r = Receipt.plan("git", "run: git clone")
        assert r.planned
        assert not r.ok

    def test_metadata_is_independent(self):
        a = Receipt.success("a")
        b = Receipt.success("b")
        a.metadata["x"] = 1
        assert b.metadata == {}


class TestRunMode:
    def test_values(self):
        assert RunMode("dry-run") is RunMode.DRY_RUN
        assert RunMode("apply") is RunMode.APPLY

    def test_is_dry_run(self):
        assert RunMode.DRY_RUN.is_dry_run
        assert not RunMode.APPLY.is_dry_run


class TestSettings:
    def test_derived_paths(self, tmp_path: Path):
        s = Settings(home=tmp_path)
        assert s.zshrc_path == tmp_path / ".zshrc"
        assert s.backup_path == tmp_path / ".zshrc.pre-ohmyzsh-backup"
        assert s.framework_path == tmp_path / ".oh-my-zsh"
        assert s.plugins_dir == tmp_path / ".oh-my-zsh" / "custom" / "plugins"
        assert s.template_path == (
            tmp_path / ".oh-my-zsh" / "templates" / "zshrc.zsh-template"
        )

    def test_zsh_custom_override(self, tmp_path: Path):
        s = Settings(home=tmp_path, zsh_custom=tmp_path / "custom")
        assert s.plugins_dir == tmp_path / "custom" / "plugins"

    def test_default_plugins(self):
        s = Settings()
        assert s.plugins[0] == "git"
        assert "fast-syntax-highlighting" in s.plugins
        assert len(s.plugin_sources) == 4

    def test_defaults_not_shared(self):
        a = Settings()
        b = Settings()
        a.plugins.append("extra")
        assert "extra" not in b.plugins

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            Settings.model_validate({"plugin": ["git"]})


class TestConfigFile:
    def test_load_missing(self, tmp_path: Path):
        cf = ConfigFile.load(tmp_path / "nope")
        assert not cf.exists
        assert cf.lines == []
        assert cf.render() == ""

    def test_load_and_render(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_text("a\nb\n")
        cf = ConfigFile.load(path)
        assert cf.exists
        assert cf.lines == ["a", "b"]
        assert cf.render() == "a\nb\n"

    def test_render_lines_adds_trailing_newline(self):
        assert render_lines(["x"]) == "x\n"
        assert render_lines([]) == ""

    def test_split_on_newline_only(self):
        assert split_lines("a\x0cb\x0bc d\x85e\nf\n") == ["a\x0cb\x0bc d\x85e", "f"]

    def test_split_edges(self):
        assert split_lines("") == []
        assert split_lines("a") == ["a"]
        assert split_lines("a\n\n") == ["a", ""]
        assert split_lines("a\r\n") == ["a\r"]

    def test_load_keeps_raw_bytes(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_bytes(b"caf\xe9\r\nx\x1ey\n")
        cf = ConfigFile.load(path)
        assert cf.lines == ["caf\udce9\r", "x\x1ey"]
        assert cf.render() == cf.text

    def test_parse(self, tmp_path: Path):
        cf = ConfigFile.parse(tmp_path / "t", "a\nb\n")
        assert not cf.exists
        assert cf.lines == ["a", "b"]


class TestLegacyFragment:
    def test_header_ignores_trailing_space(self):
        f = LegacyFragment(name="t", header="# thefuck", end_pattern=r"^eval")
        assert f.is_header("# thefuck  ")
        assert not f.is_header("# thefuck alias")

    def test_end(self):
        f = LegacyFragment(name="t", header="# thefuck", end_pattern=r"^eval")
        assert f.is_end('eval "$(thefuck --alias)"')
        assert not f.is_end('  eval "$(thefuck --alias)"')
