"""
Tests for the install orchestrator — step order, fail-fast and best-effort policies.
"""

from pathlib import Path

import pytest

from zsh_bootstrap.adapters.mock import MockRunner
from zsh_bootstrap.core.models.settings import RunMode, Settings
from zsh_bootstrap.core.services.provision import ProvisionError, run_install
from zsh_bootstrap.core.services.zshrc import BLOCK_START


def _steps(report) -> list[str]:
    return [r.step for r in report.receipts]


class TestRunInstall:
    def test_full_run(self, settings: Settings, mock_runner: MockRunner):
        report = run_install(settings, RunMode.APPLY, runner=mock_runner, os_name="Linux")
        steps = _steps(report)
        assert steps[0] == "detect-os"
        assert steps[1] == "prerequisites"
        assert steps[2] == "oh-my-zsh"
        assert steps[-1] == "zshrc"
        assert "plugin:zsh-autosuggestions" in steps
        assert "thefuck" in steps
        assert "@openai/codex" in steps
        assert report.ok
        assert BLOCK_START in settings.zshrc_path.read_text()

    def test_command_order(self, settings: Settings, mock_runner: MockRunner):
        run_install(settings, RunMode.APPLY, runner=mock_runner, os_name="Linux")
        log = mock_runner.call_log
        first_clone = next(i for i, c in enumerate(log) if c.startswith("git clone"))
        framework = next(i for i, c in enumerate(log) if "curl -fsSL" in c)
        tool = next(i for i, c in enumerate(log) if "tool install" in c)
        npm = next(i for i, c in enumerate(log) if c.startswith("npm"))
        assert framework < first_clone < tool < npm

    def test_plugins_cloned_into_custom_dir(self, settings: Settings, mock_runner: MockRunner):
        run_install(settings, RunMode.APPLY, runner=mock_runner, os_name="Linux")
        expected = settings.plugins_dir / "fast-syntax-highlighting"
        assert any(c.endswith(str(expected)) for c in mock_runner.call_log)
        assert settings.plugins_dir.is_dir()

    def test_receipt_callback(self, settings: Settings, mock_runner: MockRunner):
        seen = []
        report = run_install(
            settings, RunMode.APPLY,
            runner=mock_runner, os_name="Linux", on_receipt=seen.append,
        )
        assert seen == report.receipts

    def test_to_dict(self, settings: Settings, mock_runner: MockRunner):
        report = run_install(settings, RunMode.APPLY, runner=mock_runner, os_name="Linux")
        data = report.to_dict()
        assert data["run_mode"] == "apply"
        assert data["os"] == "Linux"
        assert data["warnings"] == []
        assert data["rewrite"]["state"] == "new_block_inserted"


class TestFailFast:
    def test_prerequisite_failure_aborts(self, settings: Settings):
        mock = MockRunner(available=["apt", "git"], failures={"apt install": 100})
        with pytest.raises(ProvisionError) as exc:
            run_install(settings, RunMode.APPLY, runner=mock, os_name="Linux")
        assert exc.value.exit_code == 100
        assert not any("git clone" in c for c in mock.call_log)
        assert not settings.zshrc_path.exists()

    def test_framework_failure_aborts(self, settings: Settings):
        mock = MockRunner(available=["apt", "curl"], failures={"curl -fsSL": 7})
        with pytest.raises(ProvisionError) as exc:
            run_install(settings, RunMode.APPLY, runner=mock, os_name="Linux")
        assert exc.value.exit_code == 7
        assert exc.value.receipt.step == "oh-my-zsh"

    def test_brew_failure_is_warning(self, settings: Settings):
        mock = MockRunner(available=["brew", "curl", "uv"], failures={"brew install git": 1})
        report = run_install(settings, RunMode.APPLY, runner=mock, os_name="Darwin")
        assert [r.step for r in report.warnings] == ["prerequisites"]
        assert settings.zshrc_path.exists()


class TestBestEffort:
    def test_clone_failures_continue(self, settings: Settings, mock_runner: MockRunner):
        mock_runner.set_failure("git clone", 128)
        report = run_install(settings, RunMode.APPLY, runner=mock_runner, os_name="Linux")
        assert len(report.warnings) == 4
        assert _steps(report)[-1] == "zshrc"
        assert any(c.startswith("npm") for c in mock_runner.call_log)

    def test_npm_missing_is_skip(self, settings: Settings, mock_runner: MockRunner):
        mock_runner.set_available("npm", False)
        report = run_install(settings, RunMode.APPLY, runner=mock_runner, os_name="Linux")
        codex = next(r for r in report.receipts if r.step == "@openai/codex")
        assert codex.status == "skipped"
        assert report.ok

    def test_no_package_manager(self, settings: Settings):
        mock = MockRunner(available=["curl", "uv"])
        report = run_install(settings, RunMode.APPLY, runner=mock, os_name="Linux")
        prereq = report.receipts[1]
        assert prereq.status == "skipped"
        assert "No supported package manager" in prereq.output


class TestModes:
    def test_dry_run_changes_nothing(self, settings: Settings, mock_runner: MockRunner):
        report = run_install(settings, RunMode.DRY_RUN, runner=mock_runner, os_name="Linux")
        assert mock_runner.call_count == 0
        assert not settings.zshrc_path.exists()
        assert not settings.plugins_dir.exists()
        assert report.receipts[-1].planned

    def test_skip_install(self, settings: Settings, mock_runner: MockRunner):
        report = run_install(
            settings, RunMode.APPLY,
            runner=mock_runner, os_name="Linux", skip_install=True,
        )
        assert _steps(report) == ["detect-os", "zshrc"]
        assert mock_runner.call_count == 0

    def test_restore_runs_first(self, settings: Settings, mock_runner: MockRunner, framework: Path):
        settings.zshrc_path.write_text("\n")
        report = run_install(
            settings, RunMode.APPLY,
            runner=mock_runner, os_name="Linux", restore=True, skip_install=True,
        )
        assert _steps(report) == ["detect-os", "restore-zshrc", "zshrc"]
        text = settings.zshrc_path.read_text()
        assert "source $ZSH/oh-my-zsh.sh" in text
        assert BLOCK_START in text

    def test_missing_curl_aborts_before_plugins(self, settings: Settings):
        mock = MockRunner(available=["apt", "git"])
        with pytest.raises(ProvisionError) as exc:
            run_install(settings, RunMode.APPLY, runner=mock, os_name="Linux")
        assert exc.value.receipt.step == "oh-my-zsh"
        assert exc.value.exit_code == 127
        assert not any(c.startswith("git clone") for c in mock.call_log)
