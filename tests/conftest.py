"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from zsh_bootstrap.adapters.mock import MockRunner
from zsh_bootstrap.core.models.settings import Settings

TEMPLATE_TEXT = """\
export ZSH="$HOME/.oh-my-zsh"
ZSH_THEME="robbyrussell"
plugins=(git)
source $ZSH/oh-my-zsh.sh
"""


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own config and ZSH_CUSTOM out of tests."""
    for var in ("ZSH_BOOTSTRAP_CONFIG", "ZSH_CUSTOM", "ZSHB_LOG_FILE", "ZSHB_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Return a temporary home directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


@pytest.fixture
def settings(home: Path) -> Settings:
    """Settings rooted at the temporary home."""
    return Settings(home=home)


@pytest.fixture
def framework(settings: Settings) -> Path:
    """An installed framework directory with its .zshrc template."""
    template = settings.template_path
    template.parent.mkdir(parents=True)
    template.write_text(TEMPLATE_TEXT)
    return settings.framework_path


@pytest.fixture
def mock_runner() -> MockRunner:
    """A runner with the usual Linux toolchain on PATH."""
    return MockRunner(available=["apt", "git", "curl", "uv", "npm"])
