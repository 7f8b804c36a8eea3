"""
Managed block rendering.

The block is a pure function of its inputs: no timestamps, no reads
of the current file. Everything in it guards itself at shell time,
so sourcing ``~/.zshrc`` repeatedly never duplicates a PATH entry and
the alias hook is harmless before its tool is installed.
"""

from __future__ import annotations

from collections.abc import Sequence

from zsh_bootstrap.core.models.settings import Settings
from zsh_bootstrap.core.models.zshrc import ToolAliasHook
from zsh_bootstrap.core.services.zshrc import BLOCK_END, BLOCK_START

BLOCK_NOTICE = "# Generated by zsh-bootstrap; edits inside this block are overwritten."

DEFAULT_COMPLETION_HOOK = "\n".join([
    "# completions (zsh-completions)",
    "fpath+=${ZSH_CUSTOM:-$HOME/.oh-my-zsh/custom}/plugins/zsh-completions/src",
    "autoload -Uz compinit && compinit",
])

THEFUCK_HOOK = ToolAliasHook(
    tool="thefuck",
    init='eval "$(thefuck --alias)"',
    comment="# thefuck alias",
)


def render_block(
    plugins: Sequence[str],
    path_entries: Sequence[str],
    completion_hook: str,
    tool_alias_hook: ToolAliasHook | None,
) -> str:
    """Render the managed block, markers included, without a trailing newline."""
    lines: list[str] = [BLOCK_START, BLOCK_NOTICE]
    lines.append(f"plugins=({' '.join(plugins)})")

    for entry in path_entries:
        lines.append("")
        lines.extend(_path_directive(entry))

    if completion_hook.strip():
        lines.append("")
        lines.extend(completion_hook.strip("\n").split("\n"))

    if tool_alias_hook is not None:
        lines.append("")
        lines.extend(_alias_hook(tool_alias_hook))

    lines.append(BLOCK_END)
    return "\n".join(lines)


def render_default_block(settings: Settings) -> str:
    """Render the block for the configured plugins and PATH entries."""
    return render_block(
        plugins=settings.plugins,
        path_entries=settings.path_entries,
        completion_hook=DEFAULT_COMPLETION_HOOK,
        tool_alias_hook=THEFUCK_HOOK,
    )


def _path_directive(entry: str) -> list[str]:
    """Prepend ``entry`` to PATH unless it is already there."""
    return [
        f"# PATH: {entry}",
        'case ":$PATH:" in',
        f'  *":{entry}:"*) ;;',
        f'  *) export PATH="{entry}:$PATH" ;;',
        "esac",
    ]


def _alias_hook(hook: ToolAliasHook) -> list[str]:
    lines = [hook.comment] if hook.comment else []
    lines.extend([
        f"if command -v {hook.tool} >/dev/null 2>&1; then",
        f"  {hook.init}",
        "fi",
    ])
    return lines
