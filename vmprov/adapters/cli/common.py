"""
Shared CLI plumbing
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from ...core.exceptions import ConfigError
from ...core.logging import get_stderr_console
from ...core.settings import Settings
from ..config.loader import ConfigLoader

stderr_console = get_stderr_console()


@dataclass
class CliState:
    """Options from the top-level callback"""
    config_path: Optional[Path] = None
    mirror: Optional[Path] = None


def load_settings(ctx: typer.Context) -> Settings:
    """Settings for the current invocation; exits 1 on bad configuration"""
    state = ctx.obj if isinstance(ctx.obj, CliState) else CliState()
    overrides = {"mirror_dir": str(state.mirror) if state.mirror else None}
    try:
        return ConfigLoader().load(toml_path=state.config_path, cli_overrides=overrides)
    except ConfigError as e:
        fail("Config Error", e)


def fail(label: str, error: object) -> None:
    stderr_console.print(f"[red]{label}:[/red] {error}", markup=True, highlight=False)
    raise typer.Exit(1)
