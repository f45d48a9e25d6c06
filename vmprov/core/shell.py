"""
Local command execution
"""
import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .interfaces import CommandRunner
from .logging import get_logger
from .results import CommandResult

logger = get_logger(__name__)


class LocalCommandRunner(CommandRunner):
    """
    subprocess-backed runner.

    Environment overrides are merged over os.environ. With capture=False the
    child inherits the terminal, which is what interactive tools such as
    `gh auth login` or `sudo apt-get` need.
    """

    def run(
        self,
        argv: Sequence[str],
        cwd: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
        input_data: Optional[str] = None,
        capture: bool = True,
    ) -> CommandResult:
        logger.debug(f"[local] {shlex.join(argv)}")
        child_env = None
        if env:
            child_env = {**os.environ, **env}
        try:
            proc = subprocess.run(
                list(argv),
                cwd=str(cwd) if cwd else None,
                env=child_env,
                input=input_data,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError:
            return CommandResult(returncode=127, stderr=f"{argv[0]}: command not found")
        return CommandResult(
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)


def is_superuser() -> bool:
    """True when the effective uid is root"""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0
