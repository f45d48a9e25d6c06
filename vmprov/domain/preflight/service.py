"""
Local preflight checks
"""
from pathlib import Path
from typing import Callable, Iterable, Optional

from ...core.exceptions import PreflightError
from ...core.interfaces import CommandRunner, PromptProvider
from ...core.logging import get_logger
from ...core.shell import is_superuser

logger = get_logger(__name__)


class PreflightService:
    """
    Fail-fast checks that run before anything is written.

    Order: privilege level, mirror repository, required utilities. The only
    side effect is an optional `sudo apt-get install` of a missing utility
    after the operator confirms it.
    """

    def __init__(
        self,
        runner: CommandRunner,
        prompts: PromptProvider,
        superuser_check: Optional[Callable[[], bool]] = None,
    ):
        self.runner = runner
        self.prompts = prompts
        self.superuser_check = superuser_check

    def check_not_root(self) -> None:
        check = self.superuser_check or is_superuser
        if check():
            raise PreflightError("Running as root is discouraged. Exiting.")

    def check_mirror(self, mirror_dir: Path) -> Path:
        mirror = Path(mirror_dir).expanduser()
        if not (mirror / ".git").is_dir():
            raise PreflightError(
                f"{mirror} is not a Git repo or does not exist. "
                f"Please ensure you have a local Git repo in {mirror} pointing to GitHub."
            )
        return mirror

    def ensure_command(self, name: str, package: Optional[str] = None) -> None:
        """Install `package` (default: `name`) through apt-get if `name` is missing"""
        if self.runner.which(name):
            return
        package = package or name
        self.prompts.warning(f"Command '{name}' not found.")
        if not self.prompts.confirm(f"Install '{package}' now (Ubuntu/Debian)?"):
            raise PreflightError(f"Cannot proceed without '{name}'. Exiting.")
        self.install_package(package)
        if not self.runner.which(name):
            raise PreflightError(f"'{name}' still not found after installing '{package}'.")

    def install_package(self, package: str) -> None:
        if not self.runner.which("sudo"):
            raise PreflightError(f"'sudo' not available. Cannot install '{package}'.")
        logger.info(f"Installing {package} with apt-get")
        for argv in (
            ["sudo", "apt-get", "update", "-y"],
            ["sudo", "apt-get", "install", "-y", package],
        ):
            result = self.runner.run(argv, capture=False)
            if not result.ok:
                raise PreflightError(f"'{' '.join(argv)}' failed with exit code {result.returncode}")

    def run(self, mirror_dir: Path, required: Iterable[str] = ("git",)) -> Path:
        """All checks; returns the resolved mirror directory"""
        self.check_not_root()
        mirror = self.check_mirror(mirror_dir)
        for name in required:
            self.ensure_command(name)
        return mirror
