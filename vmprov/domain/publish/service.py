"""
Post-provision publishing to the mirror repository
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ...core.constants import DEFAULT_BRANCH, DEFAULT_FALLBACK_BRANCH, DEFAULT_GIT_REMOTE
from ...core.exceptions import PublishError
from ...core.interfaces import CommandRunner, PromptProvider
from ...core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PublishResult:
    committed: bool
    pushed_branch: Optional[str] = None


class GitPublisher:
    """
    Stage, commit and push a managed folder.

    Push goes to `branch` first and to `fallback_branch` when that fails;
    only a double failure is an error.
    """

    def __init__(
        self,
        runner: CommandRunner,
        prompts: PromptProvider,
        mirror_dir: Path,
        remote: str = DEFAULT_GIT_REMOTE,
        branch: str = DEFAULT_BRANCH,
        fallback_branch: str = DEFAULT_FALLBACK_BRANCH,
    ):
        self.runner = runner
        self.prompts = prompts
        self.mirror_dir = Path(mirror_dir)
        self.remote = remote
        self.branch = branch
        self.fallback_branch = fallback_branch

    def _git(self, *args: str, capture: bool = True):
        return self.runner.run(["git", *args], cwd=self.mirror_dir, capture=capture)

    def pathspec(self, folder: Path) -> str:
        """Folder relative to the mirror when it sits directly under it, else the whole mirror"""
        folder = Path(folder)
        if folder.parent.resolve() == self.mirror_dir.resolve():
            return folder.name
        return "."

    def stage(self, pathspec: str) -> None:
        result = self._git("add", pathspec)
        if not result.ok:
            raise PublishError(f"git add {pathspec} failed: {result.stderr.strip()}")

    def has_changes(self, pathspec: str) -> bool:
        result = self._git("status", "--porcelain", "--", pathspec)
        if not result.ok:
            raise PublishError(f"git status failed: {result.stderr.strip()}")
        return bool(result.stdout.strip())

    def commit(self, message: str) -> None:
        result = self._git("commit", "-m", message)
        if not result.ok:
            raise PublishError(f"git commit failed: {(result.stderr or result.stdout).strip()}")

    def push(self) -> str:
        """Push, falling back to the secondary branch; returns the branch that went out"""
        self.prompts.info(f"Pushing to {self.remote} {self.branch}...")
        if self._git("push", self.remote, self.branch, capture=False).ok:
            return self.branch

        self.prompts.warning(f"Push to '{self.branch}' failed; trying '{self.fallback_branch}'...")
        if self._git("push", self.remote, self.fallback_branch, capture=False).ok:
            return self.fallback_branch

        raise PublishError("Push failed entirely. Check your branch/remote config.")

    def publish(self, folder: Path, message: str, always_push: bool = False) -> PublishResult:
        """
        Stage `folder`, commit when something changed, then push.

        always_push: push even when nothing new was committed, so earlier
        local commits still reach the remote.
        """
        spec = self.pathspec(folder)
        self.stage(spec)

        committed = False
        if self.has_changes(spec):
            self.commit(message)
            committed = True
            self.prompts.success(f"Committed changes in {spec}")
        else:
            self.prompts.info(f"No new changes to commit in {spec}.")

        if not committed and not always_push:
            return PublishResult(committed=False)

        branch = self.push()
        self.prompts.success(f"Pushed to {self.remote}/{branch}")
        return PublishResult(committed=committed, pushed_branch=branch)
