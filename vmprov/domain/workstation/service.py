"""
Local workstation bootstrap: git identity, SSH key, mirror repository on GitHub
"""
from pathlib import Path
from typing import Optional

from ...core.constants import (
    DEFAULT_BRANCH,
    DEFAULT_FALLBACK_BRANCH,
    DEFAULT_GIT_REMOTE,
    DEFAULT_GITHUB_REPO,
    DEFAULT_KEY_COMMENT,
    GITHUB_HOSTNAME,
    SSH_KEY_NAME,
)
from ...core.exceptions import WorkstationError
from ...core.interfaces import CommandRunner, PromptProvider
from ...core.logging import get_logger
from ...core.utils import backup_key_pair, generate_ssh_key_pair, public_key_path
from ..preflight import PreflightService

logger = get_logger(__name__)

README_TEXT = """# Janus Local

This is a local environment folder for development.
"""


class WorkstationService:
    """
    Prepares the operator's machine for the provisioning workflows.

    Every step asks first; declining a step skips it.
    """

    def __init__(
        self,
        runner: CommandRunner,
        prompts: PromptProvider,
        preflight: PreflightService,
        mirror_dir: Path,
        ssh_dir: Path,
        repo_name: str = DEFAULT_GITHUB_REPO,
        remote: str = DEFAULT_GIT_REMOTE,
        branch: str = DEFAULT_BRANCH,
    ):
        self.runner = runner
        self.prompts = prompts
        self.preflight = preflight
        self.mirror_dir = Path(mirror_dir).expanduser()
        self.ssh_dir = Path(ssh_dir).expanduser()
        self.repo_name = repo_name
        self.remote = remote
        self.branch = branch

    # ------------------------------------------------------------
    # Git identity
    # ------------------------------------------------------------
    def _global_config(self, key: str) -> str:
        result = self.runner.run(["git", "config", "--global", key])
        return result.stdout.strip() if result.ok else ""

    def configure_identity(self) -> None:
        name = self._global_config("user.name")
        email = self._global_config("user.email")
        if name and email:
            return

        self.prompts.warning("Global Git user.name/email are not fully set.")
        if self.prompts.confirm("Configure them now?"):
            for key, current in (("user.name", name), ("user.email", email)):
                if current:
                    continue
                value = self.prompts.prompt(f"Enter global Git {key}").strip()
                if value:
                    self.runner.run(["git", "config", "--global", key, value])
        else:
            self.prompts.warning("Without Git user.name/email, commits may fail or be anonymous.")
            return

        if not (self._global_config("user.name") and self._global_config("user.email")):
            self.prompts.warning("Still missing user.name/email. If commits fail, please set them manually.")

    # ------------------------------------------------------------
    # SSH key
    # ------------------------------------------------------------
    @property
    def key_path(self) -> Path:
        return self.ssh_dir / SSH_KEY_NAME

    def _generate_key(self) -> Path:
        comment = self.prompts.prompt(
            "Enter a Title (comment) for the new SSH key (e.g., 'my-dev-key')", default=""
        ).strip() or DEFAULT_KEY_COMMENT
        private, _ = generate_ssh_key_pair(self.key_path, comment)
        self.prompts.success(f"New ED25519 key generated at: {private}")
        return Path(private)

    def setup_ssh_key(self) -> Optional[Path]:
        """Generate, rotate or keep ~/.ssh/id_ed25519; None when skipped"""
        if not self.prompts.confirm("Generate or reuse an ED25519 SSH key for GitHub?"):
            self.prompts.info("Skipping SSH key creation step.")
            return None

        pub = public_key_path(self.key_path)
        if self.key_path.exists() and pub.exists():
            self.prompts.info(f"An ED25519 key pair already exists at {self.key_path} / {pub}")
            if not self.prompts.confirm("Create a NEW ED25519 key? (existing one will be backed up)"):
                self.prompts.info("Keeping the existing ED25519 key pair.")
                return self.key_path
            private_backup, public_backup = backup_key_pair(self.key_path)
            self.prompts.info(f"Backed up existing key to: {private_backup} / {public_backup}")

        return self._generate_key()

    # ------------------------------------------------------------
    # GitHub CLI
    # ------------------------------------------------------------
    def ensure_gh(self) -> bool:
        if self.runner.which("gh"):
            return True
        self.prompts.warning("GitHub CLI 'gh' is not installed.")
        if not self.prompts.confirm("Install 'gh' now (Ubuntu/Debian)?"):
            self.prompts.info("Skipping 'gh' install. Aborting creation of new GitHub repo.")
            return False
        self.preflight.install_package("gh")
        if not self.runner.which("gh"):
            raise WorkstationError("'gh' still not found after install attempt. Aborting GH creation.")
        return True

    def _gh_authenticated(self) -> bool:
        return self.runner.run(["gh", "auth", "status", "--hostname", GITHUB_HOSTNAME]).ok

    def ensure_gh_auth(self) -> bool:
        if self._gh_authenticated():
            return True
        self.prompts.warning("You are not authenticated with GitHub CLI.")
        if not self.prompts.confirm("Run 'gh auth login' now?"):
            self.prompts.info("Skipping 'gh auth login'. Aborting GH repo creation.")
            return False
        if not self.runner.run(["gh", "auth", "login"], capture=False).ok:
            raise WorkstationError("'gh auth login' failed or was canceled.")
        if not self._gh_authenticated():
            raise WorkstationError("Still not authenticated. Aborting GH repo creation.")
        return True

    # ------------------------------------------------------------
    # Mirror repository
    # ------------------------------------------------------------
    def _git(self, *args: str):
        return self.runner.run(["git", *args], cwd=self.mirror_dir)

    def init_mirror(self) -> Path:
        """Create the mirror repo with a `main` branch and at least one commit"""
        self.prompts.info(f"Creating or verifying directory: {self.mirror_dir}")
        self.mirror_dir.mkdir(parents=True, exist_ok=True)

        if not (self.mirror_dir / ".git").is_dir():
            self.prompts.info(f"Initializing a local Git repo in {self.mirror_dir}...")
            if not self._git("init", ".").ok:
                raise WorkstationError(f"git init failed in {self.mirror_dir}")

        current = self._git("branch", "--show-current").stdout.strip()
        if not current:
            self._git("checkout", "-b", self.branch)
        elif current == DEFAULT_FALLBACK_BRANCH and self.branch != DEFAULT_FALLBACK_BRANCH:
            self._git("branch", "-m", DEFAULT_FALLBACK_BRANCH, self.branch)

        readme = self.mirror_dir / "README.md"
        if not readme.exists():
            readme.write_text(README_TEXT, encoding="utf-8")
            self._git("add", "README.md")
            if not self._git("commit", "-m", "Initial commit with README").ok:
                self.prompts.warning("Initial README commit failed; continuing.")

        if not self._git("show-ref", "--quiet", "--heads").ok:
            result = self._git("commit", "--allow-empty", "-m", f"chore: empty commit for {self.mirror_dir.name}")
            if not result.ok:
                raise WorkstationError(f"Could not create an initial commit: {result.stderr.strip()}")

        return self.mirror_dir

    def create_github_repo(self) -> Optional[str]:
        """`gh repo create` from the mirror, asking for another name until it works or the user gives up"""
        name = self.repo_name
        while True:
            self.prompts.info(f"Creating a new GitHub repo '{name}' from {self.mirror_dir}...")
            result = self.runner.run(
                ["gh", "repo", "create", name, "--public", "--source=.",
                 f"--remote={self.remote}", "--push"],
                cwd=self.mirror_dir,
                capture=False,
            )
            if result.ok:
                self.prompts.success(f"Successfully created & pushed to GitHub repo '{name}'.")
                return name
            self.prompts.error(f"Possibly the repo name '{name}' already exists, or creation failed.")
            name = self.prompts.prompt("Enter a NEW GitHub repo name or press ENTER to cancel", default="").strip()
            if not name:
                self.prompts.info("Aborting GitHub repo creation.")
                return None

    # ------------------------------------------------------------
    # Whole flow
    # ------------------------------------------------------------
    def run(self) -> Optional[str]:
        """Returns the GitHub repo name when one was created"""
        self.preflight.check_not_root()
        self.preflight.ensure_command("git")
        self.configure_identity()
        self.setup_ssh_key()

        if not self.prompts.confirm("Do you want to create/push a new local Git repo to GitHub now?"):
            return None
        if not self.ensure_gh() or not self.ensure_gh_auth():
            return None

        self.init_mirror()
        return self.create_github_repo()
