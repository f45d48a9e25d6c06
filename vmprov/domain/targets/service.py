"""
Target config workflow: load, or prompt and persist
"""
from pathlib import Path
from typing import Optional

from ...core.credentials import Credential
from ...core.interfaces import PromptProvider
from ...core.logging import get_logger
from ...infrastructure.state import FileTargetConfigStore, ensure_ignored
from .models import ServiceProfile, TargetConfig

logger = get_logger(__name__)


def config_store(folder: Path, profile: ServiceProfile) -> FileTargetConfigStore:
    return FileTargetConfigStore(
        path=Path(folder) / profile.config_name,
        key_prefix=profile.key_prefix,
        title=f"{profile.display_name} VM config for password-based SSH",
    )


class TargetConfigService:
    """Reads or interactively creates the config of one target"""

    def __init__(self, prompts: PromptProvider):
        self.prompts = prompts

    def protect(self, folder: Path, profile: ServiceProfile) -> None:
        """Keep the secret-bearing config file out of version control"""
        if ensure_ignored(folder, profile.config_name):
            self.prompts.info(f"Added '{profile.config_name}' to {Path(folder) / '.gitignore'}")

    def load_or_create(self, folder: Path, profile: ServiceProfile) -> TargetConfig:
        store = config_store(folder, profile)
        record = store.load()
        if record is not None:
            self.prompts.info(f"Found existing config at {store.path}")
            self.prompts.info(
                f"Loaded {profile.display_name} VM config: host={record['host']} user={record['user']}"
            )
            return TargetConfig(
                host=record["host"],
                user=record["user"],
                password=Credential(record["password"]),
            )

        self.prompts.info(f"No existing {profile.config_name} found. We'll create one.")
        config = self.ask(profile)
        store.save({
            "host": config.host,
            "user": config.user,
            "password": config.password.reveal(),
        })
        logger.info(f"Saved config to {store.path}")
        self.prompts.success(f"Saved config to {store.path} (excluded from Git by .gitignore)")
        return config

    def ask(self, profile: ServiceProfile, host: Optional[str] = None) -> TargetConfig:
        host = host or self.prompts.prompt(f"Enter {profile.display_name} VM IP/hostname")
        user = self.prompts.prompt(f"Enter SSH username for {host}")
        password = self.prompts.prompt(f"Enter password for {user}@{host}", password=True)
        return TargetConfig(host=host.strip(), user=user.strip(), password=Credential(password))
