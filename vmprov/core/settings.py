"""
Runtime settings
"""
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import (
    DEFAULT_BRANCH,
    DEFAULT_FALLBACK_BRANCH,
    DEFAULT_GIT_REMOTE,
    DEFAULT_GITHUB_REPO,
    DEFAULT_MIRROR_DIR,
    DEFAULT_REMOTE_SCRIPT_DIR,
    DEFAULT_SSH_PORT,
    DEFAULT_TRANSPORT,
    SSH_DIR,
    TRANSPORTS,
)
from .exceptions import ConfigError


@dataclass
class Settings:
    """Settings shared by every workflow"""
    mirror_dir: str = DEFAULT_MIRROR_DIR
    remote: str = DEFAULT_GIT_REMOTE
    branch: str = DEFAULT_BRANCH
    fallback_branch: str = DEFAULT_FALLBACK_BRANCH
    remote_script_dir: str = DEFAULT_REMOTE_SCRIPT_DIR
    transport: str = DEFAULT_TRANSPORT
    port: int = DEFAULT_SSH_PORT
    connect_timeout: Optional[float] = None
    github_repo: str = DEFAULT_GITHUB_REPO
    ssh_dir: str = SSH_DIR

    def validate(self) -> None:
        if self.transport not in TRANSPORTS:
            raise ConfigError(f"Invalid transport: {self.transport}, must be one of {', '.join(TRANSPORTS)}")
        if not (1 <= int(self.port) <= 65535):
            raise ConfigError(f"Invalid port: {self.port}")
        if self.connect_timeout is not None and float(self.connect_timeout) <= 0:
            raise ConfigError(f"Invalid connect_timeout: {self.connect_timeout}")
        if not self.branch or not self.fallback_branch:
            raise ConfigError("branch and fallback_branch must not be empty")

    @property
    def mirror_path(self) -> Path:
        return Path(self.mirror_dir).expanduser()

    @property
    def ssh_path(self) -> Path:
        return Path(self.ssh_dir).expanduser()

    @property
    def required_commands(self) -> List[str]:
        """Local utilities the selected transport needs"""
        required = ["git"]
        if self.transport == "sshpass":
            required.append("sshpass")
        return required

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Known keys only; unknown keys are ignored"""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and v is not None}
        settings = cls(**values)
        try:
            settings.port = int(settings.port)
            if settings.connect_timeout is not None:
                settings.connect_timeout = float(settings.connect_timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e
        settings.validate()
        return settings
