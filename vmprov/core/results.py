"""
Command result records
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """Result of a local command"""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class RemoteResult:
    """Result of a remote command"""
    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0
