"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Sequence, Any

from .results import CommandResult, RemoteResult


class PromptProvider(ABC):
    """User prompt interface"""
    
    @abstractmethod
    def prompt(self, message: str, default: Optional[str] = None, password: bool = False) -> str:
        """Prompt user for input"""
        pass
    
    @abstractmethod
    def confirm(self, message: str, default: bool = False) -> bool:
        """Prompt user for confirmation"""
        pass

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass


class CommandRunner(ABC):
    """Local process runner interface"""

    @abstractmethod
    def run(
        self,
        argv: Sequence[str],
        cwd: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
        input_data: Optional[str] = None,
        capture: bool = True,
    ) -> CommandResult:
        """Run a command and return its result without raising on failure"""
        pass

    @abstractmethod
    def which(self, name: str) -> Optional[str]:
        """Return the full path of an executable, or None"""
        pass


class RemoteTransport(ABC):
    """Password-authenticated remote shell and secure copy"""

    @abstractmethod
    def connect(self) -> None:
        pass

    @abstractmethod
    def upload(self, local_path: Path, remote_path: str) -> str:
        """Copy a local file to the remote host, return the resolved remote path"""
        pass

    @abstractmethod
    def run(
        self,
        command: str,
        stdin_data: Optional[str] = None,
        on_output: Optional[Callable[[str], None]] = None,
    ) -> RemoteResult:
        """Run a shell command on the remote host"""
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self) -> "RemoteTransport":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class TransportFactory(ABC):
    """Remote transport factory interface"""

    @abstractmethod
    def create(self, params: Dict[str, Any]) -> RemoteTransport:
        """Create (not yet connected) transport"""
        pass
