"""
Core infrastructure layer
"""
from .client import RemoteClient, ClientConfig
from .constants import *
from .credentials import Credential
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import CommandRunner, PromptProvider, RemoteTransport, TransportFactory
from .results import CommandResult, RemoteResult
from .settings import Settings
from .shell import LocalCommandRunner, is_superuser
from .utils import generate_ssh_key_pair, backup_key_pair

__all__ = [
    "RemoteClient",
    "ClientConfig",
    "Credential",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "CommandRunner",
    "PromptProvider",
    "RemoteTransport",
    "TransportFactory",
    "CommandResult",
    "RemoteResult",
    "Settings",
    "LocalCommandRunner",
    "is_superuser",
    "generate_ssh_key_pair",
    "backup_key_pair",
]
