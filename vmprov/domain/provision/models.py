"""
Provisioning domain models
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class Section:
    """Banner line announcing the next group of steps"""
    title: str


@dataclass
class Echo:
    message: str


@dataclass
class Run:
    """
    One command.

    sudo: the passphrase is piped into `sudo -S`
    best_effort: a failure prints a warning instead of aborting
    """
    argv: List[str]
    sudo: bool = False
    best_effort: bool = False


@dataclass
class AssertNonEmpty:
    """Abort with `message` unless `path` exists and is non-empty (checked with sudo)"""
    path: str
    message: str


@dataclass
class WhenCommand:
    """Run `then` when `command` is on PATH, otherwise print `otherwise`"""
    command: str
    then: List["Step"] = field(default_factory=list)
    otherwise: str = ""


@dataclass
class ProbeService:
    """Print `systemctl is-active <service>` without failing"""
    service: str


Step = Union[Section, Echo, Run, AssertNonEmpty, WhenCommand, ProbeService]


@dataclass
class ScriptPlan:
    """
    Ordered remote steps plus the metadata rendered into the script header.

    Attributes:
        name: File name of the rendered script
        purpose: Header lines describing what the script does
        steps: Steps in execution order
        marker: Argument the rendered script insists on (None: no argument)
    """
    name: str
    purpose: List[str]
    steps: List[Step]
    marker: Optional[str] = None
