"""
Remote transports
"""
from .ssh import ParamikoTransport
from .sshpass import SshpassTransport

__all__ = ["ParamikoTransport", "SshpassTransport"]
