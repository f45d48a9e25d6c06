"""
Transport factory implementation
"""
from typing import Dict, Any, Optional

from ...core.constants import DEFAULT_SSH_PORT, DEFAULT_TRANSPORT
from ...core.exceptions import ConfigError
from ...core.interfaces import CommandRunner, RemoteTransport, TransportFactory
from ...core.shell import LocalCommandRunner
from ...infrastructure.transport import ParamikoTransport, SshpassTransport


class RemoteTransportFactory(TransportFactory):
    """Builds the transport named by params["transport"]"""
    
    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or LocalCommandRunner()
    
    def create(self, params: Dict[str, Any]) -> RemoteTransport:
        """
        Create an unconnected transport.
        
        Args:
            params: host, user, password (Credential), port, timeout, transport
        
        Returns:
            RemoteTransport; connect() happens on first use or on `with`
        """
        kind = params.get("transport", DEFAULT_TRANSPORT)
        common = dict(
            host=params["host"],
            user=params["user"],
            password=params["password"],
            port=params.get("port", DEFAULT_SSH_PORT),
            timeout=params.get("timeout"),
        )
        if kind == "paramiko":
            return ParamikoTransport(**common)
        if kind == "sshpass":
            return SshpassTransport(runner=self.runner, **common)
        raise ConfigError(f"Unknown transport: {kind}")
