"""
In-process SSH transport (paramiko)
"""
import socket
from pathlib import Path
from typing import Callable, Optional

import paramiko

from ...core.client import RemoteClient
from ...core.constants import DEFAULT_SSH_PORT
from ...core.credentials import Credential
from ...core.exceptions import ConnectionError, RemoteExecutionError
from ...core.interfaces import RemoteTransport
from ...core.logging import get_logger
from ...core.results import RemoteResult

logger = get_logger(__name__)


class ParamikoTransport(RemoteTransport):
    """Password login through paramiko; SFTP stands in for scp"""

    def __init__(
        self,
        host: str,
        user: str,
        password: Credential,
        port: int = DEFAULT_SSH_PORT,
        timeout: Optional[float] = None,
    ):
        self.host = host
        self.user = user
        self.port = port
        self._client = RemoteClient(
            host=host,
            user=user,
            password=password,
            port=port,
            timeout=timeout,
        )
        self._connected = False

    def connect(self) -> None:
        if self._connected:
            return
        try:
            self._client.connect()
        except paramiko.AuthenticationException as e:
            raise ConnectionError(f"Authentication failed for {self.user}@{self.host}") from e
        except (paramiko.SSHException, socket.error) as e:
            raise ConnectionError(f"Failed to connect to {self.host}:{self.port}: {e}") from e
        self._connected = True
        logger.info(f"Connected to {self.user}@{self.host}:{self.port}")

    def upload(self, local_path: Path, remote_path: str) -> str:
        self.connect()
        try:
            return self._client.put(Path(local_path), remote_path)
        except (IOError, paramiko.SSHException) as e:
            raise RemoteExecutionError(f"Failed to copy {local_path} to {self.host}:{remote_path}: {e}") from e

    def run(
        self,
        command: str,
        stdin_data: Optional[str] = None,
        on_output: Optional[Callable[[str], None]] = None,
    ) -> RemoteResult:
        self.connect()
        try:
            out, err, code = self._client.exec_with_code_streaming(
                command,
                stdin_data=stdin_data,
                stdout_callback=on_output,
                stderr_callback=on_output,
            )
        except paramiko.SSHException as e:
            raise RemoteExecutionError(f"Remote command failed on {self.host}: {e}") from e
        return RemoteResult(stdout=out, stderr=err, exit_code=code)

    def close(self) -> None:
        if self._connected:
            self._client.close()
            self._connected = False
