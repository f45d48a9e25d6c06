from __future__ import annotations
import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple
import sys
import time

import paramiko

from .credentials import Credential
from .constants import DEFAULT_SSH_PORT
from .exceptions import RemoteExecutionError
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class ClientConfig:
    host: str
    user: str
    password: Credential = field(repr=False)
    port: int = DEFAULT_SSH_PORT
    timeout: Optional[float] = None


class RemoteClient:
    """
    Paramiko SSHClient wrapper for password logins:
    - keeps host / user / port explicitly
    - unknown host keys are accepted and remembered (trust on first use)
    - password goes straight to paramiko, never to a child process argv
    - exec / sftp helpers, with-statement support
    """
    def __init__(
        self,
        host: str,
        user: str,
        password: Credential,
        port: int = DEFAULT_SSH_PORT,
        timeout: Optional[float] = None,
    ) -> None:
        self.config = ClientConfig(
            host=host,
            user=user,
            password=password,
            port=port,
            timeout=timeout,
        )

        self.client = paramiko.SSHClient()
        self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        self._sftp: Optional[paramiko.SFTPClient] = None
        self._home: Optional[str] = None

    # --------------------
    # Connection management
    # --------------------
    def connect(self) -> None:
        cfg = self.config
        try:
            self.client.load_system_host_keys()
        except OSError as e:
            logger.debug(f"no system known_hosts: {e}")
        self.client.connect(
            hostname=cfg.host,
            port=cfg.port,
            username=cfg.user,
            password=cfg.password.reveal(),
            timeout=cfg.timeout,
            allow_agent=False,
            look_for_keys=False,
        )

    # --------------------
    # Helpers
    # --------------------
    def exec(self, cmd: str) -> Tuple[str, str]:
        """Run a command, return (stdout, stderr)"""
        stdin, stdout, stderr = self.client.exec_command(cmd)
        out = stdout.read().decode('utf-8', errors='replace')
        err = stderr.read().decode('utf-8', errors='replace')
        return out, err

    def exec_with_code_streaming(
        self,
        cmd: str,
        stdin_data: Optional[str] = None,
        stdout_callback: Optional[Callable[[str], None]] = None,
        stderr_callback: Optional[Callable[[str], None]] = None,
    ) -> Tuple[str, str, int]:
        """
        Run a command with live output, return (stdout, stderr, exit_code).
        
        Args:
            cmd: command line for the remote shell
            stdin_data: written to the command's stdin, then stdin is closed
            stdout_callback: receives stdout chunks as they arrive
            stderr_callback: receives stderr chunks as they arrive
        """
        stdin, stdout, stderr = self.client.exec_command(cmd)
        if stdin_data is not None:
            stdin.write(stdin_data)
            stdin.flush()
        stdin.channel.shutdown_write()

        channel = stdout.channel
        out_buf: List[str] = []
        err_buf: List[str] = []
        streams = [
            (channel.recv_ready, channel.recv, out_buf, stdout_callback, sys.stdout),
            (channel.recv_stderr_ready, channel.recv_stderr, err_buf, stderr_callback, sys.stderr),
        ]
        # One decoder per stream so a character split across chunks survives
        decoders = [codecs.getincrementaldecoder("utf-8")(errors="replace") for _ in streams]

        def emit(text: str, buf, callback, fallback) -> None:
            if not text:
                return
            buf.append(text)
            if callback:
                callback(text)
            else:
                fallback.write(text)
                fallback.flush()

        def drain() -> bool:
            got = False
            for (ready, recv, buf, callback, fallback), decoder in zip(streams, decoders):
                while ready():
                    raw = recv(4096)
                    if not raw:
                        break
                    got = True
                    emit(decoder.decode(raw), buf, callback, fallback)
            return got

        while not channel.exit_status_ready():
            if not drain():
                time.sleep(0.01)
        drain()
        for (_, _, buf, callback, fallback), decoder in zip(streams, decoders):
            emit(decoder.decode(b"", final=True), buf, callback, fallback)

        exit_code = channel.recv_exit_status()
        return ''.join(out_buf), ''.join(err_buf), exit_code

    def open_sftp(self) -> paramiko.SFTPClient:
        """SFTP client, reusing the open one"""
        if self._sftp is None or self._sftp.get_channel() is None:
            self._sftp = self.client.open_sftp()
        return self._sftp

    def remote_home(self) -> str:
        if self._home is None:
            out, err = self.exec("printf '%s' \"$HOME\"")
            home = out.strip()
            if not home:
                raise RemoteExecutionError(
                    f"Could not resolve $HOME for {self.config.user}@{self.config.host}: {err.strip()}"
                )
            self._home = home
        return self._home

    def expand_path(self, path: str) -> str:
        """Expand a leading ~ to the remote $HOME"""
        if path == "~":
            return self.remote_home()
        if path.startswith("~/"):
            return self.remote_home() + path[1:]
        return path

    def put(self, local_path: Path, remote_path: str, mode: int = 0o755) -> str:
        target = self.expand_path(remote_path)
        sftp = self.open_sftp()
        sftp.put(str(local_path), target)
        sftp.chmod(target, mode)
        return target

    # --------------------
    # Context manager
    # --------------------
    def close(self) -> None:
        if self._sftp:
            try:
                self._sftp.close()
            except (OSError, EOFError) as e:
                logger.debug(f"sftp close failed: {e}")
            self._sftp = None
        self.client.close()

    def __enter__(self) -> RemoteClient:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
