"""
OpenSSH transport driven through sshpass
"""
import contextlib
import os
import subprocess
import threading
from pathlib import Path
from typing import Callable, List, Optional

from ...core.constants import DEFAULT_SSH_PORT, SSHPASS_ENV
from ...core.credentials import Credential
from ...core.exceptions import RemoteExecutionError
from ...core.interfaces import CommandRunner, RemoteTransport
from ...core.logging import get_logger
from ...core.results import RemoteResult

logger = get_logger(__name__)

HOST_KEY_OPTIONS = ["-o", "StrictHostKeyChecking=accept-new"]


class SshpassTransport(RemoteTransport):
    """
    `sshpass -e ssh` / `sshpass -e scp`.

    The password travels in the SSHPASS variable of the child environment,
    so it stays out of the process list.
    """

    def __init__(
        self,
        host: str,
        user: str,
        password: Credential,
        runner: CommandRunner,
        port: int = DEFAULT_SSH_PORT,
        timeout: Optional[float] = None,
    ):
        self.host = host
        self.user = user
        self.password = password
        self.runner = runner
        self.port = port
        self.timeout = timeout

    @property
    def destination(self) -> str:
        return f"{self.user}@{self.host}"

    def _options(self) -> List[str]:
        options = list(HOST_KEY_OPTIONS)
        if self.timeout:
            options.extend(["-o", f"ConnectTimeout={int(self.timeout)}"])
        return options

    def _env(self):
        return {SSHPASS_ENV: self.password.reveal()}

    def connect(self) -> None:
        # Every call opens its own connection
        pass

    def upload(self, local_path: Path, remote_path: str) -> str:
        argv = [
            "sshpass", "-e", "scp", *self._options(), "-P", str(self.port),
            str(local_path), f"{self.destination}:{remote_path}",
        ]
        result = self.runner.run(argv, env=self._env())
        if not result.ok:
            raise RemoteExecutionError(
                f"scp to {self.destination}:{remote_path} failed: {result.stderr.strip()}",
                exit_code=result.returncode,
            )
        return remote_path

    def ssh_argv(self, command: str) -> List[str]:
        return [
            "sshpass", "-e", "ssh", *self._options(), "-p", str(self.port),
            self.destination, command,
        ]

    def run(
        self,
        command: str,
        stdin_data: Optional[str] = None,
        on_output: Optional[Callable[[str], None]] = None,
    ) -> RemoteResult:
        argv = self.ssh_argv(command)
        logger.debug(f"[ssh] {self.destination}: {command}")
        proc = subprocess.Popen(
            argv,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env={**os.environ, **self._env()},
            # apt output is not always valid UTF-8
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
        out_buf: List[str] = []
        err_buf: List[str] = []

        def pump(stream, buf):
            for line in stream:
                buf.append(line)
                if on_output:
                    on_output(line)

        readers = [
            threading.Thread(target=pump, args=(proc.stdout, out_buf), daemon=True),
            threading.Thread(target=pump, args=(proc.stderr, err_buf), daemon=True),
        ]
        for reader in readers:
            reader.start()

        try:
            if stdin_data is not None:
                proc.stdin.write(stdin_data)
        except BrokenPipeError:
            logger.debug("ssh closed stdin early")
        with contextlib.suppress(BrokenPipeError):
            proc.stdin.close()

        code = proc.wait()
        for reader in readers:
            reader.join()
        return RemoteResult(stdout="".join(out_buf), stderr="".join(err_buf), exit_code=code)

    def close(self) -> None:
        pass
