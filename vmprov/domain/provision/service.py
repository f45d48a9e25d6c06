"""
Remote provisioning service
"""
import shlex
from pathlib import Path
from typing import Callable, Optional, Sequence

from ...core.constants import DEFAULT_INTERPRETER, SUDO_PASS_ENV
from ...core.credentials import Credential
from ...core.exceptions import RemoteExecutionError
from ...core.interfaces import RemoteTransport
from ...core.logging import get_logger
from ...core.results import RemoteResult
from ..targets.models import ServiceStatus

logger = get_logger(__name__)


def remote_path_arg(path: str) -> str:
    """Quote a remote path for the shell, leaving a leading ~/ expandable"""
    if path == "~":
        return path
    if path.startswith("~/"):
        return "~/" + shlex.quote(path[2:])
    return shlex.quote(path)


def build_command(
    remote_path: str,
    args: Sequence[str] = (),
    with_sudo_password: bool = False,
    interpreter: str = DEFAULT_INTERPRETER,
) -> str:
    """
    Remote command line running a script.

    With a sudo password the script's environment gets SUDO_PASS from the
    first stdin line, so the secret is never part of a command line.
    """
    parts = [interpreter, remote_path_arg(remote_path), *(shlex.quote(a) for a in args)]
    cmd = " ".join(parts)
    if with_sudo_password:
        cmd = f"IFS= read -r {SUDO_PASS_ENV}; export {SUDO_PASS_ENV}; {cmd}"
    return cmd


class ProvisionService:
    """
    Copies a script to the target and runs it there.

    Any non-zero exit becomes RemoteExecutionError; nothing is retried.
    """

    def __init__(
        self,
        transport: RemoteTransport,
        on_output: Optional[Callable[[str], None]] = None,
    ):
        self.transport = transport
        self.on_output = on_output

    def ensure_remote_dir(self, path: str) -> None:
        result = self.transport.run(f"mkdir -p {remote_path_arg(path)}")
        if not result.ok:
            raise RemoteExecutionError(
                f"Could not create {path} on the remote host: {result.stderr.strip()}",
                exit_code=result.exit_code,
            )

    def upload(self, local_path: Path, remote_path: str) -> str:
        logger.info(f"Copying {local_path} to {remote_path}")
        return self.transport.upload(Path(local_path), remote_path)

    def run_script(
        self,
        remote_path: str,
        args: Sequence[str] = (),
        sudo_password: Optional[Credential] = None,
    ) -> RemoteResult:
        cmd = build_command(remote_path, args, with_sudo_password=sudo_password is not None)
        logger.info(f"[run] {cmd}")
        stdin_data = sudo_password.reveal() + "\n" if sudo_password is not None else None
        result = self.transport.run(cmd, stdin_data=stdin_data, on_output=self.on_output)
        if not result.ok:
            raise RemoteExecutionError(
                f"Remote script {remote_path} failed with exit code {result.exit_code}",
                exit_code=result.exit_code,
            )
        return result

    def provision(
        self,
        local_script: Path,
        remote_path: str,
        sudo_password: Credential,
        args: Sequence[str] = (),
    ) -> RemoteResult:
        """Upload, then run with the passphrase available to `sudo -S`"""
        self.upload(local_script, remote_path)
        return self.run_script(remote_path, args=args, sudo_password=sudo_password)

    def probe_service(self, service: str) -> ServiceStatus:
        result = self.transport.run(f"systemctl is-active {shlex.quote(service)} || true")
        status = ServiceStatus.parse(result.stdout)
        logger.info(f"{service} status: {status.value}")
        return status
