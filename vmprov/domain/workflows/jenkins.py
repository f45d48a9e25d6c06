"""
All-in-one Jenkins install workflow
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional

from ...core.constants import (
    JENKINS_ADMIN_PASSWORD_PATH,
    JENKINS_PORT,
    JENKINS_REMOTE_FLAG,
    JENKINS_REMOTE_SCRIPT,
    JENKINS_SERVICE,
    SUDO_PASS_ENV,
)
from ...core.credentials import Credential
from ...core.exceptions import PreflightError
from ...core.interfaces import CommandRunner, PromptProvider, TransportFactory
from ...core.logging import get_logger
from ...core.settings import Settings
from ..preflight import PreflightService
from ..provision import LocalStepExecutor, ProvisionService, jenkins_plan
from ..publish import GitPublisher, PublishResult
from ..targets import KNOWN_PROFILES, ServiceStatus, TargetConfigService
from .init_vm import transport_params, write_script

logger = get_logger(__name__)

INSTALL_SCRIPT_NAME = "jenkins_install.sh"


@dataclass
class JenkinsResult:
    status: ServiceStatus = ServiceStatus.UNKNOWN
    cancelled: bool = False
    publish: Optional[PublishResult] = None


class JenkinsWorkflow:
    """
    Local mode installs Jenkins on the configured VM and publishes the
    folder only when the service reports `active`. Remote mode runs the
    install steps on the machine it is invoked on.
    """

    def __init__(
        self,
        settings: Settings,
        runner: CommandRunner,
        prompts: PromptProvider,
        transport_factory: Optional[TransportFactory] = None,
        on_output: Optional[Callable[[str], None]] = None,
        preflight: Optional[PreflightService] = None,
    ):
        self.settings = settings
        self.runner = runner
        self.prompts = prompts
        self.transport_factory = transport_factory
        self.on_output = on_output
        self.preflight = preflight or PreflightService(runner, prompts)
        self.configs = TargetConfigService(prompts)
        self.profile = KNOWN_PROFILES["jenkins"]

    def run_local(self, folder: Optional[Path] = None) -> JenkinsResult:
        mirror = self.preflight.run(self.settings.mirror_path, self.settings.required_commands)

        folder = Path(folder).expanduser() if folder else mirror / self.profile.folder_name
        folder.mkdir(parents=True, exist_ok=True)
        self.configs.protect(folder, self.profile)
        config = self.configs.load_or_create(folder, self.profile)

        if not self.prompts.confirm(f"Proceed with Jenkins installation on {config.host or '<unset>'}?"):
            self.prompts.info("User canceled Jenkins installation.")
            return JenkinsResult(cancelled=True)

        config.validate()
        script = write_script(folder / INSTALL_SCRIPT_NAME, jenkins_plan())

        transport = self.transport_factory.create(transport_params(self.settings, config))
        try:
            with transport:
                service = ProvisionService(transport, on_output=self.on_output)
                self.prompts.info(f"Copying {script.name} to {config.host} for Jenkins install...")
                service.provision(
                    script,
                    JENKINS_REMOTE_SCRIPT,
                    config.password,
                    args=[JENKINS_REMOTE_FLAG],
                )
                self.prompts.info(f"Checking Jenkins status on {config.host}...")
                status = service.probe_service(JENKINS_SERVICE)
        finally:
            config.password.wipe()

        if not status.is_active:
            self.prompts.warning(
                f"Jenkins not 'active' on {config.host} (reported: {status.value}). "
                "Check logs on the remote VM. We won't push changes since Jenkins isn't running."
            )
            return JenkinsResult(status=status)

        self.prompts.success("Jenkins is active! We'll commit & push changes.")
        publisher = GitPublisher(
            self.runner,
            self.prompts,
            mirror,
            remote=self.settings.remote,
            branch=self.settings.branch,
            fallback_branch=self.settings.fallback_branch,
        )
        published = publisher.publish(
            folder,
            f"Jenkins installed successfully on {config.host} "
            f"(port {JENKINS_PORT} allowed via ufw if available)",
        )
        self.prompts.info(f"Access Jenkins at: http://{config.host}:{JENKINS_PORT}")
        self.prompts.info(f"Initial admin password in {JENKINS_ADMIN_PASSWORD_PATH}")
        return JenkinsResult(status=status, publish=published)

    def run_remote(
        self,
        environ: Mapping[str, str],
        echo: Callable[[str], None] = print,
    ) -> ServiceStatus:
        """Server-side mode; SUDO_PASS must be set in `environ`"""
        secret = environ.get(SUDO_PASS_ENV, "")
        if not secret:
            raise PreflightError(f"{SUDO_PASS_ENV} not set on remote. Cannot run sudo -S commands.")

        with Credential(secret) as sudo_password:
            executor = LocalStepExecutor(self.runner, sudo_password, echo=echo)
            probe = executor.execute(jenkins_plan())
        return ServiceStatus.parse(probe)
