"""
Per-service VM initialisation workflow
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from ...core.constants import SCRIPT_FILE_MODE
from ...core.interfaces import CommandRunner, PromptProvider, TransportFactory
from ...core.logging import get_logger
from ...core.settings import Settings
from ..preflight import PreflightService
from ..provision import ProvisionService, ScriptPlan, render_script, requirements_plan
from ..publish import GitPublisher, PublishResult
from ..targets import ServiceProfile, TargetConfig, TargetConfigService

logger = get_logger(__name__)


@dataclass
class InitVmResult:
    folder: Path
    config_path: Path
    script_path: Path
    provisioned: bool = False
    publish: Optional[PublishResult] = None


def write_script(path: Path, plan: ScriptPlan) -> Path:
    path.write_text(render_script(plan), encoding="utf-8")
    os.chmod(path, SCRIPT_FILE_MODE)
    return path


def transport_params(settings: Settings, config: TargetConfig) -> dict:
    return {
        "host": config.host,
        "user": config.user,
        "password": config.password,
        "port": settings.port,
        "timeout": settings.connect_timeout,
        "transport": settings.transport,
    }


class InitVmWorkflow:
    """
    Preflight, managed folder, config, requirements script, optional remote
    run, publish.
    """

    def __init__(
        self,
        settings: Settings,
        runner: CommandRunner,
        prompts: PromptProvider,
        transport_factory: TransportFactory,
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

    def prepare_script(self, folder: Path, profile: ServiceProfile) -> Path:
        """Write the requirements script, asking before replacing an existing one"""
        path = folder / profile.requirements_name
        if path.exists():
            self.prompts.info(f"Script '{path}' already exists.")
            if not self.prompts.confirm(f"Do you want to overwrite '{profile.requirements_name}'?"):
                return path
        write_script(path, requirements_plan(profile))
        self.prompts.success(f"Wrote {path}")
        return path

    def provision(self, config: TargetConfig, script: Path) -> bool:
        """Returns True when the script ran on the remote host"""
        if not self.prompts.confirm(
            f"Do you want to connect to {config.host} now and run {script.name}?"
        ):
            self.prompts.info("Skipping remote provisioning step.")
            return False

        config.validate()
        remote_dir = self.settings.remote_script_dir.rstrip("/")
        transport = self.transport_factory.create(transport_params(self.settings, config))
        with transport:
            service = ProvisionService(transport, on_output=self.on_output)
            self.prompts.info(f"Creating remote {remote_dir} folder on {config.host}...")
            service.ensure_remote_dir(remote_dir)
            self.prompts.success(f"Remote folder created successfully at {remote_dir}.")

            if not self.prompts.confirm(f"Copy & run '{script.name}' on the remote VM now?"):
                return False
            self.prompts.info(f"Running '{script.name}' on {config.host}...")
            service.provision(script, f"{remote_dir}/{script.name}", config.password)
            self.prompts.success(f"'{script.name}' execution completed on {config.host}.")
        return True

    def run(self, profile: ServiceProfile) -> InitVmResult:
        mirror = self.preflight.run(self.settings.mirror_path, self.settings.required_commands)

        folder = mirror / profile.folder_name
        self.prompts.info(f"Setting up '{profile.folder_name}' folder in {mirror}: {folder}")
        folder.mkdir(parents=True, exist_ok=True)
        self.configs.protect(folder, profile)

        config = self.configs.load_or_create(folder, profile)
        script = self.prepare_script(folder, profile)

        try:
            provisioned = self.provision(config, script)
        finally:
            config.password.wipe()

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
            f"Update {profile.folder_name} folder with config & sudo -S fix (config ignored)",
            always_push=True,
        )
        return InitVmResult(
            folder=folder,
            config_path=folder / profile.config_name,
            script_path=script,
            provisioned=provisioned,
            publish=published,
        )
