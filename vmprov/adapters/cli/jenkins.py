"""
Jenkins CLI command
"""
import os
from pathlib import Path
from typing import Optional

import typer

from ...core.exceptions import (
    ConfigError,
    ConnectionError,
    PreflightError,
    PublishError,
    RemoteExecutionError,
)
from ...core.logging import get_logger, get_stdout_console
from ...core.settings import Settings
from ...core.shell import LocalCommandRunner
from ...domain.workflows import JenkinsWorkflow
from .common import fail, load_settings
from .connection import RemoteTransportFactory
from .prompts import RichPromptProvider

logger = get_logger(__name__)
stdout_console = get_stdout_console()
prompt_provider = RichPromptProvider()
runner = LocalCommandRunner()


def register_jenkins_command(app: typer.Typer) -> None:
    app.command(name="jenkins")(jenkins_run)


def _echo(line: str) -> None:
    stdout_console.print(line, markup=False, highlight=False)


def _run_remote() -> None:
    workflow = JenkinsWorkflow(settings=Settings(), runner=runner, prompts=prompt_provider)
    try:
        status = workflow.run_remote(os.environ, echo=_echo)
    except PreflightError as e:
        fail("Error", e)
    except RemoteExecutionError as e:
        fail("Remote Error", e)
    logger.debug(f"jenkins status after install: {status.value}")


def jenkins_run(
    ctx: typer.Context,
    folder: Optional[Path] = typer.Option(
        None,
        "--folder",
        help="Folder holding jenkins_config (default: <mirror>/jenkins-vm)",
    ),
    remote: bool = typer.Option(
        False,
        "--remote",
        help="Run the install steps on this machine (server side, needs SUDO_PASS)",
    ),
):
    """
    Install Jenkins on the configured VM and publish the folder when the service is active
    
    Examples:
        vmprov jenkins
        vmprov jenkins --folder ~/janus-local/ci/jenkins
        SUDO_PASS=... vmprov jenkins --remote   # on the VM itself
    """
    if remote:
        _run_remote()
        return

    settings = load_settings(ctx)
    try:
        workflow = JenkinsWorkflow(
            settings=settings,
            runner=runner,
            prompts=prompt_provider,
            transport_factory=RemoteTransportFactory(runner),
            on_output=prompt_provider.stream,
        )
        result = workflow.run_local(folder)
    except PreflightError as e:
        fail("Error", e)
    except ConfigError as e:
        fail("Config Error", e)
    except ConnectionError as e:
        fail("Connection Error", e)
    except RemoteExecutionError as e:
        fail("Remote Error", e)
    except PublishError as e:
        fail("Publish Error", e)
    except Exception as e:
        logger.exception("Jenkins install failed")
        fail("Error", f"Jenkins install failed: {e}")

    if result.cancelled:
        return
    prompt_provider.info("=== All done! ===")
