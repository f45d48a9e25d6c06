"""
Init-VM CLI command
"""
import typer

from ...core.exceptions import (
    ConfigError,
    ConnectionError,
    PreflightError,
    PublishError,
    RemoteExecutionError,
)
from ...core.logging import get_logger
from ...core.shell import LocalCommandRunner
from ...domain.targets import get_profile
from ...domain.workflows import InitVmWorkflow
from .common import fail, load_settings
from .connection import RemoteTransportFactory
from .prompts import RichPromptProvider

logger = get_logger(__name__)
prompt_provider = RichPromptProvider()
runner = LocalCommandRunner()


def register_init_command(app: typer.Typer) -> None:
    app.command(name="init")(init_run)


def init_run(
    ctx: typer.Context,
    service: str = typer.Argument(..., help="Service name (apisix, frontend, jenkins, openemr, or any new name)"),
):
    """
    Create/update the <service>-vm folder, run its requirements script on the VM, publish
    
    Examples:
        vmprov init openemr
        vmprov --mirror ~/lab-mirror init apisix
    """
    settings = load_settings(ctx)
    try:
        profile = get_profile(service)
        workflow = InitVmWorkflow(
            settings=settings,
            runner=runner,
            prompts=prompt_provider,
            transport_factory=RemoteTransportFactory(runner),
            on_output=prompt_provider.stream,
        )
        result = workflow.run(profile)
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
        logger.exception("Init failed")
        fail("Error", f"Init failed: {e}")

    prompt_provider.panel(
        "\n".join([
            f"{result.folder} has the config & {result.script_path.name}.",
            f"'{profile.config_name}' is excluded by .gitignore.",
            f"Next time you run this command, it will reuse '{profile.config_name}'.",
        ]),
        title="All done",
        border_style="green",
    )
