"""
Workstation setup CLI command
"""
import typer

from ...core.exceptions import PreflightError, WorkstationError
from ...core.logging import get_logger
from ...core.shell import LocalCommandRunner
from ...domain.preflight import PreflightService
from ...domain.workstation import WorkstationService
from .common import fail, load_settings
from .prompts import RichPromptProvider

logger = get_logger(__name__)
prompt_provider = RichPromptProvider()
runner = LocalCommandRunner()


def register_setup_command(app: typer.Typer) -> None:
    app.command(name="setup")(setup_run)


def setup_run(ctx: typer.Context):
    """
    Prepare this machine: git identity, SSH key, mirror repository on GitHub
    """
    settings = load_settings(ctx)
    try:
        service = WorkstationService(
            runner=runner,
            prompts=prompt_provider,
            preflight=PreflightService(runner, prompt_provider),
            mirror_dir=settings.mirror_path,
            ssh_dir=settings.ssh_path,
            repo_name=settings.github_repo,
            remote=settings.remote,
            branch=settings.branch,
        )
        repo = service.run()
    except (PreflightError, WorkstationError) as e:
        fail("Error", e)
    except Exception as e:
        logger.exception("Setup failed")
        fail("Error", f"Setup failed: {e}")

    lines = ["Local machine setup is complete!"]
    if repo:
        lines.append(f"{settings.mirror_path} is now on GitHub as '{repo}'.")
    prompt_provider.panel("\n".join(lines), title="Done", border_style="green")
