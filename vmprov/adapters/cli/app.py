"""
vmprov command-line application
"""
import typer
from pathlib import Path
from typing import Optional

from ...core.logging import setup_logging, get_logger
from .common import CliState
from .init_vm import register_init_command
from .jenkins import register_jenkins_command
from .services import register_services_command
from .setup import register_setup_command

logger = get_logger(__name__)

app = typer.Typer(
    name="vmprov",
    add_completion=False,
    help="VM provisioning over password-based SSH, published to a local Git mirror",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

register_services_command(app)
register_init_command(app)
register_jenkins_command(app)
register_setup_command(app)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Settings file (TOML, default: ~/.config/vmprov/config.toml)",
    ),
    mirror: Optional[Path] = typer.Option(
        None,
        "--mirror",
        help="Local mirror repository (default: ~/janus-local)",
    ),
):
    """
    vmprov - VM provisioning helper
    
    Use subcommands to perform different operations:
    - setup: Prepare this machine (git identity, SSH key, GitHub mirror)
    - init: Prepare a <service>-vm folder and its VM
    - jenkins: Install Jenkins on its VM
    - services: List known services
    """
    setup_logging(level=log_level, log_file=log_file)
    ctx.obj = CliState(config_path=config, mirror=mirror)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
