"""
Service profile listing
"""
import typer
from rich.table import Table

from ...core.logging import get_stdout_console
from ...domain.targets import KNOWN_PROFILES

stdout_console = get_stdout_console()


def register_services_command(app: typer.Typer) -> None:
    app.command(name="services")(services_list)


def services_list():
    """
    List the known service profiles
    """
    table = Table(title="Known services")
    table.add_column("Name", style="cyan")
    table.add_column("Display name")
    table.add_column("Folder")
    table.add_column("Config file")
    table.add_column("Requirements script")
    for profile in KNOWN_PROFILES.values():
        table.add_row(
            profile.name,
            profile.display_name,
            profile.folder_name,
            profile.config_name,
            profile.requirements_name,
        )
    stdout_console.print(table)
