"""
Rich-based user prompts
"""
from typing import Optional
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt, Confirm
from rich.panel import Panel

from ...core.interfaces import PromptProvider
from ...core.logging import get_stdout_console


class RichPromptProvider(PromptProvider):
    """Rich-based prompt provider"""
    
    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_stdout_console()
    
    def prompt(self, message: str, default: Optional[str] = None, password: bool = False) -> str:
        """Prompt user for input"""
        return Prompt.ask(
            escape(message),
            password=password,
            default=default,
            show_default=bool(default),
            console=self.console,
        )
    
    def confirm(self, message: str, default: bool = False) -> bool:
        """Prompt user for confirmation"""
        return Confirm.ask(escape(message), default=default, console=self.console)
    
    def info(self, message: str) -> None:
        """Display info message"""
        self.console.print(f"[cyan]ℹ[/cyan] {escape(message)}")
    
    def success(self, message: str) -> None:
        """Display success message"""
        self.console.print(f"[green]✓[/green] {escape(message)}")
    
    def warning(self, message: str) -> None:
        """Display warning message"""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")
    
    def error(self, message: str) -> None:
        """Display error message"""
        self.console.print(f"[red]✗[/red] {escape(message)}")
    
    def panel(self, content: str, title: str = "", border_style: str = "blue") -> None:
        """Display content in a panel"""
        self.console.print(Panel(escape(content), title=title, border_style=border_style))
    
    def stream(self, chunk: str) -> None:
        """Pass remote output through untouched"""
        self.console.file.write(chunk)
        self.console.file.flush()
