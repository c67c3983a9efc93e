# src/devrecipe/cli/formatter.py
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from devrecipe.convert.devfile import ConversionReport

# Shared console for every CLI render
console = Console()


class RecipeFormatter:
    """
    RecipeFormatter: The visual side of the CLI.
    Renders conversion summaries, command bindings and manifest previews.
    """

    def print_environments(self, report: ConversionReport):
        config = report.config
        table = Table(title=f"Workspace '{config.name}'", show_lines=True, header_style="bold magenta")
        table.add_column("Environment", style="cyan")
        table.add_column("Recipe Type", style="white")
        table.add_column("Objects", justify="right")
        table.add_column("Default", justify="center")

        counts = {a.environment_name: a.object_count for a in report.applied}
        for name, environment in config.environments.items():
            table.add_row(
                name,
                environment.recipe.type,
                str(counts.get(name, "?")),
                "✅" if name == config.default_env else "",
            )
        console.print(table)

    def print_commands(self, report: ConversionReport):
        commands = report.config.commands
        if not commands:
            return

        table = Table(title="Command Bindings", header_style="bold magenta")
        table.add_column("Command", style="cyan")
        table.add_column("Tool")
        table.add_column("Machine")

        for command in commands:
            machine = command.machine_name
            table.add_row(
                command.name,
                command.tool_name or "",
                machine if machine else "[dim]unbound[/dim]",
            )
        console.print(table)

    def print_errors(self, errors: List[Exception]):
        for error in errors:
            console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")

    def show_manifest(self, content: str, title: str, machine: Optional[str] = None):
        """Syntax-highlighted preview of a serialized manifest list."""
        syntax = Syntax(content.strip(), "yaml", theme="monokai", line_numbers=True)
        subtitle = f"machine: {machine}" if machine else "machine: unresolved"
        console.print(Panel(syntax, title=title, subtitle=subtitle, border_style="green"))
