"""Console UI for projectinfo."""
import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.exceptions import ProjectInfoError, handle_error
from ..core.mappings import ProjectInfoMappings


class ConsoleUI:
    """UI class for console output."""
    def __init__(self, console=None):
        self.console = console or Console()

    def print_error(self, error, show_traceback=False):
        """Print error message."""
        if isinstance(error, ProjectInfoError):
            error_text = handle_error(error)
        else:
            error_text = str(error)
        self.console.print(f"[red]Error:[/red] {escape(error_text)}", highlight=False)
        if show_traceback:
            self.console.print_exception()

    def display_mappings(self, mappings: ProjectInfoMappings, project: str):
        """Display one row per address with all of its aliases."""
        if not mappings.ip_to_hosts:
            self.console.print(f"[yellow]No containers found for project {project}[/yellow]")
            return

        table = Table(title=f"Project {project}")
        table.add_column("Address", style="cyan")
        table.add_column("Aliases", style="green")

        for ip, hosts in sorted(mappings.ip_to_hosts.items()):
            table.add_row(ip, ", ".join(sorted(hosts)))
        self.console.print(table)

    def display_json(self, mappings: ProjectInfoMappings):
        """Print the mappings as a JSON document."""
        click.echo(json.dumps(mappings.to_dict(), indent=2))

    def display_hosts(self, mappings: ProjectInfoMappings):
        """Print the mappings as /etc/hosts lines."""
        for ip, hosts in sorted(mappings.ip_to_hosts.items()):
            click.echo(f"{ip}\t{' '.join(sorted(hosts))}")

    def display_values(self, values):
        """Print plain values, one per line."""
        for value in values:
            click.echo(value)

    def display_docker_version(self, version: str, listing_format):
        """Show the docker client version and the ps template it needs."""
        self.console.print(f"Docker client: [cyan]{version}[/cyan]")
        self.console.print(f"Listing format: [green]{listing_format.name.lower()}[/green]")
        self.console.print(listing_format.template, markup=False, highlight=False)
