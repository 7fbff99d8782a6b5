"""Rich terminal output for the CLI."""

from typing import Optional

from rich.console import Console
from rich.table import Table

from tourline.modules.api_client.models import ErrorMessage
from tourline.modules.connectivity.models import NetworkState
from tourline.modules.credentials.models import UserSnapshot
from tourline.modules.session.models import SessionStatus

console = Console()


def format_status(status: SessionStatus) -> str:
    """Color-code a session status for display."""
    colors = {
        SessionStatus.AUTHENTICATED: "green",
        SessionStatus.UNAUTHENTICATED: "yellow",
        SessionStatus.BOOTSTRAPPING: "dim",
    }
    return f"[{colors[status]}]{status.value}[/{colors[status]}]"


def network_table(state: NetworkState, pending: int) -> Table:
    """Build a table summarizing connectivity."""
    table = Table(title="Connectivity", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Online", "[green]yes[/green]" if not state.is_offline else "[red]no[/red]")
    table.add_row("Connected", str(state.is_connected))
    table.add_row("Internet reachable", str(state.is_internet_reachable))
    table.add_row("Connection type", state.connection_type or "-")
    table.add_row("Deferred requests", str(pending))
    return table


def user_table(user: UserSnapshot) -> Table:
    """Build a table with the signed-in user's profile."""
    table = Table(title="User", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("ID", user.id)
    table.add_row("Name", user.full_name or "-")
    table.add_row("Email", user.email)
    table.add_row("Role", user.role.value)
    table.add_row("Email verified", "yes" if user.email_verified else "no")
    return table


def print_session(status: SessionStatus, user: Optional[UserSnapshot]) -> None:
    console.print(f"[bold]Session:[/bold] {format_status(status)}")
    if user is not None:
        console.print(user_table(user))


def print_error(error: ErrorMessage) -> None:
    """Print a user-facing error, with its suggested action if any."""
    console.print(f"[red]{error.title}:[/red] {error.message}")
    if error.action:
        console.print(f"[dim]Suggested action: {error.action.value}[/dim]")
