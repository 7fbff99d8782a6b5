"""
Tourline client core - command-line entry point.

Exercises the session and connectivity layers against a live backend:
check reachability and the stored session, sign in, show the current user,
or sign out.
"""

import argparse
import asyncio
import getpass
import logging
import sys

from rich.logging import RichHandler

from tourline.app import TourlineApp, create_app
from tourline.display import console, network_table, print_error, print_session, user_table
from tourline.modules.session import SessionError, SessionStatus


async def run_status(app: TourlineApp) -> int:
    """Probe connectivity and resolve the stored session."""
    await app.connectivity.check_connection()
    console.print(network_table(app.connectivity.state, app.connectivity.pending_count))

    status = await app.session.bootstrap()
    print_session(status, app.session.user)
    return 0


async def run_login(app: TourlineApp, email: str, password: str) -> int:
    """Sign in and persist the session."""
    await app.session.bootstrap()
    try:
        user = await app.session.sign_in(email, password)
    except SessionError as e:
        print_error(e.error_message)
        return 1

    console.print(f"[green]Signed in as {user.email}[/green]")
    console.print(user_table(user))
    return 0


async def run_whoami(app: TourlineApp) -> int:
    """Refresh and show the signed-in user."""
    status = await app.session.bootstrap()
    if status is not SessionStatus.AUTHENTICATED:
        console.print("[yellow]Not signed in[/yellow]")
        return 1

    result = await app.session.refresh_user()
    if result.stale:
        console.print(f"[yellow]Showing cached profile:[/yellow] {result.error}")
    if result.user is not None:
        console.print(user_table(result.user))
    return 0


async def run_logout(app: TourlineApp) -> int:
    """Clear the stored session."""
    await app.session.sign_out()
    console.print("[green]Signed out[/green]")
    return 0


async def main(args: argparse.Namespace) -> int:
    """Dispatch a parsed command.

    Args:
        args: Parsed CLI arguments

    Returns:
        Process exit code
    """
    app = create_app()
    try:
        if args.command == "status":
            return await run_status(app)
        if args.command == "login":
            password = args.password or getpass.getpass("Password: ")
            return await run_login(app, args.email, password)
        if args.command == "whoami":
            return await run_whoami(app)
        if args.command == "logout":
            return await run_logout(app)
        raise ValueError(f"Unknown command: {args.command}")
    finally:
        await app.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tourline",
        description="Inspect and manage the Tourline client session",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging (retries, state transitions)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show connectivity and session state")

    login = subparsers.add_parser("login", help="Sign in with email and password")
    login.add_argument("email", help="Account email")
    login.add_argument(
        "--password",
        help="Password (prompted for if omitted)",
    )

    subparsers.add_parser("whoami", help="Refresh and show the signed-in user")
    subparsers.add_parser("logout", help="Sign out and clear stored credentials")
    return parser


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; warnings and up unless verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def cli() -> None:
    """Console-script entry point."""
    args = build_parser().parse_args()
    configure_logging(args.verbose)

    sys.exit(asyncio.run(main(args)))


if __name__ == "__main__":
    cli()
