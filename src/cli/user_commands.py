"""User record management CLI commands."""

import typer
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from src.app.api.http.app_data import ApplicationDependencies
from src.app.core.errors import UserServiceError
from src.app.entities.core.user import User
from src.app.runtime.context import get_config

console = Console()

users_app = typer.Typer(help="Manage user records", no_args_is_help=True)


def get_dependencies() -> ApplicationDependencies:
    """Build the user service from the current configuration."""
    try:
        return ApplicationDependencies.from_config(get_config())
    except RuntimeError as e:
        console.print(f"[red]❌ Failed to connect to user storage: {e}[/red]")
        raise typer.Exit(code=1) from e


def _users_table(users: list[User], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Email", style="blue")
    table.add_column("First Name", style="magenta")
    table.add_column("Last Name", style="magenta")
    for user in users:
        table.add_row(user.email, user.first_name, user.last_name)
    return table


def _print_user(user: User, title: str) -> None:
    console.print(_users_table([user], title))


def _fail(action: str, error: UserServiceError) -> typer.Exit:
    console.print(f"[red]❌ Failed to {action}: {error.message}[/red]")
    return typer.Exit(code=1)


@users_app.command("list")
def list_users() -> None:
    """List all users."""
    deps = get_dependencies()
    try:
        users = deps.user_service.fetch_all()
    except UserServiceError as e:
        raise _fail("list users", e) from e
    finally:
        deps.close()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    console.print(_users_table(sorted(users, key=lambda u: u.email), "Users"))
    console.print(f"\n[green]Found {len(users)} users[/green]")


@users_app.command("get")
def get_user(email: str = typer.Argument(..., help="Email of the user")) -> None:
    """Show a single user."""
    deps = get_dependencies()
    try:
        user = deps.user_service.fetch_one(email)
    except UserServiceError as e:
        raise _fail(f"get user '{email}'", e) from e
    finally:
        deps.close()

    _print_user(user, f"User '{email}'")


@users_app.command("add")
def add_user(
    email: str = typer.Argument(..., help="Email address of the new user"),
    first_name: str = typer.Option("", "--first-name", "-f", help="First name"),
    last_name: str = typer.Option("", "--last-name", "-l", help="Last name"),
) -> None:
    """Register a new user."""
    deps = get_dependencies()
    try:
        user = deps.user_service.create(
            User(email=email, first_name=first_name, last_name=last_name)
        )
    except UserServiceError as e:
        raise _fail(f"create user '{email}'", e) from e
    finally:
        deps.close()

    console.print(f"[green]✅ Successfully created user '{user.email}'[/green]")


@users_app.command("update")
def update_user(
    email: str = typer.Argument(..., help="Email of the user to update"),
    first_name: str = typer.Option("", "--first-name", "-f", help="New first name"),
    last_name: str = typer.Option("", "--last-name", "-l", help="New last name"),
) -> None:
    """Update a user's names; omitted names are left unchanged."""
    deps = get_dependencies()
    try:
        user = deps.user_service.update(
            User(email=email, first_name=first_name, last_name=last_name)
        )
    except UserServiceError as e:
        raise _fail(f"update user '{email}'", e) from e
    finally:
        deps.close()

    _print_user(user, f"Updated user '{email}'")


@users_app.command("delete")
def delete_user(
    email: str = typer.Argument(..., help="Email of the user to delete"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
) -> None:
    """Delete a user."""
    if not force and not Confirm.ask(f"Are you sure you want to delete user '{email}'?"):
        console.print("[yellow]Deletion cancelled[/yellow]")
        return

    deps = get_dependencies()
    try:
        deleted = deps.user_service.delete(email)
    except UserServiceError as e:
        raise _fail(f"delete user '{email}'", e) from e
    finally:
        deps.close()

    _print_user(deleted, f"Deleted user '{email}'")
