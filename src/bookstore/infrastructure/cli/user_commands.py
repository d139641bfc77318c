"""CLI commands for users."""

from __future__ import annotations

import click

from bookstore.application.dto import UserDTO
from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure.bootstrap import Container


def _role(dto: UserDTO) -> str:
    return "admin" if dto.is_admin else "customer"


@click.command("add")
@click.option("--name", required=True, help="Full name.")
@click.option("--email", required=True, help="E-mail address (unique).")
@click.option("--admin", "is_admin", is_flag=True, default=False, help="Grant admin rights.")
@click.pass_obj
def user_add(container: Container, name: str, email: str, is_admin: bool) -> None:
    """Register a user (use --admin to create an administrator)."""
    try:
        created = container.add_user().handle(name=name, email=email, is_admin=is_admin)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {created.id} '{created.name}' <{created.email}> added ({_role(created)})")


@click.command("list")
@click.option("--user", "caller_id", required=True, help="ID of the requesting admin.")
@click.pass_obj
def user_list(container: Container, caller_id: str) -> None:
    """List every user (admin only)."""
    try:
        users = container.list_users().handle(caller_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'ID':<34} {'Name':<24} {'E-mail':<32} {'Role':<8}")
    click.echo("-" * 101)
    for u in users:
        click.echo(f"{u.id:<34} {u.name[:24]:<24} {u.email[:32]:<32} {_role(u):<8}")


@click.command("show")
@click.option("--id", "user_id", required=True, help="User ID to display.")
@click.option("--user", "caller_id", required=True, help="ID of the requesting admin.")
@click.pass_obj
def user_show(container: Container, user_id: str, caller_id: str) -> None:
    """Show one user (admin only)."""
    try:
        dto = container.show_user().handle(caller_id, user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {dto.id}")
    click.echo(f"Name:    {dto.name}")
    click.echo(f"E-mail:  {dto.email}")
    click.echo(f"Role:    {_role(dto)}")
    click.echo(f"Joined:  {dto.created_at}")
