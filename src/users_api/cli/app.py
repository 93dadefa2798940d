"""Users API CLI application using Typer.

Operator commands: secret generation, schema creation, admin promotion
and running the HTTP server.
"""

import asyncio
import secrets

import typer
import uvicorn
from rich.console import Console

from users_api.dependencies import (
    create_tables,
    get_activation_service,
    get_engine,
    get_jwt_service,
    get_notifier,
    get_password_service,
    get_session_maker,
    get_session_service,
)
from users_config.settings import get_settings
from users_identity.domain.account import AccountRole, AccountView
from users_identity.domain.shared import DomainException

app = typer.Typer(
    name="users-api",
    help="Users API - account, session and access control service",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for the service configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Users API Secret Generation[/bold green]")
    console.print("=" * 60)

    # 64 bytes of entropy for HS256 signing
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={secrets.token_urlsafe(64)}")
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={secrets.token_urlsafe(32)}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]",
    )
    console.print(
        "[dim]Copy the above values to config/.env (Docker) or "
        "config/.env.dev (local).[/dim]\n",
    )


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "users_api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


@app.command("init-db")
def init_db() -> None:
    """Create missing database tables."""

    async def _run() -> None:
        engine = get_engine()
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]Database schema is up to date.[/green]")


@app.command("promote")
def promote(
    email: str = typer.Argument(..., help="Email of the account to promote"),
    demote: bool = typer.Option(False, "--demote", help="Revoke admin instead"),
) -> None:
    """Grant (or revoke) the admin role.

    The account's current session is ended so the new role takes effect
    on the next login.
    """
    role = AccountRole.USER if demote else AccountRole.ADMIN
    try:
        view = asyncio.run(_grant_role(email, role))
    except DomainException as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]{view.email} is now {view.role.value}.[/green]")


async def _grant_role(email: str, role: AccountRole) -> AccountView:
    settings = get_settings()
    engine = get_engine()
    try:
        await create_tables(engine)
        async with get_session_maker()() as session:
            service = get_session_service(
                session=session,
                settings=settings,
                jwt_service=get_jwt_service(settings),
                password_service=get_password_service(settings),
                notifier=get_notifier(settings),
                activation_service=get_activation_service(session, settings),
            )
            view = await service.grant_role(email, role)
            await session.commit()
            return view
    finally:
        await engine.dispose()


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
