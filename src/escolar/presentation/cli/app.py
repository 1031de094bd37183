"""ABC Escolar CLI application using Typer.

Command-line utilities for operators: secret generation, schema setup,
school creation and provisioning of the first accounts of a school.
"""

import asyncio
import secrets
from typing import Optional
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table

from escolar.presentation.api.dependencies import (
    close_auth_providers,
    get_engine,
    get_password_service,
    get_session_maker,
    get_supabase_auth_provider,
)
from escolar_config.settings import get_settings
from escolar_identity import (
    AccountProvisioner,
    IdentityRole,
    ProvisionRequest,
    ProvisionResult,
)
from escolar_identity.domain.identity.services import (
    UniquenessResolver,
    classify,
    password_strength,
    strength_label,
)
from escolar_identity.domain.identity import InvalidEmailError
from escolar_identity.domain.school import School
from escolar_identity.infrastructure.auth import LocalAuthProvider
from escolar_identity.infrastructure.persistence.sqlalchemy import (
    EnrollmentRepositorySQLAlchemy,
    IdentityRepositorySQLAlchemy,
    SchoolRepositorySQLAlchemy,
    create_tables,
    session_committer,
)

app = typer.Typer(
    name="escolar",
    help="ABC Escolar - school identity provisioning CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

db_app = typer.Typer(name="db", help="Database schema management", no_args_is_help=True)
app.add_typer(db_app)

schools_app = typer.Typer(name="schools", help="School management", no_args_is_help=True)
app.add_typer(schools_app)

users_app = typer.Typer(
    name="users",
    help="Identity provisioning and login helpers",
    no_args_is_help=True,
)
app.add_typer(users_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for ABC Escolar configuration.

    Generates the required secrets:
    - JWT_SECRET_KEY: Secret for signing access tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]ABC Escolar Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]\n"
    )


@db_app.command("init")
def init_db() -> None:
    """Create missing tables. Existing tables are left untouched."""

    async def _run() -> None:
        engine = get_engine()
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]✓[/green] Database schema is up to date")


@schools_app.command("create")
def create_school(
    name: str = typer.Argument(..., help="School name"),
    email_domain: Optional[str] = typer.Option(
        None,
        "--email-domain",
        help="Domain for synthesized logins (defaults to SYNTHETIC_EMAIL_DOMAIN)",
    ),
) -> None:
    """Create a school and print its id."""
    try:
        school = School(name=name, email_domain=email_domain)
    except InvalidEmailError as e:
        console.print(f"[red]✗ Invalid email domain {email_domain!r}:[/red] {e}")
        raise typer.Exit(code=1) from e

    async def _run() -> None:
        async with get_session_maker()() as session:
            await SchoolRepositorySQLAlchemy(session).save(school)
            await session.commit()
        await get_engine().dispose()

    asyncio.run(_run())
    console.print(f"[green]✓[/green] Created school [bold]{school.name}[/bold]")
    console.print(f"  id: [cyan]{school.id}[/cyan]")


@users_app.command("provision")
def provision_user(  # NOQA: PLR0913
    school_id: UUID = typer.Option(..., "--school", help="School id"),
    full_name: str = typer.Option(..., "--name", help="Full name"),
    role: IdentityRole = typer.Option(..., "--role", help="Role of the identity"),
    email: Optional[str] = typer.Option(
        None,
        "--email",
        help="Real email; a login is synthesized when omitted",
    ),
    national_id: Optional[str] = typer.Option(None, "--national-id", help="CPF"),
    class_id: Optional[UUID] = typer.Option(
        None,
        "--class-id",
        help="Class to enroll a student in",
    ),
) -> None:
    """Provision one identity and print its one-time credential.

    Typically used to create the first admin of a school.
    """
    settings = get_settings()

    async def _run() -> ProvisionResult:
        try:
            async with get_session_maker()() as session:
                if settings.auth_backend == "supabase":
                    auth_provider = get_supabase_auth_provider()
                else:
                    auth_provider = LocalAuthProvider(
                        session,
                        password_service=get_password_service(),
                    )
                provisioner = AccountProvisioner(
                    identity_repository=IdentityRepositorySQLAlchemy(session),
                    school_repository=SchoolRepositorySQLAlchemy(session),
                    enrollment_repository=EnrollmentRepositorySQLAlchemy(session),
                    auth_provider=auth_provider,
                    resolver=UniquenessResolver(
                        max_attempts=settings.identifier_max_attempts,
                    ),
                    synthetic_email_domain=settings.synthetic_email_domain,
                    commit=session_committer(session),
                )
                result = await provisioner.provision(
                    ProvisionRequest(
                        full_name=full_name,
                        role=role,
                        tenant_id=school_id,
                        email=email,
                        national_id=national_id,
                        class_id=class_id,
                    ),
                )
        finally:
            await get_engine().dispose()
            await close_auth_providers()
        return result

    result = asyncio.run(_run())
    if not result.success:
        console.print(
            f"[red]✗ Provisioning failed ({result.error_kind.value}):[/red] "
            f"{result.error}"
        )
        raise typer.Exit(code=1)

    credential = result.credential
    table = Table(title="Credential (shown once)")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Identity", str(credential.identity_id))
    table.add_row("Login", credential.login)
    table.add_row("Password", credential.password)
    if credential.synthesized_email:
        table.add_row("Email", credential.synthesized_email)
    if credential.registration_number:
        table.add_row("Registration number", credential.registration_number)
    console.print(table)
    console.print("[yellow]The password must be changed on first login.[/yellow]")


@users_app.command("classify")
def classify_identifier(
    identifier: str = typer.Argument(..., help="Raw login identifier"),
) -> None:
    """Show how a login identifier would be interpreted."""
    result = classify(identifier)
    console.print(f"kind:  [cyan]{result.kind.value}[/cyan]")
    console.print(f"value: [bold]{result.value}[/bold]")


@users_app.command("strength")
def check_strength(
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        help="Password to score",
    ),
) -> None:
    """Score a password with the same rules used at password change."""
    score = password_strength(password)
    console.print(f"strength: [bold]{score:.1f}[/bold] ({strength_label(score)})")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
