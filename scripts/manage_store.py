#!/usr/bin/env python3
"""
Command-line interface for managing the resumekit store.

Commands:
    init      - Create the database and seed the template catalog
    signup    - Create an account (and its profile)
    templates - List catalog templates (optionally filtered)
    list      - List your resumes
    create    - Create a resume from a template
    show      - Print a Markdown preview of a resume
    share     - Make a resume public or private
    delete    - Permanently delete a resume
"""

import os
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated
from dotenv import load_dotenv

from resumekit.contexts.accounts import (
    AuthenticationError,
    DuplicateIdentityError,
    sign_in,
    sign_up,
)
from resumekit.contexts.catalog import (
    ALL_CATEGORIES,
    SEED_TEMPLATES_PATH,
    filter_templates,
    get_template,
    list_templates,
    load_seed_templates,
)
from resumekit.contexts.rendering import render_preview
from resumekit.contexts.resumes import (
    create_resume,
    delete_resume,
    list_resumes,
    load_resume,
    set_resume_visibility,
)
from resumekit.contexts.store import DEFAULT_TEMPLATE_ID, RecordNotFoundError, ResumeStore, StoreError
from resumekit.contexts.store.logger import setup_store_logger
from resumekit.utils.timestamp import format_timestamp

load_dotenv()
DB_PATH = Path(os.getenv("RESUMEKIT_DB_PATH", "outs/resumekit.db"))

app = typer.Typer(
    add_completion=False,
    help="Manage the resumekit store (accounts, templates, resumes)",
    invoke_without_command=True,
)

DbOption = Annotated[Path, typer.Option("--db", help="Path to the SQLite database")]
EmailOption = Annotated[str, typer.Option("--email", "-e", envvar="RESUMEKIT_EMAIL", help="Account email")]
PasswordOption = Annotated[
    str,
    typer.Option(
        "--password", "-p", envvar="RESUMEKIT_PASSWORD", prompt=True, hide_input=True,
        help="Account password",
    ),
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_store(db: Path) -> ResumeStore:
    try:
        return ResumeStore(db)
    except FileNotFoundError:
        typer.secho(f"No database at {db}. Run 'init' first.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _authenticate(store: ResumeStore, email: str, password: str):
    try:
        return sign_in(store, email, password)
    except AuthenticationError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("init")
def init_command(
    db: DbOption = DB_PATH,
    seeds: Path = typer.Option(SEED_TEMPLATES_PATH, "--seeds", help="Template seed YAML"),
    reset: bool = typer.Option(False, "--reset", help="Delete the existing database first"),
    log: bool = typer.Option(True, "--log/--no-log", help="Write a session log under LOGS_PATH"),
):
    """
    Create the database (if missing) and seed the template catalog.

    Examples:\n

        $ manage_store.py init

        $ manage_store.py init --db /tmp/resumes.db --reset
    """
    if log:
        log_file = setup_store_logger(db_path=db)
        typer.echo(f"Log file: {log_file}")

    with ResumeStore.create(db, template_seeds=load_seed_templates(seeds), reset=reset) as store:
        count = len(list_templates(store))
    typer.secho(f"✓ Store ready at {db} ({count} templates)", fg=typer.colors.GREEN)


@app.command("signup")
def signup_command(
    email: EmailOption,
    password: str = typer.Option(
        ..., "--password", "-p", envvar="RESUMEKIT_PASSWORD", prompt=True,
        hide_input=True, confirmation_prompt=True, help="Account password",
    ),
    display_name: Optional[str] = typer.Option(None, "--name", "-n", help="Display name"),
    db: DbOption = DB_PATH,
):
    """Create an account and its profile."""
    with _open_store(db) as store:
        try:
            identity = sign_up(store, email, password, display_name=display_name)
        except (DuplicateIdentityError, ValueError) as e:
            typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
    typer.secho(f"✓ Signed up {identity.email} ({identity.user_id})", fg=typer.colors.GREEN)


@app.command("templates")
def templates_command(
    category: str = typer.Option(ALL_CATEGORIES, "--category", "-c", help="Category or 'all'"),
    search: str = typer.Option("", "--search", "-s", help="Substring of name or category"),
    db: DbOption = DB_PATH,
):
    """List catalog templates, most downloaded first."""
    with _open_store(db) as store:
        templates = filter_templates(list_templates(store), category, search)

    if not templates:
        typer.secho("No templates match", fg=typer.colors.YELLOW)
        return

    for template in templates:
        premium = " [premium]" if template.is_premium else ""
        typer.echo(
            f"{template.id:<20} {template.name:<20} {template.category:<12} "
            f"★ {template.rating:.1f}  {template.downloads:>6} downloads{premium}"
        )


@app.command("list")
def list_command(email: EmailOption, password: PasswordOption, db: DbOption = DB_PATH):
    """List your resumes, most recently updated first."""
    with _open_store(db) as store:
        identity = _authenticate(store, email, password)
        resumes = list_resumes(store, identity, owned_only=True)

    if not resumes:
        typer.secho("No resumes yet", fg=typer.colors.YELLOW)
        return

    for record in resumes:
        public = " (public)" if record.is_public else ""
        updated = format_timestamp(record.updated_at.isoformat(), relative=True)
        typer.echo(f"{record.id}  {record.title}  [{record.template_id}]  updated {updated}{public}")


@app.command("create")
def create_command(
    email: EmailOption,
    password: PasswordOption,
    template_id: str = typer.Option(DEFAULT_TEMPLATE_ID, "--template", "-t", help="Template id"),
    title: Optional[str] = typer.Option(None, "--title", help="Resume title"),
    db: DbOption = DB_PATH,
):
    """Create an empty resume styled with a template."""
    with _open_store(db) as store:
        identity = _authenticate(store, email, password)
        try:
            record = create_resume(store, identity, template_id, title=title)
        except RecordNotFoundError:
            typer.secho(f"✗ Unknown template: {template_id}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
    typer.secho(f"✓ Created {record.id} ({record.title})", fg=typer.colors.GREEN)


@app.command("show")
def show_command(
    resume_id: str = typer.Argument(..., help="Resume id"),
    email: Optional[str] = typer.Option(None, "--email", "-e", envvar="RESUMEKIT_EMAIL"),
    password: Optional[str] = typer.Option(None, "--password", "-p", envvar="RESUMEKIT_PASSWORD"),
    db: DbOption = DB_PATH,
):
    """Print a Markdown preview. Public resumes can be shown without signing in."""
    with _open_store(db) as store:
        identity = _authenticate(store, email, password) if email and password else None
        try:
            record = load_resume(store, identity, resume_id)
        except RecordNotFoundError:
            typer.secho(f"✗ Resume not found: {resume_id}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        try:
            template = get_template(store, record.template_id, identity)
        except RecordNotFoundError:
            template = None
    typer.echo(render_preview(record, template))


@app.command("share")
def share_command(
    resume_id: Annotated[str, typer.Argument(help="Resume id")],
    email: EmailOption,
    password: PasswordOption,
    private: bool = typer.Option(False, "--private", help="Make the resume private again"),
    db: DbOption = DB_PATH,
):
    """Make a resume publicly readable (or private with --private)."""
    with _open_store(db) as store:
        identity = _authenticate(store, email, password)
        try:
            record = set_resume_visibility(store, identity, resume_id, is_public=not private)
        except StoreError as e:
            typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
    state = "public" if record.is_public else "private"
    typer.secho(f"✓ {record.title} is now {state}", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    resume_id: Annotated[str, typer.Argument(help="Resume id")],
    email: EmailOption,
    password: PasswordOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    db: DbOption = DB_PATH,
):
    """Permanently delete a resume. This cannot be undone."""
    if not yes:
        typer.confirm(f"Permanently delete {resume_id}?", abort=True)

    with _open_store(db) as store:
        identity = _authenticate(store, email, password)
        try:
            delete_resume(store, identity, resume_id)
        except StoreError as e:
            typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
    typer.secho(f"✓ Deleted {resume_id}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
