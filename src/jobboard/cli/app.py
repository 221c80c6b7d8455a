from __future__ import annotations

import json

import typer
import uvicorn

from jobboard.api.app import create_app
from jobboard.config import get_settings
from jobboard.core.accounts import AccountService
from jobboard.core.errors import JobBoardError
from jobboard.db.init import init_database
from jobboard.db.repositories import Repository, serialize_job
from jobboard.db.session import SessionLocal
from jobboard.logging_config import configure_logging

app = typer.Typer(help="Job board CLI")
users_app = typer.Typer(help="Manage user accounts")
jobs_app = typer.Typer(help="Job posting commands")

app.add_typer(users_app, name="users")
app.add_typer(jobs_app, name="jobs")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


@app.command("init")
def init_cmd() -> None:
    """Create tables, patch older schemas, and prepare the upload directory."""
    configure_logging()
    result = init_database()
    typer.echo(json.dumps({"ok": True, **result}, indent=2))


@users_app.command("create")
def users_create(
    name: str = typer.Option(..., "--name"),
    email: str = typer.Option(..., "--email"),
    password: str = typer.Option(..., "--password"),
    role: str = typer.Option("jobseeker", "--role"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        try:
            result = AccountService(db).register(name=name, email=email, password=password, role=role)
        except JobBoardError as exc:
            raise typer.BadParameter(exc.message) from exc
        typer.echo(json.dumps(result["user"], indent=2))


@jobs_app.command("list")
def jobs_list(limit: int = typer.Option(20, "--limit")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        jobs = Repository(db).list_jobs(limit=limit)
        typer.echo(json.dumps([serialize_job(job) for job in jobs], indent=2))


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
) -> None:
    configure_logging()
    ensure_initialized()
    settings = get_settings()
    app_instance = create_app()
    uvicorn.run(app_instance, host=host or settings.app_host, port=port or settings.app_port)
