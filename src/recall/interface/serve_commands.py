"""Serve subgroup: run the HTTP API."""

import os
from typing import Annotated

import typer

from recall.interface._common import _resolve_with_overrides

serve_app = typer.Typer(help="Run recall servers.", no_args_is_help=True)


@serve_app.command("daemon")
def daemon(
    ctx: typer.Context,
    port: Annotated[int | None, typer.Option(help="Port to bind the server to.")] = None,
    host: Annotated[str | None, typer.Option(help="Host to bind the server to.")] = None,
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Start the recall HTTP API (FastAPI via uvicorn)."""
    import uvicorn

    obj = ctx.obj or {}
    config = _resolve_with_overrides(
        port=port, host=host, backend=obj.get("backend"), db_path=obj.get("db_path")
    )
    # The app resolves its own config on import; hand storage overrides over via env.
    os.environ["RECALL_BACKEND"] = config.backend
    os.environ["RECALL_DB_PATH"] = str(config.db_path)

    typer.echo(f"Starting recall server on http://{config.host}:{config.port}")
    uvicorn.run("recall.server:app", host=config.host, port=config.port, reload=reload)
