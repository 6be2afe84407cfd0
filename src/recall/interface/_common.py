"""Helpers shared by the CLI command modules."""

from contextlib import contextmanager
from typing import Any

import typer

from recall.application.config import AppConfig, resolve_config
from recall.application.factory import get_card_store
from recall.domain.errors import InvalidInput, RecallError


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    """Resolve config, letting non-None CLI values win over file and env."""
    return resolve_config({k: v for k, v in overrides.items() if v is not None})


@contextmanager
def open_store(ctx: typer.Context):
    """
    Yield the configured CardStore and close it afterwards.

    The memory backend is refused here: a one-shot command would start from
    an empty store and lose its changes on exit.
    """
    obj = ctx.obj or {}
    config = _resolve_with_overrides(backend=obj.get("backend"), db_path=obj.get("db_path"))
    if config.backend == "memory":
        raise fail(InvalidInput("The memory backend only works with 'recall serve daemon'"))
    store = get_card_store(config)
    try:
        yield store
    finally:
        store.close()


def fail(e: RecallError) -> typer.Exit:
    """Print a domain error and build the matching exit."""
    typer.secho(f"Error: {e}", fg="red", err=True)
    return typer.Exit(2 if isinstance(e, InvalidInput) else 1)
