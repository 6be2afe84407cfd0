"""Recall CLI: root commands and subgroup registration."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from recall.application.config import resolve_config
from recall.interface._common import _resolve_with_overrides

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="recall: flashcard decks on an SM-2 review schedule.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Register subgroups
# ---------------------------------------------------------------------------

from recall.interface.card_commands import card_app  # noqa: E402
from recall.interface.deck_commands import deck_app  # noqa: E402
from recall.interface.serve_commands import serve_app  # noqa: E402
from recall.interface.study_commands import review, study  # noqa: E402

app.add_typer(deck_app, name="deck")
app.add_typer(card_app, name="card")
app.add_typer(serve_app, name="serve")
app.command("study")(study)
app.command("review")(review)

config_app = typer.Typer(help="Manage recall configuration.", no_args_is_help=True)
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


def _log_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    backend: Annotated[
        str | None,
        typer.Option(
            help="Card store backend: sqlite, memory. memory only lasts one process, "
            "so it is for 'serve daemon'."
        ),
    ] = None,
    db: Annotated[Path | None, typer.Option("--db", help="SQLite database path.")] = None,
):
    """Global settings for recall."""
    ctx.ensure_object(dict)
    ctx.obj["backend"] = backend
    ctx.obj["db_path"] = db

    # -v on the command line wins over the configured verbosity
    config = _resolve_with_overrides(verbose=verbose or None)
    logging.getLogger().setLevel(_log_level(config.verbose))
