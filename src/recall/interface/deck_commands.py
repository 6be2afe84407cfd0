"""Deck subgroup: list, create, show, rename, delete."""

import json
from typing import Annotated

import typer

from recall.application.card_service import CardService
from recall.application.deck_service import DeckService
from recall.domain.errors import RecallError
from recall.domain.models import Deck
from recall.interface._common import fail, open_store

deck_app = typer.Typer(help="Manage decks.", no_args_is_help=True)


def _deck_dict(deck: Deck, card_count: int | None = None) -> dict:
    d = {
        "id": deck.id,
        "name": deck.name,
        "description": deck.description,
        "owner_id": deck.owner_id,
        "created_at": deck.created_at.isoformat(),
    }
    if card_count is not None:
        d["cards"] = card_count
    return d


@deck_app.command("list")
def list_cmd(
    ctx: typer.Context,
    owner: Annotated[int | None, typer.Option(help="Only decks owned by this user id.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List decks with their card counts."""
    with open_store(ctx) as store:
        cards = CardService(store)
        rows = [
            _deck_dict(d, cards.count_cards(d.id)) for d in DeckService(store).list_decks(owner)
        ]

    if json_output:
        typer.echo(json.dumps(rows, indent=2))
        return
    if not rows:
        typer.secho("No decks.", fg="yellow")
        return
    for row in rows:
        typer.echo(f"[{row['id']}] {row['name']}  ({row['cards']} cards)")


@deck_app.command("create")
def create_cmd(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Deck name.")],
    description: Annotated[str, typer.Option("--description", "-d", help="Deck description.")] = "",
    owner: Annotated[int | None, typer.Option(help="Owner user id.")] = None,
):
    """Create a new deck."""
    with open_store(ctx) as store:
        try:
            deck = DeckService(store).create_deck(name, description, owner)
        except RecallError as e:
            raise fail(e) from e
    typer.secho(f"Created deck [{deck.id}] {deck.name}", fg="green")


@deck_app.command("show")
def show_cmd(
    ctx: typer.Context,
    deck_id: Annotated[int, typer.Argument(help="Deck id.")],
):
    """Show a deck as JSON."""
    with open_store(ctx) as store:
        try:
            deck = DeckService(store).get_deck(deck_id)
            count = CardService(store).count_cards(deck_id)
        except RecallError as e:
            raise fail(e) from e
    typer.echo(json.dumps(_deck_dict(deck, count), indent=2))


@deck_app.command("rename")
def rename_cmd(
    ctx: typer.Context,
    deck_id: Annotated[int, typer.Argument(help="Deck id.")],
    name: Annotated[str, typer.Argument(help="New deck name.")],
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="New description.")
    ] = None,
):
    """Rename a deck (and optionally replace its description)."""
    with open_store(ctx) as store:
        service = DeckService(store)
        try:
            if description is None:
                description = service.get_deck(deck_id).description
            deck = service.update_deck(deck_id, name, description)
        except RecallError as e:
            raise fail(e) from e
    typer.secho(f"Updated deck [{deck.id}] {deck.name}", fg="green")


@deck_app.command("delete")
def delete_cmd(
    ctx: typer.Context,
    deck_id: Annotated[int, typer.Argument(help="Deck id.")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Bypass confirmation.")
    ] = False,
):
    """Delete a deck and all of its cards."""
    if not force:
        typer.confirm(f"Delete deck {deck_id} and all its cards?", abort=True)
    with open_store(ctx) as store:
        try:
            DeckService(store).delete_deck(deck_id)
        except RecallError as e:
            raise fail(e) from e
    typer.secho(f"Deleted deck {deck_id}", fg="green")
