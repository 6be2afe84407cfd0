"""Card subgroup: list, add, edit, delete."""

import json
from typing import Annotated

import typer

from recall.application.card_service import CardService
from recall.domain.errors import RecallError
from recall.domain.models import Card
from recall.interface._common import fail, open_store

card_app = typer.Typer(help="Manage cards.", no_args_is_help=True)


def card_dict(card: Card) -> dict:
    return {
        "id": card.id,
        "deck_id": card.deck_id,
        "front": card.front,
        "back": card.back,
        "repetitions": card.state.repetitions,
        "ease_factor": card.state.ease_factor,
        "interval": card.state.interval,
        "next_review_date": card.state.next_review_date.isoformat(),
    }


@card_app.command("list")
def list_cmd(
    ctx: typer.Context,
    deck_id: Annotated[int, typer.Argument(help="Deck id.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List the cards of a deck with their schedule."""
    with open_store(ctx) as store:
        try:
            cards = CardService(store).list_cards(deck_id)
        except RecallError as e:
            raise fail(e) from e

    if json_output:
        typer.echo(json.dumps([card_dict(c) for c in cards], indent=2))
        return
    if not cards:
        typer.secho("No cards.", fg="yellow")
        return
    for c in cards:
        due = c.next_review_date.strftime("%Y-%m-%d %H:%M")
        typer.echo(f"[{c.id}] {c.front}  (due {due}, interval {c.state.interval}d)")


@card_app.command("add")
def add_cmd(
    ctx: typer.Context,
    deck_id: Annotated[int, typer.Argument(help="Deck id.")],
    front: Annotated[str, typer.Argument(help="Front (question) text.")],
    back: Annotated[str, typer.Argument(help="Back (answer) text.")],
):
    """Add a card to a deck. New cards are due immediately."""
    with open_store(ctx) as store:
        try:
            card = CardService(store).create_card(deck_id, front, back)
        except RecallError as e:
            raise fail(e) from e
    typer.secho(f"Created card [{card.id}] in deck {deck_id}", fg="green")


@card_app.command("edit")
def edit_cmd(
    ctx: typer.Context,
    card_id: Annotated[int, typer.Argument(help="Card id.")],
    front: Annotated[str | None, typer.Option(help="New front text.")] = None,
    back: Annotated[str | None, typer.Option(help="New back text.")] = None,
):
    """Change a card's text. Scheduling state is kept."""
    with open_store(ctx) as store:
        service = CardService(store)
        try:
            card = service.get_card(card_id)
            card = service.update_card(
                card_id,
                front if front is not None else card.front,
                back if back is not None else card.back,
            )
        except RecallError as e:
            raise fail(e) from e
    typer.secho(f"Updated card [{card.id}]", fg="green")


@card_app.command("delete")
def delete_cmd(
    ctx: typer.Context,
    card_id: Annotated[int, typer.Argument(help="Card id.")],
):
    """Delete a card."""
    with open_store(ctx) as store:
        try:
            CardService(store).delete_card(card_id)
        except RecallError as e:
            raise fail(e) from e
    typer.secho(f"Deleted card {card_id}", fg="green")
