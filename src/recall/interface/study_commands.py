"""Study commands: session summary, interactive review loop, single review."""

import json
from typing import Annotated

import typer

from recall.application.scheduler import Rating
from recall.application.study_service import StudyService
from recall.domain.errors import InvalidInput, RecallError
from recall.domain.models import Card, ReviewOutcome
from recall.interface._common import fail, open_store
from recall.interface.card_commands import card_dict

RATING_PROMPT = "Rating 0-5 ({})".format(
    ", ".join(f"{r.value}={r.name.capitalize()}" for r in Rating)
)


def _echo_outcome(outcome: ReviewOutcome) -> None:
    due = outcome.next_review_date.strftime("%Y-%m-%d %H:%M")
    typer.echo(
        f"Next review in {outcome.interval} day(s) on {due} "
        f"(ease {outcome.card.state.ease_factor:.2f})"
    )


def _review_interactively(service: StudyService, cards: list[Card]) -> int:
    reviewed = 0
    for i, card in enumerate(cards, start=1):
        typer.secho(f"\nCard {i} of {len(cards)}", bold=True)
        typer.echo(card.front)
        typer.prompt("Press Enter to show answer", default="", show_default=False)
        typer.echo(card.back)

        while True:
            quality = typer.prompt(RATING_PROMPT, type=int)
            try:
                outcome = service.submit_review(card.id, quality)
                break
            except InvalidInput as e:
                typer.secho(str(e), fg="yellow")

        _echo_outcome(outcome)
        reviewed += 1
    return reviewed


def study(
    ctx: typer.Context,
    deck_id: Annotated[int, typer.Argument(help="Deck id.")],
    interactive: Annotated[
        bool, typer.Option("--interactive", "-i", help="Review the due cards one by one.")
    ] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """[bold green]Start[/bold green] a study session for a deck."""
    with open_store(ctx) as store:
        service = StudyService(store)
        try:
            session = service.start_session(deck_id)
        except RecallError as e:
            raise fail(e) from e

        if json_output:
            typer.echo(
                json.dumps(
                    {
                        "deck_id": session.deck_id,
                        "total_due": session.total_due,
                        "new_cards": session.new_cards,
                        "review_cards": session.review_cards,
                        "due_cards": [card_dict(c) for c in session.due_cards],
                    },
                    indent=2,
                )
            )
            return

        typer.echo(
            f"Due: {session.total_due}  New: {session.new_cards}  Review: {session.review_cards}"
        )
        if not session.due_cards:
            typer.secho("Nothing to study right now.", fg="green")
            return

        if not interactive:
            for c in session.due_cards:
                kind = "new" if c.is_new else "review"
                typer.echo(f"  [{c.id}] {c.front}  ({kind})")
            return

        reviewed = _review_interactively(service, session.due_cards)
        typer.secho(f"\nSession complete: {reviewed} card(s) reviewed.", fg="green")


def review(
    ctx: typer.Context,
    card_id: Annotated[int, typer.Argument(help="Card id.")],
    quality: Annotated[
        int, typer.Argument(help="Recall quality: 0 (no recall) to 5 (perfect).")
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Submit one review for a card."""
    with open_store(ctx) as store:
        try:
            outcome = StudyService(store).submit_review(card_id, quality)
        except RecallError as e:
            raise fail(e) from e

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "card": card_dict(outcome.card),
                    "next_review_date": outcome.next_review_date.isoformat(),
                    "interval": outcome.interval,
                    "session_complete": outcome.session_complete,
                },
                indent=2,
            )
        )
        return
    _echo_outcome(outcome)
