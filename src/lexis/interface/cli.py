"""lexis CLI: vocabulary bank management and spaced-repetition reviews."""

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from lexis.application.config import AppConfig, resolve_config
from lexis.application.id_service import generate_word_id
from lexis.application.review_service import ReviewService
from lexis.domain.errors import LexisError
from lexis.domain.srs import Card, ReviewQuality
from lexis.domain.vocabulary import VocabularyCategory, VocabularyItem
from lexis.infrastructure.persistence import JsonStateRepository

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lexis: spaced-repetition vocabulary trainer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage lexis configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}

DateOption = Annotated[
    str | None, typer.Option("--date", help="Review date (YYYY-MM-DD). Defaults to today.")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON.")]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _today(value: str | None) -> str:
    return value or date.today().isoformat()


def _config(ctx: typer.Context) -> AppConfig:
    ctx.ensure_object(dict)
    try:
        return resolve_config({"state_file": ctx.obj.get("state_file")})
    except ValidationError as e:
        typer.secho(f"Error: invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


@contextmanager
def _session(ctx: typer.Context, save: bool = True) -> Iterator[ReviewService]:
    """Load state, hand out a service, and persist the state afterwards."""
    config = _config(ctx)
    repo = JsonStateRepository(config.state_file)
    try:
        state = repo.load()
        service = ReviewService(
            state,
            weak_ease_threshold=config.weak_ease_threshold,
            weak_accuracy_threshold=config.weak_accuracy_threshold,
        )
        yield service
        if save:
            repo.save(state)
    except LexisError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _card_line(card: Card, current_date: str) -> str:
    level = card.mastery_level()
    overdue = card.days_overdue(current_date)
    when = f"due {card.next_review_date}" + (f" (+{overdue}d)" if overdue > 0 else "")
    return (
        f"{card.word_id}  {card.source_word} -> {card.target_word}  "
        f"[{level.display_name}] ease={card.ease_factor:.2f} {when}"
    )


def _item_line(item: VocabularyItem) -> str:
    flag = "*" if item.in_srs else " "
    return f"{flag} {item.id}  {item.source} -> {item.target}  ({item.category.display_name})"


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    state: Annotated[
        Path | None, typer.Option("--state", help="State file. Overrides config.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for lexis."""
    ctx.ensure_object(dict)
    ctx.obj["state_file"] = state
    level = max(verbose, _config(ctx).verbose)
    logging.getLogger().setLevel(_LOG_LEVELS.get(level, logging.DEBUG))


# ---------------------------------------------------------------------------
# Vocabulary commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Word or phrase in your language.")],
    target: Annotated[str, typer.Argument(help="Translation in the language being learned.")],
    word_id: Annotated[
        str | None, typer.Option("--id", help="Item id. Generated when omitted.")
    ] = None,
    lesson: Annotated[str, typer.Option(help="Lesson id.")] = "",
    level: Annotated[str, typer.Option(help="CEFR level, e.g. A1.")] = "",
    pair: Annotated[str, typer.Option(help="Language pair, e.g. en_to_pt_br.")] = "",
    category: Annotated[str, typer.Option(help="Noun, Verb, Phrase, ...")] = "Other",
    tag: Annotated[list[str] | None, typer.Option(help="Tag; repeat for several.")] = None,
    pronunciation: Annotated[str | None, typer.Option(help="Pronunciation guide.")] = None,
    example: Annotated[str | None, typer.Option(help="Example sentence.")] = None,
    current_date: DateOption = None,
):
    """Add a word to the vocabulary bank."""
    item = VocabularyItem(
        id=word_id or generate_word_id(),
        source=source,
        target=target,
        lesson_id=lesson,
        level=level,
        language_pair=pair,
        category=VocabularyCategory.parse(category),
        added_at=_today(current_date),
        pronunciation=pronunciation,
        example_sentence=example,
        tags=tuple(tag or ()),
    )
    with _session(ctx) as service:
        service.add_item(item)
    typer.secho(f"Added {item.id}", fg="green")


@app.command("import")
def import_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="YAML file with vocabulary entries.")],
    current_date: DateOption = None,
):
    """Import vocabulary entries from a YAML file."""
    from lexis.application.importer import import_vocabulary

    with _session(ctx) as service:
        try:
            count = import_vocabulary(path, service.state.vocabulary, _today(current_date))
        except OSError as e:
            typer.secho(f"Error: cannot read {path}: {e}", fg="red", err=True)
            raise typer.Exit(1) from e
    typer.secho(f"Imported {count} items.", fg="green")


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Text to look for in words and tags.")],
    limit: Annotated[int | None, typer.Option(help="Maximum number of results.")] = None,
    json_output: JsonOption = False,
):
    """Search the vocabulary bank."""
    config = _config(ctx)
    with _session(ctx, save=False) as service:
        results = service.search(query, limit if limit is not None else config.search_limit)

    if json_output:
        typer.echo(
            json.dumps(
                [{**asdict(i), "category": i.category.value} for i in results],
                ensure_ascii=False,
                indent=2,
            )
        )
        return

    if not results:
        typer.secho("No matches.", fg="yellow")
        return
    for item in results:
        typer.echo(_item_line(item))


@app.command()
def promote(
    ctx: typer.Context,
    word_id: Annotated[str, typer.Argument(help="Vocabulary item id.")],
    current_date: DateOption = None,
):
    """Create a review card for a vocabulary item."""
    with _session(ctx) as service:
        card = service.promote(word_id, _today(current_date))
    typer.secho(f"Card {card.word_id} due {card.next_review_date}", fg="green")


# ---------------------------------------------------------------------------
# Review commands
# ---------------------------------------------------------------------------


@app.command()
def review(
    ctx: typer.Context,
    word_id: Annotated[str, typer.Argument(help="Card id.")],
    quality: Annotated[int, typer.Argument(help="Recall quality 0 (forgot) to 5 (easy).")],
    current_date: DateOption = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show the new schedule without saving it.")
    ] = False,
):
    """Record a review and reschedule the card."""
    today = _today(current_date)
    with _session(ctx, save=not dry_run) as service:
        if dry_run:
            update = service.preview(word_id, quality, today)
        else:
            update = service.review(word_id, quality, today)

    rating = ReviewQuality.clamp(update.quality)
    prefix = "[DRY RUN] " if dry_run else ""
    typer.secho(
        f"{prefix}{rating.display_name}: next review {update.next_review_date} "
        f"(interval {update.new_interval}d, ease {update.new_ease_factor:.2f}, "
        f"streak {update.new_repetitions})",
        fg="green" if update.was_successful else "yellow",
    )


@app.command()
def due(
    ctx: typer.Context,
    current_date: DateOption = None,
    limit: Annotated[int | None, typer.Option(help="Session size. Defaults to config.")] = None,
):
    """List cards due for review, hardest first."""
    config = _config(ctx)
    today = _today(current_date)
    with _session(ctx, save=False) as service:
        queue = service.session_queue(
            today, limit if limit is not None else config.session_limit
        )

    if not queue:
        typer.secho("Nothing due.", fg="green")
        return
    for card in queue:
        typer.echo(_card_line(card, today))


@app.command()
def weak(ctx: typer.Context, current_date: DateOption = None):
    """List cards with a low ease factor or low accuracy."""
    today = _today(current_date)
    with _session(ctx, save=False) as service:
        cards = service.weak_cards()

    if not cards:
        typer.secho("No weak cards.", fg="green")
        return
    for card in cards:
        typer.echo(f"{_card_line(card, today)} accuracy={card.accuracy_rate():.0f}%")


@app.command()
def stats(
    ctx: typer.Context,
    current_date: DateOption = None,
    json_output: JsonOption = False,
):
    """Summarize cards and vocabulary."""
    today = _today(current_date)
    with _session(ctx, save=False) as service:
        card_stats = service.card_stats(today)
        vocab_stats = service.vocabulary_stats()

    if json_output:
        typer.echo(
            json.dumps({"cards": card_stats.to_dict(), "vocabulary": asdict(vocab_stats)}, indent=2)
        )
        return

    typer.echo(f"Cards: {card_stats.total_cards}  Due: {card_stats.due_today}")
    for level, count in card_stats.by_mastery().items():
        typer.echo(f"  {level.display_name:<11}{count}")
    typer.echo(
        f"Average ease: {card_stats.average_ease_factor:.2f}  "
        f"Average accuracy: {card_stats.average_accuracy:.1f}%"
    )
    typer.echo(
        f"Vocabulary: {vocab_stats.total}  In SRS: {vocab_stats.in_srs}  "
        f"Not in SRS: {vocab_stats.not_in_srs}"
    )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
