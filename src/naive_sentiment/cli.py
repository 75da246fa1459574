"""Command-line interface for naive-sentiment.

Provides ``score``, ``categorize``, ``tokens``, ``normalize``, ``train``
and ``stats`` commands with rich terminal output using the ``click`` and
``rich`` libraries.

Usage::

    naive-sentiment score "I love this lovely place"
    naive-sentiment categorize "The service was bad"
    naive-sentiment --data-dir ./model train neg awful dreadful
    naive-sentiment --locale de_DE normalize "Grüße"
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .classifier import SentimentClassifier
from .config import SentimentSettings
from .errors import SentimentError
from .models import CLASSES, SentimentClass
from .normalizer import normalize as normalize_text

console = Console()
err_console = Console(stderr=True)


def _get_class_style(class_name: str) -> str:
    """Return a rich style string for a sentiment class."""
    return {
        SentimentClass.POSITIVE.value: "bold green",
        SentimentClass.NEGATIVE.value: "bold red",
        SentimentClass.NEUTRAL.value: "bold yellow",
    }.get(class_name, "")


def _fail(error: Exception) -> None:
    err_console.print(f"[bold red]Error:[/] {error}")
    sys.exit(1)


def _get_classifier(ctx: click.Context) -> SentimentClassifier:
    """Build the classifier once per invocation."""
    if "classifier" not in ctx.obj:
        try:
            ctx.obj["classifier"] = SentimentClassifier.from_settings(ctx.obj["settings"])
        except (SentimentError, ValueError) as e:
            _fail(e)
    return ctx.obj["classifier"]


@click.group()
@click.version_option(package_name="naive-sentiment")
@click.option("--data-dir", "-d", type=click.Path(path_type=Path), default=None,
              help="Directory holding data.<list>.json word lists.")
@click.option("--locale", "-l", default=None,
              help="Locale for accent folding (e.g. de_DE, da_DK).")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, data_dir: Optional[Path], locale: Optional[str],
         verbose: bool) -> None:
    """Naive Bayes sentiment classifier for short texts.

    Classifies sentences as positive (pos), negative (neg) or neutral (neu)
    using word lists.
    """
    overrides: dict = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if locale is not None:
        overrides["locale"] = locale

    try:
        settings = SentimentSettings(**overrides)
    except ValueError as e:
        _fail(e)

    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command()
@click.argument("text")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_context
def score(ctx: click.Context, text: str, output: str) -> None:
    """Show the probability of each class for TEXT.

    Example: naive-sentiment score "What a lovely day"
    """
    classifier = _get_classifier(ctx)
    try:
        result = classifier.classify(text)
    except SentimentError as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    table = Table(title="Sentiment scores", show_lines=False)
    table.add_column("Class", style="cyan", width=8)
    table.add_column("Probability", justify="right", width=12)
    for class_name, probability in result.probabilities.items():
        style = _get_class_style(class_name) if class_name == result.predicted_class else ""
        table.add_row(class_name, f"[{style}]{probability:.3f}[/]" if style else f"{probability:.3f}")

    console.print(table)
    console.print(
        f"Predicted: [{_get_class_style(result.predicted_class)}]"
        f"{result.predicted_class}[/] ({result.confidence:.1%})"
    )


@main.command()
@click.argument("text")
@click.pass_context
def categorize(ctx: click.Context, text: str) -> None:
    """Print the most probable class for TEXT."""
    classifier = _get_classifier(ctx)
    try:
        click.echo(classifier.categorize(text))
    except SentimentError as e:
        _fail(e)


@main.command()
@click.argument("text")
@click.pass_context
def tokens(ctx: click.Context, text: str) -> None:
    """Show how TEXT is tokenized and which tokens count."""
    classifier = _get_classifier(ctx)
    dictionary = classifier.dictionary
    qualifying = set(classifier.qualifying_tokens(text))

    table = Table(title="Tokens", show_lines=False)
    table.add_column("#", justify="right", width=4)
    table.add_column("Token", style="white")
    table.add_column("Scored", justify="center", width=7)
    for class_name in CLASSES:
        table.add_column(class_name, justify="center", width=5)

    for i, token in enumerate(classifier.tokenize(text), 1):
        counts = dictionary.classes_for(token)
        table.add_row(
            str(i),
            repr(token),
            "yes" if token in qualifying else "[dim]no[/]",
            *(str(counts.get(c, 0)) for c in CLASSES),
        )
    console.print(table)


@main.command()
@click.argument("text")
@click.pass_context
def normalize(ctx: click.Context, text: str) -> None:
    """Fold accented characters in TEXT to ASCII."""
    click.echo(normalize_text(text, ctx.obj["settings"].locale))


@main.command()
@click.argument("class_name", metavar="CLASS",
                type=click.Choice([c.value for c in SentimentClass]))
@click.argument("words", nargs=-1, required=True)
@click.pass_context
def train(ctx: click.Context, class_name: str, words: tuple[str, ...]) -> None:
    """Append WORDS to the stored word list for CLASS.

    Example: naive-sentiment --data-dir ./model train pos splendid
    """
    classifier = _get_classifier(ctx)
    try:
        result = classifier.train(class_name, list(words))
    except (SentimentError, ValueError) as e:
        _fail(e)

    console.print(Panel(
        result.message,
        title=f"Training: {class_name}",
        border_style="blue",
    ))


@main.command()
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_context
def stats(ctx: click.Context, output: str) -> None:
    """Show dictionary size and load counters."""
    classifier = _get_classifier(ctx)
    summary = classifier.dictionary.to_dict()
    summary["priors"] = classifier.priors

    if output == "json":
        click.echo(json.dumps(summary, indent=2))
        return

    counters = summary["counters"]
    table = Table(title="Dictionary", show_lines=False)
    table.add_column("Class", style="cyan", width=8)
    table.add_column("Distinct tokens", justify="right")
    table.add_column("Words loaded", justify="right")
    table.add_column("Prior", justify="right")
    for class_name in CLASSES:
        table.add_row(
            class_name,
            str(summary["distinct_tokens"].get(class_name, 0)),
            str(counters["class_tok_counts"].get(class_name, 0)),
            f"{summary['priors'][class_name]:.12f}",
        )
    console.print(table)
    console.print(
        f"Tokens: {summary['tokens']} | Ignored: {summary['ignore_list']} | "
        f"Negation prefixes: {summary['negation_prefixes']}"
    )


if __name__ == "__main__":
    main()
