"""
storyshape.cli - Typer CLI entry point.

Provides subcommands for scoring texts and extracting their narrative
trajectories.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from storyshape import __version__
from storyshape.config import (
    CONFIG_FILENAME,
    StoryshapeConfig,
    build_config,
    create_default_config,
    load_config,
    merge_config,
    write_config,
)
from storyshape.exceptions import ConfigError, DependencyError, StoryshapeError
from storyshape.io import get_text_as_string, write_json
from storyshape.logging import configure_logging

app = typer.Typer(
    name="storyshape",
    help="Narrative sentiment trajectories.\n\n"
    "Scores the sentences of a text with sentiment lexicons and extracts a "
    "smoothed emotional arc with low-pass DCT filtering.",
    add_completion=False,
)
console = Console()


def find_config_file() -> Path | None:
    """Find storyshape.yaml in the current directory or a parent."""
    current = Path.cwd()
    while current != current.parent:
        if (current / CONFIG_FILENAME).exists():
            return current / CONFIG_FILENAME
        current = current.parent
    return None


def resolve_config(
    config_path: Path | None,
    method: str | None = None,
    lexicon_dir: Path | None = None,
) -> StoryshapeConfig:
    """Load the config (or defaults) and apply command-line overrides."""
    path = config_path or find_config_file()
    try:
        config = load_config(path) if path else StoryshapeConfig()
    except FileNotFoundError as e:
        raise ConfigError(str(e)) from e
    if method is None and lexicon_dir is None:
        return config

    overrides: dict = {}
    if method is not None:
        overrides["sentiment"] = {"method": method}
    if lexicon_dir is not None:
        overrides["lexicon_dir"] = lexicon_dir
    return build_config(merge_config(overrides, config.model_dump()))


def read_input(path: Path) -> str:
    if not path.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)
    return get_text_as_string(path)


def fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"storyshape {__version__}")
        raise typer.Exit()


def config_option() -> Path | None:
    return typer.Option(None, "--config", "-c", help=f"Path to {CONFIG_FILENAME}")


def method_option() -> str | None:
    return typer.Option(
        None,
        "--method",
        "-m",
        help="Sentiment method: syuzhet, afinn, bing, nrc, custom, stanford",
    )


def lexicon_dir_option() -> Path | None:
    return typer.Option(None, "--lexicon-dir", help="Directory of lexicon CSV files")


def output_option() -> Path | None:
    return typer.Option(None, "--output", "-o", help="Write results as JSON")


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Storyshape - narrative sentiment trajectories."""
    configure_logging(verbose)


@app.command("init")
def init_config(
    profile: str = typer.Option(
        "default", "--profile", "-p", help="Profile: default, legacy, or macro"
    ),
    path: Path = typer.Option(Path("."), "--path", "-d", help="Directory to write config in"),
) -> None:
    """Write a starter storyshape.yaml."""
    config_file = path / CONFIG_FILENAME
    if config_file.exists():
        console.print(f"[red]Error: '{config_file}' already exists[/red]")
        raise typer.Exit(1)

    try:
        write_config(create_default_config(profile), config_file)
    except StoryshapeError as e:
        fail(e)

    console.print(f"[green]✓[/green] Created {config_file} with profile '{profile}'")
    console.print("\nNext step: set [cyan]lexicon_dir[/cyan] to your lexicon CSV directory")


@app.command("sentiment")
def sentiment_cmd(
    file: Path = typer.Argument(..., help="Text file to score"),
    config_path: Path | None = config_option(),
    method: str | None = method_option(),
    lexicon_dir: Path | None = lexicon_dir_option(),
    output: Path | None = output_option(),
) -> None:
    """Score each sentence of a text."""
    from storyshape.pipeline import sentence_sentiment

    text = read_input(file)
    try:
        config = resolve_config(config_path, method, lexicon_dir)
        result = sentence_sentiment(text, config)
    except StoryshapeError as e:
        fail(e)

    if output:
        write_json(output, result)
        console.print(f"[green]✓[/green] Wrote {len(result['values'])} values to {output}")
        return

    table = Table(title=f"Sentence Sentiment ({result['method']})")
    table.add_column("#", style="dim")
    table.add_column("Sentence", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for i, (sentence, value) in enumerate(zip(result["sentences"], result["values"]), start=1):
        table.add_row(str(i), sentence, f"{value:g}")
    console.print(table)


@app.command("trajectory")
def trajectory_cmd(
    file: Path = typer.Argument(..., help="Text file to analyze"),
    config_path: Path | None = config_option(),
    method: str | None = method_option(),
    lexicon_dir: Path | None = lexicon_dir_option(),
    output: Path | None = output_option(),
) -> None:
    """Compute the smoothed narrative trajectory of a text."""
    from storyshape.pipeline import analyze_text

    text = read_input(file)
    try:
        config = resolve_config(config_path, method, lexicon_dir)
        result = analyze_text(text, config)
    except StoryshapeError as e:
        fail(e)

    if output:
        write_json(output, result)
        console.print(
            f"[green]✓[/green] Wrote trajectory of {len(result['trajectory'])} points to {output}"
        )
        return

    settings = config.transform
    table = Table(
        title=f"Trajectory ({settings.method}, low_pass_size={settings.low_pass_size})"
    )
    table.add_column("Position", style="cyan", justify="right")
    table.add_column("Value", style="green", justify="right")
    n = len(result["trajectory"])
    for i, value in enumerate(result["trajectory"], start=1):
        table.add_row(f"{100 * i / n:.0f}%", f"{value:.4f}")
    console.print(table)


@app.command("percent")
def percent_cmd(
    file: Path = typer.Argument(..., help="Text file to analyze"),
    bins: int = typer.Option(100, "--bins", "-b", help="Number of percentage bins"),
    config_path: Path | None = config_option(),
    method: str | None = method_option(),
    lexicon_dir: Path | None = lexicon_dir_option(),
    output: Path | None = output_option(),
) -> None:
    """Average sentence sentiment over percentage chunks of a text."""
    from storyshape.pipeline import sentence_sentiment
    from storyshape.transform.bins import bin_means

    text = read_input(file)
    try:
        config = resolve_config(config_path, method, lexicon_dir)
        values = sentence_sentiment(text, config)["values"]
        means = bin_means(values, bins=bins)
    except StoryshapeError as e:
        fail(e)

    if output:
        write_json(output, {"bins": [{"bin": i, "mean": mean} for i, mean in means]})
        console.print(f"[green]✓[/green] Wrote {len(means)} bins to {output}")
        return

    table = Table(title=f"Percentage Means ({bins} bins)")
    table.add_column("Bin", style="cyan", justify="right")
    table.add_column("Mean", style="green", justify="right")
    for i, mean in means:
        table.add_row(str(i), f"{mean:.4f}")
    console.print(table)


@app.command("entropy")
def entropy_cmd(
    text: str = typer.Argument(..., help="Message to measure"),
    keep_neutral: bool = typer.Option(
        False, "--keep-neutral", help="Keep neutral words in the sign distribution"
    ),
    config_path: Path | None = config_option(),
    method: str | None = method_option(),
    lexicon_dir: Path | None = lexicon_dir_option(),
) -> None:
    """Measure the emotional entropy (mixed messages) of a string."""
    from storyshape.pipeline import mixed_messages

    try:
        config = resolve_config(config_path, method, lexicon_dir)
        result = mixed_messages(
            text,
            method=config.sentiment.method,
            remove_neutral=not keep_neutral,
            lexicon_dir=config.resolved_lexicon_dir(),
            lexicon=config.sentiment.custom_lexicon,
            language=config.sentiment.language,
            lowercase=config.sentiment.lowercase,
        )
    except StoryshapeError as e:
        fail(e)

    console.print(f"entropy        {result.entropy:.6f}")
    console.print(f"metric_entropy {result.metric_entropy:.6f}")


@app.command("emotions")
def emotions_cmd(
    file: Path = typer.Argument(..., help="Text file to analyze"),
    config_path: Path | None = config_option(),
    lexicon_dir: Path | None = lexicon_dir_option(),
    output: Path | None = output_option(),
) -> None:
    """Count NRC emotions and valence per sentence."""
    from storyshape.lexicon.emotions import NRC_COLUMNS, get_nrc_sentiment
    from storyshape.text import get_sentences

    text = read_input(file)
    try:
        config = resolve_config(config_path, lexicon_dir=lexicon_dir)
        sentences = get_sentences(text)
        rows = get_nrc_sentiment(
            sentences,
            language=config.sentiment.language,
            lexicon=config.sentiment.custom_lexicon,
            lowercase=config.sentiment.lowercase,
            lexicon_dir=config.resolved_lexicon_dir(),
        )
    except StoryshapeError as e:
        fail(e)

    if output:
        write_json(output, {"sentences": sentences, "emotions": rows})
        console.print(f"[green]✓[/green] Wrote {len(rows)} rows to {output}")
        return

    table = Table(title="NRC Emotions (totals)")
    table.add_column("Category", style="cyan")
    table.add_column("Total", style="green", justify="right")
    for column in NRC_COLUMNS:
        table.add_row(column, f"{sum(row[column] for row in rows):g}")
    console.print(table)


@app.command("doctor")
def run_doctor(
    config_path: Path | None = config_option(),
    lexicon_dir: Path | None = lexicon_dir_option(),
) -> None:
    """Check lexicon files and external tagger setup."""
    from storyshape.validation import check_java, check_lexicon_dir, check_tagger_dir

    console.print("[cyan]Running preflight checks...[/cyan]\n")

    try:
        config = resolve_config(config_path, lexicon_dir=lexicon_dir)
    except StoryshapeError as e:
        fail(e)

    table = Table(title="Environment Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Details")

    all_passed = True
    directory = config.resolved_lexicon_dir()
    for name, present in check_lexicon_dir(directory).items():
        if present:
            table.add_row(f"Lexicon {name}", "✓ Found", str(directory))
        else:
            table.add_row(f"Lexicon {name}", "✗ Missing", str(directory) if directory else "")
            if config.sentiment.method == name:
                all_passed = False

    try:
        java = check_java()
        table.add_row("Java", "✓ Installed", java.get("java_version", "unknown"))
    except DependencyError as e:
        table.add_row("Java", "✗ Missing", e.install_hint or "")
        if config.sentiment.method == "stanford":
            all_passed = False

    tagger = check_tagger_dir(config.sentiment.tagger_path)
    if tagger["valid"]:
        table.add_row("CoreNLP", "✓ Found", f"{tagger['jar_count']} jars")
    else:
        table.add_row("CoreNLP", "- Not configured", tagger["error"])
        if config.sentiment.method == "stanford":
            all_passed = False

    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed[/green]")
    else:
        console.print("\n[yellow]⚠ Some checks failed[/yellow]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
