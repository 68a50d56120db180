"""CLI entry point for the card digitiser."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from card_digitiser.capture import CameraSource, collect_images, load_image
from card_digitiser.config import KeyPolicy, SessionCredentials
from card_digitiser.context import AppContext
from card_digitiser.errors import CardDigitiserError
from card_digitiser.export import Exporter, ExportFormat
from card_digitiser.extractor.providers import ProviderName
from card_digitiser.models.card import Card
from card_digitiser.ocr.paddle_ocr import PaddleOCRBackend
from card_digitiser.store.card_store import EDIT_DELIMITER

app = typer.Typer(
    name="cardscan",
    help="Digitise business cards and manage the extracted contacts.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

KEY_SPACE = 32
KEY_ESCAPE = 27

# httpx logs full request URLs at INFO, and Gemini takes its key in the query
HTTP_LOGGERS = ("httpx", "httpcore")


def configure_logging(verbose: bool = False):
    """Send logs to stderr through rich, keeping HTTP client logs quiet."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Annotated[
        Path,
        typer.Option(
            "--data-dir",
            envvar="CARDSCAN_DATA_DIR",
            help="Directory holding the stored cards",
        ),
    ] = Path(typer.get_app_dir("cardscan")),
    provider: Annotated[
        ProviderName,
        typer.Option(
            "--provider",
            "-p",
            envvar="CARDSCAN_PROVIDER",
            help="LLM provider used when an API key is set",
        ),
    ] = ProviderName.OPENAI,
    api_key: Annotated[
        str,
        typer.Option(
            "--api-key",
            envvar="CARDSCAN_API_KEY",
            help="API key for the provider (kept for this session only)",
            show_default=False,
        ),
    ] = "",
    skip_invalid_key: Annotated[
        bool,
        typer.Option(
            "--skip-invalid-key",
            help="Use regex extraction when the key format looks invalid",
        ),
    ] = False,
    timeout: Annotated[
        float,
        typer.Option("--timeout", help="LLM request timeout in seconds"),
    ] = 60.0,
    lang: Annotated[
        str,
        typer.Option("--lang", "-l", help="OCR language (default: eng)"),
    ] = "eng",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logs"),
    ] = False,
):
    """Digitise business cards and manage the extracted contacts."""
    configure_logging(verbose)

    credentials = SessionCredentials()
    credentials.provider = provider
    credentials.api_key = api_key

    context = AppContext.open(
        data_dir,
        credentials=credentials,
        key_policy=KeyPolicy.SKIP_INVALID if skip_invalid_key else KeyPolicy.ATTEMPT,
        timeout=timeout,
        language=lang,
    )
    ctx.obj = context
    ctx.call_on_close(context.close)


@app.command()
def capture(
    ctx: typer.Context,
    camera: Annotated[
        int,
        typer.Option("--camera", "-c", help="Camera index"),
    ] = 0,
):
    """Capture cards from a live camera: SPACE captures, q or ESC quits."""
    import cv2

    context: AppContext = ctx.obj
    digitiser = context.digitiser(PaddleOCRBackend(default_language=context.language))

    try:
        with CameraSource(camera) as source:
            console.print("Press [bold]SPACE[/bold] to capture, [bold]q[/bold] to quit.")
            while True:
                frame = source.grab()
                cv2.imshow("cardscan", frame)
                key = cv2.waitKey(30) & 0xFF
                if key in (ord("q"), KEY_ESCAPE):
                    break
                if key != KEY_SPACE:
                    continue

                console.print("Processing...")
                try:
                    card = digitiser.process(frame.copy())
                except CardDigitiserError as e:
                    console.print(f"[red]Error processing card:[/red] {e}")
                    continue
                _print_card(card)
    except CardDigitiserError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        cv2.destroyAllWindows()


@app.command()
def scan(
    ctx: typer.Context,
    inputs: Annotated[
        list[Path],
        typer.Argument(help="Image files or directories to process"),
    ],
    ocr_only: Annotated[
        bool,
        typer.Option("--ocr-only", help="Only run OCR and print the raw text"),
    ] = False,
):
    """Digitise business card image files."""
    context: AppContext = ctx.obj
    images = collect_images(inputs)

    if not images:
        console.print("[yellow]Warning:[/yellow] No images found to process.")
        raise typer.Exit(0)

    digitiser = context.digitiser(PaddleOCRBackend(default_language=context.language))
    failed = 0

    for path in images:
        try:
            if ocr_only:
                text = digitiser.recognize_only(load_image(path))
                console.print(Panel(text, title=str(path), border_style="blue"))
                continue
            card = digitiser.process_file(path)
        except (FileNotFoundError, CardDigitiserError) as e:
            failed += 1
            console.print(f"[red]Error:[/red] {path}: {e}")
            continue
        _print_card(card)

    if not ocr_only:
        console.print(
            f"[green]Done:[/green] {len(images) - failed} succeeded, {failed} failed"
        )


@app.command("list")
def list_cards(
    ctx: typer.Context,
    output_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output raw JSON instead of a table"),
    ] = False,
):
    """Show the stored cards, newest first."""
    context: AppContext = ctx.obj

    if output_json:
        print(Exporter().to_json(context.store))
        return

    if not len(context.store):
        console.print("No cards stored yet.")
        return

    table = Table("#", "Name", "Phone(s)", "Email", "Other")
    for index, card in enumerate(context.store):
        table.add_row(
            str(index),
            card.name,
            "; ".join(card.phones),
            card.email,
            "; ".join(card.other),
        )
    console.print(table)


@app.command()
def edit(
    ctx: typer.Context,
    index: Annotated[int, typer.Argument(help="Card index as shown by 'list'")],
    field: Annotated[str, typer.Argument(help="name, phones, email or other")],
    value: Annotated[
        str,
        typer.Argument(help=f"New value; list fields are split on '{EDIT_DELIMITER}'"),
    ],
):
    """Edit one field of a stored card."""
    context: AppContext = ctx.obj
    try:
        card = context.store.update(index, field, value)
    except (IndexError, KeyError) as e:
        console.print(f"[red]Error:[/red] {e.args[0]}")
        raise typer.Exit(1)
    _print_card(card)


@app.command()
def delete(
    ctx: typer.Context,
    index: Annotated[int, typer.Argument(help="Card index as shown by 'list'")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation"),
    ] = False,
):
    """Delete a stored card."""
    context: AppContext = ctx.obj
    try:
        card = context.store[index]
    except IndexError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not yes and not typer.confirm(f"Delete card '{card.name}'?"):
        raise typer.Exit(0)

    context.store.delete(index)
    console.print(f"Deleted card {index}.")


@app.command()
def export(
    ctx: typer.Context,
    format: Annotated[
        ExportFormat,
        typer.Option("--format", "-f", help="Output format: json or csv"),
    ] = ExportFormat.JSON,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for cards.json / cards.csv"),
    ] = Path("."),
):
    """Export the stored cards to cards.json or cards.csv."""
    context: AppContext = ctx.obj
    try:
        path = Exporter().export(context.store, format, output_dir)
    except CardDigitiserError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"Output: {path}")


@app.command("check-key")
def check_key(ctx: typer.Context):
    """Check the API key format for the selected provider."""
    context: AppContext = ctx.obj
    check = context.credentials.check()
    style = "green" if check.valid else "yellow"
    console.print(f"[{style}]{check.message}[/{style}]")
    mode = "ON" if check.valid else "OFF"
    console.print(f"AI enhanced mode: [bold]{mode}[/bold]")


@app.command()
def version():
    """Show version information."""
    from card_digitiser import __version__

    console.print(f"cardscan version {__version__}")


def _print_card(card: Card):
    """Print one card."""
    console.print()
    console.print(f"[bold cyan]{card.name}[/bold cyan]")

    table = Table(show_header=False, box=None)
    table.add_column("Type", style="dim")
    table.add_column("Value")
    for phone in card.phones:
        table.add_row("Phone", phone)
    table.add_row("Email", card.email)
    for line in card.other:
        table.add_row("Other", line)
    console.print(table)
    console.print()


if __name__ == "__main__":
    app()
