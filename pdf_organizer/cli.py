"""
Command-line interface for PDF organizer.
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.progress import Progress, BarColumn, TaskProgressColumn, TextColumn, TimeRemainingColumn
from rich.table import Table

from pdf_organizer import __version__
from pdf_organizer.backends.pypdf_backend import PypdfBackend
from pdf_organizer.config import EngineSettings
from pdf_organizer.delivery import save_images, save_organized, save_split, write_to_directory
from pdf_organizer.editor import CollectionEditor
from pdf_organizer.exceptions import PDFOrganizerException
from pdf_organizer.store import OrganizerStore, SplitterStore
from pdf_organizer.types import SplitDirection
from pdf_organizer.utils import format_file_size, get_logger, parse_page_spec

console = Console()


def _progress() -> Progress:
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        console=console
    )


def _fail(error) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {error}")
    sys.exit(1)


def _parse_move(value):
    source, _, target = value.partition(":")
    if not source.strip().isdigit() or not target.strip().isdigit():
        raise click.BadParameter(f"Expected FROM:TO with 1-based page numbers, got '{value}'")
    return int(source) - 1, int(target) - 1


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
@click.pass_context
def cli(ctx, verbose):
    """
    PDF Organizer CLI - Reorder, delete and split PDF pages, export pages as images.
    """
    logger = get_logger("pdf_organizer")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    ctx.obj = EngineSettings.from_env()


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def show_info(input_pdf):
    """
    Display page sizes and likely spreads of a PDF file.

    Example:

        pdf-organizer info scan.pdf
    """
    try:
        data = Path(input_pdf).read_bytes()
        backend = PypdfBackend()
        reader = backend.load(data)

        table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
        table.add_column("Page", style="cyan", no_wrap=True)
        table.add_column("Width", style="green")
        table.add_column("Height", style="green")
        table.add_column("Spread", style="magenta")

        for number, page in enumerate(reader.pages, start=1):
            size = backend.page_size(page)
            table.add_row(
                str(number),
                f"{size.width:.1f}",
                f"{size.height:.1f}",
                "Yes" if size.width > size.height else "No",
            )

        console.print()
        console.print(f"[dim]{len(reader.pages)} page(s), {format_file_size(len(data))}[/dim]")
        console.print(table)
        console.print()

    except PDFOrganizerException as e:
        _fail(e)


@cli.command(name="organize")
@click.argument('input_pdfs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory',
    type=click.Path(file_okay=False)
)
@click.option(
    '--move', '-m', 'moves',
    multiple=True,
    help="Move a page, 'FROM:TO' with 1-based positions (repeatable)",
    type=str
)
@click.option(
    '--reverse', is_flag=True,
    help='Reverse the page order after moves'
)
@click.option(
    '--delete', '-d', 'delete_spec',
    help="Positions to delete after reordering (e.g., '2,5-7')",
    type=str
)
@click.pass_obj
def organize(settings, input_pdfs, output_dir, moves, reverse, delete_spec):
    """
    Merge PDFs, reorder and delete pages, save one organized PDF.

    Examples:

        pdf-organizer organize a.pdf b.pdf -o out

        pdf-organizer organize a.pdf -m 1:4 --reverse -d 2,3
    """
    try:
        store = OrganizerStore(settings=settings)
        editor = CollectionEditor(store)

        with _progress() as progress:
            for input_pdf in input_pdfs:
                name = os.path.basename(input_pdf)
                task = progress.add_task(f"Loading {name}", total=None)

                def update_progress(current, total, task=task):
                    progress.update(task, completed=current, total=total)

                asyncio.run(store.ingest(Path(input_pdf).read_bytes(), name, progress=update_progress))

        console.print(f"[dim]Loaded {len(store)} page(s) from {len(input_pdfs)} file(s)[/dim]")

        for value in moves:
            source, target = _parse_move(value)
            editor.move(source, target)
        if reverse:
            editor.reverse_all(clear_selection=True)
        if delete_spec:
            for number in parse_page_spec(delete_spec):
                editor.toggle(number - 1)
            removed = editor.delete_selected()
            console.print(f"[dim]Deleted {len(removed)} page(s)[/dim]")

        if store.is_empty:
            console.print("\n[bold yellow]Nothing left to save.[/bold yellow]\n")
            return

        with _progress() as progress:
            task = progress.add_task("Saving PDF", total=len(store))

            def update_progress(current, total):
                progress.update(task, completed=current)

            artifact = asyncio.run(
                save_organized(store, deliver=write_to_directory(output_dir), progress=update_progress)
            )

        console.print(f"\n[bold green]✓ Saved {len(store)} page(s):[/bold green] {artifact.filename}")
        console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]\n")

    except (PDFOrganizerException, ValueError) as e:
        _fail(e)


@cli.command(name="split-spreads")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory',
    type=click.Path(file_okay=False)
)
@click.option(
    '--direction',
    type=click.Choice([d.value for d in SplitDirection]),
    default=SplitDirection.LEFT_TO_RIGHT.value,
    help='Reading direction of the spreads'
)
@click.option(
    '--only', 'only_spec',
    help="Split only these pages (e.g., '2-9'); others are copied unchanged",
    type=str
)
@click.option(
    '--skip', 'skip_spec',
    help="Copy these pages unchanged (e.g., '1,10')",
    type=str
)
@click.pass_obj
def split_spreads_command(settings, input_pdf, output_dir, direction, only_spec, skip_spec):
    """
    Split two-page spreads into single pages.

    Examples:

        pdf-organizer split-spreads book.pdf

        pdf-organizer split-spreads manga.pdf --direction rtl --skip 1
    """
    try:
        name = os.path.basename(input_pdf)
        store = SplitterStore(settings=settings)
        editor = CollectionEditor(store)

        with _progress() as progress:
            task = progress.add_task(f"Building preview of {name}", total=None)

            def update_loading(current, total):
                progress.update(task, completed=current, total=total)

            asyncio.run(store.ingest(Path(input_pdf).read_bytes(), name, progress=update_loading))

        if only_spec:
            editor.unflag_all()
            for number in parse_page_spec(only_spec):
                editor.set_flag(number - 1, True)
        if skip_spec:
            for number in parse_page_spec(skip_spec):
                editor.set_flag(number - 1, False)

        if store.is_empty:
            console.print("\n[bold yellow]Document has no pages.[/bold yellow]\n")
            return

        console.print(f"[dim]Splitting {store.flagged_count} of {len(store)} page(s), {direction}[/dim]")

        with _progress() as progress:
            task = progress.add_task("Splitting spreads", total=len(store))

            def update_progress(current, total):
                progress.update(task, completed=current)

            artifact = asyncio.run(
                save_split(store, direction, deliver=write_to_directory(output_dir), progress=update_progress)
            )

        console.print(f"\n[bold green]✓ Successfully created:[/bold green] {artifact.filename}")
        console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]\n")

    except (PDFOrganizerException, ValueError) as e:
        _fail(e)


@cli.command(name="export-images")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory',
    type=click.Path(file_okay=False)
)
@click.option('--batch-size', type=click.IntRange(min=1), help='Pages rendered concurrently')
@click.option('--scale', type=click.FloatRange(min=0, min_open=True), help='Render scale')
@click.option('--quality', type=click.IntRange(1, 100), help='JPEG quality')
@click.pass_obj
def export_images_command(settings, input_pdf, output_dir, batch_size, scale, quality):
    """
    Export every page as a JPEG image inside a zip archive.

    Examples:

        pdf-organizer export-images report.pdf

        pdf-organizer export-images report.pdf --scale 3 --batch-size 4
    """
    try:
        settings = settings.with_overrides(
            export_batch_size=batch_size, export_scale=scale, export_quality=quality
        )
        name = os.path.basename(input_pdf)

        with _progress() as progress:
            task = progress.add_task(f"Exporting {name}", total=None)

            def update_progress(current, total):
                progress.update(task, completed=current, total=total)

            artifact = asyncio.run(
                save_images(
                    Path(input_pdf).read_bytes(),
                    name,
                    settings=settings,
                    deliver=write_to_directory(output_dir),
                    progress=update_progress,
                )
            )

        if artifact is None:
            console.print("\n[bold yellow]Document has no pages.[/bold yellow]\n")
            return

        console.print(f"\n[bold green]✓ Successfully created:[/bold green] {artifact.filename}")
        console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]\n")

    except PDFOrganizerException as e:
        _fail(e)


if __name__ == '__main__':
    cli()
