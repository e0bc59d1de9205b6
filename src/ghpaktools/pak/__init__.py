import shutil
from pathlib import Path
from typing import Annotated

import humanize
import typer
from rich import print
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from ghpaktools.pak.archive import PakArchive
from ghpaktools.pak.entry import PakEntry
from ghpaktools.pak.enumerators.endianness import Endianness, EndiannessChoice
from ghpaktools.pak.enumerators.entry_flags import EntryFlags
from ghpaktools.pak.errors import PakError
from ghpaktools.pak.helpers import get_archive_paths, parse_offset
from ghpaktools.pak.stream import BinaryStream

app = typer.Typer(help="Tools for PAK archives (.pak/.pab files)")

ArchivePath = Annotated[
    Path,
    typer.Argument(
        help="Path to the input .pak file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]

EndiannessOption = Annotated[
    EndiannessChoice,
    typer.Option(
        "--endianness",
        "-e",
        help="Endianness of the archive (big for consoles, little for PC)",
        case_sensitive=False,
    ),
]


def open_archive(archive_path: Path, endianness: EndiannessChoice) -> PakArchive:
    pak_path, pab_path = get_archive_paths(archive_path)

    with Progress(transient=True) as progress:
        progress.add_task(
            description="Reading archive headers...",
            total=None,
        )

        try:
            return PakArchive(
                header_path=pak_path,
                endianness=Endianness[endianness.name],
                data_path=pab_path,
            )
        except PakError as e:
            print(f"[red]Cannot read {pak_path}: {e}[/red]")
            raise typer.Exit(code=1)


def format_flags(flags: int) -> str:
    names = ["inline-name"] if flags & EntryFlags.HAS_EMBEDDED_FILENAME else []
    other = flags & ~int(EntryFlags.HAS_EMBEDDED_FILENAME)

    if other:
        names.append(hex(other))

    return ", ".join(names) or "-"


@app.command(help="Prints information about a PAK archive")
def info(
    archive_path: ArchivePath,
    endianness: EndiannessOption = EndiannessChoice.BIG,
):
    archive = open_archive(archive_path, endianness)
    files = archive.files

    print(f"Endianness: {archive.endianness.name.title()}")
    print(f"Separate data file: {archive.data_path or 'None'}")
    print(f"Number of files: {len(files)}")
    print(
        f"Files with inline names: {sum(1 for file in files if file.has_embedded_name)}"
    )
    print(
        f"Total size: {humanize.naturalsize(sum(file.file_length for file in files))}"
    )


@app.command(name="list", help="Lists files in a PAK archive")
def contents(
    archive_path: ArchivePath,
    endianness: EndiannessOption = EndiannessChoice.BIG,
):
    console = Console()
    archive = open_archive(archive_path, endianness)

    table = Table("File Path", "Type", "Size", "Offset", "Header", "Flags")

    for file in archive.files:
        table.add_row(
            str(archive.entry_path(file)),
            str(file.file_type),
            humanize.naturalsize(file.file_length),
            hex(file.file_offset),
            hex(file.header_length),
            format_flags(file.flags),
        )

    console.print(table)


@app.command(help="Prints every field of the entry header at the given offset")
def entry(
    archive_path: ArchivePath,
    offset: Annotated[
        str,
        typer.Argument(help="Offset of the header in the .pak file (e.g. 0x40)"),
    ],
    endianness: EndiannessOption = EndiannessChoice.BIG,
):
    pak_path, _ = get_archive_paths(archive_path)
    header_offset = parse_offset(offset)

    with pak_path.open("rb") as f:
        stream = BinaryStream(f, Endianness[endianness.name])
        stream.seek(header_offset)

        try:
            header = PakEntry.read_from(stream)
        except PakError as e:
            print(f"[red]Cannot read entry at {header_offset:#x}: {e}[/red]")
            raise typer.Exit(code=1)

    table = Table("Field", "Value")
    table.add_row("Header offset", hex(header.header_offset))
    table.add_row("Header length", hex(header.header_length))
    table.add_row("File type", str(header.file_type))
    table.add_row("File offset (relative)", hex(header.file_offset_relative))
    table.add_row("File offset", hex(header.file_offset))
    table.add_row("File length", str(header.file_length))
    table.add_row("Embedded name key", str(header.embedded_name_key))
    table.add_row("Full name key", str(header.full_name_key))
    table.add_row("Short name key", str(header.short_name_key))
    table.add_row("Reserved", hex(header.reserved))
    table.add_row("Flags", f"{header.flags:#010x} ({format_flags(header.flags)})")
    table.add_row("Embedded name", repr(header.embedded_name))

    Console().print(table)


@app.command(help="Extracts a PAK archive")
def extract(
    archive_path: ArchivePath,
    output_dir: Annotated[
        Path | None,
        typer.Argument(
            help="Path to the output directory where files will be extracted",
            file_okay=False,
            dir_okay=True,
            writable=True,
        ),
    ] = None,
    endianness: EndiannessOption = EndiannessChoice.BIG,
):
    archive = open_archive(archive_path, endianness)
    data_path = archive.data_path or archive_path.with_suffix(".pak")

    output_dir = output_dir or archive_path.parent / archive_path.stem
    output_dir.mkdir(parents=True, exist_ok=True)

    with Progress(
        SpinnerColumn(finished_text=":white_check_mark:"),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
    ) as progress:
        with data_path.open("rb") as f:
            for file in progress.track(
                archive.files,
                description="Extracting files...",
            ):
                file_path = archive.entry_path(file)

                progress.console.log(f"Extracting {file_path}...")

                try:
                    archive.extract(f, file, output_dir / file_path)
                except PakError as e:
                    print(f"[red]Cannot extract {file_path}: {e}[/red]")
                    raise typer.Exit(code=1)


@app.command(
    name="rebuild-headers",
    help="Copies a PAK archive, writing every entry header again",
)
def rebuild_headers(
    archive_path: ArchivePath,
    output_path: Annotated[
        Path,
        typer.Argument(
            help="Path to where the output .pak file will be created",
            file_okay=True,
            dir_okay=False,
            writable=True,
        ),
    ],
    endianness: EndiannessOption = EndiannessChoice.BIG,
):
    archive = open_archive(archive_path, endianness)
    pak_path, _ = get_archive_paths(archive_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(pak_path, output_path)

    with output_path.open("r+b") as f:
        try:
            archive.save_headers(f)
        except PakError as e:
            print(f"[red]Cannot write headers to {output_path}: {e}[/red]")
            raise typer.Exit(code=1)

    print(f"Successfully wrote {len(archive.entries)} headers to {output_path}!")


if __name__ == "__main__":
    app()
