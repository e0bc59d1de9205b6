from pathlib import Path, PureWindowsPath

import typer

from ghpaktools.pak.constants import EMBEDDED_FILENAME_SIZE, NAME_ENCODING
from ghpaktools.pak.errors import EmbeddedNameError


def get_archive_paths(archive_path: Path) -> tuple[Path, Path | None]:
    pak_path = archive_path.with_suffix(".pak")
    pab_path = archive_path.with_suffix(".pab")

    if not pak_path.exists():
        raise typer.BadParameter(
            f"Cannot read {archive_path} because the header file is missing: {pak_path}"
        )

    return pak_path, pab_path if pab_path.exists() else None


def short_name(path: str) -> str:
    # Archive paths may use either separator; ".wav" has no name, only an extension
    name = PureWindowsPath(path).name
    dot = name.rfind(".")

    return name[:dot] if dot >= 0 else name


def relative_parts(path: str) -> list[str]:
    """Plain path components, without drives, roots or '.'/'..' parts."""
    return [
        part
        for part in PureWindowsPath(path).parts
        if part not in (".", "..") and not PureWindowsPath(part).anchor
    ]


def parse_offset(value: str) -> int:
    try:
        return int(value, 0)
    except ValueError:
        raise typer.BadParameter(f"{value!r} is not a valid offset")


def decode_fixed_string(data: bytes) -> str:
    return data.decode(NAME_ENCODING).rstrip("\x00")


def encode_fixed_string(text: str, size: int = EMBEDDED_FILENAME_SIZE) -> bytes:
    try:
        data = text.encode(NAME_ENCODING)
    except UnicodeEncodeError as e:
        raise EmbeddedNameError(
            f"Embedded filename {text!r} contains characters outside {NAME_ENCODING}"
        ) from e

    if len(data) > size:
        raise EmbeddedNameError(
            f"Embedded filename {text!r} is {len(data)} bytes long, "
            f"but only {size} bytes are available"
        )

    return data.ljust(size, b"\x00")
