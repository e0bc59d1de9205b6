from io import BytesIO
from pathlib import Path

from typer.testing import CliRunner

from ghpaktools import app
from ghpaktools.pak.archive import LAST_ENTRY_KEY
from ghpaktools.pak.dataclasses.checksum_key import ChecksumKey
from ghpaktools.pak.dataclasses.entry_name import ExternalName, InlineName
from ghpaktools.pak.entry import PakEntry
from ghpaktools.pak.stream import BinaryStream

from conftest import FIRST_PAYLOAD, SECOND_PAYLOAD

runner = CliRunner(env={"COLUMNS": "200"})


def test_info(pak_file: Path):
    result = runner.invoke(app, ["pak", "info", str(pak_file)])

    assert result.exit_code == 0
    assert "Number of files: 2" in result.output
    assert "Files with inline names: 1" in result.output


def test_list(pak_file: Path):
    result = runner.invoke(app, ["pak", "list", str(pak_file)])

    assert result.exit_code == 0
    assert "guitar.wav" in result.output
    assert "inline-name" in result.output


def test_entry(pak_file: Path):
    result = runner.invoke(app, ["pak", "entry", str(pak_file), "0x20"])

    assert result.exit_code == 0
    assert "'sounds/guitar.wav'" in result.output
    assert "0xc0" in result.output


def test_entry_past_end_fails(pak_file: Path):
    result = runner.invoke(app, ["pak", "entry", str(pak_file), "0x1000"])

    assert result.exit_code == 1


def test_little_endian_option_misreads_big_endian_archive(pak_file: Path):
    result = runner.invoke(app, ["pak", "entry", str(pak_file), "0", "-e", "little"])

    assert result.exit_code == 0
    assert "0x10000" in result.output


def test_extract(tmp_path: Path, split_pak_file: Path):
    output_dir = tmp_path / "extracted"

    result = runner.invoke(
        app, ["pak", "extract", str(split_pak_file), str(output_dir)]
    )

    assert result.exit_code == 0
    assert (output_dir / "sounds" / "guitar.wav").read_bytes() == SECOND_PAYLOAD
    assert FIRST_PAYLOAD in [p.read_bytes() for p in output_dir.iterdir() if p.is_file()]


def test_rebuild_headers_is_lossless(tmp_path: Path, pak_file: Path):
    output_path = tmp_path / "rebuilt.pak"

    result = runner.invoke(
        app, ["pak", "rebuild-headers", str(pak_file), str(output_path)]
    )

    assert result.exit_code == 0
    assert output_path.read_bytes() == pak_file.read_bytes()


def test_missing_header_file(tmp_path: Path):
    path = tmp_path / "songs.pab"
    path.write_bytes(b"")

    result = runner.invoke(app, ["pak", "info", str(path)])

    assert result.exit_code == 2


def _write_pak(path: Path, entries: list[PakEntry], payload: bytes):
    buffer = BytesIO()
    stream = BinaryStream(buffer)

    for entry in entries:
        stream.seek(entry.header_offset)
        entry.write_to(stream)

    path.write_bytes(buffer.getvalue() + payload)


def test_extract_keeps_files_inside_output_dir(tmp_path: Path):
    pak_path = tmp_path / "archive" / "escape.pak"
    pak_path.parent.mkdir()
    _write_pak(
        pak_path,
        [
            PakEntry(
                file_offset_relative=0xE0,
                file_length=len(SECOND_PAYLOAD),
                name=InlineName.from_text("../../escape.wav"),
            ),
            PakEntry(header_offset=0xC0, file_type=LAST_ENTRY_KEY),
        ],
        SECOND_PAYLOAD,
    )
    output_dir = tmp_path / "archive" / "out" / "nested"

    result = runner.invoke(app, ["pak", "extract", str(pak_path), str(output_dir)])

    assert result.exit_code == 0
    assert (output_dir / "escape.wav").read_bytes() == SECOND_PAYLOAD
    assert not (tmp_path / "archive" / "escape.wav").exists()


def test_rebuild_headers_keeps_stale_embedded_key(tmp_path: Path):
    pak_path = tmp_path / "stale.pak"
    _write_pak(
        pak_path,
        [
            PakEntry(
                name=ExternalName(ChecksumKey(0x1234), name_key=ChecksumKey(0x77))
            ),
            PakEntry(header_offset=0x20, file_type=LAST_ENTRY_KEY),
        ],
        b"",
    )
    output_path = tmp_path / "rebuilt.pak"

    result = runner.invoke(
        app, ["pak", "rebuild-headers", str(pak_path), str(output_path)]
    )

    assert result.exit_code == 0
    assert output_path.read_bytes() == pak_path.read_bytes()
