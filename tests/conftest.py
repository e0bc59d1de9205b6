from io import BytesIO
from pathlib import Path

import pytest

from ghpaktools.pak.archive import LAST_ENTRY_KEY
from ghpaktools.pak.dataclasses.checksum_key import ChecksumKey
from ghpaktools.pak.dataclasses.entry_name import ExternalName, InlineName
from ghpaktools.pak.entry import PakEntry
from ghpaktools.pak.stream import BinaryStream

FIRST_PAYLOAD = b"\x01\x02\x03\x04"
SECOND_PAYLOAD = b"abc"


def build_headers() -> bytes:
    # External entry at 0x00, inline entry at 0x20, terminator at 0xE0
    entries = [
        PakEntry(
            header_offset=0,
            file_type=ChecksumKey.from_string(".tex"),
            file_offset_relative=0x100,
            file_length=len(FIRST_PAYLOAD),
            name=ExternalName(ChecksumKey(0x1234), ChecksumKey(0x5678)),
        ),
        PakEntry(
            header_offset=0x20,
            file_type=ChecksumKey.from_string(".wav"),
            file_offset_relative=0x104 - 0x20,
            file_length=len(SECOND_PAYLOAD),
            name=InlineName.from_text("sounds/guitar.wav"),
        ),
        PakEntry(header_offset=0xE0, file_type=LAST_ENTRY_KEY),
    ]

    buffer = BytesIO()
    stream = BinaryStream(buffer)

    for entry in entries:
        entry.write_to(stream)

    return buffer.getvalue()


@pytest.fixture
def pak_file(tmp_path: Path) -> Path:
    path = tmp_path / "songs.pak"
    path.write_bytes(build_headers() + FIRST_PAYLOAD + SECOND_PAYLOAD)
    return path


@pytest.fixture
def split_pak_file(tmp_path: Path) -> Path:
    path = tmp_path / "split" / "songs.pak"
    path.parent.mkdir()
    path.write_bytes(build_headers())
    path.with_suffix(".pab").write_bytes(FIRST_PAYLOAD + SECOND_PAYLOAD)
    return path
