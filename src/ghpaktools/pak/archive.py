from io import BufferedReader, BufferedWriter
from pathlib import Path

from ghpaktools.pak.constants import CHUNK_SIZE, DEFAULT_ENDIANNESS, LAST_ENTRY_TYPE
from ghpaktools.pak.dataclasses.checksum_key import ChecksumKey
from ghpaktools.pak.entry import PakEntry
from ghpaktools.pak.enumerators.endianness import Endianness
from ghpaktools.pak.errors import PakError, TruncatedDataError
from ghpaktools.pak.helpers import relative_parts
from ghpaktools.pak.stream import BinaryStream

LAST_ENTRY_KEY = ChecksumKey.from_string(LAST_ENTRY_TYPE)


class PakArchive:
    """Table of entry headers at the start of a PAK file.

    When the payloads live in a separate PAB file, entry offsets are measured
    as if the PAK and PAB files were concatenated.
    """

    def __init__(
        self,
        header_path: Path | None = None,
        endianness: Endianness = DEFAULT_ENDIANNESS,
        data_path: Path | None = None,
    ):
        self.__endianness = endianness
        self.__data_path = data_path
        self.__header_size = 0

        self.__entries: list[PakEntry] = []

        if header_path:
            self.__header_size = header_path.stat().st_size
            self.__read_headers(header_path)

    @property
    def endianness(self) -> Endianness:
        return self.__endianness

    @property
    def entries(self) -> list[PakEntry]:
        return self.__entries

    @property
    def data_path(self) -> Path | None:
        return self.__data_path

    def __read_headers(self, header_path: Path):
        with header_path.open("rb") as f:
            stream = BinaryStream(f, self.__endianness)

            while stream.remaining() > 0:
                entry = PakEntry.read_from(stream)
                self.__entries.append(entry)

                if entry.file_type == LAST_ENTRY_KEY:
                    break

                stream.seek(entry.header_offset + entry.header_length)

    @property
    def files(self) -> list[PakEntry]:
        return [entry for entry in self.__entries if entry.file_type != LAST_ENTRY_KEY]

    def entry_path(self, entry: PakEntry) -> Path:
        # Names come from the archive and must stay inside the output directory
        for name in (entry.embedded_name, entry.full_name_key.text):
            if name and (parts := relative_parts(name)):
                return Path(*parts)

        suffix = entry.file_type.text or f".{entry.file_type.checksum:08x}"
        return Path(f"{entry.full_name_key.checksum:08x}{suffix}")

    def extract(self, reader: BufferedReader, entry: PakEntry, output_path: Path):
        output_path.parent.mkdir(parents=True, exist_ok=True)

        offset = entry.file_offset
        if self.__data_path:
            offset -= self.__header_size

            if offset < 0:
                raise PakError(
                    f"File at {entry.file_offset:#x} starts inside the header file, "
                    f"which ends at {self.__header_size:#x}"
                )

        reader.seek(offset)

        with output_path.open("wb") as out_file:
            remaining_bytes = entry.file_length

            while remaining_bytes > 0:
                chunk_size = min(remaining_bytes, CHUNK_SIZE)
                chunk = reader.read(chunk_size)

                if len(chunk) != chunk_size:
                    raise TruncatedDataError(
                        entry.file_length,
                        entry.file_length - remaining_bytes + len(chunk),
                        entry.file_offset,
                    )

                out_file.write(chunk)
                remaining_bytes -= len(chunk)

    def save_headers(self, writer: BufferedWriter):
        stream = BinaryStream(writer, self.__endianness)

        for entry in self.__entries:
            stream.seek(entry.header_offset)
            entry.write_to(stream)
