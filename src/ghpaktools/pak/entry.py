from dataclasses import dataclass, field

from ghpaktools.pak.constants import (
    EMBEDDED_FILENAME_SIZE,
    EMBEDDED_HEADER_SIZE,
    FIXED_HEADER_SIZE,
    UINT32_MASK,
)
from ghpaktools.pak.dataclasses.checksum_key import NULL_KEY, ChecksumKey
from ghpaktools.pak.dataclasses.entry_name import EntryName, ExternalName, InlineName
from ghpaktools.pak.enumerators.entry_flags import EntryFlags
from ghpaktools.pak.helpers import decode_fixed_string, encode_fixed_string
from ghpaktools.pak.stream import BinaryStream

NAME_FLAG = int(EntryFlags.HAS_EMBEDDED_FILENAME)
OTHER_FLAGS_MASK = UINT32_MASK ^ NAME_FLAG


@dataclass
class PakEntry:
    """Header of a single file packed in a PAK archive.

    The header is 0x20 bytes long, followed by a 0xA0 byte filename when
    the entry stores its name inline. Which of the two representations is
    used is decided by ``name``; the matching flag bit is derived from it.
    """

    header_offset: int = 0
    file_type: ChecksumKey = NULL_KEY
    file_offset_relative: int = 0
    file_length: int = 0
    reserved: int = 0
    name: EntryName = field(default_factory=ExternalName)
    other_flags: int = 0

    def __post_init__(self):
        self.other_flags &= OTHER_FLAGS_MASK

    @classmethod
    def read_from(cls, stream: BinaryStream) -> "PakEntry":
        header_offset = stream.tell()

        file_type = ChecksumKey(stream.read_uint32())
        file_offset_relative = stream.read_uint32()
        file_length = stream.read_uint32()
        embedded_name_key = ChecksumKey(stream.read_uint32())
        full_name_key = ChecksumKey(stream.read_uint32())
        short_name_key = ChecksumKey(stream.read_uint32())
        reserved = stream.read_uint32()
        flags = stream.read_uint32()

        name: EntryName

        if flags & NAME_FLAG:
            name = InlineName(
                text=decode_fixed_string(stream.read_bytes(EMBEDDED_FILENAME_SIZE)),
                name_key=embedded_name_key,
                short_name_key=short_name_key,
                full_name_key=full_name_key,
            )
        else:
            name = ExternalName(
                full_name_key=full_name_key,
                short_name_key=short_name_key,
                name_key=embedded_name_key,
            )

        return cls(
            header_offset=header_offset,
            file_type=file_type,
            file_offset_relative=file_offset_relative,
            file_length=file_length,
            reserved=reserved,
            name=name,
            other_flags=flags,
        )

    def write_to(self, stream: BinaryStream):
        fields = [
            self.file_type.checksum,
            self.file_offset_relative,
            self.file_length,
            self.embedded_name_key.checksum,
            self.full_name_key.checksum,
            self.short_name_key.checksum,
            self.reserved,
            self.flags,
        ]

        # The whole record is validated before anything reaches the stream
        data = b"".join(stream.pack_uint32(value) for value in fields)

        if isinstance(self.name, InlineName):
            data += encode_fixed_string(self.name.text)

        stream.write_bytes(data)

    @property
    def has_embedded_name(self) -> bool:
        return isinstance(self.name, InlineName)

    @property
    def flags(self) -> int:
        other_flags = self.other_flags & OTHER_FLAGS_MASK

        if self.has_embedded_name:
            return other_flags | NAME_FLAG

        return other_flags

    @flags.setter
    def flags(self, value: int):
        self.other_flags = value & OTHER_FLAGS_MASK

        if not value & NAME_FLAG:
            self.__clear_embedded_name()
        elif isinstance(self.name, ExternalName):
            self.name = InlineName(
                text="",
                name_key=self.name.full_name_key,
                short_name_key=self.name.short_name_key,
            )

    @property
    def embedded_name(self) -> str | None:
        return self.name.text if isinstance(self.name, InlineName) else None

    @embedded_name.setter
    def embedded_name(self, value: str | None):
        if value is None:
            self.__clear_embedded_name()
        else:
            self.name = InlineName.from_text(value)

    def __clear_embedded_name(self):
        # The inline key only survives when no full name key is set
        full_name_key = self.name.full_name_key or self.name.name_key

        self.name = ExternalName(
            full_name_key=full_name_key,
            short_name_key=self.name.short_name_key,
        )

    @property
    def embedded_name_key(self) -> ChecksumKey:
        return self.name.name_key

    @property
    def full_name_key(self) -> ChecksumKey:
        return self.name.full_name_key

    @property
    def short_name_key(self) -> ChecksumKey:
        return self.name.short_name_key

    @property
    def file_offset(self) -> int:
        return (self.file_offset_relative + self.header_offset) & UINT32_MASK

    @property
    def header_length(self) -> int:
        return EMBEDDED_HEADER_SIZE if self.has_embedded_name else FIXED_HEADER_SIZE
