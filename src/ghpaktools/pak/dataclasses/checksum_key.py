import zlib
from dataclasses import dataclass, field

from ghpaktools.pak.constants import NAME_ENCODING, UINT32_MASK


@dataclass(frozen=True)
class ChecksumKey:
    """32-bit key identifying a name (QB key).

    A zero checksum means "no name". The text a key was computed from is kept
    for display only and is ignored by comparisons.
    """

    checksum: int = 0
    text: str | None = field(default=None, compare=False)

    def __post_init__(self):
        if not 0 <= self.checksum <= UINT32_MASK:
            raise ValueError(f"Checksum {self.checksum:#x} is not a 32-bit value")

    @staticmethod
    def compute(text: str) -> int:
        data = text.lower().replace("/", "\\").encode(NAME_ENCODING, "replace")
        # QB keys skip the final inversion of the standard CRC-32
        return zlib.crc32(data) ^ UINT32_MASK

    @classmethod
    def from_string(cls, text: str) -> "ChecksumKey":
        return cls(cls.compute(text), text)

    @classmethod
    def of(cls, value: "int | str | ChecksumKey") -> "ChecksumKey":
        match value:
            case ChecksumKey():
                return value
            case str():
                return cls.from_string(value)
            case _:
                return cls(value)

    def __bool__(self) -> bool:
        return self.checksum != 0

    def __str__(self) -> str:
        return self.text if self.text is not None else f"{self.checksum:#010x}"


NULL_KEY = ChecksumKey(0)
