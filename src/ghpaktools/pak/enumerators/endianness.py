from enum import Enum, IntEnum


class Endianness(IntEnum):
    LITTLE = 0
    BIG = 1

    @property
    def byteorder(self) -> str:
        return self.name.lower()


class EndiannessChoice(str, Enum):
    LITTLE = "little"
    BIG = "big"
