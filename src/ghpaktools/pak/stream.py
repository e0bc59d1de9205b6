import os
from typing import BinaryIO

from ghpaktools.pak.constants import UINT32_MASK
from ghpaktools.pak.enumerators.endianness import Endianness
from ghpaktools.pak.errors import FieldRangeError, TruncatedDataError


class BinaryStream:
    """Cursor over a binary file with a fixed byte order.

    The cursor is shared by everything reading through the same file, so
    headers have to be read and written one after another.
    """

    def __init__(self, file: BinaryIO, endianness: Endianness = Endianness.BIG):
        self.__file = file
        self.__endianness = endianness

    @property
    def endianness(self) -> Endianness:
        return self.__endianness

    def tell(self) -> int:
        return self.__file.tell()

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self.__file.seek(offset, whence)

    def remaining(self) -> int:
        position = self.__file.tell()
        end = self.__file.seek(0, os.SEEK_END)
        self.__file.seek(position)

        return end - position

    def read_bytes(self, size: int) -> bytes:
        offset = self.__file.tell()
        data = self.__file.read(size)

        if len(data) != size:
            raise TruncatedDataError(size, len(data), offset)

        return data

    def read_uint32(self) -> int:
        return int.from_bytes(self.read_bytes(4), self.__endianness.byteorder)

    def write_bytes(self, data: bytes):
        self.__file.write(data)

    def pack_uint32(self, value: int) -> bytes:
        if not 0 <= value <= UINT32_MASK:
            raise FieldRangeError(value)

        return value.to_bytes(4, self.__endianness.byteorder)

    def write_uint32(self, value: int):
        self.__file.write(self.pack_uint32(value))
