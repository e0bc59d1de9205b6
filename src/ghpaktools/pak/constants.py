from ghpaktools.pak.enumerators.endianness import Endianness

UINT32_MASK = 0xFFFFFFFF

FIXED_HEADER_SIZE = 0x20
EMBEDDED_FILENAME_SIZE = 0xA0
EMBEDDED_HEADER_SIZE = FIXED_HEADER_SIZE + EMBEDDED_FILENAME_SIZE

NAME_ENCODING = "latin-1"

LAST_ENTRY_TYPE = ".last"

DEFAULT_ENDIANNESS = Endianness.BIG

CHUNK_SIZE = 0x100000
