from enum import IntFlag


class EntryFlags(IntFlag):
    # Every other bit is unknown and kept as-is
    HAS_EMBEDDED_FILENAME = 0x20
