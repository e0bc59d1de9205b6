class PakError(ValueError):
    """Base class for problems with PAK archive data."""


class TruncatedDataError(PakError):
    def __init__(self, expected: int, available: int, offset: int):
        self.expected = expected
        self.available = available
        self.offset = offset

        super().__init__(
            f"Unexpected end of data at offset {offset:#x}: "
            f"expected {expected} bytes, but got {available} bytes."
        )


class EmbeddedNameError(PakError):
    """The inline name cannot be stored in the fixed-width name field."""


class FieldRangeError(PakError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Value {value} does not fit in an unsigned 32-bit field")
