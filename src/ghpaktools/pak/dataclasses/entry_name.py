from dataclasses import dataclass

from ghpaktools.pak.dataclasses.checksum_key import NULL_KEY, ChecksumKey
from ghpaktools.pak.helpers import short_name


@dataclass(frozen=True)
class ExternalName:
    full_name_key: ChecksumKey = NULL_KEY
    short_name_key: ChecksumKey = NULL_KEY
    name_key: ChecksumKey = NULL_KEY  # stale embedded filename key, normally zero

    @classmethod
    def from_path(cls, path: str) -> "ExternalName":
        return cls(
            full_name_key=ChecksumKey.from_string(path),
            short_name_key=ChecksumKey.from_string(short_name(path)),
        )


@dataclass(frozen=True)
class InlineName:
    text: str
    name_key: ChecksumKey = NULL_KEY  # embedded filename key on disk
    short_name_key: ChecksumKey = NULL_KEY
    full_name_key: ChecksumKey = NULL_KEY  # stale reference, normally zero

    @classmethod
    def from_text(cls, text: str) -> "InlineName":
        return cls(
            text=text,
            name_key=ChecksumKey.from_string(text),
            short_name_key=ChecksumKey.from_string(short_name(text)),
        )


EntryName = ExternalName | InlineName
