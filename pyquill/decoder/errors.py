"""Exceptions raised while decoding a game database."""


class DecodeError(Exception):
    """Base class for all decoder failures."""

    pass


class SignatureNotFound(DecodeError):
    """The database signature does not appear in the image."""

    def __init__(self, start: int, size: int) -> None:
        self.start = start
        self.size = size
        super().__init__(
            f"Database signature not found between {start:#06x} and {size:#06x}"
        )


class MalformedTable(DecodeError):
    """A table runs outside the image or is otherwise inconsistent."""

    def __init__(self, table: str, offset: int, reason: str = "") -> None:
        self.table = table
        self.offset = offset
        self.reason = reason or "read past end of image"
        super().__init__(f"Malformed {table} table at {offset:#06x}: {self.reason}")


class UnsupportedVariant(DecodeError):
    """The database uses a format version this decoder does not know."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(f"Unsupported database version {version}")
