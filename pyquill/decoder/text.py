"""Decoder for the database's inverted character encoding.

Stored bytes are inverted (``255 - b``). The decoded text is HTML markup:
entities for reserved characters, ``<p>`` for paragraph breaks, unclosed
``<font>`` tags for ink colour changes and a space inserted every 32
characters so the 32-column screen layout survives reflowing.
"""

import logging
from dataclasses import dataclass, field

from pyquill.decoder.image import ByteImage

logger = logging.getLogger(__name__)

END_OF_STRING = 0x1F
NEWLINE = 0x06
INK = 0x10
PAPER = 0x11

LINE_WIDTH = 32

COLORS = ("#000", "#00f", "#f00", "#f0f", "#0f0", "#0ff", "#ff0", "#fff")

# User-defined graphics 0x90 onwards, then the BASIC keyword tokens the
# character set reuses for glyphs.
_UDG_GLYPHS = (
    "Ž",
    '<span style="position:relative">T'
    '<span style="position: absolute; left: 0">ž</span></span>',
    "Č", "đ", "š", "č", "SI", "", "ž", "Ž", "NC", "LA",
    '<span style="position:relative">M'
    '<span style="position: relative; left: -0.4em">K</span></span>',
    "IR", "ö", "ß", "ž", "ä", "Š", "ć", "ü",
    "RND", "INKEY$", "PI", "FN ", "POINT ",
)

SUBSTITUTIONS: dict[int, str] = {
    ord("&"): "&amp;",
    ord("<"): "&lt;",
    ord(">"): "&gt;",
    0x60: "&pound;",
    0x7F: "&copy;",
    **{0x90 + i: glyph for i, glyph in enumerate(_UDG_GLYPHS)},
}


@dataclass
class _TextState:
    """Cursor and output of one string being decoded."""

    ptr: int
    pieces: list[str] = field(default_factory=list)
    line_length: int = 0

    def append(self, piece: str) -> None:
        """Append one logical character, wrapping at the line width."""
        if not piece:
            return
        if self.line_length == LINE_WIDTH:
            if not piece.endswith(" "):
                self.pieces.append(" ")
            self.line_length = 0
        self.pieces.append(piece)
        self.line_length += 1

    @property
    def text(self) -> str:
        return "".join(self.pieces)


class TextDecoder:
    """Reads strings packed back to back in the image."""

    def __init__(self, image: ByteImage, table: str = "text") -> None:
        self.image = image
        self.table = table

    def _next(self, state: _TextState) -> int:
        c = 255 - self.image.byte(state.ptr, self.table)
        state.ptr += 1
        return c

    def read_string(self, start: int) -> tuple[str, int]:
        """Decode the string at ``start``.

        Returns:
            The decoded markup and the offset just past the terminator.
        """
        state = _TextState(ptr=start)
        while True:
            c = self._next(state)
            mapped = SUBSTITUTIONS.get(c)
            if mapped is not None:
                state.append(mapped)
            elif c == END_OF_STRING:
                return state.text, state.ptr
            elif c >= 32:
                state.append(chr(c))
            elif c == NEWLINE:
                if 255 - self.image.byte(state.ptr, self.table) == NEWLINE:
                    state.append("<p>")
                    state.ptr += 1
                else:
                    state.append(" ")
                state.line_length = 0
            elif c == INK:
                color = self._next(state)
                if color < len(COLORS):
                    state.pieces.append(f"<font color={COLORS[color]}>")
            elif c == PAPER:
                # Background colour has no markup equivalent
                self._next(state)

    def read_strings(self, table_addr: int, count: int) -> list[str]:
        """Decode ``count`` consecutive strings.

        ``table_addr`` is the address of the pointer table; its first entry
        gives the start of the packed strings.
        """
        ptr = self.image.word(table_addr, self.table)
        strings = []
        for _ in range(count):
            text, ptr = self.read_string(ptr)
            strings.append(text)
        logger.debug(f"Read {count} {self.table} strings from {table_addr:#06x}")
        return strings
