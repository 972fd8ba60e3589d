"""Shared fixtures: build memory images holding a small game database."""

import pytest

SIGN = 0x5000
DATA_START = 0x6000
END_OF_STRING = 0x1F


def encode_text(text: str) -> bytes:
    """Encode plain characters as stored text, terminator included."""
    return bytes(255 - ord(ch) for ch in text) + bytes([255 - END_OF_STRING])


def encode_word(word: str) -> bytes:
    """Encode a vocabulary word as its 4-character inverted field."""
    return bytes(255 - ord(ch) for ch in word.ljust(4)[:4])


class ImageBuilder:
    """Lays out a signature, a header and tables in a 64K image."""

    def __init__(self, sign: int = SIGN, size: int = 0x10000) -> None:
        self.mem = bytearray(size)
        self.sign = sign
        self.cursor = DATA_START
        for i in range(1, 6):
            self.mem[sign + 2 * i] = 16 + i

    def put(self, data: bytes) -> int:
        """Append data at the allocation cursor and return its address."""
        addr = self.cursor
        self.mem[addr:addr + len(data)] = data
        self.cursor += len(data)
        return addr

    def strings(self, texts: list[str]) -> int:
        """Write a pointer table followed by the packed strings."""
        table = self.put(bytes(2 * max(len(texts), 1)))
        ptr = self.cursor
        for i, text in enumerate(texts):
            self.mem[table + 2 * i:table + 2 * i + 2] = bytes([ptr % 256, ptr // 256])
            self.put(encode_text(text))
            ptr = self.cursor
        if not texts:
            self.mem[table:table + 2] = bytes([ptr % 256, ptr // 256])
        return table

    def commands(self, entries: list[tuple[int, int, bytes, bytes]]) -> int:
        """Write a command table; each entry is (word1, word2, conditions, actions)."""
        blocks = [
            self.put(bytes(conditions) + b"\xff" + bytes(actions) + b"\xff")
            for _, _, conditions, actions in entries
        ]
        table = self.cursor
        for (word1, word2, _, _), block in zip(entries, blocks):
            self.put(bytes([word1, word2, block % 256, block // 256]))
        self.put(bytes(4))
        return table

    def vocabulary(self, words: list[tuple[str, int]]) -> int:
        table = self.cursor
        for word, token in words:
            self.put(encode_word(word) + bytes([token]))
        self.put(bytes(5))
        return table

    def connections(self, exits: list[dict[int, int]]) -> int:
        table = self.put(bytes(2 * max(len(exits), 1)))
        first = self.cursor
        self.mem[table:table + 2] = bytes([first % 256, first // 256])
        for location in exits:
            for direction, destination in location.items():
                self.put(bytes([direction, destination]))
            self.put(b"\xff")
        return table

    def header(
        self,
        carried: int,
        n_objects: int,
        n_locations: int,
        n_messages: int,
        pointers: list[int],
    ) -> None:
        base = self.sign + 13
        self.mem[base:base + 4] = bytes([carried, n_objects, n_locations, n_messages])
        for i, addr in enumerate(pointers):
            self.mem[base + 4 + 2 * i:base + 6 + 2 * i] = bytes([addr % 256, addr // 256])

    def game(
        self,
        locations: list[str],
        objects: list[str],
        messages: list[str],
        vocabulary: list[tuple[str, int]],
        responses: list[tuple[int, int, bytes, bytes]],
        processes: list[tuple[int, int, bytes, bytes]],
        exits: list[dict[int, int]],
        positions: list[int],
        carried: int = 0,
    ) -> bytes:
        """Write a complete database and return the image."""
        pointers = [
            self.commands(responses),
            self.commands(processes),
            self.strings(objects),
            self.strings(locations),
            self.strings(messages),
            self.connections(exits),
            self.vocabulary(vocabulary),
            self.put(bytes(positions)),
        ]
        self.header(carried, len(objects), len(locations), len(messages), pointers)
        return bytes(self.mem)


@pytest.fixture
def builder() -> ImageBuilder:
    return ImageBuilder()


@pytest.fixture
def sample_image(builder) -> bytes:
    """A two-location game with one carried object."""
    return builder.game(
        locations=["You are in a cave.", "A bright meadow."],
        objects=["A lamp", "A key"],
        messages=["Hello & welcome", "Bye"],
        vocabulary=[("NORT", 1), ("N", 1), ("LAMP", 50), ("GET", 20)],
        responses=[
            (20, 50, bytes([1, 0]), bytes([0, 12, 3])),
            (1, 255, bytes([13, 1, 2]), bytes([25, 1, 0])),
        ],
        processes=[
            (42, 7, b"", bytes([21, 4])),
        ],
        exits=[{1: 1}, {2: 0, 3: 0}],
        positions=[254, 0],
        carried=1,
    )
