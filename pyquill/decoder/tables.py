"""Readers for the vocabulary, connection and object position tables."""

import logging

from pyquill.decoder.image import ByteImage

logger = logging.getLogger(__name__)

VOCABULARY_RECORD_SIZE = 5
VOCABULARY_WORD_LENGTH = 4
END_OF_EXITS = 0xFF


def read_vocabulary(image: ByteImage, start: int) -> dict[str, int]:
    """Read the word table.

    Each record is four inverted characters followed by the word's token.
    The first record with a zero token ends the table. A word stored twice
    keeps its last token.
    """
    vocabulary: dict[str, int] = {}
    ptr = start
    while True:
        token = image.byte(ptr + VOCABULARY_WORD_LENGTH, "vocabulary")
        if token == 0:
            break
        raw = image.slice(ptr, VOCABULARY_WORD_LENGTH, "vocabulary")
        word = "".join(chr(255 - b) for b in raw).strip()
        if word in vocabulary:
            logger.debug(f"Vocabulary word {word!r} redefined at {ptr:#06x}")
        vocabulary[word] = token
        ptr += VOCABULARY_RECORD_SIZE
    return vocabulary


def read_connections(image: ByteImage, table_addr: int, count: int) -> list[dict[int, int]]:
    """Read the exits of ``count`` locations.

    ``table_addr`` is the address of the per-location pointer table; the
    exit lists are packed one after another from its first entry, each a
    run of (direction, destination) pairs closed by 0xFF.
    """
    ptr = image.word(table_addr, "connections")
    connections = []
    for _ in range(count):
        exits = {}
        while True:
            direction = image.byte(ptr, "connections")
            if direction == END_OF_EXITS:
                break
            exits[direction] = image.byte(ptr + 1, "connections")
            ptr += 2
        ptr += 1
        connections.append(exits)
    return connections


def read_initial_positions(image: ByteImage, start: int, count: int) -> list[int]:
    """Read the starting location of each object."""
    return list(image.slice(start, count, "initial positions"))
