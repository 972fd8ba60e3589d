"""Tests for the vocabulary, connection and position tables."""

import pytest

from pyquill.decoder.errors import MalformedTable
from pyquill.decoder.image import ByteImage
from pyquill.decoder.tables import read_connections, read_initial_positions, read_vocabulary


def word(text: str, token: int) -> list[int]:
    return [255 - ord(ch) for ch in text.ljust(4)] + [token]


class TestVocabulary:
    """Tests for the word table."""

    def test_stops_at_zero_token(self):
        """Test that the record with a zero token is not included."""
        raw = word("K1", 1) + word("K2", 2) + word("K3", 0) + word("K4", 4)
        assert read_vocabulary(ByteImage(bytes(raw)), 0) == {"K1": 1, "K2": 2}

    def test_words_are_trimmed(self):
        """Test that padding spaces are removed from short words."""
        raw = word("N", 1) + word("GET", 20) + word("", 0)
        assert read_vocabulary(ByteImage(bytes(raw)), 0) == {"N": 1, "GET": 20}

    def test_duplicate_keeps_last(self):
        """Test that a repeated word takes its last token."""
        raw = word("TAKE", 20) + word("TAKE", 21) + word("", 0)
        assert read_vocabulary(ByteImage(bytes(raw)), 0) == {"TAKE": 21}

    def test_synonyms_share_tokens(self):
        """Test that different words may map to the same token."""
        raw = word("NORT", 1) + word("N", 1) + word("", 0)
        assert read_vocabulary(ByteImage(bytes(raw)), 0) == {"NORT": 1, "N": 1}

    def test_missing_terminator(self):
        """Test that a table without a zero token raises MalformedTable."""
        with pytest.raises(MalformedTable) as exc_info:
            read_vocabulary(ByteImage(bytes(word("K1", 1) + word("K2", 2))), 0)
        assert exc_info.value.table == "vocabulary"


class TestConnections:
    """Tests for the per-location exit lists."""

    def test_one_mapping_per_location(self):
        """Test exits read from a shared cursor."""
        raw = [2, 0, 1, 1, 3, 2, 255, 255, 4, 0, 255]
        assert read_connections(ByteImage(bytes(raw)), 0, 3) == [
            {1: 1, 3: 2},
            {},
            {4: 0},
        ]

    def test_no_locations(self):
        """Test that a zero count reads no exits."""
        assert read_connections(ByteImage(bytes([2, 0, 255])), 0, 0) == []

    def test_missing_terminator(self):
        """Test that an exit list running off the image raises MalformedTable."""
        with pytest.raises(MalformedTable) as exc_info:
            read_connections(ByteImage(bytes([2, 0, 1, 1])), 0, 1)
        assert exc_info.value.table == "connections"


class TestInitialPositions:
    """Tests for the object start locations."""

    def test_reads_one_byte_per_object(self):
        """Test that exactly one position is read per object."""
        raw = [252, 0, 3, 9]
        assert read_initial_positions(ByteImage(bytes(raw)), 0, 3) == [252, 0, 3]

    def test_past_end(self):
        """Test that a table past the image raises MalformedTable."""
        with pytest.raises(MalformedTable):
            read_initial_positions(ByteImage(bytes([1, 2])), 0, 3)
