"""Image loader for PyQuill - turns snapshot and dump files into memory images."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

MEMORY_SIZE = 0x10000  # Full 64K address space
RAM_BASE = 0x4000  # First address of RAM on a 48K machine
RAM_SIZE = MEMORY_SIZE - RAM_BASE

SNA_HEADER_SIZE = 27  # Register block preceding the RAM dump
SNA_SIZE = SNA_HEADER_SIZE + RAM_SIZE

IMAGE_FORMATS = ("auto", "raw", "sna")


class ImageLoadError(Exception):
    """The file cannot be turned into a memory image."""


class ImageLoader:
    """Loads memory images from files."""

    def load(self, path: Path, image_format: str = "auto") -> bytes:
        """Load a memory image from a file.

        Args:
            path: File to read.
            image_format: "raw", "sna", or "auto" to decide from the file
                extension and size.

        Returns:
            A 64K image with RAM at its hardware addresses.
        """
        path = Path(path)
        if image_format not in IMAGE_FORMATS:
            raise ImageLoadError(f"Unknown image format: {image_format}")

        try:
            data = path.read_bytes()
        except OSError as e:
            raise ImageLoadError(f"Cannot read {path}: {e}") from e

        if image_format == "auto":
            image_format = self._detect_format(path, data)
        logger.info(f"Loading {path} as {image_format} ({len(data)} bytes)")

        if image_format == "sna":
            return self._parse_sna(data)
        return self._parse_raw(data)

    def _detect_format(self, path: Path, data: bytes) -> str:
        """Guess the format from the extension, then the size."""
        if path.suffix.lower() == ".sna" or len(data) == SNA_SIZE:
            return "sna"
        return "raw"

    def _parse_sna(self, data: bytes) -> bytes:
        """Parse a 48K snapshot: register header followed by RAM."""
        if len(data) != SNA_SIZE:
            raise ImageLoadError(
                f"Invalid snapshot size {len(data)}, expected {SNA_SIZE}"
            )
        return bytes(RAM_BASE) + data[SNA_HEADER_SIZE:]

    def _parse_raw(self, data: bytes) -> bytes:
        """Parse a raw dump of the whole address space or of RAM only."""
        if len(data) == MEMORY_SIZE:
            return data
        if len(data) == RAM_SIZE:
            return bytes(RAM_BASE) + data
        raise ImageLoadError(
            f"Invalid dump size {len(data)}, expected {MEMORY_SIZE} or {RAM_SIZE}"
        )


def load_image(path: Path | str, image_format: str = "auto") -> bytes:
    """Load a memory image from a file."""
    return ImageLoader().load(Path(path), image_format)
