"""Signature search and header parsing."""

import logging

from pyquill.decoder.errors import SignatureNotFound
from pyquill.decoder.image import ByteImage
from pyquill.decoder.models import Header

logger = logging.getLogger(__name__)

# Base of program memory on the target machines
SEARCH_START = 16384

# The header starts this many bytes after the signature
HEADER_OFFSET = 13

# Word fields following the four count bytes, in header order
POINTER_FIELDS = (
    "responses",
    "processes",
    "objects",
    "locations",
    "messages",
    "connections",
    "vocabulary",
    "initial_positions",
)


def _matches(image: ByteImage, ptr: int) -> bool:
    return all(image.byte(ptr + 2 * i) == 16 + i for i in range(1, 6))


def find_signature(image: ByteImage, start: int = SEARCH_START) -> int:
    """Return the lowest offset >= ``start`` holding the database signature.

    The signature is the sequence 17, 18, 19, 20, 21 stored in every other
    byte from ``offset + 2``.
    """
    # The last probe reads ptr + 10
    for ptr in range(max(start, 0), len(image) - 10):
        if _matches(image, ptr):
            logger.debug(f"Signature found at {ptr:#06x}")
            return ptr
    raise SignatureNotFound(start, len(image))


def read_header(image: ByteImage, sign: int) -> Header:
    """Read counts and table addresses from the header after ``sign``."""
    base = sign + HEADER_OFFSET
    pointers = {
        name: image.word(base + 4 + 2 * i, "header")
        for i, name in enumerate(POINTER_FIELDS)
    }
    header = Header(
        n_objects_carried=image.byte(base, "header"),
        n_objects=image.byte(base + 1, "header"),
        n_locations=image.byte(base + 2, "header"),
        n_messages=image.byte(base + 3, "header"),
        **pointers,
    )
    logger.debug(
        f"Header at {base:#06x}: {header.n_objects} objects, "
        f"{header.n_locations} locations, {header.n_messages} messages"
    )
    return header
