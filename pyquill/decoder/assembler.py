"""Decode a whole memory image into GameData."""

import logging
from typing import Iterable

from pyquill.decoder.header import SEARCH_START, find_signature, read_header
from pyquill.decoder.image import ByteImage
from pyquill.decoder.models import GameData
from pyquill.decoder.rules import ARG_COUNTS_V0, ArgCountTable, read_commands
from pyquill.decoder.tables import read_connections, read_initial_positions, read_vocabulary
from pyquill.decoder.text import TextDecoder

logger = logging.getLogger(__name__)


def decode_game(
    data: bytes | bytearray | memoryview | Iterable[int] | ByteImage,
    search_start: int = SEARCH_START,
    arg_counts: ArgCountTable = ARG_COUNTS_V0,
) -> GameData:
    """Decode every table of the database held in ``data``.

    Raises:
        SignatureNotFound: No database in the image.
        MalformedTable: A table runs past the end of the image.
    """
    image = data if isinstance(data, ByteImage) else ByteImage(data)
    sign = find_signature(image, search_start)
    header = read_header(image, sign)

    game = GameData(
        locations=TextDecoder(image, "locations").read_strings(
            header.locations, header.n_locations
        ),
        objects=TextDecoder(image, "objects").read_strings(
            header.objects, header.n_objects
        ),
        messages=TextDecoder(image, "messages").read_strings(
            header.messages, header.n_messages
        ),
        vocabulary=read_vocabulary(image, header.vocabulary),
        responses=read_commands(image, header.responses, False, arg_counts),
        processes=read_commands(image, header.processes, True, arg_counts),
        connections=read_connections(image, header.connections, header.n_locations),
        initial_object_positions=read_initial_positions(
            image, header.initial_positions, header.n_objects
        ),
        n_objects_carried=header.n_objects_carried,
    )
    logger.debug(
        f"Decoded database at {sign:#06x}: {len(game.vocabulary)} words, "
        f"{len(game.responses or ())} responses, {len(game.processes or ())} processes"
    )
    return game
