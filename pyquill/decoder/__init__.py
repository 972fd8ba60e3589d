"""Decoder for adventure game databases held in 8-bit memory images."""

from pyquill.decoder.assembler import decode_game
from pyquill.decoder.errors import (
    DecodeError,
    MalformedTable,
    SignatureNotFound,
    UnsupportedVariant,
)
from pyquill.decoder.header import find_signature, read_header
from pyquill.decoder.image import ByteImage
from pyquill.decoder.models import (
    NO_PARAM,
    PROCESS_WORD,
    Action,
    Command,
    Condition,
    GameData,
    Header,
)
from pyquill.decoder.rules import (
    ArgCountTable,
    read_actions,
    read_commands,
    read_conditions,
    read_conditions_actions,
)
from pyquill.decoder.tables import read_connections, read_initial_positions, read_vocabulary
from pyquill.decoder.text import TextDecoder

__all__ = [
    "decode_game",
    "DecodeError",
    "MalformedTable",
    "SignatureNotFound",
    "UnsupportedVariant",
    "find_signature",
    "read_header",
    "ByteImage",
    "NO_PARAM",
    "PROCESS_WORD",
    "Action",
    "Command",
    "Condition",
    "GameData",
    "Header",
    "ArgCountTable",
    "read_actions",
    "read_commands",
    "read_conditions",
    "read_conditions_actions",
    "read_connections",
    "read_initial_positions",
    "read_vocabulary",
    "TextDecoder",
]
