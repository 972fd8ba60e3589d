"""Decoders for the condition/action bytecode and the command tables."""

import logging
from dataclasses import dataclass

from pyquill.decoder.errors import UnsupportedVariant
from pyquill.decoder.image import ByteImage
from pyquill.decoder.models import NO_PARAM, PROCESS_WORD, Action, Command, Condition

logger = logging.getLogger(__name__)

END_OF_BLOCK = 0xFF
END_OF_TABLE = 0

# Conditions above this opcode take two parameters
LAST_SINGLE_PARAM_CONDITION = 12

COMMAND_RECORD_SIZE = 4


@dataclass(frozen=True)
class ArgCountTable:
    """Number of parameters each action opcode takes.

    Opcodes in neither set take two parameters.
    """

    version: int
    no_args: frozenset[int]
    one_arg: frozenset[int]

    def arg_count(self, opcode: int) -> int:
        if opcode in self.no_args:
            return 0
        if opcode in self.one_arg:
            return 1
        return 2

    @classmethod
    def for_version(cls, version: int) -> "ArgCountTable":
        """Return the table for a database version."""
        try:
            return _TABLES[version]
        except KeyError:
            raise UnsupportedVariant(version) from None


ARG_COUNTS_V0 = ArgCountTable(
    version=0,
    no_args=frozenset(range(0, 11)),
    one_arg=frozenset([*range(11, 20), 21, 22]),
)

_TABLES = {0: ARG_COUNTS_V0}


def read_conditions(
    image: ByteImage, start: int, table: str = "conditions"
) -> tuple[list[Condition], int]:
    """Read conditions up to the 0xFF terminator.

    Returns:
        The conditions in stored order and the offset past the terminator.
    """
    ptr = start
    conditions = []
    while True:
        opcode = image.byte(ptr, table)
        if opcode == END_OF_BLOCK:
            break
        param1 = image.byte(ptr + 1, table)
        if opcode > LAST_SINGLE_PARAM_CONDITION:
            conditions.append(Condition(opcode, param1, image.byte(ptr + 2, table)))
            ptr += 3
        else:
            conditions.append(Condition(opcode, param1))
            ptr += 2
    return conditions, ptr + 1


def read_actions(
    image: ByteImage,
    start: int,
    arg_counts: ArgCountTable = ARG_COUNTS_V0,
    table: str = "actions",
) -> Action | None:
    """Read an action chain; returns its head, or None if it is empty."""
    ptr = start
    records = []
    while True:
        opcode = image.byte(ptr, table)
        if opcode == END_OF_BLOCK:
            break
        n_args = arg_counts.arg_count(opcode)
        params = [image.byte(ptr + 1 + i, table) for i in range(n_args)]
        params += [NO_PARAM] * (2 - n_args)
        records.append((opcode, *params))
        ptr += 1 + n_args

    head = None
    for opcode, param1, param2 in reversed(records):
        head = Action(opcode, param1, param2, head)
    return head


def read_conditions_actions(
    image: ByteImage,
    start: int,
    arg_counts: ArgCountTable = ARG_COUNTS_V0,
    table: str = "",
) -> tuple[list[Condition], Action | None]:
    """Read a condition block and the action block that follows it.

    ``table`` names the command table owning the block in error messages.
    """
    prefix = f"{table} " if table else ""
    conditions, ptr = read_conditions(image, start, f"{prefix}conditions")
    return conditions, read_actions(image, ptr, arg_counts, f"{prefix}actions")


def read_commands(
    image: ByteImage,
    start: int,
    processes: bool = False,
    arg_counts: ArgCountTable = ARG_COUNTS_V0,
) -> Command | None:
    """Read a response or process table.

    Each record holds two selector words and the address of its
    condition/action block. A zero first byte ends the table. Process
    entries are not matched against input, so their selector words are
    replaced with PROCESS_WORD.
    """
    table = "processes" if processes else "responses"
    ptr = start
    records = []
    while True:
        word1 = image.byte(ptr, table)
        if word1 == END_OF_TABLE:
            break
        word2 = image.byte(ptr + 1, table)
        block = image.word(ptr + 2, table)
        conditions, action = read_conditions_actions(image, block, arg_counts, table)
        if processes:
            word1 = word2 = PROCESS_WORD
        records.append((word1, word2, tuple(conditions), action))
        ptr += COMMAND_RECORD_SIZE

    head = None
    for word1, word2, conditions, action in reversed(records):
        head = Command(word1, word2, conditions, action, head)
    logger.debug(f"Read {len(records)} {table} from {start:#06x}")
    return head
