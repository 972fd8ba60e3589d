"""Data models for decoded game databases."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

# Marks a parameter the opcode does not take
NO_PARAM = -1

# Selector word stored on every process command
PROCESS_WORD = 255


class _Chain:
    """Singly linked chain where each node owns the rest of the chain.

    Iteration, length, equality, hashing and repr walk the chain in a loop
    so that long tables cannot exhaust the interpreter stack.
    """

    next: Any

    def _fields(self) -> tuple:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Any]:
        node = self
        while node is not None:
            yield node
            node = node.next

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        a, b = self, other
        while a is not None and b is not None:
            if a._fields() != b._fields():
                return False
            a, b = a.next, b.next
        return a is None and b is None

    def __hash__(self) -> int:
        return hash(tuple(node._fields() for node in self))

    def __repr__(self) -> str:
        nodes = ", ".join(
            f"{type(node).__name__}{node._fields()!r}" for node in self
        )
        return f"<{type(self).__name__} chain [{nodes}]>"


@dataclass(frozen=True)
class Condition:
    """A single test in a command's condition list."""

    opcode: int
    param1: int
    param2: int = NO_PARAM

    def to_dict(self) -> dict:
        """Convert to JSON-ready primitives."""
        return {"opcode": self.opcode, "params": _params(self.param1, self.param2)}


@dataclass(frozen=True, eq=False, repr=False)
class Action(_Chain):
    """An action node, linked to the remainder of its chain."""

    opcode: int
    param1: int = NO_PARAM
    param2: int = NO_PARAM
    next: "Action | None" = None

    def _fields(self) -> tuple:
        return (self.opcode, self.param1, self.param2)

    def to_dict(self) -> dict:
        """Convert this node (without its successors) to primitives."""
        return {"opcode": self.opcode, "params": _params(self.param1, self.param2)}


@dataclass(frozen=True, eq=False, repr=False)
class Command(_Chain):
    """A response or process entry: selector words, conditions and actions."""

    word1: int
    word2: int
    conditions: tuple[Condition, ...] = ()
    action: Action | None = None
    next: "Command | None" = None

    def _fields(self) -> tuple:
        return (self.word1, self.word2, self.conditions, self.action)

    @property
    def actions(self) -> list[Action]:
        """Actions of this command in execution order."""
        return list(self.action) if self.action is not None else []

    def to_dict(self) -> dict:
        """Convert this node (without its successors) to primitives."""
        return {
            "words": [self.word1, self.word2],
            "conditions": [c.to_dict() for c in self.conditions],
            "actions": [a.to_dict() for a in self.actions],
        }


@dataclass(frozen=True)
class Header:
    """Counts and table addresses read from the database header."""

    n_objects_carried: int
    n_objects: int
    n_locations: int
    n_messages: int
    responses: int
    processes: int
    objects: int
    locations: int
    messages: int
    connections: int
    vocabulary: int
    initial_positions: int


@dataclass(frozen=True)
class GameData:
    """Everything decoded from one memory image.

    Sequences are stored as tuples and mappings as read-only views, so the
    decoded data cannot change once built.
    """

    locations: tuple[str, ...] = ()
    objects: tuple[str, ...] = ()
    messages: tuple[str, ...] = ()
    vocabulary: Mapping[str, int] = field(default_factory=dict)
    responses: Command | None = None
    processes: Command | None = None
    connections: tuple[Mapping[int, int], ...] = ()
    initial_object_positions: tuple[int, ...] = ()
    n_objects_carried: int = 0

    def __post_init__(self) -> None:
        freeze = {
            "locations": tuple(self.locations),
            "objects": tuple(self.objects),
            "messages": tuple(self.messages),
            "vocabulary": MappingProxyType(dict(self.vocabulary)),
            "connections": tuple(
                MappingProxyType(dict(exits)) for exits in self.connections
            ),
            "initial_object_positions": tuple(self.initial_object_positions),
        }
        for name, value in freeze.items():
            object.__setattr__(self, name, value)

    @property
    def carried_objects(self) -> range:
        """Indices of the object slots reserved for carried items."""
        return range(min(self.n_objects_carried, len(self.objects)))

    def to_dict(self) -> dict:
        """Convert to JSON-ready primitives.

        Rule chains become flat lists and connection keys become strings,
        since JSON objects only have string keys.
        """
        return {
            "locations": list(self.locations),
            "objects": list(self.objects),
            "messages": list(self.messages),
            "vocabulary": dict(self.vocabulary),
            "responses": _chain_to_list(self.responses),
            "processes": _chain_to_list(self.processes),
            "connections": [
                {str(direction): dest for direction, dest in exits.items()}
                for exits in self.connections
            ],
            "initial_object_positions": list(self.initial_object_positions),
            "n_objects_carried": self.n_objects_carried,
        }


def _params(param1: int, param2: int) -> list[int]:
    return [p for p in (param1, param2) if p != NO_PARAM]


def _chain_to_list(head: Command | None) -> list[dict]:
    if head is None:
        return []
    return [command.to_dict() for command in head]
