"""Block nodes produced by the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union


class ListKind(str, Enum):
    ORDERED = "ordered"
    UNORDERED = "unordered"

    @property
    def tag(self) -> str:
        return "ol" if self is ListKind.ORDERED else "ul"


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    text: str

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 3:
            raise ValueError(f"heading level must be 1..3, got {self.level}")


@dataclass(frozen=True, slots=True)
class Paragraph:
    text: str


@dataclass(frozen=True, slots=True)
class Break:
    pass


@dataclass(frozen=True, slots=True)
class ListOpen:
    kind: ListKind


@dataclass(frozen=True, slots=True)
class ListItem:
    text: str


@dataclass(frozen=True, slots=True)
class ListClose:
    kind: ListKind


BlockNode = Union[Heading, Paragraph, Break, ListOpen, ListItem, ListClose]


def is_balanced(nodes: Iterable[BlockNode]) -> bool:
    """True when every ``ListOpen`` is closed, innermost first, by its own kind."""

    open_kinds: list[ListKind] = []
    for node in nodes:
        if isinstance(node, ListOpen):
            open_kinds.append(node.kind)
        elif isinstance(node, ListClose):
            if not open_kinds or open_kinds.pop() is not node.kind:
                return False
        elif isinstance(node, ListItem) and not open_kinds:
            return False
    return not open_kinds


__all__ = [
    "BlockNode",
    "Break",
    "Heading",
    "ListClose",
    "ListItem",
    "ListKind",
    "ListOpen",
    "Paragraph",
    "is_balanced",
]
