"""Line-oriented markdown block renderer.

The buffer is scanned once, top to bottom. Each line is classified by the
first matching rule in :data:`LINE_RULES`; list lines go through a stack of
open list frames so nesting follows indentation (two columns per level).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from inkwell.runtime import telemetry

from .nodes import (
    BlockNode,
    Break,
    Heading,
    ListClose,
    ListItem,
    ListKind,
    ListOpen,
    Paragraph,
)

INDENT_WIDTH = 2

HEADING = re.compile(r"^(?P<hashes>#{1,3})\s*(?P<text>.*)$")
ORDERED_ITEM = re.compile(r"^\d+\.\s+(?P<text>.*)$")
UNORDERED_ITEM = re.compile(r"^[-*]\s+(?P<text>.*)$")
# whitespace includes the byte-order mark, which str.strip() keeps
_LEADING_WS = re.compile(r"^[\s\ufeff]*")
_EDGE_WS = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def _trim(raw: str) -> str:
    return _EDGE_WS.sub("", raw)


@dataclass(frozen=True, slots=True)
class ListFrame:
    kind: ListKind
    indent_level: int


@dataclass(frozen=True, slots=True)
class ScannedLine:
    raw: str
    stripped: str
    indent_level: int

    @classmethod
    def from_raw(cls, raw: str) -> "ScannedLine":
        leading = _LEADING_WS.match(raw)
        width = leading.end() if leading else 0
        return cls(raw=raw, stripped=_trim(raw), indent_level=width // INDENT_WIDTH)


@dataclass
class ListStack:
    """Open list frames for one render pass, innermost last."""

    frames: List[ListFrame] = field(default_factory=list)

    @property
    def top(self) -> Optional[ListFrame]:
        return self.frames[-1] if self.frames else None

    def push(self, kind: ListKind, indent_level: int) -> ListOpen:
        self.frames.append(ListFrame(kind, indent_level))
        return ListOpen(kind)

    def pop(self) -> ListClose:
        return ListClose(self.frames.pop().kind)

    def close_all(self) -> List[ListClose]:
        closes = []
        while self.frames:
            closes.append(self.pop())
        return closes


@dataclass
class RenderPass:
    """Mutable state of a single scan; discarded when the scan ends."""

    stack: ListStack = field(default_factory=ListStack)
    output: List[BlockNode] = field(default_factory=list)

    def close_lists(self) -> None:
        self.output.extend(self.stack.close_all())

    def list_item(self, kind: ListKind, indent_level: int, text: str) -> None:
        stack = self.stack
        while stack.top is not None and stack.top.indent_level >= indent_level:
            self.output.append(stack.pop())

        top = stack.top
        if top is None or top.indent_level < indent_level:
            self.output.append(stack.push(kind, indent_level))
        elif top.kind is not kind:
            # same depth, different kind
            self.output.append(stack.pop())
            self.output.append(stack.push(kind, indent_level))

        self.output.append(ListItem(text))


Predicate = Callable[[ScannedLine], Any]
Handler = Callable[[RenderPass, ScannedLine, Any], None]


def _emit_heading(scan: RenderPass, line: ScannedLine, match: Any) -> None:
    scan.close_lists()
    scan.output.append(Heading(len(match.group("hashes")), match.group("text")))


def _emit_ordered(scan: RenderPass, line: ScannedLine, match: Any) -> None:
    scan.list_item(ListKind.ORDERED, line.indent_level, match.group("text"))


def _emit_unordered(scan: RenderPass, line: ScannedLine, match: Any) -> None:
    scan.list_item(ListKind.UNORDERED, line.indent_level, match.group("text"))


def _emit_break(scan: RenderPass, line: ScannedLine, match: Any) -> None:
    scan.close_lists()
    scan.output.append(Break())


def _emit_paragraph(scan: RenderPass, line: ScannedLine, match: Any) -> None:
    scan.close_lists()
    scan.output.append(Paragraph(line.raw))


# Evaluated in order; the first predicate that returns a truthy value wins.
LINE_RULES: Tuple[Tuple[str, Predicate, Handler], ...] = (
    ("heading", lambda line: HEADING.match(line.stripped), _emit_heading),
    ("ordered", lambda line: ORDERED_ITEM.match(line.stripped), _emit_ordered),
    ("unordered", lambda line: UNORDERED_ITEM.match(line.stripped), _emit_unordered),
    ("blank", lambda line: line.stripped == "", _emit_break),
    ("paragraph", lambda line: True, _emit_paragraph),
)


class BlockRenderer:
    """Pure, repeatable text -> block node conversion."""

    def __init__(
        self,
        *,
        rules: Sequence[Tuple[str, Predicate, Handler]] = LINE_RULES,
        logger_name: str | None = None,
    ) -> None:
        self.rules = tuple(rules)
        self._logger_name = logger_name

    def render(self, text: str) -> tuple[BlockNode, ...]:
        with telemetry.span(
            "render::blocks",
            logger_name=self._logger_name,
            component="render",
            metadata={"length": len(text)},
        ) as handle:
            scan = RenderPass()
            for raw in text.split("\n"):
                self._classify(scan, ScannedLine.from_raw(raw))
            scan.close_lists()
            handle.add_metadata("nodes", len(scan.output))
            return tuple(scan.output)

    def _classify(self, scan: RenderPass, line: ScannedLine) -> None:
        for _name, predicate, handler in self.rules:
            match = predicate(line)
            if match:
                handler(scan, line, match)
                return


_DEFAULT_RENDERER = BlockRenderer()


def render_blocks(text: str) -> tuple[BlockNode, ...]:
    return _DEFAULT_RENDERER.render(text)


__all__ = [
    "BlockRenderer",
    "INDENT_WIDTH",
    "LINE_RULES",
    "ListFrame",
    "ListStack",
    "RenderPass",
    "ScannedLine",
    "render_blocks",
]
