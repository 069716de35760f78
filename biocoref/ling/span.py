"""Character spans and span lists.

A ``Span`` is a half-open ``[begin, end)`` character interval. A ``SpanList``
is an ordered sequence of spans and represents possibly discontinuous text,
such as a gapped coordination ("protein A and B kinase").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union


@dataclass(frozen=True, order=True)
class Span:
    """A half-open character interval."""

    begin: int
    end: int

    def __post_init__(self) -> None:
        if self.begin > self.end:
            raise ValueError(f"Invalid span: begin {self.begin} > end {self.end}")

    @property
    def length(self) -> int:
        return self.end - self.begin

    def overlaps(self, other: Span) -> bool:
        return self.begin < other.end and other.begin < self.end

    def contains(self, other: Span) -> bool:
        """True if ``other`` lies inside this span."""
        return self.begin <= other.begin and other.end <= self.end

    def __str__(self) -> str:
        return f"{self.begin}-{self.end}"


class SpanList:
    """An ordered, immutable list of spans."""

    __slots__ = ("_spans",)

    def __init__(self, spans: Iterable[Span]):
        ordered = sorted(spans)
        if not ordered:
            raise ValueError("SpanList requires at least one span")
        self._spans: tuple[Span, ...] = tuple(ordered)

    @classmethod
    def of(cls, begin: int, end: int) -> SpanList:
        return cls([Span(begin, end)])

    @property
    def spans(self) -> tuple[Span, ...]:
        return self._spans

    @property
    def first(self) -> Span:
        return self._spans[0]

    @property
    def last(self) -> Span:
        return self._spans[-1]

    @property
    def begin(self) -> int:
        return self._spans[0].begin

    @property
    def end(self) -> int:
        return self._spans[-1].end

    @property
    def length(self) -> int:
        return sum(sp.length for sp in self._spans)

    def as_span(self) -> Span:
        """The smallest single span covering this list."""
        return Span(self.begin, self.end)

    def is_contiguous(self) -> bool:
        return len(self._spans) == 1

    def __iter__(self) -> Iterator[Span]:
        return iter(self._spans)

    def __len__(self) -> int:
        return len(self._spans)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpanList):
            return NotImplemented
        return self._spans == other._spans

    def __hash__(self) -> int:
        return hash(self._spans)

    def __repr__(self) -> str:
        return f"SpanList({';'.join(str(sp) for sp in self._spans)})"

    def __str__(self) -> str:
        return ";".join(str(sp) for sp in self._spans)


SpanLike = Union[Span, SpanList]


def as_span_list(span: SpanLike) -> SpanList:
    if isinstance(span, SpanList):
        return span
    return SpanList([span])


def at_left(left: SpanLike, right: SpanLike) -> bool:
    """True if ``left`` ends no later than ``right`` begins.

    Both arguments must be non-empty, so ``begin < end`` holds on each side.
    """
    a = as_span_list(left)
    b = as_span_list(right)
    return a.begin < a.end <= b.begin < b.end


def overlap(first: SpanLike, second: SpanLike) -> bool:
    """True if any span of ``first`` overlaps any span of ``second``."""
    a = as_span_list(first)
    b = as_span_list(second)
    return any(sa.overlaps(sb) for sa in a for sb in b)


def subsume(outer: SpanLike, inner: SpanLike) -> bool:
    """True if every span of ``inner`` lies inside some span of ``outer``."""
    a = as_span_list(outer)
    b = as_span_list(inner)
    return all(any(sa.contains(sb) for sa in a) for sb in b)


def union(first: SpanLike, second: SpanLike) -> SpanList:
    """Merge two span lists, joining spans that overlap or touch."""
    merged: list[Span] = []
    for sp in sorted(list(as_span_list(first)) + list(as_span_list(second))):
        if merged and sp.begin <= merged[-1].end:
            last = merged.pop()
            merged.append(Span(last.begin, max(last.end, sp.end)))
        else:
            merged.append(sp)
    return SpanList(merged)


def intersection(first: SpanLike, second: SpanLike) -> Optional[SpanList]:
    """The overlapping parts of two span lists, or None if they are disjoint."""
    parts = []
    for sa in as_span_list(first):
        for sb in as_span_list(second):
            begin = max(sa.begin, sb.begin)
            end = min(sa.end, sb.end)
            if begin < end:
                parts.append(Span(begin, end))
    if not parts:
        return None
    return SpanList(parts)


def span_order_key(item) -> tuple[int, int]:
    """Sort key for anything with a ``span`` attribute, in document order."""
    span = as_span_list(item.span)
    return (span.begin, span.end)
