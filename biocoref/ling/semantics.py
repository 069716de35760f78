"""Semantic objects attached to surface elements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .span import SpanList, union

if TYPE_CHECKING:
    from .document import SurfaceElement


@dataclass(frozen=True)
class Concept:
    """An ontology concept with its semantic types (e.g. a UMLS CUI)."""

    id: str
    name: str = ""
    semtypes: tuple[str, ...] = ()


class SemanticItem:
    """Base class of everything attached to a surface element."""

    def __init__(self, id: str, type: str, span: SpanList):
        self.id = id
        self.type = type
        self.span = span

    @property
    def ontology(self) -> Optional[Concept]:
        return None

    def all_semtypes(self) -> list[str]:
        return [self.type]

    def ontology_equals(self, other: SemanticItem) -> bool:
        mine = self.ontology
        theirs = other.ontology
        return mine is not None and theirs is not None and mine.id == theirs.id

    def short_string(self) -> str:
        return f"{type(self).__name__}_{self.id}_{self.type}_{self.span}"

    def __repr__(self) -> str:
        return self.short_string()


class Term(SemanticItem):
    """A semantic item realized by a single surface element."""

    def __init__(self, id: str, type: str, span: SpanList, surface_element: SurfaceElement,
                 head_span: Optional[SpanList] = None):
        super().__init__(id, type, span)
        self.surface_element = surface_element
        self.head_span = head_span or span

    @property
    def text(self) -> str:
        return self.surface_element.text


class Entity(Term):
    """A named or conceptual entity, optionally normalized to ontology concepts."""

    def __init__(self, id: str, type: str, span: SpanList, surface_element: SurfaceElement,
                 head_span: Optional[SpanList] = None, concepts: Optional[list[Concept]] = None,
                 semtypes: Optional[list[str]] = None, sense: Optional[Concept] = None):
        super().__init__(id, type, span, surface_element, head_span)
        self.concepts: list[Concept] = list(concepts or [])
        self.semtypes: list[str] = list(semtypes or [])
        self.sense = sense

    @property
    def ontology(self) -> Optional[Concept]:
        if self.sense is not None:
            return self.sense
        return self.concepts[0] if self.concepts else None

    def all_semtypes(self) -> list[str]:
        out: list[str] = []
        for semtype in self.semtypes:
            if semtype not in out:
                out.append(semtype)
        for concept in self.concepts:
            for semtype in concept.semtypes:
                if semtype not in out:
                    out.append(semtype)
        if not out:
            out.append(self.type)
        return out


class Expression(Entity):
    """A coreferential mention. Its type is an ``ExpressionType`` name."""

    def all_semtypes(self) -> list[str]:
        # the mention type itself is not a semantic type
        out = super().all_semtypes()
        return [s for s in out if s != self.type]


class Predicate(Term):
    """A predicate trigger such as a verb or nominalization."""


@dataclass
class Argument:
    """A role-labeled argument of a relation."""

    role: str
    item: SemanticItem


class Relation(SemanticItem):
    """A relation among semantic items."""

    def __init__(self, id: str, type: str, arguments: list[Argument],
                 predicate: Optional[SemanticItem] = None):
        self.arguments: list[Argument] = list(arguments)
        self.predicate = predicate
        super().__init__(id, type, self._compute_span())

    def _compute_span(self) -> SpanList:
        spans = [arg.item.span for arg in self.arguments]
        if self.predicate is not None:
            spans.append(self.predicate.span)
        if not spans:
            raise ValueError(f"Relation {self.id} has no arguments")
        out = spans[0]
        for sp in spans[1:]:
            out = union(out, sp)
        return out

    def argument_items(self, role: Optional[str] = None) -> list[SemanticItem]:
        return [a.item for a in self.arguments if role is None or a.role == role]

    def add_argument(self, argument: Argument) -> None:
        self.arguments.append(argument)
        self.span = self._compute_span()


class Conjunction(Relation):
    """A coordination. Its arguments are the conjuncts."""

    ROLE = "CC"

    def __init__(self, id: str, conjuncts: list[SemanticItem], predicate: Optional[SemanticItem] = None):
        super().__init__(id, "CONJ", [Argument(self.ROLE, c) for c in conjuncts], predicate)


@dataclass
class SemanticItemFactory:
    """Issues document-unique ids for new semantic items."""

    counters: dict[str, int] = field(default_factory=dict)

    def next_id(self, prefix: str) -> str:
        self.counters[prefix] = self.counters.get(prefix, 0) + 1
        return f"{prefix}{self.counters[prefix]}"

    def reserve(self, item_id: str) -> None:
        """Make sure ids issued later never collide with ``item_id``."""
        prefix = item_id.rstrip("0123456789")
        digits = item_id[len(prefix):]
        if digits:
            self.counters[prefix] = max(self.counters.get(prefix, 0), int(digits))
