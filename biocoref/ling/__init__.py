"""Linguistic data model consumed by the coreference engine."""

from .dependency import SynDependency
from .document import SPAN_ORDER, Document, Section, Sentence, SurfaceElement, Word
from .semantics import (Argument, Concept, Conjunction, Entity, Expression, Predicate,
                        Relation, SemanticItem, Term)
from .span import Span, SpanList
from .tree import ParseTree, parse_bracketed

__all__ = [
    "SynDependency",
    "SPAN_ORDER",
    "Document",
    "Section",
    "Sentence",
    "SurfaceElement",
    "Word",
    "Argument",
    "Concept",
    "Conjunction",
    "Entity",
    "Expression",
    "Predicate",
    "Relation",
    "SemanticItem",
    "Term",
    "Span",
    "SpanList",
    "ParseTree",
    "parse_bracketed",
]
