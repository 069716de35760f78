"""
Document model: words, surface elements, sentences, sections and documents
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Type

from . import dependency as deps
from .semantics import Conjunction, Entity, Expression, SemanticItem, SemanticItemFactory, Term
from .span import Span, SpanLike, SpanList, as_span_list, at_left, overlap, span_order_key, subsume
from .tree import ParseTree

logger = logging.getLogger(__name__)

_ALNUM_RE = re.compile(r"\w")


@dataclass(eq=False)
class Word:
    """A token with its lemma and part-of-speech tag."""

    text: str
    lemma: str
    pos: str
    span: Span
    index: int = 0

    @property
    def is_nominal(self) -> bool:
        return self.pos.startswith("NN")

    @property
    def is_verbal(self) -> bool:
        return self.pos.startswith("VB")

    @property
    def is_adjectival(self) -> bool:
        return self.pos.startswith("JJ")

    @property
    def is_determiner(self) -> bool:
        return self.pos in ("DT", "PDT", "WDT")

    @property
    def is_pronominal(self) -> bool:
        return self.pos in ("PRP", "PRP$", "WP", "WP$")

    @property
    def is_coordinating_conjunction(self) -> bool:
        return self.pos == "CC"

    @property
    def is_prepositional(self) -> bool:
        return self.pos == "IN"

    @property
    def is_relative_pronoun(self) -> bool:
        return (self.pos == "WDT" or self.pos.startswith("WRB") or self.pos.startswith("WP")
                or (self.lemma.lower() == "that" and self.pos == "IN"))


SPAN_ORDER = span_order_key


class SurfaceElement:
    """
    A word, phrase or coordinated group treated as a unit.

    The span is fixed once created. Semantic items are attached incrementally
    and kept in insertion order. Equality is identity.
    """

    def __init__(self, words: Sequence[Word], head: Optional[Word] = None,
                 span: Optional[SpanList] = None, sentence: Optional["Sentence"] = None):
        if not words:
            raise ValueError("A surface element needs at least one word")
        self.words: List[Word] = list(words)
        self.head: Word = head if head is not None else self.words[-1]
        self.span: SpanList = span or SpanList([Span(self.words[0].span.begin, self.words[-1].span.end)])
        self.sentence = sentence
        self.semantics: List[SemanticItem] = []

    # --- text -----------------------------------------------------------

    @property
    def text(self) -> str:
        doc = self.document
        if doc is not None and doc.text:
            return " ".join(doc.text[sp.begin:sp.end] for sp in self.span)
        return " ".join(w.text for w in self.words)

    @property
    def document(self) -> Optional["Document"]:
        return self.sentence.document if self.sentence is not None else None

    @property
    def index(self) -> int:
        """Position of this element within its sentence, or -1 if detached."""
        if self.sentence is None:
            return -1
        for i, surf in enumerate(self.sentence.surface_elements):
            if surf is self:
                return i
        return -1

    @property
    def dependencies(self) -> List[deps.SynDependency]:
        return self.sentence.dependencies if self.sentence is not None else []

    def contains_token(self, token: str) -> bool:
        return any(w.text.lower() == token.lower() for w in self.words)

    def contains_lemma(self, lemma: str) -> bool:
        return any(w.lemma.lower() == lemma.lower() for w in self.words)

    def contains_any_lemma(self, lemmas: Sequence[str]) -> bool:
        return any(self.contains_lemma(lemma) for lemma in lemmas)

    # --- syntactic category ---------------------------------------------

    @property
    def is_nominal(self) -> bool:
        """A noun phrase, or anything with a determiner or NP-internal dependency."""
        if self.head.is_nominal:
            return True
        if any(w.is_nominal or w.is_determiner for w in self.words):
            return True
        return len(deps.out_dependencies_with_types(self, self.dependencies,
                                                    deps.NP_INTERNAL_DEPENDENCIES)) > 0

    @property
    def is_verbal(self) -> bool:
        return self.head.is_verbal

    @property
    def is_adjectival(self) -> bool:
        return self.head.is_adjectival

    @property
    def is_determiner(self) -> bool:
        return self.head.is_determiner

    @property
    def is_pronominal(self) -> bool:
        return self.head.is_pronominal

    @property
    def is_prepositional(self) -> bool:
        return self.head.is_prepositional

    @property
    def is_coordinating_conjunction(self) -> bool:
        return self.head.is_coordinating_conjunction

    @property
    def is_relative_pronoun(self) -> bool:
        return len(self.words) == 1 and self.head.is_relative_pronoun

    @property
    def is_alphanumeric(self) -> bool:
        return _ALNUM_RE.search(self.text) is not None

    # --- semantics ------------------------------------------------------

    def has_semantics(self) -> bool:
        return bool(self.semantics)

    def add_semantics(self, item: SemanticItem) -> None:
        if not any(s is item for s in self.semantics):
            self.semantics.append(item)

    def filter_semantics(self, cls: Type[SemanticItem]) -> List[SemanticItem]:
        return [s for s in self.semantics if isinstance(s, cls)]

    def entities(self) -> List[SemanticItem]:
        return self.filter_semantics(Entity)

    def expressions(self) -> List[SemanticItem]:
        return self.filter_semantics(Expression)

    def terms(self) -> List[SemanticItem]:
        return self.filter_semantics(Term)

    def head_semantics(self) -> List[SemanticItem]:
        return [s for s in self.semantics if overlap(s.span, self.head.span)]

    def most_prominent_semantic_item(self) -> Optional[SemanticItem]:
        if not self.semantics:
            return None
        if len(self.semantics) == 1:
            return self.semantics[0]
        heads = self.head_semantics()
        if len(heads) == 1:
            return heads[0]
        pool = heads or self.semantics
        best = None
        for item in pool:
            if best is None or item.span.length > best.span.length:
                best = item
        return best

    def __repr__(self) -> str:
        return f"SurfaceElement({self.text!r}, {self.span})"


@dataclass(eq=False)
class Sentence:
    """A sentence with its surface elements, dependencies and optional parse tree."""

    id: str
    text: str
    span: Span
    words: List[Word] = field(default_factory=list)
    surface_elements: List[SurfaceElement] = field(default_factory=list)
    dependencies: List[deps.SynDependency] = field(default_factory=list)
    tree: Optional[ParseTree] = None
    document: Optional["Document"] = None

    @property
    def index(self) -> int:
        if self.document is None:
            return -1
        for i, sent in enumerate(self.document.sentences):
            if sent is self:
                return i
        return -1

    def words_in_span(self, span: SpanLike) -> List[Word]:
        return [w for w in self.words if subsume(span, w.span)]

    def string_in_span(self, span: SpanLike) -> str:
        sl = as_span_list(span)
        return " ".join(self.text[sp.begin - self.span.begin:sp.end - self.span.begin] for sp in sl)

    def surface_elements_from_span(self, span: SpanLike) -> List[SurfaceElement]:
        """Surface elements of this sentence that lie inside ``span``, in order."""
        return [s for s in self.surface_elements if subsume(span, s.span)]

    def merge_surface_element(self, span: SpanLike, head: Optional[Word] = None) -> Optional[SurfaceElement]:
        """
        Get or create a surface element covering exactly ``span``.

        Elements inside ``span`` are replaced by the new element, which takes
        over their semantics. Dependencies are re-pointed to it, and those
        left internal to it are dropped.

        Returns:
            The element, or None if ``span`` cuts through an existing element
        """
        span = as_span_list(span)
        for surf in self.surface_elements:
            if surf.span == span:
                return surf
        absorbed = self.surface_elements_from_span(span)
        if not absorbed:
            return None
        for surf in self.surface_elements:
            if overlap(surf.span, span) and not subsume(span, surf.span):
                logger.debug(f"Span {span} cuts through {surf}, not merging")
                return None

        words = [w for surf in absorbed for w in surf.words]
        words.sort(key=lambda w: w.span.begin)
        if head is None:
            head = self._phrase_head(absorbed)
        merged = SurfaceElement(words, head=head, span=span, sentence=self)
        for surf in absorbed:
            for item in surf.semantics:
                merged.add_semantics(item)
                if isinstance(item, Term) and item.surface_element is surf:
                    item.surface_element = merged

        first = self.surface_elements.index(absorbed[0])
        self.surface_elements = [s for s in self.surface_elements
                                 if not any(s is a for a in absorbed)]
        self.surface_elements.insert(first, merged)
        self._synch_dependencies(absorbed, merged)
        return merged

    def _phrase_head(self, absorbed: List[SurfaceElement]) -> Word:
        # the element not governed by any other absorbed element heads the phrase
        for surf in reversed(absorbed):
            governed = any(d.dependent is surf and any(d.governor is a for a in absorbed)
                           for d in self.dependencies)
            if not governed:
                return surf.head
        return absorbed[-1].head

    def _synch_dependencies(self, absorbed: List[SurfaceElement], merged: SurfaceElement) -> None:
        def replace(surf):
            return merged if any(surf is a for a in absorbed) else surf

        synched = []
        for dep in self.dependencies:
            gov = replace(dep.governor)
            dependent = replace(dep.dependent)
            if gov is dependent:
                continue
            dep.governor = gov
            dep.dependent = dependent
            synched.append(dep)
        self.dependencies = synched

    def __repr__(self) -> str:
        return f"Sentence({self.id}, {self.span})"


@dataclass
class Section:
    """A titled section of a document, such as a clinical note heading."""

    title: str
    span: Span

    def contains(self, sentence: Sentence) -> bool:
        return self.span.contains(sentence.span)


class Document:
    """An annotated document.

    Holds the sentences, optional sections and topics, and the id factory for
    new semantic items.
    """

    def __init__(self, id: str, text: str, sentences: Optional[List[Sentence]] = None,
                 sections: Optional[List[Section]] = None, topics: Optional[List[str]] = None):
        self.id = id
        self.text = text
        self.sentences: List[Sentence] = []
        self.sections: List[Section] = list(sections or [])
        self.topics: List[str] = list(topics or [])
        self.factory = SemanticItemFactory()
        for sent in sentences or []:
            self.add_sentence(sent)

    def add_sentence(self, sentence: Sentence) -> None:
        sentence.document = self
        self.sentences.append(sentence)

    def all_surface_elements(self) -> List[SurfaceElement]:
        return [surf for sent in self.sentences for surf in sent.surface_elements]

    def surface_elements_in_span(self, span: SpanLike) -> List[SurfaceElement]:
        return [surf for sent in self.sentences for surf in sent.surface_elements
                if subsume(span, surf.span)]

    def intervening_surface_elements(self, first: SurfaceElement, second: SurfaceElement) -> List[SurfaceElement]:
        if first is second:
            return []
        left, right = (second, first) if at_left(second.span, first.span) else (first, second)
        if left.span.end >= right.span.begin:
            return []
        return self.surface_elements_in_span(Span(left.span.end, right.span.begin))

    def section_of(self, sentence: Sentence) -> Optional[Section]:
        for section in self.sections:
            if section.contains(sentence):
                return section
        return None

    def same_section(self, first: Sentence, second: Sentence) -> bool:
        """Without sections the whole document counts as one section."""
        if not self.sections:
            return True
        a = self.section_of(first)
        b = self.section_of(second)
        return a is not None and a is b

    def semantic_items(self) -> List[SemanticItem]:
        seen = set()
        out = []
        for surf in self.all_surface_elements():
            for item in surf.semantics:
                if id(item) not in seen:
                    seen.add(id(item))
                    out.append(item)
        return out

    def semantic_items_by_class(self, cls: Type[SemanticItem]) -> List[SemanticItem]:
        return [s for s in self.semantic_items() if isinstance(s, cls)]

    def semantic_items_in_span(self, cls: Type[SemanticItem], span: SpanLike) -> List[SemanticItem]:
        return [s for s in self.semantic_items_by_class(cls) if subsume(span, s.span)]

    def ontology_counts(self) -> Dict[str, int]:
        """Occurrence counts of ontology concepts over non-mention entities, in first-seen order."""
        counts: Dict[str, int] = {}
        for item in self.semantic_items():
            if isinstance(item, Expression) or not isinstance(item, Entity):
                continue
            concept = item.ontology
            if concept is not None:
                counts[concept.id] = counts.get(concept.id, 0) + 1
        return counts

    def ontology_matches(self, surf: SurfaceElement) -> List[SurfaceElement]:
        """Surface elements carrying an item normalized to the same concept as an item of ``surf``."""
        out: List[SurfaceElement] = []
        all_items = self.semantic_items()
        for sem in surf.semantics:
            for other in all_items:
                if other is sem or not other.ontology_equals(sem):
                    continue
                if isinstance(other, Term) and not any(o is other.surface_element for o in out):
                    out.append(other.surface_element)
        return out

    def add_conjunction(self, conjunction: Conjunction, surf: SurfaceElement) -> None:
        surf.add_semantics(conjunction)

    def __repr__(self) -> str:
        return f"Document({self.id}, {len(self.sentences)} sentences)"
