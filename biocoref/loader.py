"""
JSON document loader: builds an annotated Document from pre-parsed annotations
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from .core.exceptions import DocumentLoadError
from .ling.dependency import SynDependency
from .ling.document import Document, Section, Sentence, SurfaceElement, Word
from .ling.semantics import Concept, Conjunction, Entity, SemanticItem
from .ling.span import Span, SpanList, subsume
from .ling.tree import parse_bracketed

logger = logging.getLogger(__name__)


class _Offsets(BaseModel):
    begin: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def check_order(self):
        if self.begin > self.end:
            raise ValueError(f"begin {self.begin} is after end {self.end}")
        return self


class WordModel(_Offsets):
    text: str
    lemma: Optional[str] = None
    pos: str


class PhraseModel(BaseModel):
    """A chunk over word indices ``start`` (inclusive) to ``end`` (exclusive)."""

    start: int = Field(ge=0)
    end: int = Field(ge=1)
    head: Optional[int] = None


class DependencyModel(BaseModel):
    """A dependency between word indices of the same sentence."""

    type: str
    governor: int = Field(ge=0)
    dependent: int = Field(ge=0)


class SentenceModel(BaseModel):
    id: Optional[str] = None
    begin: Optional[int] = None
    end: Optional[int] = None
    words: List[WordModel] = Field(min_length=1)
    phrases: List[PhraseModel] = Field(default_factory=list)
    dependencies: List[DependencyModel] = Field(default_factory=list)
    parse: Optional[str] = None


class ConceptModel(BaseModel):
    id: str
    name: str = ""
    semtypes: List[str] = Field(default_factory=list)


class EntityModel(_Offsets):
    id: Optional[str] = None
    type: str
    semtypes: List[str] = Field(default_factory=list)
    concepts: List[ConceptModel] = Field(default_factory=list)
    # id of the concept chosen among ``concepts``
    sense: Optional[str] = None


class ConjunctionModel(BaseModel):
    id: Optional[str] = None
    conjuncts: List[str] = Field(min_length=2)
    # offsets of the coordinating word; found between the conjuncts when omitted
    begin: Optional[int] = None
    end: Optional[int] = None


class SectionModel(_Offsets):
    title: str = ""


class DocumentModel(BaseModel):
    """Pre-parsed document: sentences with words, dependencies and entity annotations."""

    id: str = "doc"
    text: str
    sentences: List[SentenceModel] = Field(default_factory=list)
    entities: List[EntityModel] = Field(default_factory=list)
    conjunctions: List[ConjunctionModel] = Field(default_factory=list)
    sections: List[SectionModel] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)


def load_document(data: Mapping[str, Any]) -> Document:
    """
    Validate a JSON mapping and build the annotated document it describes.

    Args:
        data: Mapping shaped like ``DocumentModel``

    Returns:
        The document, with one surface element per phrase or remaining word
        and entity semantics attached

    Raises:
        DocumentLoadError: If validation fails or an index or offset is out of range
    """
    try:
        model = DocumentModel.model_validate(data)
    except ValidationError as e:
        raise DocumentLoadError(f"Invalid document: {e}") from e

    try:
        return _build_document(model)
    except (IndexError, ValueError) as e:
        raise DocumentLoadError(f"Invalid document {model.id}: {e}") from e


def load_document_file(path: Union[str, Path]) -> Document:
    """Load a document from a JSON file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DocumentLoadError(f"Could not read document {path}: {e}") from e
    return load_document(data)


def _build_document(model: DocumentModel) -> Document:
    sections = [Section(s.title, Span(s.begin, s.end)) for s in model.sections]
    document = Document(model.id, model.text, sections=sections, topics=model.topics)
    for i, sent_model in enumerate(model.sentences):
        document.add_sentence(_build_sentence(document, sent_model, i))

    explicit = [m.id for m in (*model.entities, *model.conjunctions) if m.id]
    duplicates = sorted({item_id for item_id in explicit if explicit.count(item_id) > 1})
    if duplicates:
        raise ValueError(f"duplicate ids {', '.join(duplicates)}")
    for item_id in explicit:
        document.factory.reserve(item_id)

    items = {}
    for ent_model in model.entities:
        entity = _add_entity(document, ent_model)
        items[entity.id] = entity
    for conj_model in model.conjunctions:
        conj = _add_conjunction(document, conj_model, items)
        items[conj.id] = conj

    logger.info(f"Loaded document {document.id}: {len(document.sentences)} sentences, "
                f"{len(model.entities)} entities")
    return document


def _build_sentence(document: Document, model: SentenceModel, position: int) -> Sentence:
    words = [Word(w.text, w.lemma or w.text.lower(), w.pos, Span(w.begin, w.end), index=i)
             for i, w in enumerate(model.words)]
    begin = model.begin if model.begin is not None else words[0].span.begin
    end = model.end if model.end is not None else words[-1].span.end
    if end > len(document.text):
        raise ValueError(f"sentence {position} ends at {end}, past the end of the text")
    sentence = Sentence(model.id or f"S{position + 1}", document.text[begin:end], Span(begin, end),
                        words=words)
    sentence.surface_elements = [SurfaceElement([w], sentence=sentence) for w in words]

    for i, dep in enumerate(model.dependencies):
        governor = sentence.surface_elements[_word_index(words, dep.governor)]
        dependent = sentence.surface_elements[_word_index(words, dep.dependent)]
        sentence.dependencies.append(SynDependency(f"{sentence.id}_D{i + 1}", dep.type, governor, dependent))

    for phrase in model.phrases:
        if phrase.end <= phrase.start:
            raise ValueError(f"empty phrase [{phrase.start}, {phrase.end}) in sentence {sentence.id}")
        first = words[_word_index(words, phrase.start)]
        last = words[_word_index(words, phrase.end - 1)]
        head = words[_word_index(words, phrase.head)] if phrase.head is not None else None
        merged = sentence.merge_surface_element(Span(first.span.begin, last.span.end), head=head)
        if merged is None:
            raise ValueError(f"phrase [{phrase.start}, {phrase.end}) overlaps another phrase "
                             f"in sentence {sentence.id}")

    if model.parse:
        sentence.tree = parse_bracketed(model.parse)
    return sentence


def _word_index(words: List[Word], index: int) -> int:
    if index >= len(words):
        raise IndexError(f"word index {index} out of range ({len(words)} words)")
    return index


def _sentence_at(document: Document, span: Span) -> Sentence:
    for sentence in document.sentences:
        if sentence.span.contains(span):
            return sentence
    raise ValueError(f"span {span} is not inside any sentence")


def _add_entity(document: Document, model: EntityModel) -> Entity:
    span = Span(model.begin, model.end)
    sentence = _sentence_at(document, span)
    surf = sentence.merge_surface_element(span)
    if surf is None:
        # an entity inside a chunk, such as the modifier of "the TRADD protein"
        containing = [s for s in sentence.surface_elements if subsume(s.span, span)]
        if not containing:
            raise ValueError(f"entity {model.id or model.type} at {span} crosses surface element boundaries")
        surf = containing[0]

    words = sentence.words_in_span(span)
    if not words:
        raise ValueError(f"entity {model.id or model.type} at {span} covers no word")
    head = surf.head if any(surf.head is w for w in words) else words[-1]

    concepts = [Concept(c.id, c.name, tuple(c.semtypes)) for c in model.concepts]
    sense = None
    if model.sense is not None:
        sense = next((c for c in concepts if c.id == model.sense), None)
        if sense is None:
            raise ValueError(f"sense {model.sense} is not among the concepts of entity {model.id}")

    entity_id = model.id or document.factory.next_id("T")
    entity = Entity(entity_id, model.type, SpanList([span]), surf, head_span=SpanList([head.span]),
                    concepts=concepts, semtypes=model.semtypes, sense=sense)
    surf.add_semantics(entity)
    return entity


def _add_conjunction(document: Document, model: ConjunctionModel, items: dict) -> Conjunction:
    conjuncts: List[SemanticItem] = []
    for item_id in model.conjuncts:
        if item_id not in items:
            raise ValueError(f"conjunction refers to unknown item {item_id}")
        conjuncts.append(items[item_id])

    conj_id = model.id or document.factory.next_id("R")
    conj = Conjunction(conj_id, conjuncts)
    document.add_conjunction(conj, _coordinator(document, model, conjuncts))
    return conj


def _coordinator(document: Document, model: ConjunctionModel, conjuncts: List[SemanticItem]) -> SurfaceElement:
    if model.begin is not None and model.end is not None:
        span = Span(model.begin, model.end)
        sentence = _sentence_at(document, span)
        for surf in sentence.surface_elements:
            if subsume(surf.span, span):
                return surf
        raise ValueError(f"no surface element for the coordinator at {span}")

    first = min(c.span.begin for c in conjuncts)
    last = max(c.span.end for c in conjuncts)
    sentence = _sentence_at(document, Span(first, first))
    for surf in sentence.surface_elements:
        if first <= surf.span.begin and surf.span.end <= last and surf.is_coordinating_conjunction:
            return surf
    raise ValueError(f"no coordinating word between the conjuncts {', '.join(model.conjuncts)}")
