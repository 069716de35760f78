"""
Rule-based recognizers for coreferential mentions, one per expression type
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..agreement.morphosyntactic import Person, person
from ..core.types import ExpressionType
from ..core.utils import complementizer_that
from ..ling import dependency as deps
from ..ling.document import SurfaceElement, Word
from ..ling.span import Span, SpanList, union
from .lexicon import (ALL_ADJECTIVES, ALL_DETERMINERS, DEFINITE_DETERMINERS, DEMONSTRATIVE_ADJECTIVES,
                      DEMONSTRATIVE_PRONOUNS, DISTRIBUTIVE_PRONOUNS, INDEFINITE_ADJECTIVES,
                      INDEFINITE_PRONOUNS, RECIPROCAL_PRONOUNS, REFLEXIVE_PRONOUNS)

logger = logging.getLogger(__name__)

# Cell line names tagged as pronouns
_NOT_PERSONAL_PRONOUNS = ("iT", "IT")

_DETERMINER_DEPENDENCIES = ("det", "amod")


class ExpressionRecognizer(ABC):
    """Abstract base class for mention recognizers"""

    @abstractmethod
    def get_expression_type(self) -> ExpressionType:
        """Return the type of mentions this recognizer finds"""
        pass

    @abstractmethod
    def recognize(self, surf: SurfaceElement) -> bool:
        """Return True if the element is a mention of this type"""
        pass

    def span(self, surf: SurfaceElement) -> Optional[SpanList]:
        """Span of the mention, which may extend beyond the element itself"""
        return surf.span if self.recognize(surf) else None


def is_reflexive(surf: SurfaceElement) -> bool:
    return surf.head.text in REFLEXIVE_PRONOUNS


def possessive_pronoun_word(surf: SurfaceElement) -> Optional[Word]:
    for word in surf.words:
        if word.pos == "PRP$":
            return word
    return None


def _first_lemma(surf: SurfaceElement) -> str:
    return surf.words[0].lemma.lower()


def _starts_with(vocabulary: Sequence[str]):
    def check(surf: SurfaceElement) -> bool:
        return _first_lemma(surf) in vocabulary
    return check


def determiner_np_span(surf: SurfaceElement, starts_with) -> Optional[SpanList]:
    """
    Span of a noun phrase introduced by a determiner or adjective.

    Args:
        surf: Candidate noun phrase
        starts_with: Predicate on a surface element telling whether its first
            word is one of the determiners or adjectives of interest

    Returns:
        The element's own span when it is already chunked with the
        determiner, the span extended over its determiner dependents
        otherwise, or None when it is not such a noun phrase
    """
    if surf is None or surf.sentence is None or not surf.is_nominal:
        return None
    out_deps = deps.out_dependencies(surf, surf.dependencies)
    if not out_deps:
        if len(surf.words) < 2:
            return None
        return surf.span if starts_with(surf) else None
    dets = deps.dependencies_with_types(out_deps, _DETERMINER_DEPENDENCIES)
    if not dets:
        return surf.span if starts_with(surf) else None
    span = surf.span
    for dep in dets:
        if starts_with(dep.dependent):
            span = union(span, dep.dependent.span)
    if span == surf.span:
        return None
    return SpanList([span.as_span()])


def _has_word_in(surf: SurfaceElement, pos: str, vocabulary: Sequence[str]) -> bool:
    return any(w.pos == pos and w.lemma.lower() in vocabulary for w in surf.words)


class PersonalPronounRecognizer(ExpressionRecognizer):
    def get_expression_type(self):
        return ExpressionType.PERSONAL_PRONOUN

    def recognize(self, surf):
        if not any(w.pos == "PRP" for w in surf.words):
            return False
        text = surf.text
        return text not in _NOT_PERSONAL_PRONOUNS and text.lower() != "s"


class PossessivePronounRecognizer(ExpressionRecognizer):
    def get_expression_type(self):
        return ExpressionType.POSSESSIVE_PRONOUN

    def recognize(self, surf):
        return surf.is_pronominal and possessive_pronoun_word(surf) is not None


class RelativePronounRecognizer(ExpressionRecognizer):
    def get_expression_type(self):
        return ExpressionType.RELATIVE_PRONOUN

    def recognize(self, surf):
        return surf.is_relative_pronoun


class DemonstrativePronounRecognizer(ExpressionRecognizer):
    """A lone "this", "that", "these" or "those" that is neither a determiner nor a complementizer"""

    def get_expression_type(self):
        return ExpressionType.DEMONSTRATIVE_PRONOUN

    def recognize(self, surf):
        if surf.sentence is None or len(surf.words) != 1:
            return False
        if surf.words[0].lemma not in DEMONSTRATIVE_PRONOUNS:
            return False
        if complementizer_that(surf):
            return False
        return not deps.in_dependencies_with_types(surf, surf.dependencies, deps.NP_INTERNAL_DEPENDENCIES)


class DistributivePronounRecognizer(ExpressionRecognizer):
    def get_expression_type(self):
        return ExpressionType.DISTRIBUTIVE_PRONOUN

    def recognize(self, surf):
        if surf.sentence is None or len(surf.words) > 1:
            return False
        embeddings = surf.dependencies
        if deps.in_dependencies_with_types(surf, embeddings, ["preconj"]):
            return False
        if deps.out_dependencies_with_types(surf, embeddings, ["pobj"]):
            return False
        head = surf.head
        return ((head.is_coordinating_conjunction or head.is_determiner)
                and head.lemma.lower() in DISTRIBUTIVE_PRONOUNS)


class ReciprocalPronounRecognizer(ExpressionRecognizer):
    """
    "each other", "one another" and "one to the other".

    The phrase is usually split over several elements, so the span is read
    off the sentence text starting at the element.
    """

    def get_expression_type(self):
        return ExpressionType.RECIPROCAL_PRONOUN

    def recognize(self, surf):
        return self.span(surf) is not None

    def span(self, surf):
        if surf is None:
            return None
        text = surf.text.lower()
        if any(text == p for p in RECIPROCAL_PRONOUNS):
            return surf.span
        sentence = surf.sentence
        if sentence is None:
            return None
        offset = surf.span.begin
        for phrase in RECIPROCAL_PRONOUNS:
            candidate = Span(offset, offset + len(phrase))
            if not sentence.span.contains(candidate):
                continue
            if sentence.string_in_span(candidate).lower() == phrase:
                return SpanList([candidate])
        return None


class IndefinitePronounRecognizer(ExpressionRecognizer):
    def get_expression_type(self):
        return ExpressionType.INDEFINITE_PRONOUN

    def recognize(self, surf):
        return surf.is_pronominal and _has_word_in(surf, "DT", INDEFINITE_PRONOUNS)


class ReflexivePronounRecognizer(ExpressionRecognizer):
    """Third person reflexives. Used by the candidate filters only, there is no reflexive mention type"""

    def get_expression_type(self):
        return ExpressionType.PERSONAL_PRONOUN

    def recognize(self, surf):
        return surf.is_pronominal and person(surf) is Person.THIRD and is_reflexive(surf)


class DefiniteNPRecognizer(ExpressionRecognizer):
    def get_expression_type(self):
        return ExpressionType.DEFINITE_NP

    def recognize(self, surf):
        return self.span(surf) is not None

    def span(self, surf):
        return determiner_np_span(surf, _starts_with(DEFINITE_DETERMINERS))


class IndefiniteNPRecognizer(ExpressionRecognizer):
    def get_expression_type(self):
        return ExpressionType.INDEFINITE_NP

    def recognize(self, surf):
        return self.span(surf) is not None

    def span(self, surf):
        return determiner_np_span(surf, _starts_with(INDEFINITE_PRONOUNS + INDEFINITE_ADJECTIVES))


class DemonstrativeNPRecognizer(ExpressionRecognizer):
    """
    "this protein", "those patients", "such mutations".

    When the phrase is already chunked with its determiner, the span runs
    from the last demonstrative word to the end of the element.
    """

    def get_expression_type(self):
        return ExpressionType.DEMONSTRATIVE_NP

    def recognize(self, surf):
        return self.span(surf) is not None

    def span(self, surf):
        if surf is None or surf.sentence is None or not surf.is_nominal:
            return None
        out_deps = deps.out_dependencies(surf, surf.dependencies)
        if not out_deps:
            if len(surf.words) < 2:
                return None
            return demonstrative_span(surf)
        if not deps.dependencies_with_types(out_deps, _DETERMINER_DEPENDENCIES):
            return demonstrative_span(surf)
        return determiner_np_span(surf, _starts_with(DEMONSTRATIVE_PRONOUNS + DEMONSTRATIVE_ADJECTIVES))


def demonstrative_span(surf: SurfaceElement) -> Optional[SpanList]:
    span = _scan_from(surf, lambda w: w.lemma.lower() in DEMONSTRATIVE_PRONOUNS and not w.pos.startswith("WD"))
    if span is not None:
        return span
    return _scan_from(surf, lambda w: w.lemma.lower() in DEMONSTRATIVE_ADJECTIVES)


def _scan_from(surf: SurfaceElement, is_start) -> Optional[SpanList]:
    begin = -1
    end = -1
    for word in surf.words:
        if is_start(word):
            begin = word.span.begin
        if begin >= 0:
            end = word.span.end
    if begin < 0 or end < 0:
        return None
    return SpanList.of(begin, end)


class DistributiveNPRecognizer(ExpressionRecognizer):
    """
    "both patients", "each drug", and "either drug" split over two elements.
    """

    def get_expression_type(self):
        return ExpressionType.DISTRIBUTIVE_NP

    def recognize(self, surf):
        return self.span(surf) is not None

    def span(self, surf):
        if surf is None or surf.sentence is None or not surf.is_nominal:
            return None
        index = surf.index
        if index > 0:
            previous = surf.sentence.surface_elements[index - 1]
            if previous.contains_any_lemma(["either", "neither"]):
                return SpanList.of(previous.span.begin, surf.span.end)
        return determiner_np_span(surf, _starts_with(DISTRIBUTIVE_PRONOUNS))


class ZeroArticleNPRecognizer(ExpressionRecognizer):
    """
    Bare noun phrases headed by a domain hypernym ("patients", "drug therapy").

    Args:
        hypernyms: Hypernym lemmas the phrase must contain
    """

    def __init__(self, hypernyms: Optional[Sequence[str]] = None):
        self.hypernyms = list(hypernyms or [])

    def get_expression_type(self):
        return ExpressionType.ZERO_ARTICLE_NP

    def recognize(self, surf):
        if self.span(surf) is None:
            return False
        return surf.contains_any_lemma(self.hypernyms)

    def span(self, surf):
        return zero_article_span(surf)


def zero_article_span(surf: SurfaceElement) -> Optional[SpanList]:
    if surf is None or surf.sentence is None or not surf.is_nominal:
        return None
    out_deps = deps.out_dependencies(surf, surf.dependencies)
    dets = deps.dependencies_with_types(out_deps, _DETERMINER_DEPENDENCIES)
    checked = [d.dependent for d in dets] if dets else [surf]
    for element in checked:
        if _has_word_in(element, "DT", ALL_DETERMINERS) or _has_word_in(element, "JJ", ALL_ADJECTIVES):
            return None
    return surf.span


def pronoun_recognizers() -> List[ExpressionRecognizer]:
    """Pronoun recognizers in recognition order."""
    return [
        PersonalPronounRecognizer(),
        PossessivePronounRecognizer(),
        RelativePronounRecognizer(),
        DemonstrativePronounRecognizer(),
        DistributivePronounRecognizer(),
        ReciprocalPronounRecognizer(),
        IndefinitePronounRecognizer(),
    ]


def noun_phrase_recognizers(hypernyms: Optional[Sequence[str]] = None) -> List[ExpressionRecognizer]:
    """Noun phrase recognizers in recognition order."""
    return [
        DefiniteNPRecognizer(),
        IndefiniteNPRecognizer(),
        DemonstrativeNPRecognizer(),
        DistributiveNPRecognizer(),
        ZeroArticleNPRecognizer(hypernyms),
    ]
