"""
Mention detection: attaches Expression semantics to the surface elements of a document
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.domain import DomainVocabulary
from ..core.types import ExpressionType
from ..ling.document import Document, Sentence, SurfaceElement
from ..ling.semantics import Expression
from ..ling.span import SpanList
from .lexicon import (DEFINITE_DETERMINERS, DEMONSTRATIVE_ADJECTIVES, DEMONSTRATIVE_PRONOUNS,
                      DISTRIBUTIVE_PRONOUNS, INDEFINITE_ADJECTIVES, INDEFINITE_PRONOUNS, PERSONAL_PRONOUNS,
                      POSSESSIVE_PRONOUNS, RECIPROCAL_PRONOUNS, WH_RELATIVE_PRONOUNS)
from .recognizers import ExpressionRecognizer, noun_phrase_recognizers, pronoun_recognizers

logger = logging.getLogger(__name__)


def annotate(document: Document, expression_types: Optional[Iterable[ExpressionType]] = None,
             vocabulary: Optional[DomainVocabulary] = None) -> list[Expression]:
    """
    Recognize coreferential mentions in every sentence of a document.

    Args:
        document: The document to annotate in place
        expression_types: Mention types to look for; all types when None
        vocabulary: Domain vocabulary supplying the zero-article hypernyms

    Returns:
        The new Expression items, in recognition order
    """
    wanted = set(expression_types) if expression_types is not None else set(ExpressionType)
    vocabulary = vocabulary or DomainVocabulary()
    pronouns = [r for r in pronoun_recognizers() if r.get_expression_type() in wanted]
    noun_phrases = [r for r in noun_phrase_recognizers(vocabulary.all_hypernyms())
                    if r.get_expression_type() in wanted]

    created: list[Expression] = []
    for sentence in document.sentences:
        for recognizer in pronouns:
            created.extend(_annotate_sentence(sentence, recognizer, skip_mentions=False))
        for recognizer in noun_phrases:
            created.extend(_annotate_sentence(sentence, recognizer, skip_mentions=True))
    logger.info(f"Recognized {len(created)} coreferential mentions in document {document.id}")
    return created


def _annotate_sentence(sentence: Sentence, recognizer: ExpressionRecognizer,
                       skip_mentions: bool) -> list[Expression]:
    exp_type = recognizer.get_expression_type()
    created = []
    # merging replaces elements of the sentence as we go
    for surf in list(sentence.surface_elements):
        if not any(s is surf for s in sentence.surface_elements):
            continue
        if skip_mentions and surf.expressions():
            continue
        if not recognizer.recognize(surf):
            continue
        span = recognizer.span(surf)
        if span is None:
            continue
        target = surf if span == surf.span else sentence.merge_surface_element(span)
        if target is None:
            logger.debug(f"Could not build a surface element over {span} for {surf}")
            continue
        if any(e.type == exp_type.value for e in target.expressions()):
            continue
        exp = new_expression(sentence.document, exp_type, target)
        logger.debug(f"{exp_type.value} mention: {exp.short_string()}")
        created.append(exp)
    return created


def new_expression(document: Document, exp_type: ExpressionType, surf: SurfaceElement) -> Expression:
    """
    Create a mention on ``surf``. The concepts and sense of the first entity
    already on the element carry over to the mention.
    """
    exp = Expression(document.factory.next_id("T"), exp_type.value, surf.span,
                     surf, head_span=SpanList([surf.head.span]))
    entities = [e for e in surf.entities() if not isinstance(e, Expression)]
    if entities:
        first = entities[0]
        concepts = list(first.concepts)
        for other in entities[1:]:
            concepts.extend(c for c in other.concepts if c not in concepts)
        if concepts and first.sense is not None:
            exp.concepts = concepts
            exp.sense = first.sense
    surf.add_semantics(exp)
    return exp


def get_mention_type(surf: SurfaceElement) -> ExpressionType:
    """
    Best guess at the mention type of an arbitrary element.

    The recognizers are tried first, then the first word is matched against
    the word lists. Anything left over is a zero-article noun phrase.
    """
    for recognizer in pronoun_recognizers() + noun_phrase_recognizers()[:-1]:
        if recognizer.recognize(surf):
            return recognizer.get_expression_type()

    first = surf.words[0].lemma.lower()
    multiword_nominal = len(surf.words) > 1 and surf.is_nominal
    if first in DEFINITE_DETERMINERS:
        return ExpressionType.DEFINITE_NP
    if first in DEMONSTRATIVE_ADJECTIVES:
        return ExpressionType.DEMONSTRATIVE_NP
    if first in DEMONSTRATIVE_PRONOUNS:
        return ExpressionType.DEMONSTRATIVE_NP if multiword_nominal else ExpressionType.DEMONSTRATIVE_PRONOUN
    if first in DISTRIBUTIVE_PRONOUNS:
        return ExpressionType.DISTRIBUTIVE_NP if multiword_nominal else ExpressionType.DISTRIBUTIVE_PRONOUN
    if first in INDEFINITE_ADJECTIVES:
        return ExpressionType.DEMONSTRATIVE_NP
    if first in INDEFINITE_PRONOUNS:
        return ExpressionType.INDEFINITE_NP if multiword_nominal else ExpressionType.INDEFINITE_PRONOUN
    if first in PERSONAL_PRONOUNS:
        return ExpressionType.PERSONAL_PRONOUN
    if first in POSSESSIVE_PRONOUNS:
        return ExpressionType.POSSESSIVE_PRONOUN
    if first in WH_RELATIVE_PRONOUNS:
        return ExpressionType.RELATIVE_PRONOUN
    if surf.contains_lemma("that"):
        if surf.is_nominal:
            return ExpressionType.DEMONSTRATIVE_NP
        if surf.words[-1].lemma.lower() == "that":
            return ExpressionType.DEMONSTRATIVE_PRONOUN
        return ExpressionType.RELATIVE_PRONOUN
    text = surf.text.lower()
    if any(p in text for p in RECIPROCAL_PRONOUNS):
        return ExpressionType.RECIPROCAL_PRONOUN
    return ExpressionType.ZERO_ARTICLE_NP
