"""
Helpers shared by the filters, agreements and chain generation
"""

import logging
from typing import List, Optional

from ..ling import dependency as deps
from ..ling.document import Document, SurfaceElement
from ..ling.semantics import Expression, Relation, SemanticItem, Term
from ..ling.span import Span, at_left
from .types import NOMINAL_TYPES, PRONOMINAL_TYPES, CoreferenceType, ExpressionType, SearchDirection, nominal_expression

logger = logging.getLogger(__name__)


def non_coreferential_semantics(surf: SurfaceElement) -> List[SemanticItem]:
    """Semantic items of ``surf`` other than mentions."""
    return [s for s in surf.semantics if not isinstance(s, Expression)]


def has_non_coreferential_semantics(surf: SurfaceElement) -> bool:
    return len(non_coreferential_semantics(surf)) > 0


def non_coreferential_head_semantics(surf: SurfaceElement) -> List[SemanticItem]:
    non_coref = non_coreferential_semantics(surf)
    return [s for s in surf.head_semantics() if any(s is n for n in non_coref)]


def pronoun_token(surf: Optional[SurfaceElement]) -> Optional[str]:
    """The first pronoun of ``surf``, lowercased."""
    if surf is None:
        return None
    for word in surf.words:
        if word.is_pronominal:
            return word.text.lower()
    return None


def determiner_token(surf: Optional[SurfaceElement]) -> Optional[str]:
    """The first determiner of ``surf``, lowercased."""
    if surf is None:
        return None
    for word in surf.words:
        if word.is_determiner:
            return word.text.lower()
    return None


def is_rigid_designator(exp_type: ExpressionType, surf: SurfaceElement) -> bool:
    """
    Check whether a noun phrase has a named entity in modifier position.

    Filters out noun phrases like "the TRADD protein", where TRADD is
    annotated as a term.

    Args:
        exp_type: Mention type of the noun phrase
        surf: The noun phrase

    Returns:
        True if a term sits in modifier position
    """
    if surf is None or surf.sentence is None:
        return False
    if exp_type not in NOMINAL_TYPES or not nominal_expression(surf):
        return False
    embeddings = surf.dependencies
    if not embeddings:
        return False
    np_deps = deps.out_dependencies_with_types(surf, embeddings, deps.NP_INTERNAL_DEPENDENCIES)
    if np_deps:
        return any(d.dependent.entities() for d in np_deps)

    # already chunked
    sentence = surf.sentence
    head_semantics = surf.head_semantics()
    for term in surf.terms():
        for head_sem in head_semantics:
            if term is head_sem:
                continue
            if at_left(term.span, head_sem.span):
                for word in sentence.words_in_span(term.span):
                    if word.is_adjectival or word.is_nominal:
                        return True
    return False


def is_modified(exp_type: ExpressionType, surf: SurfaceElement) -> bool:
    """True if the phrase is a rigid designator or has a relative clause or ``of`` modifier."""
    if exp_type in PRONOMINAL_TYPES:
        return False
    if is_rigid_designator(exp_type, surf):
        return True
    embeddings = surf.dependencies
    if not embeddings:
        return False
    out_deps = deps.out_dependencies(surf, embeddings)
    if deps.dependencies_with_types(out_deps, ["rcmod", "vmod"]):
        return True
    return len(deps.dependencies_with_types(out_deps, ["prep_of"])) > 0


def compatible_expression(exp_type: ExpressionType, surf: SurfaceElement) -> Optional[SemanticItem]:
    """The mention of ``surf`` that has the given type."""
    for sem in surf.semantics:
        if isinstance(sem, Expression) and sem.type == exp_type.value:
            return sem
    return None


def pleonastic_it(surf: SurfaceElement) -> bool:
    """
    Check for a pleonastic "it", as in "It is possible that ..." or "It seems that ...".

    The "it" must be the subject of a governor that takes a clausal complement.
    """
    if surf.text.lower() != "it":
        return False
    embeddings = surf.dependencies
    for dep in deps.in_dependencies_with_types(surf, embeddings, ["nsubj", "nsubjpass"]):
        if deps.out_dependencies_with_types(dep.governor, embeddings, ["ccomp", "xcomp", "infmod", "vmod"]):
            return True
    return False


def complementizer_that(surf: SurfaceElement) -> bool:
    if not surf.contains_lemma("that"):
        return False
    first = surf.words[0]
    if first.lemma.lower() != "that":
        return False
    return (first.pos.upper() == "WDT"
            or len(deps.in_dependencies_with_types(surf, surf.dependencies, ["complm", "mark"])) > 0)


def incompatible_direction(exp: SurfaceElement, sem: SemanticItem, coref_type: CoreferenceType) -> bool:
    """True if ``sem`` lies on the wrong side of ``exp`` for the coreference type."""
    direction = coref_type.search_direction
    if direction is SearchDirection.BOTH:
        return False
    return ((at_left(exp.span, sem.span) and direction is SearchDirection.BACKWARD)
            or (at_left(sem.span, exp.span) and direction is SearchDirection.FORWARD))


def closer_with_same_ontology(doc: Document, surf: SurfaceElement, item: SemanticItem) -> Optional[SemanticItem]:
    """
    Find an item with the same ontology concept as ``item`` but closer to ``surf``.

    Only elements between ``item`` and ``surf`` whose text contains the text
    of ``item`` are considered, and the last one wins.
    """
    if isinstance(item, Relation):
        logger.warning(f"Relation found where a term was expected: {item.short_string()}")
        return None
    if not isinstance(item, Term):
        return None
    begin = item.span.last.end
    end = surf.span.begin
    if begin >= end:
        return None
    text = item.text.lower()
    closer = None
    for candidate in doc.surface_elements_in_span(Span(begin, end)):
        if text in candidate.text.lower():
            closer = candidate
    if closer is None:
        return None
    for sem in closer.semantics:
        if sem.ontology_equals(item):
            return sem
    return None
