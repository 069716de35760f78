"""
Semantic agreements driven by the domain vocabulary and ontology concepts
"""

import logging
from typing import Dict, List, Sequence

from ..core.registry import AGREEMENT, component
from ..core.types import CoreferenceType, ExpressionType
from ..core.utils import has_non_coreferential_semantics, non_coreferential_head_semantics
from ..ling.conjunction import (conjunct_surface_elements, conjunction_arguments, conjunction_semantic_types,
                                conjunctions)
from ..ling.document import SurfaceElement
from ..ling.semantics import Entity, Expression, SemanticItem, Term
from ..ling.semutils import (conj_sem_group_equality, conj_sem_type_equality, matching_sem_group,
                             sem_type_equality, semantic_groups)
from .base import Agreement, vocabulary_of

logger = logging.getLogger(__name__)

GENERAL_ANAPHORIC_HYPERNYMS = ("former", "latter")
GENERAL_CATAPHORIC_HYPERNYMS = ("following",)


def _conjunction_or_head_semantics(surf: SurfaceElement) -> List[SemanticItem]:
    conjs = conjunctions(surf)
    if conjs:
        return conjs[0].argument_items()
    return surf.head_semantics()


def _shares_semtype(item: SemanticItem, semtypes: Sequence[str]) -> bool:
    return any(s in semtypes for s in item.all_semtypes())


@component(name="HypernymList", kind=AGREEMENT)
class HypernymListAgreement(Agreement):
    """
    The mention contains a hypernym whose semantic group matches the candidate.

    "the drug" agrees with "aspirin" when "drug" is a DRUG hypernym and
    aspirin carries a DRUG semantic type. "the former" and "the following"
    agree with anything for anaphora and cataphora respectively.
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if (coref_type in (CoreferenceType.PREDICATE_NOMINATIVE, CoreferenceType.APPOSITIVE)
                and not has_non_coreferential_semantics(referent)):
            return False
        if coref_type is CoreferenceType.CATAPHORA:
            if referent.expressions():
                return False
            if exp.head.lemma in GENERAL_CATAPHORIC_HYPERNYMS:
                return True
        if coref_type is CoreferenceType.ANAPHORA and exp.head.lemma in GENERAL_ANAPHORIC_HYPERNYMS:
            return True

        sems = _conjunction_or_head_semantics(referent)
        if not sems:
            return False
        vocabulary = vocabulary_of(context)
        referent_head = referent.head.lemma.lower()
        for group, hypernyms in vocabulary.hypernyms.items():
            semtypes = vocabulary.semtypes.get(group, [])
            if not any(exp.contains_lemma(h) for h in hypernyms):
                continue
            for sem in sems:
                if _shares_semtype(sem, semtypes) or referent_head in hypernyms:
                    logger.debug(f"Hypernym agreement in group {group}: {exp.text} -> {referent.text}")
                    return True
        return False


@component(name="SemanticCoercion", kind=AGREEMENT)
class SemanticCoercionAgreement(Agreement):
    """
    A possessive pronoun whose possessed noun is an event or a part of the candidate's type.

    As in "p53 ... its expression" or "the receptor ... its promoter".
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if exp_type is not ExpressionType.POSSESSIVE_PRONOUN:
            return False
        conjs = conjunctions(referent)
        sems = conjs[0].argument_items() if conjs else list(referent.semantics)
        if not sems:
            return False
        vocabulary = vocabulary_of(context)
        return (can_be_coerced(vocabulary.event_triggers, vocabulary.semtypes, exp, sems)
                or can_be_coerced(vocabulary.meronyms, vocabulary.semtypes, exp, sems))


def can_be_coerced(word_lists: Dict[str, List[str]], semtypes: Dict[str, List[str]],
                   exp: SurfaceElement, sems: Sequence[SemanticItem]) -> bool:
    for group, words in word_lists.items():
        group_types = semtypes.get(group, [])
        if not any(exp.contains_lemma(w) for w in words):
            continue
        if any(_shares_semtype(sem, group_types) for sem in sems):
            return True
    return False


@component(name="SemanticType", kind=AGREEMENT)
class SemanticTypeAgreement(Agreement):
    """Both elements share a semantic type, or every conjunct of the candidate does"""

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if not exp.has_semantics() or not referent.has_semantics():
            return False
        if sem_type_equality(exp, referent):
            return True
        conjs = conjunctions(referent)
        if conjs:
            return conj_sem_type_equality(exp.semantics, conjunction_semantic_types(conjs[0]))
        return False


@component(name="SemanticGroup", kind=AGREEMENT)
class SemanticGroupAgreement(Agreement):
    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if not exp.has_semantics() or not referent.has_semantics():
            return False
        groups = vocabulary_of(context).semantic_groups
        if matching_sem_group(exp, referent, groups) is not None:
            return True
        conjs = conjunctions(referent)
        if conjs:
            return conj_sem_group_equality(exp.semantics, conjunction_semantic_groups(conjs[0], groups), groups)
        return False


def conjunction_semantic_groups(conj, groups: Dict[str, List[str]]) -> List[str]:
    """Semantic groups shared by every conjunct."""
    items = conj.argument_items()
    if not items:
        return []
    common = semantic_groups(items[0], groups)
    for item in items[1:]:
        others = semantic_groups(item, groups)
        common = [g for g in common if g in others]
    return common


@component(name="Ontology", kind=AGREEMENT)
class OntologyAgreement(Agreement):
    """Both elements are normalized to the same ontology concept"""

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        doc = exp.document
        if doc is None:
            return False
        return any(m is referent for m in doc.ontology_matches(exp))


@component(name="Taxonomy", kind=AGREEMENT)
class TaxonomyAgreement(Agreement):
    """
    A concept of the candidate descends from a concept of the mention.

    Every concept of an entity is tried, not only its active sense. A
    coordinated candidate agrees through any of its conjuncts.
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        return self.hierarchical(referent, exp, context)

    def hierarchical(self, descendant: SurfaceElement, ancestor: SurfaceElement, context=None) -> bool:
        vocabulary = vocabulary_of(context)
        desc_entities = [s for s in non_coreferential_head_semantics(descendant) if isinstance(s, Entity)]
        anc_entities = [s for s in non_coreferential_head_semantics(ancestor) if isinstance(s, Entity)]
        if not anc_entities:
            return False
        if not desc_entities:
            for conj in conjunction_arguments(descendant):
                if not isinstance(conj, Entity) or isinstance(conj, Expression):
                    continue
                if conj.surface_element is descendant:
                    continue
                if self.hierarchical(conj.surface_element, ancestor, context):
                    return True
            return False
        for desc in desc_entities:
            for desc_concept in desc.concepts:
                for anc in anc_entities:
                    for anc_concept in anc.concepts:
                        if vocabulary.is_descendant(desc_concept.id, anc_concept.id):
                            return True
        return False


@component(name="DocumentTopic", kind=AGREEMENT)
class DocumentTopicAgreement(Agreement):
    """
    Indefinite noun phrases do not refer to a topic of the document.

    Other mention types always agree. Topics are concept ids or upper-cased
    term strings.
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if exp_type is not ExpressionType.INDEFINITE_NP:
            return True
        if conjunctions(referent):
            return not any(has_topic(s) for s in conjunct_surface_elements(referent))
        return not has_topic(referent)


def has_topic(surf: SurfaceElement) -> bool:
    doc = surf.document
    if doc is None or not doc.topics:
        return False
    for sem in surf.semantics:
        concept = sem.ontology
        if concept is not None and concept.id in doc.topics:
            return True
        if isinstance(sem, Term) and sem.text.upper() in doc.topics:
            return True
    return False
