"""
Syntactic agreements: adjacency, appositives, predicate nominatives and relative clauses
"""

import logging
from typing import List

from ..core.registry import AGREEMENT, component
from ..core.types import PRONOMINAL_TYPES, CoreferenceType, ExpressionType
from ..ling import dependency as deps
from ..ling.appositive import syntactic_appositive
from ..ling.conjunction import conjunct_surface_elements, conjunctions, get_conjuncts, is_conjunction_argument
from ..ling.discourse import same_sentence
from ..ling.document import SurfaceElement
from ..ling.semantics import SemanticItem
from ..ling.span import Span, at_left
from .base import Agreement
from .morphosyntactic import Number, number

logger = logging.getLogger(__name__)

SENTENCE_INITIAL_DISCOURSE_CONNECTIVES = ("because", "although", "since")


def intervening(first: SurfaceElement, second: SurfaceElement) -> List[SurfaceElement]:
    """Surface elements of the first element's sentence strictly between the two."""
    if first.sentence is None:
        return []
    if at_left(first.span, second.span):
        gap = Span(first.span.end, second.span.begin)
    elif at_left(second.span, first.span):
        gap = Span(second.span.end, first.span.begin)
    else:
        return []
    return first.sentence.surface_elements_from_span(gap)


def _word_like(surf: SurfaceElement) -> bool:
    return surf.is_alphanumeric and not surf.is_prepositional


def _conjuncts_stay_left(exp: SurfaceElement, referent: SurfaceElement, matched: SurfaceElement,
                         rcmods: List[deps.SynDependency]) -> bool:
    """
    The other conjuncts of ``referent`` all precede ``exp`` and none of them
    has its own relative clause before ``exp``.
    """
    args = conjunct_surface_elements(referent)
    if len(args) < 2:
        return False
    for arg in args:
        if arg is matched:
            continue
        if at_left(exp.span, arg.span):
            return False
        for dep in deps.out_dependencies(arg, rcmods):
            if at_left(dep.dependent.span, exp.span):
                return False
    return True


@component(name="Adjacency", kind=AGREEMENT)
class AdjacencyAgreement(Agreement):
    """
    Nothing but punctuation and prepositions separates the mention from the candidate.

    A coordinated candidate is adjacent when its last conjunct is, as in
    "IL-2 and IL-4, which", unless a relative pronoun already intervenes
    between an earlier conjunct and the coordination.
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        surfs = intervening(exp, referent)
        if not any(_word_like(s) for s in surfs):
            return True
        sentence = exp.sentence
        for surf in reversed(surfs):
            if is_conjunction_argument(referent, surf):
                args = conjunct_surface_elements(referent)
                if len(args) < 2:
                    return False
                for arg in args:
                    if arg is surf:
                        continue
                    if at_left(exp.span, arg.span):
                        return False
                    if arg.span.end < referent.span.begin:
                        between = sentence.surface_elements_from_span(Span(arg.span.end, referent.span.begin))
                        if any(s.is_relative_pronoun for s in between):
                            return False
                return True
            if _word_like(surf):
                return False
        return False


@component(name="SyntacticAppositive", kind=AGREEMENT)
class SyntacticAppositiveAgreement(Agreement):
    """
    The mention and the candidate form an appositive construction.

    A plural mention may stand in apposition to a coordination, either
    through one of its conjuncts or by being separated from it only by a
    comma or an opening parenthesis.
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        plural = number(exp, context) is Number.PLURAL
        if not conjunctions(referent):
            if not plural:
                return syntactic_appositive(exp, referent)
            for arg in get_conjuncts(referent):
                if syntactic_appositive(exp, arg) or self.adjacent(exp, referent):
                    return True
            return False
        if plural:
            for arg in conjunct_surface_elements(referent):
                if syntactic_appositive(exp, arg) or self.adjacent(exp, referent):
                    return True
        return False

    @staticmethod
    def adjacent(first: SurfaceElement, second: SurfaceElement) -> bool:
        if any(c is second for c in get_conjuncts(first)):
            return False
        if conjunctions(second):
            args = conjunct_surface_elements(second)
            if any(a is first for a in args):
                return False
            return any(only_comma_or_parenthesis(first, arg) for arg in args)
        return only_comma_or_parenthesis(first, second)


def only_comma_or_parenthesis(first: SurfaceElement, second: SurfaceElement) -> bool:
    if not same_sentence(first, second):
        return False
    surfs = intervening(first, second)
    if not surfs:
        return False
    for surf in surfs:
        if surf.is_alphanumeric:
            return False
        if surf.text not in (",", "("):
            return False
    return True


@component(name="PredicateNominative", kind=AGREEMENT)
class PredicateNominativeAgreement(Agreement):
    """
    The two elements are linked by a copula ("X is a Y").

    The copular construction is read from the dependencies first. Failing
    that, a single intervening form of "be" is accepted. A coordinated
    candidate agrees if any of its conjuncts does.
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if conjunctions(referent):
            targets = conjunct_surface_elements(referent)
        else:
            targets = [referent]
        if any(self.copular_dependency(exp, t) for t in targets):
            return True
        return any(self.only_copula_intervenes(exp, t) for t in targets)

    @staticmethod
    def copular_dependency(first: SurfaceElement, second: SurfaceElement) -> bool:
        if first.sentence is None:
            return False
        left, right = (first, second) if at_left(first.span, second.span) else (second, first)
        embeddings = first.sentence.dependencies
        if not deps.out_dependencies_with_types(right, embeddings, ["cop"]):
            return False
        if deps.out_dependencies_with_types(right, embeddings, ["neg"]):
            return False
        subjects = deps.out_dependencies_with_types(right, embeddings, ["nsubj", "csubj", "xsubj"])
        return any(d.dependent is left for d in subjects)

    @staticmethod
    def only_copula_intervenes(first: SurfaceElement, second: SurfaceElement) -> bool:
        surfs = intervening(first, second)
        if len(surfs) != 1:
            return False
        return surfs[0].contains_lemma("be")


@component(name="RelativePronDependency", kind=AGREEMENT)
class RelativePronDependencyAgreement(Agreement):
    """The relative pronoun is the subject of a clause modifying the candidate"""

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if exp_type is not ExpressionType.RELATIVE_PRONOUN:
            return False
        embeddings = exp.dependencies
        for subj in deps.in_dependencies_with_types(exp, embeddings, ["nsubj", "csubj"], exact=False):
            clause = subj.governor
            rcmods = deps.in_dependencies_with_types(clause, embeddings, ["rcmod"])
            if rcmods and deps.out_dependencies_with_types(referent, rcmods, ["rcmod"]):
                return True
            for rcmod in rcmods:
                if is_conjunction_argument(referent, rcmod.governor):
                    return _conjuncts_stay_left(exp, referent, rcmod.governor, rcmods)
        return False


@component(name="ClosestRCMOD", kind=AGREEMENT)
class ClosestRCMODAgreement(Agreement):
    """The candidate is the closest noun to the left modified by a relative clause containing the mention"""

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if exp.sentence is None:
            return False
        rcmods = deps.dependencies_with_types(exp.sentence.dependencies, ["rcmod"])
        closest = None
        for dep in rcmods:
            if at_left(dep.dependent.span, exp.span):
                continue
            if at_left(exp.span, dep.governor.span):
                continue
            if closest is None or at_left(closest.span, dep.governor.span):
                closest = dep.governor
        if closest is None:
            return False
        if closest is referent:
            return True
        if is_conjunction_argument(referent, closest):
            return _conjuncts_stay_left(exp, referent, closest, rcmods)
        return False


@component(name="DiscourseConnective", kind=AGREEMENT)
class DiscourseConnectiveAgreement(Agreement):
    """
    Cataphoric pronoun in a subordinate clause opened by a discourse connective.

    As in "Because it binds DNA, p53 ...": the sentence starts with a
    connective, nothing semantic precedes the pronoun in the clause, and a
    comma separates the pronoun from the candidate.
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if exp_type not in PRONOMINAL_TYPES or coref_type is not CoreferenceType.CATAPHORA:
            return False
        if not same_sentence(exp, referent):
            return False
        sentence = exp.sentence
        if len(sentence.words) < 4:
            return False
        if sentence.words[0].text.lower() not in SENTENCE_INITIAL_DISCOURSE_CONNECTIVES:
            return False
        clause_begin = sentence.words[1].span.begin
        if clause_begin < exp.span.begin:
            before: List[SemanticItem] = sentence.document.semantic_items_in_span(
                SemanticItem, Span(clause_begin, exp.span.begin))
            if before:
                return False
        if exp.span.end >= referent.span.begin:
            return False
        between = sentence.surface_elements_from_span(Span(exp.span.end, referent.span.begin))
        return any(s.text == "," for s in between)


@component(name="KeyValuePair", kind=AGREEMENT)
class KeyValuePairAgreement(Agreement):
    """
    The candidate is a field label directly followed by a colon, as in
    "Diagnosis: pneumonia" in clinical notes.
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if exp_type in PRONOMINAL_TYPES:
            return False
        doc = exp.document
        if doc is None or referent.span.end >= exp.span.begin:
            return False
        surfs = doc.surface_elements_in_span(Span(referent.span.end, exp.span.begin))
        return len(surfs) == 1 and surfs[0].contains_token(":")
