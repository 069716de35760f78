"""
Candidate filters that prune the referent candidates of a mention.

Every filter is a pure function of its input list: it returns a new list and
never mutates the one it was given.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..core.registry import CANDIDATE_FILTER, component
from ..core.types import (WINDOW_ALL, WINDOW_SECTION, WINDOW_SENTENCE, CoreferenceType,
                          ExpressionType, SearchDirection)
from ..core.utils import has_non_coreferential_semantics
from ..expressions.recognizers import is_reflexive
from ..ling import dependency as deps
from ..ling.appositive import exemplifies
from ..ling.discourse import same_section, within_n_sentences
from ..ling.document import SurfaceElement
from ..ling.semantics import (Conjunction, Entity, Expression, Predicate, Relation,
                              SemanticItem, Term)
from ..ling.span import at_left, overlap

logger = logging.getLogger(__name__)

SEMANTIC_CLASSES = {
    "Entity": Entity,
    "Expression": Expression,
    "Relation": Relation,
    "Conjunction": Conjunction,
    "Predicate": Predicate,
    "Term": Term,
    "SemanticItem": SemanticItem,
}

DEFAULT_SEMANTIC_CLASSES = (Entity, Expression, Relation, Conjunction)


def union(first: Sequence[SurfaceElement], second: Sequence[SurfaceElement]) -> List[SurfaceElement]:
    """Elements of either list, first list's order first, without duplicates."""
    out: List[SurfaceElement] = []
    for surf in list(first) + list(second):
        if not any(surf is o for o in out):
            out.append(surf)
    return out


def intersect(first: Sequence[SurfaceElement], second: Sequence[SurfaceElement]) -> List[SurfaceElement]:
    return [s for s in first if any(s is o for o in second)]


def subtract(first: Sequence[SurfaceElement], second: Sequence[SurfaceElement]) -> List[SurfaceElement]:
    return [s for s in first if not any(s is o for o in second)]


class CandidateFilter(ABC):
    """Abstract base class for candidate filters"""

    @abstractmethod
    def filter(self, exp: SurfaceElement, coref_type: CoreferenceType, exp_type: ExpressionType,
               candidates: Optional[List[SurfaceElement]], context=None) -> List[SurfaceElement]:
        """Return the candidates that pass this filter"""
        pass

    def __repr__(self) -> str:
        return getattr(self, "_component_name", type(self).__name__)


@component(name="PriorDiscourse", kind=CANDIDATE_FILTER)
class PriorDiscourseFilter(CandidateFilter):
    """Keeps candidates that end before the mention begins"""

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        if coref_type.search_direction is SearchDirection.FORWARD:
            logger.warning("Searching forward and PriorDiscourseFilter are incompatible.")
            return []
        return [c for c in candidates if at_left(c.span, exp.span)]


@component(name="SubsequentDiscourse", kind=CANDIDATE_FILTER)
class SubsequentDiscourseFilter(CandidateFilter):
    """Keeps candidates that begin after the mention ends"""

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        if coref_type.search_direction is SearchDirection.BACKWARD:
            logger.warning("Searching backward and SubsequentDiscourseFilter are incompatible.")
            return []
        return [c for c in candidates if c is not exp and at_left(exp.span, c.span)]


@component(name="SameSentence", kind=CANDIDATE_FILTER)
class SameSentenceFilter(CandidateFilter):
    """Keeps candidates in the mention's sentence that do not overlap it"""

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        if coref_type.search_direction is not SearchDirection.BOTH:
            logger.warning("Searching one direction only and SameSentenceFilter are incompatible.")
            return []
        return [c for c in candidates
                if c is not exp and not overlap(c.span, exp.span) and c.sentence is exp.sentence]


@component(name="WindowSize", kind=CANDIDATE_FILTER)
class WindowSizeFilter(CandidateFilter):
    """
    Keeps candidates within a window of sentences around the mention.

    The window is a sentence count, or one of the sentinels ``WINDOW_ALL``,
    ``WINDOW_SECTION`` and ``WINDOW_SENTENCE``.
    """

    def __init__(self, window_size: int):
        self.window_size = int(window_size)

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        exp_sent = exp.sentence
        out = []
        for cand in candidates:
            if cand is exp or overlap(cand.span, exp.span):
                continue
            cand_sent = cand.sentence
            if (self.window_size == WINDOW_ALL
                    or (self.window_size == WINDOW_SECTION and same_section(exp_sent, cand_sent))
                    or (self.window_size == WINDOW_SENTENCE and cand_sent is exp_sent)
                    or within_n_sentences(exp_sent, cand_sent, self.window_size)):
                out.append(cand)
        return out

    def __repr__(self) -> str:
        return f"WindowSize({self.window_size})"


@component(name="SyntaxBased", kind=CANDIDATE_FILTER)
class SyntaxBasedCandidateFilter(CandidateFilter):
    """
    Drops same-sentence candidates that are syntactically linked to the mention.

    "The drug inhibits it": "drug" is the subject and "it" the object of the
    same verb, so the two cannot corefer.
    """

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        if coref_type in (CoreferenceType.APPOSITIVE, CoreferenceType.PREDICATE_NOMINATIVE,
                          CoreferenceType.ONTOLOGICAL):
            logger.warning(f"{coref_type.value} and SyntaxBasedCandidateFilter are incompatible.")
            return list(candidates)
        if exp_type is ExpressionType.RELATIVE_PRONOUN:
            logger.warning("Relative pronouns and SyntaxBasedCandidateFilter are incompatible.")
            return list(candidates)
        if is_reflexive(exp):
            logger.warning("Reflexive pronouns and SyntaxBasedCandidateFilter are incompatible.")
            return list(candidates)

        exp_sent = exp.sentence
        out = []
        for cand in candidates:
            if cand.sentence is exp_sent:
                path = deps.find_dependency_path(exp_sent.dependencies, exp, cand, directed=False)
                if path is not None:
                    logger.debug(f"Path from mention to candidate: {'->'.join(repr(d) for d in path)}")
                if possible_syntactic_path(path):
                    continue
            out.append(cand)
        return out


def possible_syntactic_path(path: Optional[List[deps.SynDependency]]) -> bool:
    """True if a dependency path links its ends too closely for coreference."""
    if path is None:
        return False
    if verbal_indicator_path(path) or nominal_indicator_path(path):
        return True
    appos = deps.dependencies_with_types(path, deps.APPOS_DEPENDENCIES)
    if len(path) > 2 or (len(path) > 1 and not appos):
        return False
    for dep in path:
        if any(dep is a for a in appos):
            continue
        t = dep.type
        if ("obj" in t or "subj" in t or t.startswith("prep") or t == "cc"
                or t in deps.NP_INTERNAL_DEPENDENCIES):
            continue
        return False
    return True


def verbal_indicator_path(path: List[deps.SynDependency]) -> bool:
    # subject on one side of the verb, object or prepositional phrase on the other
    obj_dep = False
    subj_dep = False
    for dep in path:
        t = dep.type
        if "obj" in t or "prep" in t:
            obj_dep = True
        elif "subj" in t:
            subj_dep = True
        else:
            return False
    return len(path) == 2 and obj_dep and subj_dep


def nominal_indicator_path(path: List[deps.SynDependency]) -> bool:
    for dep in path:
        t = dep.type
        if not ("prep" in t or t in deps.NP_INTERNAL_DEPENDENCIES):
            return False
    return len(path) == 2


@component(name="SemanticClass", kind=CANDIDATE_FILTER)
class SemanticClassFilter(CandidateFilter):
    """Keeps candidates with a semantic item of one of the given classes"""

    def __init__(self, classes: Sequence = DEFAULT_SEMANTIC_CLASSES):
        resolved = []
        for cls in classes:
            if isinstance(cls, str):
                if cls not in SEMANTIC_CLASSES:
                    raise ValueError(f"Unknown semantic class: {cls}")
                cls = SEMANTIC_CLASSES[cls]
            resolved.append(cls)
        self.classes = tuple(resolved)

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        out = []
        for cand in candidates:
            for sem in cand.semantics:
                if isinstance(sem, Expression) and sem.type == ExpressionType.RELATIVE_PRONOUN.value:
                    continue
                if isinstance(sem, self.classes):
                    out.append(cand)
                    break
        return out


@component(name="SemanticType", kind=CANDIDATE_FILTER)
class SemanticTypeFilter(CandidateFilter):
    """
    Keeps candidates with a semantic item of one of the given semantic types.

    With no types given, every semantic type of the domain vocabulary is
    allowed. An empty type list lets every candidate through.
    """

    def __init__(self, semantic_types: Optional[Sequence[str]] = None):
        self.semantic_types = list(semantic_types) if semantic_types is not None else None

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        semantic_types = self.semantic_types
        if semantic_types is None:
            semantic_types = context.vocabulary.all_semtypes() if context is not None else []
        if not semantic_types:
            return list(candidates)
        out = []
        for cand in candidates:
            for sem in cand.semantics:
                if sem.type in semantic_types or any(s in semantic_types for s in sem.all_semtypes()):
                    out.append(cand)
                    break
        return out


@component(name="NounPhrase", kind=CANDIDATE_FILTER)
class NounPhraseFilter(CandidateFilter):
    """Keeps nominal candidates"""

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        return [c for c in candidates if c.is_nominal]


@component(name="VerbPhrase", kind=CANDIDATE_FILTER)
class VerbPhraseFilter(CandidateFilter):
    """Keeps verbal candidates that carry no entities"""

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        return [c for c in candidates if not c.entities() and c.is_verbal]


@component(name="Default", kind=CANDIDATE_FILTER)
class DefaultCandidateFilter(CandidateFilter):
    """
    Candidates with semantics or nominal candidates, minus verbal ones.

    Computed as ``(SemanticClass ∪ NounPhrase) \\ VerbPhrase``. The order
    follows the semantic class filter output, then the noun phrase output.
    """

    def __init__(self):
        self.semantic_class_filter = SemanticClassFilter(DEFAULT_SEMANTIC_CLASSES)
        self.noun_phrase_filter = NounPhraseFilter()
        self.verb_phrase_filter = VerbPhraseFilter()

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        with_semantics = self.semantic_class_filter.filter(exp, coref_type, exp_type, candidates, context)
        nominal = self.noun_phrase_filter.filter(exp, coref_type, exp_type, candidates, context)
        verbal = self.verb_phrase_filter.filter(exp, coref_type, exp_type, candidates, context)
        return subtract(union(with_semantics, nominal), verbal)


@component(name="HasSemantics", kind=CANDIDATE_FILTER)
class HasSemanticsFilter(CandidateFilter):
    """Keeps candidates with semantics other than mentions"""

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        return [c for c in candidates if has_non_coreferential_semantics(c)]


@component(name="Exemplification", kind=CANDIDATE_FILTER)
class ExemplificationFilter(CandidateFilter):
    """Drops candidates that are examples of an earlier element ("drugs such as aspirin")"""

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        return [c for c in candidates if not exemplifies(c)]


@component(name="SingletonMention", kind=CANDIDATE_FILTER)
class SingletonMentionFilter(CandidateFilter):
    """Drops mention candidates that belong to no chain yet"""

    def filter(self, exp, coref_type, exp_type, candidates, context=None):
        if not candidates:
            return []
        out = []
        for cand in candidates:
            if cand.expressions():
                if context is None or not context.chains.chains_with_mention(cand):
                    continue
            out.append(cand)
        return out
