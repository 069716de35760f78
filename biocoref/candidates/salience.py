"""
Salience heuristics that break ties among equally scored candidates
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from ..ling.appositive import corresponding_subtree
from ..ling.conjunction import is_conjunction_argument
from ..ling.document import SPAN_ORDER, SurfaceElement
from ..ling.span import at_left, subsume
from ..ling.tree import ParseTree

logger = logging.getLogger(__name__)


class SalienceType(str, Enum):
    """Tie-breaking heuristics. The values are the names used in configuration files."""
    PROXIMITY = "LinearDistance"
    PARSE_TREE = "GraphDistance"
    FREQ_COUNT = "FreqCount"
    FIRST_TERM = "FirstTerm"
    FOCUS_TERM = "FocusTerm"

    @classmethod
    def from_name(cls, name: str) -> "SalienceType":
        """Accept either the configuration value or the member name ("Proximity", "ParseTree")."""
        for member in cls:
            if name in (member.value, member.name, member.name.title().replace("_", "")):
                return member
        raise ValueError(f"Unknown salience type: {name}")

    def salience(self, exp: SurfaceElement, candidates: List[SurfaceElement], context=None) -> List[SurfaceElement]:
        return _SALIENCE_FUNCTIONS[self](exp, candidates, context)


def linear_distance_salience(exp: SurfaceElement, candidates: List[SurfaceElement], context=None) -> List[SurfaceElement]:
    """
    Pick the candidate closest to the mention in text.

    If the mention precedes every candidate, the first candidate is closest,
    otherwise the last. A candidate that subsumes the pick, or coordinates it,
    then takes its place.
    """
    if not candidates:
        return []
    ordered = sorted(candidates, key=SPAN_ORDER)
    # assume cataphora when the mention precedes all candidates
    if at_left(exp.span, ordered[0].span):
        closest = ordered[0]
    else:
        closest = ordered[-1]
    return [subsuming_surface_element(ordered, closest)]


def subsuming_surface_element(candidates: List[SurfaceElement], subsumed: SurfaceElement) -> SurfaceElement:
    if len(candidates) == 1 and candidates[0] is subsumed:
        return subsumed
    # rescan until no candidate subsumes the current one
    subsuming = subsumed
    visited = [subsumed]
    changed = True
    while changed:
        changed = False
        for cand in candidates:
            if any(cand is v for v in visited):
                continue
            if subsume(cand.span, subsuming.span) or is_conjunction_argument(cand, subsuming):
                subsuming = cand
                visited.append(cand)
                changed = True
    return subsuming


def frequency_count_salience(exp: SurfaceElement, candidates: List[SurfaceElement], context=None) -> List[SurfaceElement]:
    """
    Pick a candidate by ontology concept.

    Concepts are visited in the order the document counts them, and the first
    candidate carrying the first matching concept wins. The counts themselves
    are not compared.
    """
    if not candidates:
        return []
    if context is not None:
        counts = context.ontology_counts()
    else:
        counts = exp.document.ontology_counts()
    for concept_id in counts:
        for cand in candidates:
            for sem in cand.semantics:
                concept = sem.ontology
                if concept is not None and concept.id == concept_id:
                    return [cand]
    return []


def first_term_salience(exp: SurfaceElement, candidates: List[SurfaceElement], context=None) -> List[SurfaceElement]:
    if not candidates:
        return []
    return [sorted(candidates, key=SPAN_ORDER)[0]]


def focus_term_salience(exp: SurfaceElement, candidates: List[SurfaceElement], context=None) -> List[SurfaceElement]:
    # no focus detection yet, same as the first term
    return first_term_salience(exp, candidates, context)


def graph_distance_salience(exp: SurfaceElement, candidates: List[SurfaceElement], context=None) -> List[SurfaceElement]:
    """
    Pick the candidate closest to the mention in the parse tree.

    Within a sentence the distance is the number of nodes on the tree path.
    Across sentences it is the depth of both nodes plus twice the sentence
    distance. Ties go to the candidate nearest its sentence root, then to the
    latest sentence, then to the leftmost candidate.
    """
    exp_sent = exp.sentence
    if exp_sent is None or exp_sent.tree is None:
        return []
    exp_tree = corresponding_subtree(exp)
    if exp_tree is None:
        return []
    exp_index = exp_sent.index
    exp_root_distance = exp_tree.depth_nodes()

    tree_distances: Dict[int, int] = {}
    root_distances: Dict[int, int] = {}
    scored: List[SurfaceElement] = []
    for cand in candidates:
        cand_tree = _head_subtree(cand)
        if cand_tree is None:
            continue
        cand_root_distance = cand_tree.depth_nodes()
        cand_index = cand.sentence.index
        if cand_index == exp_index:
            distance = len(ParseTree.path_nodes(cand_tree, exp_tree))
        else:
            distance = exp_root_distance + cand_root_distance + 2 * abs(exp_index - cand_index)
        tree_distances[id(cand)] = distance
        root_distances[id(cand)] = cand_root_distance
        scored.append(cand)
        logger.debug(f"Parse tree distance for the candidate is {distance}: {cand}")
    if not scored:
        return []

    shortest = min(tree_distances[id(s)] for s in scored)
    closest = [s for s in scored if tree_distances[id(s)] == shortest]
    if len(closest) == 1:
        return closest

    shortest_to_root = min(root_distances[id(s)] for s in closest)
    closest = [s for s in closest if root_distances[id(s)] == shortest_to_root]
    if len(closest) == 1:
        return closest

    latest = max(s.sentence.index for s in closest)
    closest = [s for s in closest if s.sentence.index == latest]
    leftmost: Optional[SurfaceElement] = None
    for cand in closest:
        if leftmost is None or at_left(cand.span, leftmost.span):
            leftmost = cand
    logger.debug(f"Closest referent by the parse tree: {leftmost}")
    return [leftmost]


def _head_subtree(surf: SurfaceElement) -> Optional[ParseTree]:
    sentence = surf.sentence
    if sentence is None or sentence.tree is None:
        return None
    return sentence.tree.covering_node([surf.head.index])


_SALIENCE_FUNCTIONS = {
    SalienceType.PROXIMITY: linear_distance_salience,
    SalienceType.PARSE_TREE: graph_distance_salience,
    SalienceType.FREQ_COUNT: frequency_count_salience,
    SalienceType.FIRST_TERM: first_term_salience,
    SalienceType.FOCUS_TERM: focus_term_salience,
}
