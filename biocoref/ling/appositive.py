"""
Appositive and exemplification detection.

Used both to keep appositively-resolved mentions out of anaphora resolution
and to score appositive coreference.
"""

import logging
from typing import Optional

from . import dependency as deps
from .conjunction import conjunct_surface_elements, get_conjuncts
from .document import SurfaceElement
from .span import Span, at_left
from .tree import ParseTree

logger = logging.getLogger(__name__)

EXEMPLI_GRATIA = "(e.g.,"


def corresponding_subtree(surf: SurfaceElement) -> Optional[ParseTree]:
    """Parse tree node for a surface element, if the sentence has a tree."""
    sentence = surf.sentence
    if sentence is None or sentence.tree is None:
        return None
    return sentence.tree.covering_node(w.index for w in surf.words)


def has_syntactic_appositives(surf: SurfaceElement) -> bool:
    return len(deps.surface_dependencies_with_types(surf, surf.dependencies, deps.APPOS_DEPENDENCIES)) > 0


def syntactic_appositive(first: SurfaceElement, second: SurfaceElement) -> bool:
    """
    Check whether two elements form a syntactic appositive.

    A direct dependency between them is required. It must be an appositive
    dependency, or the elements must be adjacent noun phrases with semantics,
    or they must form an "NP , NP" construction in the parse tree.
    """
    if first.sentence is None:
        return False
    between = deps.find_dependencies_between(first.dependencies, first, second, directed=False)
    if not between:
        return False
    if deps.dependencies_with_types(between, deps.APPOS_DEPENDENCIES):
        return True
    return adjacent_nps_with_semantics(first, second) or syntactic_appositive_from_tree(first, second)


def adjacent_nps_with_semantics(first: SurfaceElement, second: SurfaceElement) -> bool:
    if not first.is_nominal or not second.is_nominal:
        return False
    if not first.has_semantics() or not second.has_semantics():
        return False
    return len(first.document.intervening_surface_elements(first, second)) == 0


def syntactic_appositive_from_tree(first: SurfaceElement, second: SurfaceElement) -> bool:
    if first.sentence is not second.sentence:
        return False
    first_tree = corresponding_subtree(first)
    second_tree = corresponding_subtree(second)
    appositive = _appositive_construction(first_tree)
    return appositive is not None and appositive is second_tree


def _appositive_construction(node: Optional[ParseTree]) -> Optional[ParseTree]:
    if node is None or node.parent is None:
        return None
    parent = node.parent
    if len(parent.children) < 3:
        return None
    if parent.children[1].label != "," or parent.children[2].label != "NP":
        return None
    if any(child.label == "CC" for child in parent.children):
        return None
    return parent.children[2]


def exempli_gratia(surf: SurfaceElement) -> Optional[SurfaceElement]:
    """
    Find the element on the other side of an "(e.g.," from ``surf``.

    Only the two elements flanking the phrase are considered.
    """
    sentence = surf.sentence
    offset = sentence.text.find(EXEMPLI_GRATIA)
    if offset < 0:
        return None
    begin = offset + sentence.span.begin
    intervening = sentence.surface_elements_from_span(Span(begin, begin + len(EXEMPLI_GRATIA)))
    if not intervening:
        return None
    surfs = sentence.surface_elements
    paren_index = intervening[0].index
    comma_index = intervening[-1].index
    index = surf.index
    if index == paren_index - 1 and comma_index + 1 < len(surfs):
        return surfs[comma_index + 1]
    if index == comma_index + 1 and paren_index >= 1:
        return surfs[paren_index - 1]
    return None


def exempli_gratia_between(first: SurfaceElement, second: SurfaceElement) -> bool:
    if first.sentence is not second.sentence:
        return False
    other = exempli_gratia(first)
    if other is None:
        return False
    if other is second:
        return True
    if any(other is c for c in get_conjuncts(second)):
        return True
    return any(other is c for c in conjunct_surface_elements(second))


def exemplifies_element(first: SurfaceElement, second: SurfaceElement) -> bool:
    """True if ``first`` and ``second`` stand in an exemplification relation."""
    if exempli_gratia_between(first, second):
        return True
    between = deps.find_dependencies_between(first.dependencies, first, second, directed=False)
    if not between:
        return False
    return len(deps.dependencies_with_types(between, deps.EXEMPLIFY_DEPENDENCIES)) > 0


def exemplifies(surf: SurfaceElement) -> bool:
    """True if ``surf`` exemplifies some element to its left in the same sentence."""
    for other in surf.sentence.surface_elements:
        if other is surf or at_left(surf.span, other.span):
            continue
        if at_left(other.span, surf.span) and exemplifies_element(other, surf):
            return True
    return False
