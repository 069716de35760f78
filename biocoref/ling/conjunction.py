"""
Coordination helpers.

A coordination is represented by a ``Conjunction`` semantic item attached to
the surface element of the coordinating word ("and", "or"). Its arguments are
the semantic items of the conjuncts.
"""

from typing import List

from . import dependency as deps
from .document import SurfaceElement
from .semantics import Conjunction, SemanticItem, Term


def conjunctions(surf: SurfaceElement) -> List[SemanticItem]:
    """Conjunction items attached to ``surf``."""
    return surf.filter_semantics(Conjunction)


def conjunction_arguments(surf: SurfaceElement) -> List[SemanticItem]:
    """Semantic items of the conjuncts of every conjunction attached to ``surf``."""
    out: List[SemanticItem] = []
    for conj in conjunctions(surf):
        for item in conj.argument_items():
            if not any(item is o for o in out):
                out.append(item)
    return out


def conjunct_surface_elements(surf: SurfaceElement) -> List[SurfaceElement]:
    """Surface elements of the conjuncts of the conjunctions attached to ``surf``."""
    out: List[SurfaceElement] = []
    for item in conjunction_arguments(surf):
        if isinstance(item, Term) and not any(item.surface_element is o for o in out):
            out.append(item.surface_element)
    return out


def get_conjuncts(surf: SurfaceElement) -> List[SurfaceElement]:
    """Surface elements coordinated with ``surf`` through ``conj*`` dependencies."""
    out: List[SurfaceElement] = []
    for dep in deps.surface_dependencies_with_types(surf, surf.dependencies, ["conj"], exact=False):
        other = dep.dependent if dep.governor is surf else dep.governor
        if other is not surf and not any(other is o for o in out):
            out.append(other)
    return out


def is_conjunction_argument(conj_surf: SurfaceElement, surf: SurfaceElement) -> bool:
    """True if ``surf`` is one of the conjuncts of a conjunction on ``conj_surf``."""
    return any(s is surf for s in conjunct_surface_elements(conj_surf))


def conjunction_semantic_types(conj: Conjunction) -> List[str]:
    """Semantic types shared by every conjunct, in the first conjunct's order."""
    items = conj.argument_items()
    if not items:
        return []
    common = list(items[0].all_semtypes())
    for item in items[1:]:
        others = item.all_semtypes()
        common = [s for s in common if s in others]
    return common
