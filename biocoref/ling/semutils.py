"""
Semantic type and semantic group comparisons between items and surface elements
"""

from typing import Dict, List, Optional, Sequence

from .document import SurfaceElement
from .semantics import SemanticItem


def salient_semantics(surf: SurfaceElement, head_only: bool = True) -> List[SemanticItem]:
    if head_only:
        heads = surf.head_semantics()
        if heads:
            return heads
    return list(surf.semantics)


def semtypes_in_common(first: SemanticItem, second: SemanticItem) -> List[str]:
    others = second.all_semtypes()
    return [s for s in first.all_semtypes() if s in others]


def sem_type_equality(first: SurfaceElement, second: SurfaceElement, head_only: bool = True) -> bool:
    """True if the two elements share any semantic type."""
    if not first.has_semantics() or not second.has_semantics():
        return False
    for a in salient_semantics(first, head_only):
        for b in salient_semantics(second, head_only):
            if semtypes_in_common(b, a):
                return True
    return False


def sem_type_in_list(item: SemanticItem, semtypes: Sequence[str]) -> bool:
    return any(s in semtypes for s in item.all_semtypes())


def semantic_groups(item: SemanticItem, groups: Dict[str, List[str]]) -> List[str]:
    """Names of the semantic groups any of the item's semantic types belong to."""
    item_types = item.all_semtypes()
    return [name for name, types in groups.items() if any(t in item_types for t in types)]


def matching_sem_group(
    first: SurfaceElement,
    second: SurfaceElement,
    groups: Dict[str, List[str]],
    head_only: bool = True,
) -> Optional[str]:
    """The first semantic group two elements have in common, or None."""
    if not first.has_semantics() or not second.has_semantics():
        return None
    for a in salient_semantics(first, head_only):
        for b in salient_semantics(second, head_only):
            if a is b:
                continue
            b_groups = semantic_groups(b, groups)
            for group in semantic_groups(a, groups):
                if group in b_groups:
                    return group
    return None


def conj_sem_type_equality(items: Sequence[SemanticItem], semtypes: Sequence[str]) -> bool:
    """True if every item has a semantic type in ``semtypes``."""
    if not items:
        return False
    return all(sem_type_in_list(item, semtypes) for item in items)


def conj_sem_group_equality(items: Sequence[SemanticItem], group_names: Sequence[str],
                            groups: Dict[str, List[str]]) -> bool:
    """True if every item belongs to one of ``group_names``."""
    if not items:
        return False
    return all(any(g in group_names for g in semantic_groups(item, groups)) for item in items)
