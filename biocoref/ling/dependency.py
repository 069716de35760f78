"""
Syntactic dependencies between surface elements and queries over them
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence

if TYPE_CHECKING:
    from .document import SurfaceElement

logger = logging.getLogger(__name__)


# Dependent is semantically dominant to the governor
DEPENDENT_DOMINATED_DEPENDENCIES = (
    "partmod", "aux", "auxpass", "cop", "mark", "neg", "rcmod", "complm", "vmod",
)
# Hold between tokens of the same noun phrase
NP_INTERNAL_DEPENDENCIES = ("det", "amod", "nn", "poss", "quantmod", "num", "measure")
APPOS_DEPENDENCIES = ("appos", "abbrev")
EXEMPLIFY_DEPENDENCIES = ("prep_such_as", "prep_including")


@dataclass(eq=False)
class SynDependency:
    """A typed, directed edge from a governor to a dependent."""

    id: str
    type: str
    governor: "SurfaceElement"
    dependent: "SurfaceElement"

    def __repr__(self) -> str:
        return f"{self.type}({self.governor.text}, {self.dependent.text})"


def type_match(dep_type: str, wanted: str, exact: bool = True) -> bool:
    if exact:
        return dep_type == wanted
    return wanted in dep_type


def out_dependencies(surf, dependencies: Optional[Iterable[SynDependency]]) -> List[SynDependency]:
    if not dependencies:
        return []
    return [d for d in dependencies if d.governor is surf]


def in_dependencies(surf, dependencies: Optional[Iterable[SynDependency]]) -> List[SynDependency]:
    if not dependencies:
        return []
    return [d for d in dependencies if d.dependent is surf]


def dependencies_of(surf, dependencies: Optional[Iterable[SynDependency]]) -> List[SynDependency]:
    """Outgoing dependencies of ``surf`` followed by its incoming ones."""
    return out_dependencies(surf, dependencies) + in_dependencies(surf, dependencies)


def dependencies_with_types(
    dependencies: Optional[Iterable[SynDependency]],
    types: Sequence[str],
    exact: bool = True,
) -> List[SynDependency]:
    """
    Select dependencies by type.

    Results are grouped by the order of ``types``, as a dependency
    may match more than one type under a partial match.
    """
    if not dependencies:
        return []
    deps = list(dependencies)
    out: List[SynDependency] = []
    for wanted in types:
        out.extend(d for d in deps if type_match(d.type, wanted, exact))
    return out


def out_dependencies_with_types(surf, dependencies, types: Sequence[str], exact: bool = True) -> List[SynDependency]:
    return dependencies_with_types(out_dependencies(surf, dependencies), types, exact)


def in_dependencies_with_types(surf, dependencies, types: Sequence[str], exact: bool = True) -> List[SynDependency]:
    return dependencies_with_types(in_dependencies(surf, dependencies), types, exact)


def surface_dependencies_with_types(surf, dependencies, types: Sequence[str], exact: bool = True) -> List[SynDependency]:
    """Dependencies of either direction that touch ``surf`` and match one of ``types``."""
    out: List[SynDependency] = []
    for wanted in types:
        out.extend(out_dependencies_with_types(surf, dependencies, [wanted], exact))
        out.extend(in_dependencies_with_types(surf, dependencies, [wanted], exact))
    return out


def find_dependencies_between(
    dependencies: Optional[Iterable[SynDependency]],
    first,
    second,
    directed: bool = True,
) -> List[SynDependency]:
    """Direct dependencies between two surface elements (path length 1)."""
    if not dependencies:
        return []
    out = []
    for dep in dependencies:
        if dep.governor is first and dep.dependent is second:
            out.append(dep)
        elif not directed and dep.dependent is first and dep.governor is second:
            out.append(dep)
    return out


def find_dependency_path(
    dependencies: Optional[Sequence[SynDependency]],
    start,
    goal,
    directed: bool = True,
) -> Optional[List[SynDependency]]:
    """
    Breadth-first search for a dependency path from ``start`` to ``goal``.

    Args:
        dependencies: All dependencies of the sentence
        start: The surface element to search from
        goal: The surface element to reach
        directed: If True, only governor-to-dependent edges are followed

    Returns:
        The dependencies along the path in order, an empty list if
        ``start`` is ``goal``, or None when no path exists
    """
    if not dependencies:
        return None
    parents: Dict[int, object] = {id(start): None}
    nodes = {id(start): start}
    closed: set = set()
    open_list = deque([start])

    while open_list:
        surf = open_list.popleft()
        if surf is goal:
            return _construct_path(dependencies, parents, nodes, goal, directed)
        closed.add(id(surf))
        surf_deps = out_dependencies(surf, dependencies) if directed else dependencies_of(surf, dependencies)
        for dep in surf_deps:
            if dep.governor is surf:
                neighbor = dep.dependent
            elif not directed and dep.dependent is surf:
                neighbor = dep.governor
            else:
                continue
            if id(neighbor) in closed or id(neighbor) in parents:
                continue
            parents[id(neighbor)] = surf
            nodes[id(neighbor)] = neighbor
            open_list.append(neighbor)

    logger.debug(f"No dependency path between {start} and {goal}")
    return None


def _construct_path(dependencies, parents, nodes, goal, directed) -> List[SynDependency]:
    path: List[SynDependency] = []
    surf = goal
    while parents.get(id(surf)) is not None:
        parent = parents[id(surf)]
        between = find_dependencies_between(dependencies, parent, surf, directed)
        if between:
            path.insert(0, between[0])
        surf = parent
    return path
