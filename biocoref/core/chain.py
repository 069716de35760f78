"""
Coreference chains and the decisions that build them from resolution outcomes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from ..ling.document import SurfaceElement
from ..ling.semantics import Argument, Conjunction, Entity, Expression, Relation, SemanticItem
from .types import CoreferenceType
from .utils import closer_with_same_ontology, incompatible_direction

if TYPE_CHECKING:
    from .context import ResolutionContext
    from .strategy import SurfaceElementChain

logger = logging.getLogger(__name__)


class CoreferenceChain(Relation):
    """A coreference relation between mention items and referent items."""

    def __init__(self, id: str, coreference_type: CoreferenceType, arguments: list[Argument]):
        self.coreference_type = coreference_type
        super().__init__(id, coreference_type.value, arguments)

    def expressions(self) -> list[SemanticItem]:
        return self.argument_items(self.coreference_type.expression_role)

    def referents(self) -> list[SemanticItem]:
        return self.argument_items(self.coreference_type.referent_role)

    def has_argument(self, item: SemanticItem, role: Optional[str] = None) -> bool:
        return any(a.item is item and (role is None or a.role == role) for a in self.arguments)

    def all_semtypes(self) -> list[str]:
        out: list[str] = []
        for exp in self.expressions():
            for semtype in exp.all_semtypes():
                if semtype not in out:
                    out.append(semtype)
        return out or [self.type]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "arguments": [
                {
                    "role": a.role,
                    "id": a.item.id,
                    "type": a.item.type,
                    "span": str(a.item.span),
                    "text": a.item.text if hasattr(a.item, "text") else None,
                }
                for a in self.arguments
            ],
        }


@dataclass
class ChainRegistry:
    """The coreference chains formed so far for one document."""

    chains: list[CoreferenceChain] = field(default_factory=list)

    def add(self, chain: CoreferenceChain) -> None:
        self.chains.append(chain)

    def remove(self, chain: CoreferenceChain) -> None:
        self.chains = [c for c in self.chains if c is not chain]

    def get(self, chain_id: str) -> Optional[CoreferenceChain]:
        for chain in self.chains:
            if chain.id == chain_id:
                return chain
        return None

    def chains_with_term(self, item: SemanticItem, role: Optional[str] = None) -> list[CoreferenceChain]:
        return [c for c in self.chains if c.has_argument(item, role)]

    def chains_with_anaphor(self, item: SemanticItem) -> list[CoreferenceChain]:
        return self.chains_with_term(item, CoreferenceType.ANAPHORA.expression_role)

    def chains_with_mention(self, surf: SurfaceElement) -> list[CoreferenceChain]:
        """Chains in which an expression of ``surf`` is the anaphor."""
        out: list[CoreferenceChain] = []
        for exp in surf.filter_semantics(Expression):
            for chain in self.chains_with_anaphor(exp):
                if not any(chain is o for o in out):
                    out.append(chain)
        return out

    def chains_with_argument(self, surf: SurfaceElement) -> list[CoreferenceChain]:
        """Chains with any argument attached to ``surf``."""
        return [c for c in self.chains
                if any(any(a.item is s for s in surf.semantics) for a in c.arguments)]

    def __len__(self) -> int:
        return len(self.chains)

    def __iter__(self):
        return iter(self.chains)


@dataclass
class CreateNew:
    """Create a new chain with these arguments."""

    coreference_type: CoreferenceType
    arguments: list[Argument]


@dataclass
class MergeInto:
    """Add these arguments to an existing chain."""

    chain_id: str
    arguments: list[Argument]


ChainDecision = Union[CreateNew, MergeInto]


def decide_chain(context: "ResolutionContext", link: "SurfaceElementChain") -> list[ChainDecision]:
    """
    Decide how a resolution outcome changes the chain registry.

    Referent arguments come from the most prominent semantic item of each
    referent. A conjunction is expanded into its conjuncts unless one of them
    lies in the wrong direction for the coreference type. A closer item with
    the same ontology concept is preferred. If an existing chain of the same
    type already holds the mention as its expression, the referents are merged
    into it. Otherwise a new chain is created.

    This does not touch the registry. It may attach a generic ``SPAN`` entity
    to a referent that has no semantics.
    """
    exp = link.expression
    referents = link.referents
    if exp is None or not referents:
        return []
    coref_type = link.strategy.coreference_type
    doc = context.document
    ref_role = coref_type.referent_role
    exp_role = coref_type.expression_role

    referent_args: list[Argument] = []
    for ref in referents:
        if not ref.has_semantics():
            entity = Entity(doc.factory.next_id("T"), "SPAN", ref.span, ref, head_span=ref.head.span)
            ref.add_semantics(entity)
            logger.debug(f"Created generic entity for referent: {entity.short_string()}")
        highest = ref.most_prominent_semantic_item()
        ref_items: list[SemanticItem] = []
        if isinstance(highest, Conjunction):
            for conjunct in highest.argument_items():
                if incompatible_direction(exp, conjunct, coref_type):
                    ref_items = []
                    break
                ref_items.append(conjunct)
        elif highest is not None:
            ref_items.append(highest)
        for sem in ref_items:
            closer = closer_with_same_ontology(doc, exp, sem)
            chosen = closer if closer is not None and not any(closer is r for r in ref_items) else sem
            if not any(a.item is chosen for a in referent_args):
                referent_args.append(Argument(ref_role, chosen))

    if not referent_args:
        logger.warning(f"No referent semantics for {exp.text!r}, skipping link")
        return []

    exp_items = exp.filter_semantics(Expression)
    if not exp_items:
        heads = exp.head_semantics()
        if not heads:
            logger.warning(f"No mention semantics for {exp.text!r}, skipping link")
            return []
        exp_items = heads[:1]

    for chain in context.chains:
        if chain.coreference_type is not coref_type:
            continue
        if all(chain.has_argument(e, exp_role) for e in exp_items):
            new_args = [a for a in referent_args if not chain.has_argument(a.item, ref_role)]
            return [MergeInto(chain.id, new_args)] if new_args else []

    exp_args = [Argument(exp_role, e) for e in exp_items]
    return [CreateNew(coref_type, exp_args + referent_args)]


def apply_decisions(context: "ResolutionContext", decisions: list[ChainDecision]) -> list[CoreferenceChain]:
    """Apply chain decisions to the registry. Returns the chains created or changed."""
    touched: list[CoreferenceChain] = []
    for decision in decisions:
        if isinstance(decision, CreateNew):
            chain = CoreferenceChain(context.document.factory.next_id("R"),
                                     decision.coreference_type, decision.arguments)
            context.chains.add(chain)
            logger.debug(f"New coreference chain: {chain.short_string()}")
        else:
            chain = context.chains.get(decision.chain_id)
            if chain is None:
                logger.warning(f"Cannot merge into unknown chain {decision.chain_id}")
                continue
            for arg in decision.arguments:
                chain.add_argument(arg)
            logger.debug(f"Merged into coreference chain: {chain.short_string()}")
        touched.append(chain)
    return touched


def prune_chains(context: "ResolutionContext") -> list[CoreferenceChain]:
    """Remove anaphora chains whose anaphor is also the cataphor of a cataphora chain."""
    pruned: list[CoreferenceChain] = []
    cataphor_role = CoreferenceType.CATAPHORA.expression_role
    for chain in list(context.chains):
        if chain.coreference_type is not CoreferenceType.CATAPHORA:
            continue
        for cataphor in chain.argument_items(cataphor_role):
            for anaphora_chain in context.chains.chains_with_anaphor(cataphor):
                if not any(anaphora_chain is p for p in pruned):
                    pruned.append(anaphora_chain)
    for chain in pruned:
        logger.debug(f"Pruning coreference chain: {chain.short_string()}")
        context.chains.remove(chain)
    return pruned
