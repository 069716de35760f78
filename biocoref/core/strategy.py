"""Strategy records: how one kind of mention is resolved."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Sequence

from .types import CoreferenceType, ExpressionType

if TYPE_CHECKING:
    from ..ling.document import SurfaceElement


@dataclass(frozen=True)
class ScoringFunction:
    """An agreement with the score it adds when it holds and the penalty it subtracts when it does not."""

    agreement: Any
    score: int
    penalty: int = 0

    def __str__(self) -> str:
        name = getattr(self.agreement, "_component_name", type(self.agreement).__name__)
        return f"{name}({self.score},{self.penalty})"


@dataclass(frozen=True)
class Strategy:
    """
    The recipe for one (coreference type, expression type) pair.

    Filters and post-scoring filters apply in the order given. Instances are
    built once when the configuration is loaded and never change.
    """

    coreference_type: CoreferenceType
    expression_type: ExpressionType
    expression_filters: tuple = ()
    candidate_filters: tuple = ()
    scoring_functions: tuple = ()
    post_scoring_filters: tuple = ()

    @classmethod
    def create(
        cls,
        coreference_type: CoreferenceType,
        expression_type: ExpressionType,
        expression_filters: Sequence = (),
        candidate_filters: Sequence = (),
        scoring_functions: Sequence[ScoringFunction] = (),
        post_scoring_filters: Sequence = (),
    ) -> Strategy:
        return cls(
            coreference_type,
            expression_type,
            tuple(expression_filters),
            tuple(candidate_filters),
            tuple(scoring_functions),
            tuple(post_scoring_filters),
        )

    @property
    def key(self) -> tuple[CoreferenceType, ExpressionType]:
        return (self.coreference_type, self.expression_type)

    def __str__(self) -> str:
        return f"Strategy({self.coreference_type.value}, {self.expression_type.value})"


@dataclass
class SurfaceElementChain:
    """One resolution outcome: the mention, the strategy used and the referents found."""

    strategy: Strategy
    expression: "SurfaceElement"
    referents: list["SurfaceElement"] = field(default_factory=list)

    @property
    def coreference_type(self) -> CoreferenceType:
        return self.strategy.coreference_type

    def is_resolved(self) -> bool:
        return len(self.referents) > 0

    def __str__(self) -> str:
        refs = ", ".join(r.text for r in self.referents) or "-"
        return f"{self.strategy.coreference_type.value}: {self.expression.text} -> [{refs}]"
