"""
Filters applied to the score map after the agreements have scored every candidate
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Union

from ..core.registry import POST_SCORING_FILTER, component
from ..ling.document import SurfaceElement
from .salience import SalienceType

logger = logging.getLogger(__name__)

ScoreMap = Dict[SurfaceElement, int]


class PostScoringFilter(ABC):
    """Abstract base class for post-scoring filters"""

    @abstractmethod
    def post_filter(self, exp: SurfaceElement, scores: Optional[ScoreMap], context=None) -> ScoreMap:
        """Return a new score map with the candidates that remain"""
        pass

    def __repr__(self) -> str:
        return getattr(self, "_component_name", type(self).__name__)


@component(name="TopScore", kind=POST_SCORING_FILTER)
class TopScoreFilter(PostScoringFilter):
    """Keeps the candidates sharing the highest score"""

    def post_filter(self, exp, scores, context=None):
        if not scores:
            return {}
        top = max(scores.values())
        return {cand: score for cand, score in scores.items() if score == top}


@component(name="Threshold", kind=POST_SCORING_FILTER)
class ThresholdFilter(PostScoringFilter):
    """Keeps the candidates scoring at least the threshold"""

    def __init__(self, threshold: int = 0):
        self.threshold = int(threshold)

    def post_filter(self, exp, scores, context=None):
        if not scores:
            return {}
        return {cand: score for cand, score in scores.items() if score >= self.threshold}

    def __repr__(self) -> str:
        return f"Threshold({self.threshold})"


@component(name="Salience", kind=POST_SCORING_FILTER)
class SalienceTypeFilter(PostScoringFilter):
    """Narrows several candidates down with a salience heuristic"""

    def __init__(self, salience_type: Union[SalienceType, str] = SalienceType.PROXIMITY):
        if not isinstance(salience_type, SalienceType):
            salience_type = SalienceType.from_name(salience_type)
        self.salience_type = salience_type

    def post_filter(self, exp, scores, context=None):
        if not scores:
            return {}
        if len(scores) == 1:
            return dict(scores)
        best = self.salience_type.salience(exp, list(scores.keys()), context)
        return {cand: scores[cand] for cand in best}

    def __repr__(self) -> str:
        return f"Salience({self.salience_type.name})"
