"""Strategy model, component registry and resolution types."""

from .exceptions import ConfigurationError, CoreferenceError, DocumentLoadError
from .registry import AGREEMENT, CANDIDATE_FILTER, EXPRESSION_FILTER, POST_SCORING_FILTER, component, create_component
from .strategy import ScoringFunction, Strategy, SurfaceElementChain
from .types import CoreferenceType, ExpressionType, SearchDirection

__all__ = [
    "ConfigurationError",
    "CoreferenceError",
    "DocumentLoadError",
    "AGREEMENT",
    "CANDIDATE_FILTER",
    "EXPRESSION_FILTER",
    "POST_SCORING_FILTER",
    "component",
    "create_component",
    "ScoringFunction",
    "Strategy",
    "SurfaceElementChain",
    "CoreferenceType",
    "ExpressionType",
    "SearchDirection",
]
