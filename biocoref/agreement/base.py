"""
Agreement interface shared by all scoring predicates
"""

from abc import ABC, abstractmethod

from ..core.domain import DomainVocabulary
from ..core.types import CoreferenceType, ExpressionType
from ..ling.document import SurfaceElement


class Agreement(ABC):
    """Abstract base class for compatibility tests between a mention and a candidate referent"""

    @abstractmethod
    def agree(self, coref_type: CoreferenceType, exp_type: ExpressionType,
              exp: SurfaceElement, referent: SurfaceElement, context=None) -> bool:
        """Return True if the mention and the candidate are compatible"""
        pass

    def __repr__(self) -> str:
        return getattr(self, "_component_name", type(self).__name__)


def vocabulary_of(context) -> DomainVocabulary:
    """The context's vocabulary, or the built-in one when there is no context."""
    if context is not None:
        return context.vocabulary
    return DomainVocabulary()
