"""
Expression filters decide whether a recognized mention is worth resolving at all
"""

import logging
from abc import ABC, abstractmethod

from ..agreement.base import vocabulary_of
from ..agreement.morphosyntactic import Person, person
from ..core.registry import EXPRESSION_FILTER, component
from ..core.types import NOMINAL_TYPES, CoreferenceType, ExpressionType
from ..core.utils import is_modified, pleonastic_it
from ..ling.appositive import has_syntactic_appositives
from ..ling.document import SurfaceElement
from .lexicon import NON_COREFERENTIAL_RELATIVE_PRONOUNS

logger = logging.getLogger(__name__)


def is_cataphoric(exp_type: ExpressionType, surf: SurfaceElement) -> bool:
    """
    A nominal mention pointing forward: "the following drugs", or a mention
    opening the document.
    """
    if not surf.expressions() or exp_type not in NOMINAL_TYPES:
        return False
    if surf.contains_token("following"):
        return True
    sentence = surf.sentence
    document = surf.document
    if sentence is None or document is None or not document.sentences:
        return False
    return (document.sentences[0] is sentence and bool(sentence.surface_elements)
            and sentence.surface_elements[0] is surf)


class ExpressionFilter(ABC):
    """Abstract base class for expression filters"""

    @abstractmethod
    def accept(self, coref_type: CoreferenceType, exp_type: ExpressionType,
               surf: SurfaceElement, context=None) -> bool:
        """Return True if the mention should be resolved"""
        pass

    def __repr__(self) -> str:
        return getattr(self, "_component_name", type(self).__name__)


class _NominalDirectionFilter(ExpressionFilter):
    cataphoric = False

    def accept(self, coref_type, exp_type, surf, context=None):
        if exp_type not in NOMINAL_TYPES:
            return False
        if is_cataphoric(exp_type, surf) != self.cataphoric:
            return False
        if is_modified(exp_type, surf):
            return False
        return not has_syntactic_appositives(surf)


@component(name="Anaphoricity", kind=EXPRESSION_FILTER)
class AnaphoricityFilter(_NominalDirectionFilter):
    """Unmodified nominal mentions that do not point forward and have no appositive"""
    cataphoric = False


@component(name="Cataphoricity", kind=EXPRESSION_FILTER)
class CataphoricityFilter(_NominalDirectionFilter):
    """Unmodified nominal mentions that point forward and have no appositive"""
    cataphoric = True


@component(name="ThirdPersonPronoun", kind=EXPRESSION_FILTER)
class ThirdPersonPronounFilter(ExpressionFilter):
    def accept(self, coref_type, exp_type, surf, context=None):
        if exp_type not in (ExpressionType.PERSONAL_PRONOUN, ExpressionType.POSSESSIVE_PRONOUN):
            return False
        return person(surf) is Person.THIRD


@component(name="PleonasticIt", kind=EXPRESSION_FILTER)
class PleonasticItFilter(ExpressionFilter):
    """Rejects "it" in "it is possible that ..." and similar"""

    def accept(self, coref_type, exp_type, surf, context=None):
        if pleonastic_it(surf):
            logger.debug(f"Pleonastic it: {surf}")
            return False
        return True


@component(name="NonCorefRelativePron", kind=EXPRESSION_FILTER)
class NonCorefRelativePronFilter(ExpressionFilter):
    def accept(self, coref_type, exp_type, surf, context=None):
        if not surf.is_relative_pronoun:
            return False
        return not surf.contains_any_lemma(NON_COREFERENTIAL_RELATIVE_PRONOUNS)


@component(name="HypernymOnly", kind=EXPRESSION_FILTER)
class HypernymOnlyFilter(ExpressionFilter):
    """Mentions containing one of the domain hypernyms"""

    def accept(self, coref_type, exp_type, surf, context=None):
        return surf.contains_any_lemma(vocabulary_of(context).all_hypernyms())
