"""
Coreference and mention type enumerations.
"""

from enum import Enum
from typing import List, Optional

from ..ling.document import SurfaceElement
from ..ling.semantics import Expression


class SearchDirection(str, Enum):
    """Where referent candidates are searched for, relative to the mention."""
    FORWARD = "forward"
    BACKWARD = "backward"
    BOTH = "both"


class CoreferenceType(str, Enum):
    """Kinds of coreference the engine resolves."""
    ANAPHORA = "Anaphora"
    CATAPHORA = "Cataphora"
    APPOSITIVE = "Appositive"
    PREDICATE_NOMINATIVE = "PredicateNominative"
    ONTOLOGICAL = "Ontological"

    @property
    def search_direction(self) -> SearchDirection:
        if self is CoreferenceType.CATAPHORA:
            return SearchDirection.FORWARD
        if self in (CoreferenceType.APPOSITIVE, CoreferenceType.PREDICATE_NOMINATIVE):
            return SearchDirection.BOTH
        return SearchDirection.BACKWARD

    @property
    def expression_role(self) -> str:
        """Role name of the mention in the resulting chain."""
        return {
            CoreferenceType.ANAPHORA: "Anaphor",
            CoreferenceType.CATAPHORA: "Cataphor",
            CoreferenceType.ONTOLOGICAL: "Equiv",
        }.get(self, "Attribute")

    @property
    def referent_role(self) -> str:
        """Role name of the referents in the resulting chain."""
        return {
            CoreferenceType.ANAPHORA: "Antecedent",
            CoreferenceType.CATAPHORA: "Consequent",
            CoreferenceType.ONTOLOGICAL: "Equiv",
        }.get(self, "Head")


class ExpressionType(str, Enum):
    """Fine-grained types of coreferential mentions."""
    PERSONAL_PRONOUN = "PersonalPronoun"
    POSSESSIVE_PRONOUN = "PossessivePronoun"
    DEMONSTRATIVE_PRONOUN = "DemonstrativePronoun"
    DISTRIBUTIVE_PRONOUN = "DistributivePronoun"
    RECIPROCAL_PRONOUN = "ReciprocalPronoun"
    RELATIVE_PRONOUN = "RelativePronoun"
    INDEFINITE_PRONOUN = "IndefinitePronoun"
    DEFINITE_NP = "DefiniteNP"
    INDEFINITE_NP = "IndefiniteNP"
    ZERO_ARTICLE_NP = "ZeroArticleNP"
    DEMONSTRATIVE_NP = "DemonstrativeNP"
    DISTRIBUTIVE_NP = "DistributiveNP"

    @classmethod
    def from_name(cls, name: str) -> Optional["ExpressionType"]:
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def is_pronominal(self) -> bool:
        return self in PRONOMINAL_TYPES

    @property
    def is_nominal(self) -> bool:
        return self in NOMINAL_TYPES


PRONOMINAL_TYPES = frozenset({
    ExpressionType.PERSONAL_PRONOUN,
    ExpressionType.POSSESSIVE_PRONOUN,
    ExpressionType.DEMONSTRATIVE_PRONOUN,
    ExpressionType.DISTRIBUTIVE_PRONOUN,
    ExpressionType.RECIPROCAL_PRONOUN,
    ExpressionType.RELATIVE_PRONOUN,
    ExpressionType.INDEFINITE_PRONOUN,
})

NOMINAL_TYPES = frozenset({
    ExpressionType.DEFINITE_NP,
    ExpressionType.INDEFINITE_NP,
    ExpressionType.ZERO_ARTICLE_NP,
    ExpressionType.DEMONSTRATIVE_NP,
    ExpressionType.DISTRIBUTIVE_NP,
})


def get_types(surf: SurfaceElement) -> List[ExpressionType]:
    """Mention types of the expressions attached to ``surf``, in attachment order."""
    out: List[ExpressionType] = []
    for item in surf.filter_semantics(Expression):
        exp_type = ExpressionType.from_name(item.type)
        if exp_type is not None and exp_type not in out:
            out.append(exp_type)
    return out


def nominal_expression(surf: SurfaceElement) -> bool:
    """True if any attached expression has a nominal mention type."""
    return any(t in NOMINAL_TYPES for t in get_types(surf))


# Resolution window sentinels
WINDOW_ALL = -2
WINDOW_SECTION = -1
WINDOW_SENTENCE = 0
