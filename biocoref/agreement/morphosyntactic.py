"""
Number, gender, person and animacy agreement
"""

import logging
import re
from enum import Enum
from typing import Optional

from ..core.registry import AGREEMENT, component
from ..core.types import ExpressionType, get_types
from ..core.utils import determiner_token, pronoun_token
from ..ling.conjunction import conjunctions
from ..ling.document import SurfaceElement
from ..ling.semantics import SemanticItem
from .base import Agreement, vocabulary_of

logger = logging.getLogger(__name__)

PLURAL_PRONOUN_RE = re.compile(r"^(they|them|we|us|their|ours|our|theirs|themselves|ourselves|yourselves)$")
MALE_PRONOUN_RE = re.compile(r"^(he|him|his|himself)$")
FEMALE_PRONOUN_RE = re.compile(r"^(she|her|hers|herself)$")
FIRST_PERSON_RE = re.compile(r"^(i|me|my|mine|we|our|ours|ourselves|myself|us)$")
SECOND_PERSON_RE = re.compile(r"^(you|your|yours|y'all|y'alls|yinz|yourself|yourselves)$")
ANIMATE_PRONOUN_RE = re.compile(
    r"^(me|he|him|his|she|her|hers|we|us|our|ours|i|my|mine|you|yours|himself|herself|ourselves|myself|who|whose|whom)$"
)
NON_ANIMATE_PRONOUN_RE = re.compile(r"^(it|its|itself|which|where)$")
MAYBE_ANIMATE_PRONOUN_RE = re.compile(r"^(they|their|theirs|them|themselves)$")
MAYBE_ANIMATE_DETERMINER_RE = re.compile(r"^(those|these|this|that)$")

_PLURAL_TYPES = (ExpressionType.DISTRIBUTIVE_PRONOUN, ExpressionType.RECIPROCAL_PRONOUN,
                 ExpressionType.DISTRIBUTIVE_NP)


class Number(str, Enum):
    SINGULAR = "Sg"
    PLURAL = "Pl"


class Gender(str, Enum):
    MALE = "Mal"
    FEMALE = "Fem"


class Person(str, Enum):
    FIRST = "1"
    SECOND = "2"
    THIRD = "3"


class Animacy(str, Enum):
    ANIMATE = "Anim"
    NON_ANIMATE = "NAnim"
    MAYBE_ANIMATE = "MaybeAnim"


def number(surf: SurfaceElement, context=None) -> Number:
    """Grammatical number of a surface element."""
    if surf.is_coordinating_conjunction:
        return Number.PLURAL
    if any(t in _PLURAL_TYPES for t in get_types(surf)):
        return Number.PLURAL
    if conjunctions(surf):
        return Number.PLURAL
    if surf.is_pronominal:
        pronoun = pronoun_token(surf) or ""
        return Number.PLURAL if PLURAL_PRONOUN_RE.match(pronoun) else Number.SINGULAR
    head = surf.head
    # TODO: mass nouns
    if head.lemma in vocabulary_of(context).collective_nouns:
        return Number.PLURAL
    if re.match(r"^NNP?$", head.pos):
        return Number.SINGULAR
    if re.match(r"^NNP?S$", head.pos):
        return Number.PLURAL
    return Number.SINGULAR


def denotes_two(surf: SurfaceElement) -> bool:
    """True for "both", "each other", "either drug" or anything with "two" in it."""
    if any(t in _PLURAL_TYPES for t in get_types(surf)):
        return True
    return surf.contains_lemma("two") or surf.contains_lemma("2")


def gender(surf: SurfaceElement, context=None) -> Optional[Gender]:
    if surf.is_pronominal:
        pronoun = pronoun_token(surf) or ""
        if MALE_PRONOUN_RE.match(pronoun):
            return Gender.MALE
        if FEMALE_PRONOUN_RE.match(pronoun):
            return Gender.FEMALE
        return None
    vocabulary = vocabulary_of(context)
    lemma = surf.head.lemma
    if lemma in vocabulary.female_nouns:
        return Gender.FEMALE
    if lemma in vocabulary.male_nouns:
        return Gender.MALE
    return None


def can_be_either_gender(surf: SurfaceElement, context=None) -> bool:
    return surf.head.lemma in vocabulary_of(context).population_hypernyms()


def person(surf: SurfaceElement) -> Person:
    pronoun = pronoun_token(surf)
    if pronoun is None:
        return Person.THIRD
    if FIRST_PERSON_RE.match(pronoun):
        return Person.FIRST
    if SECOND_PERSON_RE.match(pronoun):
        return Person.SECOND
    return Person.THIRD


def animacy(surf: SurfaceElement, context=None) -> Optional[Animacy]:
    if surf.is_pronominal:
        pronoun = pronoun_token(surf) or ""
        if ANIMATE_PRONOUN_RE.match(pronoun):
            return Animacy.ANIMATE
        if NON_ANIMATE_PRONOUN_RE.match(pronoun):
            return Animacy.NON_ANIMATE
        if MAYBE_ANIMATE_PRONOUN_RE.match(pronoun):
            return Animacy.MAYBE_ANIMATE
    elif surf.is_determiner:
        determiner = determiner_token(surf) or ""
        if MAYBE_ANIMATE_DETERMINER_RE.match(determiner):
            return Animacy.MAYBE_ANIMATE
    population = vocabulary_of(context).population_semtypes()
    if any(_has_population_semtype(s, population) for s in surf.semantics):
        return Animacy.ANIMATE
    conjs = conjunctions(surf)
    if conjs and all(_has_population_semtype(a, population) for a in conjs[0].argument_items()):
        return Animacy.ANIMATE
    return None


def _has_population_semtype(item: SemanticItem, population) -> bool:
    return any(s in population for s in item.all_semtypes())


@component(name="Number", kind=AGREEMENT)
class NumberAgreement(Agreement):
    """Singular mentions take singular referents, plural mentions plural ones"""

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        exp_number = number(exp, context)
        ref_number = number(referent, context)
        logger.debug(f"Mention_Referent number: {exp_number.value}_{ref_number.value}")
        if denotes_two(exp):
            conjs = conjunctions(referent)
            return bool(conjs) and len(conjs[0].argument_items()) == 2
        return exp_number is ref_number


@component(name="Gender", kind=AGREEMENT)
class GenderAgreement(Agreement):
    """Genders must match. Population nouns ("patient") take either gender"""

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        exp_gender = gender(exp, context)
        ref_gender = gender(referent, context)
        if exp_gender is ref_gender:
            return True
        if exp_gender is not None and can_be_either_gender(referent, context):
            return True
        if ref_gender is not None and can_be_either_gender(exp, context):
            return True
        return False


@component(name="Person", kind=AGREEMENT)
class PersonAgreement(Agreement):
    def agree(self, coref_type, exp_type, exp, referent, context=None):
        return person(exp) is person(referent)


@component(name="Animacy", kind=AGREEMENT)
class AnimacyAgreement(Agreement):
    """
    Animate mentions take animate referents.

    Unknown, non-animate and maybe-animate values are compatible with each
    other, as are animate and maybe-animate ones.
    """

    _INANIMATE_SIDE = (None, Animacy.NON_ANIMATE, Animacy.MAYBE_ANIMATE)
    _ANIMATE_SIDE = (Animacy.ANIMATE, Animacy.MAYBE_ANIMATE)

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        exp_animacy = animacy(exp, context)
        ref_animacy = animacy(referent, context)
        if exp_animacy in self._INANIMATE_SIDE and ref_animacy in self._INANIMATE_SIDE:
            return True
        if exp_animacy in self._ANIMATE_SIDE and ref_animacy in self._ANIMATE_SIDE:
            return True
        return exp_animacy is ref_animacy
