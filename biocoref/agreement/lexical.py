"""
String, head word and stem agreement
"""

import logging
from typing import List, Set

from nltk.stem import PorterStemmer

from ..core.registry import AGREEMENT, component
from ..core.types import PRONOMINAL_TYPES
from ..expressions.lexicon import DEMONSTRATIVE_ADJECTIVES, INDEFINITE_ADJECTIVES
from ..ling.document import SurfaceElement, Word
from .base import Agreement

logger = logging.getLogger(__name__)

OTHER_STOP_WORDS = ("many",)

_stemmer = PorterStemmer()


@component(name="ExactString", kind=AGREEMENT)
class ExactStringAgreement(Agreement):
    def agree(self, coref_type, exp_type, exp, referent, context=None):
        return exp.text.lower() == referent.text.lower()


@component(name="HeadWord", kind=AGREEMENT)
class HeadWordAgreement(Agreement):
    """Head lemmas match, ignoring case"""

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        return exp.head.lemma.lower() == referent.head.lemma.lower()


@component(name="RelaxedHeadMatch", kind=AGREEMENT)
class RelaxedHeadMatchAgreement(Agreement):
    """The mention's head word appears anywhere in the candidate"""

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if not exp.is_nominal or not referent.is_nominal:
            return False
        head_text = exp.head.text.lower()
        return any(w.text.lower() == head_text for w in referent.words)


@component(name="StrictHeadMatch", kind=AGREEMENT)
class StrictHeadMatchAgreement(Agreement):
    """
    Heads match and every noun and adjective of the mention appears in the candidate.

    "the mutant protein" matches "a mutant protein" but not "the protein".
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if not exp.is_nominal or not referent.is_nominal:
            return False
        if exp.head.text.lower() != referent.head.text.lower():
            return False
        ref_tokens = non_stop_words(referent)
        return all(t in ref_tokens for t in non_stop_words(exp))


def non_stop_words(surf: SurfaceElement) -> List[str]:
    """Lowercased nouns and adjectives, minus a few quantifiers."""
    tokens = []
    for word in surf.words:
        lemma = word.lemma.lower()
        if lemma in OTHER_STOP_WORDS:
            continue
        if word.is_nominal or word.is_adjectival:
            if lemma in DEMONSTRATIVE_ADJECTIVES or lemma in INDEFINITE_ADJECTIVES:
                continue
            tokens.append(word.text.lower())
    return tokens


@component(name="ProperHeadWord", kind=AGREEMENT)
class ProperHeadWordAgreement(Agreement):
    """
    Proper noun heads need compatible modifiers.

    "IL-2" and "IL-4" do not match. When either head is not a proper
    noun there is nothing to compare and the agreement holds.
    """

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if not exp.is_nominal or not referent.is_nominal:
            return False
        if not exp.head.pos.startswith("NNP") or not referent.head.pos.startswith("NNP"):
            return True
        return _modifier_match(_modifiers(exp), _modifiers(referent))


def _modifiers(surf: SurfaceElement) -> List[str]:
    tokens = []
    head_index = next((i for i, w in enumerate(surf.words) if w is surf.head), len(surf.words))
    for word in reversed(surf.words[:head_index]):
        text = word.text.lower()
        if word.is_nominal or word.is_adjectival:
            if text in DEMONSTRATIVE_ADJECTIVES or text in INDEFINITE_ADJECTIVES:
                continue
            tokens.append(text)
    return tokens


def _modifier_match(exp_mods: List[str], ref_mods: List[str]) -> bool:
    if len(exp_mods) != len(ref_mods):
        return False
    numbers = [m for m in exp_mods if m.isdigit()]
    return all(m in numbers for m in ref_mods if m.isdigit())


@component(name="NonPostModifierMatch", kind=AGREEMENT)
class NonPostModifierMatchAgreement(Agreement):
    """The text up to the head matches, after leading determiners and pronouns"""

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if exp_type in PRONOMINAL_TYPES:
            return False
        return _pre_head_text(exp).lower() == _pre_head_text(referent).lower()


def _pre_head_text(surf: SurfaceElement) -> str:
    head_end = surf.head.span.end
    begin = surf.span.begin
    for word in surf.words:
        if word.is_determiner or word.is_pronominal:
            continue
        begin = word.span.begin
        break
    # likely a tagging error ("his IV" with IV as CD)
    if begin > head_end:
        head_end = surf.span.end
    doc = surf.document
    if doc is not None and doc.text:
        return doc.text[begin:head_end]
    return " ".join(w.text for w in surf.words if w.span.begin >= begin and w.span.end <= head_end)


@component(name="RelaxedStem", kind=AGREEMENT)
class RelaxedStemAgreement(Agreement):
    """
    At least half of all stems are shared.

    Stems with digits must appear on both sides, so "IL-2 receptor" and
    "IL-4 receptor" do not match.
    """

    THRESHOLD = 0.5

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if exp_type in PRONOMINAL_TYPES:
            return False
        exp_stems = stems(exp)
        ref_stems = stems(referent)
        if _incompatible_numbers(exp_stems, ref_stems):
            return False
        all_stems = exp_stems | ref_stems
        if not all_stems:
            return False
        common = len(exp_stems & ref_stems)
        return common / len(all_stems) >= self.THRESHOLD


def stems(surf: SurfaceElement) -> Set[str]:
    return {_stemmer.stem(w.text) for w in surf.words if _to_stem(w)}


def _to_stem(word: Word) -> bool:
    return not (word.is_determiner or word.is_pronominal or word.is_relative_pronoun
                or word.is_prepositional)


def _incompatible_numbers(first: Set[str], second: Set[str]) -> bool:
    for stem in first:
        if any(c.isdigit() for c in stem) and stem not in second:
            return True
    for stem in second:
        if any(c.isdigit() for c in stem) and stem not in first:
            return True
    return False


@component(name="Acronym", kind=AGREEMENT)
class AcronymAgreement(Agreement):
    """One side is an acronym of the other ("TNF" and "tumor necrosis factor")"""

    MAX_ACRONYM_LENGTH = 5

    def agree(self, coref_type, exp_type, exp, referent, context=None):
        if exp_type in PRONOMINAL_TYPES:
            return False
        ref_size = len(referent.words)
        exp_size = len(exp.words)
        if ref_size == 1 and exp_size > 1:
            shorter, longer = referent, exp
        elif exp_size == 1 and ref_size > 1:
            shorter, longer = exp, referent
        else:
            return False
        short_text = shorter.text
        if not any(c.isupper() for c in short_text) or len(short_text) > self.MAX_ACRONYM_LENGTH:
            return False
        acronym = "".join(w.text[0].upper() for w in longer.words
                          if w.text and not (w.is_determiner or w.is_pronominal))
        if len(acronym) < 2:
            return False
        capitals = "".join(c for c in short_text if "A" <= c <= "Z")
        return len(capitals) > 1 and acronym == capitals
