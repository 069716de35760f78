"""Discourse-level position helpers."""

from typing import Optional

from .document import Sentence, SurfaceElement


def same_sentence(first: SurfaceElement, second: SurfaceElement) -> bool:
    if first.sentence is None or second.sentence is None:
        return False
    return first.sentence is second.sentence


def within_n_sentences(first: Optional[Sentence], second: Optional[Sentence], n: int) -> bool:
    """True if two sentences of the same document are at most ``n`` sentences apart."""
    if n < 0 or first is None or second is None:
        return False
    if first.document is not second.document:
        return False
    if first is second:
        return True
    return abs(first.index - second.index) <= n


def same_section(first: Sentence, second: Sentence) -> bool:
    if first.document is None or first.document is not second.document:
        return False
    return first.document.same_section(first, second)
