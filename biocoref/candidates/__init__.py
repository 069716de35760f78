"""Candidate filters, post-scoring filters and salience heuristics."""

from .filters import CandidateFilter
from .post_scoring import PostScoringFilter
from .salience import SalienceType

__all__ = ["CandidateFilter", "PostScoringFilter", "SalienceType"]
