"""
Agreement predicates between a mention and a candidate referent.

Importing this package registers every built-in agreement by name.
"""

from .base import Agreement
from . import lexical, morphosyntactic, semantic, syntactic

__all__ = ["Agreement", "lexical", "morphosyntactic", "semantic", "syntactic"]
