"""Per-document resolution state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..ling.document import Document
from .chain import ChainRegistry
from .domain import DomainVocabulary

if TYPE_CHECKING:
    from .configuration import Configuration


@dataclass
class ResolutionContext:
    """
    Everything a resolution call may read or change for one document.

    A context is created per document and never shared, so separate
    documents can be resolved independently.
    """

    document: Document
    vocabulary: DomainVocabulary = field(default_factory=DomainVocabulary)
    configuration: Optional["Configuration"] = None
    chains: ChainRegistry = field(default_factory=ChainRegistry)
    _ontology_counts: Optional[dict[str, int]] = field(default=None, repr=False)

    def ontology_counts(self) -> dict[str, int]:
        """Concept occurrence counts, computed once per document."""
        if self._ontology_counts is None:
            self._ontology_counts = self.document.ontology_counts()
        return self._ontology_counts
