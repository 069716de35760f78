"""
Coreference pipeline integrating mention detection, linking and chain building
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..expressions.recognition import annotate
from ..ling.document import Document
from .chain import CoreferenceChain, apply_decisions, decide_chain, prune_chains
from .configuration import Configuration
from .context import ResolutionContext
from .domain import DomainVocabulary
from .resolver import RESOLUTION_ORDER, process_document
from .strategy import SurfaceElementChain

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Links, chains and counts produced for one document."""

    document: Document
    links: List[SurfaceElementChain] = field(default_factory=list)
    chains: List[CoreferenceChain] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def resolved_links(self) -> List[SurfaceElementChain]:
        return [link for link in self.links if link.is_resolved()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document": self.document.id,
            "chains": [chain.to_dict() for chain in self.chains],
            "links": [
                {
                    "type": link.coreference_type.value,
                    "expression_type": link.strategy.expression_type.value,
                    "expression": {"text": link.expression.text, "span": str(link.expression.span)},
                    "referents": [{"text": r.text, "span": str(r.span)} for r in link.referents],
                }
                for link in self.resolved_links()
            ],
            "stats": dict(self.stats),
        }


class CoreferencePipeline:
    """
    Pipeline for resolving coreference in an annotated document.

    Pipeline flow:
    1. Mention detection: attach Expression semantics for the configured types
    2. Linking: appositive, predicate nominative, anaphora, cataphora, ontological
    3. Chain building: each resolved link is merged into or creates a chain
    4. Pruning: anaphora chains shadowed by cataphora chains are dropped
    """

    def __init__(self, configuration: Optional[Configuration] = None,
                 vocabulary: Optional[DomainVocabulary] = None):
        """
        Initialize the pipeline.

        Args:
            configuration: Strategies to use, the default set when None
            vocabulary: Domain vocabulary, the built-in biomedical one when None
        """
        self.configuration = configuration or Configuration.default()
        self.vocabulary = vocabulary or DomainVocabulary()
        logger.info(f"Coreference pipeline ready with {len(self.configuration)} strategies")

    def run(self, document: Document) -> ResolutionResult:
        """
        Resolve coreference in a document.

        The document is annotated in place with mentions and generic
        referent entities. Chains are kept in a context local to this call.

        Args:
            document: A parsed document with sentences, dependencies and entities

        Returns:
            ResolutionResult with the links, surviving chains and statistics
        """
        logger.info(f"Starting coreference resolution for document {document.id}")
        context = ResolutionContext(document=document, vocabulary=self.vocabulary,
                                    configuration=self.configuration)

        logger.debug("Step 1: Recognizing mentions")
        mentions = annotate(document, self.configuration.expression_types(), self.vocabulary)

        logger.debug("Step 2: Linking mentions")
        links: List[SurfaceElementChain] = []
        stats: Dict[str, Any] = {"mentions": len(mentions), "links": {}}
        for coref_type in RESOLUTION_ORDER:
            if not self.configuration.has_coref_type(coref_type):
                continue
            type_links = process_document(context, coref_type)
            resolved = 0
            for link in type_links:
                if not link.is_resolved():
                    continue
                resolved += 1
                apply_decisions(context, decide_chain(context, link))
            stats["links"][coref_type.value] = {"processed": len(type_links), "resolved": resolved}
            logger.debug(f"{coref_type.value}: {resolved} of {len(type_links)} mentions resolved")
            links.extend(type_links)

        logger.debug("Step 3: Pruning chains")
        pruned = prune_chains(context)
        stats["pruned_chains"] = len(pruned)
        stats["chains"] = len(context.chains)

        logger.info(f"Resolution complete: {len(context.chains)} chains in document {document.id}")
        return ResolutionResult(document=document, links=links, chains=list(context.chains), stats=stats)
