"""
Resolver driver: filters, scores and post-filters the referent candidates of each mention
"""

import logging
from typing import Dict, List, Optional, Sequence, Union

from ..candidates.filters import intersect
from ..ling.document import SPAN_ORDER, Document, SurfaceElement
from .configuration import Configuration
from .context import ResolutionContext
from .strategy import ScoringFunction, Strategy, SurfaceElementChain
from .types import CoreferenceType, ExpressionType, get_types
from .utils import compatible_expression

logger = logging.getLogger(__name__)

ScoreMap = Dict[SurfaceElement, int]

# Order in which coreference types are linked
RESOLUTION_ORDER = (
    CoreferenceType.APPOSITIVE,
    CoreferenceType.PREDICATE_NOMINATIVE,
    CoreferenceType.ANAPHORA,
    CoreferenceType.CATAPHORA,
    CoreferenceType.ONTOLOGICAL,
)


def filter_candidates(strategy: Strategy, exp: SurfaceElement, candidates: Optional[List[SurfaceElement]],
                      context: Optional[ResolutionContext] = None) -> List[SurfaceElement]:
    """
    Run the strategy's candidate filters one after the other.

    Each filter sees the candidates left by the previous one. The first
    filter to leave nothing ends the run.

    Returns:
        The surviving candidates in span order
    """
    if not candidates:
        logger.debug(f"No candidates to filter for {exp}")
        return []
    remaining = list(candidates)
    logger.debug(f"Filtering candidates for the mention {exp}")
    for method in strategy.candidate_filters:
        passed = method.filter(exp, strategy.coreference_type, strategy.expression_type, remaining, context)
        remaining = intersect(remaining, passed)
        if not remaining:
            logger.debug(f"No candidates left after {method!r}")
            break
        logger.debug(f"{len(remaining)} candidates passed {method!r}")
    return sorted(remaining, key=SPAN_ORDER)


def calculate_score(exp: SurfaceElement, coref_type: CoreferenceType, exp_type: ExpressionType,
                    candidate: SurfaceElement, scoring_functions: Sequence[ScoringFunction],
                    context: Optional[ResolutionContext] = None) -> int:
    """Sum of the scores of the agreements that hold minus the penalties of those that do not."""
    score = 0
    if not scoring_functions:
        logger.warning("No scoring function is provided. Skipping..")
        return score
    for function in scoring_functions:
        if function.agreement.agree(coref_type, exp_type, exp, candidate, context):
            score += function.score
            logger.debug(f"Candidate compatible by {function.agreement!r}. New score: {score}")
        else:
            score -= function.penalty
            logger.debug(f"Candidate not compatible by {function.agreement!r}. New score: {score}")
    return score


def score_candidates(strategy: Strategy, exp: SurfaceElement, candidates: Optional[List[SurfaceElement]],
                     context: Optional[ResolutionContext] = None) -> ScoreMap:
    scores: ScoreMap = {}
    if not candidates:
        return scores
    for cand in candidates:
        scores[cand] = calculate_score(exp, strategy.coreference_type, strategy.expression_type, cand,
                                       strategy.scoring_functions, context)
        logger.debug(f"Salience score for {cand}: {scores[cand]}")
    return scores


def apply_post_scoring_filters(strategy: Strategy, exp: SurfaceElement, scores: Optional[ScoreMap],
                               context: Optional[ResolutionContext] = None) -> ScoreMap:
    if not scores:
        return {}
    out = dict(scores)
    for post_filter in strategy.post_scoring_filters:
        out = post_filter.post_filter(exp, out, context)
        if not out:
            break
    return out


def expression_to_process(surf: SurfaceElement, strategy: Strategy,
                          context: Optional[ResolutionContext] = None) -> bool:
    """True if ``surf`` carries a mention of the strategy's type and every expression filter accepts it."""
    if compatible_expression(strategy.expression_type, surf) is None:
        return False
    for method in strategy.expression_filters:
        if not method.accept(strategy.coreference_type, strategy.expression_type, surf, context):
            logger.debug(f"{method!r} rejected the mention {surf}")
            return False
    return True


def process_surface_element(surf: SurfaceElement, strategy: Optional[Strategy],
                            context: Optional[ResolutionContext] = None) -> List[SurfaceElement]:
    """Best referents of one mention under one strategy. Empty when unresolved."""
    if strategy is None or not expression_to_process(surf, strategy, context):
        logger.debug(f"No appropriate resolution strategy for the mention {surf}. Skipping..")
        return []
    document = context.document if context is not None else surf.document
    candidates = filter_candidates(strategy, surf, document.all_surface_elements(), context)
    scores = score_candidates(strategy, surf, candidates, context)
    best = apply_post_scoring_filters(strategy, surf, scores, context)
    for cand, score in best.items():
        logger.debug(f"Best candidate with score {score}: {cand}")
    return sorted(best.keys(), key=SPAN_ORDER)


def remove_identical(existing: List[SurfaceElementChain], surf: SurfaceElement,
                     best: List[SurfaceElement]) -> List[SurfaceElement]:
    """Drop referents that already took ``surf`` as their own referent."""
    out = []
    for ref in best:
        linked_back = any(link.expression is ref and any(r is surf for r in link.referents)
                          for link in existing)
        if not linked_back:
            out.append(ref)
    return out


def process_document(context: ResolutionContext, coref_type: CoreferenceType) -> List[SurfaceElementChain]:
    """
    Resolve every mention of a document for one coreference type.

    A link is produced for each mention type that has a strategy, resolved
    or not.
    """
    configuration = context.configuration
    links: List[SurfaceElementChain] = []
    for sentence in context.document.sentences:
        for surf in list(sentence.surface_elements):
            for exp_type in get_types(surf):
                strategy = configuration.get_strategy(coref_type, exp_type)
                if strategy is None:
                    continue
                logger.debug(f"Processing {coref_type.value} mention: {surf}")
                best = process_surface_element(surf, strategy, context)
                if coref_type in (CoreferenceType.APPOSITIVE, CoreferenceType.ONTOLOGICAL):
                    best = remove_identical(links, surf, best)
                link = SurfaceElementChain(strategy, surf, best)
                links.append(link)
                logger.debug(f"Adding link: {link}")
    return links


def resolve(target: Union[Document, ResolutionContext], configuration=None) -> List[SurfaceElementChain]:
    """
    Link every mention of a document, one coreference type at a time.

    Args:
        target: A document, or a context already set up for one
        configuration: Strategies to use when ``target`` is a document;
            the default strategies when None

    Returns:
        All links, in resolution order
    """
    if isinstance(target, ResolutionContext):
        context = target
    else:
        context = ResolutionContext(document=target, configuration=configuration)
    if context.configuration is None:
        context.configuration = Configuration.default()

    links: List[SurfaceElementChain] = []
    for coref_type in RESOLUTION_ORDER:
        if not context.configuration.has_coref_type(coref_type):
            continue
        type_links = process_document(context, coref_type)
        resolved = sum(1 for link in type_links if link.is_resolved())
        logger.info(f"{coref_type.value}: {resolved} of {len(type_links)} mentions resolved")
        links.extend(type_links)
    return links
