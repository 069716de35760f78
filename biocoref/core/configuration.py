"""
Strategy configuration: which strategy resolves which (coreference type, mention type) pair.

Three built-in strategy sets are provided. Custom sets can be declared by
component name in a mapping or a YAML file, for example::

    extends: default
    strategies:
      - coreference_type: Anaphora
        expression_types: [PersonalPronoun]
        expression_filters: [ThirdPersonPronoun, PleonasticIt]
        candidate_filters:
          - PriorDiscourse
          - {name: WindowSize, args: [2]}
          - Default
        scoring_functions:
          - {agreement: Number, score: 1}
          - {agreement: Animacy, score: 1}
        post_scoring_filters:
          - {name: Threshold, args: [2]}
          - TopScore
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

# Component modules register themselves on import
from .. import agreement  # noqa: F401
from ..candidates import filters as candidate_filters  # noqa: F401
from ..candidates import post_scoring  # noqa: F401
from ..expressions import filters as expression_filters  # noqa: F401
from .exceptions import ConfigurationError
from .registry import AGREEMENT, CANDIDATE_FILTER, EXPRESSION_FILTER, POST_SCORING_FILTER, create_component
from .strategy import ScoringFunction, Strategy
from .types import WINDOW_ALL, WINDOW_SECTION, CoreferenceType, ExpressionType

logger = logging.getLogger(__name__)

StrategyKey = Tuple[CoreferenceType, ExpressionType]


class Configuration:
    """
    A set of strategies indexed by (coreference type, expression type).

    A later strategy for the same pair replaces an earlier one.
    """

    def __init__(self, strategies: Iterable[Strategy] = ()):
        self._strategies: Dict[StrategyKey, Strategy] = {}
        for strategy in strategies:
            if strategy.key in self._strategies:
                logger.debug(f"Replacing strategy for {strategy.key[0].value}/{strategy.key[1].value}")
            self._strategies[strategy.key] = strategy

    @property
    def strategies(self) -> List[Strategy]:
        return list(self._strategies.values())

    def get_strategy(self, coref_type: CoreferenceType, exp_type: ExpressionType) -> Optional[Strategy]:
        return self._strategies.get((coref_type, exp_type))

    def has_coref_type(self, coref_type: CoreferenceType) -> bool:
        return any(key[0] is coref_type for key in self._strategies)

    def has_exp_type(self, exp_type: ExpressionType) -> bool:
        return any(key[1] is exp_type for key in self._strategies)

    def expression_types(self) -> List[ExpressionType]:
        """Mention types some strategy resolves, in declaration order."""
        out: List[ExpressionType] = []
        for _, exp_type in self._strategies:
            if exp_type not in out:
                out.append(exp_type)
        return out

    def merged(self, other: "Configuration") -> "Configuration":
        """A new configuration where the strategies of ``other`` take precedence."""
        return Configuration(self.strategies + other.strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    def __iter__(self):
        return iter(self._strategies.values())

    @classmethod
    def default(cls) -> "Configuration":
        return cls(default_strategies())

    @classmethod
    def generic(cls) -> "Configuration":
        return cls(generic_pipeline_strategies())

    @classmethod
    def i2b2(cls) -> "Configuration":
        return cls(i2b2_strategies())

    @classmethod
    def builtin(cls, name: str) -> "Configuration":
        """One of the built-in strategy sets by name."""
        try:
            factory = BUILTIN_STRATEGY_SETS[name]
        except KeyError:
            known = ", ".join(sorted(BUILTIN_STRATEGY_SETS))
            raise ConfigurationError(f"Unknown strategy set '{name}'. Known: {known}") from None
        return cls(factory())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Configuration":
        """
        Build a configuration from a mapping of component names.

        Args:
            data: Mapping with a ``strategies`` list and an optional
                ``extends`` naming a built-in set to start from

        Returns:
            The configuration

        Raises:
            ConfigurationError: If the mapping is malformed or names an unknown component
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"Strategy configuration must be a mapping, got {type(data).__name__}")
        try:
            config = StrategySetConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid strategy configuration: {e}") from e

        strategies = []
        for entry in config.strategies:
            strategies.extend(entry.build())
        configuration = cls(strategies)
        if config.extends:
            configuration = cls.builtin(config.extends).merged(configuration)
        logger.info(f"Loaded {len(configuration)} strategies")
        return configuration

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Configuration":
        """Build a configuration from a YAML file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not read strategy configuration {path}: {e}") from e
        logger.info(f"Loading strategies from {path}")
        return cls.from_dict(data or {})


class ComponentConfig(BaseModel):
    """A component named in a configuration file, with its constructor arguments."""

    name: str
    args: List[Any] = Field(default_factory=list)

    def build(self, kind: str) -> Any:
        return create_component(kind, self.name, *self.args)


class ScoringFunctionConfig(BaseModel):
    agreement: str
    score: int = 1
    penalty: int = 0

    def build(self) -> ScoringFunction:
        return ScoringFunction(create_component(AGREEMENT, self.agreement), self.score, self.penalty)


def _component_list(value: Any) -> Any:
    if value is None:
        return []
    if not isinstance(value, list):
        return value
    return [{"name": v} if isinstance(v, str) else v for v in value]


class StrategyConfig(BaseModel):
    """One strategy entry, shared by every mention type it lists."""

    coreference_type: CoreferenceType
    expression_types: List[ExpressionType]
    expression_filters: List[ComponentConfig] = Field(default_factory=list)
    candidate_filters: List[ComponentConfig] = Field(default_factory=list)
    scoring_functions: List[ScoringFunctionConfig] = Field(default_factory=list)
    post_scoring_filters: List[ComponentConfig] = Field(default_factory=list)

    @field_validator("expression_types", mode="before")
    @classmethod
    def wrap_single_type(cls, value: Any) -> Any:
        return [value] if isinstance(value, str) else value

    @field_validator("expression_filters", "candidate_filters", "post_scoring_filters", mode="before")
    @classmethod
    def names_to_components(cls, value: Any) -> Any:
        return _component_list(value)

    def build(self) -> List[Strategy]:
        """One Strategy per listed mention type. Component instances are shared between them."""
        exp_filters = [c.build(EXPRESSION_FILTER) for c in self.expression_filters]
        cand_filters = [c.build(CANDIDATE_FILTER) for c in self.candidate_filters]
        scoring = [s.build() for s in self.scoring_functions]
        post_filters = [c.build(POST_SCORING_FILTER) for c in self.post_scoring_filters]
        return [Strategy.create(self.coreference_type, exp_type, exp_filters, cand_filters, scoring, post_filters)
                for exp_type in self.expression_types]


class StrategySetConfig(BaseModel):
    extends: Optional[str] = None
    strategies: List[StrategyConfig] = Field(default_factory=list)


def _ef(*names: str) -> List[Any]:
    return [create_component(EXPRESSION_FILTER, n) for n in names]


def _cf(name: str, *args: Any) -> Any:
    return create_component(CANDIDATE_FILTER, name, *args)


def _ps(name: str, *args: Any) -> Any:
    return create_component(POST_SCORING_FILTER, name, *args)


def _sf(name: str, score: int, penalty: int = 0) -> ScoringFunction:
    return ScoringFunction(create_component(AGREEMENT, name), score, penalty)


def _strategies(coref_type: CoreferenceType, exp_types: Iterable[ExpressionType], exp_filters, cand_filters,
                scoring, post_filters) -> List[Strategy]:
    return [Strategy.create(coref_type, t, exp_filters, cand_filters, scoring, post_filters) for t in exp_types]


def _pronoun_scoring() -> List[ScoringFunction]:
    return [_sf("Animacy", 1), _sf("Gender", 1), _sf("Number", 1), _sf("Person", 1)]


def _nominal_scoring() -> List[ScoringFunction]:
    return [_sf("Number", 1, 1), _sf("HypernymList", 3)]


def _base_post_scoring() -> List[Any]:
    return [_ps("Threshold", 4), _ps("TopScore")]


NOMINAL_ANAPHORA_TYPES = (ExpressionType.DEFINITE_NP, ExpressionType.DEMONSTRATIVE_NP,
                          ExpressionType.DISTRIBUTIVE_NP)


def default_strategies() -> List[Strategy]:
    """
    The library default: anaphora and cataphora for pronouns and nominal mentions.

    Pronouns are scored on morphosyntactic agreement, nominal mentions on
    number and domain hypernyms. A candidate needs a score of at least 4.
    """
    T = ExpressionType
    anaphoric = _ef("Anaphoricity")
    possessive = _ef("ThirdPersonPronoun")
    personal = _ef("ThirdPersonPronoun", "PleonasticIt")
    relative = _ef("NonCorefRelativePron")

    anaphora_filters = [_cf("PriorDiscourse"), _cf("WindowSize", 2), _cf("SyntaxBased"), _cf("Default")]
    possessive_filters = [_cf("PriorDiscourse"), _cf("WindowSize", 2), _cf("Default")]
    relative_filters = [_cf("PriorDiscourse"), _cf("WindowSize", 0), _cf("Default")]

    graph_based = _base_post_scoring() + [_ps("Salience", "ParseTree")]
    closeness = _base_post_scoring() + [_ps("Salience", "Proximity")]
    relative_post = [_ps("Threshold", 1), _ps("Salience", "Proximity")]

    pronoun_scoring = _pronoun_scoring()
    possessive_scoring = pronoun_scoring + [_sf("SemanticCoercion", 1)]
    relative_scoring = [_sf("Adjacency", 1)]
    nominal_scoring = _nominal_scoring()

    A = CoreferenceType.ANAPHORA
    defs = []
    defs += _strategies(A, [T.PERSONAL_PRONOUN], personal, anaphora_filters, pronoun_scoring, graph_based)
    defs += _strategies(A, [T.POSSESSIVE_PRONOUN], possessive, possessive_filters, possessive_scoring,
                        graph_based)
    defs += _strategies(A, [T.DISTRIBUTIVE_PRONOUN, T.RECIPROCAL_PRONOUN], [], anaphora_filters,
                        pronoun_scoring, closeness)
    defs += _strategies(A, [T.RELATIVE_PRONOUN], relative, relative_filters, relative_scoring, relative_post)
    defs += _strategies(A, NOMINAL_ANAPHORA_TYPES, anaphoric, anaphora_filters, nominal_scoring, closeness)

    cataphoric = _ef("Cataphoricity")
    cataphora_filters = [_cf("SubsequentDiscourse"), _cf("WindowSize", 2), _cf("SyntaxBased"),
                         _cf("Default"), _cf("HasSemantics")]
    cataphora_pronoun_filters = [_cf("SubsequentDiscourse"), _cf("WindowSize", 0), _cf("SyntaxBased"),
                                 _cf("Default"), _cf("HasSemantics")]
    cataphora_pronoun_scoring = pronoun_scoring + [_sf("DiscourseConnective", 1, 2)]

    C = CoreferenceType.CATAPHORA
    defs += _strategies(C, [T.PERSONAL_PRONOUN, T.POSSESSIVE_PRONOUN], cataphoric, cataphora_pronoun_filters,
                        cataphora_pronoun_scoring, closeness)
    defs += _strategies(C, NOMINAL_ANAPHORA_TYPES, cataphoric, cataphora_filters, nominal_scoring, closeness)
    return defs


def generic_pipeline_strategies() -> List[Strategy]:
    """
    The generic pipeline set: the default set with exemplification filtering,
    appositive and predicate nominative links.
    """
    T = ExpressionType
    anaphoric = _ef("Anaphoricity")
    possessive = _ef("ThirdPersonPronoun")
    personal = _ef("ThirdPersonPronoun", "PleonasticIt")
    cataphoric = _ef("Cataphoricity")

    pronoun_filters = [_cf("PriorDiscourse"), _cf("WindowSize", 2), _cf("SyntaxBased"), _cf("Default"),
                       _cf("Exemplification")]
    poss_filters = [_cf("PriorDiscourse"), _cf("WindowSize", 2), _cf("Default"), _cf("Exemplification")]
    np_filters = [_cf("PriorDiscourse"), _cf("SyntaxBased"), _cf("Default"), _cf("Exemplification")]
    cataphora_filters = [_cf("SubsequentDiscourse"), _cf("WindowSize", 2), _cf("SyntaxBased"), _cf("Default")]
    cataphora_poss_filters = [_cf("SubsequentDiscourse"), _cf("WindowSize", 0), _cf("Default")]
    cataphora_pers_filters = [_cf("SubsequentDiscourse"), _cf("WindowSize", 0), _cf("SyntaxBased"),
                              _cf("Default")]
    appos_filters = [_cf("WindowSize", 0), _cf("Default")]
    pred_nom_filters = appos_filters + [_cf("PriorDiscourse"), _cf("WindowSize", 0), _cf("Default")]

    pronoun_scoring = _pronoun_scoring()
    nominal_scoring = _nominal_scoring()
    cat_pronoun_scoring = pronoun_scoring + [_sf("DiscourseConnective", 1, 2)]
    appos_scoring = [_sf("Number", 1, 1), _sf("SyntacticAppositive", 3, 2), _sf("HypernymList", 1, 1)]
    pred_nom_scoring = [_sf("Number", 1, 1), _sf("PredicateNominative", 3, 2), _sf("HypernymList", 1, 1)]

    parse_tree = _base_post_scoring() + [_ps("Salience", "ParseTree")]
    closeness = _base_post_scoring() + [_ps("Salience", "Proximity")]

    A = CoreferenceType.ANAPHORA
    C = CoreferenceType.CATAPHORA
    defs = []
    defs += _strategies(A, [T.PERSONAL_PRONOUN], personal, pronoun_filters, pronoun_scoring, parse_tree)
    defs += _strategies(A, [T.POSSESSIVE_PRONOUN], possessive, poss_filters, pronoun_scoring, parse_tree)
    defs += _strategies(A, [T.DISTRIBUTIVE_PRONOUN, T.RECIPROCAL_PRONOUN], [], pronoun_filters,
                        pronoun_scoring, closeness)
    defs += _strategies(A, NOMINAL_ANAPHORA_TYPES, anaphoric, np_filters, nominal_scoring, closeness)
    defs += _strategies(C, [T.PERSONAL_PRONOUN], personal, cataphora_pers_filters, cat_pronoun_scoring,
                        closeness)
    defs += _strategies(C, [T.POSSESSIVE_PRONOUN], possessive, cataphora_poss_filters, cat_pronoun_scoring,
                        closeness)
    defs += _strategies(C, [T.DEFINITE_NP], cataphoric, cataphora_filters, nominal_scoring, closeness)
    defs += _strategies(CoreferenceType.APPOSITIVE, [T.DEFINITE_NP, T.INDEFINITE_NP, T.ZERO_ARTICLE_NP], [],
                        appos_filters, appos_scoring, closeness)
    defs += _strategies(CoreferenceType.PREDICATE_NOMINATIVE, [T.INDEFINITE_NP, T.ZERO_ARTICLE_NP], [],
                        pred_nom_filters, pred_nom_scoring, closeness)
    return defs


def i2b2_strategies() -> List[Strategy]:
    """
    Strategies tuned for clinical discharge summaries.

    Windows follow section boundaries, and nominal mentions are scored on
    lexical overlap and semantic type rather than on hypernym lists.
    """
    T = ExpressionType
    anaphoric = _ef("Anaphoricity")

    anaphora_filters = [_cf("PriorDiscourse"), _cf("WindowSize", WINDOW_SECTION), _cf("SyntaxBased"),
                        _cf("SemanticClass")]
    poss_filters = [_cf("PriorDiscourse"), _cf("WindowSize", WINDOW_SECTION), _cf("SemanticClass")]
    relative_filters = [_cf("PriorDiscourse"), _cf("WindowSize", 0), _cf("SemanticClass")]
    zero_article_filters = [_cf("PriorDiscourse"), _cf("WindowSize", WINDOW_ALL), _cf("SyntaxBased"),
                            _cf("SemanticClass")]
    appos_filters = [_cf("WindowSize", 0), _cf("SemanticClass")]

    pronoun_scoring = _pronoun_scoring()
    relative_scoring = [_sf("Animacy", 1)]
    nominal_scoring = [_sf("Number", 1, 1), _sf("SemanticType", 2, 2), _sf("HeadWord", 2),
                       _sf("ExactString", 2), _sf("NonPostModifierMatch", 2), _sf("RelaxedStem", 2)]
    zero_article_scoring = [_sf("Number", 1, 3), _sf("ExactString", 4), _sf("NonPostModifierMatch", 4),
                            _sf("KeyValuePair", 4), _sf("RelaxedStem", 3)]
    appos_scoring = [_sf("Number", 1, 1), _sf("SyntacticAppositive", 3, 2)]

    post_filters = _base_post_scoring() + [_ps("Salience", "Proximity")]
    relative_post = [_ps("Threshold", 1), _ps("TopScore"), _ps("Salience", "Proximity")]

    A = CoreferenceType.ANAPHORA
    defs = []
    defs += _strategies(A, [T.PERSONAL_PRONOUN, T.DISTRIBUTIVE_PRONOUN, T.RECIPROCAL_PRONOUN], [],
                        anaphora_filters, pronoun_scoring, post_filters)
    defs += _strategies(A, [T.POSSESSIVE_PRONOUN], [], poss_filters, pronoun_scoring, post_filters)
    defs += _strategies(A, [T.RELATIVE_PRONOUN], [], relative_filters, relative_scoring, relative_post)
    defs += _strategies(A, NOMINAL_ANAPHORA_TYPES, anaphoric, anaphora_filters, nominal_scoring, post_filters)
    defs += _strategies(A, [T.ZERO_ARTICLE_NP], [], zero_article_filters, zero_article_scoring, post_filters)
    defs += _strategies(CoreferenceType.APPOSITIVE, [T.DEFINITE_NP, T.INDEFINITE_NP], [], appos_filters,
                        appos_scoring, post_filters)
    return defs


BUILTIN_STRATEGY_SETS = {
    "default": default_strategies,
    "generic": generic_pipeline_strategies,
    "i2b2": i2b2_strategies,
}
