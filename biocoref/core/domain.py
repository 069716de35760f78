"""
Domain vocabulary used by the agreement and recognition rules.
"""

import logging
from typing import Dict, List, Mapping

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DOMAIN_PREFIX = "domain."
LIST_SEPARATOR = ";"

# Semantic types are UMLS semantic type abbreviations
DEFAULT_SEMTYPES: Dict[str, List[str]] = {
    "POPL": ["humn", "popg", "podg", "prog", "aggp", "famg", "grup", "prof", "mamm"],
    "DRUG": ["phsu", "orch", "antb", "clnd", "inch", "vita", "hops", "strd"],
    "DISO": ["dsyn", "neop", "patf", "sosy", "mobd", "inpo", "acab", "cgab", "anab", "comd", "emod"],
    "PROTEIN": ["aapp", "gngm", "enzy", "amas", "bacs", "rcpt", "imft"],
    "PROC": ["diap", "lbpr", "topp", "hlca", "resa"],
    "ANAT": ["bpoc", "tisu", "cell", "celc", "blor", "bsoj", "bdsu"],
}

DEFAULT_HYPERNYMS: Dict[str, List[str]] = {
    "POPL": ["patient", "subject", "participant", "individual", "person", "people",
             "child", "volunteer", "group", "population", "case"],
    "DRUG": ["drug", "medication", "agent", "compound", "medicine", "inhibitor", "treatment",
             "therapy", "dose"],
    "DISO": ["disease", "disorder", "condition", "syndrome", "symptom", "infection", "lesion",
             "tumor", "cancer"],
    "PROTEIN": ["protein", "gene", "enzyme", "factor", "receptor", "kinase", "molecule",
                "product", "mutant", "isoform", "transcript"],
    "PROC": ["procedure", "test", "examination", "surgery", "operation", "assay"],
    "ANAT": ["cell", "tissue", "organ", "region"],
}

DEFAULT_EVENT_TRIGGERS: Dict[str, List[str]] = {
    "PROTEIN": ["expression", "activity", "activation", "binding", "phosphorylation", "level",
                "production", "transcription", "function", "secretion", "degradation"],
    "DRUG": ["administration", "use", "effect", "dosage"],
}

DEFAULT_MERONYMS: Dict[str, List[str]] = {
    "PROTEIN": ["domain", "promoter", "region", "subunit", "residue", "terminus", "site", "motif"],
    "ANAT": ["surface", "membrane", "nucleus"],
}

DEFAULT_SEMANTIC_GROUPS: Dict[str, List[str]] = {
    "LIVB": ["humn", "popg", "podg", "prog", "aggp", "famg", "grup", "prof", "mamm"],
    "CHEM": ["phsu", "orch", "antb", "clnd", "inch", "vita", "hops", "strd", "aapp", "enzy",
             "bacs", "rcpt", "imft"],
    "GENE": ["gngm", "amas"],
    "DISO": ["dsyn", "neop", "patf", "sosy", "mobd", "inpo", "acab", "cgab", "anab", "comd", "emod"],
    "PROC": ["diap", "lbpr", "topp", "hlca", "resa"],
    "ANAT": ["bpoc", "tisu", "cell", "celc", "blor", "bsoj", "bdsu"],
}


def _copy(groups: Dict[str, List[str]]) -> Dict[str, List[str]]:
    return {name: list(words) for name, words in groups.items()}


class DomainVocabulary(BaseModel):
    """Word lists and semantic type groupings for one text domain."""

    semtypes: Dict[str, List[str]] = Field(default_factory=lambda: _copy(DEFAULT_SEMTYPES))
    hypernyms: Dict[str, List[str]] = Field(default_factory=lambda: _copy(DEFAULT_HYPERNYMS))
    hyponyms: Dict[str, List[str]] = Field(default_factory=dict)
    event_triggers: Dict[str, List[str]] = Field(default_factory=lambda: _copy(DEFAULT_EVENT_TRIGGERS))
    meronyms: Dict[str, List[str]] = Field(default_factory=lambda: _copy(DEFAULT_MERONYMS))
    semantic_groups: Dict[str, List[str]] = Field(default_factory=lambda: _copy(DEFAULT_SEMANTIC_GROUPS))
    collective_nouns: List[str] = Field(default_factory=lambda: ["group", "population", "family",
                                                                 "cohort", "team", "staff"])
    female_nouns: List[str] = Field(default_factory=lambda: ["woman", "girl", "mother", "daughter",
                                                             "sister", "wife", "female", "lady"])
    male_nouns: List[str] = Field(default_factory=lambda: ["man", "boy", "father", "son",
                                                           "brother", "husband", "male", "gentleman"])
    # concept id -> parent concept ids
    concept_hierarchy: Dict[str, List[str]] = Field(default_factory=dict)

    def all_semtypes(self) -> List[str]:
        """Every semantic type of every group, in order."""
        out: List[str] = []
        for types in self.semtypes.values():
            for t in types:
                if t not in out:
                    out.append(t)
        return out

    def all_hypernyms(self) -> List[str]:
        out: List[str] = []
        for words in self.hypernyms.values():
            for w in words:
                if w not in out:
                    out.append(w)
        return out

    def population_semtypes(self) -> List[str]:
        return self.semtypes.get("POPL", [])

    def population_hypernyms(self) -> List[str]:
        return self.hypernyms.get("POPL", [])

    def is_descendant(self, child: str, ancestor: str) -> bool:
        """True if ``ancestor`` is reachable from ``child`` through the concept hierarchy."""
        seen = set()
        frontier = list(self.concept_hierarchy.get(child, []))
        while frontier:
            parent = frontier.pop()
            if parent == ancestor:
                return True
            if parent in seen:
                continue
            seen.add(parent)
            frontier.extend(self.concept_hierarchy.get(parent, []))
        return False

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "DomainVocabulary":
        """
        Build a vocabulary from flat ``domain.``-prefixed properties.

        Keys look like ``domain.semtype.POPL`` or ``domain.collectiveNoun``,
        and values are ``;``-separated lists. Groups named in the properties
        replace the default groups of the same kind entirely.
        """
        grouped = {
            "semtype": {},
            "hypernym": {},
            "hyponym": {},
            "meronym": {},
            "eventTrigger": {},
        }
        flat = {"collectiveNoun": None, "femaleNoun": None, "maleNoun": None}
        for key, value in properties.items():
            if not key.startswith(DOMAIN_PREFIX):
                continue
            rest = key[len(DOMAIN_PREFIX):]
            items = [v.strip() for v in str(value).split(LIST_SEPARATOR) if v.strip()]
            kind, _, group = rest.partition(".")
            if kind in grouped and group:
                grouped[kind][group] = items
            elif kind in flat and not group:
                flat[kind] = items
            else:
                logger.warning(f"Ignoring unknown domain property: {key}")

        values = {}
        for kind, field_name in (("semtype", "semtypes"), ("hypernym", "hypernyms"),
                                 ("hyponym", "hyponyms"), ("meronym", "meronyms"),
                                 ("eventTrigger", "event_triggers")):
            if grouped[kind]:
                values[field_name] = grouped[kind]
        for kind, field_name in (("collectiveNoun", "collective_nouns"),
                                 ("femaleNoun", "female_nouns"), ("maleNoun", "male_nouns")):
            if flat[kind] is not None:
                values[field_name] = flat[kind]
        return cls(**values)
