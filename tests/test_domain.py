"""Tests for the domain vocabulary."""

import logging

from biocoref.core.domain import DEFAULT_HYPERNYMS, DomainVocabulary


class TestDomainVocabulary:
    def test_defaults(self):
        vocabulary = DomainVocabulary()
        assert "humn" in vocabulary.population_semtypes()
        assert "patient" in vocabulary.population_hypernyms()
        assert "drug" in vocabulary.all_hypernyms()
        assert "phsu" in vocabulary.all_semtypes()

    def test_all_lists_have_no_duplicates(self):
        vocabulary = DomainVocabulary()
        assert len(vocabulary.all_semtypes()) == len(set(vocabulary.all_semtypes()))
        assert len(vocabulary.all_hypernyms()) == len(set(vocabulary.all_hypernyms()))

    def test_instances_do_not_share_lists(self):
        first = DomainVocabulary()
        first.collective_nouns.append("herd")
        assert "herd" not in DomainVocabulary().collective_nouns

    def test_is_descendant(self):
        vocabulary = DomainVocabulary(concept_hierarchy={
            "C_aspirin": ["C_nsaid"],
            "C_nsaid": ["C_drug"],
            "C_loop": ["C_loop"],
        })
        assert vocabulary.is_descendant("C_aspirin", "C_drug")
        assert not vocabulary.is_descendant("C_drug", "C_aspirin")
        assert not vocabulary.is_descendant("C_loop", "C_drug")


class TestFromProperties:
    def test_groups_replace_defaults(self):
        vocabulary = DomainVocabulary.from_properties({
            "domain.semtype.POPL": "humn; popg",
            "domain.hypernym.DEVICE": "device;implant",
            "domain.collectiveNoun": "herd",
        })
        assert vocabulary.semtypes == {"POPL": ["humn", "popg"]}
        assert vocabulary.hypernyms == {"DEVICE": ["device", "implant"]}
        assert vocabulary.collective_nouns == ["herd"]
        assert vocabulary.population_hypernyms() == []

    def test_unset_kinds_keep_defaults(self):
        vocabulary = DomainVocabulary.from_properties({"domain.maleNoun": "bull"})
        assert vocabulary.hypernyms == DEFAULT_HYPERNYMS
        assert vocabulary.male_nouns == ["bull"]

    def test_unknown_keys(self, caplog):
        with caplog.at_level(logging.WARNING):
            vocabulary = DomainVocabulary.from_properties({
                "domain.colour.RED": "red",
                "other.key": "ignored",
            })
        assert "domain.colour.RED" in caplog.text
        assert "other.key" not in caplog.text
        assert vocabulary.semtypes == DomainVocabulary().semtypes
