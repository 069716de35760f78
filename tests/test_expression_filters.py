"""Tests for expression filters."""

import pytest

from biocoref.core.types import CoreferenceType, ExpressionType
from biocoref.expressions.filters import (AnaphoricityFilter, CataphoricityFilter, HypernymOnlyFilter,
                                          NonCorefRelativePronFilter, PleonasticItFilter,
                                          ThirdPersonPronounFilter)
from biocoref.expressions.recognition import annotate

ANAPHORA = CoreferenceType.ANAPHORA
CATAPHORA = CoreferenceType.CATAPHORA
T = ExpressionType


class TestPronounFilters:
    def test_third_person(self, make_doc, find):
        doc = make_doc("it/PRP we/PRP its/PRP$")
        third = ThirdPersonPronounFilter()
        assert third.accept(ANAPHORA, T.PERSONAL_PRONOUN, find(doc, "it"))
        assert third.accept(ANAPHORA, T.POSSESSIVE_PRONOUN, find(doc, "its"))
        assert not third.accept(ANAPHORA, T.PERSONAL_PRONOUN, find(doc, "we"))
        assert not third.accept(ANAPHORA, T.DEFINITE_NP, find(doc, "it"))

    def test_pleonastic_it_rejected(self, make_doc, find):
        doc = make_doc({
            "tokens": "It/PRP is/VBZ possible/JJ that/IN aspirin/NN works/VBZ",
            "deps": [("nsubj", 2, 0), ("cop", 2, 1), ("ccomp", 2, 5), ("mark", 5, 3), ("nsubj", 5, 4)],
        })
        assert not PleonasticItFilter().accept(ANAPHORA, T.PERSONAL_PRONOUN, find(doc, "It"))

    def test_referential_it_accepted(self, make_doc, find):
        doc = make_doc({"tokens": "It/PRP binds/VBZ DNA/NN", "deps": [("nsubj", 1, 0), ("dobj", 1, 2)]})
        assert PleonasticItFilter().accept(ANAPHORA, T.PERSONAL_PRONOUN, find(doc, "It"))

    def test_non_coreferential_relative_pronouns(self, make_doc, find):
        doc = make_doc("which/WDT when/WRB aspirin/NN")
        relative = NonCorefRelativePronFilter()
        assert relative.accept(ANAPHORA, T.RELATIVE_PRONOUN, find(doc, "which"))
        assert not relative.accept(ANAPHORA, T.RELATIVE_PRONOUN, find(doc, "when"))
        assert not relative.accept(ANAPHORA, T.RELATIVE_PRONOUN, find(doc, "aspirin"))


class TestNominalFilters:
    @pytest.fixture
    def doc(self, make_doc):
        doc = make_doc(
            "Aspirin/NN works/VBZ ./.",
            {"tokens": "the/DT drug/NN helps/VBZ ./.", "phrases": [(0, 2)]},
            {"tokens": "the/DT following/VBG drugs/NNS/drug help/VBP ./.", "phrases": [(0, 3)]},
        )
        annotate(doc, [T.DEFINITE_NP])
        return doc

    def test_anaphoric_mention(self, doc, find):
        the_drug = find(doc, "the drug")
        assert AnaphoricityFilter().accept(ANAPHORA, T.DEFINITE_NP, the_drug)
        assert not CataphoricityFilter().accept(CATAPHORA, T.DEFINITE_NP, the_drug)

    def test_cataphoric_mention(self, doc, find):
        following = find(doc, "the following drugs")
        assert CataphoricityFilter().accept(CATAPHORA, T.DEFINITE_NP, following)
        assert not AnaphoricityFilter().accept(ANAPHORA, T.DEFINITE_NP, following)

    def test_pronouns_are_not_nominal(self, doc, find):
        assert not AnaphoricityFilter().accept(ANAPHORA, T.PERSONAL_PRONOUN, find(doc, "the drug"))

    def test_document_opening_mention_is_cataphoric(self, make_doc, find):
        doc = make_doc({"tokens": "the/DT drug/NN works/VBZ ./.", "phrases": [(0, 2)]}, "Aspirin/NN ./.")
        annotate(doc, [T.DEFINITE_NP])
        assert CataphoricityFilter().accept(CATAPHORA, T.DEFINITE_NP, find(doc, "the drug"))

    def test_modified_mention_rejected(self, make_doc, find):
        """'the drug of choice' is specified by its own modifier."""
        doc = make_doc(
            "Aspirin/NN works/VBZ ./.",
            {
                "tokens": "the/DT drug/NN of/IN choice/NN helps/VBZ",
                "deps": [("det", 1, 0), ("prep_of", 1, 3), ("nsubj", 4, 1)],
                "phrases": [(0, 2)],
            },
        )
        annotate(doc, [T.DEFINITE_NP])
        assert not AnaphoricityFilter().accept(ANAPHORA, T.DEFINITE_NP, find(doc, "the drug"))

    def test_hypernym_only(self, doc, find):
        hypernym = HypernymOnlyFilter()
        assert hypernym.accept(ANAPHORA, T.DEFINITE_NP, find(doc, "the drug"))
        assert not hypernym.accept(ANAPHORA, T.ZERO_ARTICLE_NP, find(doc, "Aspirin"))
