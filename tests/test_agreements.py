"""Tests for agreement predicates."""

import pytest

from biocoref.agreement.lexical import (AcronymAgreement, ExactStringAgreement, HeadWordAgreement,
                                        NonPostModifierMatchAgreement, ProperHeadWordAgreement,
                                        RelaxedHeadMatchAgreement, RelaxedStemAgreement,
                                        StrictHeadMatchAgreement)
from biocoref.agreement.morphosyntactic import (Animacy, AnimacyAgreement, GenderAgreement, Number,
                                                NumberAgreement, PersonAgreement, animacy, number)
from biocoref.agreement.semantic import (DocumentTopicAgreement, HypernymListAgreement, OntologyAgreement,
                                         SemanticCoercionAgreement, SemanticGroupAgreement,
                                         SemanticTypeAgreement, TaxonomyAgreement)
from biocoref.agreement.syntactic import (AdjacencyAgreement, ClosestRCMODAgreement,
                                          DiscourseConnectiveAgreement, KeyValuePairAgreement,
                                          PredicateNominativeAgreement, RelativePronDependencyAgreement,
                                          SyntacticAppositiveAgreement)
from biocoref.core.context import ResolutionContext
from biocoref.core.domain import DomainVocabulary
from biocoref.core.types import CoreferenceType, ExpressionType

ANAPHORA = CoreferenceType.ANAPHORA
CATAPHORA = CoreferenceType.CATAPHORA
T = ExpressionType


def agree(agreement, exp, referent, exp_type=T.PERSONAL_PRONOUN, coref_type=ANAPHORA, context=None):
    return agreement.agree(coref_type, exp_type, exp, referent, context)


class TestNumber:
    def test_number_of_nouns_and_pronouns(self, make_doc, find):
        doc = make_doc("aspirin/NN and/CC patients/NNS group/NN they/PRP it/PRP")
        assert number(find(doc, "aspirin")) is Number.SINGULAR
        assert number(find(doc, "patients")) is Number.PLURAL
        assert number(find(doc, "group")) is Number.PLURAL
        assert number(find(doc, "they")) is Number.PLURAL
        assert number(find(doc, "it")) is Number.SINGULAR
        assert number(find(doc, "and")) is Number.PLURAL

    def test_agreement(self, make_doc, find):
        doc = make_doc("aspirin/NN patients/NNS they/PRP it/PRP")
        assert agree(NumberAgreement(), find(doc, "it"), find(doc, "aspirin"))
        assert agree(NumberAgreement(), find(doc, "they"), find(doc, "patients"))
        assert not agree(NumberAgreement(), find(doc, "they"), find(doc, "aspirin"))

    def test_plural_pronoun_takes_coordination(self, make_doc, find):
        doc = make_doc(
            "aspirin/NN and/CC ibuprofen/NN help/VBP ./. They/PRP work/VBP ./.",
            entities=[(0, 0, 1, "DRUG", ["phsu"], [], "T1"), (0, 2, 3, "DRUG", ["phsu"], [], "T2")],
            conjunctions=[["T1", "T2"]],
        )
        assert agree(NumberAgreement(), find(doc, "They"), find(doc, "and"))


class TestGenderPersonAnimacy:
    @pytest.fixture
    def doc(self, make_doc):
        return make_doc(
            "woman/NN man/NN patient/NN aspirin/NN patients/NNS she/PRP he/PRP it/PRP they/PRP we/PRP",
            entities=[(0, 4, 5, "POPL", ["humn"])],
        )

    def test_gender(self, doc, find):
        gender = GenderAgreement()
        assert agree(gender, find(doc, "she"), find(doc, "woman"))
        assert not agree(gender, find(doc, "he"), find(doc, "woman"))
        assert agree(gender, find(doc, "he"), find(doc, "man"))

    def test_population_noun_takes_either_gender(self, doc, find):
        assert agree(GenderAgreement(), find(doc, "she"), find(doc, "patient"))
        assert agree(GenderAgreement(), find(doc, "he"), find(doc, "patient"))

    def test_unknown_gender_agrees_with_unknown(self, doc, find):
        assert agree(GenderAgreement(), find(doc, "it"), find(doc, "aspirin"))

    def test_person(self, doc, find):
        assert agree(PersonAgreement(), find(doc, "it"), find(doc, "aspirin"))
        assert not agree(PersonAgreement(), find(doc, "we"), find(doc, "patients"))

    def test_animacy_values(self, doc, find):
        assert animacy(find(doc, "he")) is Animacy.ANIMATE
        assert animacy(find(doc, "it")) is Animacy.NON_ANIMATE
        assert animacy(find(doc, "they")) is Animacy.MAYBE_ANIMATE
        assert animacy(find(doc, "patients")) is Animacy.ANIMATE
        assert animacy(find(doc, "aspirin")) is None

    def test_animacy_agreement(self, doc, find):
        agreement = AnimacyAgreement()
        assert agree(agreement, find(doc, "they"), find(doc, "patients"))
        assert agree(agreement, find(doc, "they"), find(doc, "aspirin"))
        assert agree(agreement, find(doc, "it"), find(doc, "aspirin"))
        assert not agree(agreement, find(doc, "he"), find(doc, "aspirin"))
        assert not agree(agreement, find(doc, "it"), find(doc, "patients"))


class TestLexicalAgreements:
    @pytest.fixture
    def doc(self, make_doc):
        return make_doc(
            {"tokens": "the/DT mutant/JJ proteins/NNS/protein", "phrases": [(0, 3)]},
            {"tokens": "a/DT mutant/JJ protein/NN", "phrases": [(0, 3)]},
            {"tokens": "the/DT protein/NN", "phrases": [(0, 2)]},
            {"tokens": "IL-2/NN receptor/NN", "phrases": [(0, 2)]},
            {"tokens": "IL-4/NN receptor/NN", "phrases": [(0, 2)]},
            {"tokens": "tumor/NN necrosis/NN factor/NN", "phrases": [(0, 3)]},
            "TNF/NNP",
        )

    def test_exact_string(self, doc, find):
        assert agree(ExactStringAgreement(), find(doc, "the protein"), find(doc, "the protein"))
        assert not agree(ExactStringAgreement(), find(doc, "the protein"), find(doc, "a mutant protein"))

    def test_head_word_uses_lemmas(self, doc, find):
        assert agree(HeadWordAgreement(), find(doc, "the mutant proteins"), find(doc, "the protein"))
        assert not agree(HeadWordAgreement(), find(doc, "the protein"), find(doc, "IL-2 receptor"))

    def test_relaxed_head_match(self, doc, find):
        assert agree(RelaxedHeadMatchAgreement(), find(doc, "the protein"), find(doc, "a mutant protein"))

    def test_strict_head_match_needs_modifiers(self, doc, find):
        strict = StrictHeadMatchAgreement()
        assert agree(strict, find(doc, "the protein"), find(doc, "a mutant protein"))
        assert not agree(strict, find(doc, "a mutant protein"), find(doc, "the protein"))

    def test_non_post_modifier_match(self, doc, find):
        match = NonPostModifierMatchAgreement()
        assert agree(match, find(doc, "the protein"), find(doc, "the protein"), T.DEFINITE_NP)
        assert not agree(match, find(doc, "the protein"), find(doc, "a mutant protein"), T.DEFINITE_NP)
        assert not agree(match, find(doc, "the protein"), find(doc, "the protein"), T.PERSONAL_PRONOUN)

    def test_relaxed_stem(self, doc, find):
        stem = RelaxedStemAgreement()
        assert agree(stem, find(doc, "the mutant proteins"), find(doc, "a mutant protein"), T.DEFINITE_NP)

    def test_relaxed_stem_numbers_must_match(self, doc, find):
        """IL-2 receptor and IL-4 receptor share half their stems but not their numbers."""
        assert not agree(RelaxedStemAgreement(), find(doc, "IL-2 receptor"), find(doc, "IL-4 receptor"),
                         T.ZERO_ARTICLE_NP)

    def test_acronym(self, doc, find):
        acronym = AcronymAgreement()
        assert agree(acronym, find(doc, "TNF"), find(doc, "tumor necrosis factor"), T.ZERO_ARTICLE_NP)
        assert not agree(acronym, find(doc, "TNF"), find(doc, "IL-2 receptor"), T.ZERO_ARTICLE_NP)

    def test_proper_head_word(self, make_doc, find):
        doc = make_doc({"tokens": "human/JJ IL/NNP", "phrases": [(0, 2)]}, "IL/NNP", "protein/NN")
        proper = ProperHeadWordAgreement()
        assert not agree(proper, find(doc, "IL"), find(doc, "human IL"), T.ZERO_ARTICLE_NP)
        assert agree(proper, find(doc, "IL"), find(doc, "protein"), T.ZERO_ARTICLE_NP)


class TestSemanticAgreements:
    @pytest.fixture
    def doc(self, make_doc):
        return make_doc(
            "aspirin/NN helps/VBZ ./.",
            "p53/NN binds/VBZ ./.",
            {"tokens": "the/DT drug/NN works/VBZ ./.", "phrases": [(0, 2)]},
            {"tokens": "its/PRP$ expression/NN rises/VBZ ./.", "phrases": [(0, 2)]},
            {"tokens": "the/DT protein/NN acts/VBZ ./.", "phrases": [(0, 2)]},
            entities=[
                (0, 0, 1, "DRUG", ["phsu"], ["C0004057"]),
                (1, 0, 1, "PROTEIN", ["aapp"], ["C0079419"]),
                (4, 0, 2, "PROTEIN", ["aapp"], ["C0079419"]),
            ],
            topics=["C0004057"],
        )

    def test_hypernym_list(self, doc, find):
        hypernym = HypernymListAgreement()
        assert agree(hypernym, find(doc, "the drug"), find(doc, "aspirin"), T.DEFINITE_NP)
        assert not agree(hypernym, find(doc, "the drug"), find(doc, "p53"), T.DEFINITE_NP)

    def test_semantic_coercion(self, doc, find):
        """'its expression' can refer to a protein but not to a drug."""
        coercion = SemanticCoercionAgreement()
        its = find(doc, "its expression")
        assert agree(coercion, its, find(doc, "p53"), T.POSSESSIVE_PRONOUN)
        assert not agree(coercion, its, find(doc, "aspirin"), T.POSSESSIVE_PRONOUN)
        assert not agree(coercion, its, find(doc, "p53"), T.PERSONAL_PRONOUN)

    def test_semantic_type(self, doc, find):
        assert agree(SemanticTypeAgreement(), find(doc, "the protein"), find(doc, "p53"), T.DEFINITE_NP)
        assert not agree(SemanticTypeAgreement(), find(doc, "the protein"), find(doc, "aspirin"), T.DEFINITE_NP)
        assert not agree(SemanticTypeAgreement(), find(doc, "the drug"), find(doc, "aspirin"), T.DEFINITE_NP)

    def test_semantic_group(self, doc, find):
        assert agree(SemanticGroupAgreement(), find(doc, "the protein"), find(doc, "p53"), T.DEFINITE_NP)

    def test_ontology(self, doc, find):
        assert agree(OntologyAgreement(), find(doc, "the protein"), find(doc, "p53"), T.DEFINITE_NP)
        assert not agree(OntologyAgreement(), find(doc, "the protein"), find(doc, "aspirin"), T.DEFINITE_NP)

    def test_document_topic(self, doc, find):
        """Indefinite mentions avoid topics; other mention types always agree."""
        topic = DocumentTopicAgreement()
        drug = find(doc, "the drug")
        assert not agree(topic, drug, find(doc, "aspirin"), T.INDEFINITE_NP)
        assert agree(topic, drug, find(doc, "p53"), T.INDEFINITE_NP)
        assert agree(topic, drug, find(doc, "aspirin"), T.DEFINITE_NP)

    def test_taxonomy(self, make_doc, find):
        doc = make_doc(
            "aspirin/NN helps/VBZ ./.",
            "NSAIDs/NNS work/VBP ./.",
            entities=[(0, 0, 1, "DRUG", ["phsu"], ["C_aspirin"]), (1, 0, 1, "DRUG", ["phsu"], ["C_nsaid"])],
        )
        vocabulary = DomainVocabulary(concept_hierarchy={"C_aspirin": ["C_nsaid"]})
        context = ResolutionContext(document=doc, vocabulary=vocabulary)
        taxonomy = TaxonomyAgreement()
        nsaids, aspirin = find(doc, "NSAIDs"), find(doc, "aspirin")
        assert agree(taxonomy, nsaids, aspirin, T.ZERO_ARTICLE_NP, context=context)
        assert not agree(taxonomy, aspirin, nsaids, T.ZERO_ARTICLE_NP, context=context)


class TestSyntacticAgreements:
    def test_adjacency(self, make_doc, find):
        doc = make_doc("aspirin/NN ,/, which/WDT inhibits/VBZ COX/NN")
        which = find(doc, "which")
        assert agree(AdjacencyAgreement(), which, find(doc, "aspirin"), T.RELATIVE_PRONOUN)
        assert not agree(AdjacencyAgreement(), which, find(doc, "COX"), T.RELATIVE_PRONOUN)

    def test_relative_clause_agreements(self, make_doc, find):
        """'which' heads a clause attached to 'aspirin' by rcmod."""
        doc = make_doc({
            "tokens": "aspirin/NN which/WDT inhibits/VBZ COX/NN works/VBZ",
            "deps": [("rcmod", 0, 2), ("nsubj", 2, 1), ("dobj", 2, 3), ("nsubj", 4, 0)],
        })
        which, aspirin, cox = find(doc, "which"), find(doc, "aspirin"), find(doc, "COX")
        for agreement in (RelativePronDependencyAgreement(), ClosestRCMODAgreement()):
            assert agree(agreement, which, aspirin, T.RELATIVE_PRONOUN)
            assert not agree(agreement, which, cox, T.RELATIVE_PRONOUN)

    def test_syntactic_appositive(self, make_doc, find):
        doc = make_doc({
            "tokens": "p53/NN ,/, a/DT tumor/NN suppressor/NN ,/, binds/VBZ DNA/NN",
            "deps": [("appos", 0, 4), ("det", 4, 2), ("nn", 4, 3), ("nsubj", 6, 0), ("dobj", 6, 7)],
            "phrases": [(2, 5)],
        })
        appos = find(doc, "a tumor suppressor")
        assert agree(SyntacticAppositiveAgreement(), appos, find(doc, "p53"), T.INDEFINITE_NP,
                     CoreferenceType.APPOSITIVE)
        assert not agree(SyntacticAppositiveAgreement(), appos, find(doc, "DNA"), T.INDEFINITE_NP,
                         CoreferenceType.APPOSITIVE)

    def test_predicate_nominative(self, make_doc, find):
        doc = make_doc(
            {
                "tokens": "aspirin/NN is/VBZ a/DT drug/NN",
                "deps": [("nsubj", 3, 0), ("cop", 3, 1), ("det", 3, 2)],
                "phrases": [(2, 4)],
            },
            {
                "tokens": "ibuprofen/NN is/VBZ not/RB a/DT protein/NN",
                "deps": [("nsubj", 4, 0), ("cop", 4, 1), ("neg", 4, 2), ("det", 4, 3)],
                "phrases": [(3, 5)],
            },
        )
        predicate = PredicateNominativeAgreement()
        pn = CoreferenceType.PREDICATE_NOMINATIVE
        assert agree(predicate, find(doc, "a drug"), find(doc, "aspirin"), T.INDEFINITE_NP, pn)
        assert not agree(predicate, find(doc, "a protein"), find(doc, "ibuprofen"), T.INDEFINITE_NP, pn)

    def test_copula_without_dependencies(self, make_doc, find):
        doc = make_doc({"tokens": "aspirin/NN is/VBZ/be a/DT drug/NN", "phrases": [(2, 4)]})
        assert agree(PredicateNominativeAgreement(), find(doc, "a drug"), find(doc, "aspirin"),
                     T.INDEFINITE_NP, CoreferenceType.PREDICATE_NOMINATIVE)

    def test_discourse_connective(self, make_doc, find):
        doc = make_doc("Because/IN it/PRP binds/VBZ DNA/NN ,/, p53/NN arrests/VBZ growth/NN")
        connective = DiscourseConnectiveAgreement()
        it, p53 = find(doc, "it"), find(doc, "p53")
        assert agree(connective, it, p53, T.PERSONAL_PRONOUN, CATAPHORA)
        assert not agree(connective, it, p53, T.PERSONAL_PRONOUN, ANAPHORA)
        assert not agree(connective, it, find(doc, "DNA"), T.PERSONAL_PRONOUN, CATAPHORA)

    def test_key_value_pair(self, make_doc, find):
        doc = make_doc("Diagnosis/NN :/: pneumonia/NN")
        kv = KeyValuePairAgreement()
        pneumonia, diagnosis = find(doc, "pneumonia"), find(doc, "Diagnosis")
        assert agree(kv, pneumonia, diagnosis, T.ZERO_ARTICLE_NP)
        assert not agree(kv, diagnosis, pneumonia, T.ZERO_ARTICLE_NP)
        assert not agree(kv, pneumonia, diagnosis, T.PERSONAL_PRONOUN)
