"""Tests for candidate filters."""

import pytest

from biocoref.candidates.filters import (DefaultCandidateFilter, ExemplificationFilter, HasSemanticsFilter,
                                         NounPhraseFilter, PriorDiscourseFilter, SameSentenceFilter,
                                         SemanticClassFilter, SemanticTypeFilter, SingletonMentionFilter,
                                         SubsequentDiscourseFilter, SyntaxBasedCandidateFilter,
                                         VerbPhraseFilter, WindowSizeFilter, intersect, nominal_indicator_path,
                                         subtract, union, verbal_indicator_path)
from biocoref.core.chain import CreateNew, apply_decisions
from biocoref.core.exceptions import ConfigurationError
from biocoref.core.registry import CANDIDATE_FILTER, create_component
from biocoref.core.types import WINDOW_ALL, WINDOW_SECTION, WINDOW_SENTENCE, CoreferenceType, ExpressionType
from biocoref.expressions.recognition import annotate
from biocoref.ling.dependency import find_dependency_path
from biocoref.ling.semantics import Argument

ANAPHORA = CoreferenceType.ANAPHORA
CATAPHORA = CoreferenceType.CATAPHORA
APPOSITIVE = CoreferenceType.APPOSITIVE
PRONOUN = ExpressionType.PERSONAL_PRONOUN


@pytest.fixture
def four_sentences(make_doc):
    """Four sentences, the mention 'it' in the third."""
    return make_doc(
        "Aspirin/NN works/VBZ ./.",
        "Patients/NNS improved/VBD ./.",
        "It/PRP reduces/VBZ pain/NN ./.",
        "Doctors/NNS agree/VBP ./.",
        sections=[("History", 0, 1), ("Plan", 2, 3)],
    )


def texts(surfs):
    return [s.text for s in surfs]


class TestDirectionalFilters:
    def test_prior_discourse(self, four_sentences, find):
        it = find(four_sentences, "It")
        kept = PriorDiscourseFilter().filter(it, ANAPHORA, PRONOUN, four_sentences.all_surface_elements())
        assert texts(kept) == ["Aspirin", "works", ".", "Patients", "improved", "."]

    def test_subsequent_discourse(self, four_sentences, find):
        it = find(four_sentences, "It")
        kept = SubsequentDiscourseFilter().filter(it, CATAPHORA, PRONOUN, four_sentences.all_surface_elements())
        assert texts(kept) == ["reduces", "pain", ".", "Doctors", "agree", "."]

    def test_prior_discourse_refuses_forward_search(self, four_sentences, find):
        """Cataphora searches forward, so nothing earlier can be kept."""
        it = find(four_sentences, "It")
        assert PriorDiscourseFilter().filter(it, CATAPHORA, PRONOUN, four_sentences.all_surface_elements()) == []

    def test_subsequent_discourse_refuses_backward_search(self, four_sentences, find):
        it = find(four_sentences, "It")
        assert SubsequentDiscourseFilter().filter(it, ANAPHORA, PRONOUN,
                                                  four_sentences.all_surface_elements()) == []

    def test_directional_filters_are_idempotent(self, four_sentences, find):
        it = find(four_sentences, "It")
        prior = PriorDiscourseFilter()
        once = prior.filter(it, ANAPHORA, PRONOUN, four_sentences.all_surface_elements())
        twice = prior.filter(it, ANAPHORA, PRONOUN, once)
        assert once == twice

    def test_input_list_not_mutated(self, four_sentences, find):
        it = find(four_sentences, "It")
        candidates = four_sentences.all_surface_elements()
        before = list(candidates)
        PriorDiscourseFilter().filter(it, ANAPHORA, PRONOUN, candidates)
        assert candidates == before

    def test_empty_candidates(self, four_sentences, find):
        it = find(four_sentences, "It")
        assert PriorDiscourseFilter().filter(it, ANAPHORA, PRONOUN, []) == []
        assert PriorDiscourseFilter().filter(it, ANAPHORA, PRONOUN, None) == []


class TestSameSentenceFilter:
    def test_keeps_same_sentence_for_appositives(self, four_sentences, find):
        it = find(four_sentences, "It")
        kept = SameSentenceFilter().filter(it, APPOSITIVE, ExpressionType.DEFINITE_NP,
                                           four_sentences.all_surface_elements())
        assert texts(kept) == ["reduces", "pain", "."]

    def test_refuses_one_directional_search(self, four_sentences, find):
        it = find(four_sentences, "It")
        candidates = four_sentences.all_surface_elements()
        original = list(candidates)
        assert SameSentenceFilter().filter(it, ANAPHORA, PRONOUN, candidates) == []
        assert candidates == original


class TestWindowSizeFilter:
    def test_sentence_window(self, four_sentences, find):
        it = find(four_sentences, "It")
        kept = WindowSizeFilter(WINDOW_SENTENCE).filter(it, ANAPHORA, PRONOUN,
                                                        four_sentences.all_surface_elements())
        assert texts(kept) == ["reduces", "pain", "."]

    def test_windows_grow_monotonically(self, four_sentences, find):
        """A wider window keeps everything a narrower one keeps."""
        it = find(four_sentences, "It")
        candidates = four_sentences.all_surface_elements()
        previous = []
        for size in (0, 1, 2):
            kept = WindowSizeFilter(size).filter(it, ANAPHORA, PRONOUN, candidates)
            assert all(any(p is k for k in kept) for p in previous)
            previous = kept
        assert len(previous) == len(candidates) - 1

    def test_whole_document_window(self, four_sentences, find):
        it = find(four_sentences, "It")
        candidates = four_sentences.all_surface_elements()
        kept = WindowSizeFilter(WINDOW_ALL).filter(it, ANAPHORA, PRONOUN, candidates)
        assert len(kept) == len(candidates) - 1
        assert not any(k is it for k in kept)

    def test_section_window(self, four_sentences, find):
        """Only the 'Plan' section, sentences three and four, is searched."""
        it = find(four_sentences, "It")
        kept = WindowSizeFilter(WINDOW_SECTION).filter(it, ANAPHORA, PRONOUN,
                                                       four_sentences.all_surface_elements())
        assert texts(kept) == ["reduces", "pain", ".", "Doctors", "agree", "."]

    def test_section_window_without_sections(self, make_doc, find):
        """A document without sections is one section."""
        doc = make_doc("Aspirin/NN works/VBZ ./.", "It/PRP helps/VBZ ./.")
        it = find(doc, "It")
        kept = WindowSizeFilter(WINDOW_SECTION).filter(it, ANAPHORA, PRONOUN, doc.all_surface_elements())
        assert len(kept) == 5


class TestSyntaxBasedFilter:
    @pytest.fixture
    def doc(self, make_doc):
        return make_doc(
            "Aspirin/NN works/VBZ ./.",
            {
                "tokens": "The/DT drug/NN inhibits/VBZ it/PRP",
                "deps": [("det", 1, 0), ("nsubj", 2, 1), ("dobj", 2, 3)],
                "phrases": [(0, 2)],
            },
        )

    def test_subject_and_object_of_same_verb_removed(self, doc, find):
        it = find(doc, "it")
        kept = SyntaxBasedCandidateFilter().filter(it, ANAPHORA, PRONOUN, doc.all_surface_elements())
        assert "The drug" not in texts(kept)
        assert "Aspirin" in texts(kept)

    def test_passes_everything_for_appositives(self, doc, find):
        it = find(doc, "it")
        candidates = doc.all_surface_elements()
        kept = SyntaxBasedCandidateFilter().filter(it, APPOSITIVE, PRONOUN, candidates)
        assert kept == candidates

    def test_passes_everything_for_relative_pronouns(self, doc, find):
        it = find(doc, "it")
        candidates = doc.all_surface_elements()
        kept = SyntaxBasedCandidateFilter().filter(it, ANAPHORA, ExpressionType.RELATIVE_PRONOUN, candidates)
        assert kept == candidates

    def test_passes_everything_for_reflexives(self, make_doc, find):
        doc = make_doc({
            "tokens": "The/DT drug/NN protects/VBZ itself/PRP",
            "deps": [("det", 1, 0), ("nsubj", 2, 1), ("dobj", 2, 3)],
            "phrases": [(0, 2)],
        })
        itself = find(doc, "itself")
        candidates = doc.all_surface_elements()
        kept = SyntaxBasedCandidateFilter().filter(itself, ANAPHORA, PRONOUN, candidates)
        assert kept == candidates
        assert "The drug" in texts(kept)

    def test_nominal_path_removed(self, make_doc, find):
        """'protein' and 'it' both modify 'levels', so they cannot corefer."""
        doc = make_doc(
            "Aspirin/NN works/VBZ ./.",
            {
                "tokens": "levels/NNS of/IN protein/NN in/IN it/PRP",
                "deps": [("prep_of", 0, 2), ("prep_in", 0, 4)],
            },
        )
        it, protein = find(doc, "it"), find(doc, "protein")
        path = find_dependency_path(it.sentence.dependencies, it, protein, directed=False)
        assert nominal_indicator_path(path)
        assert not verbal_indicator_path(path)

        kept = SyntaxBasedCandidateFilter().filter(it, ANAPHORA, PRONOUN, doc.all_surface_elements())
        assert "protein" not in texts(kept)
        assert "Aspirin" in texts(kept)


class TestSemanticFilters:
    @pytest.fixture
    def doc(self, make_doc):
        return make_doc(
            "Aspirin/NN inhibits/VBZ the/DT enzyme/NN quickly/RB ./.",
            "Binding/VBG occurs/VBZ ./.",
            entities=[(0, 0, 1, "DRUG", ["phsu"]), (1, 0, 1, "EVENT", ["moft"])],
        )

    def test_semantic_class(self, doc):
        kept = SemanticClassFilter().filter(None, ANAPHORA, PRONOUN, doc.all_surface_elements())
        assert texts(kept) == ["Aspirin", "Binding"]

    def test_semantic_class_by_name(self):
        from biocoref.ling.semantics import Entity
        assert SemanticClassFilter(["Entity"]).classes == (Entity,)

    def test_unknown_semantic_class(self):
        with pytest.raises(ValueError):
            SemanticClassFilter(["Gene"])
        with pytest.raises(ConfigurationError):
            create_component(CANDIDATE_FILTER, "SemanticClass", ["Gene"])

    def test_semantic_type(self, doc):
        kept = SemanticTypeFilter(["phsu"]).filter(None, ANAPHORA, PRONOUN, doc.all_surface_elements())
        assert texts(kept) == ["Aspirin"]

    def test_empty_semantic_type_list_passes_all(self, doc):
        candidates = doc.all_surface_elements()
        assert SemanticTypeFilter([]).filter(None, ANAPHORA, PRONOUN, candidates) == candidates

    def test_semantic_type_defaults_to_vocabulary(self, doc, make_context):
        """Without explicit types, the vocabulary's semantic types apply."""
        context = make_context(doc)
        kept = SemanticTypeFilter().filter(None, ANAPHORA, PRONOUN, doc.all_surface_elements(), context)
        assert texts(kept) == ["Aspirin"]

    def test_noun_and_verb_phrases(self, doc):
        candidates = doc.all_surface_elements()
        assert texts(NounPhraseFilter().filter(None, ANAPHORA, PRONOUN, candidates)) == [
            "Aspirin", "the", "enzyme"]
        assert texts(VerbPhraseFilter().filter(None, ANAPHORA, PRONOUN, candidates)) == ["inhibits", "occurs"]

    def test_default_is_semantic_or_nominal_minus_verbal(self, doc):
        """A verb with an entity survives; a bare verb does not."""
        kept = texts(DefaultCandidateFilter().filter(None, ANAPHORA, PRONOUN, doc.all_surface_elements()))
        assert kept == ["Aspirin", "Binding", "the", "enzyme"]
        assert "inhibits" not in kept
        assert "quickly" not in kept

    def test_default_drops_nominal_chunks_headed_by_a_verb(self, make_doc):
        """'the binding' is both nominal and verbal, and the verbal side wins."""
        doc = make_doc(
            {"tokens": "Aspirin/NN prevents/VBZ the/DT binding/VBG ./.", "phrases": [(2, 4)]},
            entities=[(0, 0, 1, "DRUG", ["phsu"])],
        )
        candidates = doc.all_surface_elements()
        assert "the binding" in texts(NounPhraseFilter().filter(None, ANAPHORA, PRONOUN, candidates))
        assert "the binding" in texts(VerbPhraseFilter().filter(None, ANAPHORA, PRONOUN, candidates))

        kept = DefaultCandidateFilter().filter(None, ANAPHORA, PRONOUN, candidates)
        assert texts(kept) == ["Aspirin"]

    def test_has_semantics_ignores_mentions(self, make_doc):
        doc = make_doc("Aspirin/NN helps/VBZ ./. It/PRP works/VBZ ./.",
                       entities=[(0, 0, 1, "DRUG", ["phsu"])])
        annotate(doc, [PRONOUN])
        kept = HasSemanticsFilter().filter(None, ANAPHORA, PRONOUN, doc.all_surface_elements())
        assert texts(kept) == ["Aspirin"]


class TestExemplificationFilter:
    def test_drops_examples(self, make_doc):
        doc = make_doc({
            "tokens": "drugs/NNS such/JJ as/IN aspirin/NN help/VBP",
            "deps": [("prep_such_as", 0, 3), ("nsubj", 4, 0)],
        })
        kept = ExemplificationFilter().filter(None, ANAPHORA, PRONOUN, doc.all_surface_elements())
        assert "aspirin" not in texts(kept)
        assert "drugs" in texts(kept)


class TestSingletonMentionFilter:
    def test_drops_mentions_outside_chains(self, make_doc, make_context, find):
        doc = make_doc("Aspirin/NN helps/VBZ ./.", "It/PRP works/VBZ ./.", "It/PRP lasts/VBZ ./.",
                       entities=[(0, 0, 1, "DRUG", ["phsu"])])
        annotate(doc, [PRONOUN])
        context = make_context(doc)
        first_it = find(doc, "It")
        second_it = find(doc, "It", 1)
        candidates = doc.all_surface_elements()

        kept = SingletonMentionFilter().filter(second_it, ANAPHORA, PRONOUN, candidates, context)
        assert not any(k is first_it for k in kept)

        anaphor = first_it.expressions()[0]
        antecedent = find(doc, "Aspirin").entities()[0]
        apply_decisions(context, [CreateNew(ANAPHORA, [Argument("Anaphor", anaphor),
                                                       Argument("Antecedent", antecedent)])])
        kept = SingletonMentionFilter().filter(second_it, ANAPHORA, PRONOUN, candidates, context)
        assert any(k is first_it for k in kept)


class TestCombinators:
    def test_order_follows_first_argument(self, four_sentences):
        a, b, c, d = four_sentences.all_surface_elements()[:4]
        assert union([c, a], [b, a]) == [c, a, b]
        assert intersect([c, b, a], [a, c]) == [c, a]
        assert subtract([c, b, a], [b, d]) == [c, a]
