"""Tests for dependency queries and path search."""

import pytest

from biocoref.ling import dependency as deps


@pytest.fixture
def sentence(make_doc):
    """'The drug inhibits it' with det, nsubj and dobj edges."""
    doc = make_doc({
        "tokens": "The/DT drug/NN inhibits/VBZ it/PRP",
        "deps": [("det", 1, 0), ("nsubj", 2, 1), ("dobj", 2, 3)],
    })
    return doc.sentences[0]


class TestDependencySelection:
    def test_out_and_in_dependencies(self, sentence):
        the, drug, inhibits, it = sentence.surface_elements
        assert [d.type for d in deps.out_dependencies(inhibits, sentence.dependencies)] == ["nsubj", "dobj"]
        assert [d.type for d in deps.in_dependencies(drug, sentence.dependencies)] == ["nsubj"]
        assert deps.out_dependencies(it, None) == []

    def test_results_grouped_by_type_order(self, sentence):
        """Dependencies come back in the order the types were asked for."""
        selected = deps.dependencies_with_types(sentence.dependencies, ["dobj", "det"])
        assert [d.type for d in selected] == ["dobj", "det"]

    def test_partial_type_match(self, sentence):
        selected = deps.dependencies_with_types(sentence.dependencies, ["subj"], exact=False)
        assert [d.type for d in selected] == ["nsubj"]
        assert deps.dependencies_with_types(sentence.dependencies, ["subj"]) == []


class TestDependencyPath:
    def test_undirected_path(self, sentence):
        """'it' reaches 'drug' through the verb."""
        _, drug, _, it = sentence.surface_elements
        path = deps.find_dependency_path(sentence.dependencies, it, drug, directed=False)
        assert [d.type for d in path] == ["dobj", "nsubj"]

    def test_directed_path_follows_governors(self, sentence):
        the, drug, inhibits, it = sentence.surface_elements
        path = deps.find_dependency_path(sentence.dependencies, inhibits, the)
        assert [d.type for d in path] == ["nsubj", "det"]
        assert deps.find_dependency_path(sentence.dependencies, it, drug) is None

    def test_path_to_self_is_empty(self, sentence):
        it = sentence.surface_elements[3]
        assert deps.find_dependency_path(sentence.dependencies, it, it) == []

    def test_no_dependencies(self, sentence):
        the, drug = sentence.surface_elements[:2]
        assert deps.find_dependency_path([], the, drug) is None


class TestPhraseMerging:
    def test_internal_dependencies_dropped(self, make_doc):
        """Merging 'The drug' removes the det edge and re-points nsubj."""
        doc = make_doc({
            "tokens": "The/DT drug/NN inhibits/VBZ it/PRP",
            "deps": [("det", 1, 0), ("nsubj", 2, 1), ("dobj", 2, 3)],
            "phrases": [(0, 2)],
        })
        sentence = doc.sentences[0]
        the_drug = sentence.surface_elements[0]
        assert the_drug.text == "The drug"
        assert the_drug.head.text == "drug"
        assert [d.type for d in sentence.dependencies] == ["nsubj", "dobj"]
        assert sentence.dependencies[0].dependent is the_drug
