"""Shared fixtures: build small annotated documents from tagged tokens."""

import pytest

from biocoref.core.configuration import Configuration
from biocoref.core.context import ResolutionContext
from biocoref.loader import load_document


def document_data(*sentences, entities=(), conjunctions=(), sections=(), topics=(), doc_id="test"):
    """
    Build the loader mapping for a document.

    Each sentence is either a string of ``word/POS`` or ``word/POS/lemma``
    tokens, or a dict with ``tokens`` and optional ``deps``
    (``(type, governor, dependent)`` word indices), ``phrases``
    (``(start, end)`` or ``(start, end, head)`` word indices, end exclusive)
    and ``parse``.

    Entities are ``(sentence, start, end, type, semtypes)`` tuples over word
    indices, optionally followed by a concept id list and an entity id.
    Conjunctions are lists of entity ids. Sections are ``(title, first
    sentence, last sentence)`` tuples.
    """
    text = ""
    offsets = []
    sentence_data = []
    for i, sentence in enumerate(sentences):
        if isinstance(sentence, str):
            sentence = {"tokens": sentence}
        if text:
            text += " "
        words = []
        word_offsets = []
        for token in sentence["tokens"].split():
            parts = token.split("/")
            word_text, pos = parts[0], parts[1]
            lemma = parts[2] if len(parts) > 2 else word_text.lower()
            begin = len(text)
            text += word_text
            words.append({"text": word_text, "pos": pos, "lemma": lemma, "begin": begin, "end": len(text)})
            word_offsets.append((begin, len(text)))
            text += " "
        text = text[:-1]
        offsets.append(word_offsets)
        sentence_data.append({
            "id": f"S{i + 1}",
            "words": words,
            "dependencies": [{"type": t, "governor": g, "dependent": d} for t, g, d in sentence.get("deps", ())],
            "phrases": [
                {"start": p[0], "end": p[1], "head": p[2] if len(p) > 2 else None}
                for p in sentence.get("phrases", ())
            ],
            "parse": sentence.get("parse"),
        })

    entity_data = []
    for ent in entities:
        sent, start, end, ent_type, semtypes = ent[:5]
        concepts = ent[5] if len(ent) > 5 else []
        ent_id = ent[6] if len(ent) > 6 else None
        entity_data.append({
            "id": ent_id,
            "type": ent_type,
            "begin": offsets[sent][start][0],
            "end": offsets[sent][end - 1][1],
            "semtypes": list(semtypes),
            "concepts": [{"id": c} for c in concepts],
        })

    section_data = [
        {"title": title, "begin": offsets[first][0][0], "end": offsets[last][-1][1]}
        for title, first, last in sections
    ]
    return {
        "id": doc_id,
        "text": text,
        "sentences": sentence_data,
        "entities": entity_data,
        "conjunctions": [{"conjuncts": list(c)} for c in conjunctions],
        "sections": section_data,
        "topics": list(topics),
    }


@pytest.fixture
def make_doc():
    """Factory fixture: ``make_doc(*sentences, entities=..., ...)`` returns a loaded Document."""
    def factory(*sentences, **kwargs):
        return load_document(document_data(*sentences, **kwargs))
    return factory


@pytest.fixture
def make_context():
    """Factory fixture wrapping a document in a ResolutionContext with the default strategies."""
    def factory(document, configuration=None):
        return ResolutionContext(document=document, configuration=configuration or Configuration.default())
    return factory


def element(document, text, occurrence=0):
    """The ``occurrence``-th surface element of a document whose text is ``text``."""
    matches = [s for s in document.all_surface_elements() if s.text == text]
    return matches[occurrence]


@pytest.fixture
def find():
    """Look up a surface element by its text: ``find(document, "the drug")``."""
    return element
