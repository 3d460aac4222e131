"""Tests for index construction and partial-index merging."""

import pytest

from boolsearch.index_builder import (
    build_index,
    build_index_in_batches,
    index_documents,
    load_corpus,
    merge_indexes,
)
from boolsearch.posting import Document, InvertedIndex
from boolsearch.tokenizer import analyse

DOCS = [
    Document("Northern art", "Jan van Eyck"),
    Document("Physics", "Carlo Rovelli art art"),
    Document("Empty", None),
    Document("Voyages", "Christopher Columbus"),
]


class TestBuildIndex:
    def test_ids_are_sequential_from_one(self):
        result = build_index(DOCS, build_corpus=True)
        assert list(result.corpus) == [1, 2, 3, 4]
        assert result.corpus[2] == DOCS[1]
        assert result.num_docs == 4

    def test_corpus_not_built_by_default(self):
        assert build_index(DOCS).corpus is None

    def test_postings_are_presence_sets(self):
        index = build_index(DOCS).index
        assert index.get_postings("art") == {1, 2}
        assert index.get_postings("eyck") == {1}

    def test_title_and_description_are_both_indexed(self):
        index = build_index(DOCS).index
        assert index.get_postings("northern") == {1}
        assert index.get_postings("columbus") == {4}

    def test_missing_description_contributes_no_terms(self):
        index = build_index(DOCS).index
        assert index.get_postings("empty") == {3}
        assert "" not in index

    def test_build_is_deterministic(self):
        assert build_index(DOCS).index == build_index(DOCS).index

    def test_empty_input(self):
        result = build_index([], build_corpus=True)
        assert len(result.index) == 0
        assert result.corpus == {}
        assert result.num_docs == 0

    def test_postings_match_document_tokens(self, source):
        """A doc is in a term's postings iff the term is one of its tokens."""
        docs = list(source.documents())
        index = build_index(docs).index
        for doc_id, doc in enumerate(docs, start=1):
            terms = set(analyse(doc.text))
            for term in index.tokens():
                assert (doc_id in index.get_postings(term)) == (term in terms)


class TestMergeIndexes:
    def test_merge_unions_postings(self):
        a = build_index(DOCS[:2]).index
        b = build_index(DOCS[2:], start_id=3).index
        merged = merge_indexes([a, b])
        assert merged == build_index(DOCS).index

    def test_merge_order_does_not_matter(self):
        a = build_index(DOCS[:2]).index
        b = build_index(DOCS[2:], start_id=3).index
        assert merge_indexes([a, b]) == merge_indexes([b, a])

    def test_merge_nothing(self):
        assert merge_indexes([]) == InvertedIndex()


class TestBuildIndexInBatches:
    @pytest.mark.parametrize("batch_size", [1, 2, 3, 10])
    def test_matches_single_pass_build(self, batch_size):
        batched = build_index_in_batches(DOCS, batch_size, build_corpus=True)
        single = build_index(DOCS, build_corpus=True)
        assert batched.index == single.index
        assert batched.corpus == single.corpus
        assert batched.num_docs == 4

    def test_rejects_non_positive_batch_size(self):
        with pytest.raises(ValueError):
            build_index_in_batches(DOCS, 0)


class TestIndexDocuments:
    def test_indexes_whole_source(self, source):
        result = index_documents(source, build_corpus=True)
        assert list(result.corpus) == [1, 2, 3, 4, 5, 6, 7]
        assert result.corpus[2].title == "Blade Runner"

    def test_limit_takes_a_prefix(self, source):
        result = index_documents(source, 2, build_corpus=True)
        assert list(result.corpus) == [1, 2]
        assert "eyck" not in result.index

    def test_rejects_non_positive_limit(self, source):
        with pytest.raises(ValueError):
            index_documents(source, 0)

    def test_logs_progress(self, source, caplog):
        with caplog.at_level("INFO", logger="boolsearch.index_builder"):
            index_documents(source)
        assert "Indexing.." in caplog.text
        assert "Indexed 7 documents" in caplog.text


class TestLoadCorpus:
    def test_numbers_documents_from_one(self, source):
        corpus = load_corpus(source)
        assert list(corpus) == [1, 2, 3, 4, 5, 6, 7]
        assert corpus[2].title == "Blade Runner"

    def test_matches_corpus_built_while_indexing(self, source, corpus):
        assert load_corpus(source) == corpus

    def test_limit(self, source):
        assert list(load_corpus(source, 2)) == [1, 2]

    def test_rejects_non_positive_limit(self, source):
        with pytest.raises(ValueError):
            load_corpus(source, 0)
