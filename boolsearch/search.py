"""
Query engine for the boolean search index.

- Queries go through the same tokenizer as indexing.
- AND: every term must be indexed; result is the intersection of postings.
- OR: missing terms are ignored; result is the union of postings.
- Optional ranking by number of distinct query terms matched, ties by doc_id.
- q() is the entry point: it reuses a pre-built index/corpus or builds one
  from the first DEFAULT_MAX_DOCS documents of a data source.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, NamedTuple

from .index_builder import index_documents
from .posting import Corpus, Document, InvertedIndex
from .tokenizer import analyse

logger = logging.getLogger(__name__)

# Documents indexed when q() has to build its own index
DEFAULT_MAX_DOCS = 1000


class Operator(enum.Enum):
    AND = "and"
    OR = "or"

    @classmethod
    def parse(cls, value: Operator | str) -> Operator:
        """Accept an Operator or its name ("and"/"or", any case)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown query operator: {value!r} (expected 'and' or 'or')") from None


DEFAULT_OPERATOR = Operator.OR


@dataclass
class QueryOptions:
    """
    Recognized query options.
    - op: AND / OR combination of query terms
    - rank: order results by relevance instead of doc_id
    - index, corpus: pre-built search data; both are needed to skip indexing
    - max_docs: documents to index when index/corpus are not supplied
    """

    op: Operator | str = DEFAULT_OPERATOR
    rank: bool = False
    index: InvertedIndex | None = None
    corpus: Corpus | None = None
    max_docs: int = DEFAULT_MAX_DOCS

    def __post_init__(self) -> None:
        self.op = Operator.parse(self.op)


class SearchHit(NamedTuple):
    doc_id: int
    document: Document | None
    score: int | None = None


def lookup_postings(terms: Iterable[str], index: InvertedIndex) -> list[frozenset | None]:
    """Postings set per term, None where the term is not in the index."""
    return [index.get_postings(term) for term in terms]


def combine_postings(postings_sets: list[frozenset | None], op: Operator | str) -> set[int]:
    """
    Combine per-term postings with set algebra.
    AND: any missing (None) term empties the result, else intersection.
    OR: missing terms are dropped, union of the rest.
    No terms at all gives an empty set.
    """
    op = Operator.parse(op)
    if op is Operator.AND:
        if not postings_sets or any(p is None for p in postings_sets):
            return set()
        result = set(postings_sets[0])
        for postings in postings_sets[1:]:
            result &= postings
            if not result:
                break
        return result

    result: set[int] = set()
    for postings in postings_sets:
        if postings is not None:
            result |= postings
    return result


def evaluate(query: str, index: InvertedIndex, op: Operator | str = DEFAULT_OPERATOR) -> set[int]:
    """Return the unordered set of doc_ids matching query under op."""
    terms = analyse(query)
    postings_sets = lookup_postings(terms, index)
    logger.debug(
        "Query %r -> document frequencies %s",
        query,
        {term: index.document_frequency(term) for term in terms},
    )
    return combine_postings(postings_sets, op)


def score_documents(doc_ids: Iterable[int], terms: Iterable[str], index: InvertedIndex) -> dict[int, int]:
    """Number of distinct query terms whose postings contain each document."""
    postings_sets = [p for p in lookup_postings(dict.fromkeys(terms), index) if p is not None]
    return {
        doc_id: sum(1 for postings in postings_sets if doc_id in postings)
        for doc_id in doc_ids
    }


def rank(doc_ids: Iterable[int], terms: Iterable[str], index: InvertedIndex) -> list[int]:
    """
    Order doc_ids by descending match score, ties broken by ascending doc_id.
    The order is total, so repeated calls agree.
    """
    return _order_by_score(score_documents(doc_ids, terms, index))


def _order_by_score(scores: dict[int, int]) -> list[int]:
    return sorted(scores, key=lambda doc_id: (-scores[doc_id], doc_id))


def q(query: str, options: QueryOptions | None = None, *, source=None) -> list[SearchHit]:
    """
    Search query and return hits with their corpus documents.

    When options does not carry both an index and a corpus, they are built from
    the first options.max_docs documents of source. Results are ranked when
    options.rank is set, otherwise ordered by doc_id.
    """
    options = options or QueryOptions()

    index, corpus = options.index, options.corpus
    if index is None or corpus is None:
        if source is None:
            raise ValueError("q() needs either a pre-built index and corpus or a data source")
        index, corpus, _ = index_documents(source, options.max_docs, build_corpus=True)

    doc_ids = evaluate(query, index, options.op)

    if options.rank:
        scores = score_documents(doc_ids, analyse(query), index)
        hits = [SearchHit(doc_id, corpus.get(doc_id), scores[doc_id]) for doc_id in _order_by_score(scores)]
    else:
        hits = [SearchHit(doc_id, corpus.get(doc_id)) for doc_id in sorted(doc_ids)]

    logger.info("Found %d results.", len(hits))
    return hits


def search_ids(query: str, options: QueryOptions | None = None, *, source=None) -> list[int]:
    """Like q() but return only the doc_ids, in the same order."""
    return [hit.doc_id for hit in q(query, options, source=source)]
