"""
Index builder: constructs the in-memory inverted index from document records.
Ids are assigned sequentially from 1 in input order. Optionally builds the
doc_id -> Document corpus in the same pass, and supports partial indexing
over batches followed by a postings-union merge.
"""

import logging
from itertools import islice
from typing import Iterable, NamedTuple

from .posting import Corpus, Document, InvertedIndex
from .tokenizer import analyse

logger = logging.getLogger(__name__)

FIRST_DOC_ID = 1


class IndexResult(NamedTuple):
    index: InvertedIndex
    corpus: Corpus | None = None
    num_docs: int = 0


def build_index(
    documents: Iterable[Document],
    *,
    build_corpus: bool = False,
    start_id: int = FIRST_DOC_ID,
) -> IndexResult:
    """
    Build an inverted index over documents.
    - Each document is tokenized as title + " " + description.
    - Its id goes into the postings set of every resulting term.
    - When build_corpus is set, doc_id -> Document is recorded alongside.
    Returns IndexResult(index, corpus, num_docs); corpus is None unless requested.
    """
    index = InvertedIndex()
    corpus: Corpus | None = {} if build_corpus else None

    doc_id = start_id
    for doc in documents:
        index.add_terms(analyse(doc.text), doc_id)
        if corpus is not None:
            corpus[doc_id] = doc
        doc_id += 1

    num_docs = doc_id - start_id
    logger.debug("Indexed %d documents, %d unique terms", num_docs, len(index))
    return IndexResult(index, corpus, num_docs)


def merge_indexes(partials: Iterable[InvertedIndex]) -> InvertedIndex:
    """
    Merge independently built partial indexes into one.
    Postings are unioned per term, so merge order does not matter.
    """
    merged = InvertedIndex()
    for partial in partials:
        merged.update(partial)
    return merged


def build_index_in_batches(
    documents: Iterable[Document],
    batch_size: int,
    *,
    build_corpus: bool = False,
) -> IndexResult:
    """
    Build partial indexes over consecutive batches of batch_size documents and
    merge them. Ids stay global, so the result equals build_index over the
    same sequence.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    partials: list[InvertedIndex] = []
    corpus: Corpus | None = {} if build_corpus else None
    docs = iter(documents)
    next_doc_id = FIRST_DOC_ID

    while True:
        batch = list(islice(docs, batch_size))
        if not batch:
            break
        partial = build_index(batch, build_corpus=build_corpus, start_id=next_doc_id)
        partials.append(partial.index)
        if corpus is not None:
            corpus.update(partial.corpus)
        next_doc_id += len(batch)

    logger.debug("Merging %d partial indexes", len(partials))
    return IndexResult(merge_indexes(partials), corpus, next_doc_id - FIRST_DOC_ID)


def index_documents(
    source,
    limit: int | None = None,
    *,
    build_corpus: bool = False,
) -> IndexResult:
    """
    Read the first limit documents (all when None) from a data source and index them.
    source is any object with documents(limit) yielding Document records.
    """
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")

    logger.info("Indexing..")
    result = build_index(source.documents(limit), build_corpus=build_corpus)
    logger.info("Indexed %d documents, %d unique terms", result.num_docs, len(result.index))
    return result


def load_corpus(source, limit: int | None = None) -> Corpus:
    """
    Read the first limit documents (all when None) from a data source into a
    doc_id -> Document corpus, numbered from 1, without indexing them.
    """
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")
    return dict(enumerate(source.documents(limit), start=FIRST_DOC_ID))
