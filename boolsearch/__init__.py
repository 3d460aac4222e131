"""In-memory boolean keyword search package."""

from .posting import Document, Corpus, InvertedIndex
from .tokenizer import analyse
from .index_builder import (
    IndexResult,
    build_index,
    build_index_in_batches,
    index_documents,
    load_corpus,
    merge_indexes,
)
from .search import (
    DEFAULT_MAX_DOCS,
    Operator,
    QueryOptions,
    SearchHit,
    evaluate,
    q,
    rank,
    search_ids,
)
from .sources import CsvSource, HtmlDirectorySource, JsonSource, open_source
from .errors import BoolSearchError, DataSourceError
