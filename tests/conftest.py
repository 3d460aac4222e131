"""Shared fixtures: the seven-document CSV corpus and its index."""

from pathlib import Path

import pytest

from boolsearch import CsvSource, index_documents

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_path() -> Path:
    return DATA_DIR / "data.csv"


@pytest.fixture
def source(data_path):
    return CsvSource(data_path)


@pytest.fixture
def indexed(source):
    """Index and corpus over the whole fixture dataset."""
    return index_documents(source, build_corpus=True)


@pytest.fixture
def index(indexed):
    return indexed.index


@pytest.fixture
def corpus(indexed):
    return indexed.corpus
