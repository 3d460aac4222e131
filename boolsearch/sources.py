"""
Data sources: read document records (title, description) for indexing.

Each source is configured with an explicit path and yields Document records
in file order, so the first record gets doc_id 1.
- CsvSource: CSV with a header row holding "title" and "description" columns.
- JsonSource: .json array or .jsonl lines of {"title": ..., "description": ...}.
- HtmlDirectorySource: every *.html file under a directory; title from <title>,
  description from the visible body text.
"""

import csv
import json
import logging
import warnings
from itertools import islice
from pathlib import Path
from typing import Iterable, Iterator

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, XMLParsedAsHTMLWarning

from .errors import DataSourceError
from .posting import Document

warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

logger = logging.getLogger(__name__)

HTML_ENCODINGS = ("utf-8", "cp1252")
# decodes any byte sequence, so it goes last
FALLBACK_ENCODING = "latin-1"


def _take(records: Iterable[Document], limit: int | None) -> Iterator[Document]:
    if limit is None:
        return iter(records)
    return islice(records, limit)


def _field(row: dict, name: str) -> str:
    value = row.get(name)
    return "" if value is None else str(value)


def _document_from_mapping(row: dict) -> Document:
    return Document(title=_field(row, "title"), description=_field(row, "description"))


class CsvSource:
    """CSV dataset with title/description columns; other columns are ignored."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _rows(self) -> Iterator[Document]:
        try:
            with open(self.path, "r", encoding="utf-8-sig", newline="") as f:
                for row in csv.DictReader(f):
                    yield _document_from_mapping(row)
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise DataSourceError(self.path, str(e)) from e

    def documents(self, limit: int | None = None) -> Iterator[Document]:
        return _take(self._rows(), limit)


class JsonSource:
    """
    JSON records: a .json file holding a list of objects, or a .jsonl file
    with one object per line.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _document(self, obj) -> Document:
        if not isinstance(obj, dict):
            raise DataSourceError(self.path, f"expected a JSON object, got {type(obj).__name__}")
        return _document_from_mapping(obj)

    def _records(self) -> Iterator[Document]:
        try:
            if self.path.suffix.lower() == ".jsonl":
                with open(self.path, "r", encoding="utf-8") as f:
                    for line in f:
                        line = line.strip()
                        if line:
                            yield self._document(json.loads(line))
            else:
                data = json.loads(self.path.read_text(encoding="utf-8"))
                if not isinstance(data, list):
                    raise DataSourceError(self.path, "expected a JSON array of records")
                for obj in data:
                    yield self._document(obj)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DataSourceError(self.path, str(e)) from e

    def documents(self, limit: int | None = None) -> Iterator[Document]:
        return _take(self._records(), limit)


def read_html_file(filepath: Path) -> str:
    """
    Read HTML file content, handling common encodings.
    """
    for encoding in HTML_ENCODINGS:
        try:
            return Path(filepath).read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return Path(filepath).read_text(encoding=FALLBACK_ENCODING)


def document_from_html(html_content: str) -> Document:
    """
    Build a Document from an HTML page.
    Title comes from <title> (or the first <h1>); description is the visible
    text of the body with script and style elements removed.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()

    title_tag = soup.title or soup.find("h1")
    title = title_tag.get_text(separator=" ", strip=True) if title_tag else ""

    body = soup.body or soup
    if soup.title is not None:
        soup.title.decompose()
    description = body.get_text(separator=" ", strip=True)
    return Document(title=title, description=description)


class HtmlDirectorySource:
    """All *.html files under a directory (recursive), in sorted path order."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _pages(self) -> Iterator[Document]:
        if not self.root.is_dir():
            raise DataSourceError(self.root, "not a directory")
        for filepath in sorted(self.root.rglob("*.html"), key=lambda p: str(p)):
            try:
                content = read_html_file(filepath)
            except OSError as e:
                logger.warning("Skipping %s: %s", filepath, e)
                continue
            yield document_from_html(content)

    def documents(self, limit: int | None = None) -> Iterator[Document]:
        return _take(self._pages(), limit)


def open_source(path: Path | str):
    """Pick a data source for path: a directory of HTML pages, .csv, .json or .jsonl."""
    path = Path(path)
    if path.is_dir():
        return HtmlDirectorySource(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return CsvSource(path)
    if suffix in (".json", ".jsonl"):
        return JsonSource(path)
    raise DataSourceError(path, f"unsupported data source type {suffix or '(none)'}")
