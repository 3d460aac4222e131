"""
Document record and inverted index data structures.

A postings set holds the ids of every document containing a term.
Presence only: no term frequency or positions are kept.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Document:
    """
    A corpus record.
    - title: document title
    - description: document body text
    Absent fields are stored as empty strings.
    """

    title: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if self.title is None:
            object.__setattr__(self, "title", "")
        if self.description is None:
            object.__setattr__(self, "description", "")

    @property
    def text(self) -> str:
        """Title and description joined by a single space (the indexed text)."""
        return f"{self.title} {self.description}"


# doc_id -> Document, filled alongside the index when requested
Corpus = dict[int, Document]


class InvertedIndex:
    """
    Inverted index: map from term -> set of document ids.
    Only the index builder mutates it; queries treat it as read-only.
    """

    def __init__(self) -> None:
        self._index: dict[str, set[int]] = {}

    def add_posting(self, term: str, doc_id: int) -> None:
        """Add doc_id to the postings set of term, creating the set for a new term."""
        postings = self._index.get(term)
        if postings is None:
            postings = set()
            self._index[term] = postings
        postings.add(doc_id)

    def add_terms(self, terms: Iterable[str], doc_id: int) -> None:
        for term in terms:
            self.add_posting(term, doc_id)

    def get_postings(self, term: str) -> frozenset[int] | None:
        """
        Return the postings set for a term, or None when the term was never indexed.
        None is the missing marker; it is never confused with an empty set.
        """
        postings = self._index.get(term)
        if postings is None:
            return None
        return frozenset(postings)

    def document_frequency(self, term: str) -> int:
        return len(self._index.get(term, ()))

    def update(self, other: "InvertedIndex") -> None:
        """Union other's postings into this index, term by term."""
        for term, postings in other._index.items():
            if term in self._index:
                self._index[term] |= postings
            else:
                self._index[term] = set(postings)

    def tokens(self) -> Iterator[str]:
        """Iterate over all terms in the index."""
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, term: str) -> bool:
        return term in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvertedIndex):
            return NotImplemented
        return self._index == other._index

    def __repr__(self) -> str:
        return f"InvertedIndex(terms={len(self._index)})"

    def to_dict(self) -> dict[str, list[int]]:
        """Serialize to a JSON-serializable dict, postings sorted by doc_id."""
        return {term: sorted(postings) for term, postings in self._index.items()}
