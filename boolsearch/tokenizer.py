"""
Tokenizer for the boolean search index.
Turns free text into normalized terms. The same analysis runs on document
text at index time and on query text at search time, so both sides match.
No stemming, punctuation stripping or stopword removal.
"""

TOKEN_SEPARATOR = " "


def analyse(text: str | None) -> list[str]:
    """
    Lowercase text, split on single spaces, and drop duplicate terms while
    keeping first-occurrence order.
    Empty pieces (empty text, doubled or edge spaces) yield no term.
    """
    if not text:
        return []
    seen: set[str] = set()
    terms: list[str] = []
    for term in text.lower().split(TOKEN_SEPARATOR):
        if not term or term in seen:
            continue
        seen.add(term)
        terms.append(term)
    return terms
