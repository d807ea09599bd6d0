"""
Text helpers shared by the feed fetcher and the summarizer.

- HTML to plain text with entities decoded and whitespace collapsed
- Boundary-aware truncation (sentence > paragraph > word > hard cut)
- Card snippets for article lists
"""

import re

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")

SNIPPET_LENGTH = 200


def clean_text(text: str | None) -> str:
    """Strip HTML tags, decode entities and collapse whitespace."""
    if not text:
        return ""
    if "<" in text or "&" in text:
        text = BeautifulSoup(text, "html.parser").get_text()
    return _WHITESPACE.sub(" ", text).strip()


def truncate_at_boundary(text: str, max_length: int) -> str:
    """
    Cut ``text`` to at most ``max_length`` characters at a natural boundary.

    Preference order over the first ``max_length`` characters:
    the last '.' if it lies beyond 70% of the limit (kept), then the last
    newline beyond 50% (dropped), then the last space, then a hard cut.
    """
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_sentence = truncated.rfind(".")
    last_paragraph = truncated.rfind("\n")
    last_space = truncated.rfind(" ")

    if last_sentence > max_length * 0.7:
        return truncated[:last_sentence + 1]
    if last_paragraph > max_length * 0.5:
        return truncated[:last_paragraph]
    if last_space > 0:
        return truncated[:last_space]
    return truncated


def create_snippet(text: str | None, max_length: int = SNIPPET_LENGTH) -> str:
    """
    Short plain-text preview.

    Ends at a sentence when one closes past 70% of the limit, otherwise at
    the last word with an ellipsis appended.
    """
    cleaned = clean_text(text)
    if len(cleaned) <= max_length:
        return cleaned

    truncated = cleaned[:max_length]
    last_sentence = truncated.rfind(".")
    last_space = truncated.rfind(" ")

    if last_sentence > max_length * 0.7:
        return truncated[:last_sentence + 1]
    if last_space > 0:
        return truncated[:last_space] + "..."
    return truncated + "..."
