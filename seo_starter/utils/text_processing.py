"""Text processing utilities for content quality checks."""

import re


def count_words(text: str) -> int:
    """Count whitespace-separated words in text.

    Args:
        text: Input text.

    Returns:
        Word count.
    """
    return len(text.split())


def split_sentences(text: str) -> list[str]:
    """Split text on runs of sentence-ending punctuation.

    Returns:
        Non-blank sentence fragments.
    """
    return [s for s in re.split(r"[.!?]+", text) if s.strip()]


def average_sentence_length(text: str) -> float:
    """Average number of words per sentence (0.0 for text without sentences)."""
    sentences = split_sentences(text)
    if not sentences:
        return 0.0
    return count_words(text) / len(sentences)


def parse_keywords(keywords) -> list[str]:
    """Normalise keywords given as a list or a comma-separated string.

    Examples:
        >>> parse_keywords("plumbing, emergency plumber,, Manchester")
        ['plumbing', 'emergency plumber', 'Manchester']
    """
    if keywords is None:
        return []
    if isinstance(keywords, str):
        items = keywords.split(",")
    else:
        items = [str(k) for k in keywords]
    return [k.strip() for k in items if k.strip()]
