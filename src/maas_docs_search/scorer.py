"""Keyword relevance scoring for documentation pages."""

PHRASE_BONUS = 10
WORD_BONUS = 2
MAX_POSITION_BONUS = 5
POSITION_STEP = 100
MIN_WORD_LENGTH = 3


def query_words(query: str) -> list[str]:
    """Split a lower-cased query into scoring words.

    Words shorter than three characters are dropped.

    Args:
        query: Lower-cased query string.

    Returns:
        Query words in their original order.
    """
    return [word for word in query.split() if len(word) >= MIN_WORD_LENGTH]


def calculate_relevance(query: str, words: list[str], text: str) -> int:
    """Score how well a query matches a document body.

    The score adds an exact phrase bonus, a bonus for each query word
    present in the text, and a position bonus that shrinks by one for
    every hundred characters before the first phrase match.

    Args:
        query: Lower-cased full query string.
        words: Scoring words from query_words().
        text: Lower-cased document text.

    Returns:
        Non-negative relevance score; 0 means no match.
    """
    score = 0

    first_match = text.find(query)
    if first_match != -1:
        score += PHRASE_BONUS

    for word in words:
        if word in text:
            score += WORD_BONUS

    if first_match != -1:
        score += max(0, MAX_POSITION_BONUS - first_match // POSITION_STEP)

    return score
