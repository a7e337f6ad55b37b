"""
Fuzzy String Similarity

Edit-distance and character-affinity scores for comparing normalized answers.
"""

from Levenshtein import distance, jaro_winkler


def edit_distance(first: str, second: str) -> int:
    """Minimum number of single-character edits between two strings."""
    return distance(first, second)


def edit_ratio(first: str, second: str) -> float:
    """Edit distance scaled to [0, 1] by the longer string's length."""
    max_len = max(len(first), len(second))
    if max_len == 0:
        return 1.0
    return 1.0 - edit_distance(first, second) / max_len


def char_similarity(first: str, second: str) -> float:
    """Jaro-Winkler similarity; rewards shared prefixes."""
    if not first and not second:
        return 1.0
    return jaro_winkler(first, second)


def fuzzy_similarity(first: str, second: str) -> float:
    """
    Combined similarity of two normalized strings.

    Args:
        first: Normalized string
        second: Normalized string

    Returns:
        max(edit_ratio, char_similarity), within [0, 1]
    """
    score = max(edit_ratio(first, second), char_similarity(first, second))
    return min(1.0, max(0.0, score))
