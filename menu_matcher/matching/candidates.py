"""
Candidate Matcher.

Finds the best (or every acceptable) match for a query among a list of
candidate strings, using an acceptance threshold that adapts to the length
and word count of the query.
"""

import logging
from typing import Optional, Sequence

from ..config import FIND_ALL_BASE_THRESHOLD, MATCH_BASE_THRESHOLD
from ..models import MatchResult
from .similarity import string_similarity

logger = logging.getLogger(__name__)


def get_dynamic_threshold(query: str, base_threshold: float = MATCH_BASE_THRESHOLD) -> float:
    """
    Adjust an acceptance threshold to the shape of the query.

    Short queries need higher thresholds to avoid false positives, while long
    single words and multi-word phrases can be matched more leniently.

    Args:
        query: The text being matched
        base_threshold: Threshold to adjust

    Returns:
        The threshold to apply for this query.
    """
    stripped = (query or "").strip()
    query_length = len(stripped)
    word_count = len(stripped.split())

    if query_length <= 3:
        return max(base_threshold, 0.8)
    if query_length <= 5:
        return max(base_threshold, 0.7)
    if word_count == 1:
        return max(base_threshold - 0.1, 0.4)
    if word_count > 2:
        return max(base_threshold - 0.15, 0.35)
    return base_threshold


def find_best_match(
    query: str,
    candidates: Sequence[str],
    base_threshold: float = MATCH_BASE_THRESHOLD,
) -> Optional[MatchResult]:
    """
    Find the candidate most similar to the query.

    Ties keep the earliest candidate.

    Args:
        query: Text to look up
        candidates: Strings to compare against
        base_threshold: Base for the dynamic acceptance threshold

    Returns:
        MatchResult with the candidate's index, or None when the query is
        empty, there are no candidates, or the best score is too low.
    """
    if not query or not candidates:
        return None

    best_index = 0
    best_similarity = string_similarity(query, candidates[0])
    for index in range(1, len(candidates)):
        similarity = string_similarity(query, candidates[index])
        if similarity > best_similarity:
            best_similarity = similarity
            best_index = index

    threshold = get_dynamic_threshold(query, base_threshold)
    if best_similarity < threshold:
        logger.debug(
            "Best match for '%s' was '%s' (%.2f), below threshold %.2f",
            query, candidates[best_index], best_similarity, threshold,
        )
        return None

    return MatchResult(
        matched_text=candidates[best_index],
        similarity=best_similarity,
        index=best_index,
    )


def find_all_matches(
    query: str,
    candidates: Sequence[str],
    threshold: float | None = None,
) -> list[MatchResult]:
    """
    Find every candidate scoring at or above a threshold.

    Args:
        query: Text to look up
        candidates: Strings to compare against
        threshold: Minimum score. Defaults to the dynamic threshold for the
            query with the find-all base threshold.

    Returns:
        Matches sorted by descending similarity; equal scores keep candidate
        order.
    """
    if not query or not candidates:
        return []

    if threshold is None:
        threshold = get_dynamic_threshold(query, FIND_ALL_BASE_THRESHOLD)

    matches = []
    for index, candidate in enumerate(candidates):
        similarity = string_similarity(query, candidate)
        if similarity >= threshold:
            matches.append(MatchResult(matched_text=candidate, similarity=similarity, index=index))

    return sorted(matches, key=lambda match: match.similarity, reverse=True)
