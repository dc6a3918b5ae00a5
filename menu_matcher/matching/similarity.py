"""
Similarity Scorer.

Scores how alike two strings are on a 0-1 scale using an ordered chain of
heuristics tuned for spoken menu orders:

1. identity after lowercasing and trimming
2. abbreviations ("cm" for "Caramel Macchiato")
3. substring containment
4. matching first words ("niros" for "Niros Gyros")
5. word order flexible matching ("latte vanilla" for "Vanilla Latte")
6. phonetic folding ("cappacino" for "cappuccino")
7. word level overlap
8. Levenshtein ratio

Each step either returns a score, which ends the chain, or None to pass the
comparison on to the next step. The score is not symmetric: callers pass
the spoken query first and the catalog text second.
"""

from typing import Callable, Optional

from rapidfuzz.distance import Levenshtein

from .constants import PHONETIC_FOLDS


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost for insertions, deletions and substitutions."""
    return Levenshtein.distance(a, b)


def _levenshtein_ratio(a: str, b: str) -> float:
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0
    return 1 - levenshtein_distance(a, b) / max_length


def _phonetic_fold(text: str) -> str:
    folded = text.lower()
    for spelling, sound in PHONETIC_FOLDS:
        folded = folded.replace(spelling, sound)
    return folded


def phonetic_similarity(a: str, b: str) -> float:
    """
    Compare two strings after folding sound-alike spellings.

    Returns 1.0 when the folded strings are equal, otherwise the Levenshtein
    ratio of the folded strings.
    """
    a_folded = _phonetic_fold(a)
    b_folded = _phonetic_fold(b)
    if a_folded == b_folded:
        return 1.0
    return _levenshtein_ratio(a_folded, b_folded)


def abbreviation_match(query: str, target: str) -> float:
    """
    Score how well a single-token query abbreviates a multi-word target.

    Returns 0.9 when the query spells the initials of every target word,
    0.7-0.9 for a partial initials match covering at least 70% of the
    query's letters (and at least two of them), and 0 otherwise.
    """
    query_words = query.lower().split()
    target_words = target.lower().split()

    if len(query_words) != 1 or len(target_words) < 2:
        return 0.0

    letters = query_words[0]
    initials = "".join(word[0] for word in target_words)
    if letters == initials:
        return 0.9

    match_count = sum(
        1 for letter, word in zip(letters, target_words) if letter == word[0]
    )
    ratio = match_count / len(letters)
    if match_count >= 2 and ratio >= 0.7:
        return 0.7 + ratio * 0.2
    return 0.0


def word_order_flexibility_match(a: str, b: str) -> float:
    """
    Score word overlap regardless of word order.

    Each word of ``a`` is paired greedily with an unused word of ``b``:
    an exact word is worth 1, a containing word 0.8 and a phonetically close
    word 0.9 times its phonetic score. Single-letter words are ignored.
    """
    a_words = [word for word in a.lower().split() if len(word) > 1]
    b_words = [word for word in b.lower().split() if len(word) > 1]
    if not a_words or not b_words:
        return 0.0

    matched = 0.0
    used: set[int] = set()
    for a_word in a_words:
        for i, b_word in enumerate(b_words):
            if i in used:
                continue
            if a_word == b_word:
                matched += 1
                used.add(i)
                break
            if (len(a_word) > 3 and a_word in b_word) or (len(b_word) > 3 and b_word in a_word):
                matched += 0.8
                used.add(i)
                break
            phonetic = phonetic_similarity(a_word, b_word)
            if phonetic > 0.8:
                matched += phonetic * 0.9
                used.add(i)
                break

    coverage = matched / max(len(a_words), len(b_words))
    completeness = matched / min(len(a_words), len(b_words))
    return min(0.95, coverage * 0.6 + completeness * 0.4)


# =============================================================================
# Scoring steps
# =============================================================================

def _contains(a: str, b: str) -> bool:
    return a in b or b in a


def _containment_score(a: str, b: str) -> float:
    return 0.85 + 0.1 * min(len(a), len(b)) / max(len(a), len(b))


def _identity_step(a: str, b: str) -> Optional[float]:
    return 1.0 if a == b else None


def _abbreviation_step(a: str, b: str) -> Optional[float]:
    score = max(abbreviation_match(a, b), abbreviation_match(b, a))
    if score <= 0.7:
        return None
    # A contained string always scores at least the containment floor
    if _contains(a, b) and score < _containment_score(a, b):
        return None
    return score


def _containment_step(a: str, b: str) -> Optional[float]:
    if _contains(a, b):
        return _containment_score(a, b)
    return None


def _first_word_step(a: str, b: str) -> Optional[float]:
    a_first = a.split()[0]
    b_first = b.split()[0]
    if _contains(a_first, b_first):
        return 0.75
    return None


def _word_order_step(a: str, b: str) -> Optional[float]:
    score = word_order_flexibility_match(a, b)
    return score if score > 0.6 else None


def _phonetic_step(a: str, b: str) -> Optional[float]:
    score = phonetic_similarity(a, b)
    return score * 0.9 if score > 0.8 else None


def _word_overlap_step(a: str, b: str) -> Optional[float]:
    a_words = a.split()
    b_words = b.split()
    matches = sum(
        1
        for a_word in a_words
        if len(a_word) > 2 and any(_contains(a_word, b_word) for b_word in b_words)
    )
    ratio = matches / max(len(a_words), 1)
    if ratio > 0.3:
        return 0.65 + ratio * 0.25
    return None


SCORING_STEPS: tuple[Callable[[str, str], Optional[float]], ...] = (
    _identity_step,
    _abbreviation_step,
    _containment_step,
    _first_word_step,
    _word_order_step,
    _phonetic_step,
    _word_overlap_step,
)


def string_similarity(a: str | None, b: str | None) -> float:
    """
    Calculate the similarity between two strings.

    Args:
        a: The query text (typically spoken input)
        b: The candidate text (typically a catalog name)

    Returns:
        Score between 0 and 1. 1.0 means identical after lowercasing and
        trimming; empty or blank input on either side scores 0.
    """
    a_lower = (a or "").lower().strip()
    b_lower = (b or "").lower().strip()
    if not a_lower or not b_lower:
        return 0.0

    for step in SCORING_STEPS:
        score = step(a_lower, b_lower)
        if score is not None:
            return max(0.0, min(1.0, score))

    return max(0.0, min(1.0, _levenshtein_ratio(a_lower, b_lower)))
