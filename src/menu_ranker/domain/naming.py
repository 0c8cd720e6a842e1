"""Search term generation for noisy place names."""

_MIN_TERM_LENGTH = 3
_APOSTROPHES = ("'", "’")


def candidate_terms(name: str) -> list[str]:
    """Return ordered search terms for a place name.

    The full name comes first, then shorter word prefixes down to two words,
    then the name without apostrophes. For ``"McDonald's Store #4521"`` this
    yields ``["McDonald's Store #4521", "McDonald's Store",
    "McDonalds Store #4521"]``.
    """
    cleaned = " ".join(name.split())
    words = cleaned.split(" ")
    candidates = [cleaned]
    for size in range(len(words) - 1, 1, -1):
        candidates.append(" ".join(words[:size]))
    if any(mark in cleaned for mark in _APOSTROPHES):
        stripped = cleaned
        for mark in _APOSTROPHES:
            stripped = stripped.replace(mark, "")
        candidates.append(stripped)

    terms: list[str] = []
    for term in candidates:
        if len(term) < _MIN_TERM_LENGTH or term in terms:
            continue
        terms.append(term)
    return terms
