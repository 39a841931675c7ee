"""Free-text answer checking."""


def normalize(text: str) -> str:
    return text.strip().casefold()


def matches(user_input: str, expected: str) -> bool:
    """Exact match after trimming surrounding whitespace and case-folding."""
    return normalize(user_input) == normalize(expected)
