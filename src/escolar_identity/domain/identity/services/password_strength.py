"""Password strength scoring.

The score is a percentage built from independent criteria:

=====================  ======
Criterion              Points
=====================  ======
length >= 8            25
lowercase letter       25
uppercase letter       25
digit                  12.5
symbol                 12.5
=====================  ======
"""

import re

MIN_SCORED_LENGTH = 8
ACCEPTABLE_STRENGTH = 60.0

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")


def password_strength(password: str) -> float:
    """Score a password between 0 and 100."""
    if not password:
        return 0.0

    score = 0.0
    if len(password) >= MIN_SCORED_LENGTH:
        score += 25
    if _LOWER.search(password):
        score += 25
    if _UPPER.search(password):
        score += 25
    if _DIGIT.search(password):
        score += 12.5
    if _SYMBOL.search(password):
        score += 12.5
    return min(score, 100.0)


def strength_label(score: float) -> str:
    if score < 30:
        return "weak"
    if score < ACCEPTABLE_STRENGTH:
        return "fair"
    if score < 80:
        return "good"
    return "strong"
