"""
poolpass.evaluator

Password strength heuristic:
- score_password(password, categories): 0-100 score from length and the
  character classes that are both enabled and actually used
- strength_label(score): Weak / Moderate / Strong / Very Strong bucket
- evaluate(password, categories): score, label and the classes found
- pool_entropy(pool, length): theoretical bits of a sampled password

The score is a heuristic, not an entropy measurement.
"""

import math
from typing import Dict, List

from .charsets import CATEGORY_ORDER, Category

# score lower bounds, highest first
LABELS = (
    (80, "Very Strong"),
    (60, "Strong"),
    (30, "Moderate"),
    (0, "Weak"),
)

_CLASS_TESTS = {
    Category.UPPERCASE: str.isupper,
    Category.LOWERCASE: str.islower,
    Category.NUMBERS: str.isdigit,
    Category.SYMBOLS: lambda c: not c.isalnum(),
}


def classes_present(password: str, categories: Category) -> List[Category]:
    """Enabled categories that have at least one character in the password."""
    return [
        c for c in CATEGORY_ORDER
        if c in categories and any(_CLASS_TESTS[c](ch) for ch in password)
    ]


def score_password(password: str, categories: Category) -> int:
    """
    length part:  min(len / 32, 0.5)
    variety part: (enabled-and-present classes / 4) * 0.5
    score = floor((length + variety) * 100), clamped to 0..100
    """
    length_part = min(len(password) / 32, 0.5)
    variety_part = len(classes_present(password, categories)) / 4 * 0.5
    score = math.floor((length_part + variety_part) * 100)
    return max(0, min(100, score))


def strength_label(score: int) -> str:
    if score < 0 or score > 100:
        raise ValueError("score must be between 0 and 100")
    for lower, label in LABELS:
        if score >= lower:
            return label
    return LABELS[-1][1]


def evaluate(password: str, categories: Category) -> Dict:
    """
    Returns a dict:
    {
        "score": int,     # 0..100
        "label": str,
        "length": int,
        "classes": [str]  # enabled classes present in the password
    }
    """
    score = score_password(password, categories)
    return {
        "score": score,
        "label": strength_label(score),
        "length": len(password),
        "classes": [c.name.lower() for c in classes_present(password, categories)],
    }


def pool_entropy(pool: str, length: int) -> float:
    """Bits of entropy of `length` uniform draws over the distinct pool characters."""
    distinct = len(set(pool))
    if distinct == 0 or length <= 0:
        return 0.0
    return length * math.log2(distinct)
