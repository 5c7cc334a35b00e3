import math

import pytest

from poolpass.charsets import Category
from poolpass.evaluator import (
    classes_present,
    evaluate,
    pool_entropy,
    score_password,
    strength_label,
)


def test_score_all_classes_short_password():
    assert score_password("Ab3!", Category.ALL) == 62
    assert strength_label(62) == "Strong"

def test_score_lowercase_only():
    assert score_password("abcdefgh", Category.LOWERCASE) == 37
    assert strength_label(37) == "Moderate"

def test_disabled_classes_do_not_count():
    # uppercase present but not enabled
    assert score_password("Ab3!", Category.LOWERCASE) == math.floor((4 / 32 + 0.125) * 100)
    assert classes_present("Ab3!", Category.LOWERCASE) == [Category.LOWERCASE]

def test_length_component_saturates():
    assert score_password("a" * 16, Category(0)) == 50
    assert score_password("a" * 32, Category(0)) == 50
    assert score_password("aB3!" * 8, Category.ALL) == 100

def test_empty_password_scores_zero():
    assert score_password("", Category.ALL) == 0

def test_symbol_means_not_alphanumeric():
    assert classes_present("~", Category.SYMBOLS) == [Category.SYMBOLS]
    assert classes_present("a1", Category.SYMBOLS) == []

def test_label_boundaries():
    assert strength_label(0) == "Weak"
    assert strength_label(29) == "Weak"
    assert strength_label(30) == "Moderate"
    assert strength_label(59) == "Moderate"
    assert strength_label(60) == "Strong"
    assert strength_label(79) == "Strong"
    assert strength_label(80) == "Very Strong"
    assert strength_label(100) == "Very Strong"
    with pytest.raises(ValueError):
        strength_label(101)
    with pytest.raises(ValueError):
        strength_label(-1)

def test_evaluate_reports_classes():
    result = evaluate("Ab3!", Category.ALL)
    assert result == {
        "score": 62,
        "label": "Strong",
        "length": 4,
        "classes": ["uppercase", "lowercase", "numbers", "symbols"],
    }

def test_pool_entropy():
    assert pool_entropy("", 16) == 0.0
    assert pool_entropy("0123456789", 4) == pytest.approx(4 * math.log2(10))
    # duplicated characters add no entropy
    assert pool_entropy("aab", 2) == pytest.approx(2.0)
