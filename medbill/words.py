"""Render whole amounts as English words on the Indian (lakh) scale."""

from __future__ import annotations

import operator
from typing import List

_ONES = ["", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
_TEENS = [
    "ten",
    "eleven",
    "twelve",
    "thirteen",
    "fourteen",
    "fifteen",
    "sixteen",
    "seventeen",
    "eighteen",
    "nineteen",
]
_TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]

LAKH = 100_000
THOUSAND = 1_000


def _three_digit_words(value: int) -> List[str]:
    """Words for 0 <= value < 1000; empty list for zero."""
    words: List[str] = []
    hundreds, rest = divmod(value, 100)
    if hundreds:
        words += [_ONES[hundreds], "hundred"]
    if rest >= 20:
        words.append(_TENS[rest // 10])
        rest %= 10
    if rest >= 10:
        words.append(_TEENS[rest - 10])
        rest = 0
    if rest:
        words.append(_ONES[rest])
    return words


def _group_words(value: int) -> List[str]:
    if value < THOUSAND:
        return _three_digit_words(value)
    return number_to_words(value).split()


def number_to_words(n: int) -> str:
    """Return ``n`` in lowercase English words, e.g. 100000 -> "one lakh".

    No currency unit and no "and" are added; callers append those.
    """
    n = operator.index(n)
    if n < 0:
        raise ValueError("number_to_words() does not support negative numbers.")
    if n == 0:
        return "zero"

    words: List[str] = []
    lakhs, n = divmod(n, LAKH)
    if lakhs:
        words += _group_words(lakhs) + ["lakh"]
    thousands, n = divmod(n, THOUSAND)
    if thousands:
        words += _three_digit_words(thousands) + ["thousand"]
    words += _three_digit_words(n)
    return " ".join(words)
