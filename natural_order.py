"""Three-way string comparators used to order queue payloads.

A comparator takes two strings and returns a negative number, zero or a
positive number, like the old ``cmp`` builtin.
"""
from __future__ import annotations

import re
import unicodedata
from functools import cmp_to_key
from typing import Callable, List

Comparator = Callable[[str, str], int]

# split() with a capture group alternates text runs (even) and digit runs (odd)
_DIGITS = re.compile(r"(\d+)")


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _runs(s: str) -> List[str]:
    return _DIGITS.split(s)


def _number_cmp(a: str, b: str) -> int:
    # arbitrary length runs, compared without int() conversion limits
    a = "".join(str(unicodedata.decimal(ch)) for ch in a).lstrip("0")
    b = "".join(str(unicodedata.decimal(ch)) for ch in b).lstrip("0")
    return _cmp(len(a), len(b)) or _cmp(a, b)


def natural_compare(a: str, b: str) -> int:
    """Compare ``a`` and ``b`` case-insensitively, digit runs by value.

    ``"item2"`` sorts before ``"item10"`` and ``"Apple"`` before ``"banana"``.
    Text runs are case folded whole, so ``"Straße"`` equals ``"STRASSE"``.
    """
    ra, rb = _runs(a), _runs(b)
    for k in range(min(len(ra), len(rb))):
        if k % 2:
            c = _number_cmp(ra[k], rb[k])
            if c:
                return c
            continue
        fa, fb = ra[k].casefold(), rb[k].casefold()
        if fa == fb:
            continue
        # a run that is a prefix of the other meets the digit that follows it
        na = ra[k + 1][:1] if k + 1 < len(ra) else ""
        nb = rb[k + 1][:1] if k + 1 < len(rb) else ""
        return _cmp(fa + na, fb + nb) or _cmp(len(fa), len(fb))
    return _cmp(len(ra), len(rb))


def lexical_compare(a: str, b: str) -> int:
    """Plain code point ordering."""
    return _cmp(a, b)


natural_key = cmp_to_key(natural_compare)
