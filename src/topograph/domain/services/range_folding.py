"""Hostlist range folding.

Scheduler config files list nodes and switches in folded form, e.g.
`node[101-104],node107`. A name is split into a prefix and a numeric
suffix; names sharing a prefix are folded into contiguous ranges.

Leading zeros of the numeric suffix stay in the prefix, so `eos0507` has
prefix `eos0` and suffix `507`. A range therefore never needs zero padding.
"""

from __future__ import annotations

import re
import string
from itertools import groupby
from typing import Iterable

_RANGE_TOKEN = re.compile(r"(?P<prefix>.*)\[(?P<first>[0-9]+)-(?P<last>[0-9]+)\]")


def split(name: str) -> tuple[str, str]:
    """Split name into (prefix, numeric suffix).

    The suffix is the trailing run of digits without its leading zeros;
    those zeros are kept at the end of the prefix.

    >>> split("abc01203045")
    ('abc0', '1203045')
    >>> split("0012345")
    ('00', '12345')
    """
    start = len(name)
    while start and name[start - 1] in string.digits:
        start -= 1
    suffix = name[start:].lstrip("0")
    return name[: len(name) - len(suffix)], suffix


def _fold(prefix: str, numbers: list[int]) -> list[str]:
    tokens = []
    # consecutive integers share the same value - index
    for _, run in groupby(enumerate(numbers), key=lambda item: item[1] - item[0]):
        values = [value for _, value in run]
        if len(values) == 1:
            tokens.append(f"{prefix}{values[0]}")
        else:
            tokens.append(f"{prefix}[{values[0]}-{values[-1]}]")
    return tokens


def compress(names: Iterable[str]) -> list[str]:
    """Fold names into the fewest prefix/range tokens.

    Prefixes are emitted in lexicographic order; tokens of one prefix in
    ascending numeric order. Names without a numeric suffix are emitted
    unchanged ahead of the ranges of their prefix.

    >>> compress(["eos0507", "eos0509", "abc", "eos0482", "eos0508"])
    ['abc', 'eos0482', 'eos0[507-509]']
    """
    plain: set[str] = set()
    numbered: dict[str, set[int]] = {}
    for name in names:
        prefix, suffix = split(name)
        if suffix:
            numbered.setdefault(prefix, set()).add(int(suffix))
        else:
            plain.add(name)

    tokens = []
    for prefix in sorted(plain | set(numbered)):
        if prefix in plain:
            tokens.append(prefix)
        if prefix in numbered:
            tokens.extend(_fold(prefix, sorted(numbered[prefix])))
    return tokens


def expand(token: str) -> list[str]:
    """Expand one compress() token back into names."""
    match = _RANGE_TOKEN.fullmatch(token)
    if match is None:
        return [token]
    prefix = match.group("prefix")
    first, last = int(match.group("first")), int(match.group("last"))
    return [f"{prefix}{value}" for value in range(first, last + 1)]
