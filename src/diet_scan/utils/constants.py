#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Domain-specific keyword tables for dietary classification.

The tables are plain data. Matching code lives in
``classification.dietary`` and never hard-codes a keyword, so another
language or an extra allergen is a new table, not new logic.

Keywords are matched as lowercase substrings, not whole words. Keep
entries long enough that they do not hide inside unrelated words.
"""

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from collections.abc import Mapping
from typing import FrozenSet, Iterable, Union

from ..core.exceptions import KeywordTableError

# Dietary flags, in output order
DIETARY_FLAGS = ("gluten_free", "vegan", "vegetarian")

# Gluten-containing grains
GLUTEN = [
    "wheat", "barley", "rye", "spelt", "malt", "semolina", "triticale",
]

# Dairy, egg and animal-derived additives (no flesh)
ANIMAL_DERIVED = [
    "milk", "cheese", "butter", "egg", "honey", "whey",
    "casein", "lactose", "albumin", "carmine",
]

# Meat, fish and slaughter by-products
MEAT_FISH = [
    "chicken", "beef", "pork", "lard", "fish", "gelatin", "anchovy",
    "shrimp", "meat", "bacon", "ham",
]


@dataclass(frozen=True)
class KeywordSet:
    """
    Immutable set of lowercase trigger terms for one disqualifying attribute.

    Attributes:
        name: Attribute name, e.g. ``"contains-gluten"``
        keywords: Lowercase keywords
    """
    name: str
    keywords: FrozenSet[str]

    @classmethod
    def of(cls, name: str, words: Iterable[str]) -> "KeywordSet":
        """Build a set from raw words, lowercasing and rejecting blanks."""
        cleaned = set()
        for word in words:
            if not isinstance(word, str) or not word.strip():
                raise KeywordTableError(
                    f"Keyword set '{name}' contains an empty or non-string entry: {word!r}")
            cleaned.add(word.lower())
        return cls(name, frozenset(cleaned))

    def union(self, other: "KeywordSet", name: str) -> "KeywordSet":
        return KeywordSet(name, self.keywords | other.keywords)

    def first_match(self, lowered_text: str):
        """Return any keyword contained in ``lowered_text``, or None."""
        return next((kw for kw in self.keywords if kw in lowered_text), None)

    def matches(self, lowered_text: str) -> list:
        """All keywords contained in ``lowered_text``, sorted."""
        return sorted(kw for kw in self.keywords if kw in lowered_text)

    def __contains__(self, keyword) -> bool:
        return keyword in self.keywords

    def __len__(self) -> int:
        return len(self.keywords)


class KeywordTable(Mapping):
    """
    Read-only mapping from dietary flag to the KeywordSet that disqualifies it.

    Every flag in ``DIETARY_FLAGS`` must be present.
    """

    def __init__(self, sets: Mapping[str, KeywordSet]):
        missing = [flag for flag in DIETARY_FLAGS if flag not in sets]
        if missing:
            raise KeywordTableError(f"Keyword table is missing flags: {missing}")
        unknown = [flag for flag in sets if flag not in DIETARY_FLAGS]
        if unknown:
            raise KeywordTableError(f"Keyword table has unknown flags: {unknown}")
        self._sets = MappingProxyType({flag: sets[flag] for flag in DIETARY_FLAGS})

    def __getitem__(self, flag: str) -> KeywordSet:
        return self._sets[flag]

    def __iter__(self):
        return iter(self._sets)

    def __len__(self) -> int:
        return len(self._sets)

    def to_dict(self) -> dict:
        return {flag: sorted(kw_set.keywords) for flag, kw_set in self._sets.items()}


def build_default_table() -> KeywordTable:
    """
    Compose the built-in table.

    Non-vegan is derived as animal-derived plus meat/fish, and
    non-vegetarian is meat/fish, so the two lists cannot drift apart.
    """
    gluten = KeywordSet.of("contains-gluten", GLUTEN)
    meat_fish = KeywordSet.of("contains-meat-or-fish", MEAT_FISH)
    animal = KeywordSet.of("contains-animal-product", ANIMAL_DERIVED)

    return KeywordTable({
        "gluten_free": gluten,
        "vegan": animal.union(meat_fish, "contains-animal-product"),
        "vegetarian": meat_fish,
    })


def load_keyword_table(path: Union[str, Path]) -> KeywordTable:
    """
    Load a keyword table from a JSON file.

    Expected format::

        {"gluten_free": ["weizen", ...], "vegan": [...], "vegetarian": [...]}

    Raises:
        KeywordTableError: If the file is missing, not JSON, or malformed
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise KeywordTableError(f"Keyword table not found: {path}")
    except (OSError, ValueError) as e:
        raise KeywordTableError(f"Could not read keyword table {path}: {e}") from e

    if not isinstance(raw, dict):
        raise KeywordTableError(f"Keyword table {path} must be a JSON object")

    sets = {}
    for flag, words in raw.items():
        if not isinstance(words, list):
            raise KeywordTableError(
                f"Keyword table {path}: '{flag}' must be a list of strings")
        sets[flag] = KeywordSet.of(flag, words)
    return KeywordTable(sets)


@lru_cache(maxsize=1)
def get_default_table() -> KeywordTable:
    """Built-in keyword table, composed once per process."""
    from ..core import log
    log.debug("Composing built-in keyword table...")
    return build_default_table()
