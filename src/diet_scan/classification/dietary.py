#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dietary classification of label text.

Maps OCR text to three independent flags: gluten_free, vegan and
vegetarian. A flag is True when the text shows no disqualifying keyword
for it, so empty or garbled text is classified as all True.
"""

from dataclasses import dataclass, asdict
from functools import lru_cache
from typing import Dict, List, Optional

from ..core import log, ConfigurationError, KeywordTableError
from ..utils.constants import (
    DIETARY_FLAGS,
    KeywordTable,
    get_default_table,
    load_keyword_table,
)


@dataclass(frozen=True)
class DietaryVerdict:
    """Result of classifying one text. True means no disqualifying evidence."""
    gluten_free: bool = True
    vegan: bool = True
    vegetarian: bool = True

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    def __getitem__(self, flag: str) -> bool:
        if flag not in DIETARY_FLAGS:
            raise KeyError(flag)
        return getattr(self, flag)


class DietaryClassifier:
    """
    Case-insensitive substring classifier over a swappable keyword table.

    Instances hold only the immutable table, so one classifier can be
    shared by any number of concurrent callers.

    Example:
        >>> DietaryClassifier().classify("Ingredients: milk, whey, sugar")
        DietaryVerdict(gluten_free=True, vegan=False, vegetarian=True)
    """

    def __init__(self, table: Optional[KeywordTable] = None):
        self.table = table if table is not None else get_default_table()

    def classify(self, text: Optional[str]) -> DietaryVerdict:
        """
        Classify label text.

        Args:
            text: OCR text, possibly empty. None is treated as empty.

        Returns:
            DietaryVerdict with one flag per category
        """
        lowered = _lower(text)
        if not lowered:
            return DietaryVerdict()

        flags = {
            flag: self.table[flag].first_match(lowered) is None
            for flag in DIETARY_FLAGS
        }
        return DietaryVerdict(**flags)

    def find_disqualifying_hits(self, text: Optional[str]) -> Dict[str, List[str]]:
        """
        Find every keyword that disqualifies each flag.

        Returns:
            Mapping of flag to the sorted keywords found (empty list if none)
        """
        lowered = _lower(text)
        return {flag: self.table[flag].matches(lowered) for flag in DIETARY_FLAGS}


def _lower(text: Optional[str]) -> str:
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return text.lower()


@lru_cache(maxsize=1)
def get_default_classifier() -> DietaryClassifier:
    """
    Process-wide classifier.

    Uses the table named by DIET_SCAN_KEYWORD_TABLE when set, the built-in
    table otherwise.
    """
    from ..config import CFG

    if CFG.keyword_table_path is None:
        return DietaryClassifier()

    try:
        table = load_keyword_table(CFG.keyword_table_path)
    except KeywordTableError as e:
        raise ConfigurationError(
            f"DIET_SCAN_KEYWORD_TABLE is invalid: {e}") from e
    log.info(f"Loaded keyword table from {CFG.keyword_table_path}")
    return DietaryClassifier(table)


def classify(text: Optional[str]) -> DietaryVerdict:
    """Classify text with the process-wide classifier."""
    return get_default_classifier().classify(text)


def find_disqualifying_hits(text: Optional[str]) -> Dict[str, List[str]]:
    """Disqualifying keywords per flag, using the process-wide classifier."""
    return get_default_classifier().find_disqualifying_hits(text)
