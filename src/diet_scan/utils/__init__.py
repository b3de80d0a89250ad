#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility modules for diet scan.
"""

from .constants import (
    DIETARY_FLAGS,
    GLUTEN, ANIMAL_DERIVED, MEAT_FISH,
    KeywordSet, KeywordTable,
    build_default_table, get_default_table, load_keyword_table,
)

__all__ = [
    'DIETARY_FLAGS',
    'GLUTEN', 'ANIMAL_DERIVED', 'MEAT_FISH',
    'KeywordSet', 'KeywordTable',
    'build_default_table', 'get_default_table', 'load_keyword_table',
]
