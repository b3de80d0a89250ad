#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Diet classification functions.
"""

from .dietary import (
    DietaryVerdict,
    DietaryClassifier,
    classify,
    find_disqualifying_hits,
    get_default_classifier,
)

__all__ = [
    'DietaryVerdict',
    'DietaryClassifier',
    'classify',
    'find_disqualifying_hits',
    'get_default_classifier',
]
