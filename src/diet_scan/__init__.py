#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Diet Scan - dietary flags from food packaging text.

Reads the text printed on a food label (usually via OCR of a photo) and
reports whether it shows evidence of gluten, animal products or meat/fish.
"""

__version__ = "1.0.0"

# Only export the public API
from .classification.dietary import (
    DietaryVerdict,
    DietaryClassifier,
    classify,
    find_disqualifying_hits,
)
from .pipeline.workflow import ScanWorkflow, ScanSession, ScanOutcome

__all__ = [
    'DietaryVerdict',
    'DietaryClassifier',
    'classify',
    'find_disqualifying_hits',
    'ScanWorkflow',
    'ScanSession',
    'ScanOutcome',
]
