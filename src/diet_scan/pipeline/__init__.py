#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scan workflow, batch prediction and evaluation.
"""

from .workflow import (
    STATUS_OK, STATUS_ACQUISITION_FAILED, STATUS_OCR_FAILED,
    ScanOutcome, ScanSession, ScanWorkflow,
    run_scan, scan_many,
)
from .prediction import batch_predict, classify_texts
from .evaluation import evaluate_ground_truth

__all__ = [
    # Workflow
    'STATUS_OK', 'STATUS_ACQUISITION_FAILED', 'STATUS_OCR_FAILED',
    'ScanOutcome', 'ScanSession', 'ScanWorkflow',
    'run_scan', 'scan_many',

    # Batch
    'batch_predict',
    'classify_texts',
    'evaluate_ground_truth',
]
