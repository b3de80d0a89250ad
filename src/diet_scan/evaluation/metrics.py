#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Metrics calculation and display utilities.
"""

from typing import Dict, Iterable, List

import numpy as np
from sklearn.metrics import (
    accuracy_score, confusion_matrix, f1_score, precision_score, recall_score,
)

from ..core import log

COLUMNS = ("ACC", "PREC", "REC", "F1")


def table(title: str, rows: List[Dict]) -> None:
    """
    Display per-flag results in a formatted table.

    Args:
        title: Table title
        rows: Result dictionaries with a 'flag' key and the metric columns
    """
    hdr = "│ flag        " + " ".join(f"{c:>7}" for c in COLUMNS) + "      n │"
    log.info(f"╭─ {title} {'─' * max(len(hdr) - len(title) - 4, 0)}")
    log.info(hdr)
    log.info("├" + "─" * (len(hdr) - 2) + "┤")
    for r in rows:
        vals = " ".join(f"{r[c]:>7.2f}" for c in COLUMNS)
        log.info(f"│ {r['flag']:<11} {vals} {r['n']:>6} │")
    log.info("╰" + "─" * (len(hdr) - 2) + "╯")


def pack(y_true: Iterable, y_pred: Iterable) -> Dict[str, float]:
    """
    Calculate metrics for boolean predictions.

    The positive class is True (flag holds), so precision answers "when we
    say vegan, how often is it really vegan".

    Returns:
        Dictionary with ACC, PREC, REC, F1 and the confusion counts
    """
    y = np.asarray(list(y_true), dtype=int)
    pred = np.asarray(list(y_pred), dtype=int)
    tn, fp, fn, tp = confusion_matrix(y, pred, labels=[0, 1]).ravel()
    return dict(
        ACC=float(accuracy_score(y, pred)),
        PREC=float(precision_score(y, pred, zero_division=0)),
        REC=float(recall_score(y, pred, zero_division=0)),
        F1=float(f1_score(y, pred, zero_division=0)),
        TP=int(tp), FP=int(fp), TN=int(tn), FN=int(fn),
        n=int(len(y)),
    )
