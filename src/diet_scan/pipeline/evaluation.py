#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Evaluation of the keyword classifier against labelled label texts.
"""

from typing import List, Optional

import pandas as pd

from ..core import log, DataLoadingError
from ..classification.dietary import DietaryClassifier, get_default_classifier
from ..evaluation.metrics import pack, table
from ..utils.constants import DIETARY_FLAGS
from .prediction import read_texts_csv

_TRUE = {"1", "true", "yes", "y", "t"}
_FALSE = {"0", "false", "no", "n", "f"}


def parse_labels(column: pd.Series) -> pd.Series:
    """
    Coerce a label column to booleans.

    Accepts bools, 0/1 and yes/no/true/false strings. Anything else
    (including blanks) becomes NA and is skipped during scoring.
    """
    def _one(value):
        if pd.isna(value):
            return pd.NA
        if isinstance(value, bool):
            return value
        token = str(value).strip().lower()
        if token.endswith(".0"):
            token = token[:-2]
        if token in _TRUE:
            return True
        if token in _FALSE:
            return False
        return pd.NA

    return column.map(_one).astype("boolean")


def evaluate_ground_truth(ground_truth_path: str, text_column: str = "text",
                          classifier: Optional[DietaryClassifier] = None) -> List[dict]:
    """
    Score the classifier against a labelled CSV.

    Any of the columns gluten_free, vegan, vegetarian that are present are
    used as labels.

    Returns:
        One metrics dict per evaluated flag

    Raises:
        DataLoadingError: If the text column or all label columns are missing
    """
    log.info("📊 GROUND TRUTH EVALUATION")
    log.info(f"   ├─ Loading ground truth: {ground_truth_path}")
    gt_df = read_texts_csv(ground_truth_path, text_column)

    label_cols = [flag for flag in DIETARY_FLAGS if flag in gt_df.columns]
    if not label_cols:
        raise DataLoadingError(
            f"No label columns found, expected any of {list(DIETARY_FLAGS)}")

    log.info(f"   ├─ Dataset size: {len(gt_df)} samples")
    log.info(f"   ├─ Label columns: {label_cols}")

    classifier = classifier or get_default_classifier()
    texts = gt_df[text_column].fillna("").astype(str)
    predictions = pd.DataFrame([classifier.classify(t).to_dict() for t in texts],
                               index=gt_df.index)

    results = []
    for flag in label_cols:
        labels = parse_labels(gt_df[flag])
        mask = labels.notna()
        skipped = int((~mask).sum())
        if skipped:
            log.warning(f"   ⚠️  {flag}: skipping {skipped} rows with unusable labels")
        if not mask.any():
            log.warning(f"   ⚠️  {flag}: no usable labels, not scored")
            continue

        metrics = pack(labels[mask].astype(bool), predictions.loc[mask, flag])
        results.append({'flag': flag, **metrics})
        log.info(f"   ├─ {flag}: F1={metrics['F1']:.3f} "
                 f"(FP={metrics['FP']}, FN={metrics['FN']})")

    if results:
        table("KEYWORD CLASSIFIER", results)
    return results
