#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Batch prediction over CSV files of label texts.
"""

from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd
from tqdm import tqdm

from ..core import log, DataLoadingError
from ..classification.dietary import DietaryClassifier, get_default_classifier
from ..utils.constants import DIETARY_FLAGS


def read_texts_csv(input_path, text_column: str = "text") -> pd.DataFrame:
    """
    Load a CSV and check it has the text column.

    Raises:
        DataLoadingError: If the file is missing, unreadable or lacks the column
    """
    try:
        df = pd.read_csv(input_path)
    except FileNotFoundError as e:
        raise DataLoadingError(f"Input file not found: {input_path}") from e
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataLoadingError(f"Could not parse {input_path}: {e}") from e

    if text_column not in df.columns:
        raise DataLoadingError(
            f"Missing required '{text_column}' column, available: {list(df.columns)}")
    return df


def classify_texts(texts: Iterable[Optional[str]],
                   classifier: Optional[DietaryClassifier] = None) -> List[dict]:
    """
    Classify many texts.

    Returns:
        One verdict dict per input, in order
    """
    classifier = classifier or get_default_classifier()
    return [classifier.classify(text).to_dict()
            for text in tqdm(texts, desc="   ├─ Classifying", leave=False)]


def batch_predict(input_path: str, output_path: Optional[str] = None,
                  text_column: str = "text",
                  classifier: Optional[DietaryClassifier] = None) -> pd.DataFrame:
    """
    Run batch classification on a CSV file of label texts.

    Expected CSV format:
    - Must have the text column (default 'text')
    - Any other columns are preserved in output

    Args:
        input_path: Path to input CSV file
        output_path: Path for output CSV (if None, ``<stem>_predictions.csv``
            next to the input)
        text_column: Column holding OCR text
        classifier: Classifier to use, defaults to the process-wide one

    Returns:
        The input frame with gluten_free, vegan and vegetarian columns added
    """
    log.info("🔮 BATCH PREDICTION")
    log.info(f"   ├─ Loading input data: {input_path}")
    df = read_texts_csv(input_path, text_column)
    log.info(f"   ├─ Dataset size: {len(df)} rows")

    null_count = int(df[text_column].isnull().sum())
    if null_count:
        log.warning(f"   ⚠️  Found {null_count} empty texts, classifying them as empty")

    texts = df[text_column].fillna("").astype(str)
    verdicts = pd.DataFrame(classify_texts(texts, classifier), index=df.index,
                            columns=list(DIETARY_FLAGS))

    results_df = df.copy()
    for flag in DIETARY_FLAGS:
        results_df[flag] = verdicts[flag].astype(bool)

    if output_path is None:
        input_path = Path(input_path)
        output_path = input_path.parent / f"{input_path.stem}_predictions.csv"
    results_df.to_csv(output_path, index=False)

    total = len(results_df)
    log.info("   📊 PREDICTION SUMMARY:")
    log.info(f"   ├─ Total rows: {total}")
    for flag in DIETARY_FLAGS:
        count = int(results_df[flag].sum())
        share = count / total if total else 0.0
        log.info(f"   ├─ {flag}: {count} ({share:.1%})")
    log.info(f"   └─ Results saved to: {output_path}")

    return results_df
