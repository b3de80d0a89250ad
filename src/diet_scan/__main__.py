#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line entry point for diet scan.

Examples:
    python -m diet_scan --text "Ingredients: wheat flour, sugar, salt"
    python -m diet_scan --image label.jpg --hits
    python -m diet_scan --predict labels.csv --output labels_out.csv
    python -m diet_scan --ground_truth labelled.csv
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from .core import log, DietScanError
from .classification.dietary import DietaryClassifier, get_default_classifier
from .acquisition.images import GalleryImageSource
from .pipeline.workflow import ScanWorkflow, scan_many
from .pipeline.prediction import batch_predict
from .pipeline.evaluation import evaluate_ground_truth
from .utils.constants import load_keyword_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='diet-scan',
        description='Classify food label text as gluten-free, vegan and vegetarian')
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--text', type=str,
                        help='Label text to classify ("-" reads stdin)')
    source.add_argument('--image', type=str, nargs='+',
                        help='Label image(s) to OCR and classify')
    source.add_argument('--predict', type=str,
                        help='Path to CSV file for batch classification')
    source.add_argument('--ground_truth', type=str,
                        help='Path to labelled CSV to evaluate against')
    source.add_argument('--show-keywords', action='store_true',
                        help='Print the active keyword table')
    parser.add_argument('--output', type=str, default=None,
                        help='Output CSV for --predict')
    parser.add_argument('--text-column', type=str, default='text',
                        help='CSV column holding label text (default: text)')
    parser.add_argument('--keywords', type=str, default=None,
                        help='JSON keyword table to use instead of the built-in one')
    parser.add_argument('--hits', action='store_true',
                        help='Also report which keywords disqualified each flag')
    parser.add_argument('--require-text', action='store_true',
                        help='Treat images with no OCR text as failures')
    return parser


def _emit(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command line interface.

    Returns:
        Process exit code: 0 on success, 1 on failed scans or bad input,
        2 when no mode was selected
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.keywords:
            classifier = DietaryClassifier(load_keyword_table(args.keywords))
            log.info(f"Using keyword table: {args.keywords}")
        else:
            classifier = get_default_classifier()

        if args.text is not None:
            text = sys.stdin.read() if args.text == '-' else args.text
            result = {'verdict': classifier.classify(text).to_dict()}
            if args.hits:
                result['hits'] = classifier.find_disqualifying_hits(text)
            _emit(result)
            return 0

        if args.image:
            workflow = ScanWorkflow(classifier=classifier,
                                    require_text=args.require_text,
                                    explain=args.hits)
            sources = [GalleryImageSource(path) for path in args.image]
            outcomes = asyncio.run(scan_many(sources, workflow))
            payload = [outcome.to_dict() for outcome in outcomes]
            _emit(payload[0] if len(payload) == 1 else payload)
            return 0 if all(outcome.ok for outcome in outcomes) else 1

        if args.predict:
            batch_predict(args.predict, args.output, args.text_column, classifier)
            return 0

        if args.ground_truth:
            _emit(evaluate_ground_truth(args.ground_truth, args.text_column, classifier))
            return 0

        if args.show_keywords:
            _emit(classifier.table.to_dict())
            return 0

    except DietScanError as e:
        log.error(f"❌ {e}")
        return 1

    parser.print_help(sys.stderr)
    return 2


if __name__ == "__main__":
    sys.exit(main())
