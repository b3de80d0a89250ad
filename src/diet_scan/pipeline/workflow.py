#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scan workflow: acquire image -> extract text -> classify.

Each attempt returns a ScanOutcome instead of driving any UI. Session
state is owned by the caller and passed in explicitly.
"""

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from ..core import log, ImageAcquisitionError
from ..classification.dietary import DietaryClassifier, DietaryVerdict, get_default_classifier
from ..acquisition.images import ImagePayload
from ..acquisition.ocr import TextExtractor, extract_text

STATUS_OK = "ok"
STATUS_ACQUISITION_FAILED = "acquisition_failed"
STATUS_OCR_FAILED = "ocr_failed"


class ImageSource(Protocol):
    async def acquire(self) -> ImagePayload:
        ...


@dataclass(frozen=True)
class ScanOutcome:
    """Structured result of one scan attempt."""
    status: str
    image: Optional[ImagePayload] = None
    text: Optional[str] = None
    verdict: Optional[DietaryVerdict] = None
    hits: dict = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> dict:
        return {
            'status': self.status,
            'source': self.image.source if self.image else None,
            'image_path': str(self.image.path) if self.image else None,
            'text': self.text,
            'verdict': self.verdict.to_dict() if self.verdict else None,
            'hits': self.hits,
            'error': self.error,
        }


@dataclass
class ScanSession:
    """
    Per-session scan state.

    Holds the most recent attempt only; nothing is persisted.
    """
    last_image: Optional[ImagePayload] = None
    last_text: Optional[str] = None
    last_verdict: Optional[DietaryVerdict] = None
    last_error: Optional[str] = None
    attempts: int = 0

    def record(self, outcome: ScanOutcome) -> None:
        self.attempts += 1
        if outcome.image is not None:
            self.last_image = outcome.image
        self.last_text = outcome.text
        self.last_verdict = outcome.verdict
        self.last_error = outcome.error


class ScanWorkflow:
    """
    Request/response scan pipeline.

    Args:
        extractor: OCR engine, defaults to Tesseract
        classifier: Dietary classifier, defaults to the process-wide one
        require_text: Fail the OCR step when it yields only whitespace
        explain: Include the matched keywords in each outcome
    """

    def __init__(self, extractor: Optional[TextExtractor] = None,
                 classifier: Optional[DietaryClassifier] = None,
                 require_text: bool = False, explain: bool = False):
        self.extractor = extractor
        self.classifier = classifier or get_default_classifier()
        self.require_text = require_text
        self.explain = explain

    async def scan(self, source: ImageSource,
                   session: Optional[ScanSession] = None) -> ScanOutcome:
        """
        Run one scan attempt. Failures end the attempt without retry.
        """
        try:
            image = await source.acquire()
        except ImageAcquisitionError as e:
            log.warning(f"Image acquisition failed: {e}")
            return self._finish(
                ScanOutcome(status=STATUS_ACQUISITION_FAILED, error=str(e)), session)

        log.info(f"Acquired {image.source} image: {image.path}")

        result = await extract_text(image, self.extractor, require_text=self.require_text)
        if not result.ok:
            return self._finish(
                ScanOutcome(status=STATUS_OCR_FAILED, image=image, error=str(result.error)),
                session)

        return self._finish(self._classified(result.text, image), session)

    def classify_text(self, text: Optional[str],
                      session: Optional[ScanSession] = None) -> ScanOutcome:
        """Classify text that was already extracted elsewhere."""
        return self._finish(self._classified(text or "", None), session)

    def _classified(self, text: str, image: Optional[ImagePayload]) -> ScanOutcome:
        verdict = self.classifier.classify(text)
        hits = self.classifier.find_disqualifying_hits(text) if self.explain else {}
        log.info(
            f"Classification result: gluten_free={verdict.gluten_free} "
            f"vegan={verdict.vegan} vegetarian={verdict.vegetarian}")
        return ScanOutcome(status=STATUS_OK, image=image, text=text,
                           verdict=verdict, hits=hits)

    @staticmethod
    def _finish(outcome: ScanOutcome, session: Optional[ScanSession]) -> ScanOutcome:
        if session is not None:
            session.record(outcome)
        return outcome


def run_scan(source: ImageSource, workflow: Optional[ScanWorkflow] = None,
             session: Optional[ScanSession] = None) -> ScanOutcome:
    """Synchronous wrapper around ScanWorkflow.scan for scripts and the CLI."""
    workflow = workflow or ScanWorkflow()
    return asyncio.run(workflow.scan(source, session))


async def scan_many(sources: List[ImageSource],
                    workflow: Optional[ScanWorkflow] = None) -> List[ScanOutcome]:
    """Scan several images concurrently, preserving input order."""
    workflow = workflow or ScanWorkflow()
    return list(await asyncio.gather(*(workflow.scan(source) for source in sources)))
