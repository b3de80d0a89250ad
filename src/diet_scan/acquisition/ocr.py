#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Text extraction from label images.

Tesseract (through pytesseract) is the default engine. Any object with an
``extract(path) -> str`` method can stand in for it.
"""

import asyncio
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Protocol, Union

import pytesseract
from PIL import Image

from ..core import (
    log,
    OcrError,
    CorruptImageError,
    OcrEngineUnavailableError,
    NoTextDetectedError,
)
from .images import ImagePayload


@dataclass(frozen=True)
class OcrResult:
    """Either extracted text or the OcrError that prevented it."""
    text: Optional[str] = None
    error: Optional[OcrError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str) -> "OcrResult":
        return cls(text=text)

    @classmethod
    def failure(cls, error: OcrError) -> "OcrResult":
        return cls(error=error)

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.text


class TextExtractor(Protocol):
    def extract(self, path: Path) -> str:
        ...


class TesseractTextExtractor:
    """
    Blocking Tesseract OCR over an image file.

    Args:
        lang: Tesseract language codes, e.g. ``"eng"`` or ``"eng+deu"``
        config: Extra tesseract flags, e.g. ``"--psm 6"``
        tesseract_cmd: Path to the tesseract binary if not on PATH
        timeout: Seconds before the engine is killed, 0 for no limit
    """

    def __init__(self, lang: Optional[str] = None, config: Optional[str] = None,
                 tesseract_cmd: Optional[str] = None, timeout: Optional[float] = None):
        from ..config import CFG

        self.lang = lang or CFG.ocr_lang
        self.config = config if config is not None else CFG.ocr_config
        self.timeout = timeout if timeout is not None else CFG.ocr_timeout

        tesseract_cmd = tesseract_cmd or CFG.tesseract_cmd
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def extract(self, path: Path) -> str:
        try:
            with Image.open(path) as img:
                rgb = img.convert("RGB")
        except FileNotFoundError as e:
            raise CorruptImageError(f"Image file not found: {path}") from e
        except (OSError, SyntaxError, ValueError) as e:
            raise CorruptImageError(f"Cannot decode image {path}: {e}") from e

        try:
            text = pytesseract.image_to_string(
                rgb, lang=self.lang, config=self.config, timeout=self.timeout)
        except pytesseract.TesseractNotFoundError as e:
            raise OcrEngineUnavailableError(
                "Tesseract is not installed or not on PATH") from e
        except RuntimeError as e:
            # TesseractError and the timeout error are both RuntimeErrors
            raise OcrEngineUnavailableError(f"Tesseract failed: {e}") from e

        return text or ""


@lru_cache(maxsize=1)
def get_default_extractor() -> TesseractTextExtractor:
    return TesseractTextExtractor()


async def extract_text(image: Union[ImagePayload, str, Path],
                       extractor: Optional[TextExtractor] = None,
                       require_text: bool = False) -> OcrResult:
    """
    Run OCR off the event loop and wrap the outcome.

    Args:
        image: Acquired image, or a path to one
        extractor: OCR engine, defaults to Tesseract
        require_text: Treat whitespace-only output as NoTextDetectedError

    Returns:
        OcrResult holding the text or the failure
    """
    path = image.path if isinstance(image, ImagePayload) else Path(image)
    extractor = extractor or get_default_extractor()

    try:
        text = await asyncio.to_thread(extractor.extract, path)
    except OcrError as e:
        log.warning(f"OCR failed for {path}: {e}")
        return OcrResult.failure(e)
    except Exception as e:
        log.exception(f"OCR engine crashed on {path}")
        return OcrResult.failure(OcrEngineUnavailableError(f"OCR engine error: {e}"))

    text = text or ""
    if require_text and not text.strip():
        log.warning(f"No text detected in {path}")
        return OcrResult.failure(NoTextDetectedError(f"No text detected in {path}"))

    log.debug(f"OCR extracted {len(text)} characters from {path}")
    return OcrResult.success(text)
