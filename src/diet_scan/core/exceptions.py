#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Custom exceptions for the diet scan package.

The classifier itself raises none of these; they belong to keyword table
loading, image acquisition, OCR and the batch tooling.
"""


class DietScanError(Exception):
    """Base exception for all diet scan errors."""
    pass


class ConfigurationError(DietScanError):
    """Raised when configuration is invalid."""
    pass


class KeywordTableError(DietScanError):
    """Raised when a keyword table file is missing or malformed."""
    pass


class DataLoadingError(DietScanError):
    """Raised when batch input data cannot be used."""
    pass


class ImageAcquisitionError(DietScanError):
    """Raised when an image could not be captured or picked."""
    pass


class NoImageSelectedError(ImageAcquisitionError):
    """Raised when the user cancelled the pick and no image was selected."""
    pass


class OcrError(DietScanError):
    """Base exception for text extraction failures."""
    pass


class CorruptImageError(OcrError):
    """Raised when the image file is missing or cannot be decoded."""
    pass


class OcrEngineUnavailableError(OcrError):
    """Raised when the OCR engine is not installed, times out or crashes."""
    pass


class NoTextDetectedError(OcrError):
    """Raised when OCR found no text and text was required."""
    pass
