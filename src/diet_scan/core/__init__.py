#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core module initialization - sets up shared logging for the entire package.

This module ensures that logging is initialized exactly once when the
package is imported.
"""

from .logging import setup_logging, get_logger
from .exceptions import (
    DietScanError,
    ConfigurationError,
    KeywordTableError,
    DataLoadingError,
    ImageAcquisitionError,
    NoImageSelectedError,
    OcrError,
    CorruptImageError,
    OcrEngineUnavailableError,
    NoTextDetectedError,
)

# Initialize logging system once
setup_logging()

# Singleton logger instance for the package
log = get_logger()

log.debug("Diet scan core module initialized")

__all__ = [
    'log',
    'get_logger',
    'DietScanError',
    'ConfigurationError',
    'KeywordTableError',
    'DataLoadingError',
    'ImageAcquisitionError',
    'NoImageSelectedError',
    'OcrError',
    'CorruptImageError',
    'OcrEngineUnavailableError',
    'NoTextDetectedError',
]
