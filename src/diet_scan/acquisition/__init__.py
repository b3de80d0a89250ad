#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Image and text acquisition collaborators.
"""

from .images import (
    CAMERA, GALLERY, UPLOAD,
    ImagePayload,
    CameraImageSource,
    GalleryImageSource,
    store_capture,
    verify_image,
)
from .ocr import (
    OcrResult,
    TextExtractor,
    TesseractTextExtractor,
    extract_text,
    get_default_extractor,
)

__all__ = [
    # Images
    'CAMERA', 'GALLERY', 'UPLOAD',
    'ImagePayload',
    'CameraImageSource',
    'GalleryImageSource',
    'store_capture',
    'verify_image',

    # OCR
    'OcrResult',
    'TextExtractor',
    'TesseractTextExtractor',
    'extract_text',
    'get_default_extractor',
]
