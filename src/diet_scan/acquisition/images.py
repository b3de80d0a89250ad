#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Image acquisition: camera capture and gallery pick.

Both sources yield an ImagePayload pointing at image bytes on disk, so the
rest of the scan workflow does not care where the picture came from.
"""

import asyncio
import inspect
import io
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from PIL import Image

from ..core import log, ImageAcquisitionError, NoImageSelectedError

CAMERA = "camera"
GALLERY = "gallery"
UPLOAD = "upload"


@dataclass(frozen=True)
class ImagePayload:
    """Reference to an acquired image on durable storage."""
    path: Path
    source: str


def verify_image(path: Path) -> None:
    """
    Check that ``path`` decodes as an image.

    Raises:
        ImageAcquisitionError: If the file is not a readable image
    """
    try:
        with Image.open(path) as img:
            img.verify()
    except (OSError, SyntaxError, ValueError) as e:
        raise ImageAcquisitionError(f"Not a readable image: {path} ({e})") from e


def store_capture(data: bytes, capture_dir: Optional[Path] = None) -> Path:
    """
    Persist captured image bytes as a timestamped PNG.

    Args:
        data: Encoded image bytes from the camera
        capture_dir: Target directory, defaults to CFG.capture_dir

    Returns:
        Path of the stored PNG
    """
    from ..config import CFG

    directory = Path(capture_dir) if capture_dir is not None else CFG.capture_dir
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{datetime.now().strftime('%Y%m%d-%H%M%S-%f')}.png"

    try:
        with Image.open(io.BytesIO(data)) as img:
            # PNG has no CMYK/YCbCr modes
            img.convert("RGBA" if "A" in img.getbands() else "RGB").save(path, format="PNG")
    except (OSError, SyntaxError, ValueError) as e:
        raise ImageAcquisitionError(f"Camera returned undecodable image data: {e}") from e

    log.info(f"Picture saved to: {path}")
    return path


class GalleryImageSource:
    """Image picked from device storage. ``path=None`` means the pick was cancelled."""

    def __init__(self, path: Optional[Union[str, Path]]):
        self.path = Path(path) if path is not None else None

    async def acquire(self) -> ImagePayload:
        if self.path is None:
            raise NoImageSelectedError("No image selected")
        if not self.path.is_file():
            raise ImageAcquisitionError(f"Image file not found: {self.path}")

        await asyncio.to_thread(verify_image, self.path)
        return ImagePayload(self.path, GALLERY)


class CameraImageSource:
    """
    Still image from a live camera.

    ``capture`` is any callable (sync or async) returning encoded image
    bytes; the bytes are stored under the capture directory. Uploaded
    images go through the same path with ``source_kind=UPLOAD``.
    """

    def __init__(self,
                 capture: Callable[[], Union[bytes, Awaitable[bytes]]],
                 capture_dir: Optional[Path] = None,
                 source_kind: str = CAMERA):
        self.capture = capture
        self.capture_dir = capture_dir
        self.source_kind = source_kind

    async def acquire(self) -> ImagePayload:
        try:
            data = self.capture()
            if inspect.isawaitable(data):
                data = await data
        except ImageAcquisitionError:
            raise
        except Exception as e:
            raise ImageAcquisitionError(f"Camera capture failed: {e}") from e

        if not data:
            raise ImageAcquisitionError("Camera returned no image data")

        path = await asyncio.to_thread(store_capture, data, self.capture_dir)
        return ImagePayload(path, self.source_kind)
