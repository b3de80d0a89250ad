import os
import tempfile

# Settings are read once at import time, so isolate them before diet_scan loads
os.environ["DIET_SCAN_HOME"] = tempfile.mkdtemp(prefix="diet_scan_test_")
os.environ.pop("DIET_SCAN_KEYWORD_TABLE", None)
os.environ.setdefault("DIET_SCAN_LOG_LEVEL", "DEBUG")

import pytest
from PIL import Image

from diet_scan.core import CorruptImageError


class FakeExtractor:
    """Stands in for Tesseract: returns canned text or raises."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def extract(self, path):
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def label_image(tmp_path):
    path = tmp_path / "label.png"
    Image.new("RGB", (40, 20), "white").save(path)
    return path


@pytest.fixture
def label_bytes(label_image):
    return label_image.read_bytes()


@pytest.fixture
def not_an_image(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("this is not a picture")
    return path


@pytest.fixture
def fake_extractor():
    return FakeExtractor


@pytest.fixture
def corrupt_error():
    return CorruptImageError("cannot decode")
