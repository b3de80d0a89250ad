#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration module for the diet scan package.

Centralized configuration with environment overrides and automatic
directory creation. Values are read through python-decouple, so they can
come from the process environment, a ``.env`` file or ``settings.ini``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from decouple import config


def _optional_path(name: str) -> Optional[Path]:
    value = config(name, default="").strip()
    return Path(value).expanduser() if value else None


def _home() -> Path:
    return Path(config("DIET_SCAN_HOME", default="~/.diet_scan")).expanduser()


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container with validation.

    All paths and settings are centralized here for easy management.
    """
    # Directory paths
    home_dir: Path = field(default_factory=_home)
    logs_dir: Path = field(default_factory=lambda: _home() / "logs")
    capture_dir: Path = field(default_factory=lambda: _home() / "captures")

    # Logging
    log_level: str = field(default_factory=lambda: config(
        "DIET_SCAN_LOG_LEVEL", default="INFO").strip().upper())

    # Keyword table override (JSON file), None means the built-in table
    keyword_table_path: Optional[Path] = field(
        default_factory=lambda: _optional_path("DIET_SCAN_KEYWORD_TABLE"))

    # OCR engine settings
    ocr_lang: str = field(default_factory=lambda: config(
        "DIET_SCAN_OCR_LANG", default="eng").strip())
    ocr_config: str = field(default_factory=lambda: config(
        "DIET_SCAN_OCR_CONFIG", default="--psm 6"))
    tesseract_cmd: Optional[str] = field(default_factory=lambda: config(
        "DIET_SCAN_TESSERACT_CMD", default="").strip() or None)
    ocr_timeout: float = field(default_factory=lambda: config(
        "DIET_SCAN_OCR_TIMEOUT", default=30.0, cast=float))

    # HTTP API
    max_upload_mb: int = field(default_factory=lambda: config(
        "DIET_SCAN_MAX_UPLOAD_MB", default=10, cast=int))

    def __post_init__(self):
        """Validate configuration on initialization."""
        # Frozen dataclass, so invalid values are replaced in place
        if self.ocr_timeout < 0:
            logging.getLogger("DIETSCAN").warning(
                f"Negative DIET_SCAN_OCR_TIMEOUT {self.ocr_timeout}, disabling timeout")
            object.__setattr__(self, "ocr_timeout", 0.0)
        if logging.getLevelName(self.log_level) == f"Level {self.log_level}":
            logging.getLogger("DIETSCAN").warning(
                f"Unknown log level {self.log_level!r}, using INFO")
            object.__setattr__(self, "log_level", "INFO")

        # Create missing directories
        for field_name in ("home_dir", "logs_dir", "capture_dir"):
            value = getattr(self, field_name)
            if not value.exists():
                try:
                    value.mkdir(parents=True, exist_ok=True)
                    logging.getLogger("DIETSCAN").info(
                        f"Created missing directory: {value}")
                except OSError as e:
                    logging.getLogger("DIETSCAN").warning(
                        f"Could not create {value}: {e}")


# Create the configuration instance
CFG = Config()
