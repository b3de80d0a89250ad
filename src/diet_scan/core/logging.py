#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Centralized logging configuration for the diet scan package.

"""

import logging
import os
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "DIETSCAN"

# Module-level state
_logger = None
_initialized = False
_file_lock = threading.Lock()


class DirectWriteHandler(logging.Handler):
    """Handler that writes directly to file with no buffering"""

    def __init__(self, filename):
        super().__init__()
        self.filename = filename
        # Separator for new runs, existing content is kept
        self._write_direct("\n" + "=" * 80 + "\n")
        self._write_direct(
            f"NEW RUN STARTED AT {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        self._write_direct(f"Process ID: {os.getpid()}\n")
        self._write_direct("=" * 80 + "\n")

    def _write_direct(self, msg):
        """Write directly to file with no buffering"""
        with _file_lock:
            # Always append, never truncate
            with open(self.filename, 'a', encoding='utf-8') as f:
                f.write(msg)
                f.flush()
                try:
                    os.fsync(f.fileno())
                except OSError:
                    pass  # Some filesystems don't support fsync

    def emit(self, record):
        try:
            msg = self.format(record)
            self._write_direct(msg + '\n')
        except Exception:
            self.handleError(record)


def log_exception_hook(exc_type, exc_value, exc_traceback):
    """Log uncaught exceptions"""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    logger = get_logger()
    logger.error("Uncaught exception:", exc_info=(
        exc_type, exc_value, exc_traceback))


def setup_logging(log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Initialize the logging system once.

    Args:
        log_dir: Directory for log files. If None, uses config default.

    Returns:
        Logger instance
    """
    global _logger, _initialized

    if _initialized:
        return _logger

    # Import here to avoid circular dependency
    from ..config import CFG

    if log_dir is None:
        log_dir = CFG.logs_dir

    _logger = logging.getLogger(LOGGER_NAME)

    # Only configure if no handlers exist
    if not _logger.handlers:
        _logger.setLevel(CFG.log_level)

        formatter = logging.Formatter(
            "%(asctime)s │ %(levelname)s │ %(message)s", datefmt="%H:%M:%S")

        # Console goes to stderr so CLI output on stdout stays clean JSON
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        _logger.addHandler(console_handler)

        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            direct_handler = DirectWriteHandler(str(log_dir / "diet_scan.log"))
            direct_handler.setFormatter(formatter)
            _logger.addHandler(direct_handler)
        except OSError as e:
            _logger.warning(f"File logging disabled, cannot write to {log_dir}: {e}")

        _logger.debug("Logging system initialized successfully")

    sys.excepthook = log_exception_hook

    _initialized = True
    return _logger


def get_logger() -> logging.Logger:
    """
    Get the singleton logger instance.

    Returns:
        Logger instance
    """
    global _logger
    if _logger is None:
        setup_logging()
    return _logger
