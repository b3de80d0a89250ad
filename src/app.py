#!/usr/bin/env python
"""
Flask API:
* /health
* /api/classify: JSON {"text": ...} -> dietary verdict
* /api/scan    : multipart "image" upload -> OCR -> dietary verdict
* /api/keywords: active keyword table
"""
from __future__ import annotations
from typing import Any, Dict

from decouple import config
from flask import Flask, jsonify, request

# ── helpers -------------------------------------------------------
from diet_scan import __version__
from diet_scan.config import CFG
from diet_scan.core import log
from diet_scan.classification.dietary import get_default_classifier
from diet_scan.acquisition.images import CameraImageSource, UPLOAD
from diet_scan.pipeline.workflow import (
    ScanWorkflow, run_scan, STATUS_ACQUISITION_FAILED,
)

# ── Flask & config -----------------------------------------------
app = Flask(__name__)
app.secret_key = config(
    "SECRET_KEY", default="dev-secret-key-change-in-production")
app.config["MAX_CONTENT_LENGTH"] = CFG.max_upload_mb * 1024 * 1024

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp"}


def _j(code: int, payload: Dict[str, Any]):
    resp = jsonify(payload)
    resp.status_code = code
    resp.headers.setdefault("Cache-Control", "no-store")
    return resp


def _wants_hits() -> bool:
    return request.args.get("hits", "").lower() in {"1", "true", "yes"}


@app.route("/health")
def health():
    return _j(200, {"status": "ok", "version": __version__})


@app.route("/api/classify", methods=["POST"])
def api_classify():
    """
    Classify label text.
    Body: {"text": "..."}; query param hits=1 adds the matched keywords.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "text" not in data:
        return _j(400, {"error": 'Provide JSON body {"text": "..."}'})

    text = data["text"]
    if text is not None and not isinstance(text, str):
        return _j(400, {"error": "'text' must be a string"})

    classifier = get_default_classifier()
    payload: Dict[str, Any] = {"verdict": classifier.classify(text).to_dict()}
    if _wants_hits():
        payload["hits"] = classifier.find_disqualifying_hits(text)
    return _j(200, payload)


@app.route("/api/scan", methods=["POST"])
def api_scan():
    """
    OCR an uploaded label photo and classify it.
    Form field: image (file); query param hits=1 adds the matched keywords.
    """
    upload = request.files.get("image")
    if upload is None or not upload.filename:
        return _j(400, {"error": "Provide an image file in the 'image' field"})

    ext = "." + upload.filename.rsplit(".", 1)[-1].lower() if "." in upload.filename else ""
    if ext not in ALLOWED_EXTENSIONS:
        return _j(400, {"error": f"Unsupported image type '{ext or upload.filename}'"})

    workflow = ScanWorkflow(explain=_wants_hits())
    outcome = run_scan(CameraImageSource(upload.read, source_kind=UPLOAD), workflow)

    if outcome.ok:
        return _j(200, outcome.to_dict())
    if outcome.status == STATUS_ACQUISITION_FAILED:
        return _j(400, {"error": outcome.error, "status": outcome.status})

    log.warning(f"Scan failed: {outcome.error}")
    return _j(422, {"error": outcome.error, "status": outcome.status})


@app.route("/api/keywords")
def api_keywords():
    return _j(200, get_default_classifier().table.to_dict())


@app.errorhandler(413)
def too_large(_):
    return _j(413, {"error": f"Image exceeds {CFG.max_upload_mb} MB"})


if __name__ == "__main__":
    app.run(host=config("HOST", default="0.0.0.0"),
            port=config("PORT", default=5000, cast=int),
            debug=config("FLASK_DEBUG", default=False, cast=bool))
