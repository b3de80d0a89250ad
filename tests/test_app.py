import io

import pytesseract
import pytest

from app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"


def test_classify(client):
    resp = client.post("/api/classify", json={"text": "Ingredients: wheat flour, sugar, salt"})

    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store"
    assert resp.get_json() == {
        "verdict": {"gluten_free": False, "vegan": True, "vegetarian": True}}


def test_classify_with_hits(client):
    resp = client.post("/api/classify?hits=1", json={"text": "shrimp"})
    assert resp.get_json()["hits"]["vegetarian"] == ["shrimp"]


def test_classify_empty_and_null_text(client):
    for text in ("", None):
        resp = client.post("/api/classify", json={"text": text})
        assert resp.get_json()["verdict"] == {
            "gluten_free": True, "vegan": True, "vegetarian": True}


@pytest.mark.parametrize("body", [None, {"words": "milk"}, {"text": 42}])
def test_classify_bad_request(client, body):
    resp = client.post("/api/classify", json=body) if body is not None \
        else client.post("/api/classify", data="plain")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_scan(client, monkeypatch, label_bytes):
    monkeypatch.setattr(pytesseract, "image_to_string",
                        lambda *args, **kwargs: "Ingredients: chicken broth, salt")

    resp = client.post("/api/scan", data={"image": (io.BytesIO(label_bytes), "label.png")},
                       content_type="multipart/form-data")

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["source"] == "upload"
    assert data["verdict"] == {"gluten_free": True, "vegan": False, "vegetarian": False}


def test_scan_missing_file(client):
    resp = client.post("/api/scan", data={}, content_type="multipart/form-data")
    assert resp.status_code == 400


def test_scan_unsupported_type(client):
    resp = client.post("/api/scan", data={"image": (io.BytesIO(b"abc"), "label.txt")},
                       content_type="multipart/form-data")
    assert resp.status_code == 400


def test_scan_undecodable_image(client):
    resp = client.post("/api/scan", data={"image": (io.BytesIO(b"garbage"), "label.png")},
                       content_type="multipart/form-data")
    assert resp.status_code == 400
    assert resp.get_json()["status"] == "acquisition_failed"


def test_scan_engine_unavailable(client, monkeypatch, label_bytes):
    def not_found(*args, **kwargs):
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(pytesseract, "image_to_string", not_found)

    resp = client.post("/api/scan", data={"image": (io.BytesIO(label_bytes), "label.jpg")},
                       content_type="multipart/form-data")

    assert resp.status_code == 422
    assert resp.get_json()["status"] == "ocr_failed"


def test_keywords(client):
    data = client.get("/api/keywords").get_json()
    assert set(data) == {"gluten_free", "vegan", "vegetarian"}
    assert "malt" in data["gluten_free"]
