import io
import json

import pandas as pd
import pytesseract
import pytest

from diet_scan.__main__ import main


def _out(capsys):
    return json.loads(capsys.readouterr().out)


def test_text(capsys):
    assert main(["--text", "Ingredients: milk, whey, sugar"]) == 0
    assert _out(capsys) == {
        "verdict": {"gluten_free": True, "vegan": False, "vegetarian": True}}


def test_text_with_hits(capsys):
    assert main(["--text", "Pork & barley", "--hits"]) == 0
    out = _out(capsys)
    assert out["hits"]["gluten_free"] == ["barley"]
    assert out["hits"]["vegetarian"] == ["pork"]


def test_text_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("Anchovy paste"))
    assert main(["--text", "-"]) == 0
    assert _out(capsys)["verdict"]["vegetarian"] is False


def test_custom_keywords(tmp_path, capsys):
    table = tmp_path / "de.json"
    table.write_text(json.dumps(
        {"gluten_free": ["weizen"], "vegan": ["milch"], "vegetarian": ["speck"]}))

    assert main(["--text", "Speck", "--keywords", str(table)]) == 0
    assert _out(capsys)["verdict"] == {
        "gluten_free": True, "vegan": True, "vegetarian": False}


def test_bad_keywords_file(tmp_path, capsys):
    assert main(["--text", "rice", "--keywords", str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().out == ""


def test_show_keywords(capsys):
    assert main(["--show-keywords"]) == 0
    assert "gelatin" in _out(capsys)["vegetarian"]


def test_image(monkeypatch, label_image, capsys):
    monkeypatch.setattr(pytesseract, "image_to_string",
                        lambda *args, **kwargs: "Contains: EGG, wheat")

    assert main(["--image", str(label_image), "--hits"]) == 0

    out = _out(capsys)
    assert out["status"] == "ok"
    assert out["verdict"] == {"gluten_free": False, "vegan": False, "vegetarian": True}
    assert out["hits"]["vegan"] == ["egg"]


def test_image_failure_exit_code(monkeypatch, label_image, not_an_image, capsys):
    monkeypatch.setattr(pytesseract, "image_to_string", lambda *args, **kwargs: "rice")

    assert main(["--image", str(label_image), str(not_an_image)]) == 1

    statuses = [o["status"] for o in _out(capsys)]
    assert statuses == ["ok", "acquisition_failed"]


def test_predict(tmp_path):
    src = tmp_path / "in.csv"
    dst = tmp_path / "out.csv"
    pd.DataFrame({"text": ["beef", "oats"]}).to_csv(src, index=False)

    assert main(["--predict", str(src), "--output", str(dst)]) == 0
    assert pd.read_csv(dst)["vegan"].tolist() == [False, True]


def test_ground_truth(tmp_path, capsys):
    src = tmp_path / "gt.csv"
    pd.DataFrame({"text": ["beef", "oats"], "vegetarian": [False, True]}).to_csv(src, index=False)

    assert main(["--ground_truth", str(src)]) == 0
    assert _out(capsys)[0]["F1"] == 1.0


def test_no_mode_prints_help():
    assert main([]) == 2


def test_modes_are_exclusive():
    with pytest.raises(SystemExit):
        main(["--text", "rice", "--predict", "x.csv"])
