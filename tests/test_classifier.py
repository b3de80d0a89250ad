from concurrent.futures import ThreadPoolExecutor

import pytest

from diet_scan import DietaryClassifier, DietaryVerdict, classify, find_disqualifying_hits
from diet_scan.utils.constants import GLUTEN, ANIMAL_DERIVED, MEAT_FISH, KeywordSet, KeywordTable

ALL_TRUE = {"gluten_free": True, "vegan": True, "vegetarian": True}


@pytest.mark.parametrize("text, expected", [
    ("Ingredients: wheat flour, sugar, salt",
     {"gluten_free": False, "vegan": True, "vegetarian": True}),
    ("Ingredients: milk, whey, sugar",
     {"gluten_free": True, "vegan": False, "vegetarian": True}),
    ("Ingredients: chicken broth, salt",
     {"gluten_free": True, "vegan": False, "vegetarian": False}),
    ("Ingredients: rice, water, salt", ALL_TRUE),
])
def test_label_examples(text, expected):
    assert classify(text).to_dict() == expected


def test_empty_and_none_are_all_true():
    assert classify("").to_dict() == ALL_TRUE
    assert classify(None).to_dict() == ALL_TRUE


def test_garbled_ocr_is_all_true():
    assert classify("#@! 0O0 ||| ~~ éè 中文").to_dict() == ALL_TRUE


@pytest.mark.parametrize("word", GLUTEN)
def test_each_gluten_marker_only_clears_gluten_free(word):
    assert classify(f"contains {word}.").to_dict() == {
        "gluten_free": False, "vegan": True, "vegetarian": True}


@pytest.mark.parametrize("word", MEAT_FISH)
def test_meat_fish_markers_clear_vegan_and_vegetarian(word):
    verdict = classify(f"made with {word}")
    assert verdict.vegan is False
    assert verdict.vegetarian is False


@pytest.mark.parametrize("word", ANIMAL_DERIVED)
def test_dairy_egg_markers_keep_vegetarian(word):
    verdict = classify(f"made with {word}")
    assert verdict.vegan is False
    assert verdict.vegetarian is True


@pytest.mark.parametrize("text", ["WHEAT", "Wheat", "wheat", "wHeAt"])
def test_matching_is_case_insensitive(text):
    assert classify(text).gluten_free is False


def test_matching_is_substring_based():
    assert classify("wheatgerm").gluten_free is False
    assert classify("wheat-free").gluten_free is False
    assert classify("Hamburger bun").vegetarian is False


def test_classify_is_idempotent():
    text = "Ingredients: milk chocolate, malt extract"
    assert classify(text) == classify(text)
    assert classify(text).to_dict() == {
        "gluten_free": False, "vegan": False, "vegetarian": True}


def test_concurrent_callers_get_same_results():
    texts = ["beef stock", "oat milk", "rice", "spelt"] * 50
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(classify, texts))
    assert results == [classify(t) for t in texts]


def test_verdict_is_immutable_and_indexable():
    verdict = classify("honey")
    assert verdict["vegan"] is False
    with pytest.raises(KeyError):
        verdict["keto"]
    with pytest.raises(AttributeError):
        verdict.vegan = True


def test_hits_explain_verdict():
    hits = find_disqualifying_hits("Wheat flour, butter, bacon bits")
    assert hits == {
        "gluten_free": ["wheat"],
        "vegan": ["bacon", "butter"],
        "vegetarian": ["bacon"],
    }
    assert find_disqualifying_hits("") == {
        "gluten_free": [], "vegan": [], "vegetarian": []}


def test_swapped_keyword_table():
    table = KeywordTable({
        "gluten_free": KeywordSet.of("gluten", ["Weizen"]),
        "vegan": KeywordSet.of("tierisch", ["milch", "huhn"]),
        "vegetarian": KeywordSet.of("fleisch", ["huhn"]),
    })
    classifier = DietaryClassifier(table)

    assert classifier.classify("Zutaten: WEIZENMEHL, Zucker") == DietaryVerdict(
        gluten_free=False, vegan=True, vegetarian=True)
    assert classifier.classify("Huhn") == DietaryVerdict(True, False, False)
    # Built-in English words mean nothing to the German table
    assert classifier.classify("wheat, chicken").to_dict() == ALL_TRUE
