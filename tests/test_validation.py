import json

from factory import add_translation, create_question
from questions import QUESTION_TYPES
from schemas.questions import LevelItem, OptionItem, Question
from validation import WARNING_PREFIX, validate_question, validate_questions


def _range_q(lo, hi, unit="km"):
    q = create_question("RANGQ", "en")
    d = q.translations["en"].details
    d.min, d.max, d.unit = lo, hi, unit
    return q


def test_range_min_must_be_below_max():
    r = validate_question(_range_q(10, 5))
    assert r.valid is False
    assert any("min" in e and "max" in e for e in r.errors)

    assert validate_question(_range_q(5, 10)).valid


def test_range_requires_unit():
    r = validate_question(_range_q(5, 10, unit=" "))
    assert not r.valid
    assert "[en] unit is required for RANGQ" in r.errors


def test_levels_item_count_mismatch():
    q = create_question("LEVLQ", "en")
    d = q.translations["en"].details
    d.items = d.items[:4]
    r = validate_question(q)
    assert not r.valid
    assert any("item count (4) does not match itemCount (5)" in e for e in r.errors)

    d.items.append(LevelItem(value=5))
    assert validate_question(q).valid


def test_levels_scheme_replaces_items():
    q = create_question("LEVLQ", "en")
    d = q.translations["en"].details
    d.use_scheme = True
    d.items = []
    r = validate_question(q)
    assert "[en] schemeUri is required when useScheme is set" in r.errors

    d.scheme_uri = "https://example.org/scheme/levels"
    assert validate_question(q).valid


def test_triple_item_count_must_be_odd():
    q = create_question("TRIPQ", "en")
    q.item_count = 4
    r = validate_question(q)
    assert not r.valid
    assert any("must be odd" in e for e in r.errors)

    q.item_count = 5
    assert validate_question(q).valid


def test_triple_checks_every_language():
    q = create_question("TRIPQ", "en")
    add_translation(q, "fr")
    q.translations["fr"].title = "Question"
    r = validate_question(q)
    assert "[fr] midpointShort is required for TRIPQ" in r.errors
    assert "[fr] pref1 is required for TRIPQ" in r.errors
    assert not any(e.startswith("[en]") for e in r.errors)


def test_options_items_must_match_exactly():
    q = create_question("OPTSQ", "en")
    d = q.translations["en"].details

    d.items = [OptionItem() for _ in range(q.item_count - 1)]
    assert not validate_question(q).valid

    d.items = [OptionItem() for _ in range(q.item_count + 1)]
    assert not validate_question(q).valid

    d.items = [OptionItem() for _ in range(q.item_count)]
    assert validate_question(q).valid


def test_item_count_range():
    q = create_question("LIKSQ", "en")
    q.item_count = 11
    r = validate_question(q)
    assert "LIKSQ itemCount (11) must be between 2 and 10" in r.errors

    # AORBQ is not range-checked
    q = create_question("AORBQ", "en")
    q.item_count = 0
    assert validate_question(q).valid


def test_title_rules():
    q = create_question("FACTQ", "en")
    q.translations["en"].title = "x" * 81
    r = validate_question(q)
    assert r.errors == ["[en] title is longer than 80 characters (81)"]

    q.translations["en"].title = "x" * 80
    assert validate_question(q).valid

    q.translations["en"].title = ""
    assert validate_question(q).errors == ["[en] title is required"]


def test_default_language_must_exist():
    q = create_question("FACTQ", "en")
    q.default_language = "de"
    r = validate_question(q)
    assert "defaultLanguage 'de' is not among the translations" in r.errors


def test_round_trip_through_json():
    for qtype in QUESTION_TYPES:
        q = create_question(qtype, "en")
        add_translation(q, "nl", "en")
        back = Question.model_validate(json.loads(q.model_dump_json(by_alias=True)))
        assert back == q
        assert validate_question(back).valid
        assert validate_question(json.loads(q.model_dump_json(by_alias=True))).valid


def test_malformed_input_is_reported_not_raised():
    assert validate_question(None).errors == ["question must be an object"]
    assert validate_question([1, 2]).valid is False

    r = validate_question({"id": "abc", "type": ["x"], "relational": "no", "translations": []})
    assert not r.valid
    assert "id must be a positive integer" in r.errors
    assert "relational must be boolean" in r.errors
    assert "translations must map language codes to content" in r.errors

    r = validate_question(
        {"id": 1, "type": "LEVLQ", "relational": False, "itemCount": 3,
         "defaultLanguage": ["en"], "translations": {"en": "hello", "EN": {"title": 5}}}
    )
    assert not r.valid
    assert "[en] translation must be an object" in r.errors
    assert "[EN] language code must be 2-10 lowercase letters" in r.errors
    assert "[EN] title is required" in r.errors


def test_errors_keep_order_and_are_not_deduplicated():
    raw = create_question("AORBQ", "en").to_json()
    raw["relational"] = None
    raw["translations"]["fr"] = {"title": "", "description": "", "details": {}}
    r = validate_question(raw)
    assert r.errors == [
        "relational must be boolean",
        "[fr] title is required",
        "[fr] pref1 is required for AORBQ",
        "[fr] pref2 is required for AORBQ",
    ]


def test_language_warnings_are_separate():
    raw = create_question("FACTQ", "en").to_json()
    raw["translations"]["fr"] = {"title": "Question"}
    r = validate_question(raw)
    assert r.valid is True
    assert r.errors == []
    assert r.warnings == [f"{WARNING_PREFIX}Language 'fr' missing from: description"]


def test_single_language_has_no_warnings():
    raw = create_question("FACTQ", "en").to_json()
    del raw["translations"]["en"]["description"]
    assert validate_question(raw).warnings == []


def test_collection_report_flags_duplicate_ids():
    a = create_question("FACTQ", "en")
    b = create_question("LIKSQ", "en").to_json()
    b["id"] = a.id
    report = validate_questions([a, b])
    assert report.total == 2
    assert report.valid_count == 1
    assert report.results[1].errors == [f"id {a.id} is used by more than one question"]
    assert report.results[0].title == "Untitled question"


def test_collection_report_rejects_non_list():
    report = validate_questions({"id": 1})
    assert report.total == 0
    assert report.errors == ["Data must be an array of questions"]


def test_range_rejects_non_finite_bounds():
    raw = _range_q(5, 10).to_json()
    for lo, hi in ((float("nan"), 10), (5, float("nan")), (float("-inf"), 10), (5, float("inf"))):
        raw["translations"]["en"]["details"].update({"min": lo, "max": hi})
        r = validate_question(raw)
        assert not r.valid, (lo, hi)


def test_range_nan_from_json_payload():
    from store import parse_payload

    raw = _range_q(5, 10).to_json()
    body = json.dumps([raw]).replace('"min": 5', '"min": NaN').encode()
    (parsed,) = parse_payload(body)
    r = validate_question(parsed)
    assert not r.valid
    assert "[en] min must be a number" in r.errors
