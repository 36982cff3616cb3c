from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_list_types():
    r = client.get("/questions/types")
    assert r.status_code == 200
    body = r.json()
    assert set(body) == {"AORBQ", "FACTQ", "LEVLQ", "LIKSQ", "OPTSQ", "RANGQ", "TRIPQ"}


def test_list_languages():
    body = client.get("/questions/languages").json()
    assert body["en"] == "English"
    assert "fr" in body


def test_new_question():
    r = client.post("/questions/new", json={"type": "OPTSQ", "language": "nl"})
    assert r.status_code == 200
    q = r.json()
    assert q["type"] == "OPTSQ"
    assert q["defaultLanguage"] == "nl"
    assert q["itemCount"] == 5
    assert len(q["translations"]["nl"]["details"]["items"]) == 5
    assert {"allowMultiple", "includeOther"}.issubset(q["translations"]["nl"]["details"])

    v = client.post("/questions/validate", json=q).json()
    assert v == {"valid": True, "errors": [], "warnings": []}


def test_new_question_rejects_bad_input():
    assert client.post("/questions/new", json={"type": "XQ"}).status_code == 422
    r = client.post("/questions/new", json={"type": "FACTQ", "language": "EN"})
    assert r.status_code == 422


def test_validate_reports_errors():
    q = client.post("/questions/new", json={"type": "RANGQ"}).json()
    q["translations"]["en"]["details"].update({"min": 10, "max": 5})
    body = client.post("/questions/validate", json=q).json()
    assert body["valid"] is False
    assert "[en] min (10) must be less than max (5)" in body["errors"]


def test_validate_any_shape():
    body = client.post("/questions/validate", json="hello").json()
    assert body["valid"] is False


def test_validate_batch():
    good = client.post("/questions/new", json={"type": "LIKSQ"}).json()
    bad = dict(good, id=0)
    body = client.post("/questions/validate-batch", json=[good, bad]).json()
    assert body["total"] == 2
    assert body["valid_count"] == 1
    assert body["results"][1]["errors"] == ["id is required"]
