import json

from factory import create_question
from tools.validate_questions_file import main


def test_valid_file(tmp_path, capsys):
    p = tmp_path / "qs.json"
    p.write_text(json.dumps([create_question("OPTSQ").to_json()]), encoding="utf-8")
    assert main([str(p)]) == 0
    assert "1 of 1 questions are valid" in capsys.readouterr().out


def test_invalid_file(tmp_path, capsys):
    q = create_question("TRIPQ").to_json()
    q["itemCount"] = 4
    p = tmp_path / "qs.json"
    p.write_text(json.dumps([q]), encoding="utf-8")
    assert main([str(p)]) == 1
    assert "must be odd" in capsys.readouterr().out


def test_usage():
    assert main([]) == 2
