#!/usr/bin/env python
import json
import sys
from pathlib import Path

from validation import validate_questions


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: python -m tools.validate_questions_file <questions.json>")
        return 2

    path = Path(args[0])
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"Error: could not read {path}: {e}")
        return 2

    report = validate_questions(data)
    for err in report.errors:
        print(f"Error: {err}")
    for r in report.results:
        status = "OK" if r.valid else "INVALID"
        print(f"[{status}] #{r.index} {r.type} id={r.id} {r.title}")
        for err in r.errors:
            print(f"    {err}")
        for warn in r.warnings:
            print(f"    {warn}")

    print(f"{report.valid_count} of {report.total} questions are valid")
    if report.errors or report.valid_count != report.total:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
