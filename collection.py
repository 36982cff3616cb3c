# collection.py
#
# The in-memory question list an editor works on: which question is being
# edited, whether there are unsaved changes, and where it was loaded from.

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from client import StoreClient
from factory import create_question
from schemas.questions import Question
from schemas.validation import CollectionReport
from validation import validate_questions

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "regenchoice-questions.json"
SERVER_FILENAME = "server: questions.json"


class CollectionError(Exception):
    pass


def parse_questions(data: Any) -> List[Question]:
    if not isinstance(data, list):
        raise CollectionError("File must contain an array of questions")
    questions = []
    for pos, raw in enumerate(data, 1):
        try:
            questions.append(Question.model_validate(raw))
        except ValidationError as e:
            raise CollectionError(f"Question {pos} is malformed: {e}") from e
    return questions


class QuestionCollection:
    def __init__(self, questions: Optional[List[Question]] = None):
        self.questions: List[Question] = list(questions or [])
        self.editing_index = -1  # -1 = creating a new question
        self.current_filename = DEFAULT_FILENAME
        self.unsaved_changes = False

    def __len__(self) -> int:
        return len(self.questions)

    # ---------- Editing ----------

    def new_question(self, qtype, language: str = "en") -> Question:
        """Create a question with an id not used by this collection and append it."""
        question = create_question(qtype, language, existing_ids=(q.id for q in self.questions))
        self.add(question)
        return question

    def add(self, question: Question) -> None:
        self.questions.append(question)
        self.unsaved_changes = True

    def get(self, index: int) -> Optional[Question]:
        if 0 <= index < len(self.questions):
            return self.questions[index]
        return None

    def update(self, index: int, question: Question) -> bool:
        if not 0 <= index < len(self.questions):
            return False
        self.questions[index] = question
        self.unsaved_changes = True
        return True

    def delete(self, index: int) -> bool:
        if not 0 <= index < len(self.questions):
            return False
        del self.questions[index]
        if self.editing_index == index:
            self.editing_index = -1
        elif self.editing_index > index:
            self.editing_index -= 1
        self.unsaved_changes = True
        return True

    def start_editing(self, index: int) -> Optional[Question]:
        question = self.get(index)
        self.editing_index = index if question is not None else -1
        return question

    def submit(self, question: Question) -> None:
        """Store the edited question, or append it when creating."""
        if self.editing_index >= 0:
            self.update(self.editing_index, question)
        else:
            self.add(question)
        self.editing_index = -1

    # ---------- Validation ----------

    def validate_all(self) -> CollectionReport:
        return validate_questions(self.questions)

    def _check_saveable(self, force: bool) -> None:
        report = self.validate_all()
        if force or report.valid_count == report.total:
            return
        bad = [str(r.id) for r in report.results if not r.valid]
        raise CollectionError(f"{len(bad)} invalid question(s), ids: {', '.join(bad)}")

    def to_json(self) -> List[dict]:
        return [q.to_json() for q in self.questions]

    # ---------- Local files ----------

    def save_to_file(self, path: Union[str, Path, None] = None, force: bool = False) -> Path:
        self._check_saveable(force)
        target = Path(path or self.current_filename)
        target.write_text(json.dumps(self.to_json(), indent=2, ensure_ascii=False), encoding="utf-8")
        self.current_filename = target.name
        self.unsaved_changes = False
        logger.info("Saved %d questions to %s", len(self.questions), target)
        return target

    def load_from_file(self, path: Union[str, Path]) -> int:
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise CollectionError(f"Error reading file: {e}") from e
        except json.JSONDecodeError as e:
            raise CollectionError(f"Error parsing JSON: {e}") from e

        self.questions = parse_questions(data)
        self.current_filename = path.name
        self.editing_index = -1
        self.unsaved_changes = False
        return len(self.questions)

    # ---------- Remote store ----------

    def load_from_server(self, client: StoreClient) -> int:
        self.questions = parse_questions(client.load())
        self.current_filename = SERVER_FILENAME
        self.editing_index = -1
        self.unsaved_changes = False
        logger.info("Loaded %d questions from server", len(self.questions))
        return len(self.questions)

    def save_to_server(self, client: StoreClient, force: bool = False) -> dict:
        self._check_saveable(force)
        result = client.save(self.questions)
        self.current_filename = SERVER_FILENAME
        self.unsaved_changes = False
        logger.info("Saved %s questions to server", result.get("count"))
        return result
