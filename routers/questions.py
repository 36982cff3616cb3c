from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel

from factory import create_question
from questions import COMMON_LANGUAGES, QUESTION_TYPES, TYPE_DESCRIPTIONS, is_valid_language_code
from schemas.questions import Question
from schemas.validation import CollectionReport, ValidationResult
from validation import validate_question, validate_questions

router = APIRouter(prefix="/questions", tags=["questions"])


class NewQuestionRequest(BaseModel):
    type: str
    language: str = "en"


@router.get("/types")
def list_types() -> Dict[str, str]:
    return dict(TYPE_DESCRIPTIONS)


@router.get("/languages")
def list_languages() -> Dict[str, str]:
    return dict(COMMON_LANGUAGES)


@router.post("/new", response_model=Question)
def new_question(req: NewQuestionRequest):
    if req.type not in QUESTION_TYPES:
        raise HTTPException(status_code=422, detail=f"unknown question type: {req.type}")
    if not is_valid_language_code(req.language):
        raise HTTPException(
            status_code=422, detail="language code must be 2-10 lowercase letters"
        )
    return create_question(req.type, req.language)


@router.post("/validate", response_model=ValidationResult)
def validate_one(payload: Any = Body(...)):
    return validate_question(payload)


@router.post("/validate-batch", response_model=CollectionReport)
def validate_many(payload: Any = Body(...)):
    return validate_questions(payload)
