# schemas/validation.py
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)
    # advisory only; never affects `valid`
    warnings: List[str] = Field(default_factory=list)


class QuestionReport(ValidationResult):
    index: int
    id: Optional[Any] = None
    type: Optional[Any] = None
    title: str = "Untitled"


class CollectionReport(BaseModel):
    total: int
    valid_count: int
    results: List[QuestionReport] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
