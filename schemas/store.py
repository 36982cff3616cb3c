# schemas/store.py
from __future__ import annotations

from typing import Any, List, Optional

from schemas.questions import WireModel


class LoadResponse(WireModel):
    success: bool = True
    questions: List[Any]
    count: int
    last_modified: Optional[int] = None
    message: Optional[str] = None


class SaveResponse(WireModel):
    success: bool = True
    message: str = "Questions saved successfully"
    count: int
    bytes: int


class InfoResponse(WireModel):
    success: bool = True
    data_dir: str
    questions_file: str
    file_exists: bool
    writable: bool
    file_size: Optional[int] = None
    last_modified: Optional[int] = None
    last_modified_date: Optional[str] = None
