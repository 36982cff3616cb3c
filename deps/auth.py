import os
from typing import Annotated

from fastapi import Header, HTTPException


def require_writer(
    x_api_key: Annotated[str | None, Header(alias="x-api-key")] = None,
) -> None:
    """
    Write guard for the store. Open when QUESTIONS_API_KEY is unset;
    otherwise the X-Api-Key header must match it.
    """
    expected = os.getenv("QUESTIONS_API_KEY") or ""
    if not expected:
        return
    if x_api_key != expected:
        raise HTTPException(status_code=401, detail="Unauthorized.")
