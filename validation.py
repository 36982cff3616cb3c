# validation.py
#
# Structural checks for a question record. Accepts a Question model or the raw
# JSON mapping (camelCase keys) and never raises: anything malformed becomes
# a message in `errors`. Language-consistency notes go to `warnings`.

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from questions import (
    ITEMIZED_TYPES,
    MAX_ITEMS,
    MAX_TITLE_LENGTH,
    MIN_ITEMS,
    QUESTION_TYPES,
    is_valid_language_code,
)
from schemas.validation import CollectionReport, QuestionReport, ValidationResult

WARNING_PREFIX = "⚠️ "


def _as_mapping(question: Any) -> Optional[Mapping]:
    if isinstance(question, BaseModel):
        return question.model_dump(by_alias=True, mode="json")
    if isinstance(question, Mapping):
        return question
    return None


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_number(v: Any) -> bool:
    # NaN and infinities are not usable bounds
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def _is_text(v: Any) -> bool:
    return isinstance(v, str) and bool(v.strip())


def _known_type(qtype: Any) -> Optional[str]:
    if isinstance(qtype, str) and qtype in QUESTION_TYPES:
        return qtype
    return None


# ---------- Common checks ----------


def _check_common(data: Mapping, qtype: Optional[str], errors: List[str]) -> None:
    qid = data.get("id")
    if not qid:
        errors.append("id is required")
    elif not _is_int(qid) or qid <= 0:
        errors.append("id must be a positive integer")

    raw_type = data.get("type")
    if not raw_type:
        errors.append("type is required")
    elif qtype is None:
        errors.append(f"type '{raw_type}' is not a known question type")

    if not isinstance(data.get("relational"), bool):
        errors.append("relational must be boolean")

    translations = data.get("translations")
    if not isinstance(translations, Mapping):
        errors.append("translations must map language codes to content")
    elif not translations:
        errors.append("translations must have at least one language")
    else:
        default_language = data.get("defaultLanguage")
        if not isinstance(default_language, str) or default_language not in translations:
            errors.append(f"defaultLanguage '{default_language}' is not among the translations")

    if qtype in ITEMIZED_TYPES:
        count = data.get("itemCount")
        if not _is_int(count):
            errors.append(f"{qtype} itemCount must be an integer")
        else:
            if not MIN_ITEMS <= count <= MAX_ITEMS:
                errors.append(
                    f"{qtype} itemCount ({count}) must be between {MIN_ITEMS} and {MAX_ITEMS}"
                )
            if qtype == "TRIPQ" and count % 2 == 0:
                errors.append(f"TRIPQ itemCount ({count}) must be odd (e.g., 5 or 7)")


# ---------- Per-type details ----------


def _require(details: Mapping, field: str, tag: str, errors: List[str], qtype: str) -> None:
    if not _is_text(details.get(field)):
        errors.append(f"{tag} {field} is required for {qtype}")


def _check_preferences(data: Mapping, details: Mapping, tag: str, errors: List[str]) -> None:
    qtype = data.get("type")
    _require(details, "pref1", tag, errors, qtype)
    _require(details, "pref2", tag, errors, qtype)
    if qtype == "TRIPQ":
        _require(details, "midpointShort", tag, errors, qtype)


def _check_item_list(
    data: Mapping, details: Mapping, tag: str, errors: List[str]
) -> Optional[list]:
    qtype = data.get("type")
    items = details.get("items")
    if items is None or (isinstance(items, list) and not items):
        errors.append(f"{tag} {qtype} must have items")
        return None
    if not isinstance(items, list):
        errors.append(f"{tag} {qtype} items must be a list")
        return None

    count = data.get("itemCount")
    if len(items) != count:
        errors.append(f"{tag} {qtype} item count ({len(items)}) does not match itemCount ({count})")
    for pos, item in enumerate(items, 1):
        if not isinstance(item, Mapping):
            errors.append(f"{tag} {qtype} item {pos} must be an object")
    return items


def _check_levels(data: Mapping, details: Mapping, tag: str, errors: List[str]) -> None:
    use_scheme = details.get("useScheme", False)
    if not isinstance(use_scheme, bool):
        errors.append(f"{tag} useScheme must be boolean")
        return
    if use_scheme:
        if not _is_text(details.get("schemeUri")):
            errors.append(f"{tag} schemeUri is required when useScheme is set")
        return

    items = _check_item_list(data, details, tag, errors)
    for pos, item in enumerate(items or [], 1):
        if isinstance(item, Mapping) and not _is_int(item.get("value")):
            errors.append(f"{tag} LEVLQ item {pos} value must be an integer")


def _check_options(data: Mapping, details: Mapping, tag: str, errors: List[str]) -> None:
    for flag in ("allowMultiple", "includeOther"):
        if not isinstance(details.get(flag, False), bool):
            errors.append(f"{tag} {flag} must be boolean")
    _check_item_list(data, details, tag, errors)


def _check_range(data: Mapping, details: Mapping, tag: str, errors: List[str]) -> None:
    if not _is_text(details.get("unit")):
        errors.append(f"{tag} unit is required for RANGQ")

    lo, hi = details.get("min"), details.get("max")
    if not _is_number(lo):
        errors.append(f"{tag} min must be a number")
    if not _is_number(hi):
        errors.append(f"{tag} max must be a number")
    if _is_number(lo) and _is_number(hi) and not lo < hi:
        errors.append(f"{tag} min ({lo}) must be less than max ({hi})")

    gran = details.get("granularity", 1)
    if gran is not None and (not _is_number(gran) or gran <= 0):
        errors.append(f"{tag} granularity must be a positive number")


def _check_likert(data: Mapping, details: Mapping, tag: str, errors: List[str]) -> None:
    statement = details.get("positionStatement")
    if statement is not None and not isinstance(statement, str):
        errors.append(f"{tag} positionStatement must be text")


_DETAIL_CHECKS: Dict[str, Callable[[Mapping, Mapping, str, List[str]], None]] = {
    "AORBQ": _check_preferences,
    "TRIPQ": _check_preferences,
    "LEVLQ": _check_levels,
    "OPTSQ": _check_options,
    "RANGQ": _check_range,
    "LIKSQ": _check_likert,
}


# ---------- Language blocks ----------


def _check_block(
    data: Mapping, qtype: Optional[str], lang: Any, block: Any, errors: List[str]
) -> None:
    tag = f"[{lang}]"
    if not is_valid_language_code(lang):
        errors.append(f"{tag} language code must be 2-10 lowercase letters")
    if not isinstance(block, Mapping):
        errors.append(f"{tag} translation must be an object")
        return

    title = block.get("title")
    if not _is_text(title):
        errors.append(f"{tag} title is required")
    elif len(title) > MAX_TITLE_LENGTH:
        errors.append(f"{tag} title is longer than {MAX_TITLE_LENGTH} characters ({len(title)})")

    description = block.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(f"{tag} description must be text")

    check = _DETAIL_CHECKS.get(qtype)
    if check is None:
        return
    details = block.get("details")
    if details is None and qtype == "LIKSQ":
        return
    if not isinstance(details, Mapping):
        errors.append(f"{tag} details must be an object")
        return
    check(data, details, tag, errors)


def check_language_consistency(question: Any) -> List[str]:
    """Advisory notes for languages lacking a title or description block."""
    data = _as_mapping(question)
    translations = data.get("translations") if data is not None else None
    if not isinstance(translations, Mapping) or len(translations) <= 1:
        return []

    warnings: List[str] = []
    for lang, block in translations.items():
        if not isinstance(block, Mapping):
            continue
        missing = []
        if not isinstance(block.get("title"), str):
            missing.append("title")
        if not isinstance(block.get("description"), str):
            missing.append("description")
        if missing:
            warnings.append(f"{WARNING_PREFIX}Language '{lang}' missing from: {', '.join(missing)}")
    return warnings


def validate_question(question: Any) -> ValidationResult:
    data = _as_mapping(question)
    if data is None:
        return ValidationResult(valid=False, errors=["question must be an object"])

    errors: List[str] = []
    qtype = _known_type(data.get("type"))
    _check_common(data, qtype, errors)

    translations = data.get("translations")
    if isinstance(translations, Mapping):
        for lang, block in translations.items():
            _check_block(data, qtype, lang, block, errors)

    return ValidationResult(
        valid=not errors,
        errors=errors,
        warnings=check_language_consistency(data),
    )


def _summary_title(data: Optional[Mapping]) -> str:
    if data is None:
        return "Untitled"
    translations = data.get("translations")
    if not isinstance(translations, Mapping) or not translations:
        return "Untitled"
    lang = data.get("defaultLanguage")
    block = translations.get(lang) if isinstance(lang, str) else None
    if not isinstance(block, Mapping):
        block = next(iter(translations.values()))
    title = block.get("title") if isinstance(block, Mapping) else None
    return title if _is_text(title) else "Untitled"


def validate_questions(questions: Any) -> CollectionReport:
    """Validate every question of a collection; repeated ids are errors."""
    if not isinstance(questions, list):
        return CollectionReport(
            total=0, valid_count=0, errors=["Data must be an array of questions"]
        )

    seen = set()
    results: List[QuestionReport] = []
    for index, question in enumerate(questions):
        result = validate_question(question)
        data = _as_mapping(question)
        qid = data.get("id") if data is not None else None
        if _is_int(qid):
            if qid in seen:
                result.errors.append(f"id {qid} is used by more than one question")
                result.valid = False
            seen.add(qid)
        results.append(
            QuestionReport(
                index=index,
                id=qid,
                type=data.get("type") if data is not None else None,
                title=_summary_title(data),
                valid=result.valid,
                errors=result.errors,
                warnings=result.warnings,
            )
        )

    return CollectionReport(
        total=len(results),
        valid_count=sum(1 for r in results if r.valid),
        results=results,
    )
