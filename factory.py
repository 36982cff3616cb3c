# factory.py
#
# Builds default questions and language blocks, and edits the translation and
# item structure of an existing question in place. Precondition failures are
# returned as FactoryResult(success=False, error=...) rather than raised.

from __future__ import annotations

import logging
import random as _rnd
from typing import Iterable, List, Optional

from pydantic import BaseModel

from questions import (
    DEFAULT_ITEM_COUNT,
    ITEM_LIST_TYPES,
    MAX_ITEMS,
    MIN_ITEMS,
    QuestionType,
)
from schemas.questions import (
    FactDetails,
    LanguageBlock,
    LevelDetails,
    LevelItem,
    LikertDetails,
    OptionItem,
    OptionsDetails,
    PreferenceDetails,
    Question,
    RangeDetails,
    TripleDetails,
)

logger = logging.getLogger(__name__)

MAX_QUESTION_ID = 2**31 - 1

# Placeholder text so that a freshly created question passes validation.
DEFAULT_TITLE = "Untitled question"
DEFAULT_PREF1 = "Option A"
DEFAULT_PREF2 = "Option B"
DEFAULT_MIDPOINT = "Neutral"
DEFAULT_UNIT = "units"


class FactoryError:
    DUPLICATE_LANGUAGE = "DuplicateLanguage"
    LAST_LANGUAGE = "LastLanguage"
    UNKNOWN_LANGUAGE = "UnknownLanguage"
    NOT_ITEMIZED = "NotItemized"
    INVALID_INDEX = "InvalidIndex"
    TOO_FEW_ITEMS = "TooFewItems"
    TOO_MANY_ITEMS = "TooManyItems"


class FactoryResult(BaseModel):
    success: bool
    error: Optional[str] = None
    message: Optional[str] = None
    copied: bool = False
    # set when remove_translation promoted a new default language
    default_language: Optional[str] = None
    item_count: Optional[int] = None


def _fail(error: str, message: str) -> FactoryResult:
    return FactoryResult(success=False, error=error, message=message)


# ---------- Ids ----------


def generate_question_id(existing_ids: Optional[Iterable[int]] = None) -> int:
    """Random id in [1, 2**31 - 1], re-drawn while it collides with ``existing_ids``."""
    taken = set(existing_ids or ())
    while True:
        qid = _rnd.randint(1, MAX_QUESTION_ID)
        if qid not in taken:
            return qid


# ---------- Defaults ----------


def _default_details(qtype: QuestionType, item_count: int):
    if qtype == QuestionType.AORBQ:
        return PreferenceDetails(pref1=DEFAULT_PREF1, pref2=DEFAULT_PREF2)
    if qtype == QuestionType.TRIPQ:
        return TripleDetails(
            pref1=DEFAULT_PREF1, pref2=DEFAULT_PREF2, midpoint_short=DEFAULT_MIDPOINT
        )
    if qtype == QuestionType.LEVLQ:
        return LevelDetails(items=[LevelItem(value=i + 1) for i in range(item_count)])
    if qtype == QuestionType.OPTSQ:
        return OptionsDetails(items=[OptionItem() for _ in range(item_count)])
    if qtype == QuestionType.LIKSQ:
        return LikertDetails()
    if qtype == QuestionType.RANGQ:
        return RangeDetails(unit=DEFAULT_UNIT)
    return FactDetails()


def _blank_details(qtype: QuestionType, template, item_count: int):
    """Empty text for a new language; language-independent values come from ``template``."""
    if qtype == QuestionType.AORBQ:
        return PreferenceDetails()
    if qtype == QuestionType.TRIPQ:
        return TripleDetails()
    if qtype == QuestionType.LIKSQ:
        return LikertDetails()
    if qtype == QuestionType.LEVLQ:
        src = template if isinstance(template, LevelDetails) else LevelDetails()
        items = [
            LevelItem(value=src.items[i].value if i < len(src.items) else i + 1)
            for i in range(item_count)
        ]
        return LevelDetails(use_scheme=src.use_scheme, scheme_uri=src.scheme_uri, items=items)
    if qtype == QuestionType.OPTSQ:
        src = template if isinstance(template, OptionsDetails) else OptionsDetails()
        return OptionsDetails(
            allow_multiple=src.allow_multiple,
            include_other=src.include_other,
            items=[OptionItem() for _ in range(item_count)],
        )
    if qtype == QuestionType.RANGQ:
        if isinstance(template, RangeDetails):
            return template.model_copy()
        return RangeDetails()
    return FactDetails()


def _default_item_count(qtype: QuestionType) -> int:
    if qtype in (QuestionType.FACTQ, QuestionType.RANGQ):
        return 0
    return DEFAULT_ITEM_COUNT


def create_question(
    qtype,
    initial_language: str = "en",
    existing_ids: Optional[Iterable[int]] = None,
) -> Question:
    """Create a question of ``qtype`` with one language block holding defaults.

    Raises ValueError only for an unknown type code.
    """
    qtype = QuestionType(qtype)
    item_count = _default_item_count(qtype)
    block = LanguageBlock(
        title=DEFAULT_TITLE,
        description="",
        details=_default_details(qtype, item_count),
    )
    question = Question(
        id=generate_question_id(existing_ids),
        type=qtype,
        relational=False,
        item_count=item_count,
        learn_more_text="",
        default_language=initial_language,
        translations={initial_language: block},
    )
    logger.debug("created %s question %s (%s)", qtype.value, question.id, initial_language)
    return question


def empty_language_block(question: Question) -> LanguageBlock:
    template = question.block() or next(iter(question.translations.values()), None)
    return LanguageBlock(
        title="",
        description="",
        details=_blank_details(
            question.type, template.details if template else None, question.item_count
        ),
    )


# ---------- Translations ----------


def add_translation(
    question: Question, new_language: str, copy_from_language: Optional[str] = None
) -> FactoryResult:
    if new_language in question.translations:
        return _fail(
            FactoryError.DUPLICATE_LANGUAGE, f"Language '{new_language}' already exists"
        )

    if copy_from_language and copy_from_language in question.translations:
        source = question.translations[copy_from_language]
        question.translations[new_language] = source.model_copy(deep=True)
        return FactoryResult(success=True, copied=True)

    question.translations[new_language] = empty_language_block(question)
    return FactoryResult(success=True, copied=False)


def remove_translation(question: Question, language: str) -> FactoryResult:
    """Remove one language block.

    When the removed language was the default, the first remaining language is
    promoted and returned in ``default_language``.
    """
    if len(question.translations) <= 1:
        return _fail(FactoryError.LAST_LANGUAGE, "Cannot remove the only language")
    if language not in question.translations:
        return _fail(FactoryError.UNKNOWN_LANGUAGE, f"Language '{language}' not found")

    del question.translations[language]
    if question.default_language == language:
        question.default_language = next(iter(question.translations))
        logger.info(
            "question %s: default language %s removed, promoted %s",
            question.id,
            language,
            question.default_language,
        )
        return FactoryResult(success=True, default_language=question.default_language)
    return FactoryResult(success=True)


def question_languages(question: Question) -> List[str]:
    return sorted(question.translations)


# ---------- Items (LEVLQ / OPTSQ) ----------


def _item_lists(question: Question) -> List[list]:
    """Item lists that track itemCount; scheme-only LEVLQ blocks carry none."""
    lists = []
    for block in question.translations.values():
        details = block.details
        if isinstance(details, LevelDetails) and details.use_scheme and not details.items:
            continue
        lists.append(details.items)
    return lists


def _renumber(question: Question) -> None:
    if question.type != QuestionType.LEVLQ:
        return
    for items in _item_lists(question):
        for idx, item in enumerate(items):
            item.value = idx + 1


def add_item(question: Question) -> FactoryResult:
    """Append an empty item to every language block."""
    if question.type.value not in ITEM_LIST_TYPES:
        return _fail(FactoryError.NOT_ITEMIZED, "Can only add items to LEVLQ or OPTSQ")
    if question.item_count >= MAX_ITEMS:
        return _fail(FactoryError.TOO_MANY_ITEMS, f"At most {MAX_ITEMS} items are allowed")

    question.item_count += 1
    for items in _item_lists(question):
        while len(items) < question.item_count:
            if question.type == QuestionType.LEVLQ:
                items.append(LevelItem(value=len(items) + 1))
            else:
                items.append(OptionItem())
    return FactoryResult(success=True, item_count=question.item_count)


def remove_item(question: Question, index: int) -> FactoryResult:
    """Remove the item at ``index`` from every language block."""
    if question.type.value not in ITEM_LIST_TYPES:
        return _fail(FactoryError.NOT_ITEMIZED, "Can only remove items from LEVLQ or OPTSQ")

    if index < 0 or index >= question.item_count:
        return _fail(FactoryError.INVALID_INDEX, "Invalid item index")
    if question.item_count <= MIN_ITEMS:
        return _fail(FactoryError.TOO_FEW_ITEMS, f"Must have at least {MIN_ITEMS} items")

    for items in _item_lists(question):
        if index < len(items):
            items.pop(index)
    question.item_count -= 1
    _renumber(question)
    return FactoryResult(success=True, item_count=question.item_count)
