# Question types, languages and limits shared by the factory and the validator.
# Type codes are stored verbatim in the JSON file; do not rename them.

from __future__ import annotations

import re
from enum import Enum


class QuestionType(str, Enum):
    AORBQ = "AORBQ"  # A or B preference
    FACTQ = "FACTQ"  # Yes / No / Don't know
    LEVLQ = "LEVLQ"  # ordered levels
    LIKSQ = "LIKSQ"  # Likert scale
    OPTSQ = "OPTSQ"  # options list
    RANGQ = "RANGQ"  # numeric range
    TRIPQ = "TRIPQ"  # A or B with a named midpoint


QUESTION_TYPES = [t.value for t in QuestionType]

TYPE_DESCRIPTIONS = {
    "AORBQ": "A preference between two alternatives, A or B",
    "FACTQ": "A factual question with answer Yes or No or Don't Know",
    "LEVLQ": "Ordered options presented as levels",
    "LIKSQ": "A classic Likert scale question",
    "OPTSQ": "A list of (unordered) options, multiple choice style",
    "RANGQ": "A question with a numeric range",
    "TRIPQ": "Binary choice with a named midpoint option",
}

# Offered by the language picker; any code matching LANGUAGE_CODE_RE is accepted.
COMMON_LANGUAGES = {
    "en": "English",
    "fr": "Français",
    "de": "Deutsch",
    "es": "Español",
    "it": "Italiano",
    "nl": "Nederlands",
    "pt": "Português",
    "ru": "Русский",
    "zh": "中文",
    "ja": "日本語",
    "ar": "العربية",
}

LANGUAGE_CODE_RE = re.compile(r"^[a-z]{2,10}$")

MAX_TITLE_LENGTH = 80
MIN_ITEMS = 2
MAX_ITEMS = 10
DEFAULT_ITEM_COUNT = 5

# itemCount must fall in [MIN_ITEMS, MAX_ITEMS] for these
ITEMIZED_TYPES = {"LEVLQ", "LIKSQ", "OPTSQ", "TRIPQ"}
# these carry an items list in every language block
ITEM_LIST_TYPES = {"LEVLQ", "OPTSQ"}


def is_valid_language_code(code: object) -> bool:
    return isinstance(code, str) and LANGUAGE_CODE_RE.fullmatch(code) is not None
