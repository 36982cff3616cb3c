# schemas/questions.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from questions import QuestionType

Number = Union[int, float]


class WireModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- Items (LEVLQ / OPTSQ) ----------


class OptionItem(WireModel):
    short_text: str = ""
    long_text: str = ""


class LevelItem(OptionItem):
    value: int = 0


# ---------- Per-type details ----------


class FactDetails(WireModel):
    """FACTQ has a fixed Yes / No / Don't know response and no details."""


class PreferenceDetails(WireModel):
    pref1: str = ""
    pref2: str = ""
    prefer1_desc: Optional[str] = None
    prefer2_desc: Optional[str] = None


class TripleDetails(WireModel):
    pref1: str = ""
    pref2: str = ""
    midpoint_short: str = ""
    prefer1_desc: Optional[str] = None
    prefer2_desc: Optional[str] = None
    midpoint_desc: Optional[str] = None


class LevelDetails(WireModel):
    use_scheme: bool = False
    scheme_uri: str = ""
    items: List[LevelItem] = Field(default_factory=list)


class LikertDetails(WireModel):
    # when absent the title is used as the statement
    position_statement: Optional[str] = None


class OptionsDetails(WireModel):
    allow_multiple: bool = False
    include_other: bool = False
    items: List[OptionItem] = Field(default_factory=list)


class RangeDetails(WireModel):
    unit: str = ""
    min: Number = 0
    max: Number = 100
    granularity: Number = 1


Details = Union[
    TripleDetails,
    PreferenceDetails,
    LevelDetails,
    OptionsDetails,
    RangeDetails,
    LikertDetails,
    FactDetails,
]

DETAILS_MODELS: Dict[str, type] = {
    "AORBQ": PreferenceDetails,
    "FACTQ": FactDetails,
    "LEVLQ": LevelDetails,
    "LIKSQ": LikertDetails,
    "OPTSQ": OptionsDetails,
    "RANGQ": RangeDetails,
    "TRIPQ": TripleDetails,
}


# ---------- Question ----------


class LanguageBlock(WireModel):
    title: str = ""
    description: Optional[str] = None
    details: Details = Field(default_factory=FactDetails)


class Question(WireModel):
    id: int = Field(frozen=True)
    type: QuestionType = Field(frozen=True)
    relational: bool = False
    item_count: int = 0
    learn_more_text: Optional[str] = ""
    enabling_question_id: Optional[int] = None
    enabling_answers: Optional[Any] = None
    default_language: str
    translations: Dict[str, LanguageBlock]

    @model_validator(mode="before")
    @classmethod
    def _details_by_type(cls, data: Any) -> Any:
        """Parse each block's details with the model selected by ``type``."""
        if not isinstance(data, dict):
            return data
        qtype = data.get("type")
        details_model = DETAILS_MODELS.get(qtype) if isinstance(qtype, str) else None
        translations = data.get("translations")
        if details_model is None or not isinstance(translations, dict):
            return data

        blocks: Dict[str, Any] = {}
        for lang, block in translations.items():
            if isinstance(block, dict):
                raw = block.get("details")
                if raw is None or isinstance(raw, dict):
                    block = {**block, "details": details_model.model_validate(raw or {})}
            blocks[lang] = block
        return {**data, "translations": blocks}

    def block(self, language: Optional[str] = None) -> Optional[LanguageBlock]:
        return self.translations.get(language or self.default_language)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


__all__ = [
    "Details",
    "DETAILS_MODELS",
    "FactDetails",
    "LanguageBlock",
    "LevelDetails",
    "LevelItem",
    "LikertDetails",
    "OptionItem",
    "OptionsDetails",
    "PreferenceDetails",
    "Question",
    "RangeDetails",
    "TripleDetails",
]
