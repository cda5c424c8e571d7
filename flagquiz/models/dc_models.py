from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, model_validator


class ScreenModel(str, Enum):
    menu = "menu"
    quiz = "quiz"
    gameover = "gameover"


class SoundKindModel(str, Enum):
    success = "success"
    error = "error"
    complete = "complete"


class CountryModel(BaseModel):
    code: str  # ISO alpha-2, e.g. "NL"
    name: str
    continent: str

    class Config:
        frozen = True
        from_attributes = True


class QuestionModel(BaseModel):
    country: CountryModel
    options: List[CountryModel]

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_options(self) -> "QuestionModel":
        """Reject option sets that are not 4 distinct countries including the target."""
        codes = [option.code for option in self.options]
        if len(codes) != 4:
            raise ValueError(f"a question needs 4 options, got {len(codes)}")
        if len(set(codes)) != len(codes):
            raise ValueError(f"options contain duplicate codes: {codes}")
        if codes.count(self.country.code) != 1:
            raise ValueError(f"target {self.country.code} is not among the options")
        return self

    @property
    def correct_code(self) -> str:
        return self.country.code

    def is_correct(self, selected_code: str) -> bool:
        return selected_code == self.correct_code


class AnswerResultModel(BaseModel):
    correct: bool
    correct_code: str


class VerdictModel(BaseModel):
    key: str
    title: str
    message: str
    emoji: str


class RoundSummaryModel(BaseModel):
    round_id: Optional[UUID] = None
    continent: Optional[str] = None
    score: int
    total: int
    percentage: int
    verdict: VerdictModel
