import logging
from typing import List, Optional, Sequence

import numpy as np

from flagquiz.domain.quiz_rules import (
    OPTIONS_COUNT,
    QUESTIONS_PER_ROUND,
    InsufficientPoolError,
    QuestionGenerator,
    continents_of,
    filter_pool,
)
from flagquiz.models.dc_models import AnswerResultModel, CountryModel, QuestionModel


class QuizGame:
    """Round state for one player: questions, position, score and answered latch.

    The catalog is never modified. Every start() replaces the previous round.
    """

    def __init__(
        self,
        all_countries: Sequence[CountryModel],
        questions_per_round: int = QUESTIONS_PER_ROUND,
        rng: Optional[np.random.Generator] = None,
    ):
        self.all_countries = tuple(all_countries)
        self.questions_per_round = questions_per_round
        self.rng = rng if rng is not None else np.random.default_rng()
        self.pool: List[CountryModel] = []
        self.questions: List[QuestionModel] = []
        self.current_index = 0
        self.score = 0
        self.answered = False

    def start(self, continent: Optional[str] = None) -> None:
        """Start a new round, optionally restricted to one continent

        Args:
            continent (Optional[str], optional): Continent name, or None / "all" for the whole catalog

        Raises:
            InsufficientPoolError: Fewer than 4 countries match the filter
        """
        pool = filter_pool(self.all_countries, continent)
        if len(pool) < OPTIONS_COUNT:
            raise InsufficientPoolError(len(pool), continent)

        self.pool = pool
        self.questions = QuestionGenerator.generate(
            pool, self.questions_per_round, self.rng
        )
        self.current_index = 0
        self.score = 0
        self.answered = False
        logging.info(
            f"Round started: continent={continent!r} pool={len(pool)} questions={len(self.questions)}"
        )

    @property
    def current_question(self) -> Optional[QuestionModel]:
        if self.current_index >= len(self.questions):
            return None
        return self.questions[self.current_index]

    @property
    def question_number(self) -> int:
        return self.current_index + 1

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def is_game_over(self) -> bool:
        return self.current_index >= len(self.questions)

    @property
    def continents(self) -> List[str]:
        return continents_of(self.all_countries)

    def submit_answer(self, selected_code: str) -> Optional[AnswerResultModel]:
        """Check an answer for the current question

        Only the first answer per question counts; later calls return None.

        Args:
            selected_code (str): Code of the chosen country

        Returns:
            Optional[AnswerResultModel]: Outcome and correct code, or None if already answered
        """
        question = self.current_question
        if self.answered or question is None:
            return None
        self.answered = True

        correct = question.is_correct(selected_code)
        if correct:
            self.score += 1
        logging.debug(
            f"Answer {selected_code} for question {self.question_number}: correct={correct}"
        )
        return AnswerResultModel(correct=correct, correct_code=question.correct_code)

    def next_question(self) -> bool:
        """Move to the next question; True while the round has questions left."""
        self.current_index += 1
        self.answered = False
        return not self.is_game_over
