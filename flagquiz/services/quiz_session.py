"""Session controller for one player.

- Wires the game engine, the audio manager and the auto-advance scheduler.
- Owns the screen flow: menu -> quiz -> gameover.
- At most one advance job is pending; every successful restart cancels it.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

import numpy as np
from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.schedulers.base import BaseScheduler
from uuid6 import uuid7

from flagquiz.audio_manager import AudioManager
from flagquiz.domain.quiz_game import QuizGame
from flagquiz.domain.quiz_rules import ALL_CONTINENTS, score_percentage
from flagquiz.labels import continent_label, verdict
from flagquiz.load_settings import SettingsModel
from flagquiz.models.dc_models import (
    AnswerResultModel,
    CountryModel,
    RoundSummaryModel,
    ScreenModel,
    SoundKindModel,
)


class QuizSession:
    """Flow for one player on top of QuizGame.

    Must be used inside a running asyncio event loop: the first answer starts
    the AsyncIOScheduler that drives the delayed advance.
    """

    def __init__(
        self,
        countries: Sequence[CountryModel],
        settings: Optional[SettingsModel] = None,
        audio: Optional[AudioManager] = None,
        scheduler: Optional[BaseScheduler] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.settings = settings if settings is not None else SettingsModel()
        self.game = QuizGame(countries, self.settings.questions_per_round, rng)
        self.audio = (
            audio
            if audio is not None
            else AudioManager(base_url=self.settings.asset_base_url)
        )
        self._owns_scheduler = scheduler is None
        self.scheduler = scheduler if scheduler is not None else AsyncIOScheduler()

        self.screen = ScreenModel.menu
        self.last_continent = ALL_CONTINENTS
        self.round_id: Optional[UUID] = None
        self.pending_advance: Optional[Job] = None
        self.selected_code: Optional[str] = None
        self.last_result: Optional[AnswerResultModel] = None

    # ---------------- Queries ----------------

    def continent_choices(self) -> List[Tuple[str, str]]:
        """(value, label) pairs for the menu, "all" first."""
        language = self.settings.language
        return [(ALL_CONTINENTS, continent_label(ALL_CONTINENTS, language))] + [
            (c, continent_label(c, language)) for c in self.game.continents
        ]

    def summary(self) -> RoundSummaryModel:
        percentage = score_percentage(self.game.score, self.game.total_questions)
        return RoundSummaryModel(
            round_id=self.round_id,
            continent=self.last_continent,
            score=self.game.score,
            total=self.game.total_questions,
            percentage=percentage,
            verdict=verdict(percentage, self.settings.language),
        )

    # ---------------- Flow ----------------

    def start(self, continent: Optional[str] = None) -> None:
        """Start a round and show the quiz screen

        Args:
            continent (Optional[str], optional): Continent filter; None or "all" for every country

        Raises:
            InsufficientPoolError: The filter leaves fewer than 4 countries
        """
        continent = continent or ALL_CONTINENTS
        # a rejected filter leaves the current round and its pending advance untouched
        self.game.start(continent)
        self.cancel_pending_advance()
        self.audio.stop()

        self.last_continent = continent
        self.round_id = uuid7()
        self.selected_code = None
        self.last_result = None
        self.screen = ScreenModel.quiz

    def replay(self) -> None:
        """Start another round with the previous continent"""
        self.start(self.last_continent)

    def back_to_menu(self) -> None:
        self.cancel_pending_advance()
        self.audio.stop()
        self.screen = ScreenModel.menu

    def answer(self, code: str) -> Optional[AnswerResultModel]:
        """Submit an answer, play feedback and schedule the advance

        Args:
            code (str): Code of the chosen flag

        Returns:
            Optional[AnswerResultModel]: Result, or None when the question was already answered
        """
        if self.screen != ScreenModel.quiz:
            return None
        result = self.game.submit_answer(code)
        if result is None:
            return None

        self.selected_code = code
        self.last_result = result
        self.audio.play_sound(
            SoundKindModel.success if result.correct else SoundKindModel.error
        )
        self._schedule_advance()
        return result

    def play_country_name(self) -> None:
        question = self.game.current_question
        if question is not None:
            self.audio.play_country_name(question.country.code)

    def advance_now(self) -> bool:
        """Run the pending advance immediately

        Returns:
            bool: False when no advance was pending
        """
        if self.pending_advance is None:
            return False
        self.cancel_pending_advance()
        self._advance(self.round_id, self.game.current_index)
        return True

    def cancel_pending_advance(self) -> None:
        job, self.pending_advance = self.pending_advance, None
        if job is None:
            return
        try:
            job.remove()
            logging.debug(f"Cancelled pending advance {job.id}")
        except JobLookupError:
            # already executed
            pass

    def close(self) -> None:
        """Cancel pending work, stop audio and shut down an owned scheduler

        AsyncIOScheduler.shutdown is queued on the event loop, so the scheduler
        reports running until the loop gets control again.
        """
        self.cancel_pending_advance()
        self.audio.stop()
        if self._owns_scheduler and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logging.info("Quiz session closed")

    # ---------------- Internals ----------------

    def _schedule_advance(self) -> None:
        self.cancel_pending_advance()
        if not self.scheduler.running:
            self.scheduler.start()
        index = self.game.current_index
        run_date = datetime.now() + timedelta(
            seconds=self.settings.auto_advance_seconds
        )
        self.pending_advance = self.scheduler.add_job(
            self._advance_job,
            "date",
            run_date=run_date,
            args=[self.round_id, index],
            id=f"advance:{self.round_id}:{index}",
            misfire_grace_time=None,
        )

    async def _advance_job(self, round_id: Optional[UUID], index: int) -> None:
        # coroutine jobs run on the event loop instead of the executor thread pool
        self._advance(round_id, index)

    def _advance(self, round_id: Optional[UUID], index: int) -> None:
        """Advance to the next question, or finish the round."""
        if round_id != self.round_id or index != self.game.current_index:
            logging.debug(f"Ignoring stale advance for round {round_id}, index {index}")
            return
        self.pending_advance = None
        self.selected_code = None
        self.last_result = None

        if self.game.next_question():
            logging.debug(f"Question {self.game.question_number}/{self.game.total_questions}")
            return
        self.audio.play_sound(SoundKindModel.complete)
        self.screen = ScreenModel.gameover
        logging.info(
            f"Round {self.round_id} over: {self.game.score}/{self.game.total_questions}"
        )
