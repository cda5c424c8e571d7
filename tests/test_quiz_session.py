import asyncio

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from flagquiz.audio_manager import AudioManager
from flagquiz.domain.quiz_rules import InsufficientPoolError
from flagquiz.load_settings import SettingsModel
from flagquiz.models.dc_models import ScreenModel
from flagquiz.services.quiz_session import QuizSession


@pytest.fixture
async def paused_scheduler():
    scheduler = AsyncIOScheduler()
    scheduler.start(paused=True)
    yield scheduler
    scheduler.shutdown(wait=False)


@pytest.fixture
async def make_session(backend, rng):
    sessions = []

    def factory(countries, scheduler=None, **settings):
        session = QuizSession(
            countries,
            settings=SettingsModel(**settings),
            audio=AudioManager(backend),
            scheduler=scheduler,
            rng=rng,
        )
        sessions.append(session)
        return session

    yield factory
    for session in sessions:
        session.close()


async def wait_for(predicate, timeout=2.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.01)


async def test_starts_on_menu(make_session, fifty_catalog):
    session = make_session(fifty_catalog)
    assert session.screen == ScreenModel.menu
    assert session.game.current_question is None
    assert session.continent_choices()[0] == ("all", "Alle landen")
    assert ("Asia", "Azië") in session.continent_choices()


async def test_start_switches_to_quiz(make_session, fifty_catalog):
    session = make_session(fifty_catalog)
    session.start("Europe")
    assert session.screen == ScreenModel.quiz
    assert session.last_continent == "Europe"
    assert session.round_id is not None
    assert all(q.country.continent == "Europe" for q in session.game.questions)


async def test_start_failure_propagates(make_session, small_catalog):
    session = make_session(small_catalog)
    with pytest.raises(InsufficientPoolError):
        session.start("Europe")
    assert session.screen == ScreenModel.menu


async def test_answer_plays_feedback_and_schedules_one_advance(
    make_session, fifty_catalog, paused_scheduler, backend
):
    session = make_session(fifty_catalog, scheduler=paused_scheduler)
    session.start()
    question = session.game.current_question

    result = session.answer(question.correct_code)
    assert result.correct
    assert backend.played[-1] == ("/sounds/success_sound.mp3", 0.5)
    assert len(paused_scheduler.get_jobs()) == 1

    assert session.answer(question.correct_code) is None
    assert len(paused_scheduler.get_jobs()) == 1
    assert session.game.score == 1


async def test_wrong_answer_plays_error(make_session, fifty_catalog, paused_scheduler, backend):
    session = make_session(fifty_catalog, scheduler=paused_scheduler)
    session.start()
    question = session.game.current_question
    wrong = next(o.code for o in question.options if o.code != question.correct_code)

    result = session.answer(wrong)
    assert not result.correct
    assert result.correct_code == question.correct_code
    assert session.selected_code == wrong
    assert backend.played[-1] == ("/sounds/error_sound.mp3", 0.5)


async def test_restart_cancels_pending_advance(make_session, fifty_catalog, paused_scheduler):
    session = make_session(fifty_catalog, scheduler=paused_scheduler)
    session.start()
    session.answer(session.game.current_question.correct_code)
    assert session.pending_advance is not None

    session.start("Asia")
    assert session.pending_advance is None
    assert paused_scheduler.get_jobs() == []
    assert session.game.current_index == 0
    assert session.game.score == 0


async def test_back_to_menu_cancels_pending_advance(make_session, fifty_catalog, paused_scheduler):
    session = make_session(fifty_catalog, scheduler=paused_scheduler)
    session.start()
    session.answer("C00")
    session.back_to_menu()
    assert session.screen == ScreenModel.menu
    assert paused_scheduler.get_jobs() == []


async def test_answer_ignored_outside_quiz(make_session, fifty_catalog):
    session = make_session(fifty_catalog)
    assert session.answer("C00") is None


async def test_advance_now(make_session, fifty_catalog, paused_scheduler):
    session = make_session(fifty_catalog, scheduler=paused_scheduler)
    session.start()
    assert session.advance_now() is False

    session.answer("C00")
    assert session.advance_now() is True
    assert session.game.question_number == 2
    assert session.pending_advance is None
    assert paused_scheduler.get_jobs() == []
    assert session.last_result is None


async def test_full_round_ends_on_gameover(make_session, fifty_catalog, paused_scheduler, backend):
    session = make_session(fifty_catalog, scheduler=paused_scheduler, questions_per_round=3)
    session.start()
    for _ in range(3):
        session.answer(session.game.current_question.correct_code)
        session.advance_now()

    assert session.screen == ScreenModel.gameover
    assert backend.played[-1] == ("/sounds/mission_complete_sound.mp3", 0.5)
    summary = session.summary()
    assert (summary.score, summary.total, summary.percentage) == (3, 3, 100)
    assert summary.verdict.key == "perfect"
    assert summary.round_id == session.round_id


async def test_replay_uses_last_continent(make_session, fifty_catalog, paused_scheduler):
    session = make_session(fifty_catalog, scheduler=paused_scheduler)
    session.start("Oceania")
    first_round = session.round_id
    session.replay()
    assert session.last_continent == "Oceania"
    assert session.round_id != first_round
    assert all(q.country.continent == "Oceania" for q in session.game.questions)


async def test_scheduled_advance_fires(make_session, fifty_catalog):
    session = make_session(fifty_catalog, auto_advance_seconds=0.05)
    session.start()
    session.answer(session.game.current_question.correct_code)

    await wait_for(lambda: session.game.question_number == 2)
    assert session.pending_advance is None
    assert not session.game.answered


async def test_cancelled_advance_never_fires(make_session, fifty_catalog):
    session = make_session(fifty_catalog, auto_advance_seconds=0.05)
    session.start()
    session.answer(session.game.current_question.correct_code)
    session.start()

    await asyncio.sleep(0.2)
    assert session.game.question_number == 1
    assert session.game.score == 0


async def test_play_country_name(make_session, fifty_catalog, backend):
    session = make_session(fifty_catalog)
    session.play_country_name()
    assert backend.played == []

    session.start()
    session.play_country_name()
    code = session.game.current_question.country.code
    assert backend.played[-1] == (f"/audio/{code}.mp3", 0.7)


async def test_close_shuts_down_owned_scheduler(make_session, fifty_catalog, backend):
    session = make_session(fifty_catalog, auto_advance_seconds=10)
    session.start()
    session.answer("C00")
    assert session.scheduler.running

    session.close()
    await asyncio.sleep(0)
    assert session.pending_advance is None
    assert not session.scheduler.running
    assert backend.stopped


async def test_rejected_filter_keeps_current_round(make_session, small_catalog, paused_scheduler):
    session = make_session(small_catalog, scheduler=paused_scheduler)
    session.start("all")
    first_round = session.round_id
    session.answer(session.game.current_question.correct_code)

    with pytest.raises(InsufficientPoolError):
        session.start("Europe")

    assert session.screen == ScreenModel.quiz
    assert session.round_id == first_round
    assert session.pending_advance is not None
    assert len(paused_scheduler.get_jobs()) == 1
    assert session.advance_now() is True
    assert session.game.question_number == 2
    assert session.answer(session.game.current_question.correct_code) is not None


async def test_stale_advance_is_ignored_quietly(make_session, fifty_catalog, paused_scheduler, caplog):
    session = make_session(fifty_catalog, scheduler=paused_scheduler)
    session.start()
    old_round = session.round_id
    session.start()

    with caplog.at_level("DEBUG"):
        session._advance(old_round, 0)
    assert session.game.question_number == 1
    assert "Ignoring stale advance" in caplog.text
    assert not [r for r in caplog.records if r.levelname == "WARNING"]
