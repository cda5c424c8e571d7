import argparse
import asyncio
import logging
from typing import Callable, Optional

import numpy as np

from flagquiz.assets import flag_emoji, flag_image_path
from flagquiz.catalog import load_countries
from flagquiz.domain.quiz_rules import InsufficientPoolError
from flagquiz.load_settings import load_settings
from flagquiz.models.dc_models import ScreenModel
from flagquiz.services.quiz_session import QuizSession

POLL_SECONDS = 0.05


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flag quiz in the terminal")
    parser.add_argument("--continent", type=str, default=None, help='Continent name or "all"')
    parser.add_argument("--catalog", type=str, default=None, help="Path to a countries JSON file")
    parser.add_argument("--questions", type=int, default=None, help="Questions per round")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible round")
    parser.add_argument(
        "--list-continents", action="store_true", help="Print the continents and exit"
    )
    return parser


async def ask(prompt: str, read_line: Callable[[str], str]) -> str:
    loop = asyncio.get_running_loop()
    return (await loop.run_in_executor(None, read_line, prompt)).strip().lower()


async def play_round(session: QuizSession, read_line: Callable[[str], str] = input) -> bool:
    """Play the active round until it ends

    Args:
        session (QuizSession): Session with a started round
        read_line (Callable[[str], str], optional): Line reader. Defaults to input.

    Returns:
        bool: False if the player quit early
    """
    while session.screen == ScreenModel.quiz:
        game = session.game
        question = game.current_question
        print(f"\nQ{game.question_number}/{game.total_questions}  score {game.score}")
        print(f"Which flag belongs to {question.country.name}?")
        for i, option in enumerate(question.options, start=1):
            print(f"  {i}. {flag_emoji(option.code)}  {flag_image_path(option.code, session.settings.asset_base_url)}")

        choice = await ask("Your answer (1-4, s = speak, q = quit): ", read_line)
        if choice == "q":
            return False
        if choice == "s":
            session.play_country_name()
            continue
        if choice not in {str(i) for i in range(1, len(question.options) + 1)}:
            print("Please pick one of the options.")
            continue

        result = session.answer(question.options[int(choice) - 1].code)
        if result.correct:
            print("Correct!")
        else:
            print(f"Incorrect. Answer: {result.correct_code}")

        while session.pending_advance is not None:
            await asyncio.sleep(POLL_SECONDS)
    return True


async def main(args: argparse.Namespace, read_line: Callable[[str], str] = input) -> int:
    settings = load_settings(catalog_path=args.catalog, questions_per_round=args.questions)
    logging.basicConfig(level=settings.log_level.upper())

    countries = load_countries(settings.catalog_path)
    rng: Optional[np.random.Generator] = (
        np.random.default_rng(args.seed) if args.seed is not None else None
    )
    session = QuizSession(countries, settings=settings, rng=rng)
    try:
        if args.list_continents:
            for value, label in session.continent_choices():
                print(f"{value}\t{label}")
            return 0

        try:
            session.start(args.continent)
        except InsufficientPoolError as e:
            print(e)
            return 2

        if not await play_round(session, read_line):
            return 1
        summary = session.summary()
        print(f"\n{summary.verdict.emoji} {summary.verdict.title}")
        print(f"{summary.score} / {summary.total}  ({summary.percentage}%)")
        print(summary.verdict.message)
        return 0
    finally:
        session.close()


def run() -> int:
    args = get_parser().parse_args()
    return asyncio.run(main(args))


if __name__ == "__main__":
    raise SystemExit(run())
