"""Quiz rules that are independent from audio, files and scheduling.

Rule of thumb:
- OK: sampling, filtering, validation, score tiers.
- Not OK: reading the catalog, playing sounds, datetime.now(), global RNG state.
"""

from typing import List, Optional, Sequence, TypeVar

import numpy as np

from flagquiz.models.dc_models import CountryModel, QuestionModel

QUESTIONS_PER_ROUND = 10
OPTIONS_COUNT = 4
ALL_CONTINENTS = "all"
EXCLUDED_CONTINENT = "Antarctica"

T = TypeVar("T")


class InsufficientPoolError(ValueError):
    """Raised when a country pool is too small to build a 4-option question."""

    def __init__(self, pool_size: int, continent: Optional[str] = None):
        self.pool_size = pool_size
        self.continent = continent
        super().__init__(
            f"Too few countries ({pool_size}) for continent {continent!r}; "
            f"at least {OPTIONS_COUNT} are needed"
        )


def shuffle(items: List[T], rng: np.random.Generator) -> List[T]:
    """Shuffle a list in place (Fisher-Yates).

    Args:
        items (List[T]): List to permute; modified in place
        rng (np.random.Generator): Random source

    Returns:
        List[T]: The same list, for chaining
    """
    for i in range(len(items) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        items[i], items[j] = items[j], items[i]
    return items


def filter_pool(
    countries: Sequence[CountryModel], continent: Optional[str] = None
) -> List[CountryModel]:
    """Return the countries eligible for a round.

    None and "all" select the whole catalog.
    """
    if continent and continent != ALL_CONTINENTS:
        return [c for c in countries if c.continent == continent]
    return list(countries)


def continents_of(countries: Sequence[CountryModel]) -> List[str]:
    """Distinct continent labels, sorted, without Antarctica."""
    return sorted({c.continent for c in countries} - {EXCLUDED_CONTINENT})


class QuestionGenerator:
    @staticmethod
    def generate(
        pool: Sequence[CountryModel],
        count: int = QUESTIONS_PER_ROUND,
        rng: Optional[np.random.Generator] = None,
    ) -> List[QuestionModel]:
        """Build a round of questions with distinct targets.

        A pool smaller than count yields len(pool) questions.

        Args:
            pool (Sequence[CountryModel]): Countries eligible for this round
            count (int, optional): Requested number of questions. Defaults to 10.
            rng (np.random.Generator, optional): Random source. Defaults to a fresh default_rng().

        Raises:
            InsufficientPoolError: The pool cannot supply 1 target and 3 distractors

        Returns:
            List[QuestionModel]: Questions in presentation order
        """
        if len(pool) < OPTIONS_COUNT:
            raise InsufficientPoolError(len(pool))
        if rng is None:
            rng = np.random.default_rng()

        targets = shuffle(list(pool), rng)[:count]

        questions = []
        for country in targets:
            distractors = shuffle(
                [c for c in pool if c.code != country.code], rng
            )[: OPTIONS_COUNT - 1]
            options = shuffle([country, *distractors], rng)
            questions.append(QuestionModel(country=country, options=options))
        return questions


# ==============================================================================
# ==== Round verdict ===========================================================
# ==============================================================================


def score_percentage(score: int, total: int) -> int:
    """Rounded percentage of correct answers; 0 for an empty round."""
    if total <= 0:
        return 0
    # round half up, matching the score screen
    return int(np.floor(score * 100 / total + 0.5))


def verdict_key(percentage: int) -> str:
    """Map a final percentage to its verdict tier."""
    if percentage == 100:
        return "perfect"
    if percentage >= 70:
        return "good"
    if percentage >= 40:
        return "fair"
    return "keep_practicing"
