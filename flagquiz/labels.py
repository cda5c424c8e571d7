"""Static display labels for continents and round verdicts."""

from flagquiz.domain.quiz_rules import ALL_CONTINENTS, verdict_key
from flagquiz.models.dc_models import VerdictModel

CONTINENT_LABELS = {
    "nl": {
        ALL_CONTINENTS: "Alle landen",
        "Africa": "Afrika",
        "Asia": "Azië",
        "Europe": "Europa",
        "North America": "Noord-Amerika",
        "Oceania": "Oceanië",
        "South America": "Zuid-Amerika",
    },
    "en": {
        ALL_CONTINENTS: "All countries",
    },
}

VERDICT_EMOJI = {
    "perfect": "🏆",
    "good": "🎉",
    "fair": "💪",
    "keep_practicing": "📚",
}

VERDICT_TEXT = {
    "nl": {
        "perfect": ("Perfect!", "Ongelooflijk, alles goed!"),
        "good": ("Goed gedaan!", "Je kent je vlaggen goed!"),
        "fair": ("Niet slecht!", "Er is nog ruimte voor verbetering."),
        "keep_practicing": ("Blijf oefenen!", "Oefening baart kunst!"),
    },
    "en": {
        "perfect": ("Perfect!", "Incredible, all correct!"),
        "good": ("Well done!", "You know your flags!"),
        "fair": ("Not bad!", "There is still room for improvement."),
        "keep_practicing": ("Keep practicing!", "Practice makes perfect!"),
    },
}


def continent_label(continent: str, language: str = "nl") -> str:
    # unknown continents are shown as-is
    return CONTINENT_LABELS.get(language, {}).get(continent, continent)


def verdict(percentage: int, language: str = "nl") -> VerdictModel:
    key = verdict_key(percentage)
    title, message = VERDICT_TEXT.get(language, VERDICT_TEXT["nl"])[key]
    return VerdictModel(key=key, title=title, message=message, emoji=VERDICT_EMOJI[key])
