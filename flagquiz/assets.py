"""Convention-based asset references. Existence is never checked."""

import logging

import countryflag

from flagquiz.models.dc_models import SoundKindModel

SOUND_PATHS = {
    SoundKindModel.success: "/sounds/success_sound.mp3",
    SoundKindModel.error: "/sounds/error_sound.mp3",
    SoundKindModel.complete: "/sounds/mission_complete_sound.mp3",
}

WHITE_FLAG = "\U0001F3F3"


def flag_image_path(code: str, base_url: str = "") -> str:
    return f"{base_url}/flags/{code.lower()}.svg"


def country_audio_path(code: str, base_url: str = "") -> str:
    return f"{base_url}/audio/{code.upper()}.mp3"


def sound_path(kind: SoundKindModel, base_url: str = "") -> str:
    return f"{base_url}{SOUND_PATHS[SoundKindModel(kind)]}"


def flag_emoji(code: str) -> str:
    """Flag emoji for terminal display; a white flag when the code is unknown."""
    try:
        return countryflag.getflag([code]).strip() or WHITE_FLAG
    except Exception as e:
        logging.debug(f"No flag emoji for {code}: {e}")
        return WHITE_FLAG
