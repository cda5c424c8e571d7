import logging
from typing import Optional, Protocol

from flagquiz.assets import SOUND_PATHS, country_audio_path, sound_path
from flagquiz.models.dc_models import SoundKindModel

SOUND_VOLUME = 0.5
COUNTRY_NAME_VOLUME = 0.7


class Playback(Protocol):
    def stop(self) -> None: ...


class AudioBackend(Protocol):
    def play(self, source: str, volume: float) -> Playback: ...


class LoggedPlayback:
    def __init__(self, source: str):
        self.source = source

    def stop(self):
        logging.debug(f"Audio stopped: {self.source}")


class LoggingAudioBackend:
    """Backend for environments without sound output; records what would play."""

    def play(self, source: str, volume: float) -> LoggedPlayback:
        logging.info(f"Audio: {source} (volume {volume})")
        return LoggedPlayback(source)


class AudioManager:
    def __init__(self, backend: Optional[AudioBackend] = None, base_url: str = ""):
        self.backend = backend if backend is not None else LoggingAudioBackend()
        self.base_url = base_url
        self.current: Optional[Playback] = None

    def stop(self):
        """Stop the current playback, if any"""
        if self.current is None:
            return
        playback, self.current = self.current, None
        try:
            playback.stop()
        except Exception as e:
            logging.warning(f"Error stopping audio: {e}")

    def play(self, source: str, volume: float = SOUND_VOLUME):
        """Play one audio asset, replacing whatever is playing

        Failures are logged and never raised; game flow must not depend on audio.

        Args:
            source (str): Asset reference
            volume (float, optional): 0.0 to 1.0. Defaults to 0.5.
        """
        self.stop()
        try:
            self.current = self.backend.play(source, volume)
        except Exception as e:
            logging.warning(f"Audio unavailable for {source}: {e}")

    def play_sound(self, kind: str):
        """Play a sound effect: "success", "error" or "complete"

        Args:
            kind (str): Sound effect name; unknown names are ignored
        """
        if kind not in SOUND_PATHS:
            logging.warning(f"Unknown sound effect: {kind}")
            return
        self.play(sound_path(SoundKindModel(kind), self.base_url), SOUND_VOLUME)

    def play_country_name(self, code: str):
        """Play the spoken name of a country

        Args:
            code (str): Alpha-2 country code
        """
        self.play(country_audio_path(code, self.base_url), COUNTRY_NAME_VOLUME)
