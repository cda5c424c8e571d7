from typing import List

import numpy as np
import pytest

from flagquiz.models.dc_models import CountryModel

CONTINENTS = ["Africa", "Asia", "Europe", "North America", "Oceania", "South America"]


class RecordingPlayback:
    def __init__(self, backend: "RecordingBackend", source: str):
        self.backend = backend
        self.source = source

    def stop(self):
        self.backend.stopped.append(self.source)


class RecordingBackend:
    def __init__(self):
        self.played = []
        self.stopped = []

    def play(self, source: str, volume: float) -> RecordingPlayback:
        self.played.append((source, volume))
        return RecordingPlayback(self, source)


@pytest.fixture
def small_catalog() -> List[CountryModel]:
    return [
        CountryModel(code="AD", name="Andorra", continent="Europe"),
        CountryModel(code="AE", name="UAE", continent="Asia"),
        CountryModel(code="AF", name="Afghanistan", continent="Asia"),
        CountryModel(code="AG", name="Antigua", continent="North America"),
        CountryModel(code="AL", name="Albania", continent="Europe"),
    ]


@pytest.fixture
def fifty_catalog() -> List[CountryModel]:
    return [
        CountryModel(code=f"C{i:02d}", name=f"Country {i}", continent=CONTINENTS[i % 6])
        for i in range(50)
    ]


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()
