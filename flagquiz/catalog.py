import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from flagquiz.load_settings import DEFAULT_CATALOG_PATH
from flagquiz.models.dc_models import CountryModel


def load_countries(path: Optional[Union[str, Path]] = None) -> List[CountryModel]:
    """Load the static country catalog

    Args:
        path (Optional[Union[str, Path]], optional): JSON file holding a list of {code, name, continent}. Defaults to the bundled catalog.

    Raises:
        ValueError: The file is not a list or holds the same code twice
        pydantic.ValidationError: An entry is missing a field

    Returns:
        List[CountryModel]: Countries in file order
    """
    path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    with open(path, "r", encoding="utf-8") as f:
        rows = json.load(f)
    if not isinstance(rows, list):
        raise ValueError(f"{path}: expected a JSON list of countries")

    countries = [CountryModel.model_validate(row) for row in rows]
    seen = set()
    for country in countries:
        if country.code in seen:
            raise ValueError(f"{path}: duplicate country code {country.code}")
        seen.add(country.code)

    logging.info(f"Loaded {len(countries)} countries from {path}")
    return countries
