import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "countries.json"


class SettingsModel(BaseModel):
    catalog_path: Path = DEFAULT_CATALOG_PATH
    questions_per_round: int = Field(default=10, ge=1)
    auto_advance_seconds: float = Field(default=2.5, ge=0)
    asset_base_url: str = ""
    language: str = Field(default="nl", pattern="^(nl|en)$")
    log_level: str = "INFO"


def load_settings(**overrides: Optional[object]) -> SettingsModel:
    """Read FLAGQUIZ_* variables from the environment (and .env)

    Args:
        **overrides: Values that win over the environment, e.g. from command-line flags. None is ignored.

    Returns:
        SettingsModel: Validated settings
    """
    values = {
        "catalog_path": os.getenv("FLAGQUIZ_CATALOG_PATH"),
        "questions_per_round": os.getenv("FLAGQUIZ_QUESTIONS_PER_ROUND"),
        "auto_advance_seconds": os.getenv("FLAGQUIZ_AUTO_ADVANCE_SECONDS"),
        "asset_base_url": os.getenv("FLAGQUIZ_ASSET_BASE_URL"),
        "language": os.getenv("FLAGQUIZ_LANGUAGE"),
        "log_level": os.getenv("FLAGQUIZ_LOG_LEVEL"),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return SettingsModel(**{k: v for k, v in values.items() if v is not None})


if __name__ == "__main__":
    print(load_settings())
