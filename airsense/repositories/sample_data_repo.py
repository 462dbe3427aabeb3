import json
from functools import lru_cache
from pathlib import Path

from airsense.core.config import get_settings
from airsense.schemas.air_quality_schema import SampleDataset


@lru_cache(maxsize=4)
def _load(path: str) -> SampleDataset:
    with Path(path).open("r", encoding="utf-8") as f:
        return SampleDataset.model_validate(json.load(f))


def load_sample_dataset() -> SampleDataset:
    """Bundled static dataset served when the live source is unusable.

    Loaded once per path and shared read-only for the process lifetime.
    """
    return _load(get_settings().sample_data_path)
