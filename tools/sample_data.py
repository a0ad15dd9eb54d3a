"""
Demo data shipped with the dashboard
"""
import json
from functools import lru_cache
from pathlib import Path

SAMPLE_DATA_PATH = Path(__file__).parent.parent / "data" / "sample_data.json"


@lru_cache(maxsize=1)
def load_sample_data() -> dict:
    """Load data/sample_data.json (cached, treat as read-only)"""
    with open(SAMPLE_DATA_PATH, encoding="utf-8") as f:
        return json.load(f)
