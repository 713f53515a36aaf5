from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def raw_catalogue() -> dict:
    return {
        "Alpha": {
            "t1": {"description": "Parse CSV reports", "steps": ["Read the csv file", "Print totals"]},
            "t2": {"description": "Resize images", "steps": ["Open each image"]},
        },
        "PDF Tools": {
            "Merge": {"description": "Combine documents", "steps": ["Collect pdf files", "Write merged output"]},
        },
        "Beta": {
            "b1": {"description": "Scrape a web page"},
            "b2": {"steps": []},
        },
    }
