"""
Pytest configuration: project root on sys.path, backoff env keys cleared.
"""
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

_BACKOFF_ENV_KEYS = (
    "BACKOFF_EXPONENT_BASE",
    "BACKOFF_FACTOR_MS",
    "BACKOFF_RETRIES",
    "LOG_LEVEL",
    "CONNECTION_RETRY__EXPONENT_BASE",
    "CONNECTION_RETRY__FACTOR",
    "CONNECTION_RETRY__NUMBER_OF_RETRIES",
)


@pytest.fixture(autouse=True)
def _clean_backoff_env(monkeypatch):
    for key in _BACKOFF_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
