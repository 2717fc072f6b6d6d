"""Root test configuration: isolate tests from FOLDAQ_* environment variables"""

import pytest

from foldaq.config import ENV_PREFIX, Settings


@pytest.fixture(autouse=True)
def clean_foldaq_env(monkeypatch):
    """Remove FOLDAQ_<FIELD> variables so settings come only from the test itself."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)
