"""Root test configuration: isolate tests from the caller's environment"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove MDCONTENT_* env vars so settings come from defaults unless a test sets them."""
    for name in list(os.environ):
        if name.startswith("MDCONTENT_"):
            monkeypatch.delenv(name)
