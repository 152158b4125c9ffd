"""Root test configuration: isolate each test from ambient config"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run from a clean tmp directory with no DOCSECT_* env vars set."""
    for name in list(os.environ):
        if name.startswith("DOCSECT_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
