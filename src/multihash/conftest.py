import os

import pytest

if hasattr(pytest, "register_assert_rewrite"):
    pytest.register_assert_rewrite("multihash.testsuite")

# Ensure that the loggers exist for all tests
from multihash.logger import setup_logging  # noqa: E402

setup_logging(level="debug")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # avoid to use anything from the outside environment:
    keys = [key for key in os.environ if key.startswith("MULTIHASH_")]
    for key in keys:
        monkeypatch.delenv(key, raising=False)
