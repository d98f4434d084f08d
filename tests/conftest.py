from __future__ import annotations

import pytest

from karaoke_search.logging_setup import Logger


@pytest.fixture
def logger() -> Logger:
    return Logger(verbose=True, name="karaoke_search.tests")
