from __future__ import annotations

from datetime import datetime

import pytest
import requests


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 8, 45, 0)


@pytest.fixture
def connection_refused() -> Exception:
    return requests.ConnectionError("Failed to establish a new connection")
