# tests/conftest.py
from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from loguru import logger

from learnet import config
from learnet.config import AppConfig

import fakes


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Every test starts from the default engine settings."""
    monkeypatch.setattr(config, "settings", AppConfig())
    yield


@pytest.fixture(autouse=True)
def events():
    """Ordered (tag, "fit" | "update") calls made by the fake models."""
    fakes.EVENTS.clear()
    yield fakes.EVENTS
    fakes.EVENTS.clear()


@pytest.fixture
def log_records():
    """
    Capture loguru messages emitted during the test.

        def test_x(log_records):
            ...
            assert any("frozen" in m for m in log_records)
    """
    captured: list[str] = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)), level="DEBUG")
    yield captured
    logger.remove(sink_id)


@pytest.fixture
def table() -> pd.DataFrame:
    """10 rows, two numeric features."""
    rng = np.random.default_rng(0)
    return pd.DataFrame(
        {
            "x1": np.arange(10, dtype=float),
            "x2": rng.normal(size=10),
        }
    )


@pytest.fixture
def target(table) -> pd.Series:
    return 2.0 * table["x1"] + 1.0
