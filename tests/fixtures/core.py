from __future__ import annotations

from collections.abc import Generator

import pytest
from loguru import logger

from src.app.runtime.config.config_data import ConfigData
from src.app.runtime.context import with_context


@pytest.fixture
def memory_config() -> Generator[ConfigData]:
    """Run the test with the in-memory storage backend configured."""
    override = ConfigData()
    override.storage.backend = "memory"
    with with_context(override):
        yield override


@pytest.fixture
def log_records() -> Generator[list[dict]]:
    """Capture loguru records emitted during the test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
