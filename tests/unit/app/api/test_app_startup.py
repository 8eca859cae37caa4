"""Tests for logging setup."""

import json
import logging

import pytest
from loguru import logger

from src.app.api.utils.app_startup import configure_logging
from src.app.runtime.config.config_data import ConfigData


@pytest.fixture
def restore_logging():
    yield
    configure_logging()


class TestConfigureLogging:
    def test_json_file_sink(self, tmp_path, restore_logging):
        config = ConfigData()
        config.logging.file = str(tmp_path / "logs" / "app.log")
        config.logging.format = "json"

        configure_logging(config)
        logger.bind(email="ada@example.com").info("create.end")
        logger.complete()

        lines = (tmp_path / "logs" / "app.log").read_text().splitlines()
        records = [json.loads(line)["record"] for line in lines]
        assert any(
            r["message"] == "create.end" and r["extra"]["email"] == "ada@example.com"
            for r in records
        )

    def test_stdlib_logging_is_intercepted(self, restore_logging):
        configure_logging(ConfigData())
        captured = []
        logger.add(lambda message: captured.append(message.record), level="DEBUG")

        logging.getLogger("redis.connection").warning("connection reset")

        assert [r["message"] for r in captured] == ["connection reset"]
        assert captured[0]["extra"]["logger_name"] == "redis.connection"

    def test_uvicorn_access_log_is_dropped(self, restore_logging):
        configure_logging(ConfigData())
        captured = []
        logger.add(lambda message: captured.append(message.record), level="DEBUG")

        logging.getLogger("uvicorn.access").critical("GET /users 200")

        assert captured == []
